"""LLM facade with provider selection from the environment."""

from __future__ import annotations

import os

from resume_engine.config import DEFAULT_LLM_PROVIDER
from resume_engine.services.llm_providers import (
    GeminiProvider,
    LLMError,
    LLMProvider,
)


class LLMService:
    def __init__(self, provider: LLMProvider | None = None) -> None:
        """Initialize the service with a provider.

        Args:
            provider: LLM provider instance. Defaults to the one named by
                ``LLM_PROVIDER``.

        Raises:
            LLMError: If the configured provider is unknown or unusable.
        """
        self.provider = provider or LLMService._get_default_llm_provider_from_env()

    @staticmethod
    def _get_default_llm_provider_from_env() -> LLMProvider:
        provider_name = os.environ.get("LLM_PROVIDER", DEFAULT_LLM_PROVIDER).lower()

        if provider_name == "gemini":
            return GeminiProvider()
        raise LLMError(f"Unknown LLM provider: {provider_name}.")

    def build_prompt(self, system_instructions: str, user_content: str) -> str:
        """Construct a full prompt with system and user parts."""
        return f"System instruction:\n{system_instructions}\n\nUser content:\n{user_content}"

    def generate_llm_response(
        self,
        system_instructions: str,
        user_content: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        seed: int | None = None,
        json_output: bool = False,
    ) -> str:
        """Build a prompt and send it to the LLM in one step.

        Args:
            system_instructions: System-level instructions.
            user_content: User content.
            temperature: Controls randomness (0.0-2.0). Lower = more deterministic.
            max_tokens: Maximum response length. None = provider default.
            seed: Random seed for reproducibility (if supported by provider).
            json_output: Request a JSON object as the answer.

        Returns:
            The text response from the LLM.
        """
        prompt = self.build_prompt(system_instructions, user_content)
        config = self.provider.generate_llm_config(temperature, max_tokens, seed, json_output)
        return self.provider.send_prompt(prompt, config)
