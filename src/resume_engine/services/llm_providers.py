"""Text-generation providers used to rewrite résumés."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from dotenv import load_dotenv

# Load environment variables for LLM API keys (GEMINI_API_KEY, LLM_MODEL, etc.)
load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class LLMError(RuntimeError):
    """Raised when the text-generation service cannot be used or fails."""


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def generate_llm_config(
        self,
        temperature: float | None,
        max_tokens: int | None,
        seed: int | None,
        json_output: bool = False,
    ) -> dict:
        """Build the request configuration shared by every provider.

        Args:
            temperature: Controls randomness.
            max_tokens: Maximum response length.
            seed: Random seed for reproducibility.
            json_output: Ask the model to answer with a JSON object.

        Returns:
            Configuration dictionary with the parameters that were set.
        """
        config: dict = {}

        if temperature is not None:
            config["temperature"] = temperature
        if max_tokens is not None:
            config["max_tokens"] = max_tokens
        if seed is not None:
            config["seed"] = seed
        if json_output:
            config["json_output"] = True

        return config

    @abstractmethod
    def send_prompt(self, prompt: str, config: dict) -> str:
        """Send a prompt to the LLM and return the text response.

        Args:
            prompt: The full prompt string to send to the LLM.
            config: Configuration dictionary for the LLM request.

        Returns:
            The text response from the LLM.
        """


class GeminiProvider(LLMProvider):
    """Google Gemini through the ``google-genai`` client."""

    def __init__(self) -> None:
        """Create the client from ``GEMINI_API_KEY`` and ``LLM_MODEL``.

        Raises:
            LLMError: If no API key is configured.
        """
        from google import genai

        self.api_key = os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise LLMError("Missing GEMINI_API_KEY environment variable")

        self.model = os.environ.get("LLM_MODEL", DEFAULT_GEMINI_MODEL)
        self.client = genai.Client(api_key=self.api_key)

    def generate_llm_config(
        self,
        temperature: float | None,
        max_tokens: int | None,
        seed: int | None,
        json_output: bool = False,
    ) -> dict:
        """Translate the common configuration into Gemini's parameter names."""
        config = super().generate_llm_config(temperature, max_tokens, seed, json_output)

        if "max_tokens" in config:
            config["max_output_tokens"] = config.pop("max_tokens")
        if config.pop("json_output", False):
            config["response_mime_type"] = "application/json"

        return config

    def send_prompt(self, prompt: str, config: dict) -> str:
        """Send prompt to Gemini and return response text.

        Raises:
            LLMError: If the API call fails.
        """
        try:
            response = self.client.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except Exception as e:
            raise LLMError(f"Gemini API call failed: {e}") from e
        return (response.text or "").strip()
