"""Pydantic schemas for document API endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from resume_engine.models import StructuredDocument, TagPreferences
from resume_engine.services.completeness_merge import MergeReport


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtractRequest(ApiModel):
    """Request schema for extracting a document."""

    content: str | dict[str, Any] = Field(
        ..., description="Heading/bullet text, JSON object text, or a JSON object"
    )


class MergeRequest(ApiModel):
    """Request schema for merging a rewritten candidate into an original."""

    original: StructuredDocument = Field(..., description="The user's document")
    candidate: str | dict[str, Any] = Field(
        ..., description="Rewritten version as text or a loosely shaped JSON object"
    )


class DocumentRequest(ApiModel):
    """Request schema carrying a single document."""

    document: StructuredDocument


class TagsRequest(ApiModel):
    """Request schema for tag derivation."""

    document: StructuredDocument
    preferences: TagPreferences | None = None


class RewriteRequest(ApiModel):
    """Request schema for tailoring a document to a job."""

    document: StructuredDocument
    job_title: str = Field(..., min_length=1, description="Target position")
    company: str = Field("", description="Hiring company")
    job_description: str = Field("", description="Job posting text")
    keywords: list[str] = Field(default_factory=list, description="Keywords to integrate")
    preferences: TagPreferences | None = None


class MergeReportResponse(ApiModel):
    """What a merge restored from the original."""

    original_experiences: int
    candidate_experiences: int
    merged_experiences: int
    original_educations: int
    candidate_educations: int
    merged_educations: int
    backfilled_experiences: list[list[str]]
    backfilled_educations: list[list[str]]
    complete: bool

    @classmethod
    def from_report(cls, report: MergeReport) -> MergeReportResponse:
        return cls(
            original_experiences=report.original_experiences,
            candidate_experiences=report.candidate_experiences,
            merged_experiences=report.merged_experiences,
            original_educations=report.original_educations,
            candidate_educations=report.candidate_educations,
            merged_educations=report.merged_educations,
            backfilled_experiences=[list(key) for key in report.backfilled_experiences],
            backfilled_educations=[list(key) for key in report.backfilled_educations],
            complete=report.complete,
        )


class DocumentResponse(ApiModel):
    """Response schema wrapping a document."""

    document: StructuredDocument


class MergeResponse(ApiModel):
    """Response schema for a merge."""

    document: StructuredDocument
    report: MergeReportResponse


class SerializeResponse(ApiModel):
    """Response schema for canonical text."""

    text: str


class TagsResponse(ApiModel):
    """Response schema for derived tags."""

    tags: list[str]


class RewriteResponse(ApiModel):
    """Response schema for a rewrite."""

    document: StructuredDocument
    text: str
    tags: list[str]
    report: MergeReportResponse
    source: Literal["AI", "Original"]
