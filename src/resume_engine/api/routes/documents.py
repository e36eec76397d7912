"""Document routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from resume_engine.api.dependencies import get_budget, get_llm_service
from resume_engine.api.schemas.documents import (
    DocumentRequest,
    DocumentResponse,
    ExtractRequest,
    MergeReportResponse,
    MergeRequest,
    MergeResponse,
    RewriteRequest,
    RewriteResponse,
    SerializeResponse,
    TagsRequest,
    TagsResponse,
)
from resume_engine.config import MergeBudget
from resume_engine.services.candidate_payload import parse_candidate
from resume_engine.services.completeness_merge import merge_with_report
from resume_engine.services.document_serializer import serialize_document
from resume_engine.services.llm_service import LLMService
from resume_engine.services.tag_deriver import derive_tags
from resume_engine.workflows.rewrite_pipeline import rewrite_document

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/extract", response_model=DocumentResponse)
def extract(request: ExtractRequest) -> DocumentResponse:
    """Parse text or a JSON payload into a structured document."""
    return DocumentResponse(document=parse_candidate(request.content))


@router.post("/merge", response_model=MergeResponse)
def merge(
    request: MergeRequest,
    budget: Annotated[MergeBudget, Depends(get_budget)],
) -> MergeResponse:
    """Merge a rewritten candidate into the original without losing entities."""
    document, report = merge_with_report(request.original, parse_candidate(request.candidate), budget)
    return MergeResponse(document=document, report=MergeReportResponse.from_report(report))


@router.post("/serialize", response_model=SerializeResponse)
def serialize(request: DocumentRequest) -> SerializeResponse:
    """Render a document as canonical markdown."""
    return SerializeResponse(text=serialize_document(request.document))


@router.post("/tags", response_model=TagsResponse)
def tags(request: TagsRequest) -> TagsResponse:
    """Derive profile tags for a document."""
    return TagsResponse(tags=derive_tags(request.document, request.preferences))


@router.post("/rewrite", response_model=RewriteResponse)
def rewrite(
    request: RewriteRequest,
    budget: Annotated[MergeBudget, Depends(get_budget)],
    llm_service: Annotated[LLMService | None, Depends(get_llm_service)],
) -> RewriteResponse:
    """Tailor a document to a job; falls back to the trimmed original without an LLM."""
    result = rewrite_document(
        request.document,
        job_title=request.job_title,
        company=request.company,
        job_description=request.job_description,
        keywords=request.keywords,
        llm_service=llm_service,
        use_ai=llm_service is not None,
        budget=budget,
        preferences=request.preferences,
    )
    return RewriteResponse(
        document=result.document,
        text=result.text,
        tags=result.tags,
        report=MergeReportResponse.from_report(result.report),
        source=result.source,
    )
