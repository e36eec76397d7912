from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from resume_engine.config import get_log_level, get_merge_budget
from resume_engine.models import StructuredDocument, TagPreferences
from resume_engine.services.candidate_payload import parse_candidate
from resume_engine.services.completeness_merge import merge_with_report
from resume_engine.services.document_serializer import serialize_document
from resume_engine.services.tag_deriver import derive_tags


class InputFileError(Exception):
    """Raised when an input file cannot be read."""


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InputFileError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def _load_document(path: str) -> StructuredDocument:
    """Load a document from text, or from JSON in either the canonical or a loose shape."""
    return parse_candidate(_read_text(path))


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _dump(document: StructuredDocument) -> dict:
    return document.model_dump(by_alias=True, mode="json")


def _cmd_extract(args: argparse.Namespace) -> int:
    _print_json(_dump(_load_document(args.file)))
    return 0


def _cmd_serialize(args: argparse.Namespace) -> int:
    print(serialize_document(_load_document(args.file)), end="")
    return 0


def _cmd_merge(args: argparse.Namespace) -> int:
    original = _load_document(args.original)
    candidate = _load_document(args.candidate)
    document, report = merge_with_report(original, candidate, get_merge_budget())
    if args.text:
        print(serialize_document(document), end="")
        return 0
    _print_json(
        {
            "document": _dump(document),
            "report": {
                "originalExperiences": report.original_experiences,
                "candidateExperiences": report.candidate_experiences,
                "mergedExperiences": report.merged_experiences,
                "originalEducations": report.original_educations,
                "candidateEducations": report.candidate_educations,
                "mergedEducations": report.merged_educations,
                "complete": report.complete,
            },
        }
    )
    return 0


def _cmd_tags(args: argparse.Namespace) -> int:
    document = _load_document(args.file)
    preferences = None
    if args.preferences:
        preferences = TagPreferences.model_validate_json(_read_text(args.preferences))
    _print_json(derive_tags(document, preferences))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the ``resume-engine`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="resume-engine",
        description="Normalize, merge, render and tag résumé documents.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Parse a text or JSON résumé into a document")
    extract.add_argument("file", help="Path to a markdown/text or JSON résumé")
    extract.set_defaults(handler=_cmd_extract)

    serialize = subparsers.add_parser("serialize", help="Render a résumé as canonical markdown")
    serialize.add_argument("file", help="Path to a markdown/text or JSON résumé")
    serialize.set_defaults(handler=_cmd_serialize)

    merge = subparsers.add_parser("merge", help="Merge a rewritten résumé into the original")
    merge.add_argument("original", help="Path to the original résumé")
    merge.add_argument("candidate", help="Path to the rewritten résumé")
    merge.add_argument("--text", action="store_true", help="Print markdown instead of JSON")
    merge.set_defaults(handler=_cmd_merge)

    tags = subparsers.add_parser("tags", help="Derive profile tags for a résumé")
    tags.add_argument("file", help="Path to a markdown/text or JSON résumé")
    tags.add_argument("--preferences", help="Path to a JSON file with job-search preferences")
    tags.set_defaults(handler=_cmd_tags)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args)
    except InputFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Error: invalid preferences: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
