"""Analyze a piece of feedback from the command line.

Usage:
    python -m scripts.analyze "App crashes on startup"
    python -m scripts.analyze "App crashes" "It closes when I open it" --candidates existing.json
    python -m scripts.analyze "Login broken" --candidates existing.json --threshold 0.5

The candidates file is a JSON list of objects with ``feedback_id``,
``title`` and ``description``.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from echo_api.config import get_settings
from echo_api.models.intelligence import FeedbackForDuplicateCheck
from echo_api.services.intelligence import classify_feedback, find_duplicates, suggest_tags

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_candidates_adapter = TypeAdapter(list[FeedbackForDuplicateCheck])


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify, tag and duplicate-check feedback")
    parser.add_argument("title", help="Feedback title")
    parser.add_argument("description", nargs="?", default="", help="Feedback description")
    parser.add_argument(
        "--candidates",
        type=Path,
        help="JSON file of existing feedback to check for duplicates",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Duplicate score threshold (default from settings)",
    )
    return parser.parse_args(argv)


def _load_candidates(path: Path) -> list[FeedbackForDuplicateCheck]:
    return _candidates_adapter.validate_json(path.read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    classification = classify_feedback(args.title, args.description)
    print("Classification:")
    print(f"  Type:       {classification.type}")
    print(f"  Priority:   {classification.priority}")
    print(f"  Confidence: {classification.confidence:.0%}")
    for reason in classification.reasons:
        print(f"  - {reason}")

    tags = suggest_tags(args.title, args.description)
    print("\nSuggested tags:")
    if not tags:
        print("  (none)")
    for tag in sorted(tags, key=lambda t: t.confidence, reverse=True):
        keywords = ", ".join(tag.matched_keywords) or "partial matches"
        print(f"  {tag.name:<14} {tag.confidence:.0%}  ({keywords})")

    if args.candidates is None:
        return 0

    try:
        candidates = _load_candidates(args.candidates)
    except (OSError, ValidationError) as e:
        logger.error("Could not load candidates from %s: %s", args.candidates, e)
        return 1

    threshold = args.threshold
    if threshold is None:
        threshold = get_settings().duplicate_threshold

    duplicates = find_duplicates(args.title, args.description, candidates, threshold=threshold)
    print(f"\nDuplicates (threshold {threshold:.2f}, {len(candidates)} candidates):")
    if not duplicates:
        print("  (none)")
    for dup in duplicates:
        print(f"  #{dup.feedback_id} {dup.similarity}%  {dup.title}")
        for reason in dup.reasons:
            print(f"      - {reason}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
