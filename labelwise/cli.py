"""CLI commands for Labelwise."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from labelwise.config import settings
from labelwise.models.analysis import AnalysisReport
from labelwise.services.ai_service import OcrError
from labelwise.services.analysis_service import AnalysisService, normalize_allergies
from labelwise.services.lookup_table import LOOKUP_TABLE

CATEGORY_LABELS = {
    "safe": "GREEN",
    "caution": "YELLOW",
    "harmful": "RED",
    "unknown": "UNKNOWN",
}


def print_report(report: AnalysisReport) -> None:
    """Print a human-readable analysis report."""
    if report.status == "no_ingredients":
        print("No ingredients could be extracted from the label.")
        return

    print(
        f"Overall: {CATEGORY_LABELS[report.overall.score.value]} - {report.overall.reason}"
    )
    if report.status == "all_unknown":
        print("None of the ingredients could be analyzed.")
    print()

    for result in report.results:
        print(f"[{CATEGORY_LABELS[result.category.value]}] {result.ingredient}")
        print(f"    {result.description}")
        if result.alternatives:
            print(f"    Alternatives: {', '.join(result.alternatives)}")

    for note in report.misleading_products:
        print()
        print(f"Heads up, '{note.name}': {note.description}")
        print(f"    {note.real_ingredients}")


def analyze(
    text: str | None = None,
    file: str | None = None,
    image: str | None = None,
    allergies: str | None = None,
    as_json: bool = False,
) -> None:
    """Analyze a label from text, a text file, or an image."""
    service = AnalysisService()
    allergy_list = normalize_allergies(allergies)

    try:
        if image:
            report = asyncio.run(service.analyze_image(image, allergy_list))
        else:
            if file:
                try:
                    text = Path(file).read_text(encoding="utf-8")
                except OSError as e:
                    print(f"Error: Could not read '{file}': {e}")
                    sys.exit(1)
            report = asyncio.run(service.analyze_text(text or "", allergy_list))
    except OcrError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if as_json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report)


def show_tips() -> None:
    """Print label-reading tips and misleading product names."""
    print("Tips for reading ingredient labels:")
    for tip in LOOKUP_TABLE.tips:
        print(f"- {tip}")

    print()
    print("Commonly misleading product names:")
    for name, product in LOOKUP_TABLE.misleading_products.items():
        print(f"- {name}: {product.description}")


def main():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Labelwise CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a food ingredient label"
    )
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Label text")
    source.add_argument("--file", help="Path to a text file with the label text")
    source.add_argument("--image", help="Path to a photo of the label")
    analyze_parser.add_argument(
        "--allergies", help="Comma-separated allergy list (e.g. 'milk, peanuts')"
    )
    analyze_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )

    # tips command
    subparsers.add_parser("tips", help="Show label-reading tips")

    args = parser.parse_args()

    if args.command == "analyze":
        analyze(
            text=args.text,
            file=args.file,
            image=args.image,
            allergies=args.allergies,
            as_json=args.json,
        )
    elif args.command == "tips":
        show_tips()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
