#!/usr/bin/env python
"""Extract claim data from a rental agreement and print it as JSON.

Usage:
    python backend/scripts/process_rental_agreement.py agreement.pdf
    python backend/scripts/process_rental_agreement.py agreement.pdf --template budget_rental_agreement
    python backend/scripts/process_rental_agreement.py ocr_output.txt --text --log-level DEBUG

Exit status is 1 when the document cannot be processed.
"""

import argparse
import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from config import get_settings
from domain.extraction.errors import RentalAgreementExtractionError
from domain.templates import get_available_templates
from extraction.orchestrator import ExtractionOrchestrator
from infrastructure.text_sources import PlainTextSource
from observability.logging_config import configure_logging


def main(argv=None) -> int:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description='Extract claim data from a rental agreement',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('path', nargs='?', help='Rental agreement file (PDF or text)')
    parser.add_argument(
        '--template',
        default=settings.DEFAULT_TEMPLATE_ID,
        help=f'Template id (default: {settings.DEFAULT_TEMPLATE_ID})'
    )
    parser.add_argument(
        '--log-level',
        default=settings.LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level (logs go to stderr)'
    )
    parser.add_argument(
        '--text',
        action='store_true',
        help='Read the file as plain text instead of choosing a reader by suffix'
    )
    parser.add_argument(
        '--list-templates',
        action='store_true',
        help='Print available templates and exit'
    )
    args = parser.parse_args(argv)

    if not args.path and not args.list_templates:
        parser.error('the following arguments are required: path')

    configure_logging(level=args.log_level, json_format=settings.LOG_JSON)

    if args.list_templates:
        for template_id in get_available_templates():
            print(template_id)
        return 0

    orchestrator = ExtractionOrchestrator(settings=settings)

    try:
        if args.text:
            extracted = PlainTextSource().extract_text(args.path)
            result = orchestrator.extract(extracted.text, args.template)
        else:
            result = orchestrator.process_document(args.path, args.template)
    except RentalAgreementExtractionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2, exclude={'per_field_results'}))

    if result.requires_manual_review(settings.REVIEW_CONFIDENCE_THRESHOLD):
        print("NOTE: result requires manual review", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
