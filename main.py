"""
SurveyPulse - Survey Record Extraction

CLI entry point for extracting survey records from report text.
"""

import argparse
import logging
import sys
from dataclasses import replace

from src.orchestrator import ExtractionPipeline
from src.agents.block_splitter import split_text_by_unit
from src.agents.grouping import build_unit_payload
from src.agents.normalizer import normalize, join_pages
from src.models.extraction_config import ExtractionConfig
from src.utils.storage import StorageManager
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SurveyPulse - Survey record extraction from report text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract records from one exported report
  python main.py --input data/feedbacks.txt

  # Pages extracted separately, in page order
  python main.py --input page1.txt --input page2.txt --name october

  # Parse blocks on 4 worker threads and mark invalid comments
  python main.py --input data/feedbacks.txt --workers 4 \\
                 --sentinel "[Sem Comentário Válido]"

Note: Input files hold text already extracted from the PDF report.
        """
    )

    # Required arguments
    parser.add_argument(
        "--input",
        required=True,
        action="append",
        help="Extracted page text file (repeat for multiple pages)"
    )

    # Optional arguments
    parser.add_argument(
        "--name",
        default="surveys",
        help="Base name for output files (default: surveys)"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=settings.PARSE_WORKERS,
        help=f"Block parsing threads (default: {settings.PARSE_WORKERS})"
    )

    parser.add_argument(
        "--sentinel",
        default=settings.INVALID_COMMENT_SENTINEL,
        help="Replacement text for invalid comments (default: empty)"
    )

    parser.add_argument(
        "--unit-text",
        action="store_true",
        help="Also save the raw text of each unit (debugging layout changes)"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Print banner
    print("=" * 60)
    print("SurveyPulse - Survey Record Extraction")
    print("=" * 60)
    print(f"Input: {', '.join(args.input)}")
    print(f"Output: {args.output_dir}")
    print(f"Workers: {args.workers}")
    print("=" * 60)
    print()

    try:
        config = replace(
            ExtractionConfig(),
            workers=args.workers,
            invalid_comment_sentinel=args.sentinel
        )
        storage = StorageManager(args.output_dir)

        pages = storage.load_pages(args.input)
        if not pages:
            logger.error("None of the input files could be read")
            sys.exit(1)

        # Run engine
        pipeline = ExtractionPipeline(config)
        result = pipeline.run_pages(pages)

        comments = result.comments

        records_path = storage.save_records_json(result.records, args.name)
        csv_path = storage.save_records_csv(result.records, args.name)
        comments_path = storage.save_comments(comments, args.name)
        units_path = storage.save_unit_payload(build_unit_payload(result.records), args.name)
        diagnostics_path = storage.save_diagnostics(result, args.name)

        if args.unit_text:
            unit_texts = split_text_by_unit(normalize(join_pages(pages)), config)
            unit_text_path = storage.save_unit_texts(unit_texts, args.name)
            print(f"Unit text: {unit_text_path}")

        # Summary
        print()
        print("=" * 60)
        print("✅ Extraction completed")
        print("=" * 60)
        print(f"Records: {len(result.records)} ({records_path})")
        print(f"Table: {csv_path}")
        print(f"Comments: {len(comments)} ({comments_path})")
        print(f"Units: {units_path}")
        print(f"Skipped blocks: {len(result.skipped)} ({diagnostics_path})")
        for warning in result.warnings:
            print(f"⚠️  {warning}")
        print("=" * 60)

        logger.info("SurveyPulse completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Extraction interrupted by user")
        print("\n⚠️  Extraction interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Extraction failed: {e}", exc_info=True)
        print(f"\n❌ Extraction failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Why repeatable --input instead of a directory argument?
#    - Page order is whatever the user passes, no filename sorting rules
#    - A single exported text file stays the one-flag common case
#    - Trade-off: Long command lines for many pages, but explicit
#
# 2. Why write every output on each run?
#    - Records, comments, unit payload and diagnostics come from one parse
#    - Downstream report generation picks whichever file it needs
#    - Trade-off: A few extra small files per run, negligible
#
# 3. Why exit 0 when blocks were skipped?
#    - Skipped blocks are per-record diagnostics, the rest is still usable
#    - Warnings are printed and saved to the diagnostics file
#    - Trade-off: Scripts must read diagnostics to detect partial runs
