"""
ReviewLens - Guest Review Analytics

CLI entry point for loading reviews and producing the dashboard and reports.
"""

import argparse
import logging
import sys
from datetime import date

from src.agents.filtering import FilterCriteria
from src.agents.ingestion import SAMPLE_CSV, IngestionError
from src.agents.reporting import REPORT_TYPES
from src.models.category import CATEGORIES
from src.models.review import SENTIMENTS
from src.orchestrator import DashboardSnapshot, PipelineOrchestrator
from src.utils.storage import ExportManager
import config.lexicon as lexicon
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


def iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewLens - Guest Review Analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Analyse an exported review file
  python main.py --csv reviews.csv

  # Built-in demo data, one listing, internal audit report
  python main.py --demo --listing "Seaside Villa" --report internal

  # Negative Cleanliness reviews in January
  python main.py --csv reviews.csv --sentiment negative \\
                 --category Cleanliness \\
                 --start-date 2026-01-01 --end-date 2026-01-31

  # Write the sample CSV template
  python main.py --write-sample sample_reviews.csv

Required CSV columns: {', '.join(lexicon.REQUIRED_COLUMNS)}
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--csv", help="CSV file with guest reviews")
    source.add_argument("--demo", action="store_true", help="Use the built-in demo dataset")
    source.add_argument("--write-sample", metavar="PATH", help="Write the sample CSV template and exit")

    parser.add_argument("--search", default="", help="Search text, author and source")
    parser.add_argument("--sentiment", default="all", choices=("all",) + SENTIMENTS)
    parser.add_argument("--listing", default="all", help="Listing name (default: all)")
    parser.add_argument("--channel", default="all", help="Review source / channel (default: all)")
    parser.add_argument(
        "--category",
        choices=[c.name for c in CATEGORIES],
        help="Only reviews mentioning this category"
    )
    parser.add_argument("--start-date", type=iso_date, help="First day to include (YYYY-MM-DD)")
    parser.add_argument("--end-date", type=iso_date, help="Last day to include (YYYY-MM-DD)")

    parser.add_argument(
        "--report",
        choices=REPORT_TYPES,
        help="Build an internal audit or an external owner summary"
    )
    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Export directory (default: {settings.OUTPUT_ROOT})"
    )
    parser.add_argument("--no-export", action="store_true", help="Print only, write no files")

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def print_dashboard(snapshot: DashboardSnapshot) -> None:
    """Print the dashboard panels."""
    print("=" * 60)
    print(f"Reviews: {len(snapshot.filtered_reviews)} shown of {len(snapshot.reviews)} loaded")
    if snapshot.date_range:
        start, end = snapshot.date_range
        print(f"Date range: {start} to {end}")
    print(f"Listings: {', '.join(snapshot.listings) or '-'}")
    print(f"Channels: {', '.join(snapshot.channels) or '-'}")
    print("=" * 60)

    if snapshot.assessment:
        print(snapshot.assessment)

    s = snapshot.sentiment
    print(f"Sentiment: {s.positive} positive / {s.neutral} neutral / {s.negative} negative")

    print("\nTop issues:")
    for name, count in snapshot.top_issues:
        print(f"  {name}: {count}")
    if not snapshot.top_issues:
        print("  none")

    print("\nCategory health:")
    for score in snapshot.category_scores:
        suffix = f" ({score.issues_count} issues)" if score.issues_count else ""
        print(f"  {score.name:<14} {score.score:.1f}{suffix}")

    if snapshot.persistent_issues:
        print("\nCritical recurring alerts:")
        for issue in snapshot.persistent_issues:
            print(
                f"  {issue.listing}: '{issue.issue}' x{issue.occurrence_count} "
                f"over {issue.duration_days} days"
            )

    if snapshot.top_listings or snapshot.drill_down:
        print("\nCategory drill-down:")
        for listing, count in snapshot.top_listings:
            print(f"  {listing}: {count} complaints")
        for review in snapshot.drill_down:
            print(f"  [{review.sentiment}] {review.date[:10]} {review.listing_name or '-'}: {review.text}")

    for path in snapshot.exported:
        print(f"\nExported: {path}")


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.write_sample:
        path = ExportManager.save_text(SAMPLE_CSV + "\n", args.write_sample)
        print(f"Sample CSV written to {path}")
        sys.exit(0)

    if not args.csv and not args.demo:
        logger.error("No input: pass --csv PATH or --demo")
        sys.exit(1)

    criteria = FilterCriteria(
        search=args.search,
        sentiment=args.sentiment,
        listing=args.listing,
        channel=args.channel,
        start_date=args.start_date,
        end_date=args.end_date,
        category=args.category
    )

    try:
        logger.info("Initializing ReviewLens pipeline...")
        orchestrator = PipelineOrchestrator(
            output_root=args.output_dir,
            use_sample_data=args.demo
        )

        snapshot = orchestrator.run(
            csv_path=args.csv,
            criteria=criteria,
            report_type=args.report,
            export=not args.no_export
        )

        if not snapshot.reviews:
            print("Debug Info (0 reviews loaded):")
            for line in snapshot.diagnostics:
                print(f"  {line}")
            sys.exit(1)

        print_dashboard(snapshot)
        if args.report and snapshot.report is None:
            print(f"\nNo reviews for {args.listing}, no report generated")

        logger.info("ReviewLens completed successfully")
        sys.exit(0)

    except IngestionError as e:
        logger.error(f"Upload rejected: {e}")
        print(f"\n❌ {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Why exit with 1 when no review was mapped?
#    - The diagnostics are the only useful output
#    - Scripts can detect an unusable upload
#
# 2. Why parse dates in argparse?
#    - A malformed date becomes a usage error instead of a pipeline failure
