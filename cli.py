#!/usr/bin/env python3
"""
Status report statistics from an mbox archive.

Usage:
    python cli.py reports.mbox
    python cli.py reports.mbox contacts.csv
    python cli.py reports.mbox contacts.csv --format markdown
    python cli.py --write-sample-config ~/.config/mail_report/config.yaml

Environment:
    MAIL_REPORT_CONFIG, MAIL_REPORT_LOG_LEVEL, MAIL_REPORT_OUTPUT_FORMAT,
    MAIL_REPORT_CONTACTS_ENCODING, MAIL_REPORT_HOLIDAYS, MAIL_REPORT_BUSINESS_DAYS
"""

import argparse
import csv
import json
import logging
import re
import sys
from pathlib import Path
from typing import Dict, Optional

from core.calendar import (
    BusinessDayCalendar,
    CalendarError,
    FixedBusinessDays,
    business_days_this_month,
)
from core.config import OUTPUT_FORMATS, Config, create_sample_config, load_config
from core.models import AnalysisResult, AuthorStat
from core.rules import ReportClassifier
from core.stats import assemble, group_by_author
from sources.contacts import load_directory
from sources.mbox import MboxSource

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


def get_calendar(config: Config, business_days: Optional[int] = None):
    """
    Factory function for the business-day calendar.

    A fixed count (flag or config) takes precedence over the weekday
    calendar.
    """
    fixed = business_days if business_days is not None else config.business_days
    if fixed is not None:
        return FixedBusinessDays(fixed)
    return BusinessDayCalendar(workdays=config.workdays, holidays=config.holidays)


def run_report(
    mbox_path: str,
    directory: Dict[str, str],
    business_days: int,
    classifier: Optional[ReportClassifier] = None,
) -> AnalysisResult:
    """
    Run the report pipeline over an mbox archive.

    Args:
        mbox_path: Path to the mbox archive
        directory: Address -> contact name mapping
        business_days: Business days in the current month
        classifier: Report classifier (default patterns if omitted)

    Returns:
        AnalysisResult with ordered stats and decode errors
    """
    result = AnalysisResult(business_days=business_days)

    with MboxSource(mbox_path) as source:
        messages, result.decode_errors = source.load_messages()

    groups = group_by_author(messages, directory, classifier)
    result.total_messages = len(messages)
    result.report_messages = sum(len(group) for group in groups.values())
    logger.info(
        f"{result.report_messages}/{result.total_messages} messages are reports "
        f"from {len(groups)} authors"
    )
    result.stats = assemble(groups, business_days)
    return result


def print_stat(stat: AuthorStat) -> None:
    """Print one author block."""
    print(f"Author: {stat.author}")
    print(f"Messages: {stat.count}, daily ratio: {stat.percentage}%")
    print(f"Messages amount distribution: {stat.sparklines.count}")
    print(f"Messages size distribution:   {stat.sparklines.size}")
    print()


def print_markdown(result: AnalysisResult) -> None:
    print("# Report Statistics")
    print()
    print(f"**Business days:** {result.business_days}")
    print(
        f"**Reports:** {result.report_messages} of {result.total_messages} messages "
        f"({result.rejected_messages} not counted)"
    )
    print()
    print("| Author | Reports | Daily ratio | Amount | Size |")
    print("|--------|---------|-------------|--------|------|")
    for stat in result.stats:
        print(
            f"| {stat.author} | {stat.count} | {stat.percentage}% "
            f"| `{stat.sparklines.count}` | `{stat.sparklines.size}` |"
        )


def print_json(result: AnalysisResult) -> None:
    output = {
        "business_days": result.business_days,
        "total_messages": result.total_messages,
        "report_messages": result.report_messages,
        "decode_errors": result.decode_errors,
        "stats": [stat.to_dict() for stat in result.stats],
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))


def print_stats(result: AnalysisResult, output_format: str = "table") -> None:
    """Print the ordered stats in the requested format."""
    if output_format == "json":
        print_json(result)
    elif output_format == "markdown":
        print_markdown(result)
    else:
        for stat in result.stats:
            print_stat(stat)
        if result.decode_errors:
            print(f"Skipped {len(result.decode_errors)} undecodable messages:")
            for err in result.decode_errors[:10]:
                print(f"  - {err}")
            if len(result.decode_errors) > 10:
                print(f"  ... and {len(result.decode_errors) - 10} more")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Per-author status report statistics from an mbox archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s reports.mbox
  %(prog)s reports.mbox contacts.csv
  %(prog)s reports.mbox contacts.csv --format json
  %(prog)s reports.mbox --business-days 20
        """,
    )
    parser.add_argument(
        "mbox",
        nargs="?",
        help="Path to the mbox archive",
    )
    parser.add_argument(
        "contacts",
        nargs="?",
        help="Path to the contacts CSV (optional)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        help="Output format (default: table, or output_format from config)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Config file (default: MAIL_REPORT_CONFIG or ~/.config/mail_report/config.yaml)",
    )
    parser.add_argument(
        "--business-days",
        type=int,
        help="Use a fixed business-day count instead of the calendar",
    )
    parser.add_argument(
        "--write-sample-config",
        type=Path,
        metavar="PATH",
        help="Write a sample config file and exit",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.write_sample_config:
        create_sample_config(args.write_sample_config)
        return 0

    if not args.mbox:
        parser.error("No mbox filename given")

    try:
        config = load_config(args.config)
        log_level = logging.DEBUG if args.verbose else str(config.log_level).upper()
        logging.getLogger().setLevel(log_level)
        calendar_service = get_calendar(config, args.business_days)
        classifier = ReportClassifier(config.ignored_senders, config.reply_subjects)
    except (ValueError, TypeError, re.error) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    output_format = args.format or config.output_format

    try:
        directory = load_directory(args.contacts, encoding=config.contacts_encoding)
        business_days = business_days_this_month(calendar_service)
    except CalendarError as e:
        logger.error(f"Cannot compute daily ratios: {e}")
        return 1
    except (OSError, UnicodeError, csv.Error) as e:
        logger.error(f"Failed to load contacts: {e}")
        return 1

    try:
        result = run_report(args.mbox, directory, business_days, classifier)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Error while computing report statistics: {e}", exc_info=True)
        return 1

    try:
        print_stats(result, output_format)
    except Exception as e:
        logger.error(f"Error while printing report statistics: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
