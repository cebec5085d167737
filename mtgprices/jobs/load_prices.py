"""
Load a bot price report into the database.

Reads the report (prices_0.txt by default), parses every card line and
stores the cards in one transaction, stamped with the file's modification
time. Can be run as a standalone script or called from a scheduler.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from mtgprices.config import settings
from mtgprices.db.database import async_session_factory, init_db, set_sql_trace
from mtgprices.db.operations import insert_card_prices
from mtgprices.jobs.clean_prices import run_clean
from mtgprices.parsers.errors import ReportSyntaxError
from mtgprices.parsers.price_report import parse_report
from mtgprices.services.report_loader import read_report

logger = logging.getLogger(__name__)


async def run_load(
    report_path: Path | None = None,
    *,
    encoding: str | None = None,
    strict: bool | None = None,
    legacy_truncation: bool | None = None,
) -> int:
    """
    Parse a report and store its cards.

    Arguments left as None fall back to settings.

    Returns:
        Number of cards stored

    Raises:
        FileNotFoundError: If the report doesn't exist
        ReportSyntaxError: If strict parsing finds a malformed report;
            nothing is stored in that case
    """
    if report_path is None:
        report_path = settings.report_path
    if encoding is None:
        encoding = settings.report_encoding
    if strict is None:
        strict = settings.strict_parsing
    if legacy_truncation is None:
        legacy_truncation = settings.legacy_fraction_truncation

    logger.info("Loading prices from %s...", report_path)

    try:
        report = read_report(report_path, encoding)
        cards = parse_report(
            report.text,
            report.timestamp,
            strict=strict,
            legacy_truncation=legacy_truncation,
        )
    except (OSError, UnicodeDecodeError, ReportSyntaxError) as e:
        logger.error("Failed to read price report %s: %s", report_path, e)
        raise

    await init_db()
    async with async_session_factory() as session:
        count = await insert_card_prices(session, cards)
        await session.commit()

    logger.info("Stored %d cards captured %s", count, report.timestamp)
    return count


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Load a bot price report")
    parser.add_argument(
        "--report",
        type=Path,
        default=settings.report_path,
        help=f"Report file (default: {settings.report_path})",
    )
    parser.add_argument(
        "--encoding",
        default=settings.report_encoding,
        help=f"Report character set (default: {settings.report_encoding})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict_parsing,
        help="Fail on a malformed report instead of loading what parses",
    )
    parser.add_argument(
        "--exact-fractions",
        action="store_true",
        help="Round prices with more than 3 decimals instead of dropping the fraction",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Clean the database instead of loading new prices",
    )
    parser.add_argument("--trace", action="store_true", help="Log SQL statements")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if args.trace:
        set_sql_trace(True)

    if args.clean:
        asyncio.run(run_clean())
        return

    legacy_truncation = settings.legacy_fraction_truncation and not args.exact_fractions
    asyncio.run(
        run_load(
            args.report,
            encoding=args.encoding,
            strict=args.strict,
            legacy_truncation=legacy_truncation,
        )
    )


if __name__ == "__main__":
    main()
