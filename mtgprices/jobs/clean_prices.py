"""
Remove repeated card price rows.

Successive reports mostly repeat yesterday's prices. This job deletes rows
that repeat the previous row of the same listing and flags the survivors
as clean. It can also print one listing's stored history.
"""

import argparse
import asyncio
import logging

from mtgprices.db.database import async_session_factory, init_db, set_sql_trace
from mtgprices.db.operations import CleanupResult, clean_card_prices, get_price_history

logger = logging.getLogger(__name__)


async def run_clean() -> CleanupResult:
    """Run the duplicate cleanup in one transaction."""
    logger.info("Cleaning card price rows...")

    await init_db()
    async with async_session_factory() as session:
        result = await clean_card_prices(session)
        await session.commit()

    logger.info(
        "Cleanup complete. Examined %d rows, deleted %d, marked %d clean",
        result.examined,
        result.deleted,
        result.marked_clean,
    )
    return result


async def show_history(name: str, set_name: str) -> list[str]:
    """
    Describe every stored row of one listing.

    Returns:
        One "rowid buy sell stock" line per row, oldest first.
    """
    async with async_session_factory() as session:
        rows = await get_price_history(session, name, set_name)

    return [f"{row.rowid} {row.buy_price} {row.sell_price} {row.stock}" for row in rows]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Clean stored card prices")
    parser.add_argument("--card", help="Print the history of this card instead of cleaning")
    parser.add_argument("--set", dest="set_name", default="", help="Set prefix for --card")
    parser.add_argument("--trace", action="store_true", help="Log SQL statements")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if args.trace:
        set_sql_trace(True)

    if args.card:
        print(args.card, args.set_name)
        for line in asyncio.run(show_history(args.card, args.set_name)):
            print(line)
        return

    asyncio.run(run_clean())


if __name__ == "__main__":
    main()
