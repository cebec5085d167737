"""
Database operations for stored card prices.

Provides async functions for inserting report rows, reading them back and
running the duplicate cleanup.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mtgprices.models.card import Card
from mtgprices.models.db import CardPriceDB
from mtgprices.services.price_cleaner import plan_cleanup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of a cleanup run."""

    examined: int
    deleted: int
    marked_clean: int


# --- Conversion ---


def card_to_model(card: Card) -> CardPriceDB:
    """Build an ORM row from a parsed card."""
    return CardPriceDB(
        name=card.name,
        set_name=card.set_name,
        buy_price=card.buy_price,
        sell_price=card.sell_price,
        stock=card.stock,
        clean=False,
        ts=card.timestamp,
    )


def model_to_card(row: CardPriceDB) -> Card:
    return Card(
        name=row.name,
        set_name=row.set_name,
        buy_price=row.buy_price,
        sell_price=row.sell_price,
        stock=row.stock,
        timestamp=row.ts,
    )


# --- Price Operations ---


async def insert_card_prices(session: AsyncSession, cards: Iterable[Card]) -> int:
    """
    Add one row per card.

    Flushes but does not commit; the caller owns the transaction.

    Returns:
        Number of rows added.
    """
    rows = [card_to_model(card) for card in cards]
    session.add_all(rows)
    await session.flush()
    return len(rows)


async def get_card_prices(session: AsyncSession) -> list[CardPriceDB]:
    """All rows, grouped by listing and in capture order within each listing."""
    result = await session.execute(
        select(CardPriceDB).order_by(
            CardPriceDB.name,
            CardPriceDB.set_name,
            CardPriceDB.ts,
            CardPriceDB.rowid,
        )
    )
    return list(result.scalars().all())


async def get_price_history(session: AsyncSession, name: str, set_name: str) -> list[CardPriceDB]:
    """
    Get every stored row for one listing, oldest first.

    Returns an empty list if the card was never loaded.
    """
    result = await session.execute(
        select(CardPriceDB)
        .where(CardPriceDB.name == name, CardPriceDB.set_name == set_name)
        .order_by(CardPriceDB.ts, CardPriceDB.rowid)
    )
    return list(result.scalars().all())


async def clean_card_prices(session: AsyncSession) -> CleanupResult:
    """
    Delete repeated rows and flag compared rows as clean.

    See plan_cleanup for the rules. Flushes but does not commit.
    """
    rows = await get_card_prices(session)
    logger.info("Found %d card price rows", len(rows))

    plan = plan_cleanup(rows)

    for row in plan.delete:
        await session.delete(row)
    for row in plan.mark_clean:
        row.clean = True

    await session.flush()

    return CleanupResult(
        examined=len(rows),
        deleted=len(plan.delete),
        marked_clean=len(plan.mark_clean),
    )
