"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
Column names follow the legacy card.db layout so existing databases load.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardPriceDB(Base):
    """
    One card line from one price report.

    A card appears once per loaded report; the clean pass removes rows
    that repeat the previous report's prices and stock unchanged.
    """

    __tablename__ = "card_prices"

    rowid: Mapped[int] = mapped_column("Rowid", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    set_name: Mapped[str] = mapped_column(String(32), default="")

    # Fixed-point prices, scaled by 1000
    buy_price: Mapped[int] = mapped_column("buy", Integer, default=0)
    sell_price: Mapped[int] = mapped_column("sell", Integer, default=0)

    stock: Mapped[int] = mapped_column(Integer, default=0)
    clean: Mapped[bool] = mapped_column(Boolean, default=False)

    # Report capture time as stored by the loader
    ts: Mapped[str] = mapped_column(String(64), index=True)

    def __repr__(self) -> str:
        return f"<CardPriceDB(name={self.name}, set={self.set_name}, ts={self.ts})>"
