"""
Duplicate row detection for stored card prices.

Loading the same listing from successive reports leaves runs of rows
whose prices and stock never changed. The cleanup keeps the first row of
each run, deletes the repeats, and flags rows that have been compared
against a later report as clean.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar


class PriceRow(Protocol):
    name: str
    set_name: str
    buy_price: int
    sell_price: int
    stock: int
    clean: bool


RowT = TypeVar("RowT", bound=PriceRow)


@dataclass
class CleanupPlan(Generic[RowT]):
    """Rows to delete and rows to flag as clean."""

    delete: list[RowT] = field(default_factory=list)
    mark_clean: list[RowT] = field(default_factory=list)


def _same_listing(a: PriceRow, b: PriceRow) -> bool:
    return a.name == b.name and a.set_name == b.set_name


def _same_details(a: PriceRow, b: PriceRow) -> bool:
    return (
        _same_listing(a, b)
        and a.buy_price == b.buy_price
        and a.sell_price == b.sell_price
        and a.stock == b.stock
    )


def plan_cleanup(rows: Sequence[RowT]) -> CleanupPlan[RowT]:
    """
    Decide which rows a cleanup removes or flags.

    Args:
        rows: Rows ordered by name, set name and timestamp

    Returns:
        CleanupPlan. Each row appears at most once across both lists.

    Every row is compared with the row right before it, even when that
    row is itself being deleted, so a run of identical rows collapses to
    its first row.
    """
    plan: CleanupPlan[RowT] = CleanupPlan()
    if not rows:
        return plan

    deleted: set[int] = set()
    last = rows[0]

    for row in rows[1:]:
        if _same_listing(row, last):
            if _same_details(row, last):
                plan.delete.append(row)
                deleted.add(id(row))

            if not last.clean and id(last) not in deleted:
                plan.mark_clean.append(last)

        last = row

    return plan
