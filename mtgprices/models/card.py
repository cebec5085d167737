from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Card:
    """
    One card line of a price report.

    Attributes:
        name: Card name exactly as it appears in the report
        set_name: Set prefix from the card line (e.g., "M10")
        buy_price: Price the bots pay, fixed-point scaled by 1000
        sell_price: Price the bots ask, fixed-point scaled by 1000
        stock: Copies in stock, summed over every bot on the line
        timestamp: Capture time of the report the line came from
    """

    name: str
    set_name: str = ""
    buy_price: int = 0
    sell_price: int = 0
    stock: int = 0
    timestamp: str = ""

    def same_listing(self, other: "Card") -> bool:
        """True if both records describe the same printing."""
        return self.name == other.name and self.set_name == other.set_name

    def same_details(self, other: "Card") -> bool:
        """True if both records have identical prices and stock."""
        return (
            self.same_listing(other)
            and self.buy_price == other.buy_price
            and self.sell_price == other.sell_price
            and self.stock == other.stock
        )
