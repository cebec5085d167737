"""
Assemble report tokens into Card records.

A card starts at its CARD_NAME token and collects the tokens that follow
it. It is finished when the next CARD_NAME or END_OF_FILE arrives, so
cards come out in the order their names appear in the report.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mtgprices.models.card import Card
from mtgprices.models.token import Token, TokenKind
from mtgprices.parsers.errors import ReportSyntaxError
from mtgprices.parsers.fixed_point import parse_count, to_fixed
from mtgprices.parsers.tokenizer import ReportTokenizer

logger = logging.getLogger(__name__)


@dataclass
class _CardInProgress:
    name: str = ""
    set_name: str = ""
    buy_price: int = 0
    sell_price: int = 0
    stock: int = 0

    def finish(self, timestamp: str) -> Card:
        return Card(
            name=self.name,
            set_name=self.set_name,
            buy_price=self.buy_price,
            sell_price=self.sell_price,
            stock=self.stock,
            timestamp=timestamp,
        )


def assemble_cards(
    tokens: Iterable[Token],
    timestamp: str,
    *,
    legacy_truncation: bool = True,
) -> Iterator[Card]:
    """
    Turn a token stream into Card records.

    Args:
        tokens: Tokens in report order, ending with END_OF_FILE or ERROR
        timestamp: Capture time stamped on every card
        legacy_truncation: Passed to to_fixed for both prices

    Yields:
        One Card per CARD_NAME token, each with a non-empty name.

    Raises:
        ReportSyntaxError: On an ERROR token (strict tokenizing only).
            The card being assembled at that point is discarded.
        PriceFormatError: If a price or count token is not numeric
    """
    card = _CardInProgress()

    for token in tokens:
        kind = token.kind

        if kind is TokenKind.CARD_NAME:
            if card.name:
                yield card.finish(timestamp)
            card = _CardInProgress(name=token.text)
        elif kind is TokenKind.SET_PREFIX:
            card.set_name = token.text
        elif kind is TokenKind.BUY_PRICE:
            card.buy_price = to_fixed(token.text, legacy_truncation)
        elif kind is TokenKind.SELL_PRICE:
            card.sell_price = to_fixed(token.text, legacy_truncation)
        elif kind is TokenKind.BOT_COUNT:
            # Several bots can stock the same card
            card.stock += parse_count(token.text)
        elif kind is TokenKind.ERROR:
            state, _, reason = token.text.partition(": ")
            raise ReportSyntaxError(token.offset, state, reason)
        elif kind is TokenKind.END_OF_FILE:
            break
        # SET_NAME, NUMBER, BOT_NAME and END_OF_LINE only shape the grammar

    if card.name:
        yield card.finish(timestamp)


def parse_report(
    text: str,
    timestamp: str,
    *,
    strict: bool = False,
    legacy_truncation: bool = True,
) -> list[Card]:
    """
    Parse a whole decoded report into cards.

    In lenient mode a report that ends early still returns the cards read
    before the break; the tokenizer logs where it stopped.
    """
    tokenizer = ReportTokenizer(text, strict=strict)
    cards = list(assemble_cards(tokenizer, timestamp, legacy_truncation=legacy_truncation))
    logger.debug("Parsed %d cards", len(cards))
    return cards
