"""
Token types produced by the price report tokenizer.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Closed set of token classifications."""

    END_OF_FILE = "end_of_file"
    END_OF_LINE = "end_of_line"
    SET_NAME = "set_name"
    CARD_NAME = "card_name"
    SET_PREFIX = "set_prefix"
    NUMBER = "number"
    BUY_PRICE = "buy_price"
    SELL_PRICE = "sell_price"
    BOT_NAME = "bot_name"
    BOT_COUNT = "bot_count"
    ERROR = "error"


# Kinds after which the tokenizer produces nothing more
TERMINAL_KINDS = frozenset({TokenKind.END_OF_FILE, TokenKind.ERROR})


@dataclass(frozen=True, slots=True)
class Token:
    """
    A classified, positioned slice of the report.

    Attributes:
        kind: Token classification
        text: Matched text (for ERROR, a description of the failure)
        offset: UTF-8 byte offset of the first character of the match
    """

    kind: TokenKind
    text: str
    offset: int

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def __str__(self) -> str:
        if self.kind is TokenKind.END_OF_FILE:
            return "EOF"
        if self.kind is TokenKind.END_OF_LINE:
            return "EOL"
        if self.kind is TokenKind.ERROR:
            return self.text
        return f"{self.kind.value}: {self.text!r}"
