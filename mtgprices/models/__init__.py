from mtgprices.models.card import Card
from mtgprices.models.db import Base, CardPriceDB
from mtgprices.models.token import TERMINAL_KINDS, Token, TokenKind

__all__ = [
    "Base",
    "Card",
    "CardPriceDB",
    "TERMINAL_KINDS",
    "Token",
    "TokenKind",
]
