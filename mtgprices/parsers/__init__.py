from mtgprices.parsers.errors import PriceFormatError, ReportSyntaxError, TokenizerStallError
from mtgprices.parsers.fixed_point import PRICE_SCALE, parse_count, to_fixed
from mtgprices.parsers.price_report import assemble_cards, parse_report
from mtgprices.parsers.scanner import EOF, Scanner
from mtgprices.parsers.tokenizer import (
    BUY_PRICE_MAX_COLUMN,
    LEGACY_BOT_CODE_FIRST,
    LEGACY_BOT_CODE_SECOND,
    ReportTokenizer,
    tokenize,
)

__all__ = [
    "BUY_PRICE_MAX_COLUMN",
    "EOF",
    "LEGACY_BOT_CODE_FIRST",
    "LEGACY_BOT_CODE_SECOND",
    "PRICE_SCALE",
    "PriceFormatError",
    "ReportSyntaxError",
    "ReportTokenizer",
    "Scanner",
    "TokenizerStallError",
    "assemble_cards",
    "parse_count",
    "parse_report",
    "to_fixed",
    "tokenize",
]
