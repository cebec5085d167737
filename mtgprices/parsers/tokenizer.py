"""
Tokenizer for the bot price report.

Report layout:
    === <set name> === [Total Buy/Sell Value: <n>/<n>] =====
    <card name> [<set prefix>]  <buy price>   <sell price> <bot>[<n>] <bot>[<n>]

Example:
    === Magic 2010 === [Total Buy/Sell Value: 1234/2345] ==========
    Lightning Bolt [M10]  0.85                    1.10 mr[4] C1[2]

The report has no field delimiters beyond literal markers and fixed
columns, so it is tokenized character by character by a state machine.
Each state is a method that consumes input, may emit tokens, and returns
the next state (None halts the machine). Tokens are produced lazily: the
machine only runs until the next token is ready.

Malformed input ends the token stream early. By default the stream ends
with END_OF_FILE, as the reports have always been loaded; the failure is
kept on ``tokenizer.error``. In strict mode it ends with an ERROR token.
"""

from __future__ import annotations

import logging
import string
from collections import deque
from collections.abc import Callable, Iterable, Iterator

from mtgprices.models.token import Token, TokenKind
from mtgprices.parsers.errors import ReportSyntaxError, TokenizerStallError
from mtgprices.parsers.scanner import EOF, Scanner

logger = logging.getLogger(__name__)

# =============================================================================
# REPORT GRAMMAR CONSTANTS
# =============================================================================

HEADER_START = "=== "
HEADER_END = " === [Total Buy/Sell Value: "
CARD_SET_START = " ["
CARD_SET_END = "]  "

CARD_STARTS = frozenset(string.ascii_uppercase + "\u00c6")
DIGITS = frozenset(string.digits)

# Buy prices are printed in a column that starts at or before byte 44 of
# the card line; sell prices are printed right of it. Nothing else in the
# fixed-width report tells the two apart when one of them is missing.
BUY_PRICE_MAX_COLUMN = 44

# Bot codes: one character from the first set, optionally one from the second
DEFAULT_BOT_CODE_FIRST = frozenset(string.ascii_letters)
DEFAULT_BOT_CODE_SECOND = frozenset(string.ascii_letters + string.digits)
LEGACY_BOT_CODE_FIRST = "mCsptb"
LEGACY_BOT_CODE_SECOND = "rs1236s"

# Transitions allowed without consuming input or emitting a token
MAX_STALLED_TRANSITIONS = 16

StateFn = Callable[[], "StateFn | None"]


class ReportTokenizer:
    """
    Pull-based tokenizer for one report.

    Usage:
        tokenizer = ReportTokenizer(text)
        for token in tokenizer:
            ...
        if tokenizer.error:
            # report was cut short
    """

    def __init__(
        self,
        text: str,
        *,
        strict: bool = False,
        bot_code_first: Iterable[str] = DEFAULT_BOT_CODE_FIRST,
        bot_code_second: Iterable[str] = DEFAULT_BOT_CODE_SECOND,
        source: str = "<report>",
    ) -> None:
        self.strict = strict
        self.source = source
        self.error: ReportSyntaxError | None = None

        self._scanner = Scanner(text)
        self._bot_code_first = frozenset(bot_code_first)
        self._bot_code_second = frozenset(bot_code_second)
        self._has_header = False
        self._buy_price_seen = False
        self._state: StateFn | None = self._lex_line_start
        self._state_name = "line_start"
        self._pending: deque[Token] = deque()
        self._last: Token | None = None

    @property
    def state_name(self) -> str:
        """Name of the state that ran last."""
        return self._state_name

    def next_token(self) -> Token:
        """
        Run the state machine until a token is ready and return it.

        Once the stream has ended, keeps returning its final token.

        Raises:
            TokenizerStallError: If a state stops consuming input
        """
        stalled = 0
        while not self._pending:
            if self._state is None:
                if self._last is None:
                    raise RuntimeError("tokenizer halted without emitting a token")
                return self._last

            position = self._scanner.pos
            self._state_name = self._state.__name__.removeprefix("_lex_")
            self._state = self._state()

            if self._pending or self._scanner.pos != position:
                stalled = 0
                continue
            stalled += 1
            if stalled > MAX_STALLED_TRANSITIONS:
                raise TokenizerStallError(self._scanner.byte_pos, self._state_name)

        token = self._pending.popleft()
        self._last = token
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including END_OF_FILE or ERROR."""
        while True:
            token = self.next_token()
            yield token
            if token.is_terminal:
                return

    # =========================================================================
    # EMISSION
    # =========================================================================

    def _emit(self, kind: TokenKind) -> None:
        self._pending.append(self._scanner.emit_pending_lexeme(kind))

    def _emit_eof(self) -> None:
        self._scanner.mark_lexeme_start()
        self._emit(TokenKind.END_OF_FILE)
        return None

    def _dead_end(self, reason: str) -> None:
        """Stop at input the grammar cannot continue from."""
        offset = self._scanner.byte_pos
        self.error = ReportSyntaxError(offset, self._state_name, reason)

        if self.strict:
            self._pending.append(
                Token(TokenKind.ERROR, f"{self._state_name}: {reason}", offset)
            )
            return None

        logger.warning("%s ends early: %s", self.source, self.error)
        return self._emit_eof()

    # =========================================================================
    # SECTION HEADERS
    # =========================================================================

    def _lex_line_start(self) -> StateFn | None:
        s = self._scanner
        while True:
            if s.matches_literal_at(HEADER_START):
                s.skip_literal(HEADER_START)
                s.mark_lexeme_start()
                return self._lex_set_name

            # Cards only count once a set header has been seen
            if self._has_header and s.accept_if(CARD_STARTS):
                s.retreat()
                s.mark_lexeme_start()
                return self._lex_card_name

            if s.advance() == EOF:
                return self._emit_eof()

    def _lex_set_name(self) -> StateFn | None:
        s = self._scanner
        while True:
            if s.matches_literal_at(HEADER_END):
                self._emit(TokenKind.SET_NAME)
                self._has_header = True
                s.skip_literal(HEADER_END)
                s.mark_lexeme_start()
                return self._lex_number_pair

            if s.advance() == EOF:
                return self._dead_end("set header has no total value marker")

    def _lex_number_pair(self) -> StateFn | None:
        if not self._scan_number():
            return self._dead_end("expected the total buy value")

        if self._scanner.accept_if("/"):
            self._scanner.mark_lexeme_start()
            if not self._scan_number():
                return self._dead_end("expected the total sell value")

        return self._lex_set_end_of_line

    def _scan_number(self) -> bool:
        """Emit the digit run at the cursor. Empty runs are only an error in strict mode."""
        if self._scanner.accept_run(DIGITS) == 0 and self.strict:
            return False
        self._emit(TokenKind.NUMBER)
        return True

    def _lex_set_end_of_line(self) -> StateFn | None:
        s = self._scanner
        if not (s.accept_if("]") and s.accept_if(" ")):
            return self._dead_end("expected '] ' after the total values")

        s.accept_run("=")
        if s.peek() != "\n":
            return self._dead_end("expected a newline after the header rule")

        s.advance()
        self._emit(TokenKind.END_OF_LINE)
        return self._lex_line_start

    # =========================================================================
    # CARD LINES
    # =========================================================================

    def _lex_card_name(self) -> StateFn | None:
        s = self._scanner
        while True:
            if s.matches_literal_at(CARD_SET_START):
                if s.pos > s.start:
                    s.line_start = s.byte_start
                    self._buy_price_seen = False
                    self._emit(TokenKind.CARD_NAME)
                s.skip_literal(CARD_SET_START)
                s.mark_lexeme_start()
                return self._lex_set_prefix

            if s.advance() == EOF:
                return self._dead_end("card line has no set prefix")

    def _lex_set_prefix(self) -> StateFn | None:
        s = self._scanner
        while True:
            if s.matches_literal_at(CARD_SET_END):
                if s.pos > s.start:
                    self._emit(TokenKind.SET_PREFIX)
                s.skip_literal(CARD_SET_END)
                s.mark_lexeme_start()
                return self._lex_card_prices

            if s.advance() == EOF:
                return self._dead_end("set prefix is not closed by ']  '")

    def _lex_card_prices(self) -> StateFn | None:
        s = self._scanner
        while True:
            char = s.advance()
            if char == EOF:
                return self._emit_eof()
            if char == "\n":
                return self._lex_line_start
            if char in DIGITS:
                s.retreat()
                return self._lex_price
            if char != " " and self.strict:
                s.retreat()
                return self._dead_end(f"unexpected {char!r} in the price columns")
            s.mark_lexeme_start()

    def _lex_price(self) -> StateFn | None:
        s = self._scanner

        # A second price on the line is always the sell price
        kind = TokenKind.SELL_PRICE
        if s.column <= BUY_PRICE_MAX_COLUMN and not self._buy_price_seen:
            kind = TokenKind.BUY_PRICE

        s.accept_run(DIGITS)
        if s.accept_if(".") and s.accept_run(DIGITS) == 0:
            return self._dead_end("expected digits after the decimal point")
        self._emit(kind)

        if kind is TokenKind.BUY_PRICE:
            self._buy_price_seen = True
            return self._lex_card_prices
        return self._lex_bots

    # =========================================================================
    # BOT ENTRIES
    # =========================================================================

    def _lex_bots(self) -> StateFn | None:
        s = self._scanner
        s.accept_run(" ")
        s.mark_lexeme_start()

        char = s.peek()
        if char == "\n":
            s.advance()
            s.mark_lexeme_start()
            return self._lex_line_start
        if char == EOF:
            return self._emit_eof()
        return self._lex_bot_name

    def _lex_bot_name(self) -> StateFn | None:
        s = self._scanner
        if not s.accept_if(self._bot_code_first):
            return self._dead_end("expected a bot code")

        s.accept_if(self._bot_code_second)
        self._emit(TokenKind.BOT_NAME)
        return self._lex_bot_count

    def _lex_bot_count(self) -> StateFn | None:
        s = self._scanner
        if not s.accept_if("["):
            return self._dead_end("expected '[' after the bot code")
        s.mark_lexeme_start()

        if s.accept_run(DIGITS) == 0:
            return self._dead_end("expected a stock count")
        self._emit(TokenKind.BOT_COUNT)

        if not s.accept_if("]"):
            return self._dead_end("expected ']' after the stock count")
        s.mark_lexeme_start()
        return self._lex_bots


def tokenize(text: str, *, strict: bool = False) -> list[Token]:
    """Tokenize a whole report, including the final END_OF_FILE or ERROR token."""
    return list(ReportTokenizer(text, strict=strict))
