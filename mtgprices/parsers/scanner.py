"""
Character cursor over decoded report text.

The scanner knows nothing about the report grammar. It walks the text one
character at a time, can step back exactly one character, and cuts the
span between the last mark and the cursor into a Token.

Offsets handed out in tokens are UTF-8 byte offsets, the unit the column
rules of the report were written against.
"""

from collections.abc import Iterable

from mtgprices.models.token import Token, TokenKind

# Returned by advance() once the text is exhausted
EOF = ""


def utf8_width(char: str) -> int:
    """Number of bytes the character occupies when encoded as UTF-8."""
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


class Scanner:
    """
    Cursor with a pending lexeme.

    text[start:pos] is the pending lexeme. byte_start and byte_pos track
    the same two positions in UTF-8 bytes. line_start is the byte offset
    of the current card line and is only moved by the tokenizer.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.start = 0
        self.pos = 0
        self.byte_start = 0
        self.byte_pos = 0
        self.line_start = 0
        self._width = 0
        self._step = 0
        self._can_retreat = False

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def column(self) -> int:
        """Byte offset of the pending lexeme from the start of the card line."""
        return self.byte_start - self.line_start

    def advance(self) -> str:
        """Consume and return the next character, or EOF."""
        self._can_retreat = True
        if self.at_end:
            self._width = 0
            self._step = 0
            return EOF

        char = self.text[self.pos]
        self._width = utf8_width(char)
        self._step = 1
        self.pos += 1
        self.byte_pos += self._width
        return char

    def retreat(self) -> None:
        """Undo the last advance(). Only valid once per advance()."""
        if not self._can_retreat:
            raise RuntimeError("retreat() called twice without an advance()")
        self._can_retreat = False
        self.pos -= self._step
        self.byte_pos -= self._width

    def peek(self) -> str:
        char = self.advance()
        self.retreat()
        return char

    def accept_if(self, valid: Iterable[str]) -> bool:
        """Consume the next character if it is in valid."""
        char = self.advance()
        if char != EOF and char in valid:
            return True
        self.retreat()
        return False

    def accept_run(self, valid: Iterable[str]) -> int:
        """Consume characters while they are in valid; return how many."""
        count = 0
        while self.accept_if(valid):
            count += 1
        return count

    def matches_literal_at(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos)

    def skip_literal(self, literal: str) -> None:
        """Move the cursor past literal, which must be at the cursor."""
        if not self.matches_literal_at(literal):
            raise RuntimeError(f"{literal!r} is not at offset {self.byte_pos}")
        self.pos += len(literal)
        self.byte_pos += sum(utf8_width(char) for char in literal)
        self._can_retreat = False

    def mark_lexeme_start(self) -> None:
        """Drop the pending lexeme."""
        self.start = self.pos
        self.byte_start = self.byte_pos

    def emit_pending_lexeme(self, kind: TokenKind) -> Token:
        token = Token(kind=kind, text=self.text[self.start : self.pos], offset=self.byte_start)
        self.mark_lexeme_start()
        return token
