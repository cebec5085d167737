"""
Exceptions raised while turning a price report into cards.

ReportSyntaxError describes bad INPUT and is only raised in strict mode.
PriceFormatError and TokenizerStallError describe bugs: the grammar
guarantees they cannot happen for any input, so they are never caught.
"""


class ReportSyntaxError(Exception):
    """
    Raised when the report does not follow the expected layout.

    Carries the byte offset and the tokenizer state where recognition
    failed so the offending spot can be found in the raw file.
    """

    def __init__(self, offset: int, state: str, reason: str) -> None:
        self.offset = offset
        self.state = state
        self.reason = reason
        super().__init__(f"Syntax error at offset {offset} in state {state}: {reason}")


class PriceFormatError(ValueError):
    """Raised when a price or count lexeme is not a decimal digit run."""

    def __init__(self, text: str, reason: str = "not a decimal number") -> None:
        self.text = text
        super().__init__(f"Invalid number {text!r}: {reason}")


class TokenizerStallError(RuntimeError):
    """Raised when the state machine stops consuming input."""

    def __init__(self, offset: int, state: str) -> None:
        self.offset = offset
        self.state = state
        super().__init__(f"Tokenizer made no progress at offset {offset} in state {state}")
