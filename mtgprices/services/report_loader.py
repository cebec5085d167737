"""
Price report loader.

Reads a report file from disk, decodes it and derives the timestamp that
every card from the file is stored with.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "iso-8859-1"


@dataclass(frozen=True, slots=True)
class PriceReport:
    """A decoded report and the time it was captured."""

    path: Path
    text: str
    timestamp: str


def format_timestamp(seconds: int, nanoseconds: int = 0) -> str:
    """
    Format a UTC epoch time the way the card_prices.ts column stores it.

    Example: "2013-05-01 18:04:05.25 +0000 UTC". The fraction is printed
    to the nanosecond with trailing zeros removed, and left out when zero.
    """
    moment = datetime.fromtimestamp(seconds, tz=UTC)
    fraction = f".{nanoseconds:09d}".rstrip("0") if nanoseconds else ""
    return f"{moment:%Y-%m-%d %H:%M:%S}{fraction} +0000 UTC"


def report_timestamp(path: Path) -> str:
    """Modification time of the report file."""
    seconds, nanoseconds = divmod(path.stat().st_mtime_ns, 1_000_000_000)
    return format_timestamp(seconds, nanoseconds)


def read_report(path: Path, encoding: str = DEFAULT_ENCODING) -> PriceReport:
    """
    Load a price report.

    Args:
        path: Report file
        encoding: Codec the report was published in

    Returns:
        PriceReport with text decoded and line endings normalised to "\\n".

    Raises:
        FileNotFoundError: If the report doesn't exist
        UnicodeDecodeError: If the bytes are not valid for encoding
    """
    if not path.exists():
        raise FileNotFoundError(f"Price report not found at {path}")

    timestamp = report_timestamp(path)
    text = path.read_text(encoding=encoding)
    logger.info("Read %d characters from %s (captured %s)", len(text), path, timestamp)

    return PriceReport(path=path, text=text, timestamp=timestamp)
