from pathlib import Path

import pytest
from report_builder import HEADER

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_report_path() -> Path:
    """Two-section report with four card lines."""
    return FIXTURES / "sample_prices.txt"


@pytest.fixture
def sample_report(sample_report_path: Path) -> str:
    return sample_report_path.read_text(encoding="utf-8")


@pytest.fixture
def single_card_report() -> str:
    """One section, one card, one bot."""
    return HEADER + "Card1 [ALP]  1.50   2.25 aa[2]\n"
