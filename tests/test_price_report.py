"""Tests for assembling tokens into cards."""

import pytest
from report_builder import HEADER, card_line

from mtgprices.models.card import Card
from mtgprices.models.token import Token, TokenKind
from mtgprices.parsers.errors import PriceFormatError, ReportSyntaxError
from mtgprices.parsers.price_report import assemble_cards, parse_report
from mtgprices.parsers.tokenizer import ReportTokenizer

TS = "2013-05-01 12:00:00 +0000 UTC"


def tok(kind: TokenKind, text: str = "") -> Token:
    return Token(kind, text, 0)


class TestAssembleCards:
    def test_single_card(self, single_card_report: str) -> None:
        cards = list(assemble_cards(ReportTokenizer(single_card_report), TS))

        assert cards == [
            Card(
                name="Card1",
                set_name="ALP",
                buy_price=1500,
                sell_price=2250,
                stock=2,
                timestamp=TS,
            )
        ]

    def test_stock_accumulates(self) -> None:
        text = HEADER + card_line("Card", "S", "1.00", "2.00", bots="aa[3] bb[4]")
        cards = list(assemble_cards(ReportTokenizer(text), TS))

        assert cards[0].stock == 7

    def test_stock_does_not_leak_between_cards(self) -> None:
        text = (
            HEADER
            + card_line("First", "S", "1.00", "2.00", bots="aa[3]")
            + card_line("Second", "S", "1.00", "2.00")
        )
        cards = list(assemble_cards(ReportTokenizer(text), TS))

        assert [c.stock for c in cards] == [3, 0]

    def test_missing_buy_price_defaults_to_zero(self) -> None:
        text = HEADER + card_line("Card", "S", sell="4.5", bots="sp[1]")
        card = list(assemble_cards(ReportTokenizer(text), TS))[0]

        assert card.buy_price == 0
        assert card.sell_price == 4500

    def test_first_card_name_finalizes_nothing(self) -> None:
        tokens = [tok(TokenKind.CARD_NAME, "Only"), tok(TokenKind.END_OF_FILE)]

        assert [c.name for c in assemble_cards(tokens, TS)] == ["Only"]

    def test_no_cards(self) -> None:
        tokens = [
            tok(TokenKind.SET_NAME, "Alpha"),
            tok(TokenKind.NUMBER, "1"),
            tok(TokenKind.NUMBER, "2"),
            tok(TokenKind.END_OF_LINE, "] =\n"),
            tok(TokenKind.END_OF_FILE),
        ]

        assert list(assemble_cards(tokens, TS)) == []

    def test_stream_without_eof_still_finalizes(self) -> None:
        tokens = [tok(TokenKind.CARD_NAME, "A"), tok(TokenKind.BOT_COUNT, "2")]

        assert list(assemble_cards(tokens, TS)) == [Card(name="A", stock=2, timestamp=TS)]

    def test_tokens_after_eof_are_ignored(self) -> None:
        tokens = [
            tok(TokenKind.CARD_NAME, "A"),
            tok(TokenKind.END_OF_FILE),
            tok(TokenKind.CARD_NAME, "B"),
        ]

        assert [c.name for c in assemble_cards(tokens, TS)] == ["A"]

    def test_structure_tokens_have_no_effect(self) -> None:
        tokens = [
            tok(TokenKind.CARD_NAME, "A"),
            tok(TokenKind.BOT_NAME, "99"),
            tok(TokenKind.NUMBER, "5"),
            tok(TokenKind.SET_NAME, "X"),
            tok(TokenKind.END_OF_LINE, "\n"),
            tok(TokenKind.END_OF_FILE),
        ]

        assert list(assemble_cards(tokens, TS)) == [Card(name="A", timestamp=TS)]

    def test_error_token_raises(self) -> None:
        tokens = [
            tok(TokenKind.CARD_NAME, "A"),
            Token(TokenKind.ERROR, "bot_count: expected a stock count", 120),
        ]

        with pytest.raises(ReportSyntaxError) as exc_info:
            list(assemble_cards(tokens, TS))

        assert exc_info.value.offset == 120
        assert exc_info.value.state == "bot_count"
        assert exc_info.value.reason == "expected a stock count"
        assert "offset 120" in str(exc_info.value)

    def test_bad_price_is_fatal(self) -> None:
        tokens = [tok(TokenKind.CARD_NAME, "A"), tok(TokenKind.BUY_PRICE, "1.")]

        with pytest.raises(PriceFormatError):
            list(assemble_cards(tokens, TS))

    def test_legacy_truncation_flag(self) -> None:
        tokens = [tok(TokenKind.CARD_NAME, "A"), tok(TokenKind.SELL_PRICE, "1.2345")]

        legacy = list(assemble_cards(tokens, TS))[0]
        exact = list(assemble_cards(tokens, TS, legacy_truncation=False))[0]

        assert legacy.sell_price == 1000
        assert exact.sell_price == 1235

    def test_cards_are_yielded_lazily(self) -> None:
        tokens = iter(
            [
                tok(TokenKind.CARD_NAME, "A"),
                tok(TokenKind.CARD_NAME, "B"),
                Token(TokenKind.ERROR, "card_name: broken", 9),
            ]
        )
        cards = assemble_cards(tokens, TS)

        assert next(cards).name == "A"
        with pytest.raises(ReportSyntaxError):
            next(cards)


class TestParseReport:
    def test_sample_report(self, sample_report: str) -> None:
        cards = parse_report(sample_report, TS)

        assert cards == [
            Card("Lightning Bolt", "M10", 850, 1100, 6, TS),
            Card("Ancestral Recall", "M10", 0, 250500, 1, TS),
            Card("Giant Growth", "M10", 20, 50, 0, TS),
            Card("Scalding Tarn", "ZEN", 12345, 15000, 6, TS),
        ]

    def test_card_count_matches_card_name_tokens(self, sample_report: str) -> None:
        names = [t for t in ReportTokenizer(sample_report) if t.kind is TokenKind.CARD_NAME]

        assert len(parse_report(sample_report, TS)) == len(names)

    def test_every_card_gets_the_timestamp(self, sample_report: str) -> None:
        assert {c.timestamp for c in parse_report(sample_report, TS)} == {TS}

    def test_truncated_report_lenient_keeps_earlier_cards(self, sample_report: str) -> None:
        text = sample_report + "=== Broken === [Total Buy/Sell Value: 1/2]"
        cards = parse_report(text, TS)

        assert len(cards) == 4

    def test_truncated_report_strict_raises(self, sample_report: str) -> None:
        text = sample_report + "=== Broken === [Total Buy/Sell Value: 1/2]"

        with pytest.raises(ReportSyntaxError) as exc_info:
            parse_report(text, TS, strict=True)

        assert exc_info.value.state == "set_end_of_line"
        assert exc_info.value.offset == len(text.encode("utf-8"))
