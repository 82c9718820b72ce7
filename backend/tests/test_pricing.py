"""Tests for marketplace price string parsing."""
from roxinho_shop.integrations.marketplaces.pricing import parse_positive_price, parse_price


class TestParsePrice:
    def test_brazilian_format(self):
        assert parse_price("R$ 1.234,56") == 1234.56

    def test_us_format(self):
        assert parse_price("$1,234.56") == 1234.56

    def test_comma_decimal(self):
        assert parse_price("29,99") == 29.99

    def test_plain_decimal(self):
        assert parse_price("349.90") == 349.9

    def test_thousands_only_periods(self):
        assert parse_price("R$ 1.234.567") == 1234567.0

    def test_currency_text(self):
        assert parse_price("EUR 49,99") == 49.99

    def test_empty_and_none(self):
        assert parse_price("") is None
        assert parse_price(None) is None

    def test_no_digits(self):
        assert parse_price("Indisponível") is None
        assert parse_price("...") is None


class TestParsePositivePrice:
    def test_rejects_zero(self):
        assert parse_positive_price("R$ 0,00") is None

    def test_accepts_positive(self):
        assert parse_positive_price("R$ 10,50") == 10.5


class TestPriceTextWithSeveralNumbers:
    def test_old_and_new_price_in_one_node(self):
        assert parse_price("De R$ 199,90 por R$ 149,90") == 199.9

    def test_sentence_ending_period(self):
        assert parse_price("R$ 10,00.") == 10.0

    def test_installments_prefer_currency_amount(self):
        assert parse_price("12x de R$ 16,66 sem juros") == 16.66

    def test_bare_number_before_amount(self):
        assert parse_price("Em até 10 vezes") == 10.0

    def test_digits_are_never_joined(self):
        assert parse_price("1234.56 ou 99,90") == 1234.56

    def test_long_plain_number(self):
        assert parse_price("1234,5") == 1234.5
