"""汇率换算测试"""
from datetime import datetime

import pytest
from structlog.testing import capture_logs

from core.currency import convert, get_rate, supported_currencies
from core.errors import InvalidInputError, RateUnavailableError


class TestRate:
    def test_same_currency(self):
        assert get_rate("JPY", "JPY") == 1.0

    def test_table_lookup(self):
        assert get_rate("USD", "EUR") == 0.85
        assert get_rate("EUR", "USD") == 1.18

    def test_missing_pair(self):
        with pytest.raises(RateUnavailableError) as exc:
            get_rate("USD", "PHP")
        assert "USD -> PHP" in str(exc.value)

    def test_supported(self):
        assert set(supported_currencies()) == {"USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF"}


class TestConvert:
    def test_convert(self):
        ts = datetime(2025, 1, 20, 10, 30)
        result = convert(1000, "USD", "EUR", ts)
        assert result.to_amount == pytest.approx(850)
        assert result.rate == 0.85
        assert result.timestamp == ts

    def test_identity(self):
        result = convert(250, "GBP", "GBP")
        assert result.to_amount == 250
        assert result.rate == 1.0

    @pytest.mark.parametrize("amount", [0, -10, float("nan"), float("inf")])
    def test_non_positive_amount(self, amount):
        with pytest.raises(InvalidInputError):
            convert(amount, "USD", "EUR")

    def test_logs_conversion(self):
        with capture_logs() as logs:
            convert(100, "USD", "GBP")
        assert logs[0]["event"] == "currency_converted"
        assert logs[0]["log_level"] == "debug"
        assert logs[0]["rate"] == get_rate("USD", "GBP")
