"""
Tests for frontend/utils/models.py - backend payload models.
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from utils.models import (
    Identity,
    Portfolio,
    SignupForm,
    StockQuote,
    Transaction,
    User,
    normalize_role,
    parse_timestamp,
)


class TestRoles:
    """Role names arrive as TRADER/ADMIN or ROLE_ADMIN."""

    @pytest.mark.parametrize("raw,expected", [
        ("ADMIN", "ADMIN"),
        ("ROLE_ADMIN", "ADMIN"),
        ("role_trader", "TRADER"),
        (None, ""),
    ])
    def test_normalize_role(self, raw, expected):
        assert normalize_role(raw) == expected

    def test_prefixed_admin_role_is_admin(self, admin_payload):
        assert User.model_validate(admin_payload).is_admin

    def test_trader_is_not_admin(self, user_payload):
        assert not User.model_validate(user_payload).is_admin


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_iso_string(self):
        assert parse_timestamp("2025-01-15T10:30:00") == datetime(2025, 1, 15, 10, 30)

    def test_array_form(self):
        """Java LocalDateTime serialized as an array."""
        assert parse_timestamp([2025, 2, 1, 9, 0, 0]) == datetime(2025, 2, 1, 9, 0, 0)

    def test_date_only_array(self):
        assert parse_timestamp([2025, 2, 1]) == datetime(2025, 2, 1)

    def test_invalid(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None


class TestUser:
    """Tests for User and Identity."""

    def test_camel_case_aliases(self, user_payload):
        user = User.model_validate(user_payload)
        assert user.id == "1"
        assert user.first_name == "John"
        assert user.full_name == "John Doe"
        assert user.created_at == datetime(2025, 1, 15, 10, 30)
        assert user.updated_at == datetime(2025, 2, 1, 9, 0)

    def test_missing_names_fall_back_to_username(self):
        user = User.model_validate({"username": "jdoe", "firstName": None})
        assert user.display_name == "jdoe"
        assert user.balance == 0.0
        assert user.roles == []

    def test_identity_keeps_token(self, login_payload):
        identity = Identity.model_validate(login_payload)
        assert identity.token == "jwt-token-abc123"
        assert identity.token_type == "Bearer"
        assert identity.username == "jdoe"


class TestStockQuote:
    """Tests for StockQuote change computation."""

    def test_change_and_percent(self, stocks_payload):
        quote = StockQuote.model_validate(stocks_payload[0])
        assert quote.change == pytest.approx(5.0)
        assert quote.change_percent == pytest.approx(5.0)

    def test_no_previous_close(self, stocks_payload):
        quote = StockQuote.model_validate(stocks_payload[1])
        assert quote.change is None
        assert quote.change_percent is None

    def test_zero_previous_close_has_no_percent(self):
        quote = StockQuote.model_validate({"symbol": "X", "currentPrice": 1.0, "previousClose": 0})
        assert quote.change == 1.0
        assert quote.change_percent is None


class TestPortfolio:
    """Tests for Portfolio parsing."""

    def test_wrapped_payload_is_unwrapped(self, portfolio_payload):
        portfolio = Portfolio.model_validate(portfolio_payload)
        assert portfolio.holdings == {"AAPL": 10, "MSFT": 1}
        assert portfolio.average_price("AAPL") == 110.0
        assert portfolio.cash_balance == 8500.0

    def test_flat_payload(self):
        portfolio = Portfolio.model_validate({"holdings": {"AAPL": 2}, "averagePrices": {"AAPL": 50}})
        assert portfolio.holdings == {"AAPL": 2}
        assert portfolio.cash_balance is None

    def test_unknown_symbol_price(self):
        assert Portfolio().average_price("ZZZ") == 0.0


class TestTransaction:
    """Tests for Transaction parsing."""

    def test_transaction_fields(self, transactions_payload):
        tx = Transaction.model_validate(transactions_payload["transactions"][0])
        assert tx.type == "SELL"
        assert not tx.is_buy
        assert tx.stock_symbol == "AAPL"
        assert tx.total_amount == 600.0
        assert tx.transaction_date == datetime(2025, 1, 16, 14, 30)

    def test_type_is_upper_cased(self):
        assert Transaction.model_validate({"type": "buy"}).is_buy


class TestSignupForm:
    """Tests for SignupForm validation."""

    def _form(self, **overrides):
        data = {
            "username": "jdoe",
            "email": "jdoe@example.com",
            "password": "secret123",
            "firstName": "John",
            "lastName": "Doe",
        }
        data.update(overrides)
        return data

    def test_payload_uses_wire_names(self):
        payload = SignupForm.model_validate(self._form(username="  jdoe ")).to_payload()
        assert payload["username"] == "jdoe"
        assert payload["firstName"] == "John"
        assert "first_name" not in payload

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            SignupForm.model_validate(self._form(email="not-an-email"))

    def test_blank_field(self):
        with pytest.raises(ValidationError):
            SignupForm.model_validate(self._form(lastName="   "))
