"""
Frontend test fixtures and mocks.

Mocks Streamlit session_state and the API client for isolated testing.
"""
import pytest
from unittest.mock import MagicMock, patch

from utils.api import APIResult
from utils.token_store import TokenStore


class MockSessionState(dict):
    """Mock st.session_state that behaves like both dict and attribute access."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"'SessionState' has no attribute '{name}'")

    def __setattr__(self, name, value):
        self[name] = value


class InMemoryTokenStore(TokenStore):
    """Token slot kept in a plain attribute."""

    def __init__(self, token=None):
        self.token = token

    def get(self):
        return self.token

    def set(self, token):
        self.token = token

    def clear(self):
        self.token = None


@pytest.fixture
def token_store():
    """Provide an empty in-memory token store."""
    return InMemoryTokenStore()


@pytest.fixture
def mock_session_state():
    """Provide a mock session state for testing."""
    return MockSessionState()


@pytest.fixture
def mock_query_params():
    """Provide a mock st.query_params."""
    return {}


@pytest.fixture
def mock_streamlit(mock_session_state):
    """Patch streamlit module with mocks."""
    with patch.dict("sys.modules", {"streamlit": MagicMock()}):
        import sys
        st_mock = sys.modules["streamlit"]
        st_mock.session_state = mock_session_state
        yield st_mock


@pytest.fixture
def mock_api():
    """APIClient stand-in; every call succeeds with an empty body by default."""
    api = MagicMock()
    for name in ("buy", "sell", "update_user_balance", "delete_user"):
        getattr(api, name).return_value = APIResult(status=200, data={})
    return api


@pytest.fixture
def stocks_payload():
    """/stocks body."""
    return [
        {
            "symbol": "AAPL",
            "companyName": "Apple Inc.",
            "sector": "Technology",
            "industry": "Consumer Electronics",
            "currentPrice": 105.0,
            "previousClose": 100.0,
            "openPrice": 101.0,
            "dayHigh": 106.0,
            "dayLow": 99.5,
            "lastUpdated": "2025-01-15T15:59:00",
        },
        {
            "symbol": "JPM",
            "companyName": "JPMorgan Chase & Co.",
            "sector": "Financial Services",
            "currentPrice": 200.0,
            "previousClose": None,
        },
        {
            "symbol": "MSFT",
            "companyName": "Microsoft Corporation",
            "sector": "Technology",
            "currentPrice": 400.0,
            "previousClose": 410.0,
        },
    ]


@pytest.fixture
def portfolio_payload():
    """/portfolio body in its wrapped form."""
    return {
        "portfolio": {
            "holdings": {"AAPL": 10, "MSFT": 1},
            "averagePrices": {"AAPL": 110.0, "MSFT": 400.0},
        },
        "portfolioValue": 1500.0,
        "cashBalance": 8500.0,
        "totalValue": 10000.0,
    }


@pytest.fixture
def transactions_payload():
    """/trades/history body, newest first."""
    return {
        "transactions": [
            {
                "id": 2,
                "type": "SELL",
                "stockSymbol": "AAPL",
                "stockName": "Apple Inc.",
                "quantity": 5,
                "pricePerShare": 120.0,
                "totalAmount": 600.0,
                "transactionDate": [2025, 1, 16, 14, 30, 0],
                "status": "COMPLETED",
            },
            {
                "id": 1,
                "type": "BUY",
                "stockSymbol": "AAPL",
                "stockName": "Apple Inc.",
                "quantity": 15,
                "pricePerShare": 110.0,
                "totalAmount": 1650.0,
                "transactionDate": "2025-01-15T10:00:00",
            },
        ]
    }


@pytest.fixture
def users_payload(user_payload, admin_payload):
    """/admin/users body."""
    return [
        admin_payload,
        user_payload,
        {**user_payload, "id": 3, "username": "msmith", "email": "m@example.com", "balance": 500.0},
    ]
