import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from utils.errors import SessionExpired

logger = logging.getLogger(__name__)


@dataclass
class APIResult:
    """Outcome of one backend call. ``status == 0`` means no HTTP response."""
    status: int
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def unauthorized(self) -> bool:
        return self.status == 401

    def message(self, default: str = "Request failed") -> str:
        """Best human-readable error for this result."""
        if isinstance(self.data, dict):
            for key in ("error", "message", "detail"):
                if self.data.get(key):
                    return str(self.data[key])
        return self.error or default


class APIClient:
    """API client for the TradeAgent REST backend."""

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], Optional[str]] = lambda: None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout

    def _headers(self) -> dict:
        """Get headers with auth token if available."""
        headers = {"Content-Type": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _parse_json(self, resp) -> Any:
        """Safely parse JSON, return None or raw text on failure."""
        if resp is None or not resp.text:
            return None
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text}

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> APIResult:
        """Send one request; raise SessionExpired on 401."""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            resp = requests.request(
                method,
                url,
                headers=self._headers(),
                json=data,
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError:
            logger.warning(f"{method} {endpoint}: cannot connect to backend")
            return APIResult(status=0, error="Cannot connect to backend")
        except requests.exceptions.Timeout:
            logger.warning(f"{method} {endpoint}: timed out")
            return APIResult(status=0, error="Backend did not answer in time")
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {endpoint}: {e}")
            return APIResult(status=0, error=str(e))

        result = APIResult(status=resp.status_code, data=self._parse_json(resp))
        if result.unauthorized:
            logger.info(f"{method} {endpoint}: 401, session expired")
            raise SessionExpired(result)
        if not result.ok:
            logger.warning(f"{method} {endpoint}: {result.status} {result.message()}")
        return result

    def _get(self, endpoint: str, params: Optional[dict] = None) -> APIResult:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, data: Optional[dict] = None) -> APIResult:
        return self._request("POST", endpoint, data=data)

    def _put(self, endpoint: str, data: dict) -> APIResult:
        return self._request("PUT", endpoint, data=data)

    def _delete(self, endpoint: str) -> APIResult:
        return self._request("DELETE", endpoint)

    # Auth endpoints
    def login(self, username: str, password: str) -> APIResult:
        """Exchange credentials for identity + token."""
        return self._post("/auth/login", {
            "username": username,
            "password": password,
        })

    def signup(self, payload: dict) -> APIResult:
        """Create a new account."""
        return self._post("/auth/signup", payload)

    def logout(self) -> APIResult:
        """Invalidate the server-side session."""
        return self._post("/auth/logout")

    def get_me(self) -> APIResult:
        """Resolve the current token to a user."""
        return self._get("/auth/me")

    # Stock endpoints
    def list_stocks(self) -> APIResult:
        """List current quotes."""
        return self._get("/stocks")

    def get_stock(self, symbol: str) -> APIResult:
        """Get one quote by symbol."""
        return self._get(f"/stocks/{symbol}")

    # Portfolio endpoints
    def get_portfolio(self) -> APIResult:
        """Holdings and average prices of the caller."""
        return self._get("/portfolio")

    # Trade endpoints
    def buy(self, symbol: str, quantity: int) -> APIResult:
        return self._post("/trades/buy", {"stockSymbol": symbol, "quantity": quantity})

    def sell(self, symbol: str, quantity: int) -> APIResult:
        return self._post("/trades/sell", {"stockSymbol": symbol, "quantity": quantity})

    def get_trade_history(self) -> APIResult:
        """Transactions of the caller."""
        return self._get("/trades/history")

    # Admin endpoints
    def list_users(self) -> APIResult:
        return self._get("/admin/users")

    def update_user_balance(self, user_id: str, balance: float) -> APIResult:
        return self._put(f"/admin/users/{user_id}/balance", {"balance": balance})

    def delete_user(self, user_id: str) -> APIResult:
        return self._delete(f"/admin/users/{user_id}")
