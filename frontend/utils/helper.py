import logging
import math
from typing import Dict, Iterable, List, Optional

from utils.api import APIClient, APIResult
from utils.errors import InputValidationError, RequestFailed
from utils.models import Portfolio, StockQuote, Transaction, User

logger = logging.getLogger(__name__)

TRADE_SIDES = ("buy", "sell")


# ==================== Fetchers ====================

def _require(result: APIResult, what: str) -> APIResult:
	if not result.ok:
		raise RequestFailed(f"Failed to load {what}: {result.message()}", result.status)
	return result


def _fetch_stocks(api: APIClient) -> List[StockQuote]:
	"""Fetch current quotes, skipping malformed entries."""
	data = _require(api.list_stocks(), "stocks").data or []
	stocks = []
	for item in data if isinstance(data, list) else []:
		try:
			stocks.append(StockQuote.model_validate(item))
		except ValueError as e:
			logger.warning(f"Skipping malformed stock entry: {e}")
	return stocks


def _fetch_stock(api: APIClient, symbol: str) -> StockQuote:
	return StockQuote.model_validate(_require(api.get_stock(symbol), symbol).data or {})


def replace_stock(stocks: List[StockQuote], quote: StockQuote) -> List[StockQuote]:
	"""Return ``stocks`` with the entry for ``quote.symbol`` swapped in."""
	return [quote if s.symbol == quote.symbol else s for s in stocks]


def _fetch_portfolio(api: APIClient) -> Portfolio:
	data = _require(api.get_portfolio(), "portfolio").data
	return Portfolio.model_validate(data or {})


def _fetch_transactions(api: APIClient) -> List[Transaction]:
	"""Fetch the caller's transactions in backend order (newest first)."""
	data = _require(api.get_trade_history(), "transaction history").data
	if isinstance(data, dict):
		items = data.get("transactions") or []
	elif isinstance(data, list):
		items = data
	else:
		items = []
	return [Transaction.model_validate(t) for t in items if isinstance(t, dict)]


def _fetch_users(api: APIClient) -> List[User]:
	data = _require(api.list_users(), "users").data or []
	return [User.model_validate(u) for u in data if isinstance(u, dict)]


# ==================== Aggregates ====================

def portfolio_value(holdings: Dict[str, float], average_prices: Dict[str, float]) -> float:
	"""Sum of quantity x average price over all holdings."""
	return sum(qty * float(average_prices.get(symbol) or 0) for symbol, qty in holdings.items())


def holding_rows(portfolio: Portfolio) -> List[Dict]:
	"""One display row per held symbol, with its share of the total value."""
	total = portfolio_value(portfolio.holdings, portfolio.average_prices)
	rows = []
	for symbol, qty in sorted(portfolio.holdings.items()):
		avg = portfolio.average_price(symbol)
		value = qty * avg
		rows.append({
			"symbol": symbol,
			"quantity": qty,
			"average_price": avg,
			"value": value,
			"allocation": (value / total * 100) if total else 0.0,
		})
	return rows


def total_balance(users: Iterable[User]) -> float:
	return sum(u.balance or 0 for u in users)


def count_admins(users: Iterable[User]) -> int:
	return sum(1 for u in users if u.is_admin)


def transaction_summary(transactions: List[Transaction]) -> Dict:
	buys = sum(1 for t in transactions if t.is_buy)
	sells = sum(1 for t in transactions if t.type == "SELL")
	return {
		"total": len(transactions),
		"buys": buys,
		"sells": sells,
		"volume": sum(t.total_amount for t in transactions),
	}


def sectors(stocks: Iterable[StockQuote]) -> List[str]:
	return sorted({s.sector for s in stocks if s.sector})


def filter_stocks(stocks: List[StockQuote], sector: Optional[str] = None, query: str = "") -> List[StockQuote]:
	"""Filter by sector and a case-insensitive symbol/company search."""
	query = (query or "").strip().lower()
	result = []
	for s in stocks:
		if sector and s.sector != sector:
			continue
		if query and query not in s.symbol.lower() and query not in s.company_name.lower():
			continue
		result.append(s)
	return result


# ==================== Input validation ====================

def parse_quantity(raw) -> int:
	"""Validate a share quantity: a positive whole number."""
	try:
		value = float(str(raw).strip())
	except (TypeError, ValueError):
		raise InputValidationError("Please enter a valid quantity", field="quantity")
	if not math.isfinite(value) or value <= 0 or value != int(value):
		raise InputValidationError("Please enter a valid quantity", field="quantity")
	return int(value)


def parse_balance(raw) -> float:
	"""Validate an admin-entered balance: a finite, non-negative number."""
	try:
		value = float(str(raw).strip().replace(",", ""))
	except (TypeError, ValueError):
		raise InputValidationError("Please enter a valid balance", field="balance")
	if not math.isfinite(value) or value < 0:
		raise InputValidationError("Please enter a valid balance", field="balance")
	return round(value, 2)


# ==================== Mutations ====================

def submit_trade(api: APIClient, symbol: str, side: str, raw_quantity) -> APIResult:
	"""Validate and send a buy/sell order. Nothing is sent on invalid input."""
	side = (side or "").lower()
	if side not in TRADE_SIDES:
		raise InputValidationError(f"Unknown trade type: {side}", field="side")
	if not symbol:
		raise InputValidationError("Please select a stock", field="symbol")
	quantity = parse_quantity(raw_quantity)
	logger.info(f"Submitting {side} of {quantity} {symbol}")
	if side == "buy":
		return api.buy(symbol, quantity)
	return api.sell(symbol, quantity)


def estimated_total(price: float, raw_quantity) -> Optional[float]:
	try:
		return price * parse_quantity(raw_quantity)
	except InputValidationError:
		return None
