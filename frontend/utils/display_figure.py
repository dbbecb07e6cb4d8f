import pandas as pd
import plotly.graph_objects as go
from typing import Dict, List

from utils.formatters import format_change, format_datetime, format_role
from utils.models import StockQuote, Transaction, User
from utils.styles import COLORS


def _build_stocks_dataframe(stocks: List[StockQuote]) -> pd.DataFrame:
	"""Quotes as a table, one row per symbol."""
	rows = []
	for s in stocks:
		rows.append({
			"Symbol": s.symbol,
			"Company": s.company_name,
			"Current Price": s.current_price,
			"Change": format_change(s.change, s.change_percent),
			"Open": s.open_price,
			"High": s.day_high,
			"Low": s.day_low,
			"Sector": s.sector or "",
		})
	return pd.DataFrame(rows, columns=["Symbol", "Company", "Current Price", "Change", "Open", "High", "Low", "Sector"])


def _build_holdings_dataframe(rows: List[Dict]) -> pd.DataFrame:
	"""Holdings rows from ``helper.holding_rows``.

	P&L is left empty: the backend exposes average purchase prices only, so a
	market-price comparison is not available here.
	"""
	data = [{
		"Symbol": r["symbol"],
		"Quantity": r["quantity"],
		"Avg. Price": r["average_price"],
		"Current Value": r["value"],
		"Allocation": r["allocation"],
		"P&L": "n/a",
	} for r in rows]
	return pd.DataFrame(data, columns=["Symbol", "Quantity", "Avg. Price", "Current Value", "Allocation", "P&L"])


def _build_transactions_dataframe(transactions: List[Transaction]) -> pd.DataFrame:
	rows = []
	for t in transactions:
		rows.append({
			"Date": format_datetime(t.transaction_date),
			"Type": t.type,
			"Symbol": t.stock_symbol,
			"Company": t.stock_name,
			"Quantity": t.quantity,
			"Price per Share": t.price_per_share,
			"Total Amount": t.total_amount,
			"Status": t.status.capitalize(),
		})
	return pd.DataFrame(rows, columns=["Date", "Type", "Symbol", "Company", "Quantity", "Price per Share", "Total Amount", "Status"])


def _build_users_dataframe(users: List[User]) -> pd.DataFrame:
	rows = []
	for u in users:
		rows.append({
			"ID": u.id,
			"Username": u.username,
			"Name": u.full_name,
			"Email": u.email,
			"Balance": u.balance,
			"Roles": ", ".join(format_role(r) for r in u.roles),
			"Status": "Active" if u.enabled else "Disabled",
		})
	return pd.DataFrame(rows, columns=["ID", "Username", "Name", "Email", "Balance", "Roles", "Status"])


def _create_allocation_chart(rows: List[Dict]) -> go.Figure:
	"""Donut chart of holdings by value."""
	rows = [r for r in rows if r["value"] > 0]
	fig = go.Figure()
	if not rows:
		fig.add_annotation(
			text="No holdings to display",
			xref="paper", yref="paper",
			x=0.5, y=0.5, showarrow=False,
			font=dict(size=14, color=COLORS["text_secondary"]),
		)
	else:
		fig.add_trace(go.Pie(
			labels=[r["symbol"] for r in rows],
			values=[r["value"] for r in rows],
			hole=0.45,
			textinfo="label+percent",
		))
	fig.update_layout(
		paper_bgcolor=COLORS["bg_card"],
		plot_bgcolor=COLORS["bg_card"],
		height=320,
		margin=dict(l=20, r=20, t=20, b=20),
		showlegend=False,
	)
	return fig
