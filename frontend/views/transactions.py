"""
Transactions page: complete trade history of the current user.

Features:
- Summary metrics (count, buys, sells, volume)
- Table in backend order
- CSV export
"""

import streamlit as st

from utils.display_figure import _build_transactions_dataframe
from utils.formatters import format_currency
from utils.helper import _fetch_transactions, transaction_summary
from utils.router import ROUTES
from views.common import fetch, invalidate

TRANSACTIONS_KEY = "transactions"


def render(ctx):
	"""Render the transactions page."""
	header, action = st.columns([4, 1])
	with header:
		st.title("🕑 Transaction History")
	with action:
		if st.button("🔄 Refresh", use_container_width=True):
			invalidate(TRANSACTIONS_KEY)
			st.rerun()

	transactions = fetch(TRANSACTIONS_KEY, lambda: _fetch_transactions(ctx.api), "Loading transactions...")
	if transactions is None:
		return

	if not transactions:
		st.info("No transactions yet. Your trades will appear here.")
		if st.button("💹 Start Trading"):
			ctx.navigator.go(ROUTES["/trading"].path)
			st.rerun()
		return

	summary = transaction_summary(transactions)
	col1, col2, col3, col4 = st.columns(4)
	with col1:
		st.metric("Total Transactions", summary["total"])
	with col2:
		st.metric("Buys", summary["buys"])
	with col3:
		st.metric("Sells", summary["sells"])
	with col4:
		st.metric("Total Volume", format_currency(summary["volume"]))

	st.divider()
	st.subheader("Details")

	df = _build_transactions_dataframe(transactions)
	st.dataframe(
		df,
		use_container_width=True,
		hide_index=True,
		column_config={
			"Date": st.column_config.TextColumn(width="medium"),
			"Type": st.column_config.TextColumn(width="small"),
			"Quantity": st.column_config.NumberColumn(format="%d", width="small"),
			"Price per Share": st.column_config.NumberColumn(format="$%.2f", width="small"),
			"Total Amount": st.column_config.NumberColumn(format="$%.2f", width="small"),
		},
	)

	st.download_button(
		label="📥 Export CSV",
		data=df.to_csv(index=False).encode("utf-8"),
		file_name="transactions.csv",
		mime="text/csv",
	)
