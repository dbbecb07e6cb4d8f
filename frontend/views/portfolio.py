import streamlit as st

from utils.design_html import render_stat_row
from utils.display_figure import _build_holdings_dataframe, _create_allocation_chart
from utils.formatters import format_currency
from utils.helper import _fetch_portfolio, holding_rows, portfolio_value
from utils.router import ROUTES
from views.common import fetch, invalidate

PORTFOLIO_KEY = "portfolio"


def render(ctx):
    header, action = st.columns([4, 1])
    with header:
        st.title("My Portfolio")
    with action:
        if st.button("🔄 Refresh", use_container_width=True):
            invalidate(PORTFOLIO_KEY)
            ctx.session.refresh_identity()
            st.rerun()

    portfolio = fetch(PORTFOLIO_KEY, lambda: _fetch_portfolio(ctx.api), "Loading portfolio...")
    if portfolio is None:
        return

    identity = ctx.session.current_identity()
    cash = portfolio.cash_balance if portfolio.cash_balance is not None else identity.balance
    invested = portfolio_value(portfolio.holdings, portfolio.average_prices)

    render_stat_row([
        ("Cash Balance", format_currency(cash), "success"),
        ("Portfolio Value", format_currency(invested), "primary"),
        ("Total Value", format_currency(cash + invested), "info"),
    ])

    st.divider()
    st.subheader("Stock Holdings")

    rows = holding_rows(portfolio)
    if not rows:
        st.info("No stock holdings yet. Start trading to build your portfolio!")
        if st.button("💹 Go to Trading"):
            ctx.navigator.go(ROUTES["/trading"].path)
            st.rerun()
        return

    table_col, chart_col = st.columns([3, 2])
    with table_col:
        st.dataframe(
            _build_holdings_dataframe(rows),
            use_container_width=True,
            hide_index=True,
            column_config={
                "Quantity": st.column_config.NumberColumn(format="%d"),
                "Avg. Price": st.column_config.NumberColumn(format="$%.2f"),
                "Current Value": st.column_config.NumberColumn(format="$%.2f"),
                "Allocation": st.column_config.NumberColumn(format="%.1f%%"),
            },
        )
        st.caption("Values use average purchase prices. Live P&L against market prices is not computed.")
    with chart_col:
        st.plotly_chart(_create_allocation_chart(rows), use_container_width=True)
