import streamlit as st

from utils.design_html import render_stat_row
from utils.formatters import format_currency
from utils.helper import _fetch_portfolio, portfolio_value
from views.common import fetch


def render(ctx):
    identity = ctx.session.current_identity()
    st.title(f"Welcome back, {identity.first_name or identity.username}!")

    portfolio = _load_portfolio(ctx)
    balance = identity.balance
    invested = portfolio_value(portfolio.holdings, portfolio.average_prices) if portfolio else None

    render_stat_row([
        ("Account Balance", format_currency(balance), "success"),
        ("Portfolio Value", format_currency(invested), "primary"),
        ("Total Value", format_currency(balance + (invested or 0)), "info"),
    ])

    st.divider()

    st.subheader("Quick Actions")
    st.write(f"Welcome to {ctx.settings.app_name}! Use the navigation menu to:")
    actions = [
        ("📁 View and manage your portfolio", "/portfolio"),
        ("💹 Buy and sell stocks", "/trading"),
        ("🕑 Review transaction history", "/transactions"),
        ("👤 View your profile", "/profile"),
    ]
    for label, path in actions:
        if st.button(label, key=f"quick_{path}"):
            ctx.navigator.go(path)
            st.rerun()


def _load_portfolio(ctx):
    return fetch("dashboard_portfolio", lambda: _fetch_portfolio(ctx.api), "Loading portfolio...")
