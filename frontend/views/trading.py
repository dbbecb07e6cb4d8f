"""
Trading View - live stock board with a buy/sell order panel.

The board refreshes itself every ``STOCK_REFRESH_SECONDS`` through a
fragment; the refresh is a PollingTask owned by this screen, so it stops as
soon as another screen is mounted.
"""
from datetime import datetime

import streamlit as st

from config import STOCK_REFRESH_SECONDS
from utils.display_figure import _build_stocks_dataframe
from utils.errors import InputValidationError, RequestFailed, SessionExpired
from utils.formatters import format_change, format_currency, format_optional_price, get_pnl_color_class
from utils.helper import (
    _fetch_stock,
    _fetch_stocks,
    estimated_total,
    filter_stocks,
    replace_stock,
    sectors,
    submit_trade,
)
from utils.navigation import handle_session_expired
from views.common import invalidate, reset_screen_data

SCREEN = "trading"
STOCKS_KEY = "trading_stocks"


def _init_state():
    """Initialize session state variables."""
    if STOCKS_KEY not in st.session_state:
        st.session_state[STOCKS_KEY] = {"stocks": [], "error": None, "updated": None, "loaded": False}


def _refresh_stocks(api):
    """Replace the board wholesale; keep the previous board on failure."""
    board = st.session_state[STOCKS_KEY]
    try:
        stocks = _fetch_stocks(api)
    except RequestFailed as e:
        board["error"] = str(e)
        st.toast("Failed to load stocks", icon="⚠️")
        return
    board.update(stocks=stocks, error=None, updated=datetime.now(), loaded=True)


def _refresh_quote(api, symbol):
    board = st.session_state[STOCKS_KEY]
    try:
        quote = _fetch_stock(api, symbol)
    except RequestFailed as e:
        st.toast(str(e), icon="⚠️")
        return
    board["stocks"] = replace_stock(board["stocks"], quote)


def _stocks_task(ctx):
    return ctx.lifecycle.task(
        SCREEN, "stocks", STOCK_REFRESH_SECONDS, lambda: _refresh_stocks(ctx.api)
    )


@st.fragment(run_every=STOCK_REFRESH_SECONDS)
def _stock_board(ctx, sector, query):
    try:
        _stocks_task(ctx).poll()
    except SessionExpired as e:
        handle_session_expired(e, ctx.session, ctx.navigator)
        reset_screen_data()
        st.rerun(scope="app")

    board = st.session_state[STOCKS_KEY]
    if not board["loaded"]:
        if board["error"]:
            st.error(board["error"])
            if st.button("Retry", key="retry_stocks"):
                _stocks_task(ctx).run_now()
                st.rerun(scope="app")
        return

    stocks = filter_stocks(board["stocks"], sector=sector, query=query)
    st.subheader("Available Stocks - Live Market Data")
    if board["updated"]:
        st.caption(f"Last updated {board['updated'].strftime('%H:%M:%S')} · refreshes every {STOCK_REFRESH_SECONDS}s")
    if board["error"]:
        st.warning(f"Showing previous data. {board['error']}")

    if not stocks:
        st.info("No stocks available for trading.")
        return

    st.dataframe(
        _build_stocks_dataframe(stocks),
        use_container_width=True,
        hide_index=True,
        column_config={
            "Current Price": st.column_config.NumberColumn(format="$%.2f"),
            "Open": st.column_config.NumberColumn(format="$%.2f"),
            "High": st.column_config.NumberColumn(format="$%.2f"),
            "Low": st.column_config.NumberColumn(format="$%.2f"),
        },
    )


def _render_quote(stock):
    st.markdown(f"**{stock.company_name}**")
    if stock.sector or stock.industry:
        st.caption(" - ".join(x for x in (stock.sector, stock.industry) if x))
    st.markdown(
        f"Current Price: **{format_currency(stock.current_price)}** "
        f"<span class='{get_pnl_color_class(stock.change or 0)}'>{format_change(stock.change, stock.change_percent)}</span>",
        unsafe_allow_html=True,
    )
    st.caption(
        f"Previous Close {format_optional_price(stock.previous_close)} · "
        f"Open {format_optional_price(stock.open_price)} · "
        f"High {format_optional_price(stock.day_high)} · "
        f"Low {format_optional_price(stock.day_low)}"
    )


def _render_trade_form(ctx, stocks):
    """Order panel: pick a stock, a side and a quantity."""
    st.subheader("Place an Order")
    if not stocks:
        st.caption("Stocks will appear here once the market data is loaded.")
        return

    by_symbol = {s.symbol: s for s in stocks}
    symbol = st.selectbox(
        "Stock",
        options=list(by_symbol),
        format_func=lambda sym: f"{sym} - {by_symbol[sym].company_name}",
        key="order_symbol",
    )
    stock = by_symbol[symbol]
    _render_quote(stock)
    if st.button("↻ Refresh quote", key="order_refresh_quote"):
        _refresh_quote(ctx.api, symbol)
        st.rerun()

    side = st.radio(
        "Action",
        ["buy", "sell"],
        format_func=lambda x: "🟢 Buy" if x == "buy" else "🔴 Sell",
        horizontal=True,
        key="order_side",
    )
    quantity = st.number_input("Quantity", value=1, step=1, key="order_quantity")

    total = estimated_total(stock.current_price, quantity)
    st.markdown(f"**Total:** {format_currency(total) if total is not None else '-'}")
    st.caption(f"💰 {format_currency(ctx.session.current_identity().balance)} available")

    label = f"{'Buy' if side == 'buy' else 'Sell'} {int(quantity) if quantity == int(quantity) else quantity} shares"
    if st.button(label, type="primary", use_container_width=True, key="order_submit"):
        try:
            result = submit_trade(ctx.api, symbol, side, quantity)
        except InputValidationError as e:
            st.error(str(e))
            return

        if result.ok:
            ctx.navigator.notify("success", f"{'Purchase' if side == 'buy' else 'Sale'} successful!")
            _stocks_task(ctx).run_now()
            ctx.session.refresh_identity()
            invalidate("portfolio", "transactions", "dashboard_portfolio")
            st.rerun()
        else:
            st.error(result.message(f"{side.capitalize()} failed"))


def render(ctx):
    _init_state()

    header, badge, action = st.columns([4, 1, 1])
    with header:
        st.title("Stock Trading")
    with badge:
        st.markdown('<span class="badge bg-info">Real-time Data</span>', unsafe_allow_html=True)
    with action:
        if st.button("🔄 Refresh", use_container_width=True):
            _stocks_task(ctx).run_now()

    board = st.session_state[STOCKS_KEY]
    if not board["loaded"] and board["error"] is None:
        with st.spinner("Loading stocks..."):
            _stocks_task(ctx).poll()

    filter_col, search_col = st.columns([1, 2])
    with filter_col:
        sector = st.selectbox("Sector", ["All"] + sectors(board["stocks"]), key="trading_sector")
    with search_col:
        query = st.text_input("Search", placeholder="Symbol or company", key="trading_query")

    board_col, order_col = st.columns([3, 2])
    with board_col:
        _stock_board(ctx, None if sector == "All" else sector, query)
    with order_col:
        _render_trade_form(ctx, board["stocks"])
