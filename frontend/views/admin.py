"""
Admin panel: user overview, balance updates and account deletion.
"""
import logging

import streamlit as st

from utils.design_html import render_stat_row
from utils.display_figure import _build_users_dataframe
from utils.errors import InputValidationError
from utils.formatters import format_currency
from utils.helper import _fetch_users, count_admins, parse_balance, total_balance
from views.common import fetch, invalidate

logger = logging.getLogger(__name__)

USERS_KEY = "admin_users"


def _user_label(user) -> str:
    return f"{user.username} ({user.email})" if user.email else user.username


def _render_balance_form(ctx, users):
    st.subheader("Update User Balance")
    by_id = {u.id: u for u in users}
    with st.form("update_balance_form"):
        user_id = st.selectbox(
            "User",
            options=list(by_id),
            format_func=lambda uid: f"{_user_label(by_id[uid])} - {format_currency(by_id[uid].balance)}",
        )
        raw_balance = st.text_input("New Balance", placeholder="10000.00")
        submitted = st.form_submit_button("Update Balance", use_container_width=True)

    if not submitted:
        return
    try:
        balance = parse_balance(raw_balance)
    except InputValidationError as e:
        st.error(str(e))
        return

    result = ctx.api.update_user_balance(user_id, balance)
    if result.ok:
        logger.info(f"Balance of user {user_id} set to {balance}")
        ctx.navigator.notify("success", f"Balance of {by_id[user_id].username} updated to {format_currency(balance)}")
        invalidate(USERS_KEY)
        if ctx.session.current_identity().id == user_id:
            ctx.session.refresh_identity()
        st.rerun()
    else:
        st.error(result.message("Failed to update user balance"))


def _render_delete_form(ctx, users):
    st.subheader("Delete User")
    me = ctx.session.current_identity()
    candidates = {u.id: u for u in users if u.id != me.id}
    if not candidates:
        st.caption("No other users to delete.")
        return

    user_id = st.selectbox(
        "User",
        options=list(candidates),
        format_func=lambda uid: _user_label(candidates[uid]),
        key="delete_user_id",
    )
    confirmed = st.checkbox(
        f"I understand that deleting {candidates[user_id].username} cannot be undone",
        key="delete_user_confirm",
    )
    if st.button("🗑️ Delete User", type="primary", disabled=not confirmed, use_container_width=True):
        result = ctx.api.delete_user(user_id)
        if result.ok:
            logger.info(f"User {user_id} deleted")
            ctx.navigator.notify("success", f"User {candidates[user_id].username} deleted")
            invalidate(USERS_KEY)
            st.session_state.pop("delete_user_confirm", None)
            st.rerun()
        else:
            st.error(result.message("Failed to delete user"))


def render(ctx):
    header, action = st.columns([4, 1])
    with header:
        st.title("🛡️ Admin Panel")
    with action:
        if st.button("🔄 Refresh", use_container_width=True):
            invalidate(USERS_KEY)
            st.rerun()

    users = fetch(USERS_KEY, lambda: _fetch_users(ctx.api), "Loading users...")
    if users is None:
        return

    admins = count_admins(users)
    render_stat_row([
        ("Total Users", str(len(users)), "primary"),
        ("Total Balance", format_currency(total_balance(users)), "success"),
        ("Admin Users", str(admins), "warning"),
        ("Trader Users", str(len(users) - admins), "info"),
    ], centered=True)

    st.divider()
    st.subheader("All Users")
    if not users:
        st.info("No users found.")
        return
    st.dataframe(
        _build_users_dataframe(users),
        use_container_width=True,
        hide_index=True,
        column_config={"Balance": st.column_config.NumberColumn(format="$%.2f")},
    )

    st.divider()
    balance_col, delete_col = st.columns(2)
    with balance_col:
        _render_balance_form(ctx, users)
    with delete_col:
        _render_delete_form(ctx, users)
