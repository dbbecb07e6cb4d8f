import html

import streamlit as st

from utils.formatters import format_role
from utils.models import ADMIN_ROLE, normalize_role


def stat_card_html(title: str, value: str, tone: str = "primary", centered: bool = False) -> str:
    css = "stat-card center" if centered else "stat-card"
    return f"""
    <div class="{css}">
        <div class="stat-card-title">{html.escape(title)}</div>
        <div class="stat-card-value text-{tone}">{html.escape(value)}</div>
    </div>
    """


def render_stat_card(title: str, value: str, tone: str = "primary", centered: bool = False):
    st.markdown(stat_card_html(title, value, tone, centered), unsafe_allow_html=True)


def render_stat_row(cards: list, centered: bool = False):
    """Render (title, value, tone) tuples as one row of equal-width cards."""
    columns = st.columns(len(cards))
    for col, (title, value, tone) in zip(columns, cards):
        with col:
            render_stat_card(title, value, tone, centered)


def badge_html(text: str, tone: str = "primary") -> str:
    return f'<span class="badge bg-{tone}">{html.escape(text)}</span>'


def role_badges_html(roles) -> str:
    return "".join(
        badge_html(format_role(r), "warning" if normalize_role(r) == ADMIN_ROLE else "primary")
        for r in roles
    )


def render_loading(message: str = "Loading..."):
    st.markdown(
        f"<div style='text-align:center; padding: 80px 0;' class='text-muted'>{html.escape(message)}</div>",
        unsafe_allow_html=True,
    )


def render_error_panel(message: str, retry_key: str) -> bool:
    """Error panel in place of content. Returns True when Retry was clicked."""
    st.error(message)
    return st.button("Retry", key=retry_key)
