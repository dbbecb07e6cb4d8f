"""
Per-screen data loading: fetch once per mount, error panel with Retry.
"""
from typing import Any, Callable, Optional

import streamlit as st

from utils.design_html import render_error_panel
from utils.errors import RequestFailed

DATA_KEY = "_screen_data"


def reset_screen_data() -> None:
    """Forget everything fetched by the previous screen."""
    st.session_state.pop(DATA_KEY, None)


def invalidate(*keys: str) -> None:
    cache = st.session_state.get(DATA_KEY) or {}
    for key in keys:
        cache.pop(key, None)


def fetch(key: str, loader: Callable[[], Any], spinner: str = "Loading...") -> Optional[Any]:
    """Return the cached value for ``key``, loading it on first use.

    On failure an error panel with a Retry button is rendered and None is
    returned. SessionExpired is not caught here.
    """
    cache = st.session_state.setdefault(DATA_KEY, {})
    if key not in cache:
        with st.spinner(spinner):
            try:
                cache[key] = (loader(), None)
            except RequestFailed as e:
                cache[key] = (None, str(e))

    value, error = cache[key]
    if error:
        if render_error_panel(error, retry_key=f"retry_{key}"):
            invalidate(key)
            st.rerun()
        return None
    return value


def show_notices(navigator) -> None:
    """Render notices queued before the last rerun."""
    for kind, message in navigator.pop_notices():
        if kind == "success":
            st.toast(message, icon="✅")
        elif kind == "error":
            st.error(message)
        elif kind == "warning":
            st.warning(message)
        else:
            st.info(message)
