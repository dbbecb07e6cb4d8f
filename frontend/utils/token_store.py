"""
Persistence of the bearer token between page loads.

The browser keeps the token in a cookie. Streamlit exposes the cookies of the
initial HTTP request read-only through ``st.context.cookies``; writes go
through a zero-height HTML component that sets ``document.cookie`` on the
parent page. The value read at startup is mirrored in session state so that
later writes are visible within the same browser session.
"""
import json
import logging
from typing import Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)


class TokenStore:
    """Interface: a single durable token slot."""

    def get(self) -> Optional[str]:
        raise NotImplementedError

    def set(self, token: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        """Push pending changes to durable storage, if any."""


_UNSET = object()


class BrowserTokenStore(TokenStore):
    """Token kept in a browser cookie, mirrored in ``st.session_state``."""

    def __init__(self, cookie_name: str, max_age_days: int = 7):
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_days * 24 * 3600
        self._state_key = f"_token_{cookie_name}"
        self._pending_key = f"_token_{cookie_name}_pending"

    def _state(self):
        import streamlit as st
        return st.session_state

    def _read_cookie(self) -> Optional[str]:
        import streamlit as st
        try:
            raw = st.context.cookies.get(self.cookie_name)
        except Exception as e:
            logger.debug(f"Cookies unavailable: {e}")
            return None
        return unquote(raw) if raw else None

    def get(self) -> Optional[str]:
        state = self._state()
        cached = state.get(self._state_key, _UNSET)
        if cached is _UNSET:
            cached = self._read_cookie()
            state[self._state_key] = cached
        return cached

    def set(self, token: str) -> None:
        state = self._state()
        state[self._state_key] = token
        state[self._pending_key] = (token, self.max_age_seconds)

    def clear(self) -> None:
        state = self._state()
        state[self._state_key] = None
        state[self._pending_key] = ("", 0)

    def flush(self) -> None:
        """Write the pending cookie change. Call at the end of a completed run."""
        pending = self._state().pop(self._pending_key, None)
        if pending is None:
            return
        import streamlit.components.v1 as components
        value, max_age = pending
        components.html(cookie_script(self.cookie_name, value, max_age), height=0)


def cookie_script(name: str, value: str, max_age: int) -> str:
    """Return the <script> that writes one cookie on the parent document."""
    cookie = f"{name}=' + encodeURIComponent({json.dumps(value)}) + '; path=/; max-age={max_age}; SameSite=Strict"
    return f"<script>window.parent.document.cookie = '{cookie}';</script>"
