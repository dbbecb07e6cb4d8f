"""
Tests for frontend/utils/navigation.py - navigator and session expiry.
"""
from unittest.mock import MagicMock

import pytest

from utils.api import APIResult
from utils.errors import SessionExpired
from utils.navigation import AppContext, Navigator, handle_session_expired
from utils.router import LOGIN_PATH
from utils.session import Session


class TestNavigator:
    """Tests for Navigator."""

    def test_initial_route_from_query_params(self, mock_session_state):
        nav = Navigator(mock_session_state, {"page": "portfolio"})
        assert nav.current == "/portfolio"

    def test_existing_route_wins_over_query_params(self, mock_session_state):
        mock_session_state["route"] = "/trading"
        nav = Navigator(mock_session_state, {"page": "portfolio"})
        assert nav.current == "/trading"

    def test_go_syncs_query_params(self, mock_session_state, mock_query_params):
        nav = Navigator(mock_session_state, mock_query_params)

        assert nav.go("/transactions")
        assert not nav.go("transactions")
        assert mock_query_params["page"] == "transactions"

    def test_notices_are_shown_once(self, mock_session_state):
        nav = Navigator(mock_session_state)
        nav.notify("success", "Purchase successful!")

        assert nav.pop_notices() == [("success", "Purchase successful!")]
        assert nav.pop_notices() == []


class TestHandleSessionExpired:
    """A 401 anywhere ends in exactly one redirect to login."""

    @pytest.fixture
    def session(self, login_payload, token_store):
        session = Session("http://backend.test/api", token_store)
        session.api = MagicMock()
        session.api.login.return_value = APIResult(status=200, data=login_payload)
        session.login("jdoe", "secret123")
        return session

    def test_clears_token_and_routes_to_login(self, session, mock_session_state):
        nav = Navigator(mock_session_state)
        nav.go("/portfolio")

        handle_session_expired(SessionExpired(APIResult(status=401)), session, nav)

        assert session.token() is None
        assert not session.is_authenticated
        assert nav.current == LOGIN_PATH
        notices = nav.pop_notices()
        assert len(notices) == 1
        assert notices[0][0] == "warning"
        assert "expired" in notices[0][1]


class TestAppContext:

    def test_api_is_the_session_client(self, token_store):
        session = Session("http://backend.test/api", token_store)
        ctx = AppContext(session=session, navigator=MagicMock(), lifecycle=MagicMock(), settings=MagicMock())
        assert ctx.api is session.api
