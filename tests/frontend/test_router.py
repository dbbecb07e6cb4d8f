"""
Tests for frontend/utils/router.py - access rules.
"""
from unittest.mock import MagicMock

import pytest

from utils.router import (
    ADMIN_PATH,
    DASHBOARD_PATH,
    LOGIN_PATH,
    SIGNUP_PATH,
    AuthState,
    auth_state,
    navigation_routes,
    normalize_path,
    resolve,
)

ANON = AuthState.UNAUTHENTICATED
USER = AuthState.AUTHENTICATED
ADMIN = AuthState.AUTHENTICATED_ADMIN


class TestNormalizePath:

    @pytest.mark.parametrize("raw,expected", [
        ("trading", "/trading"),
        ("/Trading/", "/trading"),
        ("", "/"),
        (None, "/"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected


class TestResolve:
    """Route table and redirects."""

    @pytest.mark.parametrize("path", ["/dashboard", "/trading", "/portfolio", "/transactions", "/profile", "/admin"])
    def test_protected_routes_redirect_anonymous_to_login(self, path):
        decision = resolve(path, ANON)
        assert decision.route is None
        assert decision.redirect == LOGIN_PATH

    @pytest.mark.parametrize("path", [LOGIN_PATH, SIGNUP_PATH])
    def test_public_routes_for_anonymous(self, path):
        assert resolve(path, ANON).route.path == path

    @pytest.mark.parametrize("state", [USER, ADMIN])
    def test_public_routes_redirect_authenticated_to_dashboard(self, state):
        assert resolve(LOGIN_PATH, state).redirect == DASHBOARD_PATH
        assert resolve(SIGNUP_PATH, state).redirect == DASHBOARD_PATH

    def test_admin_route_for_trader(self):
        """A non-admin never sees the admin screen."""
        decision = resolve(ADMIN_PATH, USER)
        assert decision.route is None
        assert decision.redirect == DASHBOARD_PATH

    def test_admin_route_for_admin(self):
        assert resolve(ADMIN_PATH, ADMIN).route.screen == "admin"

    def test_protected_route_for_trader(self):
        assert resolve("/trading", USER).route.screen == "trading"

    @pytest.mark.parametrize("state,home", [(ANON, LOGIN_PATH), (USER, DASHBOARD_PATH), (ADMIN, DASHBOARD_PATH)])
    def test_unknown_path_goes_home(self, state, home):
        assert resolve("/nowhere", state).redirect == home
        assert resolve("/", state).redirect == home


class TestAuthState:

    def _session(self, authenticated, admin):
        session = MagicMock()
        session.is_authenticated = authenticated
        session.is_admin.return_value = admin
        return session

    def test_states(self):
        assert auth_state(self._session(False, False)) == ANON
        assert auth_state(self._session(True, False)) == USER
        assert auth_state(self._session(True, True)) == ADMIN


class TestNavigationRoutes:

    def test_anonymous_has_no_menu(self):
        assert navigation_routes(ANON) == []

    def test_admin_entry_only_for_admins(self):
        assert ADMIN_PATH not in [r.path for r in navigation_routes(USER)]
        assert ADMIN_PATH in [r.path for r in navigation_routes(ADMIN)]

    def test_public_routes_never_listed(self):
        paths = [r.path for r in navigation_routes(ADMIN)]
        assert LOGIN_PATH not in paths
        assert SIGNUP_PATH not in paths
