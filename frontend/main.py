import logging

import streamlit as st
from streamlit_option_menu import option_menu

from config import configure_logging, get_settings
from utils.design_html import render_loading, role_badges_html
from utils.errors import SessionExpired
from utils.navigation import AppContext, Navigator, handle_session_expired
from utils.polling import ScreenLifecycle
from utils.router import LOGIN_PATH, auth_state, navigation_routes, resolve
from utils.session import Session
from utils.styles import inject_styles
from utils.token_store import BrowserTokenStore
from views import admin, dashboard, login, portfolio, profile, signup, trading, transactions
from views.common import reset_screen_data, show_notices

logger = logging.getLogger(__name__)

SCREENS = {
    "login": login.render,
    "signup": signup.render,
    "dashboard": dashboard.render,
    "trading": trading.render,
    "portfolio": portfolio.render,
    "transactions": transactions.render,
    "profile": profile.render,
    "admin": admin.render,
}


def init_context() -> AppContext:
    """Build the per-browser objects once and reuse them on every rerun."""
    settings = get_settings()
    if "session" not in st.session_state:
        store = BrowserTokenStore(settings.token_cookie_name, settings.token_cookie_max_age_days)
        st.session_state["session"] = Session(settings.api_url, store, timeout=settings.request_timeout_seconds)
    if "lifecycle" not in st.session_state:
        st.session_state["lifecycle"] = ScreenLifecycle()
    return AppContext(
        session=st.session_state["session"],
        navigator=Navigator(st.session_state, st.query_params),
        lifecycle=st.session_state["lifecycle"],
        settings=settings,
    )


def render_sidebar(ctx: AppContext, state):
    routes = navigation_routes(state)
    if not routes:
        return
    identity = ctx.session.current_identity()

    with st.sidebar:
        st.markdown(f"### 📈 {ctx.settings.app_name}")
        st.markdown(f"**{identity.display_name}**")
        st.markdown(role_badges_html(identity.roles), unsafe_allow_html=True)

        paths = [r.path for r in routes]
        current = ctx.navigator.current
        default_index = paths.index(current) if current in paths else 0

        # Programmatic navigation: recreate the menu so it shows the new route
        if st.session_state.get("nav_menu_route") != current:
            st.session_state["nav_menu_route"] = current
            st.session_state["nav_key"] = st.session_state.get("nav_key", 0) + 1

        selected = option_menu(
            menu_title="Navigation",
            options=[r.label for r in routes],
            icons=[r.icon for r in routes],
            default_index=default_index,
            key=f"main_nav_{st.session_state.get('nav_key', 0)}",
        )

        # Only navigate if the user clicked a DIFFERENT menu item
        target = next(r.path for r in routes if r.label == selected)
        if target != current:
            ctx.navigator.go(target)
            st.session_state["nav_menu_route"] = target
            st.rerun()

        st.divider()
        if st.button("Logout", use_container_width=True):
            ctx.session.logout()
            reset_screen_data()
            ctx.navigator.notify("info", "You have been logged out.")
            ctx.navigator.go(LOGIN_PATH)
            st.rerun()


def run(ctx: AppContext):
    if not ctx.session.resolved:
        placeholder = st.empty()
        with placeholder.container():
            render_loading("Loading session...")
        ctx.session.initialize()
        placeholder.empty()

    state = auth_state(ctx.session)
    decision = resolve(ctx.navigator.current, state)
    if decision.redirect:
        ctx.navigator.go(decision.redirect)
        st.rerun()

    route = decision.route
    if ctx.lifecycle.mount(route.screen):
        logger.debug(f"Mounted screen {route.screen}")
        reset_screen_data()

    render_sidebar(ctx, state)
    show_notices(ctx.navigator)
    SCREENS[route.screen](ctx)


def main():
    settings = get_settings()
    st.set_page_config(page_title=settings.app_name, page_icon="📈", layout="wide")
    configure_logging(settings.log_level)
    inject_styles()

    ctx = init_context()
    try:
        run(ctx)
    except SessionExpired as e:
        handle_session_expired(e, ctx.session, ctx.navigator)
        reset_screen_data()
        st.rerun()
    ctx.session.token_store.flush()


if __name__ == "__main__":
    main()
