# views/login.py

import streamlit as st

from utils.errors import InvalidCredentials, RequestFailed
from utils.router import DASHBOARD_PATH, SIGNUP_PATH


def render(ctx):
    st.title(f"📈 {ctx.settings.app_name}")

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.subheader("Login")
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            try:
                identity = ctx.session.login(username.strip(), password)
            except InvalidCredentials as e:
                st.error(str(e))
            except RequestFailed as e:
                st.error(f"Login failed: {e}")
            else:
                ctx.navigator.notify("success", f"Welcome back, {identity.first_name or identity.username}!")
                ctx.navigator.go(DASHBOARD_PATH)
                st.rerun()

        st.caption("Don't have an account?")
        if st.button("Sign up", use_container_width=True):
            ctx.navigator.go(SIGNUP_PATH)
            st.rerun()
