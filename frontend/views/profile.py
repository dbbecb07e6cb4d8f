import streamlit as st

from utils.design_html import role_badges_html
from utils.formatters import format_currency, format_date
from utils.router import LOGIN_PATH
from views.common import fetch, reset_screen_data


def render(ctx):
    st.title("My Profile")

    # Re-read /auth/me once per visit so balance and timestamps are current
    fetch("profile_identity", ctx.session.refresh_identity, "Loading profile...")
    identity = ctx.session.current_identity()

    info_col, summary_col = st.columns([3, 2])

    with info_col:
        st.subheader("Profile Information")
        col1, col2 = st.columns(2)
        with col1:
            st.text_input("First Name", value=identity.first_name, disabled=True)
        with col2:
            st.text_input("Last Name", value=identity.last_name, disabled=True)
        st.text_input("Username", value=identity.username, disabled=True)
        st.text_input("Email", value=identity.email, disabled=True)
        st.caption("Profile details cannot be edited from this screen.")

    with summary_col:
        st.subheader("Account Summary")
        st.write(f"**Balance:** {format_currency(identity.balance)}")
        st.write(f"**Account Type:** {'Administrator' if ctx.session.is_admin() else 'Trader'}")
        st.markdown(f"**Roles:** {role_badges_html(identity.roles)}", unsafe_allow_html=True)
        st.write(f"**Member Since:** {format_date(identity.created_at)}")
        st.write(f"**Last Updated:** {format_date(identity.updated_at)}")

        st.divider()
        if st.button("Log out", use_container_width=True):
            ctx.session.logout()
            reset_screen_data()
            ctx.navigator.notify("info", "You have been logged out.")
            ctx.navigator.go(LOGIN_PATH)
            st.rerun()
