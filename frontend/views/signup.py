import streamlit as st

from utils.errors import DuplicateUser, InputValidationError, RequestFailed
from utils.router import LOGIN_PATH


def render(ctx):
    st.title(f"📈 {ctx.settings.app_name}")

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.subheader("Create your account")
        with st.form("signup_form"):
            col1, col2 = st.columns(2)
            with col1:
                first_name = st.text_input("First Name")
            with col2:
                last_name = st.text_input("Last Name")
            username = st.text_input("Username")
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            confirm_password = st.text_input("Confirm Password", type="password")
            submitted = st.form_submit_button("Sign up", use_container_width=True)

        if submitted:
            try:
                ctx.session.signup({
                    "username": username,
                    "email": email,
                    "password": password,
                    "confirmPassword": confirm_password,
                    "firstName": first_name,
                    "lastName": last_name,
                })
            except DuplicateUser as e:
                st.error(f"Registration failed: {e}")
            except InputValidationError as e:
                st.warning(str(e))
            except RequestFailed as e:
                st.error(f"Registration failed: {e}")
            else:
                ctx.navigator.notify("success", "Registration successful! Please login.")
                ctx.navigator.go(LOGIN_PATH)
                st.rerun()

        st.caption("Already have an account?")
        if st.button("Back to login", use_container_width=True):
            ctx.navigator.go(LOGIN_PATH)
            st.rerun()
