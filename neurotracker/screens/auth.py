# neurotracker/screens/auth.py
# -*- coding: utf-8 -*-
import streamlit as st

from neurotracker.screens.common import Context, rerun, show_error, simulate_latency
from neurotracker.services.errors import AuthError


def render_auth(ctx: Context) -> None:
    st.title("Welcome")
    st.caption("Sign in to your account or create a new one")

    tab_login, tab_signup = st.tabs(["Login", "Sign Up"])

    with tab_login:
        with st.form("login_form"):
            email = st.text_input("Email", placeholder="name@example.com")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign In", type="primary")
        if submitted:
            try:
                result = ctx.auth.login(email.strip(), password)
            except AuthError as e:
                show_error(e)
            else:
                simulate_latency("Signing in...")
                st.toast("Login successful!", icon="✅")
                ctx.nav.logged_in(result)
                rerun()
        if st.button("Forgot password?"):
            ctx.nav.forgot_password()
            rerun()

    with tab_signup:
        with st.form("signup_form"):
            name = st.text_input("Full Name", placeholder="John Doe")
            email = st.text_input("Email", placeholder="name@example.com", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            confirm = st.text_input("Confirm Password", type="password")
            submitted = st.form_submit_button("Create Account", type="primary")
        if submitted:
            try:
                simulate_latency("Creating account...")
                ctx.auth.signup(email.strip(), password, confirm, name.strip())
            except AuthError as e:
                show_error(e)
            else:
                st.toast("Account created successfully!", icon="✅")
                ctx.nav.signed_up(email.strip())
                rerun()

    if st.button("🏠 Home"):
        ctx.nav.back_to_landing()
        rerun()


def render_forgot_password(ctx: Context) -> None:
    st.title("Reset your password")
    reset_email = st.session_state.get("reset_email")

    if not reset_email:
        with st.form("reset_email_form"):
            email = st.text_input("Email", placeholder="name@example.com")
            submitted = st.form_submit_button("Continue", type="primary")
        if submitted:
            try:
                found = ctx.auth.start_password_reset(email.strip())
            except AuthError as e:
                show_error(e)
            else:
                simulate_latency("Verifying...")
                st.session_state["reset_email"] = found
                st.toast("Verification successful! You can now reset your password.", icon="✅")
                rerun()
    else:
        st.caption(f"Resetting password for **{reset_email}**")
        with st.form("reset_password_form"):
            new_password = st.text_input("New Password", type="password")
            confirm = st.text_input("Confirm Password", type="password")
            submitted = st.form_submit_button("Reset Password", type="primary")
        if submitted:
            try:
                ctx.auth.complete_password_reset(reset_email, new_password, confirm)
            except AuthError as e:
                show_error(e)
            else:
                simulate_latency("Updating password...")
                st.session_state.pop("reset_email", None)
                st.toast("Password reset successfully! Please log in.", icon="✅")
                ctx.nav.back_to_auth()
                rerun()

    if st.button("← Back to Login"):
        st.session_state.pop("reset_email", None)
        ctx.nav.back_to_auth()
        rerun()
