# neurotracker/screens/onboarding.py
# -*- coding: utf-8 -*-
import streamlit as st

from neurotracker.screens.common import Context, rerun, show_error, simulate_latency
from neurotracker.services.errors import AuthError, DisclaimerNotAccepted
from neurotracker.services.verification import normalize_username


def render_otp(ctx: Context) -> None:
    email = ctx.nav.state.email
    # un seul envoi par passage sur l'écran
    if st.session_state.get("otp_sent_to") != email:
        try:
            masked = ctx.verification.send_code(email)
        except AuthError as e:
            # pas d'envoi mémorisé : "Resend" ou le prochain rerun retente
            show_error(e)
        else:
            st.session_state["otp_sent_to"] = email
            st.toast(f"Verification code has been sent to {masked}", icon="📧")

    st.title("Verify your account")
    st.caption("Enter the code sent to your email. The code will expire in 10 minutes.")
    if ctx.verification.is_offline:
        st.caption("Offline mode: any 6-digit code is accepted.")
    with st.form("otp_form"):
        code = st.text_input("Verification code", placeholder="Enter 6-digit code", max_chars=6)
        submitted = st.form_submit_button("Verify Account", type="primary")
    if submitted:
        try:
            simulate_latency("Verifying...")
            ctx.verification.verify_code(email, code)
        except AuthError as e:
            show_error(e)
        else:
            st.session_state.pop("otp_sent_to", None)
            ctx.nav.otp_verified()
            rerun()

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Back"):
            st.session_state.pop("otp_sent_to", None)
            ctx.nav.back_to_auth()
            rerun()
    with col2:
        if st.button("Didn't receive code? Resend"):
            st.session_state.pop("otp_sent_to", None)
            rerun()


def render_username(ctx: Context) -> None:
    st.title("Choose your username")
    st.caption("Choose a unique username for your account")

    raw = st.text_input("Username", placeholder="johndoe", max_chars=20)
    username = normalize_username(raw)
    if raw and username != raw:
        st.caption(f"Will be saved as **{username}**")
    st.caption("Username must be 3-20 characters long and can only contain letters, numbers, and underscores.")

    if st.button("Complete Setup", type="primary", disabled=len(username) < 3):
        try:
            simulate_latency("Setting up...")
            chosen = ctx.verification.check_username(username)
        except AuthError as e:
            show_error(e)
        else:
            st.success("This username is available!")
            ctx.nav.username_chosen(chosen)
            rerun()

    if st.button("Back"):
        ctx.nav.back_to_auth()
        rerun()


def render_disclaimer(ctx: Context) -> None:
    name = ctx.nav.state.display_name
    st.title(f"Welcome, {name}!" if name else "Before You Begin")
    st.caption("Please read the following disclaimer carefully")

    st.warning(
        "**Important Disclaimer**\n\n"
        "This tool is an informational screener, not a diagnostic test. The results are not a "
        "medical diagnosis and do not confirm or rule out the presence of ADHD. These results are "
        "for personal reflection and informational purposes only."
    )
    st.info(
        "Your responses are for your personal use only. This assessment does not collect, store, "
        "or share your answers with any third parties."
    )
    accepted = st.checkbox(
        "I understand that this is a screening tool and not a medical diagnosis. "
        "I agree to proceed with the assessment for informational purposes only."
    )
    if st.button("Continue to Assessment", type="primary", disabled=not accepted):
        try:
            ctx.nav.disclaimer_accepted(accepted)
        except DisclaimerNotAccepted as e:
            show_error(e)
        else:
            rerun()
