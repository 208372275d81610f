# neurotracker/screens/home.py
# -*- coding: utf-8 -*-
import streamlit as st

from neurotracker.screens.common import Context, back_home_button, rerun, show_error, user_header
from neurotracker.services.errors import AuthError

TOOLS = [
    ("Meeting Navigator", "🧭", "Navigate and manage your meetings"),
    ("Attention Tracker", "👁️", "Track your focus and attention patterns"),
    ("Meeting Summaries", "📝", "Get AI-powered meeting summaries"),
    ("Calendar", "📅", "Manage your schedule effectively"),
    ("Progress Tracker", "📈", "Monitor your progress over time"),
    ("AI Models", "🖥️", "Check system compatibility and AI models"),
]


def render_user_home(ctx: Context) -> None:
    user_header(ctx)
    st.title(f"Welcome back, {ctx.nav.state.display_name}!")
    st.caption("Pick a tool to get started")

    cols = st.columns(3)
    for i, (name, icon, description) in enumerate(TOOLS):
        with cols[i % 3]:
            with st.container(border=True):
                st.markdown(f"#### {icon} {name}")
                st.caption(description)
                if st.button("Open", key=f"tool_{i}", width="stretch"):
                    before = ctx.nav.screen
                    if ctx.nav.open_tool(name) == before:
                        st.toast(f"{name} is coming soon", icon="🚧")
                    else:
                        rerun()

    if st.button("View Dashboard", type="primary"):
        ctx.nav.view_dashboard()
        rerun()


def render_profile(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "profile_home")
    state = ctx.nav.state
    st.title("👤 Profile")

    st.subheader("Personal information")
    full_name = st.text_input("Full Name", value=ctx.profile.full_name(state.email))
    if st.button("Save Personal Info"):
        try:
            ctx.profile.update_full_name(state.email, full_name)
        except AuthError as e:
            show_error(e)
        else:
            st.toast("Personal information updated successfully", icon="✅")

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Username")
        new_username = st.text_input("Username", value=state.display_name)
        if st.button("Change Username"):
            try:
                name = ctx.profile.change_username(new_username)
            except AuthError as e:
                show_error(e)
            else:
                ctx.nav.profile_updated(display_name=name)
                st.toast("Username updated successfully", icon="✅")
                rerun()
    with col2:
        st.subheader("Email")
        new_email = st.text_input("Email", value=state.email)
        if st.button("Change Email"):
            try:
                email = ctx.profile.change_email(new_email)
            except AuthError as e:
                show_error(e)
            else:
                ctx.nav.profile_updated(email=email)
                st.toast("Email updated successfully", icon="✅")
                rerun()

    st.subheader("Password")
    with st.form("password_form", clear_on_submit=True):
        current = st.text_input("Current Password", type="password")
        new = st.text_input("New Password", type="password")
        confirm = st.text_input("Confirm Password", type="password")
        submitted = st.form_submit_button("Update Password")
    if submitted:
        try:
            ctx.profile.change_password(state.email, current, new, confirm)
        except AuthError as e:
            show_error(e)
        else:
            st.toast("Password updated successfully", icon="✅")
