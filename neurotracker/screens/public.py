# neurotracker/screens/public.py
# -*- coding: utf-8 -*-
import streamlit as st

from neurotracker.screens.common import Context, rerun


def render_landing(ctx: Context) -> None:
    st.title("🧠 NeuroTracker")
    st.markdown(
        """
        Understand your focus. A short, private **ADHD self-assessment** followed by
        practical tools to help you stay on track: attention tracking, meeting
        summaries, a priority calendar and more.
        """
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Get Started", type="primary", width="stretch"):
            ctx.nav.get_started()
            rerun()
    with col2:
        if st.button("Learn More", width="stretch"):
            ctx.nav.learn_more()
            rerun()


def render_learn_more(ctx: Context) -> None:
    st.title("About the assessment")
    st.markdown(
        """
        - **6 questions**, answered on a 5-point scale (Never → Always).
        - A total score between **0 and 24**, mapped to one of four ranges.
        - It is a **screener**, not a diagnosis. Share your result with a healthcare
          professional if your symptoms affect your daily life.
        - The assessment can be taken **once** per account; results are final.
        """
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("← Back", width="stretch"):
            ctx.nav.back_to_landing()
            rerun()
    with col2:
        if st.button("Get Started", type="primary", width="stretch"):
            ctx.nav.get_started()
            rerun()
