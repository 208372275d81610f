# neurotracker/screens/assessment.py
# -*- coding: utf-8 -*-
import altair as alt
import streamlit as st

from neurotracker.persistence.repositories.surveys_repo import CompletionRecord
from neurotracker.screens.common import Context, back_home_button, rerun, show_error, user_header
from neurotracker.services.errors import InputValidationError
from neurotracker.services.score_engine import (
    MAX_SCORE,
    NUM_QUESTIONS,
    SCALE_LABELS,
    Band,
    answers_summary,
    bands_frame,
    interpret,
)
from neurotracker.services.survey import SurveySession

BAND_COLORS = {"green": "#16a34a", "blue": "#2563eb", "orange": "#ea580c", "red": "#dc2626"}


def _session() -> SurveySession:
    if "survey" not in st.session_state:
        st.session_state["survey"] = SurveySession()
    return st.session_state["survey"]


def render_survey(ctx: Context) -> None:
    survey = _session()
    name = ctx.nav.state.display_name
    st.title(f"Welcome, {name}!" if name else "Assessment")
    st.caption("Please answer the following questions honestly")

    st.progress(int(survey.progress))
    st.caption(f"Question {survey.current + 1} of {NUM_QUESTIONS} · {round(survey.progress)}% Complete")

    st.subheader(survey.question)
    choice = st.radio(
        "Your answer",
        options=list(range(len(SCALE_LABELS))),
        format_func=lambda i: SCALE_LABELS[i],
        index=survey.current_answer,
        horizontal=True,
        key=f"answer_{survey.current}",
        label_visibility="collapsed",
    )
    if choice is not None and choice != survey.current_answer:
        survey.answer(choice)

    col_prev, col_next = st.columns(2)
    with col_prev:
        if st.button("Previous", disabled=survey.current == 0, width="stretch"):
            survey.previous()
            rerun()
    with col_next:
        if not survey.is_last:
            if st.button("Next", type="primary", disabled=not survey.is_answered, width="stretch"):
                survey.next()
                rerun()
        elif st.button("Complete Assessment", type="primary", disabled=not survey.can_submit,
                       width="stretch"):
            survey.request_submit()
            rerun()

    dots = "".join("●" if i in survey.answers else "○" for i in range(NUM_QUESTIONS))
    st.caption(dots)

    if survey.confirming:
        with st.container(border=True):
            st.warning(
                "**Submit your assessment?**\n\n"
                "• Once submitted, you cannot retake this assessment\n\n"
                "• Your results will be final and cannot be changed\n\n"
                "• This ensures the integrity of the screening process"
            )
            with st.expander("Review your answers"):
                for question, label in answers_summary(survey.answers).items():
                    st.write(f"- {question} — **{label}**")
            col_back, col_submit = st.columns(2)
            with col_back:
                if st.button("Go Back", width="stretch"):
                    survey.cancel_submit()
                    rerun()
            with col_submit:
                if st.button("Yes, Submit Assessment", type="primary", width="stretch"):
                    try:
                        score = survey.confirm_submit()
                    except InputValidationError as e:
                        show_error(e)
                    else:
                        ctx.nav.survey_completed(score)
                        st.session_state.pop("survey", None)
                        rerun()


def _band_block(band: Band) -> None:
    color = BAND_COLORS[band.color]
    st.markdown(
        f"<h3 class='nt-band-{band.color}' style='color:{color}'>{band.icon} "
        f"Score: {band.range_label} ({band.name})</h3>",
        unsafe_allow_html=True,
    )
    st.write(band.message)


def _bands_chart(score: int) -> alt.Chart:
    df = bands_frame(score)
    bars = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("low:Q", title="Score", scale=alt.Scale(domain=[0, MAX_SCORE + 1])),
            x2="end:Q",
            color=alt.Color("band:N", scale=alt.Scale(
                domain=list(df["band"]), range=[BAND_COLORS[c] for c in df["color"]]), title=""),
            opacity=alt.condition("datum.current", alt.value(1.0), alt.value(0.35)),
            tooltip=["band:N", "range:N"],
        )
        .transform_calculate(end="datum.high + 1")
    )
    marker = alt.Chart(df.head(1).assign(score=score)).mark_rule(strokeWidth=3, color="black").encode(
        x="score:Q"
    )
    return (bars + marker).properties(height=90)


def render_results(ctx: Context) -> None:
    state = ctx.nav.state
    band = interpret(state.score)
    st.title(f"Your results, {state.display_name}" if state.display_name else "Your results")
    st.metric("Total score", f"{state.score} / {MAX_SCORE}")
    _band_block(band)
    st.altair_chart(_bands_chart(state.score), width="stretch")
    st.caption("This screener is not a diagnosis. Results are final and cannot be retaken.")
    if st.button("Continue", type="primary"):
        ctx.nav.continue_home()
        rerun()


def render_dashboard(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "dash_home")
    state = ctx.nav.state
    st.title("📊 Dashboard")

    if not state.completion_date:
        st.info("You have not completed the assessment yet.")
        return
    record = CompletionRecord(completed=True, score=state.score, date=state.completion_date)

    band = interpret(record.score)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Score", f"{record.score} / {MAX_SCORE}")
    with col2:
        st.metric("Range", band.range_label)
    with col3:
        st.metric("Completed", record.display_date())

    _band_block(band)
    st.altair_chart(_bands_chart(record.score), width="stretch")

    with st.expander("All score ranges"):
        st.dataframe(bands_frame(record.score)[["band", "range", "current"]], width="stretch",
                     hide_index=True)
