# neurotracker/screens/tools.py
# -*- coding: utf-8 -*-
import datetime as dt
import random
from dataclasses import replace

import altair as alt
import pandas as pd
import streamlit as st

from neurotracker.screens.common import Context, back_home_button, rerun, show_error, user_header
from neurotracker.services import attention, compatibility, meetings, planner
from neurotracker.services.errors import InputValidationError

PRIORITY_COLORS = {"green": "#16a34a", "orange": "#ea580c", "red": "#dc2626", "none": "#e5e7eb"}


# -----------------------------------------------------------------------------
# Attention Tracker
# -----------------------------------------------------------------------------

def render_attention_tracker(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "att_home")
    st.title("👁️ Attention Tracker")

    cfg: attention.AttentionConfig = st.session_state.get("attention_cfg", attention.AttentionConfig())
    # mesure de démonstration (pas de capture caméra)
    pose: attention.HeadPose = st.session_state.get(
        "attention_pose", attention.HeadPose(pitch=-41.6, yaw=-1.3, roll=0.5, ear=0.39)
    )

    col_status, col_settings = st.columns([2, 3])
    with col_settings:
        camera = st.selectbox("Select Camera", options=list(attention.CAMERAS),
                              format_func=attention.CAMERAS.get,
                              index=list(attention.CAMERAS).index(cfg.camera))
        pitch_min = st.slider("Pitch min", *attention.BOUNDS["pitch_min"], value=cfg.pitch_min, step=0.1)
        pitch_max = st.slider("Pitch max", *attention.BOUNDS["pitch_max"], value=cfg.pitch_max, step=0.1)
        strictness = st.slider("Strictness", *attention.BOUNDS["strictness"], value=cfg.strictness, step=0.1)
        yaw_min = st.slider("Yaw min", *attention.BOUNDS["yaw_min"], value=cfg.yaw_min, step=0.1)
        yaw_max = st.slider("Yaw max", *attention.BOUNDS["yaw_max"], value=cfg.yaw_max, step=0.1)
        eye_threshold = st.slider("Eye threshold (EAR)", *attention.BOUNDS["eye_threshold"],
                                  value=cfg.eye_threshold, step=0.01)
        new_cfg = attention.AttentionConfig(camera, pitch_min, pitch_max, strictness, yaw_min, yaw_max,
                                            eye_threshold)
        try:
            new_cfg.validate()
        except InputValidationError as e:
            show_error(e)
        else:
            cfg = new_cfg
            st.session_state["attention_cfg"] = cfg

        c1, c2, c3 = st.columns(3)
        if c1.button("Set pitch as focused"):
            st.session_state["attention_cfg"] = attention.set_pitch_focused(cfg, pose.pitch)
            rerun()
        if c2.button("Set yaw as focused"):
            st.session_state["attention_cfg"] = attention.set_yaw_focused(cfg, pose.yaw)
            rerun()
        if c3.button("Calibrate"):
            st.session_state["attention_cfg"] = attention.calibrate(cfg, pose)
            rerun()

    with col_status:
        report = attention.evaluate(pose, cfg)
        st.metric("Status", report.status)
        st.write(f"Face detected: {'YES ✓' if report.face_ok else 'NO ✗'}")
        st.write(f"Pitch: {pose.pitch:+.1f} {'✓' if report.pitch_ok else '✗'}")
        st.write(f"Yaw: {pose.yaw:+.1f} {'✓' if report.yaw_ok else '✗'}")
        st.write(f"Roll: {pose.roll:+.1f} ✓")
        st.write(f"EAR: {pose.ear:.2f} {'✓' if report.ear_ok else '✗'}")


# -----------------------------------------------------------------------------
# Meeting Navigator
# -----------------------------------------------------------------------------

def render_meeting_navigator(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "meet_home")
    st.title("🧭 Meeting Navigator")

    cfg: meetings.MeetingConfig = st.session_state.get("meeting_cfg", meetings.MeetingConfig())

    live = st.toggle(cfg.transcription_mode, value=cfg.live_transcription)
    st.caption(cfg.transcription_hint)

    level_keys = list(meetings.SUMMARIZATION_LEVELS)
    level = st.radio("Summarization level", options=level_keys, horizontal=True,
                     index=level_keys.index(cfg.summarization_level), format_func=str.capitalize)
    st.caption(meetings.SUMMARIZATION_LEVELS[level])
    if st.button("Suggest level"):
        st.session_state["meeting_cfg"] = replace(cfg, summarization_level=meetings.suggest_level())
        rerun()

    model_keys = list(meetings.AI_MODELS)
    ai_model = st.selectbox("AI model", options=model_keys, index=model_keys.index(cfg.ai_model),
                            format_func=meetings.AI_MODELS.get)
    tr_keys = list(meetings.TRANSCRIPT_MODELS)
    transcript_model = st.selectbox("Transcription model", options=tr_keys,
                                    index=tr_keys.index(cfg.transcript_model),
                                    format_func=meetings.TRANSCRIPT_MODELS.get)
    calendar_tracking = st.toggle("Calendar tracking", value=cfg.calendar_tracking)

    new_cfg = meetings.MeetingConfig(live, ai_model, transcript_model, level, calendar_tracking)
    try:
        new_cfg.validate()
    except InputValidationError as e:
        show_error(e)
    else:
        if new_cfg != cfg:
            st.session_state["meeting_cfg"] = new_cfg
            rerun()


# -----------------------------------------------------------------------------
# Calendar
# -----------------------------------------------------------------------------

def _month_priorities(year: int, month: int) -> dict:
    cache = st.session_state.setdefault("calendar_priorities", {})
    if (year, month) not in cache:
        cache[(year, month)] = planner.generate_priorities(year, month, random.Random())
    return cache[(year, month)]


def render_calendar(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "cal_home")
    st.title("📅 Calendar")

    today = dt.date.today()
    shown = st.date_input("Month", value=st.session_state.get("calendar_month", today))
    st.session_state["calendar_month"] = shown

    col1, col2, col3 = st.columns(3)
    show_green = col1.checkbox("🟢 Low priority", value=True)
    show_orange = col2.checkbox("🟠 Medium priority", value=True)
    show_red = col3.checkbox("🔴 High priority", value=True)

    priorities = planner.filter_priorities(_month_priorities(shown.year, shown.month),
                                           show_green, show_orange, show_red)
    grid = planner.month_frame(priorities, shown.year, shown.month)
    heatmap = (
        alt.Chart(grid)
        .mark_rect(stroke="white")
        .encode(
            x=alt.X("weekday:O", sort=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"], title=""),
            y=alt.Y("week:O", title="", axis=None),
            color=alt.Color("priority:N", scale=alt.Scale(domain=list(PRIORITY_COLORS),
                                                          range=list(PRIORITY_COLORS.values())), legend=None),
            tooltip=[alt.Tooltip("date:T", format="%Y-%m-%d"), "priority:N"],
        )
        .properties(height=240)
    )
    labels = alt.Chart(grid).mark_text().encode(
        x=alt.X("weekday:O", sort=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]),
        y=alt.Y("week:O"),
        text="day:Q",
    )
    st.altair_chart(heatmap + labels, width="stretch")

    # les 14 prochains jours peuvent déborder sur le mois suivant
    horizon = today + dt.timedelta(days=13)
    upcoming = dict(_month_priorities(today.year, today.month))
    if (horizon.year, horizon.month) != (today.year, today.month):
        upcoming.update(_month_priorities(horizon.year, horizon.month))
    events = planner.upcoming_events(upcoming, today=today, rng=random.Random(today.toordinal()))

    st.subheader("Upcoming events")
    df = planner.events_frame(events)
    if df.empty:
        st.info("No upcoming events in the next 14 days.")
    else:
        st.dataframe(df[["day", "title", "time", "priority"]], width="stretch", hide_index=True)


# -----------------------------------------------------------------------------
# AI Models
# -----------------------------------------------------------------------------

def render_ai_models(ctx: Context) -> None:
    user_header(ctx)
    back_home_button(ctx, "ai_home")
    st.title("🖥️ AI Models")
    st.caption("System compatibility and recommended models")

    cfg = compatibility.load_system_config(ctx.prefs)

    with st.expander("System configuration", expanded=True):
        with st.form("system_config"):
            cpu = st.text_input("CPU", value=cfg.cpu)
            gpu = st.text_input("GPU", value=cfg.gpu)
            ram = st.number_input("RAM (GB)", min_value=0.0, value=float(cfg.ram), step=1.0)
            vram = st.number_input("VRAM (GB)", min_value=0.0, value=float(cfg.vram), step=1.0)
            storage = st.number_input("Storage (GB)", min_value=0.0, value=float(cfg.storage), step=1.0)
            if st.form_submit_button("Save configuration"):
                cfg = compatibility.SystemConfig(cpu=cpu, gpu=gpu, ram=ram, vram=vram, storage=storage)
                compatibility.save_system_config(ctx.prefs, cfg)
                st.toast("System configuration saved", icon="💾")

    score = compatibility.compatibility_score(cfg)
    label, _ = compatibility.rating(score)
    st.metric("Compatibility score", f"{score} / 100", label)
    st.write(
        f"Your system is rated {label.lower()} for running AI models locally. "
        "The score is based on GPU VRAM, system RAM, and processing power."
    )

    x, y = compatibility.curve_position(score)
    curve = alt.Chart(compatibility.curve_frame()).mark_line(strokeWidth=3, opacity=0.6).encode(
        x=alt.X("x:Q", title="Compatibility score"), y=alt.Y("y:Q", title="Performance rating")
    )
    marker = alt.Chart(pd.DataFrame({"x": [x], "y": [y]})).mark_circle(size=200).encode(x="x:Q", y="y:Q")
    st.subheader("Performance Rating Curve")
    st.altair_chart((curve + marker).properties(height=240), width="stretch")

    st.subheader("Models")
    models = compatibility.models_frame(cfg)
    only_ok = st.toggle("Only compatible models", value=True)
    st.dataframe(models[models["compatible"]] if only_ok else models, width="stretch", hide_index=True)
