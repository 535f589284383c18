# app.py — PHQ-9 Survey (identity form → 9(+1) questions → result dialog)
# - Page 1: name / ID / date, all required
# - Page 2: one question at a time, Previous / Next / Home
# - Tenth question only when the nine-item total is nonzero
# - Result: modal dialog, OK returns to page 1

import os, sys

import pandas as pd
import streamlit as st
import yaml

# ─────────────────────────────────────────────────────────────
# Project path
# ─────────────────────────────────────────────────────────────
ROOT = os.path.dirname(os.path.abspath(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# ─────────────────────────────────────────────────────────────
# Internal modules
# ─────────────────────────────────────────────────────────────
from utils.config import load_settings
from utils.log import setup_logging
from utils.registry import load_survey
from survey.models import IdentityIncomplete, NoAnswerSelected, Participant, SurveyResult
from survey.session import SurveySession

st.set_page_config(
    page_title="PHQ-9 Survey",
    layout="centered",
    initial_sidebar_state="collapsed"
)

SETTINGS = load_settings()
setup_logging(SETTINGS)

try:
    META = load_survey(SETTINGS.survey_key)
except (OSError, ValueError, yaml.YAMLError):
    # already reported by the registry
    st.stop()

STRINGS = META.get("strings", {})


def t(key: str, default: str = "") -> str:
    return STRINGS.get(key, default or key)

# ─────────────────────────────────────────────────────────────
# State
# ─────────────────────────────────────────────────────────────
FORM_KEYS = ("name_input", "id_input", "date_input")


def init_state():
    defaults = dict(
        page=1,
        survey=None,
        # identity store
        NAME="", ID="", DATE="",
        # bumps on every navigation so the radio comes back unselected
        step_nonce=0,
    )
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def go_home():
    survey = st.session_state.survey
    if survey is not None:
        survey.go_home()
    st.session_state.survey = None
    st.session_state.page = 1
    st.session_state.step_nonce += 1
    for k in FORM_KEYS:
        st.session_state.pop(k, None)


init_state()


def show_result(result: SurveyResult, rows):
    st.text(result.message(STRINGS))
    if rows:
        st.table(pd.DataFrame(rows))
        st.caption(t("review_note", ""))
    if st.button(t("ok", "OK"), type="primary", key="result_ok"):
        go_home()
        st.rerun()


# ─────────────────────────────────────────────────────────────
# PAGE 1 — Identity
# ─────────────────────────────────────────────────────────────
if st.session_state.page == 1:
    st.title(META.get("title", "PHQ-9"))
    st.write(t("intro"))

    name = st.text_input(t("name", "Name"), key="name_input")
    pid = st.text_input(t("id", "ID"), key="id_input")
    date = st.text_input(t("date", "Date"), key="date_input", placeholder=t("date_placeholder", ""))

    if st.button(t("begin", "Begin"), type="primary", key="begin"):
        try:
            participant = Participant.from_form(name, pid, date)
        except IdentityIncomplete:
            st.warning(t("validate_input"))
        else:
            st.session_state.update(participant.to_record())
            st.session_state.survey = SurveySession.from_definition(participant, META)
            st.session_state.page = 2
            st.session_state.step_nonce += 1
            st.rerun()

# ─────────────────────────────────────────────────────────────
# PAGE 2 — Survey flow
# ─────────────────────────────────────────────────────────────
elif st.session_state.page == 2:
    survey: SurveySession = st.session_state.survey
    if survey is None:
        go_home()
        st.rerun()

    if survey.finished:
        st.session_state.page = 3
        st.rerun()

    view = survey.display

    c_home, c_hello = st.columns([1, 5])
    if c_home.button(t("home", "Home"), key="home"):
        go_home()
        st.rerun()
    c_hello.subheader(survey.greeting(STRINGS))

    pct = survey.progress_percent()
    st.progress(pct / 100, text=f"{pct}{t('complete', '% complete')}")

    if META.get("prompt") and not view.is_tenth:
        st.caption(META["prompt"])
    st.markdown(f"**{view.text}**")

    choices = list(view.choices)
    selected = st.radio(
        t("answer", "Answer"),
        options=list(range(len(choices))),
        format_func=lambda i: choices[i],
        index=None,
        key=f"answer_{st.session_state.step_nonce}",
    )

    c1, c2 = st.columns(2)
    if c1.button(t("previous", "Previous"), disabled=(view.index == 0), key="previous"):
        survey.go_previous()
        st.session_state.step_nonce += 1
        st.rerun()

    if c2.button(t("next", "Next"), type="primary", key="next"):
        try:
            survey.go_next(selected)
        except NoAnswerSelected:
            st.warning(t("validate_answer"))
        else:
            st.session_state.step_nonce += 1
            if survey.finished:
                st.session_state.page = 3
            st.rerun()

# ─────────────────────────────────────────────────────────────
# PAGE 3 — Result
# ─────────────────────────────────────────────────────────────
elif st.session_state.page == 3:
    survey = st.session_state.survey
    if survey is None or survey.result is None:
        go_home()
        st.rerun()

    st.title(t("phq9_result", "PHQ-9 Result"))
    st.caption(survey.greeting(STRINGS))
    st.text(survey.result.message(STRINGS))
    if st.button(t("home", "Home"), key="result_home"):
        go_home()
        st.rerun()
    st.dialog(t("phq9_result", "PHQ-9 Result"))(show_result)(survey.result, survey.answer_rows())
