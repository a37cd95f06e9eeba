"""Publish a new agent."""

import time

import streamlit as st

from agentstore.models.agent import AGENT_FIELD_RULES
from agentstore.ui.client import ApiError, get_client
from agentstore.ui.state import REDIRECT_DELAY_SECONDS, AgentForm

st.header("Create New AI App")

form: AgentForm = st.session_state.setdefault("create_form", AgentForm())


def _field_error(name: str) -> None:
    if name in form.field_errors:
        st.caption(f":red[{form.field_errors[name]}]")


with st.form("create-agent"):
    name = st.text_input(
        "App Name",
        value=form.values["name"],
        max_chars=AGENT_FIELD_RULES["name"].max_length,
    )
    _field_error("name")
    description = st.text_input(
        "Description",
        value=form.values["description"],
        max_chars=AGENT_FIELD_RULES["description"].max_length,
    )
    _field_error("description")
    system_prompt = st.text_area(
        'System Prompt (The "Brain")',
        value=form.values["system_prompt"],
        placeholder="You are a helpful travel assistant...",
        max_chars=AGENT_FIELD_RULES["system_prompt"].max_length,
        height=160,
    )
    _field_error("system_prompt")
    submitted = st.form_submit_button(
        "Publishing…" if form.submitting else "Publish App",
        disabled=form.submitting,
        use_container_width=True,
    )

if form.error:
    st.error(form.error)

if submitted:
    if form.validate(name=name, description=description, system_prompt=system_prompt):
        form.begin_submit()
    st.rerun()

if form.submitting:
    with st.spinner("Publishing…"):
        try:
            get_client().create_agent(**form.values)
        except ApiError as e:
            form.fail(e.message, e.field_errors)
        else:
            form.succeed()
    st.rerun()

if form.succeeded:
    st.success("Agent published! Taking you to the list…")
    time.sleep(REDIRECT_DELAY_SECONDS)
    del st.session_state["create_form"]
    st.switch_page("Home.py")
