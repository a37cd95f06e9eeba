"""Chat with one agent. The transcript lives only in this browser session."""

import streamlit as st

from agentstore.ui.client import ApiError, get_client
from agentstore.ui.state import ChatTranscript, Sender

agent_id = st.session_state.get("agent_id")
if not agent_id:
    st.info("Pick an agent from the list first.")
    st.page_link("Home.py", label="← All agents")
    st.stop()

client = get_client()
try:
    agent = client.get_agent(agent_id)
except ApiError as e:
    st.error(e.message)
    st.page_link("Home.py", label="← All agents")
    st.stop()

transcript: ChatTranscript | None = st.session_state.get("transcript")
if transcript is None or transcript.agent_id != agent_id:
    transcript = st.session_state["transcript"] = ChatTranscript(agent_id=agent_id)

st.page_link("Home.py", label="← All agents")
st.title(agent["name"])
st.caption(agent["description"])

for message in transcript.messages:
    role = "user" if message.sender == Sender.USER else "assistant"
    with st.chat_message(role):
        if message.is_error:
            st.error(message.text)
        else:
            st.markdown(message.text)

if transcript.error:
    st.error(transcript.error)

prompt = st.chat_input(
    "Running…" if transcript.busy else "Ask something...",
    disabled=transcript.busy,
)
if prompt:
    problem = transcript.begin(prompt)
    if problem:
        st.warning(problem)
    else:
        st.rerun()

if transcript.busy:
    with st.chat_message("assistant"):
        with st.spinner("Thinking…"):
            try:
                reply = client.run_agent(agent_id, transcript.pending)
            except ApiError as e:
                transcript.fail(e.message)
            else:
                transcript.complete(reply)
    st.rerun()
