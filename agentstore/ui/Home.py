"""Agent listing. Run with: streamlit run agentstore/ui/Home.py"""

import streamlit as st

from agentstore.ui.client import ApiError, get_client
from agentstore.ui.state import AgentListView, ListStatus

st.set_page_config(page_title="AI Agent Store", page_icon="🤖")

# Leaving the chat discards its transcript.
st.session_state.pop("transcript", None)

header, action = st.columns([3, 1])
header.title("AI Agent Store")
if action.button("Build New Agent", type="primary"):
    st.switch_page("pages/1_Create_Agent.py")

view = AgentListView()
with st.spinner("Loading agents…"):
    try:
        view.resolve(get_client().list_agents())
    except ApiError as e:
        view.reject(e.message)

if view.status == ListStatus.ERROR:
    st.error(f"Could not load agents: {view.error}")
elif view.status == ListStatus.EMPTY:
    st.info("No agents yet. Build the first one!")
else:
    columns = st.columns(2)
    for i, agent in enumerate(view.agents):
        with columns[i % 2].container(border=True):
            st.subheader(agent["name"])
            st.write(agent["description"])
            if st.button("Run App →", key=f"run-{agent['id']}"):
                st.session_state["agent_id"] = agent["id"]
                st.switch_page("pages/2_Chat.py")
