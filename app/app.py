"""
UI layer
Purpose: Streamlit-only glue. Renders mission control, the live transcript and
stats, collects operator input, and delegates all work to the controller.
Keeps UI concerns separate from lifecycle logic so that logic can be unit
tested without Streamlit.
"""

import streamlit as st

from debate_core.config import PanelSettings
from debate_core.controller import ConversationController
from debate_core.errors import ConversationError
from debate_core.logging import setup_logging
from debate_core.models import AGENT_ROSTER, ConversationSession, Phase
from debate_core.runtime import BackgroundLoop
from debate_core.services.gateway_http import HttpConversationGateway
from debate_core.services.simulated import SimulatedConversationGateway
from debate_core.utils.formatting import format_timestamp


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="AI Conversation Engine",
    page_icon="🗣️",
    layout="wide",
)

# ---------------------------
# UI constants
# ---------------------------
PHASE_BADGES = {
    Phase.RUNNING: "🟢",
    Phase.PAUSED: "🟡",
    Phase.STOPPED: "⚪",
    Phase.COMPLETED: "🔵",
}
AGENT_BADGES = {
    "Business Promoter": "🔷",
    "Critical Analyst": "🟥",
    "Neutral Evaluator": "🟩",
    "Market Researcher": "🟪",
}

# ---------------------------
# Session state init
# ---------------------------
settings = PanelSettings.from_env()
setup_logging(settings.log_level)

st_session = st.session_state
st_session.setdefault("runtime", None)
st_session.setdefault("controller", None)
st_session.setdefault("businesses_loaded", False)


# ---------------------------
# Helpers
# ---------------------------
def build_gateway():
    """Real backend, or the simulated one in mock mode."""
    if settings.mock_mode:
        return SimulatedConversationGateway()
    return HttpConversationGateway(
        settings.api_base_url, timeout=settings.request_timeout
    )


def get_runtime() -> BackgroundLoop:
    """Return this browser session's event loop, starting it on first use."""
    if st_session.runtime is None or not st_session.runtime.running:
        st_session.runtime = BackgroundLoop()
        st_session.controller = None
    return st_session.runtime


def get_controller() -> ConversationController:
    """Return the controller object, creating it on the session loop."""
    runtime = get_runtime()
    if st_session.controller is None:

        async def _create():
            return ConversationController(
                build_gateway(), poll_interval=settings.poll_interval
            )

        st_session.controller = runtime.run(_create())
        st_session.businesses_loaded = False

    controller = st_session.controller
    if not st_session.businesses_loaded:
        runtime.run(controller.load_businesses())
        st_session.businesses_loaded = True
    return controller


def read_view(controller: ConversationController) -> ConversationSession:
    """Consistent copy of the session, taken on the loop thread."""
    return get_runtime().call(controller.state.snapshot)


def run_command(coro) -> None:
    """Run a controller command; failures are already in controller.error."""
    try:
        get_runtime().run(coro)
    except ConversationError:
        pass


def on_business_change():
    controller = get_controller()
    try:
        get_runtime().call(controller.select_business, st_session.business_choice)
    except ConversationError:
        pass


def render_message(message) -> None:
    badge = AGENT_BADGES.get(message.agent_name, "⬜")
    with st.container(border=True):
        left, right = st.columns([4, 1])
        left.markdown(f"{badge} **{message.agent_name}**")
        right.caption(format_timestamp(message.timestamp))
        st.write(message.content)


# ---------------------------
# Page
# ---------------------------
controller = get_controller()
view = read_view(controller)

st.title("AI Conversation Engine")
st.caption("Real-time AI-to-AI business promotion debates")

st.markdown("## Mission Control")
st.caption("Select a business and control AI conversations in real-time")

business_ids = [""] + [str(b.id) for b in controller.businesses]
business_labels = {str(b.id): f"{b.name} ({b.industry_category})" for b in controller.businesses}
selected = controller.selected_business
st.selectbox(
    "Select Business",
    options=business_ids,
    index=business_ids.index(str(selected.id)) if selected else 0,
    format_func=lambda bid: business_labels.get(bid, "Choose a business to promote"),
    key="business_choice",
    on_change=on_business_change,
    disabled=view.phase is Phase.RUNNING,
)

c_phase, c_start, c_pause, c_stop, c_reset = st.columns([2, 1, 1, 1, 1])
c_phase.markdown(f"{PHASE_BADGES[view.phase]} **{view.phase.value.capitalize()}**")

if view.phase is Phase.STOPPED:
    # run_command blocks the script until the command finishes, so clicks
    # never overlap and no in-flight check is needed here.
    if c_start.button(
        "Start Debate",
        type="primary",
        disabled=controller.selected_business is None,
    ):
        run_command(controller.start())
        st.rerun()

if view.phase is Phase.RUNNING:
    if c_pause.button("Pause"):
        run_command(controller.pause())
        st.rerun()

if view.phase is Phase.PAUSED:
    if c_pause.button("Resume", type="primary"):
        run_command(controller.resume())
        st.rerun()

if view.phase in (Phase.RUNNING, Phase.PAUSED):
    if c_stop.button("Stop"):
        run_command(controller.stop())
        st.rerun()

if c_reset.button("Reset"):
    get_runtime().call(controller.reset)
    st.rerun()

if controller.error:
    st.error(controller.error)


@st.fragment(run_every=settings.poll_interval if view.phase is Phase.RUNNING else None)
def live_conversation(initial_phase: Phase) -> None:
    current = read_view(controller)
    if current.phase is not initial_phase:
        st.rerun()

    st.markdown("## Live AI Conversation")
    business_name = getattr(controller.selected_business, "name", "selected business")
    st.caption(f"Real-time AI-to-AI debate about {business_name}")

    with st.container(height=420):
        if not current.messages:
            st.markdown("**No active conversation**")
            st.caption("Select a business and start a debate to see AI conversations")
        for message in current.messages:
            render_message(message)

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Messages", current.message_count)
    c2.metric("Current Round", current.round)
    c3.metric("Last activity", format_timestamp(current.last_activity) or "—")


live_conversation(view.phase)

st.divider()
left, right = st.columns(2)
with left:
    st.markdown("### AI Agents")
    st.caption("Active participants in the conversation")
    for agent in AGENT_ROSTER:
        st.markdown(f"{AGENT_BADGES.get(agent.name, '⬜')} **{agent.name}** · {agent.model}")

with right:
    if controller.selected_business:
        business = controller.selected_business
        st.markdown("### Business Profile")
        st.markdown(f"**{business.name}**")
        st.caption(business.industry_category)
        st.write(business.description)
