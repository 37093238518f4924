"""Tests for the simulated backend used in mock mode."""

import pytest

from debate_core.controller import ConversationController
from debate_core.errors import RemoteError
from debate_core.models import AGENT_ROSTER, Phase
from debate_core.services.simulated import SEED_BUSINESSES, SimulatedConversationGateway


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sim(clock):
    return SimulatedConversationGateway(turn_interval=3.0, clock=clock)


@pytest.mark.asyncio
async def test_lists_seed_businesses(sim):
    assert await sim.list_businesses() == SEED_BUSINESSES


@pytest.mark.asyncio
async def test_start_unknown_business_fails(sim):
    with pytest.raises(RemoteError) as exc_info:
        await sim.start_conversation(42)

    assert exc_info.value.message == "business not found"


@pytest.mark.asyncio
async def test_unknown_conversation_fails(sim):
    with pytest.raises(RemoteError) as exc_info:
        await sim.get_status("nope")

    assert exc_info.value.message == "Conversation not found"


@pytest.mark.asyncio
async def test_emits_turns_in_roster_order(sim, clock):
    conversation_id = await sim.start_conversation(1)
    clock.now = 7.0

    messages = await sim.get_messages(conversation_id)
    status = await sim.get_status(conversation_id)

    assert [m.agent_name for m in messages] == [a.name for a in AGENT_ROSTER[:2]]
    assert "Roofing Services" in messages[0].content
    assert status.phase is Phase.RUNNING
    assert (status.round, status.message_count) == (1, 2)


@pytest.mark.asyncio
async def test_pause_freezes_and_resume_continues(sim, clock):
    conversation_id = await sim.start_conversation("1")
    clock.now = 4.0
    await sim.pause_conversation(conversation_id)

    clock.now = 100.0
    status = await sim.get_status(conversation_id)
    assert status.phase is Phase.PAUSED
    assert status.message_count == 1

    await sim.resume_conversation(conversation_id)
    clock.now = 103.0
    assert len(await sim.get_messages(conversation_id)) == 2


@pytest.mark.asyncio
async def test_completes_after_final_round(sim, clock):
    conversation_id = await sim.start_conversation(2)
    clock.now = 1000.0

    status = await sim.get_status(conversation_id)

    assert status.phase is Phase.COMPLETED
    assert status.message_count == 16
    assert status.round == 4


@pytest.mark.asyncio
async def test_stop_halts_emission(sim, clock):
    conversation_id = await sim.start_conversation(1)
    clock.now = 3.0
    await sim.stop_conversation(conversation_id)
    clock.now = 60.0

    status = await sim.get_status(conversation_id)

    assert status.phase is Phase.STOPPED
    assert status.message_count == 1


@pytest.mark.asyncio
async def test_controller_round_trip_against_simulation(sim, clock):
    controller = ConversationController(sim, poll_interval=60)
    await controller.load_businesses()
    controller.select_business(1)

    await controller.start()
    clock.now = 13.0
    await controller.sync.tick()

    assert controller.state.phase is Phase.RUNNING
    assert controller.state.message_count == 4
    assert controller.state.round == 2
    assert len(controller.state.messages) == 4

    await controller.stop()
    controller.reset()
    assert controller.state.id is None
