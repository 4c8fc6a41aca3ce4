"""Tests for the event channel."""

import dataclasses
import logging

import pytest
from agentflow.providers.echo import EchoProvider
from agentflow.workflow.events import EventChannel, EventLog
from agentflow.workflow.executor import WorkflowEngine
from agentflow.workflow.models import AgentWorkflow, NodeConnection, WorkflowEvent, create_node


def _linear():
    return AgentWorkflow(
        id="wf",
        name="linear",
        nodes=[create_node("input", "in"), create_node("output", "out")],
        connections=[NodeConnection(id="in-out", from_node_id="in", to_node_id="out")],
    )


def test_subscribers_receive_events_in_order():
    """Test that every observer sees every event."""
    channel = EventChannel()
    first, second = [], []
    channel.subscribe(first.append)
    channel.subscribe(second.append)

    event = WorkflowEvent(type="nodeStart", workflow_id="wf", node_id="a")
    channel.emit(event)

    assert first == [event]
    assert second == [event]
    assert len(channel) == 2


def test_unsubscribe_stops_delivery():
    """Test both the returned unsubscribe callable and unsubscribe()."""
    channel = EventChannel()
    seen = []
    unsubscribe = channel.subscribe(seen.append)

    unsubscribe()
    channel.emit(WorkflowEvent(type="nodeStart", workflow_id="wf"))
    channel.unsubscribe(seen.append)  # already gone: no error

    assert seen == []
    assert len(channel) == 0


def test_failing_observer_does_not_stop_others(caplog):
    """Test that an observer raising is logged and the rest still run."""
    channel = EventChannel()
    seen = []

    def broken(event):
        raise RuntimeError("observer bug")

    channel.subscribe(broken)
    channel.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="agentflow.workflow.events"):
        channel.emit(WorkflowEvent(type="nodeStart", workflow_id="wf"))

    assert len(seen) == 1
    assert "observer bug" in caplog.text


def test_events_are_immutable():
    """Test that WorkflowEvent values cannot be changed after emission."""
    event = WorkflowEvent(type="workflowComplete", workflow_id="wf", result="done")
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.result = "changed"


def test_event_log_filters_by_run():
    """Test that an EventLog bound to a run ignores other runs."""
    log = EventLog(run_id="r1")
    log(WorkflowEvent(type="nodeStart", workflow_id="wf", run_id="r1"))
    log(WorkflowEvent(type="nodeStart", workflow_id="wf", run_id="r2"))

    assert len(log.events) == 1
    assert "timestamp" in log.entries[0]
    log.clear()
    assert log.events == []


def test_engines_do_not_share_channels():
    """Test that separate engines report to separate channels unless one is injected."""
    one, two = WorkflowEngine(), WorkflowEngine()
    seen_one, seen_two = EventLog(), EventLog()
    one.events.subscribe(seen_one)
    two.events.subscribe(seen_two)

    one.execute(_linear(), "x")

    assert len(seen_one.events) == 4
    assert seen_two.events == []


def test_injected_channel_is_shared():
    """Test that one channel can collect events from several engines."""
    channel = EventChannel()
    log = EventLog()
    channel.subscribe(log)
    providers = {"claude": EchoProvider("claude")}

    WorkflowEngine(providers, events=channel).execute(_linear(), "a")
    WorkflowEngine(providers, events=channel).execute(_linear(), "b")

    assert log.types() == ["nodeComplete", "nodeStart", "nodeComplete", "workflowComplete"] * 2
    assert len({e.run_id for e in log.events}) == 2
