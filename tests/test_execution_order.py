"""Tests for execution order resolution."""

import pytest
from agentflow.workflow.errors import WorkflowCycleError
from agentflow.workflow.models import AgentWorkflow, NodeConnection, WorkflowNode
from agentflow.workflow.ordering import execution_order, reachable_nodes


def _graph(node_ids, edges):
    return AgentWorkflow(
        id="g",
        name="graph",
        nodes=[WorkflowNode(id=n, type="agent") for n in node_ids],
        connections=[NodeConnection(id=f"{s}-{d}", from_node_id=s, to_node_id=d) for s, d in edges],
    )


def test_reachable_nodes_is_breadth_first():
    """Test BFS discovery order starting at the start node."""
    wf = _graph("sabcd", [("s", "a"), ("s", "b"), ("a", "c"), ("b", "d")])
    assert reachable_nodes(wf, "s") == ["s", "a", "b", "c", "d"]


def test_reachable_nodes_follows_connection_order():
    """Test that siblings are discovered in connection-list order."""
    wf = _graph("sab", [("s", "b"), ("s", "a")])
    assert reachable_nodes(wf, "s") == ["s", "b", "a"]


def test_unreachable_nodes_are_left_out():
    """Test that nodes not reachable from the start node do not appear."""
    wf = _graph("sabx", [("s", "a"), ("x", "b")])
    assert reachable_nodes(wf, "s") == ["s", "a"]
    assert execution_order(wf, "s") == ["s", "a"]


def test_reachable_nodes_terminates_on_cycles():
    """Test that the visited set stops discovery on a cycle."""
    wf = _graph("sab", [("s", "a"), ("a", "b"), ("b", "a")])
    assert reachable_nodes(wf, "s") == ["s", "a", "b"]


def test_execution_order_matches_bfs_on_chains_and_trees():
    """Test that Kahn ordering keeps BFS order when every node has one predecessor."""
    wf = _graph("sabcde", [("s", "a"), ("s", "b"), ("a", "c"), ("a", "d"), ("b", "e")])
    assert execution_order(wf, "s") == reachable_nodes(wf, "s")


def test_execution_order_respects_all_predecessors():
    """Test that a join node is ordered after its longest incoming branch."""
    wf = _graph("sabco", [("s", "a"), ("a", "b"), ("b", "c"), ("s", "c"), ("c", "o")])

    assert reachable_nodes(wf, "s") == ["s", "a", "c", "b", "o"]
    assert execution_order(wf, "s") == ["s", "a", "b", "c", "o"]


def test_execution_order_ignores_unreachable_predecessors():
    """Test that an edge from an unreachable node does not block its target."""
    wf = _graph("saxo", [("s", "a"), ("x", "a"), ("a", "o")])
    assert execution_order(wf, "s") == ["s", "a", "o"]


def test_execution_order_keeps_stale_ids():
    """Test that ids absent from the node list are still ordered."""
    wf = _graph("sa", [("s", "a"), ("a", "ghost")])
    assert execution_order(wf, "s") == ["s", "a", "ghost"]


def test_execution_order_rejects_cycles():
    """Test that a reachable cycle raises and names the nodes on it."""
    wf = _graph("sabo", [("s", "a"), ("a", "b"), ("b", "a"), ("b", "o")])

    with pytest.raises(WorkflowCycleError) as excinfo:
        execution_order(wf, "s")

    assert excinfo.value.node_ids == ["a", "b", "o"]


def test_execution_order_rejects_cycle_through_start():
    """Test that an edge back into the start node counts as a cycle."""
    wf = _graph("sa", [("s", "a"), ("a", "s")])

    with pytest.raises(WorkflowCycleError, match="Cycle detected"):
        execution_order(wf, "s")


def test_execution_order_with_multi_edges():
    """Test that two edges between the same pair are counted consistently."""
    wf = _graph("sao", [("s", "a"), ("s", "a"), ("a", "o")])
    assert execution_order(wf, "s") == ["s", "a", "o"]
