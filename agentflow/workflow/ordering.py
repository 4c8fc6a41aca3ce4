""" Execution order for the nodes reachable from a start node. """
import heapq
from collections import deque
from typing import Dict, List

from .errors import WorkflowCycleError
from .models import AgentWorkflow


def reachable_nodes(workflow: AgentWorkflow, start_node_id: str) -> List[str]:
    """
    Breadth-first discovery from `start_node_id`, following connections in
    list order. Each id appears once; the start node comes first.
    """
    out_edges: Dict[str, List[str]] = {}
    for conn in workflow.connections:
        out_edges.setdefault(conn.from_node_id, []).append(conn.to_node_id)

    order: List[str] = []
    visited = set()
    queue = deque([start_node_id])
    while queue:
        node_id = queue.popleft()
        if node_id in visited:
            continue
        visited.add(node_id)
        order.append(node_id)
        for dest in out_edges.get(node_id, []):
            if dest not in visited:
                queue.append(dest)
    return order


def execution_order(workflow: AgentWorkflow, start_node_id: str) -> List[str]:
    """
    Dependency-safe order over the nodes reachable from `start_node_id`.

    Kahn's algorithm restricted to the reachable subgraph: a node becomes ready
    once every reachable predecessor has been ordered. Ready nodes are taken in
    BFS discovery order, so chains and trees come out exactly as BFS finds them.

    Raises WorkflowCycleError if a cycle is reachable from the start node.
    """
    discovered = reachable_nodes(workflow, start_node_id)
    rank = {node_id: i for i, node_id in enumerate(discovered)}

    indegree = {node_id: 0 for node_id in discovered}
    adjacency: Dict[str, List[str]] = {node_id: [] for node_id in discovered}
    for conn in workflow.connections:
        if conn.from_node_id in rank and conn.to_node_id in rank:
            adjacency[conn.from_node_id].append(conn.to_node_id)
            indegree[conn.to_node_id] += 1

    # an edge back into the start node can only come from a cycle
    ready = [(rank[start_node_id], start_node_id)] if indegree[start_node_id] == 0 else []
    ordered: List[str] = []
    while ready:
        _, current = heapq.heappop(ready)
        ordered.append(current)
        for neighbor in adjacency[current]:
            indegree[neighbor] -= 1
            if indegree[neighbor] == 0:
                heapq.heappush(ready, (rank[neighbor], neighbor))

    if len(ordered) != len(discovered):
        done = set(ordered)
        remaining = [node_id for node_id in discovered if node_id not in done]
        raise WorkflowCycleError(remaining)
    return ordered
