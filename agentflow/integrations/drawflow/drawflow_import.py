"""
Convert a Drawflow editor export into an AgentWorkflow.

Export shape::

    {"drawflow": {"Home": {"data": {
        "1": {"name": "input", "class": "User Input", "pos_x": 100, "pos_y": 200,
              "data": {"label": "..."},
              "outputs": {"output_1": {"connections": [{"node": "2", "output": "input_1"}]}}},
        ...
    }}}}

No validation happens here; a malformed export becomes a workflow the engine
will refuse to run.
"""
from typing import Any, Dict, List, Mapping, Set

from ...workflow.models import AgentWorkflow, NodeConnection, WorkflowNode, make_node_config, now_ms

DEFAULT_MODULE = "Home"


def _module_data(export: Mapping[str, Any], module: str) -> Dict[str, Any]:
    return ((export or {}).get("drawflow") or {}).get(module, {}).get("data") or {}


def drawflow_to_workflow(export: Mapping[str, Any], workflow_id: str, name: str,
                         module: str = DEFAULT_MODULE) -> AgentWorkflow:
    """
    Build an AgentWorkflow from a Drawflow export. Node ids are the export's
    keys; connection ids are "{source}-{target}".
    """
    nodes: List[WorkflowNode] = []
    connections: List[NodeConnection] = []
    used_ids: Set[str] = set()

    for node_id, node_data in _module_data(export, module).items():
        node_id = str(node_id)
        node_type = node_data.get("name", "")
        nodes.append(WorkflowNode(
            id=node_id,
            type=node_type,
            name=node_data.get("class") or node_type,
            pos_x=node_data.get("pos_x", 0),
            pos_y=node_data.get("pos_y", 0),
            config=make_node_config(node_type, node_data.get("data") or {}),
        ))

        for output_name, output in (node_data.get("outputs") or {}).items():
            for conn in (output or {}).get("connections", []):
                target = str(conn.get("node"))
                # Drawflow names the target port "output" on the source side
                target_input = conn.get("output") or conn.get("input") or ""
                conn_id = f"{node_id}-{target}"
                if conn_id in used_ids:
                    # a second edge between the same pair keeps both, told apart by ports
                    conn_id = f"{conn_id}:{output_name}-{target_input}"
                used_ids.add(conn_id)
                connections.append(NodeConnection(
                    id=conn_id,
                    from_node_id=node_id,
                    from_output=output_name,
                    to_node_id=target,
                    to_input=target_input,
                ))

    now = now_ms()
    return AgentWorkflow(
        id=workflow_id,
        name=name,
        nodes=nodes,
        connections=connections,
        created_at=now,
        updated_at=now,
    )
