import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

from ...workflow.compiler import load_workflow_file
from ...workflow.models import AgentWorkflow, config_to_dict
from .drawflow_import import DEFAULT_MODULE

logger = logging.getLogger(__name__)


def _auto_layout(workflow: AgentWorkflow) -> Dict[str, Tuple[float, float]]:
    """
    Very simple layout: nodes left at the origin go in a horizontal row.
    Returns a mapping from node.id -> (x, y).
    """
    positions = {}
    x = 100
    y = 200
    dx = 300
    for node in workflow.nodes:
        if node.pos_x or node.pos_y:
            positions[node.id] = (node.pos_x, node.pos_y)
        else:
            positions[node.id] = (x, y)
            x += dx
    return positions


def _drawflow_id(node_id: str) -> Any:
    return int(node_id) if node_id.isdigit() else node_id


def workflow_to_drawflow(workflow: AgentWorkflow, module: str = DEFAULT_MODULE) -> Dict[str, Any]:
    """
    Convert an AgentWorkflow into a Drawflow export dict, the shape the editor
    imports and drawflow_to_workflow() reads back.
    """
    positions = _auto_layout(workflow)
    data: Dict[str, Any] = {}

    for node in workflow.nodes:
        x, y = positions[node.id]
        data[node.id] = {
            "id": _drawflow_id(node.id),
            "name": node.type,
            "data": config_to_dict(node.config),
            "class": node.name,
            "html": "",
            "typenode": False,
            "inputs": {},
            "outputs": {},
            "pos_x": x,
            "pos_y": y,
        }

    for conn in workflow.connections:
        source = data.get(conn.from_node_id)
        if source is not None:
            port = source["outputs"].setdefault(conn.from_output, {"connections": []})
            port["connections"].append({"node": conn.to_node_id, "output": conn.to_input})
        target = data.get(conn.to_node_id)
        if target is not None:
            port = target["inputs"].setdefault(conn.to_input, {"connections": []})
            port["connections"].append({"node": conn.from_node_id, "input": conn.from_output})

    return {"drawflow": {module: {"data": data}}}


def workflow_file_to_drawflow_json(workflow_path: Path, json_path: Path) -> None:
    """
    Load a YAML/JSON workflow document, convert it to Drawflow, and write JSON.
    """
    workflow = load_workflow_file(workflow_path)
    json_path.write_text(json.dumps(workflow_to_drawflow(workflow), indent=2))
    logger.info("Wrote Drawflow export to %s", json_path)
