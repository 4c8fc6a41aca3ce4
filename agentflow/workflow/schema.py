""" Serialized (camelCase JSON/YAML) form of a workflow and its conversion to models. """
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import WorkflowFormatError
from .models import (
    AgentWorkflow, NodeConnection, WorkflowNode, config_to_dict, make_node_config, now_ms,
)


class NodeSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    name: str = ""
    pos_x: float = Field(default=0, alias="posX")
    pos_y: float = Field(default=0, alias="posY")
    config: Dict[str, Any] = Field(default_factory=dict)


class ConnectionSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    from_node_id: str = Field(alias="fromNodeId")
    from_output: str = Field(default="output_1", alias="fromOutput")
    to_node_id: str = Field(alias="toNodeId")
    to_input: str = Field(default="input_1", alias="toInput")


class WorkflowSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    nodes: List[NodeSpec]
    connections: List[ConnectionSpec] = Field(default_factory=list)
    created_at: Optional[int] = Field(default=None, alias="createdAt")
    updated_at: Optional[int] = Field(default=None, alias="updatedAt")


def validate_document(raw: Any) -> WorkflowSpec:
    """Validate a parsed JSON/YAML mapping against WorkflowSpec."""
    if not isinstance(raw, dict):
        raise WorkflowFormatError("Invalid workflow format: expected a mapping")
    try:
        return WorkflowSpec.model_validate(raw)
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err["type"] == "missing" and len(err["loc"]) == 1})
        if missing:
            raise WorkflowFormatError(f"Invalid workflow format: missing required fields: {', '.join(missing)}")
        raise WorkflowFormatError(f"Invalid workflow format: {e}")


def spec_to_workflow(spec: WorkflowSpec) -> AgentWorkflow:
    now = now_ms()
    return AgentWorkflow(
        id=spec.id,
        name=spec.name,
        description=spec.description,
        nodes=[
            WorkflowNode(
                id=n.id,
                type=n.type,
                name=n.name or n.type,
                pos_x=n.pos_x,
                pos_y=n.pos_y,
                config=make_node_config(n.type, n.config),
            )
            for n in spec.nodes
        ],
        connections=[
            NodeConnection(
                id=c.id or f"{c.from_node_id}-{c.to_node_id}",
                from_node_id=c.from_node_id,
                from_output=c.from_output,
                to_node_id=c.to_node_id,
                to_input=c.to_input,
            )
            for c in spec.connections
        ],
        created_at=spec.created_at if spec.created_at is not None else now,
        updated_at=spec.updated_at if spec.updated_at is not None else now,
    )


def workflow_to_document(workflow: AgentWorkflow) -> Dict[str, Any]:
    """The camelCase mapping a workflow is stored and exported as."""
    doc: Dict[str, Any] = {
        "id": workflow.id,
        "name": workflow.name,
        "nodes": [
            {
                "id": n.id,
                "type": n.type,
                "name": n.name,
                "posX": n.pos_x,
                "posY": n.pos_y,
                "config": config_to_dict(n.config),
            }
            for n in workflow.nodes
        ],
        "connections": [
            {
                "id": c.id,
                "fromNodeId": c.from_node_id,
                "fromOutput": c.from_output,
                "toNodeId": c.to_node_id,
                "toInput": c.to_input,
            }
            for c in workflow.connections
        ],
        "createdAt": workflow.created_at,
        "updatedAt": workflow.updated_at,
    }
    if workflow.description is not None:
        doc["description"] = workflow.description
    return doc
