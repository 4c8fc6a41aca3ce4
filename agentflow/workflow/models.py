""" Data models for workflow representation """

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Node type tags
INPUT = "input"
AGENT = "agent"
OUTPUT = "output"
NODE_TYPES = (INPUT, AGENT, OUTPUT)

# Run status
RUNNING = "running"
COMPLETED = "completed"
ERROR = "error"

# Event type tags
NODE_START = "nodeStart"
NODE_COMPLETE = "nodeComplete"
NODE_ERROR = "nodeError"
WORKFLOW_COMPLETE = "workflowComplete"
WORKFLOW_ERROR = "workflowError"

STOPPED_BY_USER = "Execution stopped by user"


def now_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def _extra_keys(data: Dict[str, Any], known) -> Dict[str, Any]:
    """Editor keys a config record has no field for, kept so they survive a round trip."""
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class AgentNodeConfig:
    provider: Optional[str] = None
    system_prompt: str = ""
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("provider", "systemPrompt", "system_prompt", "model", "temperature", "maxTokens", "max_tokens")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentNodeConfig":
        return cls(
            provider=data.get("provider"),
            system_prompt=data.get("systemPrompt", data.get("system_prompt", "")) or "",
            model=data.get("model"),
            temperature=data.get("temperature"),
            max_tokens=data.get("maxTokens", data.get("max_tokens")),
            extra=_extra_keys(data, cls._KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({"provider": self.provider, "systemPrompt": self.system_prompt})
        if self.model is not None:
            out["model"] = self.model
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.max_tokens is not None:
            out["maxTokens"] = self.max_tokens
        return out


@dataclass
class InputNodeConfig:
    label: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InputNodeConfig":
        return cls(label=data.get("label", ""), extra=_extra_keys(data, ("label",)))

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        out["label"] = self.label
        return out


@dataclass
class OutputNodeConfig:
    label: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputNodeConfig":
        return cls(label=data.get("label", ""), extra=_extra_keys(data, ("label",)))

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        out["label"] = self.label
        return out


NodeConfig = Union[AgentNodeConfig, InputNodeConfig, OutputNodeConfig]

_CONFIG_TYPES = {
    INPUT: InputNodeConfig,
    AGENT: AgentNodeConfig,
    OUTPUT: OutputNodeConfig,
}

DEFAULT_NODE_CONFIGS: Dict[str, Dict[str, Any]] = {
    INPUT: {"label": "User Input"},
    AGENT: {"provider": "claude", "systemPrompt": "You are a helpful assistant.", "temperature": 0.7},
    OUTPUT: {"label": "Response"},
}


def make_node_config(node_type: str, data: Optional[Dict[str, Any]] = None) -> Union[NodeConfig, Dict[str, Any]]:
    """
    Build the config record for a node type from its serialized mapping.
    Unknown types keep the raw mapping so the workflow can still be stored and
    rejected later, at run start.
    """
    data = data or {}
    cls = _CONFIG_TYPES.get(node_type)
    if cls is None:
        return dict(data)
    return cls.from_dict(data)


def config_to_dict(config: Union[NodeConfig, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(config, dict):
        return dict(config)
    return config.to_dict()


@dataclass
class WorkflowNode:
    id: str
    type: str
    name: str = ""
    pos_x: float = 0
    pos_y: float = 0
    config: Union[NodeConfig, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class NodeConnection:
    id: str
    from_node_id: str
    to_node_id: str
    from_output: str = "output_1"
    to_input: str = "input_1"


@dataclass
class AgentWorkflow:
    id: str
    name: str
    description: Optional[str] = None
    nodes: List[WorkflowNode] = field(default_factory=list)
    connections: List[NodeConnection] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)
    updated_at: int = field(default_factory=now_ms)

    def get_node(self, node_id: str) -> Optional[WorkflowNode]:
        return next((n for n in self.nodes if n.id == node_id), None)

    def nodes_of_type(self, node_type: str) -> List[WorkflowNode]:
        return [n for n in self.nodes if n.type == node_type]


def create_node(node_type: str, node_id: str, name: Optional[str] = None,
                pos_x: float = 0, pos_y: float = 0, **config: Any) -> WorkflowNode:
    """
    Create a node using the editor defaults for its type, overridden by `config`
    (serialized key names, e.g. systemPrompt).
    """
    data = dict(DEFAULT_NODE_CONFIGS.get(node_type, {}))
    data.update(config)
    return WorkflowNode(
        id=node_id,
        type=node_type,
        name=name or node_type,
        pos_x=pos_x,
        pos_y=pos_y,
        config=make_node_config(node_type, data),
    )


@dataclass
class ExecutionState:
    """
    Bookkeeping for one run. Owned by a single execute() call.

    status stays None until execute() adopts the state.
    """
    workflow_id: str
    status: Optional[str] = None
    current_node_id: Optional[str] = None
    node_results: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    started_at: int = field(default_factory=now_ms)
    completed_at: Optional[int] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    cancel_token: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    def begin(self, workflow_id: str) -> None:
        """Reset for a new run of `workflow_id`. A state reused after an earlier run gets a new run_id."""
        if self.status is not None:
            self.run_id = uuid.uuid4().hex
        self.workflow_id = workflow_id
        self.status = RUNNING
        self.current_node_id = None
        self.node_results.clear()
        self.error = None
        self.started_at = now_ms()
        self.completed_at = None

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING

    @property
    def is_cancelled(self) -> bool:
        return self.cancel_token.is_set()


@dataclass(frozen=True)
class WorkflowEvent:
    type: str
    workflow_id: str
    node_id: Optional[str] = None
    result: Optional[str] = None
    error: Optional[str] = None
    run_id: Optional[str] = None
