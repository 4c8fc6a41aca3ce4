""" Factory for creating agent instances based on node type. """
from typing import Dict, Type

from ..agents.base import BaseAgent
from ..agents.llm import LLMAgent
from ..agents.passthrough import InputAgent, OutputAgent
from .models import AGENT, INPUT, OUTPUT, WorkflowNode

_AGENT_MAP: Dict[str, Type[BaseAgent]] = {
    INPUT: InputAgent,
    AGENT: LLMAgent,
    OUTPUT: OutputAgent,
}


def make_agent(node: WorkflowNode) -> BaseAgent:
    cls = _AGENT_MAP.get(node.type)
    if not cls:
        raise ValueError(f"Unsupported node type: {node.type}")
    return cls(node)


def supported_node_types():
    return tuple(_AGENT_MAP)
