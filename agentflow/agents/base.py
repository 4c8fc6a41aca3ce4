from abc import ABC, abstractmethod

from ..workflow.context import ExecutionContext
from ..workflow.models import WorkflowNode


class BaseAgent(ABC):
    """ Abstract base class for all node agents. """

    def __init__(self, node: WorkflowNode):
        self.node = node
        self.node_id = node.id
        self.config = node.config

    @abstractmethod
    def execute(self, node_input: str, context: ExecutionContext) -> str:
        """
        Resolve the node's output from its combined input. Must be implemented by subclasses.
        """
        pass

    def dry_run(self, node_input: str, context: ExecutionContext) -> str:
        """
        Simulate execution without side effects.
        """
        return self.execute(node_input, context)
