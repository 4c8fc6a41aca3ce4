""" Execution context for workflow agents. """
from dataclasses import dataclass

from ..providers.registry import ProviderRegistry
from .models import ExecutionState


@dataclass
class ExecutionContext:
    state: ExecutionState
    providers: ProviderRegistry
    input_message: str = ""

    @property
    def cancel_token(self):
        return self.state.cancel_token
