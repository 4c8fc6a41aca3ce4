""" Provider capability contract used by agent nodes. """
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

USER = "user"
ASSISTANT = "assistant"
SYSTEM = "system"


@dataclass
class Message:
    role: str
    content: str


@dataclass
class ProviderResponse:
    content: str
    provider: str = ""
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0


class BaseProvider(ABC):
    """
    Abstract base class for language-model providers.

    Concrete providers implement send_message(). A provider that supports
    aborting its transport should watch `cancel_token` while waiting.
    """

    name: str = "base"

    @property
    def is_configured(self) -> bool:
        return True

    @abstractmethod
    def send_message(self, messages: List[Message], system_prompt: Optional[str] = None, *,
                     cancel_token: Optional[threading.Event] = None, **options: Any) -> ProviderResponse:
        """
        Return the assistant's reply to `messages`. `options` may carry the
        node's model, temperature and max_tokens.
        """
        pass
