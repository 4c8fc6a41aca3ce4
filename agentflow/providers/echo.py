"""
Stubbed provider for demos and tests.

EchoProvider is NOT a real LLM call: it replies with the last user message,
optionally run through a transform. Replace it with a real provider
(Anthropic/OpenAI/self-hosted) for actual runs.
"""
from typing import Callable, List, Optional

from .base import USER, BaseProvider, Message, ProviderResponse


class EchoProvider(BaseProvider):

    def __init__(self, name: str = "echo", transform: Optional[Callable[[str], str]] = None,
                 model_name: str = "stubbed-llm", configured: bool = True):
        self.name = name
        self.transform = transform
        self.model_name = model_name
        self.configured = configured
        self.calls: List[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def send_message(self, messages: List[Message], system_prompt: Optional[str] = None, *,
                     cancel_token=None, **options) -> ProviderResponse:
        self.calls.append({"messages": list(messages), "system_prompt": system_prompt, "options": options})
        text = next((m.content for m in reversed(messages) if m.role == USER), "")
        if self.transform is not None:
            text = self.transform(text)
        return ProviderResponse(
            content=text,
            provider=self.name,
            model=options.get("model") or self.model_name,
            input_tokens=len(" ".join(m.content for m in messages).split()),
            output_tokens=len(text.split()),
        )
