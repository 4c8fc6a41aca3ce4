from typing import Dict, Iterator, Mapping, Optional

from ..workflow.errors import ProviderNotConfiguredError
from .base import BaseProvider


class ProviderRegistry:
    """ Provider capabilities keyed by identifier ("claude", "gpt", ...). """

    def __init__(self, providers: Optional[Mapping[str, BaseProvider]] = None):
        self._providers: Dict[str, BaseProvider] = {}
        for name, provider in (providers or {}).items():
            self.register(name, provider)

    def register(self, name: str, provider: Optional[BaseProvider]) -> None:
        if provider is None:
            self._providers.pop(name, None)
            return
        self._providers[name] = provider

    def unregister(self, name: str) -> None:
        self._providers.pop(name, None)

    def get(self, name: str) -> BaseProvider:
        """
        Return the provider registered under `name`, ready to be called.
        """
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotConfiguredError(name)
        if not provider.is_configured:
            raise ProviderNotConfiguredError(name, "is not properly configured")
        return provider

    def names(self):
        return sorted(self._providers)

    def __contains__(self, name) -> bool:
        return name in self._providers

    def __iter__(self) -> Iterator[str]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


def as_registry(providers) -> ProviderRegistry:
    if isinstance(providers, ProviderRegistry):
        return providers
    return ProviderRegistry(providers)
