"""Tests for provider capabilities and the registry."""

import pytest
from agentflow.providers.base import BaseProvider, Message
from agentflow.providers.echo import EchoProvider
from agentflow.providers.registry import ProviderRegistry, as_registry
from agentflow.workflow.errors import ProviderNotConfiguredError


def test_base_provider_is_abstract():
    """Test that BaseProvider requires send_message."""
    with pytest.raises(TypeError):
        BaseProvider()


def test_echo_provider_replies_with_last_user_message():
    """Test the stub provider's reply and bookkeeping."""
    provider = EchoProvider("claude", transform=lambda t: t[::-1])

    response = provider.send_message(
        [Message("user", "first"), Message("assistant", "ok"), Message("user", "abc")],
        "system", model="m1",
    )

    assert response.content == "cba"
    assert response.provider == "claude"
    assert response.model == "m1"
    assert response.output_tokens == 1
    assert provider.calls[0]["system_prompt"] == "system"


def test_registry_lookup():
    """Test registering, finding and removing providers."""
    claude = EchoProvider("claude")
    registry = ProviderRegistry({"claude": claude})
    registry.register("gpt", EchoProvider("gpt"))

    assert registry.get("claude") is claude
    assert registry.names() == ["claude", "gpt"]
    assert "gpt" in registry and len(registry) == 2

    registry.unregister("gpt")
    with pytest.raises(ProviderNotConfiguredError, match="Provider gpt is not configured"):
        registry.get("gpt")


def test_registering_none_removes_provider():
    """Test that a None capability means 'not available'."""
    registry = ProviderRegistry({"claude": EchoProvider("claude")})
    registry.register("claude", None)
    assert "claude" not in registry


def test_registry_rejects_unconfigured_provider():
    """Test that unconfigured providers are reported as such."""
    registry = ProviderRegistry({"claude": EchoProvider("claude", configured=False)})
    with pytest.raises(ProviderNotConfiguredError) as excinfo:
        registry.get("claude")
    assert excinfo.value.provider == "claude"
    assert "not properly configured" in str(excinfo.value)


def test_as_registry():
    """Test that mappings are wrapped and registries passed through."""
    registry = ProviderRegistry()
    assert as_registry(registry) is registry
    assert as_registry(None).names() == []
    assert as_registry({"x": EchoProvider("x")}).names() == ["x"]
