import pytest

from gram.providers import factory
from gram.providers.factory import available_providers, create_provider, register
from gram.providers.github.provider import GitHubProvider
from tests.fakes.provider import FakeSettingsProvider


def test_create_provider_for_github() -> None:
    provider = create_provider("github", token="token", max_retries=1)

    assert isinstance(provider, GitHubProvider)


def test_create_provider_raises_for_unknown_provider() -> None:
    with pytest.raises(ValueError, match="Unknown provider: 'gitlab'. Available: github"):
        create_provider("gitlab", token="token")


def test_register_adds_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(factory, "_REGISTRY", dict(factory._REGISTRY))

    register("fake", FakeSettingsProvider)

    assert available_providers() == ["fake", "github"]
    assert isinstance(create_provider("fake"), FakeSettingsProvider)
