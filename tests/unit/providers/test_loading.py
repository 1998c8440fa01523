"""Tests for provider loading module."""

import pytest

from build_status_notifier.providers.bitbucket import bitbucket_manifest
from build_status_notifier.providers.loading import (
    ProviderNotFoundError,
    load_provider_manifest,
)


def test_load_provider_manifest_returns_manifest() -> None:
    """Loads provider manifest by key."""
    manifest = load_provider_manifest("bitbucket")

    assert manifest is bitbucket_manifest


def test_load_provider_manifest_raises_for_unknown_provider() -> None:
    """Raises ProviderNotFoundError for unknown provider key."""
    with pytest.raises(ProviderNotFoundError) as exc_info:
        load_provider_manifest("unknown-provider")

    assert "unknown-provider" in str(exc_info.value)
    assert "Available providers" in str(exc_info.value)


def test_load_provider_manifest_by_plugin_id() -> None:
    """Resolves a provider by the plugin id the CI host registered."""
    manifest = load_provider_manifest("bitbucket.pr.status")

    assert manifest is bitbucket_manifest


def test_not_found_message_lists_plugin_ids() -> None:
    """Names the registered plugin ids when nothing matches."""
    with pytest.raises(ProviderNotFoundError, match="bitbucket.pr.status"):
        load_provider_manifest("github.pr.status")
