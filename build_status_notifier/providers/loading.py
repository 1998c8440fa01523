"""Lookup of build status providers registered as entry points."""

from importlib.metadata import entry_points
from typing import Any

from build_status_notifier.providers.manifest import ProviderManifest

ENTRY_POINT_GROUP = "build_status_notifier.providers"


class ProviderNotFoundError(Exception):
    """Raised when no build status provider matches a key or plugin id."""


def load_provider_manifest(key: str) -> ProviderManifest[Any]:
    """Load a build status provider manifest.

    The CI host may refer to a provider either by its entry point name
    ("bitbucket") or by the plugin id it registered ("bitbucket.pr.status").

    Raises:
        ProviderNotFoundError: If neither an entry point name nor a plugin id
            matches the key

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: ProviderManifest[Any] = entry.load()
            return manifest

    plugin_ids: list[str] = []
    for entry in entries:
        candidate: ProviderManifest[Any] = entry.load()
        if candidate.plugin_id == key:
            return candidate
        plugin_ids.append(candidate.plugin_id)

    available = [e.name for e in entries]
    raise ProviderNotFoundError(
        f"No build status provider for '{key}'. "
        f"Available providers: {available}, plugin ids: {plugin_ids}"
    )
