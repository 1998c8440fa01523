"""Provider manifest definition for the plugin system."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from build_status_notifier.providers.base import StatusProvider

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class ProviderManifest(Generic[ConfigT]):
    """Manifest describing a provider plugin.

    The manifest contains the identifiers the CI host registers the plugin
    under, the configuration class and the provider factory function for
    lazy loading of providers based on their key.
    """

    plugin_id: str
    poller_plugin_id: str
    config_cls: type[ConfigT]
    provider_factory: Callable[[ConfigT], StatusProvider]

    def validate_config(self, fields: Mapping[str, Any]) -> Sequence[dict[str, str]]:
        """Validate plugin settings submitted by the CI host.

        Returns:
            One ``{"key", "message"}`` entry per invalid field, empty if valid

        """
        try:
            self.config_cls.model_validate(fields)
        except ValidationError as e:
            return [
                {
                    "key": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
        return []

    def create_provider(
        self,
        fields: Mapping[str, Any],
        defaults: Mapping[str, Any] | None = None,
    ) -> StatusProvider:
        """Create a provider from raw settings and optional fallback settings."""
        config = self.config_cls.model_validate({**(defaults or {}), **_present(fields)})
        return self.provider_factory(config)


def _present(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Drop settings the host left empty so fallbacks apply."""
    return {key: value for key, value in fields.items() if value not in (None, "")}
