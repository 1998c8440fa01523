"""Models for notification outcomes."""

from dataclasses import dataclass
from typing import Literal

from build_status_notifier.models.notification import BuildState

NotificationStatus = Literal[
    "posted",
    "skipped",
    "authentication_error",
    "transport_error",
    "input_error",
]


@dataclass(frozen=True, kw_only=True)
class NotificationResult:
    """Result of a single notification attempt.

    Failures are reported as values so the host can tell a rejected
    credential from an unreachable API or a malformed repository URL.
    """

    status: NotificationStatus
    state: BuildState | None = None
    message: str | None = None
    url: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the attempt ended without an error."""
        return self.status in {"posted", "skipped"}
