"""Models describing a single build status notification."""

from enum import StrEnum

from pydantic import Field

from build_status_notifier.models.base import Model


class BuildState(StrEnum):
    """Commit build state, valued with the tokens Bitbucket accepts."""

    IN_PROGRESS = "INPROGRESS"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    CANCELED = "STOPPED"


class NotificationRequest(Model):
    """Outcome of a pipeline stage that should be reported on a commit."""

    repository_url: str = Field(..., description="Clone URL of the repository")
    branch: str = Field(..., description="Branch the pipeline built")
    revision: str = Field(..., description="Commit SHA the status is attached to")
    pipeline_stage: str = Field(
        ..., description="Pipeline stage identifier (e.g., 'build/unit-tests')"
    )
    result: str | None = Field(
        default=None, description="Stage result text (Passed, Failed, Cancelled)"
    )
    trackback_url: str = Field(..., description="Link back to the pipeline run")


class StatusPayload(Model):
    """Flat JSON body of a commit build status."""

    state: BuildState
    key: str = Field(..., max_length=40)
    name: str
    url: str
    description: str
