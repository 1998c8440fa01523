"""Abstract base class for build status providers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import aiohttp

from build_status_notifier.models.notification import (
    BuildState,
    NotificationRequest,
    StatusPayload,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class StatusProvider(ABC):
    """Abstract base for systems that accept commit build statuses.

    A notification is a fixed sequence: build the payload, fetch an access
    token, post the status. Subclasses supply each step; ``notify`` runs them
    with an HTTP session that lives only for the duration of the call.
    """

    @abstractmethod
    def map_state(self, result: str | None) -> BuildState:
        """Map a pipeline stage result text to a build state.

        Args:
            result: Result text reported by the CI server, may be None

        Returns:
            The build state to report, never raises for unknown input

        """

    @abstractmethod
    def build_payload(self, request: NotificationRequest) -> StatusPayload:
        """Build the status payload for a notification request."""

    @abstractmethod
    def status_url(self, request: NotificationRequest) -> str:
        """Return the URL the status payload is posted to.

        Raises:
            RepositoryURLError: If the repository URL cannot be parsed

        """

    @abstractmethod
    async def authenticate(self, session: aiohttp.ClientSession) -> str:
        """Fetch an access token.

        Returns:
            The access token, empty when the remote returned none

        Raises:
            AuthenticationError: If the token endpoint rejects the request

        """

    @abstractmethod
    async def post_status(
        self,
        session: aiohttp.ClientSession,
        url: str,
        access_token: str,
        payload: StatusPayload,
    ) -> None:
        """Post the status payload.

        Raises:
            StatusPostError: If the status endpoint rejects the request

        """

    async def notify(self, request: NotificationRequest) -> StatusPayload | None:
        """Report a pipeline stage outcome on its commit.

        Args:
            request: The stage outcome to report

        Returns:
            The posted payload, or None when no access token was obtained

        """
        url = self.status_url(request)
        payload = self.build_payload(request)
        log.info("Body: %s", payload.model_dump_json())

        async with aiohttp.ClientSession() as session:
            access_token = await self.authenticate(session)
            if not access_token:
                log.error("It is not possible to get access token.")
                return None

            await self.post_status(session, url, access_token, payload)

        log.info(
            "Posted %s status for %s at %s", payload.state, request.revision, url
        )
        return payload
