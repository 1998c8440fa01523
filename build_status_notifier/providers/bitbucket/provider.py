"""Bitbucket build status provider implementation."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass

import aiohttp
from pydantic import ValidationError

from build_status_notifier.errors import (
    AuthenticationError,
    RepositoryURLError,
    StatusPostError,
    TokenResponseError,
)
from build_status_notifier.models.notification import (
    BuildState,
    NotificationRequest,
    StatusPayload,
)
from build_status_notifier.providers.base import StatusProvider
from build_status_notifier.providers.bitbucket.config import BitbucketConfig
from build_status_notifier.providers.bitbucket.models import TokenResponse

log = logging.getLogger(__name__)

# Bitbucket rejects keys longer than 40 characters.
MAX_KEY_LENGTH = 40

NAME_SEPARATOR = " » "

DESCRIPTIONS: Mapping[BuildState, str] = {
    BuildState.IN_PROGRESS: "The build is in progress.",
    BuildState.SUCCESSFUL: "This commit looks good.",
    BuildState.FAILED: "This commit has failed.",
    BuildState.CANCELED: "The build was canceled.",
}
UNKNOWN_DESCRIPTION = "We don't know about the statuses."


@dataclass(frozen=True, kw_only=True)
class BitbucketProvider(StatusProvider):
    """Bitbucket Cloud build status provider.

    Uses OAuth2 client-credentials to obtain a Bearer token, then posts to the
    commit build status endpoint.
    """

    config: BitbucketConfig

    @classmethod
    def from_config(cls, config: BitbucketConfig) -> "BitbucketProvider":
        """Create provider from its configuration."""
        return cls(config=config)

    @property
    def result_states(self) -> Mapping[str, BuildState]:
        """Lower-cased result text to build state."""
        return {
            "passed": BuildState.SUCCESSFUL,
            "failed": BuildState.FAILED,
            "cancelled": BuildState(self.config.cancelled_state),
        }

    def map_state(self, result: str | None) -> BuildState:
        """Map a stage result to a build state, defaulting to in progress."""
        return self.result_states.get((result or "").lower(), BuildState.IN_PROGRESS)

    def build_payload(self, request: NotificationRequest) -> StatusPayload:
        """Build the status payload for a stage outcome."""
        state = self.map_state(request.result)
        return StatusPayload(
            state=state,
            key=request.pipeline_stage[:MAX_KEY_LENGTH],
            name=f"{request.pipeline_stage}{NAME_SEPARATOR}{request.branch}",
            url=request.trackback_url,
            description=DESCRIPTIONS.get(state, UNKNOWN_DESCRIPTION),
        )

    def status_url(self, request: NotificationRequest) -> str:
        """Return the commit build status URL for the request."""
        endpoint = self.config.endpoint.rstrip("/")
        repository = parse_repository_name(request.repository_url)
        return (
            f"{endpoint}/2.0/repositories/{repository}"
            f"/commit/{request.revision}/statuses/build"
        )

    async def authenticate(self, session: aiohttp.ClientSession) -> str:
        """Exchange the OAuth consumer credentials for an access token."""
        auth = aiohttp.BasicAuth(
            self.config.username, self.config.password.get_secret_value()
        )

        async with session.post(
            self.config.auth_url,
            data={"grant_type": "client_credentials"},
            auth=auth,
        ) as response:
            text = await response.text()
            if response.status > 204:
                raise AuthenticationError(response.status, text)

        return parse_access_token(text)

    async def post_status(
        self,
        session: aiohttp.ClientSession,
        url: str,
        access_token: str,
        payload: StatusPayload,
    ) -> None:
        """Post the build status with the Bearer token."""
        headers = {"Authorization": f"Bearer {access_token}"}

        async with session.post(
            url, json=payload.model_dump(mode="json"), headers=headers
        ) as response:
            if response.status > 204:
                text = await response.text()
                raise StatusPostError(response.status, text)

        log.debug("Bitbucket accepted status %s for %s", payload.key, url)


def parse_repository_name(repository_url: str) -> str:
    """Parse ``owner/slug`` from a repository clone URL.

    The owner is the fourth ``/``-separated segment and the slug is the last
    segment up to its first dot, so ``https://bitbucket.org/acme/widgets.git``
    yields ``acme/widgets``.

    Raises:
        RepositoryURLError: If the URL has too few segments or an empty part

    """
    parts = repository_url.split("/")
    try:
        owner = parts[3]
    except IndexError as e:
        raise RepositoryURLError(repository_url) from e

    slug = parts[-1].split(".")[0]
    if not owner or not slug:
        raise RepositoryURLError(repository_url)

    return f"{owner}/{slug}"


def parse_access_token(text: str) -> str:
    """Parse the access token from a successful token endpoint body.

    An empty body, a non-object body or a missing or null ``access_token``
    yields an empty token.

    Raises:
        TokenResponseError: If the body is not JSON or the token is not a string

    """
    if not text.strip():
        return ""

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TokenResponseError(text) from e

    if not isinstance(data, dict):
        return ""

    try:
        token = TokenResponse.model_validate(data)
    except ValidationError as e:
        raise TokenResponseError(text) from e

    return token.access_token or ""
