"""Notifier turning provider calls into explicit notification results."""

import logging
from dataclasses import dataclass

import aiohttp

from build_status_notifier.errors import (
    AuthenticationError,
    RepositoryURLError,
    StatusPostError,
    TokenResponseError,
)
from build_status_notifier.models.notification import NotificationRequest
from build_status_notifier.models.result import NotificationResult
from build_status_notifier.providers.base import StatusProvider

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class StatusNotifier:
    """Reports pipeline stage outcomes through a single provider."""

    provider: StatusProvider

    async def notify(self, request: NotificationRequest) -> NotificationResult:
        """Report a stage outcome and classify how the attempt ended.

        Args:
            request: The stage outcome to report

        Returns:
            The result of the attempt; known failures are returned, not raised

        """
        log.info(
            "Notifying %s@%s of stage %s result=%s",
            request.repository_url,
            request.revision,
            request.pipeline_stage,
            request.result,
        )

        try:
            payload = await self.provider.notify(request)
        except RepositoryURLError as e:
            log.error("Invalid repository URL: %s", e)
            return NotificationResult(status="input_error", message=str(e))
        except (AuthenticationError, TokenResponseError) as e:
            log.error("Authentication failed: %s", e)
            return NotificationResult(status="authentication_error", message=str(e))
        except (StatusPostError, aiohttp.ClientError, TimeoutError) as e:
            log.error("Status update failed: %s", e, exc_info=e)
            return NotificationResult(status="transport_error", message=str(e))

        if payload is None:
            return NotificationResult(
                status="skipped", message="No access token was obtained"
            )

        return NotificationResult(
            status="posted",
            state=payload.state,
            url=payload.url,
        )
