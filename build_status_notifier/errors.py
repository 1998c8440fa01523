"""Errors raised while notifying a remote system of a build status."""


class NotificationError(RuntimeError):
    """Base class for notification failures."""


class RepositoryURLError(NotificationError):
    """Raised when owner and slug cannot be parsed from a repository URL."""

    def __init__(self, repository_url: str) -> None:
        super().__init__(f"Cannot parse repository name from URL: {repository_url!r}")
        self.repository_url = repository_url


class HTTPStatusError(NotificationError):
    """Raised when a remote API answers with an unexpected status code."""

    def __init__(self, action: str, status: int, text: str = "") -> None:
        super().__init__(f"Failed to {action}: {status} {text}".rstrip())
        self.status = status
        self.text = text


class AuthenticationError(HTTPStatusError):
    """Raised when the access token request is rejected."""

    def __init__(self, status: int, text: str = "") -> None:
        super().__init__("obtain access token", status, text)


class StatusPostError(HTTPStatusError):
    """Raised when the build status POST is rejected."""

    def __init__(self, status: int, text: str = "") -> None:
        super().__init__("post build status", status, text)


class TokenResponseError(NotificationError):
    """Raised when a successful token response body cannot be read."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Failed to read access token response: {text[:200]!r}")
        self.text = text
