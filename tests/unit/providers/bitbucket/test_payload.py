"""Tests for Bitbucket state mapping and payload building."""

import pytest
from pydantic import SecretStr

from build_status_notifier.errors import RepositoryURLError, TokenResponseError
from build_status_notifier.models.notification import BuildState
from build_status_notifier.providers.bitbucket import BitbucketConfig, BitbucketProvider
from build_status_notifier.providers.bitbucket.provider import (
    parse_access_token,
    parse_repository_name,
)
from build_status_notifier.testing.factories import NotificationRequestFactory


@pytest.fixture
def provider() -> BitbucketProvider:
    """Create provider with default endpoints."""
    return BitbucketProvider.from_config(
        BitbucketConfig(username="key", password=SecretStr("secret"))
    )


class TestMapState:
    """Tests for map_state."""

    @pytest.mark.parametrize(
        ("result", "expected"),
        [
            ("Passed", BuildState.SUCCESSFUL),
            ("passed", BuildState.SUCCESSFUL),
            ("PASSED", BuildState.SUCCESSFUL),
            ("Failed", BuildState.FAILED),
            ("fAiLeD", BuildState.FAILED),
            ("Cancelled", BuildState.CANCELED),
            ("CANCELLED", BuildState.CANCELED),
        ],
    )
    def test_maps_known_results(
        self, provider: BitbucketProvider, result: str, expected: BuildState
    ) -> None:
        """Maps known results case-insensitively."""
        assert provider.map_state(result) is expected

    @pytest.mark.parametrize(
        "result", [None, "", "Unknown", "Building", " Passed", "Passed ", "Canceled"]
    )
    def test_defaults_to_in_progress(
        self, provider: BitbucketProvider, result: str | None
    ) -> None:
        """Maps anything else to in progress without raising."""
        assert provider.map_state(result) is BuildState.IN_PROGRESS

    def test_cancelled_can_report_failed(self) -> None:
        """Reports cancelled stages as failed when configured."""
        provider = BitbucketProvider.from_config(
            BitbucketConfig(
                username="key",
                password=SecretStr("secret"),
                cancelled_state="FAILED",
            )
        )

        assert provider.map_state("Cancelled") is BuildState.FAILED

    def test_state_values_are_bitbucket_tokens(self) -> None:
        """Uses the state names Bitbucket accepts on the wire."""
        assert [state.value for state in BuildState] == [
            "INPROGRESS",
            "SUCCESSFUL",
            "FAILED",
            "STOPPED",
        ]


class TestBuildPayload:
    """Tests for build_payload."""

    @pytest.mark.parametrize(
        ("result", "description"),
        [
            (None, "The build is in progress."),
            ("Passed", "This commit looks good."),
            ("Failed", "This commit has failed."),
            ("Cancelled", "The build was canceled."),
        ],
    )
    def test_describes_state(
        self, provider: BitbucketProvider, result: str | None, description: str
    ) -> None:
        """Picks the canned description for the mapped state."""
        payload = provider.build_payload(NotificationRequestFactory.build(result=result))

        assert payload.description == description

    def test_builds_fields_from_request(self, provider: BitbucketProvider) -> None:
        """Copies stage, branch and trackback URL into the payload."""
        request = NotificationRequestFactory.build(
            pipeline_stage="deploy/production",
            branch="feature/login",
            trackback_url="https://ci.example.com/run/7",
        )

        payload = provider.build_payload(request)

        assert payload.key == "deploy/production"
        assert payload.name == "deploy/production » feature/login"
        assert payload.url == "https://ci.example.com/run/7"

    def test_truncates_key_to_40_characters(self, provider: BitbucketProvider) -> None:
        """Keeps the first 40 characters of the stage in the key."""
        stage = "a" * 30 + "b" * 20
        request = NotificationRequestFactory.build(
            pipeline_stage=stage, branch="x" * 100
        )

        payload = provider.build_payload(request)

        assert payload.key == "a" * 30 + "b" * 10
        assert payload.name == f"{stage} » {'x' * 100}"

    def test_keeps_key_of_exactly_40_characters(
        self, provider: BitbucketProvider
    ) -> None:
        """Leaves a 40 character stage untouched."""
        stage = "s" * 40

        payload = provider.build_payload(
            NotificationRequestFactory.build(pipeline_stage=stage)
        )

        assert payload.key == stage


class TestParseRepositoryName:
    """Tests for parse_repository_name."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://bitbucket.org/acme/widgets.git", "acme/widgets"),
            ("https://bitbucket.org/acme/widgets", "acme/widgets"),
            ("https://user@bitbucket.org/acme/widgets.git", "acme/widgets"),
            ("https://bitbucket.org/acme/my.widgets.git", "acme/my"),
        ],
    )
    def test_parses_owner_and_slug(self, url: str, expected: str) -> None:
        """Takes the fourth segment as owner and the last as slug."""
        assert parse_repository_name(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "widgets.git",
            "git@bitbucket.org:acme/widgets.git",
            "https://bitbucket.org",
            "https://bitbucket.org/acme/",
            "https://bitbucket.org//widgets.git",
        ],
    )
    def test_raises_for_malformed_url(self, url: str) -> None:
        """Raises RepositoryURLError instead of guessing."""
        with pytest.raises(RepositoryURLError) as exc_info:
            parse_repository_name(url)

        assert exc_info.value.repository_url == url


class TestStatusUrl:
    """Tests for status_url."""

    def test_builds_commit_status_url(self, provider: BitbucketProvider) -> None:
        """Builds the commit build status URL."""
        request = NotificationRequestFactory.build(revision="0a1b2c")

        assert provider.status_url(request) == (
            "https://api.bitbucket.org/2.0/repositories/acme/widgets"
            "/commit/0a1b2c/statuses/build"
        )

    def test_strips_trailing_slash_from_endpoint(self) -> None:
        """Avoids a double slash when endpoint ends with one."""
        provider = BitbucketProvider.from_config(
            BitbucketConfig(
                username="key",
                password=SecretStr("secret"),
                endpoint="https://bitbucket.example.com/",
            )
        )

        url = provider.status_url(NotificationRequestFactory.build())

        assert url.startswith("https://bitbucket.example.com/2.0/repositories/")


class TestParseAccessToken:
    """Tests for parse_access_token."""

    def test_returns_token(self) -> None:
        """Reads access_token from the JSON object."""
        body = '{"access_token": "abc123", "token_type": "bearer"}'

        assert parse_access_token(body) == "abc123"

    @pytest.mark.parametrize(
        "body", ["", "  ", "null", "[]", '"abc"', "{}", '{"access_token": null}']
    )
    def test_returns_empty_for_unusable_body(self, body: str) -> None:
        """Yields no token for empty, non-object or tokenless bodies."""
        assert parse_access_token(body) == ""

    @pytest.mark.parametrize(
        "body", ["<html>maintenance</html>", '{"access_token": ["abc"]}']
    )
    def test_raises_for_unreadable_body(self, body: str) -> None:
        """Raises TokenResponseError carrying the body."""
        with pytest.raises(TokenResponseError) as exc_info:
            parse_access_token(body)

        assert exc_info.value.text == body
