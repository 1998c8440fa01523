"""CLI entry point for posting a pipeline stage build status."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from build_status_notifier.models.notification import NotificationRequest
from build_status_notifier.models.result import NotificationResult
from build_status_notifier.notifier import StatusNotifier
from build_status_notifier.providers.loading import load_provider_manifest

STATUS_SYMBOLS = {
    "posted": "✅",
    "skipped": "⏭️",
    "authentication_error": "🔒",
    "transport_error": "❌",
    "input_error": "❗",
}


def log_result(log: logging.Logger, result: NotificationResult) -> None:
    """Log a one-line summary of the notification result."""
    symbol = STATUS_SYMBOLS.get(result.status, "?")
    if result.state is not None:
        log.info("%s %s: %s", symbol, result.status, result.state)
    else:
        log.info("%s %s", symbol, result.status)
    if result.url:
        log.info("  Run URL: %s", result.url)
    if result.message:
        log.info("  Message: %s", result.message)


def format_output(result: NotificationResult) -> dict[str, Any]:
    """Format a notification result for JSON output."""
    return {
        "status": result.status,
        "state": result.state.value if result.state is not None else None,
        "message": result.message,
        "url": result.url,
    }


async def run(
    provider_key: str,
    provider_config_json: str,
    request: NotificationRequest,
    default_config_json: str | None = None,
) -> int:
    """Post the build status and return exit code."""
    log = logging.getLogger("build_status_notifier")

    log.info("Loading provider: %s", provider_key)
    manifest = load_provider_manifest(provider_key)

    config_dict = json.loads(provider_config_json)
    defaults = json.loads(default_config_json) if default_config_json else None
    provider = manifest.create_provider(config_dict, defaults)

    notifier = StatusNotifier(provider=provider)
    result = await notifier.notify(request)

    log_result(log, result)
    print(json.dumps(format_output(result), indent=2))

    return 0 if result.ok else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Post a pipeline stage build status to a commit"
    )
    parser.add_argument(
        "--provider",
        default="bitbucket",
        help="Provider key (bitbucket)",
    )
    parser.add_argument(
        "--provider-config",
        required=True,
        help="JSON configuration for the provider",
    )
    parser.add_argument(
        "--default-config",
        default=None,
        help="JSON configuration used for settings missing from --provider-config",
    )
    parser.add_argument(
        "--repository-url",
        required=True,
        help="Clone URL of the repository (e.g., https://bitbucket.org/org/repo.git)",
    )
    parser.add_argument("--branch", required=True, help="Branch the pipeline built")
    parser.add_argument("--revision", required=True, help="Commit SHA")
    parser.add_argument(
        "--pipeline-stage",
        required=True,
        help="Pipeline stage identifier (e.g., build/unit-tests)",
    )
    parser.add_argument(
        "--result",
        default=None,
        help="Stage result (Passed, Failed, Cancelled); omitted means in progress",
    )
    parser.add_argument(
        "--trackback-url",
        required=True,
        help="Link back to the pipeline run",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    request = NotificationRequest(
        repository_url=args.repository_url,
        branch=args.branch,
        revision=args.revision,
        pipeline_stage=args.pipeline_stage,
        result=args.result,
        trackback_url=args.trackback_url,
    )

    exit_code = asyncio.run(
        run(
            provider_key=args.provider,
            provider_config_json=args.provider_config,
            request=request,
            default_config_json=args.default_config,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
