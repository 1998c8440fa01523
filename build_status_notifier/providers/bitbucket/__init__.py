"""Bitbucket build status provider module."""

from build_status_notifier.providers.bitbucket.config import BitbucketConfig
from build_status_notifier.providers.bitbucket.manifest import bitbucket_manifest
from build_status_notifier.providers.bitbucket.provider import BitbucketProvider

__all__ = ["BitbucketConfig", "BitbucketProvider", "bitbucket_manifest"]
