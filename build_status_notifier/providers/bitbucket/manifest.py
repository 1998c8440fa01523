"""Bitbucket build status provider manifest."""

from build_status_notifier.providers.bitbucket.config import BitbucketConfig
from build_status_notifier.providers.bitbucket.provider import BitbucketProvider
from build_status_notifier.providers.manifest import ProviderManifest

PLUGIN_ID = "bitbucket.pr.status"
POLLER_PLUGIN_ID = "git.fb"

bitbucket_manifest = ProviderManifest(
    plugin_id=PLUGIN_ID,
    poller_plugin_id=POLLER_PLUGIN_ID,
    config_cls=BitbucketConfig,
    provider_factory=BitbucketProvider.from_config,
)
