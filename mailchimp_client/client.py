"""
Client facade.

This module combines the dispatcher with every resource wrapper into one
client, and provides build_client() which resolves settings from explicit
arguments, the environment and the saved profile.
"""

import logging

import httpx

from .core.config_store import load_settings
from .core.dispatcher import Dispatcher
from .resources.authorized_apps import AuthorizedAppsMixin
from .resources.automations import AutomationsMixin
from .resources.batches import BatchesMixin
from .resources.campaign_folders import CampaignFoldersMixin
from .resources.campaigns import CampaignsMixin
from .resources.ecommerce import EcommerceMixin
from .resources.lists import ListsMixin

logger = logging.getLogger(__name__)


class MailchimpClient(
    CampaignsMixin,
    CampaignFoldersMixin,
    AutomationsMixin,
    BatchesMixin,
    AuthorizedAppsMixin,
    ListsMixin,
    EcommerceMixin,
    Dispatcher,
):
    """
    Client for the Mailchimp Marketing API.

    Entities returned by the client keep a reference to it, so follow-on
    calls can be made directly on them:

        >>> with MailchimpClient("0123abcd-us6") as client:
        ...     campaign = client.get_campaign("42")
        ...     campaign.send()
    """


def build_client(
    api_key: str | None = None,
    endpoint: str | None = None,
    debug: bool | None = None,
    timeout_seconds: float | None = None,
    http_client: httpx.Client | None = None,
    use_profile: bool = True,
) -> MailchimpClient:
    """
    Build a client from explicit arguments, the environment and the profile.

    Args:
        api_key: Mailchimp API key (falls back to MAILCHIMP_API_KEY)
        endpoint: API base URL (falls back to MAILCHIMP_ENDPOINT, then the key)
        debug: Log request and response bodies
        timeout_seconds: Default request timeout in seconds
        http_client: Optional httpx client; left open when the client closes
        use_profile: Also read the profile saved by 'mailchimp-client configure'

    Returns:
        Configured MailchimpClient ready to use

    Raises:
        ConfigError: If no API key can be found

    Example:
        >>> client = build_client()
        >>> campaigns = client.get_campaigns()
        >>> client.close()
    """
    settings = load_settings(
        use_profile=use_profile,
        api_key=api_key,
        endpoint=endpoint,
        debug=debug,
        timeout_seconds=timeout_seconds,
    )

    client = MailchimpClient(
        api_key=settings.api_key,
        endpoint=settings.endpoint,
        debug=settings.debug,
        http_client=http_client,
        timeout_seconds=settings.timeout_seconds,
    )
    logger.debug(f"Built client for {client.endpoint}")
    return client
