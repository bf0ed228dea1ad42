"""Cloudflare cache management."""
from __future__ import annotations

import json
import logging
from collections.abc import Callable

import httpx
from keyring.errors import KeyringError

from cf_purge_tools.models.credentials import Credentials, resolve_credentials

logger = logging.getLogger(__name__)

API_ROOT = "https://api.cloudflare.com/client/v4"
PURGE_TIMEOUT = 30.0
PURGE_EVERYTHING_BODY = json.dumps({"purge_everything": True}, separators=(",", ":"))


class PurgeError(RuntimeError):
    """Base for cache purge failures."""


class MissingCredentialsError(PurgeError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"missing {', '.join(missing)}")


class PurgeTransportError(PurgeError):
    """The purge endpoint could not be reached."""


class PurgeAPIError(PurgeError):
    """The purge endpoint answered but reported a failure."""


def purge_url(zone_id: str) -> str:
    return f"{API_ROOT}/zones/{zone_id}/purge_cache"


def error_message(body) -> str:
    """Get the first error message of a Cloudflare response body."""
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if message:
                return str(message)
    return "Unknown error"


def purge_everything(
    credentials: Credentials,
    client: httpx.Client | None = None,
    timeout: float = PURGE_TIMEOUT,
) -> dict:
    """
    Purge everything from a zone's cache.
    Returns the decoded response body, raises PurgeError on any failure.
    """
    if not credentials.is_complete:
        raise MissingCredentialsError(credentials.missing())

    headers = {
        "X-Auth-Email": credentials.email,
        "X-Auth-Key": credentials.api_key.get_secret_value(),
        "Content-Type": "application/json",
    }
    post = client.post if client is not None else httpx.post

    try:
        res = post(
            purge_url(credentials.zone_id),
            headers=headers,
            content=PURGE_EVERYTHING_BODY,
            timeout=timeout,
        )
    except httpx.HTTPError as e:
        raise PurgeTransportError(str(e) or type(e).__name__) from e
    except (httpx.InvalidURL, UnicodeEncodeError) as e:
        # headers must be ascii
        raise PurgeTransportError(f"invalid request: {e}") from e

    try:
        body = res.json()
    except ValueError:
        raise PurgeAPIError(error_message(None))

    if not isinstance(body, dict) or body.get("success") is not True:
        raise PurgeAPIError(error_message(body))

    return body


class PurgeCoordinator:
    def __init__(
        self,
        resolver: Callable[[], Credentials] = resolve_credentials,
        client: httpx.Client | None = None,
        timeout: float = PURGE_TIMEOUT,
    ):
        """Initializes the coordinator. Credentials are resolved on every purge."""
        self.resolver = resolver
        self.client = client
        self.timeout = timeout

    def purge(self) -> bool:
        """Purge the whole Cloudflare cache. Returns True on success."""
        try:
            credentials = self.resolver()
        except (KeyringError, ValueError) as e:
            logger.warning("Could not resolve Cloudflare credentials: %s", e)
            return False

        try:
            purge_everything(credentials, self.client, self.timeout)
        except MissingCredentialsError as e:
            logger.warning("Cloudflare credentials not set (%s). Cannot purge cache.", e)
            return False
        except PurgeTransportError as e:
            logger.error("Cloudflare cache purge error: %s", e)
            return False
        except PurgeAPIError as e:
            logger.error("Cloudflare cache purge failed: %s", e)
            return False

        logger.info("Cloudflare cache successfully purged!")
        return True

    def on_cache_cleared(self) -> bool:
        """Callback for a host's cache-cleared event. Callers may ignore the result."""
        return self.purge()
