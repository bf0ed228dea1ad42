from __future__ import annotations

import enum
import json
import logging
import re

import keyring

logger = logging.getLogger(__name__)


class ConfigKey(enum.StrEnum):
    CLOUDFLARE_EMAIL = "CLOUDFLARE_EMAIL"
    CLOUDFLARE_API_KEY = "CLOUDFLARE_API_KEY"
    CLOUDFLARE_ZONE_ID = "CLOUDFLARE_ZONE_ID"

    @property
    def field_name(self) -> str:
        """Matching field on Credentials and EnvSettings."""
        return self.value.removeprefix("CLOUDFLARE_").lower()

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_secret(self) -> bool:
        return self is ConfigKey.CLOUDFLARE_API_KEY


_LABELS = {
    ConfigKey.CLOUDFLARE_EMAIL: "Cloudflare Email",
    ConfigKey.CLOUDFLARE_API_KEY: "Cloudflare API Key",
    ConfigKey.CLOUDFLARE_ZONE_ID: "Cloudflare Zone ID",
}

_DESCRIPTIONS = {
    ConfigKey.CLOUDFLARE_EMAIL: "Your Cloudflare account email address",
    ConfigKey.CLOUDFLARE_API_KEY: "Your Global API key from Cloudflare",
    ConfigKey.CLOUDFLARE_ZONE_ID: (
        "You can find your Zone ID in the Cloudflare dashboard "
        "under Overview > API section."
    ),
}

_KNOWN_KEYS = frozenset(key.value for key in ConfigKey)

_TAG_RE = re.compile(r"<[^>]*>")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]+")


def sanitize_text(value: str) -> str:
    """Clean a single-line text setting: no tags, line breaks or outer whitespace."""
    value = _TAG_RE.sub("", value)
    value = _CONTROL_RE.sub(" ", value)
    return " ".join(value.split())


class KeyringConfig(dict[ConfigKey, str]):
    KR_SERVICE_NAME: str = "cf-purge-tools"
    KR_USERNAME: str = "config"

    def __enter__(self) -> KeyringConfig:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()

    @classmethod
    def load_from_keyring(cls) -> KeyringConfig:
        """Load the configuration from the keyring."""
        json_str = keyring.get_password(cls.KR_SERVICE_NAME, cls.KR_USERNAME)
        if json_str is None:
            return cls()
        try:
            data = json.loads(json_str)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Stored config in keyring is not a json object, ignoring it.")
            return cls()
        return cls({ConfigKey(k): v for k, v in data.items() if k in _KNOWN_KEYS})

    def save(self):
        """Save the configuration to the keyring."""
        json_str = json.dumps(self)
        keyring.set_password(self.KR_SERVICE_NAME, self.KR_USERNAME, json_str)

    def to_keys_json(self, overridden: list[ConfigKey] | None = None) -> str:
        """Render the stored settings as json, masking secrets."""
        overridden = overridden or []
        result = {}
        for key in ConfigKey:
            if key in overridden:
                result[key] = "(overridden by environment)"
            elif self.get(key):
                result[key] = "********" if key.is_secret else self[key]
            elif key in self:
                # empty key
                result[key] = ""
            else:
                # missing key
                result[key] = "(not set)"

        return json.dumps(result, indent=2)
