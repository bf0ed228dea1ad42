"""Cloudflare credential resolution."""
from __future__ import annotations

from collections.abc import Callable, Mapping

from pydantic import BaseModel, SecretStr

from cf_purge_tools.models.keyring_config import ConfigKey, KeyringConfig
from cf_purge_tools.models.settings import EnvSettings


class Credentials(BaseModel):
    email: str = ""
    api_key: SecretStr = SecretStr("")
    zone_id: str = ""

    def missing(self) -> list[str]:
        """Names of the fields that are empty."""
        values = {
            "email": self.email,
            "api_key": self.api_key.get_secret_value(),
            "zone_id": self.zone_id,
        }
        return [name for name, value in values.items() if not value]

    @property
    def is_complete(self) -> bool:
        return not self.missing()


def resolve_value(override: str | None, lookup: Callable[[], str | None]) -> str:
    """
    First non-empty of the override and the persisted value, else "".
    The lookup is only called when there is no override.
    """
    if override:
        return override
    return lookup() or ""


def resolve_credentials(
    overrides: EnvSettings | None = None,
    store: Mapping[ConfigKey, str] | None = None,
) -> Credentials:
    """Resolve credentials, environment first then the keyring config."""
    overrides = overrides if overrides is not None else EnvSettings()

    if store is None:
        # all overridden, stored settings are ignored entirely
        store = {} if overrides.overrides_all else KeyringConfig.load_from_keyring()

    values = {
        key.field_name: resolve_value(
            overrides.override_for(key), lambda key=key: store.get(key)
        )
        for key in ConfigKey
    }
    return Credentials(**values)
