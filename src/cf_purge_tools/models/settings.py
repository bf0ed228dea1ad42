from __future__ import annotations

import dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from cf_purge_tools.models.keyring_config import ConfigKey


class EnvSettings(BaseSettings):
    """Deployment-level overrides, read from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=dotenv.find_dotenv(usecwd=True) or None,
        env_prefix="cloudflare_",
        extra="ignore",
    )

    # credentials
    email: str | None = None
    api_key: str | None = None
    zone_id: str | None = None

    # debug
    verbose: bool = False

    def override_for(self, key: ConfigKey) -> str | None:
        """Get the override for a config key, None if not set."""
        value = getattr(self, key.field_name)
        return value or None

    @property
    def overridden_keys(self) -> list[ConfigKey]:
        return [key for key in ConfigKey if self.override_for(key)]

    @property
    def overrides_all(self) -> bool:
        """True when every credential is defined by the environment."""
        return len(self.overridden_keys) == len(ConfigKey)
