"""Configuration"""
from __future__ import annotations

from typing import Optional

import pyperclip
import rich
import typer
from typing_extensions import Annotated

from cf_purge_tools.models.keyring_config import ConfigKey, KeyringConfig, sanitize_text
from cf_purge_tools.models.settings import EnvSettings

app = typer.Typer(no_args_is_help=True)
cp = rich.print


def store_value(key: ConfigKey, value: str | None) -> str | None:
    """Save a sanitized value for key, or clear it when there is none."""
    value = sanitize_text(value) if value is not None else None

    with KeyringConfig.load_from_keyring() as config:
        if not value:
            config.pop(key, None)
        else:
            config[key] = value

    if EnvSettings().override_for(key):
        cp(f"[yellow]Note:[/yellow] {key.value} is set in the environment, "
           f"the stored value will be ignored.")
    return value


@app.command(name="set")
def set_config(
        key: ConfigKey,
        value: Annotated[Optional[str], typer.Argument()] = None
):
    """Set a configuration value. Omit the value to clear it."""
    saved = store_value(key, value)
    cp(f"{'Saved' if saved else 'Cleared'} key {repr(key.value)}")


@app.command(name="set-cp")
def set_cp_config(
    key: ConfigKey
):
    """Set a configuration value from clipboard."""
    value = pyperclip.paste()
    saved = store_value(key, value)

    if saved:
        cp(f"Saved key {repr(key.value)} from clipboard ({len(saved)} chars)")
    else:
        cp(f"Clipboard empty, cleared key {repr(key.value)}")


@app.command()
def show():
    """Show the current configuration."""
    overrides = EnvSettings()
    if overrides.overrides_all:
        cp("[yellow]Note:[/yellow] Cloudflare credentials are defined in the environment. "
           "The stored settings below will be ignored.")

    config = KeyringConfig.load_from_keyring()
    cp(config.to_keys_json(overridden=overrides.overridden_keys))


@app.command()
def keys():
    """Describe the configuration keys."""
    for key in ConfigKey:
        cp(f"[bold]{key.value}[/bold] ({key.label}): {key.description}")
