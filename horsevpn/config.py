"""Configuration management for the HorseVPN launcher."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from horsevpn.utils import print_warning


@dataclass
class LauncherConfig:
    """Launcher settings, resolved from defaults and environment variables."""
    verbose: bool
    use_sudo: bool
    sudo_path: str
    nmcli_path: str
    spinner: bool


class ConfigManager:
    """Builds the launcher configuration."""

    # Default configuration values used when no override is set
    DEFAULT_CONFIG = {
        "verbose": False,
        "use_sudo": True,
        "sudo_path": "sudo",
        "nmcli_path": "nmcli",
        "spinner": True
    }

    # Environment variable for each configuration field
    ENVIRONMENT_KEYS = {
        "verbose": "HORSEVPN_VERBOSE",
        "use_sudo": "HORSEVPN_USE_SUDO",
        "sudo_path": "HORSEVPN_SUDO",
        "nmcli_path": "HORSEVPN_NMCLI",
        "spinner": "HORSEVPN_SPINNER"
    }

    TRUE_VALUES = ("1", "true", "yes", "on")
    FALSE_VALUES = ("0", "false", "no", "off")

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize the configuration manager."""
        self.environ = os.environ if environ is None else environ

    def load_config(self) -> LauncherConfig:
        """Load launcher settings, overlaying environment values on the defaults."""
        config_dict = dict(self.DEFAULT_CONFIG)

        for key, env_name in self.ENVIRONMENT_KEYS.items():
            raw_value = self.environ.get(env_name)
            if raw_value is None or raw_value.strip() == "":
                continue
            config_dict[key] = self._coerce(key, env_name, raw_value.strip(), config_dict[key])

        return self._create_config_from_dict(config_dict)

    def _coerce(self, key: str, env_name: str, raw_value: str, default_value: Any) -> Any:
        """Convert an environment string to the type of the default value."""
        if not isinstance(default_value, bool):
            return raw_value

        lowered = raw_value.lower()
        if lowered in self.TRUE_VALUES:
            return True
        if lowered in self.FALSE_VALUES:
            return False
        print_warning(f"Warning: Invalid value '{raw_value}' for {env_name}. Using default value.")
        return default_value

    def _create_config_from_dict(self, config_dict: Dict[str, Any]) -> LauncherConfig:
        """Create a LauncherConfig object from a dictionary."""
        return LauncherConfig(**config_dict)
