"""Configuration management for pdfdrop."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "~/.config/pdfdrop/config.yaml"

INVALID_FILE_POLICIES = ("abort", "skip")


@dataclass
class UploadConfig:
    """Settings for the upload form and its endpoint."""
    base_url: str = "http://localhost:3000"
    upload_path: str = "/api/upload"
    field_name: str = "media"
    timeout: Optional[float] = 60.0
    accept: str = "application/pdf"
    invalid_file_policy: str = "abort"
    clear_after_upload: bool = False
    confirm_notices: bool = True

    @property
    def upload_url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.upload_path.lstrip("/")


class ConfigManager:
    """Manage pdfdrop configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()

        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
                return content or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Error reading config: {e}")
            return {}

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "endpoint": {
                "base_url": "${PDFDROP_BASE_URL}",
                "upload_path": "/api/upload",
                "field_name": "media",
                "timeout": 60.0,
            },
            "form": {
                "accept": "application/pdf",
                "invalid_file_policy": "abort",
                "clear_after_upload": False,
                "confirm_notices": True,
            },
            "logging": {
                "level": "WARNING",
            },
        }

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    def _resolve_env_var(self, value: Any) -> Any:
        """Resolve environment variable references like ${VAR_NAME}."""
        if not isinstance(value, str):
            return value
        if not value.startswith("${") or not value.endswith("}"):
            return value

        var_name = value[2:-1]
        return os.getenv(var_name, "")

    def get_upload_config(self) -> UploadConfig:
        """Build the typed upload configuration, falling back to defaults."""
        defaults = UploadConfig()
        endpoint = self.data.get("endpoint")
        endpoint = endpoint if isinstance(endpoint, dict) else {}
        form = self.data.get("form")
        form = form if isinstance(form, dict) else {}

        base_url = self._resolve_env_var(endpoint.get("base_url", "")) or defaults.base_url

        policy = form.get("invalid_file_policy", defaults.invalid_file_policy)
        if policy not in INVALID_FILE_POLICIES:
            raise ValueError(
                f"Unknown invalid_file_policy '{policy}'. "
                f"Expected one of: {', '.join(INVALID_FILE_POLICIES)}"
            )

        timeout = endpoint.get("timeout", defaults.timeout)
        return UploadConfig(
            base_url=base_url,
            upload_path=endpoint.get("upload_path", defaults.upload_path),
            field_name=endpoint.get("field_name", defaults.field_name),
            timeout=float(timeout) if timeout is not None else None,
            accept=form.get("accept", defaults.accept),
            invalid_file_policy=policy,
            clear_after_upload=self._require_bool(form, "clear_after_upload", defaults.clear_after_upload),
            confirm_notices=self._require_bool(form, "confirm_notices", defaults.confirm_notices),
        )

    @staticmethod
    def _require_bool(section: Dict[str, Any], key: str, default: bool) -> bool:
        """Read a boolean option, rejecting quoted strings and other types."""
        value = section.get(key, default)
        if not isinstance(value, bool):
            raise ValueError(f"'{key}' must be true or false, got {value!r}")
        return value

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        defaults = {"level": "WARNING"}
        config = self.data.get("logging", {})
        return {**defaults, **config} if isinstance(config, dict) and config else defaults

    def set_value(self, dotted_key: str, raw_value: str) -> Any:
        """Set ``section.key`` from a string, parsed as a YAML scalar."""
        section, sep, key = dotted_key.partition(".")
        if not sep or not section or not key:
            raise ValueError(f"Expected a key like 'endpoint.base_url', got '{dotted_key}'")

        try:
            value = yaml.safe_load(raw_value) if raw_value else ""
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse value '{raw_value}': {e}") from e
        entry = self.data.get(section)
        if not isinstance(entry, dict):
            entry = self.data[section] = {}
        entry[key] = value
        return value

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False)
