"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
import yaml

from ..errors import MalformedDataError, ValidationError
from .defaults import (
    AuthParams,
    JournalConfig,
    LedgerParams,
    LoggingParams,
    PriceFeedParams,
    StorageParams,
    get_default_config,
)
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = "journal.yaml"

# env var -> (section, key, converter)
ENV_OVERRIDES: dict[str, tuple[str, str, Any]] = {
    "JOURNAL_STARTING_BALANCE": ("ledger", "default_starting_balance", float),
    "JOURNAL_DB_PATH": ("storage", "db_path", str),
    "JOURNAL_AUTH_USERNAME": ("auth", "username", str),
    "JOURNAL_AUTH_PASSWORD": ("auth", "password", str),
    "JOURNAL_LOG_LEVEL": ("logging", "level", str),
}

_SECTIONS = {
    "ledger": LedgerParams,
    "storage": StorageParams,
    "auth": AuthParams,
    "price_feed": PriceFeedParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: JournalConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load journal.yaml overrides, empty when the file is absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise MalformedDataError(
                f"{config_file} must contain a mapping",
                raw_data=str(file_config)[:200],
                expected_format="yaml mapping"
            )

        return file_config

    def load_env_config(self, environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """Collect JOURNAL_* environment overrides."""
        if environ is None:
            environ = os.environ

        config: dict[str, Any] = {}
        for env_name, (section, key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                value = convert(raw)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid value for {env_name}: {e}",
                    field=f"{section}.{key}",
                    value=raw
                ) from e
            config.setdefault(section, {})[key] = value

        return config

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides and environment variables (highest priority)
        2. journal.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())
        config = self._deep_merge(config, self.load_env_config(environ))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> JournalConfig:
        """
        Build a validated JournalConfig.

        Raises:
            ValidationError: If any field fails validation
        """
        merged = self.merge_config(overrides, environ)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            first = errors[0]
            raise ValidationError(
                f"Invalid configuration: {first.field}: {first.message}",
                field=first.field,
                value=first.value,
                context={"errors": [f"{err.field}: {err.message}" for err in errors]}
            )

        sections = {}
        for name, params_cls in _SECTIONS.items():
            section = merged.get(name) or {}
            known = {f.name for f in fields(params_cls)}
            unknown = sorted(set(section) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys", section=name, keys=unknown)
            sections[name] = params_cls(**{k: v for k, v in section.items() if k in known})

        return JournalConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_dir: Optional[Path] = None) -> JournalConfig:
    """Load the journal configuration from the default locations."""
    return ConfigLoader.create(config_dir).load()
