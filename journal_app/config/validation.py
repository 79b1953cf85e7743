"""Configuration validation utilities."""

import logging
import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_ledger_params(params: dict[str, Any]) -> list[FieldError]:
        """Validate ledger parameters."""
        errors = []

        if "default_starting_balance" in params:
            value = params["default_starting_balance"]
            if not _is_number(value) or value < 0:
                errors.append(FieldError(
                    field="ledger.default_starting_balance",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[FieldError]:
        """Validate storage parameters."""
        errors = []

        if "db_path" in params:
            value = params["db_path"]
            if not isinstance(value, str) or not value.strip():
                errors.append(FieldError(
                    field="storage.db_path",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(FieldError(
                    field="storage.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_auth_params(params: dict[str, Any]) -> list[FieldError]:
        """Validate login gate credentials."""
        errors = []

        for name in ("username", "password"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(FieldError(
                        field=f"auth.{name}",
                        message="Must be a non-empty string",
                        value="***" if name == "password" else value
                    ))

        return errors

    @staticmethod
    def validate_price_feed_params(params: dict[str, Any]) -> list[FieldError]:
        """Validate mock price feed parameters."""
        errors = []

        if "symbol" in params:
            value = params["symbol"]
            if not isinstance(value, str) or not value.strip():
                errors.append(FieldError(
                    field="price_feed.symbol",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "base_price" in params:
            value = params["base_price"]
            if not _is_number(value) or value <= 0:
                errors.append(FieldError(
                    field="price_feed.base_price",
                    message="Must be a positive number",
                    value=value
                ))

        for name in ("price_jitter", "change_jitter", "change_pct_jitter"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(FieldError(
                        field=f"price_feed.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        if "poll_interval_seconds" in params:
            value = params["poll_interval_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(FieldError(
                    field="price_feed.poll_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "history_size" in params:
            value = params["history_size"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(FieldError(
                    field="price_feed.history_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[FieldError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or not isinstance(getattr(logging, value.upper(), None), int):
                errors.append(FieldError(
                    field="logging.level",
                    message="Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(FieldError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[FieldError]:
        """Validate complete configuration."""
        errors = []

        if "ledger" in config:
            errors.extend(ConfigValidator.validate_ledger_params(config["ledger"]))

        if "storage" in config:
            errors.extend(ConfigValidator.validate_storage_params(config["storage"]))

        if "auth" in config:
            errors.extend(ConfigValidator.validate_auth_params(config["auth"]))

        if "price_feed" in config:
            errors.extend(ConfigValidator.validate_price_feed_params(config["price_feed"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
