"""Configuration utilities for buildstamp."""

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import (
    BUILD_NUMBER_ENV_VAR,
    BUILD_VARIABLE_DESCRIPTIONS,
    CI_ENV_VAR,
    COMMIT_ID_ENV_VAR,
    ENV_VAR_VALID_VALUES,
    LOG_LEVEL_ENV_VAR,
    SETTINGS_KEYS,
)


@dataclass(frozen=True)
class BuildstampSettings:
    """Names of the environment variables the build reads."""

    ci_env_var: str = CI_ENV_VAR
    build_number_env_var: str = BUILD_NUMBER_ENV_VAR
    commit_id_env_var: str = COMMIT_ID_ENV_VAR


def settings_from_table(table: Mapping[str, Any]) -> BuildstampSettings:
    """Build settings from a ``[tool.buildstamp]`` table.

    Args:
        table: The parsed table. Keys other than the variable overrides
            (e.g. ``subprojects``) are ignored here.

    Returns:
        Settings with any overrides applied.

    Raises:
        ConfigurationError: If an override is not a non-empty string.
    """
    overrides = {}
    for key, field_name in SETTINGS_KEYS.items():
        if key not in table:
            continue
        value = table[key]
        if not isinstance(value, str) or not value:
            raise ConfigurationError(
                "Environment variable names must be non-empty strings", key=key, value=value
            )
        overrides[field_name] = value
    return replace(BuildstampSettings(), **overrides)


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Check ``value`` against the allowed values for ``name``, if any.

    Returns:
        Tuple of (is_valid, error_message).
    """
    valid_values = ENV_VAR_VALID_VALUES.get(name)
    if value is None or valid_values is None:
        return True, None

    if value.upper() not in valid_values:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def get_env_var(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get a validated environment variable, or None if it is not set.

    Raises:
        ConfigurationError: If the value is not one of the allowed values.
    """
    environ = os.environ if environ is None else environ
    value = environ.get(name)

    is_valid, error = validate_env_var(name, value)
    if not is_valid:
        raise ConfigurationError(error, key=name)

    return value


def get_env_info(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[BuildstampSettings] = None,
) -> Dict[str, Dict]:
    """Describe the variables this build reads, under their configured names.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``).
        settings: Variable names in use (defaults to CI/BUILD_NUMBER/COMMIT_ID).

    Returns:
        Dictionary mapping variable names to description, value, is_set and valid.
    """
    environ = os.environ if environ is None else environ
    settings = settings or BuildstampSettings()

    variables = {
        getattr(settings, field_name): description
        for field_name, description in BUILD_VARIABLE_DESCRIPTIONS.items()
    }
    variables[LOG_LEVEL_ENV_VAR] = "Log level used when neither --verbose nor --quiet is given"

    info = {}
    for name, description in variables.items():
        value = environ.get(name)
        info[name] = {
            "description": description,
            "value": value,
            "is_set": value is not None,
            "valid": validate_env_var(name, value)[0],
        }
    return info
