"""
Centralized constants for buildstamp.

Environment variable names, version suffix literals and logging defaults
live here so the detector, the composer and the CLI agree on them.
"""

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

CI_ENV_VAR = "CI"  # Presence alone marks a CI build
BUILD_NUMBER_ENV_VAR = "BUILD_NUMBER"
COMMIT_ID_ENV_VAR = "COMMIT_ID"
LOG_LEVEL_ENV_VAR = "BUILDSTAMP_LOG_LEVEL"

# =============================================================================
# VERSION STAMPING
# =============================================================================

SNAPSHOT_SUFFIX = "-SNAPSHOT"
ABBREVIATED_COMMIT_ID_LENGTH = 7

# =============================================================================
# PROJECT METADATA
# =============================================================================

PYPROJECT_FILENAME = "pyproject.toml"
TOOL_TABLE = "buildstamp"

# Keys accepted in [tool.buildstamp]
SETTINGS_KEYS = {
    "ci-variable": "ci_env_var",
    "build-number-variable": "build_number_env_var",
    "commit-id-variable": "commit_id_env_var",
}

# =============================================================================
# LOGGING
# =============================================================================

LOGGER_NAME = "buildstamp"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# What each build variable means, keyed by BuildstampSettings field
BUILD_VARIABLE_DESCRIPTIONS = {
    "ci_env_var": "Marks the build as running on CI (any value, even empty)",
    "build_number_env_var": "Build number assigned by the CI server",
    "commit_id_env_var": "Commit identifier of the revision being built",
}

# Variables whose values are restricted
ENV_VAR_VALID_VALUES = {
    LOG_LEVEL_ENV_VAR: ["DEBUG", "INFO", "WARNING", "ERROR"],
}
