"""Tests for buildstamp config module."""

import logging

import pytest

from buildstamp.config.settings import (
    BuildstampSettings,
    get_env_info,
    get_env_var,
    settings_from_table,
    validate_env_var,
)
from buildstamp.exceptions import ConfigurationError
from buildstamp.utils.logging import configure_logging


class TestSettingsFromTable:

    def test_empty_table_gives_defaults(self):
        assert settings_from_table({}) == BuildstampSettings()

    def test_overrides(self):
        settings = settings_from_table({"build-number-variable": "RUN_ID", "subprojects": ["a"]})
        assert settings.build_number_env_var == "RUN_ID"
        assert settings.ci_env_var == "CI"

    @pytest.mark.parametrize("value", ["", 3, None])
    def test_rejects_non_string(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            settings_from_table({"ci-variable": value})
        assert exc_info.value.context["key"] == "ci-variable"


class TestEnvVars:

    def test_unknown_var_is_valid(self):
        assert validate_env_var("SOMETHING_ELSE", "x") == (True, None)

    def test_log_level_validation(self):
        assert validate_env_var("BUILDSTAMP_LOG_LEVEL", "debug") == (True, None)
        is_valid, error = validate_env_var("BUILDSTAMP_LOG_LEVEL", "loud")
        assert is_valid is False
        assert "loud" in error

    def test_get_env_var_unset_is_none(self):
        assert get_env_var("BUILD_NUMBER", {}) is None
        assert get_env_var("CI", {"CI": ""}) == ""

    def test_get_env_var_invalid(self):
        with pytest.raises(ConfigurationError):
            get_env_var("BUILDSTAMP_LOG_LEVEL", {"BUILDSTAMP_LOG_LEVEL": "loud"})

    def test_env_info(self):
        info = get_env_info({"CI": "", "COMMIT_ID": "abc"})
        assert info["CI"]["is_set"] is True
        assert info["BUILD_NUMBER"]["is_set"] is False
        assert info["COMMIT_ID"]["value"] == "abc"

    def test_env_info_uses_configured_names(self):
        settings = BuildstampSettings(build_number_env_var="GITHUB_RUN_NUMBER")
        info = get_env_info({"GITHUB_RUN_NUMBER": "9", "BUILD_NUMBER": "1"}, settings)
        assert info["GITHUB_RUN_NUMBER"]["value"] == "9"
        assert "BUILD_NUMBER" not in info
        assert set(info) == {"CI", "GITHUB_RUN_NUMBER", "COMMIT_ID", "BUILDSTAMP_LOG_LEVEL"}

    def test_env_info_flags_invalid_log_level(self):
        info = get_env_info({"BUILDSTAMP_LOG_LEVEL": "loud"})
        assert info["BUILDSTAMP_LOG_LEVEL"]["valid"] is False
        assert info["CI"]["valid"] is True


class TestConfigureLogging:

    def test_flags(self):
        assert configure_logging(verbose=True) == logging.DEBUG
        assert configure_logging(quiet=True) == logging.WARNING
        assert configure_logging(environ={}) == logging.INFO
        assert logging.getLogger("buildstamp").level == logging.INFO

    def test_env_level(self):
        assert configure_logging(environ={"BUILDSTAMP_LOG_LEVEL": "error"}) == logging.ERROR

    def test_invalid_env_level(self):
        with pytest.raises(ConfigurationError):
            configure_logging(environ={"BUILDSTAMP_LOG_LEVEL": "loud"})
