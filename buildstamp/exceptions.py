"""Custom exception hierarchy for buildstamp.

Only the outer layer raises these: reading project metadata, parsing
``[tool.buildstamp]`` and validating environment variables. CI detection and
version resolution never raise; missing inputs fall back to defaults.

Exception Hierarchy:
    BuildstampError (base)
    ├── ConfigurationError - Settings/environment variable issues
    └── ProjectMetadataError - pyproject.toml missing or incomplete

Usage:
    from buildstamp.exceptions import ProjectMetadataError

    try:
        data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ProjectMetadataError("Invalid pyproject.toml", path=str(path)) from e
"""

from typing import Any, Optional


class BuildstampError(Exception):
    """Base exception for all buildstamp errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, keys)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(BuildstampError):
    """Invalid buildstamp configuration."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context["key"] = key
        super().__init__(message, **context)


class ProjectMetadataError(BuildstampError):
    """Project metadata could not be read."""

    def __init__(
        self,
        message: str = "Could not read project metadata",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)
