"""
Project metadata loading from pyproject.toml
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from buildstamp.build import Build
from buildstamp.config.constants import PYPROJECT_FILENAME, TOOL_TABLE
from buildstamp.config.settings import BuildstampSettings, settings_from_table
from buildstamp.exceptions import ConfigurationError, ProjectMetadataError
from buildstamp.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectMetadata:
    """Name, base version and buildstamp settings declared by a project."""

    name: str
    version: str
    subprojects: List[str] = field(default_factory=list)
    settings: BuildstampSettings = field(default_factory=BuildstampSettings)

    def create_build(self, environ=None) -> Build:
        """Create an unconfigured Build for this project."""
        return Build(
            self.name,
            self.version,
            environ=environ,
            settings=self.settings,
            subprojects=self.subprojects,
        )


def _pyproject_path(project_dir: Optional[Path]) -> Path:
    if project_dir is None:
        project_dir = Path.cwd()
    return Path(project_dir) / PYPROJECT_FILENAME


def _read_pyproject(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ProjectMetadataError(f"Invalid {PYPROJECT_FILENAME}: {e}", path=str(path)) from e


def _tool_table(data: dict) -> dict:
    return data.get("tool", {}).get(TOOL_TABLE, {})


def load_settings(project_dir: Optional[Path] = None) -> BuildstampSettings:
    """Read only the variable-name settings from ``[tool.buildstamp]``.

    Unlike load_project_metadata this needs no ``[project]`` table, so it
    works for projects with a dynamic version. A missing pyproject.toml
    gives the default settings.

    Raises:
        ProjectMetadataError: If pyproject.toml cannot be parsed.
        ConfigurationError: If ``[tool.buildstamp]`` is malformed.
    """
    path = _pyproject_path(project_dir)
    if not path.is_file():
        return BuildstampSettings()
    return settings_from_table(_tool_table(_read_pyproject(path)))


def load_project_metadata(project_dir: Optional[Path] = None) -> ProjectMetadata:
    """
    Read project metadata from ``pyproject.toml``.

    Args:
        project_dir: Directory holding pyproject.toml. Defaults to the current directory.

    Returns:
        The project's metadata.

    Raises:
        ProjectMetadataError: If the file is missing, unparsable, or lacks a name or version.
        ConfigurationError: If ``[tool.buildstamp]`` is malformed.
    """
    path = _pyproject_path(project_dir)
    if not path.is_file():
        raise ProjectMetadataError(f"{PYPROJECT_FILENAME} not found", path=str(path))

    data = _read_pyproject(path)

    project_table = data.get("project", {})
    name = project_table.get("name")
    version = project_table.get("version")
    if not name:
        raise ProjectMetadataError("[project].name is not set", path=str(path))
    if version is None:
        raise ProjectMetadataError("[project].version is not set", path=str(path))

    tool_table = _tool_table(data)
    subprojects = tool_table.get("subprojects", [])
    if not isinstance(subprojects, list) or not all(isinstance(s, str) for s in subprojects):
        raise ConfigurationError("subprojects must be a list of names", key="subprojects")

    logger.debug(f"Loaded {name} {version} from {path}")

    return ProjectMetadata(
        name=str(name),
        version=str(version),
        subprojects=subprojects,
        settings=settings_from_table(tool_table),
    )
