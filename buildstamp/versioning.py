"""Version composition for CI builds.

The resolved version is the base version plus an identifier:

    2.3.0-SNAPSHOT    local builds, or CI builds missing a build number/commit
    2.3.0-42.abcdef1  CI builds with BUILD_NUMBER=42 and COMMIT_ID=abcdef1...

Nothing here raises. Every missing input falls back to the SNAPSHOT suffix so
a version can always be produced.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from buildstamp.ci import CI_EXTENSION
from buildstamp.config.constants import ABBREVIATED_COMMIT_ID_LENGTH, SNAPSHOT_SUFFIX
from buildstamp.config.settings import BuildstampSettings
from buildstamp.utils.logging import get_logger

if TYPE_CHECKING:
    from buildstamp.build import Project

logger = get_logger(__name__)

VERSIONING_EXTENSION = "versioning"


@dataclass(frozen=True)
class VersionContext:
    """Inputs to version resolution, captured once per project."""

    base_version: str
    build_number: str = ""
    commit_id: str = ""
    abbreviated_commit_id: str = ""


def abbreviate_commit_id(commit_id: str) -> str:
    """Return the first 7 characters of ``commit_id``.

    Ids shorter than that are returned whole.
    """
    return commit_id[:ABBREVIATED_COMMIT_ID_LENGTH]


def create_version_context(
    base_version: str,
    environ: Mapping[str, str],
    settings: Optional[BuildstampSettings] = None,
) -> VersionContext:
    """Read the build number and commit id from ``environ``.

    Args:
        base_version: The project's declared version.
        environ: Environment to read from.
        settings: Variable names to read (defaults to BUILD_NUMBER/COMMIT_ID).

    Returns:
        A VersionContext; unset variables become empty strings.
    """
    settings = settings or BuildstampSettings()
    build_number = environ.get(settings.build_number_env_var) or ""
    commit_id = environ.get(settings.commit_id_env_var) or ""
    abbreviated_commit_id = abbreviate_commit_id(commit_id)

    logger.debug(f"buildNo: '{build_number}', commitId: '{abbreviated_commit_id}'")

    return VersionContext(
        base_version=str(base_version),
        build_number=build_number,
        commit_id=commit_id,
        abbreviated_commit_id=abbreviated_commit_id,
    )


def resolve_identifier(building_on_ci: bool, context: VersionContext) -> str:
    """Return the suffix appended to the base version."""
    if not building_on_ci or not context.build_number or not context.abbreviated_commit_id:
        return SNAPSHOT_SUFFIX
    return f"-{context.build_number}.{context.abbreviated_commit_id}"


def resolve_version(building_on_ci: bool, context: VersionContext) -> str:
    """Return the full version string for the build."""
    return f"{context.base_version}{resolve_identifier(building_on_ci, context)}"


def apply_versioning(project: "Project") -> None:
    """Stamp ``project.version`` from its base version and the environment.

    Uses the project's CI extension when present; a project without one is
    treated as a local build.
    """
    if VERSIONING_EXTENSION in project.extensions:
        return

    context = create_version_context(project.version, project.environ, project.settings)
    project.extensions[VERSIONING_EXTENSION] = context

    ci = project.extensions.get(CI_EXTENSION)
    building_on_ci = ci.building_on_ci if ci is not None else False
    project.version = resolve_version(building_on_ci, context)

    if project.is_root:
        logger.info(f"Building {project.name} {project.version}")
