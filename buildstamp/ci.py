"""CI environment detection.

A build counts as running on CI when the CI variable is *present* in the
environment. The value is never inspected, so ``CI=`` (empty) still means CI.
"""

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from buildstamp.config.constants import CI_ENV_VAR
from buildstamp.utils.logging import get_logger

if TYPE_CHECKING:
    from buildstamp.build import Project

logger = get_logger(__name__)

CI_EXTENSION = "ci"


@dataclass(frozen=True)
class CiExtension:
    """CI status attached to a project."""

    building_on_ci: bool


class CiDetector:
    """Reads the CI variable once and remembers the answer."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None, variable: str = CI_ENV_VAR):
        self._environ = os.environ if environ is None else environ
        self.variable = variable
        self._result: Optional[bool] = None

    @property
    def detected(self) -> bool:
        """Whether detect() has already run."""
        return self._result is not None

    def detect(self) -> bool:
        """Return True if the CI variable is set, whatever its value."""
        if self._result is None:
            self._result = self.variable in self._environ
        return self._result


def detect_ci(environ: Optional[Mapping[str, str]] = None, variable: str = CI_ENV_VAR) -> bool:
    """One-shot CI check against ``environ`` (defaults to ``os.environ``)."""
    return CiDetector(environ, variable).detect()


def apply_ci(project: "Project") -> None:
    """Attach the build's CI status to ``project``.

    Only the root project announces a CI build; sub-projects stay silent.
    """
    if CI_EXTENSION in project.extensions:
        return

    extension = CiExtension(project.build.ci_detector.detect())
    project.extensions[CI_EXTENSION] = extension

    if project.is_root and extension.building_on_ci:
        logger.info("Building on CI.")
