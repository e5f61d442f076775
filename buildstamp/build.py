"""Build and project model.

A Build is created once per invocation. It snapshots the environment, owns
the single CiDetector, and holds the root project plus any sub-projects.
``configure()`` applies the CI and versioning plugins to every project in
one pass.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from buildstamp.ci import CI_EXTENSION, CiDetector, apply_ci
from buildstamp.config.settings import BuildstampSettings
from buildstamp.utils.logging import get_logger
from buildstamp.versioning import apply_versioning

logger = get_logger(__name__)

Plugin = Callable[["Project"], None]

DEFAULT_PLUGINS: List[Plugin] = [apply_ci, apply_versioning]


@dataclass(eq=False)
class Project:
    """A project (root or sub-project) taking part in the build."""

    name: str
    version: str
    build: "Build" = field(repr=False)
    parent: Optional["Project"] = field(default=None, repr=False)
    children: List["Project"] = field(default_factory=list, repr=False)
    extensions: Dict[str, Any] = field(default_factory=dict)
    applied_plugins: List[Plugin] = field(default_factory=list, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root_project(self) -> "Project":
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def environ(self) -> Mapping[str, str]:
        return self.build.environ

    @property
    def settings(self) -> BuildstampSettings:
        return self.build.settings

    @property
    def building_on_ci(self) -> bool:
        """CI status from this project's extension; False before the CI plugin runs."""
        ci = self.extensions.get(CI_EXTENSION)
        return ci.building_on_ci if ci is not None else False

    @property
    def plugin_names(self) -> List[str]:
        return [getattr(p, "__qualname__", repr(p)) for p in self.applied_plugins]

    def apply(self, plugin: Plugin) -> bool:
        """Apply ``plugin`` unless it was already applied to this project.

        Returns:
            True if the plugin ran.
        """
        if any(applied is plugin for applied in self.applied_plugins):
            return False
        plugin(self)
        self.applied_plugins.append(plugin)
        return True

    def add_subproject(self, name: str) -> "Project":
        child = Project(name=name, version=self.version, build=self.build, parent=self)
        self.children.append(child)
        return child


class Build:
    """A single build invocation."""

    def __init__(
        self,
        root_name: str,
        base_version: str,
        environ: Optional[Mapping[str, str]] = None,
        settings: Optional[BuildstampSettings] = None,
        subprojects: Iterable[str] = (),
    ):
        self.environ: Mapping[str, str] = dict(os.environ if environ is None else environ)
        self.settings = settings or BuildstampSettings()
        self.ci_detector = CiDetector(self.environ, self.settings.ci_env_var)
        self.root_project = Project(name=root_name, version=str(base_version), build=self)
        for name in subprojects:
            self.root_project.add_subproject(name)
        self._configured = False

    @property
    def projects(self) -> List[Project]:
        """Root project first, then sub-projects in declaration order."""
        return [self.root_project, *self.root_project.children]

    @property
    def building_on_ci(self) -> bool:
        return self.ci_detector.detect()

    @property
    def version(self) -> str:
        return self.root_project.version

    def configure(self, plugins: Optional[Iterable[Plugin]] = None) -> Project:
        """Apply plugins to every project. Later calls are no-ops."""
        if self._configured:
            return self.root_project

        plugins = list(DEFAULT_PLUGINS if plugins is None else plugins)
        for project in self.projects:
            for plugin in plugins:
                project.apply(plugin)
            logger.debug(f"Configured {project.name}: {', '.join(project.plugin_names)}")

        self._configured = True
        return self.root_project
