"""Tests for reading project metadata from pyproject.toml."""

import pytest

from buildstamp.config.settings import BuildstampSettings
from buildstamp.exceptions import ConfigurationError, ProjectMetadataError
from buildstamp.project import ProjectMetadata, load_project_metadata, load_settings


class TestLoadProjectMetadata:

    def test_reads_name_version_and_subprojects(self, project_dir):
        metadata = load_project_metadata(project_dir)
        assert metadata.name == "flux"
        assert metadata.version == "2.3.0"
        assert metadata.subprojects == ["flux-x88"]
        assert metadata.settings == BuildstampSettings()

    def test_defaults_to_cwd(self, project_dir, monkeypatch):
        monkeypatch.chdir(project_dir)
        assert load_project_metadata().name == "flux"

    def test_variable_overrides(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "flux"\nversion = "1.0"\n\n'
            '[tool.buildstamp]\nci-variable = "GITHUB_ACTIONS"\n'
            'commit-id-variable = "GITHUB_SHA"\n'
        )
        settings = load_project_metadata(tmp_path).settings
        assert settings.ci_env_var == "GITHUB_ACTIONS"
        assert settings.commit_id_env_var == "GITHUB_SHA"
        assert settings.build_number_env_var == "BUILD_NUMBER"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectMetadataError, match="not found"):
            load_project_metadata(tmp_path)

    def test_invalid_toml(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project\nname = ")
        with pytest.raises(ProjectMetadataError, match="Invalid"):
            load_project_metadata(tmp_path)

    @pytest.mark.parametrize(
        "content, missing",
        [
            ('[project]\nversion = "1.0"\n', "name"),
            ('[project]\nname = "flux"\n', "version"),
        ],
    )
    def test_missing_fields(self, tmp_path, content, missing):
        (tmp_path / "pyproject.toml").write_text(content)
        with pytest.raises(ProjectMetadataError, match=missing):
            load_project_metadata(tmp_path)

    def test_bad_subprojects(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "flux"\nversion = "1.0"\n\n[tool.buildstamp]\nsubprojects = "x88"\n'
        )
        with pytest.raises(ConfigurationError):
            load_project_metadata(tmp_path)


class TestLoadSettings:

    def test_dynamic_version_is_fine(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "flux"\ndynamic = ["version"]\n\n'
            '[tool.buildstamp]\nci-variable = "GITHUB_ACTIONS"\n'
        )
        assert load_settings(tmp_path).ci_env_var == "GITHUB_ACTIONS"

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path) == BuildstampSettings()

    def test_invalid_toml(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool\n")
        with pytest.raises(ProjectMetadataError):
            load_settings(tmp_path)


class TestProjectMetadata:

    def test_create_build(self, ci_env):
        metadata = ProjectMetadata(name="flux", version="2.3.0", subprojects=["flux-x88"])
        build = metadata.create_build(environ=ci_env)
        build.configure()
        assert [p.name for p in build.projects] == ["flux", "flux-x88"]
        assert build.version == "2.3.0-42.abcdef1"
