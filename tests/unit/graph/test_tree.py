"""Unit tests for the host-facing component tree."""

import json

import pytest

from stenciltree.config import Settings
from stenciltree.core.types import FailureReason
from stenciltree.graph.tree import ComponentTree

STENCIL_CONFIG = """
export const config = {
  outputTargets: [{ type: 'docs-json', file: 'docs/docs.json' }],
};
"""


def make_project(root, components):
    root.mkdir(parents=True, exist_ok=True)
    (root / "stencil.config.ts").write_text(STENCIL_CONFIG)
    manifest = root / "docs" / "docs.json"
    manifest.parent.mkdir(exist_ok=True)
    manifest.write_text(json.dumps({"components": components}))
    return manifest


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "lib"
    make_project(root, [
        {"tag": "x-card", "filePath": "src/x-card.tsx", "dependencies": ["x-button"]},
        {"tag": "x-button", "filePath": "src/x-button.tsx", "dependents": ["x-card"]},
    ])
    (root / "src").mkdir()
    (root / "src" / "x-button.tsx").write_text("")
    return root


@pytest.fixture
def settings():
    return Settings()


class TestComponentTree:
    def test_resolves_on_construction(self, project, settings):
        tree = ComponentTree(project, settings=settings)

        assert tree.base_path == project
        assert tree.manifest_path == project / "docs" / "docs.json"
        assert tree.not_found is False
        assert tree.failure is None

    def test_roots_and_children(self, project, settings):
        tree = ComponentTree(str(project), settings=settings)

        card, button = tree.get_children()
        assert card.tag == "x-card"
        assert [n.tag for n in tree.get_children(card)] == ["x-button"]
        assert tree.get_children(button) == []

    def test_no_base_path(self, settings):
        tree = ComponentTree(settings=settings)

        assert tree.not_found is True
        assert tree.failure.reason == FailureReason.NO_BASE_PATH
        assert tree.get_children() == []

    def test_refresh_replaces_state(self, tmp_path, project, settings):
        tree = ComponentTree(tmp_path / "nowhere", settings=settings)
        assert tree.failure.reason == FailureReason.CONFIG_NOT_FOUND

        result = tree.refresh(project)

        assert result.is_ok()
        assert tree.base_path == project
        assert tree.failure is None
        assert [n.tag for n in tree.get_children()] == ["x-card", "x-button"]

    def test_refresh_without_argument_rereads(self, project, settings):
        tree = ComponentTree(project, settings=settings)
        tree.get_children()

        make_project(project, [{"tag": "x-new", "filePath": "src/x-new.tsx"}])
        tree.refresh()

        assert [n.tag for n in tree.get_children()] == ["x-new"]

    def test_refresh_failure_clears_manifest(self, tmp_path, project, settings):
        tree = ComponentTree(project, settings=settings)

        result = tree.refresh(tmp_path / "empty")

        assert result.is_err()
        assert tree.manifest_path is None
        assert tree.get_children() == []

    def test_open_manifest_bypasses_config(self, tmp_path, settings):
        picked = tmp_path / "picked.json"
        picked.write_text(json.dumps({"components": [{"tag": "x-solo"}]}))
        tree = ComponentTree(settings=settings)

        result = tree.open_manifest(picked)

        assert result.unwrap() == picked
        assert tree.manifest_path == picked
        assert [n.tag for n in tree.get_children()] == ["x-solo"]

    def test_open_missing_manifest_keeps_state(self, tmp_path, project, settings):
        tree = ComponentTree(project, settings=settings)
        before = tree.manifest_path

        result = tree.open_manifest(tmp_path / "gone.json")

        assert result.error.reason == FailureReason.MANIFEST_FILE_MISSING
        assert tree.manifest_path == before
        assert tree.base_path == project

    def test_unreadable_manifest_reported(self, tmp_path, settings):
        broken = tmp_path / "docs.json"
        broken.write_text("{ oops")
        tree = ComponentTree(broken, settings=settings)

        assert tree.get_children() == []
        assert tree.failure.reason == FailureReason.MANIFEST_UNREADABLE

    def test_source_path(self, project, settings):
        tree = ComponentTree(project, settings=settings)
        card, button = tree.get_children()

        assert tree.source_path(button) == project / "src" / "x-button.tsx"
        assert tree.source_path(card) is None

    def test_settings_file_in_project(self, tmp_path, monkeypatch):
        for name in ("STENCILTREE_DOCS_JSON", "STENCILTREE_CONFIG_FILE", "STENCILTREE_ENCODING"):
            monkeypatch.delenv(name, raising=False)
        root = tmp_path / "app"
        root.mkdir()
        (root / ".stenciltree.yaml").write_text("stencil_config_file_name: build.config.ts\n")
        (root / "build.config.ts").write_text(STENCIL_CONFIG)
        (root / "docs").mkdir()
        (root / "docs" / "docs.json").write_text('{"components": []}')

        tree = ComponentTree(root)

        assert tree.settings.stencil_config_file_name == "build.config.ts"
        assert tree.manifest_path == root / "docs" / "docs.json"


class TestManualManifest:
    @pytest.fixture
    def picked(self, tmp_path):
        picked = tmp_path / "components.json"
        picked.write_text(json.dumps({"components": [{"tag": "x-a"}]}))
        return picked

    def test_refresh_keeps_picked_manifest(self, picked, settings):
        tree = ComponentTree(settings=settings)
        tree.open_manifest(picked)

        result = tree.refresh()

        assert result.unwrap() == picked
        assert tree.manifest_path == picked
        assert tree.failure is None
        assert [n.tag for n in tree.get_children()] == ["x-a"]

    def test_refresh_reports_deleted_pick(self, picked, settings):
        tree = ComponentTree(settings=settings)
        tree.open_manifest(picked)
        picked.unlink()

        result = tree.refresh()

        assert result.error.reason == FailureReason.MANIFEST_FILE_MISSING
        assert tree.not_found is True

        picked.write_text(json.dumps({"components": [{"tag": "x-b"}]}))
        assert tree.refresh().is_ok()
        assert [n.tag for n in tree.get_children()] == ["x-b"]

    def test_refresh_with_project_leaves_manual_mode(self, picked, project, settings):
        tree = ComponentTree(settings=settings)
        tree.open_manifest(picked)

        tree.refresh(project)
        tree.refresh()

        assert tree.base_path == project
        assert tree.manifest_path == project / "docs" / "docs.json"


class TestProjectSettings:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("STENCILTREE_DOCS_JSON", "STENCILTREE_CONFIG_FILE", "STENCILTREE_ENCODING"):
            monkeypatch.delenv(name, raising=False)

    def test_refresh_loads_new_project_settings(self, tmp_path, project):
        other = tmp_path / "other"
        other.mkdir()
        (other / ".stenciltree.yaml").write_text("stencil_config_file_name: build.config.ts\n")
        (other / "build.config.ts").write_text(STENCIL_CONFIG)
        (other / "docs").mkdir()
        (other / "docs" / "docs.json").write_text('{"components": []}')
        tree = ComponentTree(project)
        assert tree.settings.stencil_config_file_name == "stencil.config.ts"

        result = tree.refresh(other)

        assert result.is_ok()
        assert tree.settings.stencil_config_file_name == "build.config.ts"
        assert tree.manifest_path == other / "docs" / "docs.json"

    def test_explicit_settings_are_kept(self, project):
        (project / ".stenciltree.yaml").write_text("stencil_config_file_name: build.config.ts\n")
        settings = Settings()

        tree = ComponentTree(project, settings=settings)

        assert tree.settings is settings
        assert tree.manifest_path == project / "docs" / "docs.json"
