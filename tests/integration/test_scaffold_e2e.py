"""Integration tests for the init -> api -> webhook workflow on disk.

These tests run the real scaffolders against a temporary project directory
(PROJECT file plus boilerplate header) and check the files that end up on
disk, including hand edits made between runs.

No external tools (Go toolchain, Helm, cluster) are required.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from kubescaffold import ApiScaffolder, InitScaffolder, ScaffoldConfig, WebhookScaffolder
from kubescaffold.machinery import MarkerNotFoundError, ResourceDescriptor


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _scaffold_all(config: ScaffoldConfig, resource: ResourceDescriptor, console) -> None:
    project = config.load_project()
    InitScaffolder(config, project, console=console).scaffold()
    ApiScaffolder(config, project, resource, console=console).scaffold()
    WebhookScaffolder(config, project, resource, console=console).scaffold()


def _tree(root: Path) -> set[str]:
    return {
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file() and path.name not in ("PROJECT", "boilerplate.go.txt")
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestScaffoldWorkflow:
    """Full workflow against a real directory."""

    def test_generates_expected_tree(self, project_dir: Path, resource, quiet_console):
        config = ScaffoldConfig(output_dir=project_dir, quiet=True)
        _scaffold_all(config, resource, quiet_console)
        chart = "config/charts/operator"
        assert _tree(project_dir) == {
            "cmd/main.go",
            "api/v1/captain_types.go",
            f"{chart}/.helmignore",
            f"{chart}/templates/_helpers.tpl",
            f"{chart}/templates/webhook/certmanager-check.yaml",
            f"{chart}/templates/webhook/service.yaml",
            f"{chart}/templates/webhook/certificate.yaml",
        }

    def test_main_wiring(self, project_dir: Path, resource, quiet_console, boilerplate):
        config = ScaffoldConfig(output_dir=project_dir, quiet=True)
        _scaffold_all(config, resource, quiet_console)
        main = (project_dir / "cmd" / "main.go").read_text(encoding="utf-8")
        assert main.startswith(boilerplate + "\n")
        assert 'crewv1 "github.com/example/operator/api/v1"' in main
        assert '"github.com/example/operator/internal/controller"' in main
        assert "utilruntime.Must(crewv1.AddToScheme(scheme))" in main
        assert main.index("CaptainReconciler") < main.index("SetupWebhookWithManager")
        for name in ("imports", "scheme", "builder"):
            assert main.count(f"// +kubebuilder:scaffold:{name}") == 1

    def test_webhook_manifests_are_valid_yaml_outside_helm_actions(
        self, project_dir: Path, resource, quiet_console
    ):
        config = ScaffoldConfig(output_dir=project_dir, quiet=True)
        _scaffold_all(config, resource, quiet_console)
        service = project_dir / "config/charts/operator/templates/webhook/service.yaml"
        body = "\n".join(
            line for line in service.read_text(encoding="utf-8").splitlines() if "{{" not in line
        )
        doc = yaml.safe_load(body)
        assert doc["kind"] == "Service"
        assert doc["spec"]["ports"][0]["targetPort"] == 9443

    def test_hand_edits_survive_reruns(self, project_dir: Path, resource, quiet_console):
        config = ScaffoldConfig(output_dir=project_dir, quiet=True)
        project = config.load_project()
        InitScaffolder(config, project, console=quiet_console).scaffold()

        main_path = project_dir / "cmd" / "main.go"
        edited = main_path.read_text(encoding="utf-8").replace(
            '    setupLog.Info("starting manager")\n',
            '    setupLog.Info("hand written")\n    setupLog.Info("starting manager")\n',
        )
        main_path.write_text(edited, encoding="utf-8")

        ApiScaffolder(config, project, resource, console=quiet_console).scaffold()
        ApiScaffolder(config, project, resource, wire_resource=False, console=quiet_console).scaffold()
        InitScaffolder(config, project, console=quiet_console).scaffold()

        main = main_path.read_text(encoding="utf-8")
        assert 'setupLog.Info("hand written")' in main
        assert main.count("CaptainReconciler{") == 1
        assert main.count("crewv1.AddToScheme") == 1

    def test_removed_marker_fails_without_writing(self, project_dir: Path, resource, quiet_console):
        config = ScaffoldConfig(output_dir=project_dir, quiet=True)
        project = config.load_project()
        InitScaffolder(config, project, console=quiet_console).scaffold()

        main_path = project_dir / "cmd" / "main.go"
        broken = main_path.read_text(encoding="utf-8").replace("// +kubebuilder:scaffold:builder", "")
        main_path.write_text(broken, encoding="utf-8")

        with pytest.raises(MarkerNotFoundError):
            ApiScaffolder(config, project, resource, console=quiet_console).scaffold()
        assert main_path.read_text(encoding="utf-8") == broken
        # The types file was written before the failing builder.
        assert (project_dir / "api" / "v1" / "captain_types.go").exists()
