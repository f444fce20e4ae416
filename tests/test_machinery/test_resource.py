"""Tests for the resource descriptor and project context models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kubescaffold.machinery.resource import (
    ProjectContext,
    ResourceDescriptor,
    regular_plural,
    safe_import,
)

pytestmark = pytest.mark.unit


class TestSafeImport:
    def test_strips_dots_and_dashes(self):
        assert safe_import("crew.test-project.org") == "crewtestprojectorg"

    def test_plain_name_unchanged(self):
        assert safe_import("crew") == "crew"


class TestRegularPlural:
    @pytest.mark.parametrize(
        "word, plural",
        [
            ("captain", "captains"),
            ("policy", "policies"),
            ("gateway", "gateways"),
            ("box", "boxes"),
            ("class", "classes"),
            ("", ""),
        ],
    )
    def test_plural(self, word, plural):
        assert regular_plural(word) == plural


class TestResourceDescriptor:
    def test_derived_names(self, resource):
        assert resource.plural == "captains"
        assert resource.is_regular_plural is True
        assert resource.package_name == "crew"
        assert resource.import_alias == "crewv1"
        assert resource.qualified_group == "crew.testproject.org"

    def test_empty_group_uses_domain(self):
        res = ResourceDescriptor(version="v1", kind="Captain", domain="test-project.org")
        assert res.package_name == "testprojectorg"
        assert res.import_alias == "testprojectorgv1"
        assert res.qualified_group == "test-project.org"

    def test_irregular_plural(self):
        res = ResourceDescriptor(group="crew", version="v1", kind="Captain", plural="captainz")
        assert res.plural == "captainz"
        assert res.is_regular_plural is False

    def test_explicit_regular_flag_wins(self):
        res = ResourceDescriptor(
            group="crew", version="v1", kind="Captain", plural="captainz", is_regular_plural=True
        )
        assert res.is_regular_plural is True

    def test_api_path(self, resource):
        repo = "github.com/example/operator"
        assert resource.api_path(repo, multigroup=True) == f"{repo}/api/crew/v1"
        assert resource.api_path(repo, multigroup=False) == f"{repo}/api/v1"

    def test_replacer(self, resource):
        text = "api/%[group]/%[version]/%[kind]_types.go %[plural] %[group-package-name]"
        assert resource.replacer(text) == "api/crew/v1/captain_types.go captains crew"

    def test_is_immutable(self, resource):
        with pytest.raises(ValidationError):
            resource.kind = "Sailor"

    def test_kind_required(self):
        with pytest.raises(ValidationError):
            ResourceDescriptor(group="crew", version="v1", kind="")


class TestProjectContext:
    def test_from_yaml(self):
        ctx = ProjectContext.from_yaml(
            "domain: testproject.org\n"
            "layout:\n- go.kubebuilder.io/v4\n"
            "multigroup: true\n"
            "projectName: operator\n"
            "repo: github.com/example/operator\n"
        )
        assert ctx.repo == "github.com/example/operator"
        assert ctx.domain == "testproject.org"
        assert ctx.project_name == "operator"
        assert ctx.multigroup is True
        assert ctx.legacy_layout is False

    def test_go_v3_layout_is_legacy(self):
        ctx = ProjectContext.from_yaml("repo: example.com/op\nlayout:\n- go.kubebuilder.io/v3\n")
        assert ctx.legacy_layout is True

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError):
            ProjectContext.from_yaml("- just\n- a list\n")

    def test_from_project_file(self, project_dir):
        ctx = ProjectContext.from_project_file(project_dir / "PROJECT")
        assert ctx.project_name == "operator"
        assert ctx.multigroup is False
