"""Tests for path pattern resolution."""

from __future__ import annotations

import pytest

from kubescaffold.machinery import PathResolutionError, ResourceDescriptor, resolve_path
from kubescaffold.machinery.paths import controller_dir

pytestmark = pytest.mark.unit

TYPES_PATTERN = "api/%[group]/%[version]/%[kind]_types.go"


class TestResolvePath:
    def test_single_group_drops_group_segment(self, resource):
        assert resolve_path(TYPES_PATTERN, resource) == "api/v1/captain_types.go"

    def test_multigroup_keeps_group_segment(self, resource):
        assert resolve_path(TYPES_PATTERN, resource, multigroup=True) == "api/crew/v1/captain_types.go"

    def test_multigroup_without_group_drops_segment(self):
        res = ResourceDescriptor(version="v1", kind="Captain", domain="testproject.org")
        assert resolve_path(TYPES_PATTERN, res, multigroup=True) == "api/v1/captain_types.go"

    def test_is_pure(self, resource):
        first = resolve_path(TYPES_PATTERN, resource, multigroup=True)
        second = resolve_path(TYPES_PATTERN, resource, multigroup=True)
        assert first == second

    @pytest.mark.parametrize(
        "legacy, multigroup, expected",
        [
            (False, False, "internal/controller/captain_controller.go"),
            (True, False, "controllers/captain_controller.go"),
            (False, True, "internal/controller/crew/captain_controller.go"),
            (True, True, "controllers/crew/captain_controller.go"),
        ],
    )
    def test_controller_dir(self, resource, legacy, multigroup, expected):
        pattern = "%[controller-dir]/%[group]/%[kind]_controller.go"
        assert resolve_path(pattern, resource, multigroup=multigroup, legacy_layout=legacy) == expected

    def test_plural_and_package_name(self, resource):
        assert resolve_path("samples/%[group-package-name]_%[plural].yaml", resource) == (
            "samples/crew_captains.yaml"
        )

    def test_embedded_group_becomes_empty(self, resource):
        assert resolve_path("config/%[group]rbac/role.yaml", resource) == "config/rbac/role.yaml"

    def test_pattern_without_placeholders(self):
        assert resolve_path("./hack//boilerplate.go.txt", None) == "hack/boilerplate.go.txt"

    def test_unknown_placeholder(self, resource):
        with pytest.raises(PathResolutionError, match="%\\[unknown\\]"):
            resolve_path("api/%[unknown]/file.go", resource)

    def test_resource_placeholder_without_resource(self):
        with pytest.raises(PathResolutionError):
            resolve_path("api/%[kind]_types.go", None)

    def test_empty_result(self, resource):
        with pytest.raises(PathResolutionError):
            resolve_path("%[group]", resource)

    def test_absolute_pattern(self):
        with pytest.raises(PathResolutionError):
            resolve_path("/etc/passwd", None)


class TestControllerDir:
    def test_layouts(self):
        assert controller_dir(True) == "controllers"
        assert controller_dir(False) == "internal/controller"
