"""Tests for the explicit scheme registry."""

from __future__ import annotations

import pytest

from kubescaffold.machinery import SchemeRegistry

pytestmark = pytest.mark.unit


class TestSchemeRegistry:
    def test_register_preserves_order(self):
        registry = SchemeRegistry()
        registry.register("crew.testproject.org/v1", "Captain", "CaptainList")
        registry.register("ship.testproject.org/v1beta1", "Frigate")
        assert registry.group_versions() == ["crew.testproject.org/v1", "ship.testproject.org/v1beta1"]
        assert registry.kinds_for("crew.testproject.org/v1") == ["Captain", "CaptainList"]

    def test_repeats_are_ignored(self):
        registry = SchemeRegistry()
        registry.register("crew.testproject.org/v1", "Captain")
        registry.register("crew.testproject.org/v1", "Captain", "CaptainList")
        assert registry.kinds_for("crew.testproject.org/v1") == ["Captain", "CaptainList"]

    def test_unknown_group_version(self):
        assert SchemeRegistry().kinds_for("nope/v1") == []

    def test_instances_are_independent(self):
        first = SchemeRegistry()
        first.register("crew.testproject.org/v1", "Captain")
        assert SchemeRegistry().group_versions() == []
