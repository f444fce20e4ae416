"""Shared pytest fixtures for the kubescaffold test suite.

Provides reusable fixtures for:
- In-memory and on-disk filesystems
- Project contexts for every layout / grouping combination
- A sample resource descriptor and boilerplate header
- A silent Rich console and a scaffold factory wired to it
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import pytest
from rich.console import Console

from kubescaffold.machinery import (
    MemoryFilesystem,
    ProjectContext,
    ResourceDescriptor,
    Scaffold,
)

REPO = "github.com/example/operator"
DOMAIN = "testproject.org"

BOILERPLATE = """/*
Copyright 2024 The Example Authors.

Licensed under the Apache License, Version 2.0 (the "License").
*/"""


# ---------------------------------------------------------------------------
# Filesystems & console
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    """Empty in-memory filesystem."""
    return MemoryFilesystem()


@pytest.fixture
def quiet_console() -> Console:
    """Rich console that records output instead of printing it."""
    return Console(file=io.StringIO(), width=200, force_terminal=False, color_system=None)


@pytest.fixture
def boilerplate() -> str:
    return BOILERPLATE


# ---------------------------------------------------------------------------
# Project / resource
# ---------------------------------------------------------------------------


@pytest.fixture
def project() -> ProjectContext:
    """Single-group project in the nested layout."""
    return ProjectContext(repo=REPO, domain=DOMAIN, project_name="operator")


@pytest.fixture
def multigroup_project() -> ProjectContext:
    return ProjectContext(repo=REPO, domain=DOMAIN, project_name="operator", multigroup=True)


@pytest.fixture
def legacy_project() -> ProjectContext:
    return ProjectContext(repo=REPO, domain=DOMAIN, project_name="operator", legacy_layout=True)


@pytest.fixture
def resource() -> ResourceDescriptor:
    """Namespaced ``crew/v1 Captain`` resource."""
    return ResourceDescriptor(group="crew", version="v1", kind="Captain", domain=DOMAIN)


@pytest.fixture
def make_scaffold(
    memory_fs: MemoryFilesystem,
    quiet_console: Console,
    boilerplate: str,
    project: ProjectContext,
    resource: ResourceDescriptor,
) -> Callable[..., Scaffold]:
    """Factory building a ``Scaffold`` over ``memory_fs`` with overridable facets."""

    def _make(**overrides: Any) -> Scaffold:
        kwargs: dict[str, Any] = {
            "boilerplate": boilerplate,
            "project": project,
            "resource": resource,
            "console": quiet_console,
        }
        kwargs.update(overrides)
        fs = kwargs.pop("fs", memory_fs)
        return Scaffold(fs, **kwargs)

    return _make


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """On-disk project root with a PROJECT file and a boilerplate header."""
    root = tmp_path / "operator"
    (root / "hack").mkdir(parents=True)
    (root / "hack" / "boilerplate.go.txt").write_text(BOILERPLATE + "\n", encoding="utf-8")
    (root / "PROJECT").write_text(
        "domain: testproject.org\n"
        "layout:\n"
        "- go.kubebuilder.io/v4\n"
        "projectName: operator\n"
        f"repo: {REPO}\n"
        "version: \"3\"\n",
        encoding="utf-8",
    )
    return root
