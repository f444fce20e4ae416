"""Resource descriptor and project context models.

Both models are immutable pydantic models: they are built once per scaffold
invocation and shared, read-only, by every builder in the run.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Layout plugin keys recorded in a PROJECT file that select the flat layout
# (``main.go`` and ``controllers/`` at the repository root).
LEGACY_LAYOUT_PREFIXES: tuple[str, ...] = ("go.kubebuilder.io/v2", "go.kubebuilder.io/v3")


def safe_import(unsafe: str) -> str:
    """Strip the characters that are not allowed in a Go package identifier.

    Examples::

        safe_import("crew.testproject.org") -> "crewtestprojectorg"
        safe_import("ship-v1") -> "shipv1"
    """
    return unsafe.replace("-", "").replace(".", "")


def regular_plural(word: str) -> str:
    """Return the regular English plural of a lower-cased *word*.

    E.g. ``'captain'`` -> ``'captains'``, ``'policy'`` -> ``'policies'``,
    ``'box'`` -> ``'boxes'``.
    """
    if not word:
        return word
    if word.endswith("y") and not word.endswith(("ay", "ey", "oy", "uy")):
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"


class ResourceDescriptor(BaseModel):
    """Group/version/kind of the API resource being scaffolded."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(default="", description="API group, empty for core-style resources")
    version: str = Field(..., min_length=1, description="API version, e.g. v1alpha1")
    kind: str = Field(..., min_length=1, description="Kind in PascalCase, e.g. Captain")
    plural: str = Field(default="", description="Resource plural; derived from kind if empty")
    domain: str = Field(default="", description="Project domain, e.g. testproject.org")
    namespaced: bool = Field(default=True, description="False for cluster-scoped resources")
    is_regular_plural: bool | None = Field(
        default=None,
        description="Whether plural follows the regular rule; derived if omitted",
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_plural(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = str(data.get("kind", ""))
        expected = regular_plural(kind.lower())
        plural = data.get("plural") or expected
        derived = {**data, "plural": plural}
        if derived.get("is_regular_plural") is None:
            derived["is_regular_plural"] = plural == expected
        return derived

    # -- Derived names ------------------------------------------------------

    @property
    def qualified_group(self) -> str:
        """``group.domain``, or whichever of the two is non-empty."""
        if self.group and self.domain:
            return f"{self.group}.{self.domain}"
        return self.group or self.domain

    @property
    def package_name(self) -> str:
        """Go package name of the group (the domain when the group is empty)."""
        return safe_import(self.group or self.domain)

    @property
    def import_alias(self) -> str:
        """Go import alias of the API package, e.g. ``crewv1``."""
        return safe_import((self.group or self.domain) + self.version)

    def api_path(self, repo: str, multigroup: bool) -> str:
        """Import path of the API package inside *repo*."""
        if multigroup and self.group:
            return f"{repo}/api/{self.group}/{self.version}"
        return f"{repo}/api/{self.version}"

    def replacements(self) -> dict[str, str]:
        """Return the ``%[placeholder]`` -> value table used in path patterns."""
        return {
            "%[group]": self.group,
            "%[group-package-name]": self.package_name,
            "%[version]": self.version,
            "%[kind]": self.kind.lower(),
            "%[plural]": self.plural.lower(),
        }

    def replacer(self, text: str) -> str:
        """Substitute every resource placeholder in *text*."""
        table = self.replacements()
        pattern = re.compile("|".join(re.escape(key) for key in table))
        return pattern.sub(lambda match: table[match.group(0)], text)


class ProjectContext(BaseModel):
    """Project-wide settings shared by every builder."""

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., min_length=1, description="Go module path of the project")
    domain: str = Field(default="", description="Project domain")
    project_name: str = Field(default="", description="Project name, used for chart paths")
    multigroup: bool = Field(default=False, description="Resources live under per-group packages")
    legacy_layout: bool = Field(default=False, description="Flat main.go/controllers layout")

    @classmethod
    def from_yaml(cls, text: str) -> "ProjectContext":
        """Build a context from the text of a ``PROJECT`` file.

        Recognised keys: ``repo``, ``domain``, ``projectName``,
        ``multigroup`` and ``layout`` (a list of plugin keys; a go/v2 or
        go/v3 key selects the legacy layout).
        """
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("PROJECT file must contain a mapping")
        layout = data.get("layout") or []
        if isinstance(layout, str):
            layout = [layout]
        legacy = any(str(key).startswith(LEGACY_LAYOUT_PREFIXES) for key in layout)
        return cls(
            repo=data.get("repo", ""),
            domain=data.get("domain", ""),
            project_name=data.get("projectName", ""),
            multigroup=bool(data.get("multigroup", False)),
            legacy_layout=legacy,
        )

    @classmethod
    def from_project_file(cls, path: str | Path) -> "ProjectContext":
        """Load a context from a ``PROJECT`` file on disk."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml(raw)
