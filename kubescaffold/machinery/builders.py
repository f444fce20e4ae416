"""Builder declarations consumed by the scaffold orchestrator.

There are two kinds of builder:

* :class:`Template` -- creates a file from a template body, subject to an
  existence policy.
* :class:`Inserter` -- injects rendered code fragments at the markers of an
  existing file.

Builders declare which *facets* (boilerplate header, resource descriptor,
project context, scheme registry) they need through ``requires``.  The
orchestrator checks those against the facets it was given before touching
any file for that builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .errors import MissingFacetError
from .markers import FragmentTemplate
from .policy import IfExistsAction
from .registry import SchemeRegistry
from .resource import ProjectContext, ResourceDescriptor

BOILERPLATE = "boilerplate"
RESOURCE = "resource"
PROJECT = "project"
REGISTRY = "registry"

FACET_NAMES: tuple[str, ...] = (BOILERPLATE, RESOURCE, PROJECT, REGISTRY)


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Facets:
    """Inputs shared by the builders of one scaffold run."""

    boilerplate: str | None = None
    resource: ResourceDescriptor | None = None
    project: ProjectContext | None = None
    registry: SchemeRegistry | None = None

    def missing(self, names: frozenset[str] | set[str]) -> tuple[str, ...]:
        """Return the facet names from *names* that were not supplied."""
        return tuple(name for name in FACET_NAMES if name in names and getattr(self, name) is None)

    def require(self, names: frozenset[str] | set[str], *, builder: str = "") -> None:
        """Raise :class:`MissingFacetError` unless every facet in *names* is set."""
        unknown = sorted(set(names) - set(FACET_NAMES))
        if unknown:
            raise MissingFacetError(
                f"unknown facet(s) requested: {', '.join(unknown)}",
                builder=builder,
                facets=tuple(unknown),
            )
        missing = self.missing(names)
        if missing:
            raise MissingFacetError(
                f"missing required facet(s): {', '.join(missing)}",
                builder=builder,
                facets=missing,
            )

    @property
    def multigroup(self) -> bool:
        return self.project.multigroup if self.project is not None else False

    @property
    def legacy_layout(self) -> bool:
        return self.project.legacy_layout if self.project is not None else False


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


class Builder:
    """Common behaviour of templates and inserters."""

    requires: ClassVar[frozenset[str]] = frozenset()

    @property
    def name(self) -> str:
        return type(self).__name__

    def get_path(self, facets: Facets) -> str:
        """Return the path pattern of the file this builder targets.

        Required override; :class:`Template` supplies one that defers to
        :meth:`Template.default_path`.
        """
        raise NotImplementedError

    def extra_context(self, facets: Facets) -> dict[str, object]:
        """Builder-specific render context entries."""
        return {}


@dataclass
class Template(Builder):
    """Creates a file from ``template_body``.

    Subclasses set ``template_body`` and ``default_if_exists`` and implement
    :meth:`default_path`.  ``path`` overrides the default path pattern and
    ``if_exists`` overrides the default policy; ``force`` turns a ``SKIP`` or
    ``ERROR`` policy into ``OVERWRITE``.
    """

    path: str = ""
    force: bool = False
    if_exists: IfExistsAction | None = None

    template_body: ClassVar[str] = ""
    default_if_exists: ClassVar[IfExistsAction] = IfExistsAction.ERROR

    def default_path(self, facets: Facets) -> str:
        """Path pattern used when ``path`` is empty.  Required override."""
        raise NotImplementedError

    def get_path(self, facets: Facets) -> str:
        return self.path or self.default_path(facets)

    def get_body(self, facets: Facets) -> str:
        return self.template_body

    def get_if_exists_action(self) -> IfExistsAction:
        return self.if_exists if self.if_exists is not None else self.default_if_exists

    def before_render(self, facets: Facets) -> None:
        """Hook run right before the body is rendered."""


@dataclass
class Inserter(Builder):
    """Injects fragments at the markers of an existing file.

    Subclasses list the markers they own in ``marker_names`` and return
    their fragment templates, in insertion order, from
    :meth:`get_fragments`.
    """

    deduplicate: bool = True

    marker_names: ClassVar[tuple[str, ...]] = ()

    def get_fragments(self, facets: Facets) -> list[FragmentTemplate]:
        """Fragment templates in insertion order.  Required override."""
        raise NotImplementedError
