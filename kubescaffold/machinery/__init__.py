"""Templating and marker-based code-injection machinery.

Quick usage::

    from kubescaffold.machinery import MemoryFilesystem, ProjectContext, ResourceDescriptor, Scaffold
    from kubescaffold.templates.golang import Main, MainUpdater

    scaffold = Scaffold(
        MemoryFilesystem(),
        boilerplate="// Copyright 2024",
        project=ProjectContext(repo="github.com/example/app", domain="example.com"),
        resource=ResourceDescriptor(group="crew", version="v1", kind="Captain"),
    )
    scaffold.execute(Main(), MainUpdater(wire_resource=True, wire_controller=True))
"""

from .builders import BOILERPLATE, PROJECT, REGISTRY, RESOURCE, Builder, Facets, Inserter, Template
from .errors import (
    DuplicateMarkerError,
    FileConflictError,
    MarkerError,
    MarkerNotFoundError,
    MissingFacetError,
    PathResolutionError,
    RenderError,
    ScaffoldError,
    ScaffoldIOError,
)
from .filesystem import DiskFilesystem, Filesystem, MemoryFilesystem
from .markers import (
    MARKER_PREFIX,
    CodeFragment,
    FragmentTemplate,
    InjectionReport,
    Marker,
    MarkerRegistry,
    inject,
    render_fragments,
)
from .paths import resolve_path
from .policy import Decision, IfExistsAction, decide
from .registry import SchemeRegistry
from .renderer import TemplateRenderer, hash_fnv
from .resource import ProjectContext, ResourceDescriptor
from .scaffold import Scaffold, ScaffoldResult

__all__ = [
    "BOILERPLATE",
    "MARKER_PREFIX",
    "PROJECT",
    "REGISTRY",
    "RESOURCE",
    "Builder",
    "CodeFragment",
    "Decision",
    "DiskFilesystem",
    "DuplicateMarkerError",
    "Facets",
    "FileConflictError",
    "Filesystem",
    "FragmentTemplate",
    "IfExistsAction",
    "InjectionReport",
    "Inserter",
    "Marker",
    "MarkerError",
    "MarkerNotFoundError",
    "MarkerRegistry",
    "MemoryFilesystem",
    "MissingFacetError",
    "PathResolutionError",
    "ProjectContext",
    "RenderError",
    "ResourceDescriptor",
    "Scaffold",
    "ScaffoldError",
    "ScaffoldIOError",
    "ScaffoldResult",
    "SchemeRegistry",
    "Template",
    "TemplateRenderer",
    "decide",
    "hash_fnv",
    "inject",
    "render_fragments",
    "resolve_path",
]
