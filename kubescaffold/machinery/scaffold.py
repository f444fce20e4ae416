"""Scaffold orchestrator.

Applies an ordered list of builders to a filesystem.  Each builder is
resolved, rendered or injected, and written before the next one starts.
The first failure stops the run: files written by earlier builders stay on
disk, and the raised :class:`ScaffoldError` names the builder and path that
failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.markup import escape

from kubescaffold.utils import console as default_console

from .builders import Builder, Facets, Inserter, Template
from .errors import FileConflictError, ScaffoldError, ScaffoldIOError
from .filesystem import Filesystem
from .markers import InjectionReport, Marker, MarkerRegistry, inject, render_fragments
from .paths import resolve_path
from .policy import Decision, decide
from .registry import SchemeRegistry
from .renderer import TemplateRenderer
from .resource import ProjectContext, ResourceDescriptor


@dataclass
class ScaffoldResult:
    """Outcome of a successful scaffold run."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)

    @property
    def touched(self) -> list[str]:
        """Paths whose content was written, in builder order."""
        return list(self.written)


class Scaffold:
    """Runs builders against a filesystem, one at a time, in order.

    Attributes:
        fs: Filesystem capability files are read from and written to.
        facets: Boilerplate, resource, project and registry inputs shared by
            all builders.
        renderer: Template renderer used for bodies and fragments.
        markers: Markers emitted by templates rendered during this run.
    """

    def __init__(
        self,
        fs: Filesystem,
        *,
        boilerplate: str | None = None,
        resource: ResourceDescriptor | None = None,
        project: ProjectContext | None = None,
        registry: SchemeRegistry | None = None,
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.fs = fs
        self.facets = Facets(
            boilerplate=boilerplate,
            resource=resource,
            project=project,
            registry=registry,
        )
        self.renderer = renderer or TemplateRenderer()
        self.markers = MarkerRegistry()
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    def execute(self, *builders: Builder) -> ScaffoldResult:
        """Apply *builders* in order.

        Returns:
            The paths written and skipped, plus progress messages.

        Raises:
            ScaffoldError: On the first failure of any builder.  The error's
                ``builder`` and ``path`` attributes identify the failure.
        """
        result = ScaffoldResult()
        for builder in builders:
            try:
                self._apply(builder, result)
            except ScaffoldError as exc:
                if not exc.builder:
                    exc.builder = builder.name
                self.console.print(f"  [bold red]x[/bold red] {escape(str(exc))}")
                raise
        return result

    # -- Builder application -----------------------------------------------

    def _apply(self, builder: Builder, result: ScaffoldResult) -> None:
        self.facets.require(builder.requires, builder=builder.name)
        path = resolve_path(
            builder.get_path(self.facets),
            self.facets.resource,
            multigroup=self.facets.multigroup,
            legacy_layout=self.facets.legacy_layout,
        )
        try:
            if isinstance(builder, Template):
                self._apply_template(builder, path, result)
            elif isinstance(builder, Inserter):
                self._apply_inserter(builder, path, result)
            else:
                raise TypeError(f"unsupported builder type: {builder.name}")
        except ScaffoldError as exc:
            if not exc.path:
                exc.path = path
            raise

    def _apply_template(self, builder: Template, path: str, result: ScaffoldResult) -> None:
        action = builder.get_if_exists_action()
        decision = decide(self._exists(path), action, builder.force)
        if decision is Decision.SKIP:
            self._report(result, f"skipped {path} (already exists)", "[yellow]-[/yellow]")
            result.skipped.append(path)
            return
        if decision is Decision.ABORT:
            raise FileConflictError(
                f"file already exists and policy is {action.value!r}; use force to overwrite",
                path=path,
            )

        builder.before_render(self.facets)
        self.markers.reset(path)
        content = self.renderer.render(
            builder.get_body(self.facets), self._context(builder, path), path=path
        )
        self._write(path, content)
        verb = "overwrote" if decision is Decision.OVERWRITE else "created"
        self._report(result, f"{verb} {path}", "[green]+[/green]")
        result.written.append(path)

    def _apply_inserter(self, builder: Inserter, path: str, result: ScaffoldResult) -> None:
        markers = [Marker(path, name) for name in builder.marker_names]
        fragments = render_fragments(
            builder.get_fragments(self.facets),
            self.renderer,
            self._context(builder, path),
            path=path,
        )
        content = self._read(path)
        report = InjectionReport()
        updated = inject(
            content,
            markers,
            fragments,
            path=path,
            deduplicate=builder.deduplicate,
            report=report,
        )
        if updated == content:
            self._report(result, f"unchanged {path}", "[dim]=[/dim]")
            result.skipped.append(path)
            return
        self._write(path, updated)
        inserted = sum(report.inserted.values())
        self._report(result, f"updated {path} ({inserted} fragment(s))", "[cyan]~[/cyan]")
        result.written.append(path)

    # -- Context -----------------------------------------------------------

    def _context(self, builder: Builder, path: str) -> dict[str, Any]:
        """Build the render context from the supplied facets only."""
        facets = self.facets
        context: dict[str, Any] = {
            "path": path,
            "marker": self.markers.emitter(path),
        }
        if facets.boilerplate is not None:
            context["boilerplate"] = facets.boilerplate
        if facets.resource is not None:
            context["resource"] = facets.resource
        if facets.project is not None:
            context.update(
                repo=facets.project.repo,
                domain=facets.project.domain,
                project_name=facets.project.project_name,
                multigroup=facets.project.multigroup,
                legacy_layout=facets.project.legacy_layout,
            )
        if facets.registry is not None:
            context["registry"] = facets.registry
        context.update(builder.extra_context(facets))
        return context

    # -- Filesystem access -------------------------------------------------

    def _exists(self, path: str) -> bool:
        try:
            return self.fs.exists(path)
        except OSError as exc:
            raise ScaffoldIOError(f"cannot stat file: {exc}", path=path) from exc

    def _read(self, path: str) -> str:
        try:
            return self.fs.read(path)
        except (OSError, UnicodeError) as exc:
            raise ScaffoldIOError(f"cannot read file: {exc}", path=path) from exc

    def _write(self, path: str, content: str) -> None:
        try:
            self.fs.write(path, content)
        except (OSError, UnicodeError) as exc:
            raise ScaffoldIOError(f"cannot write file: {exc}", path=path) from exc

    def _report(self, result: ScaffoldResult, message: str, bullet: str) -> None:
        result.messages.append(message)
        self.console.print(f"  {bullet} {escape(message)}")
