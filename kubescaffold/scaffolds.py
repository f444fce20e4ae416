"""Plugin scaffolders.

Each scaffolder assembles the ordered builder list for one user-facing
operation and runs it through a :class:`~kubescaffold.machinery.Scaffold`:

* :class:`InitScaffolder` -- a new project's entry point and chart skeleton.
* :class:`ApiScaffolder` -- a new API type and its controller wiring.
* :class:`WebhookScaffolder` -- webhook chart manifests and webhook wiring.
"""

from __future__ import annotations

from rich.console import Console

from kubescaffold.config import ScaffoldConfig
from kubescaffold.machinery import (
    DiskFilesystem,
    Filesystem,
    ProjectContext,
    ResourceDescriptor,
    Scaffold,
    ScaffoldResult,
    SchemeRegistry,
)
from kubescaffold.machinery.builders import Builder
from kubescaffold.templates.golang import Main, MainUpdater, Types
from kubescaffold.templates.helm import (
    Helpers,
    HelmIgnore,
    WebhookCertManagerCheck,
    WebhookCertificate,
    WebhookService,
)
from kubescaffold.utils import console as default_console
from kubescaffold.utils import print_success, print_summary_table


class _Scaffolder:
    """Shared wiring: filesystem, console, boilerplate and summary output."""

    def __init__(
        self,
        config: ScaffoldConfig,
        project: ProjectContext,
        *,
        fs: Filesystem | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.project = project
        self.fs = fs if fs is not None else DiskFilesystem(config.output_dir)
        if console is not None:
            self.console = console
        elif config.quiet:
            self.console = Console(quiet=True)
        else:
            self.console = default_console

    def _run(
        self,
        banner: str,
        builders: list[Builder],
        *,
        resource: ResourceDescriptor | None = None,
        registry: SchemeRegistry | None = None,
    ) -> ScaffoldResult:
        self.console.print(banner)
        scaffold = Scaffold(
            self.fs,
            boilerplate=self.config.load_boilerplate(),
            resource=resource,
            project=self.project,
            registry=registry,
            console=self.console,
        )
        result = scaffold.execute(*builders)
        if not self.config.quiet:
            print_summary_table(
                {
                    "Written": str(len(result.written)),
                    "Skipped": str(len(result.skipped)),
                },
                title=type(self).__name__,
                out=self.console,
            )
            print_success("Scaffolding complete.", out=self.console)
        return result


class InitScaffolder(_Scaffolder):
    """Scaffolds the files of a brand-new project."""

    def scaffold(self) -> ScaffoldResult:
        force = self.config.force
        return self._run(
            "Writing scaffold for you to edit...",
            [
                Main(force=force),
                HelmIgnore(force=force),
                Helpers(force=force),
            ],
        )


class ApiScaffolder(_Scaffolder):
    """Scaffolds a new API type and wires it into the manager.

    ``wire_resource`` creates the type definition and registers it with the
    scheme; ``wire_controller`` wires a reconciler into the manager.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        project: ProjectContext,
        resource: ResourceDescriptor,
        *,
        wire_resource: bool = True,
        wire_controller: bool = True,
        registry: SchemeRegistry | None = None,
        fs: Filesystem | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(config, project, fs=fs, console=console)
        self.resource = resource
        self.wire_resource = wire_resource
        self.wire_controller = wire_controller
        self.registry = registry if registry is not None else SchemeRegistry()

    def scaffold(self) -> ScaffoldResult:
        builders: list[Builder] = []
        if self.wire_resource:
            builders.append(Types(force=self.config.force))
        builders.append(
            MainUpdater(
                wire_resource=self.wire_resource,
                wire_controller=self.wire_controller,
            )
        )
        return self._run(
            "Writing scaffold for you to edit...",
            builders,
            resource=self.resource,
            registry=self.registry,
        )


class WebhookScaffolder(_Scaffolder):
    """Scaffolds the chart manifests that serve a resource's webhooks."""

    def __init__(
        self,
        config: ScaffoldConfig,
        project: ProjectContext,
        resource: ResourceDescriptor,
        *,
        fs: Filesystem | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(config, project, fs=fs, console=console)
        self.resource = resource

    def scaffold(self) -> ScaffoldResult:
        force = self.config.force
        return self._run(
            "Writing helm manifests for you to edit...",
            [
                Helpers(force=True, webhook_enabled=True),
                WebhookCertManagerCheck(force=force),
                WebhookService(force=force),
                WebhookCertificate(force=force),
                MainUpdater(wire_webhook=True),
            ],
            resource=self.resource,
        )
