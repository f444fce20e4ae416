"""Controller manager entry point and its updater.

:class:`Main` creates ``cmd/main.go`` (``main.go`` in the legacy layout)
with three markers: ``imports``, ``scheme`` and ``builder``.
:class:`MainUpdater` later wires a resource into that file by inserting
import, scheme-registration and setup fragments at those markers.
"""

from __future__ import annotations

from dataclasses import dataclass

from kubescaffold.machinery import (
    BOILERPLATE,
    PROJECT,
    RESOURCE,
    Facets,
    FragmentTemplate,
    IfExistsAction,
    Inserter,
    ResourceDescriptor,
    Template,
)

DEFAULT_MAIN_PATH = "cmd/main.go"
DEFAULT_LEGACY_LAYOUT_MAIN_PATH = "main.go"

IMPORT_MARKER = "imports"
ADD_SCHEME_MARKER = "scheme"
SETUP_MARKER = "builder"


def main_path(legacy_layout: bool) -> str:
    return DEFAULT_LEGACY_LAYOUT_MAIN_PATH if legacy_layout else DEFAULT_MAIN_PATH


# ---------------------------------------------------------------------------
# Fragment variants
# ---------------------------------------------------------------------------

API_IMPORT_FRAGMENT = '{{ resource.import_alias }} "{{ api_path }}"\n'


@dataclass(frozen=True)
class ControllerWiring:
    """Import fragment and package qualifier of the reconciler package."""

    import_fragment: str
    qualifier: str

    def package(self, resource: ResourceDescriptor) -> str:
        return self.qualifier.format(package_name=resource.package_name)


# Keyed by (legacy_layout, multigroup).
CONTROLLER_WIRING: dict[tuple[bool, bool], ControllerWiring] = {
    (False, False): ControllerWiring('"{{ repo }}/internal/controller"\n', "controller"),
    (True, False): ControllerWiring('"{{ repo }}/controllers"\n', "controllers"),
    (False, True): ControllerWiring(
        '{{ resource.package_name }}controller '
        '"{{ repo }}/internal/controller/{{ resource.group }}"\n',
        "{package_name}controller",
    ),
    (True, True): ControllerWiring(
        '{{ resource.package_name }}controller "{{ repo }}/controllers/{{ resource.group }}"\n',
        "{package_name}controller",
    ),
}

ADD_SCHEME_FRAGMENT = "utilruntime.Must({{ resource.import_alias }}.AddToScheme(scheme))\n"

RECONCILER_SETUP_FRAGMENT = """\
if err = (&{{ controller_package }}.{{ resource.kind }}Reconciler{
    MaxConcurrentReconciles: concurrent,
    RateLimiter:             utilcontroller.GetRateLimiter(rateLimiterOptions),
}).SetupWithManager(mgr); err != nil {
    setupLog.Error(err, "unable to create controller", "controller", "{{ resource.kind }}")
    os.Exit(1)
}
"""

WEBHOOK_SETUP_FRAGMENT = """\
if os.Getenv("DISABLE_WEBHOOKS") != "true" {
    if err = (&{{ resource.import_alias }}.{{ resource.kind }}{}).SetupWebhookWithManager(mgr); err != nil {
        setupLog.Error(err, "unable to create webhook", "webhook", "{{ resource.kind }}")
        os.Exit(1)
    }
} else {
    setupLog.Info("webhook disabled", "webhook", "{{ resource.kind }}")
}
"""


def uses_group_package(facets: Facets) -> bool:
    """Whether controllers for the resource live in a per-group package."""
    return facets.multigroup and facets.resource is not None and bool(facets.resource.group)


def controller_wiring(facets: Facets) -> ControllerWiring:
    """Select the controller wiring variant for the project's layout and grouping."""
    return CONTROLLER_WIRING[(facets.legacy_layout, uses_group_package(facets))]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


@dataclass
class Main(Template):
    """Scaffolds the file that defines the controller manager entry point."""

    requires = frozenset({BOILERPLATE, PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return main_path(facets.legacy_layout)

    def get_body(self, facets: Facets) -> str:
        return MAIN_TEMPLATE


@dataclass
class MainUpdater(Inserter):
    """Updates the entry point to register, run and serve a resource."""

    wire_resource: bool = False
    wire_controller: bool = False
    wire_webhook: bool = False

    requires = frozenset({PROJECT})
    marker_names = (IMPORT_MARKER, ADD_SCHEME_MARKER, SETUP_MARKER)

    def get_path(self, facets: Facets) -> str:
        return main_path(facets.legacy_layout)

    def extra_context(self, facets: Facets) -> dict[str, object]:
        if facets.resource is None or facets.project is None:
            return {}
        return {
            "api_path": facets.resource.api_path(facets.project.repo, facets.multigroup),
            "controller_package": controller_wiring(facets).package(facets.resource),
        }

    def get_fragments(self, facets: Facets) -> list[FragmentTemplate]:
        if not (self.wire_resource or self.wire_controller or self.wire_webhook):
            return []
        facets.require({RESOURCE}, builder=self.name)
        wiring = controller_wiring(facets)
        return [
            FragmentTemplate(IMPORT_MARKER, API_IMPORT_FRAGMENT, self.wire_resource),
            FragmentTemplate(IMPORT_MARKER, wiring.import_fragment, self.wire_controller),
            FragmentTemplate(ADD_SCHEME_MARKER, ADD_SCHEME_FRAGMENT, self.wire_resource),
            FragmentTemplate(SETUP_MARKER, RECONCILER_SETUP_FRAGMENT, self.wire_controller),
            FragmentTemplate(SETUP_MARKER, WEBHOOK_SETUP_FRAGMENT, self.wire_webhook),
        ]


MAIN_TEMPLATE = """\
{{ boilerplate }}

package main

import (
    "flag"
    "os"

    // Import all Kubernetes client auth plugins (e.g. Azure, GCP, OIDC, etc.)
    // to ensure that exec-entrypoint and run can make use of them.
    _ "k8s.io/client-go/plugin/pkg/client/auth"

    "k8s.io/apimachinery/pkg/runtime"
    utilruntime "k8s.io/apimachinery/pkg/util/runtime"
    clientgoscheme "k8s.io/client-go/kubernetes/scheme"
    ctrl "sigs.k8s.io/controller-runtime"
    "sigs.k8s.io/controller-runtime/pkg/healthz"
    "sigs.k8s.io/controller-runtime/pkg/log/zap"

    utilcontroller "github.com/labring/operator-sdk/controller"
    {{ marker("imports") }}
)

var (
    scheme   = runtime.NewScheme()
    setupLog = ctrl.Log.WithName("setup")
)

func init() {
    utilruntime.Must(clientgoscheme.AddToScheme(scheme))

    {{ marker("scheme") }}
}

func main() {
    var (
        metricsAddr          string
        enableLeaderElection bool
        probeAddr            string
        concurrent           int
        rateLimiterOptions   utilcontroller.RateLimiterOptions
    )
    flag.StringVar(&metricsAddr, "metrics-bind-address", ":8080", "The address the metric endpoint binds to.")
    flag.StringVar(&probeAddr, "health-probe-bind-address", ":8081", "The address the probe endpoint binds to.")
    flag.BoolVar(&enableLeaderElection, "leader-elect", false,
        "Enable leader election for controller manager. "+
            "Enabling this will ensure there is only one active controller manager.")
    flag.IntVar(&concurrent, "concurrent", 5, "The number of concurrent reconciles.")
    rateLimiterOptions.BindFlags(flag.CommandLine)
    opts := zap.Options{
        Development: true,
    }
    opts.BindFlags(flag.CommandLine)
    flag.Parse()

    ctrl.SetLogger(zap.New(zap.UseFlagOptions(&opts)))

    mgr, err := ctrl.NewManager(ctrl.GetConfigOrDie(), ctrl.Options{
        Scheme:                 scheme,
        MetricsBindAddress:     metricsAddr,
        Port:                   9443,
        HealthProbeBindAddress: probeAddr,
        LeaderElection:         enableLeaderElection,
        LeaderElectionID:       "{{ repo | hash_fnv }}.{{ domain }}",
    })
    if err != nil {
        setupLog.Error(err, "unable to start manager")
        os.Exit(1)
    }

    {{ marker("builder") }}

    if err := mgr.AddHealthzCheck("healthz", healthz.Ping); err != nil {
        setupLog.Error(err, "unable to set up health check")
        os.Exit(1)
    }
    if err := mgr.AddReadyzCheck("readyz", healthz.Ping); err != nil {
        setupLog.Error(err, "unable to set up ready check")
        os.Exit(1)
    }

    setupLog.Info("starting manager")
    if err := mgr.Start(ctrl.SetupSignalHandler()); err != nil {
        setupLog.Error(err, "problem running manager")
        os.Exit(1)
    }
}
"""
