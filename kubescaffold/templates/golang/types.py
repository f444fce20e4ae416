"""API type definitions for a new resource."""

from __future__ import annotations

from dataclasses import dataclass

from kubescaffold.machinery import BOILERPLATE, PROJECT, RESOURCE, Facets, IfExistsAction, Template


@dataclass
class Types(Template):
    """Scaffolds the file that defines the schema for a CRD.

    The file is meant to be edited by hand, so an existing one is an error
    unless ``force`` is set.  When the scaffold carries a scheme registry,
    the kind and its list type are recorded in it before rendering, and the
    registration block lists every kind the registry holds for the
    group-version.
    """

    requires = frozenset({BOILERPLATE, PROJECT, RESOURCE})
    default_if_exists = IfExistsAction.ERROR

    def default_path(self, facets: Facets) -> str:
        return "api/%[group]/%[version]/%[kind]_types.go"

    def get_body(self, facets: Facets) -> str:
        return TYPES_TEMPLATE

    def scheme_kinds(self, facets: Facets) -> list[str]:
        kind = facets.resource.kind
        return [kind, f"{kind}List"]

    def group_version(self, facets: Facets) -> str:
        resource = facets.resource
        return f"{resource.qualified_group}/{resource.version}"

    def extra_context(self, facets: Facets) -> dict[str, object]:
        return {
            "group_version": self.group_version(facets),
            "scheme_kinds": self.scheme_kinds(facets),
        }

    def before_render(self, facets: Facets) -> None:
        if facets.registry is None:
            return
        facets.registry.register(self.group_version(facets), *self.scheme_kinds(facets))


TYPES_TEMPLATE = """\
{{ boilerplate }}

package {{ resource.version }}

import (
    metav1 "k8s.io/apimachinery/pkg/apis/meta/v1"
)

// EDIT THIS FILE!  THIS IS SCAFFOLDING FOR YOU TO OWN!
// NOTE: json tags are required.  Any new fields you add must have json tags for the fields to be serialized.

// {{ resource.kind }}Spec defines the desired state of {{ resource.kind }}
type {{ resource.kind }}Spec struct {
    // INSERT ADDITIONAL SPEC FIELDS - desired state of cluster
    // Important: Run "make" to regenerate code after modifying this file

    // Foo is an example field of {{ resource.kind }}. Edit {{ resource.kind | lower }}_types.go to remove/update
    Foo string `json:"foo,omitempty"`
}

type {{ resource.kind }}Phase string

// These are the valid phases of {{ resource.kind }}.
const (
    {{ resource.kind }}Pending {{ resource.kind }}Phase = "Pending"
    {{ resource.kind }}Unknown {{ resource.kind }}Phase = "Unknown"
    {{ resource.kind }}Active  {{ resource.kind }}Phase = "Active"
)

// {{ resource.kind }}Status defines the observed state of {{ resource.kind }}
type {{ resource.kind }}Status struct {
    // Phase represents the current phase of {{ resource.kind }}.
    //+kubebuilder:default:=Unknown
    Phase {{ resource.kind }}Phase `json:"phase,omitempty"`
    // Represents the observations of a {{ resource.kind }}'s current state.
    Conditions []metav1.Condition `json:"conditions,omitempty" patchStrategy:"merge" patchMergeKey:"type" protobuf:"bytes,1,rep,name=conditions"`
}

//+kubebuilder:object:root=true
//+kubebuilder:subresource:status
{% if not resource.namespaced and not resource.is_regular_plural %}
//+kubebuilder:resource:path={{ resource.plural }},scope=Cluster
{% elif not resource.namespaced %}
//+kubebuilder:resource:scope=Cluster
{% elif not resource.is_regular_plural %}
//+kubebuilder:resource:path={{ resource.plural }}
{% endif %}

// {{ resource.kind }} is the Schema for the {{ resource.plural }} API
type {{ resource.kind }} struct {
    metav1.TypeMeta   `json:",inline"`
    metav1.ObjectMeta `json:"metadata,omitempty"`

    Spec   {{ resource.kind }}Spec   `json:"spec,omitempty"`
    Status {{ resource.kind }}Status `json:"status,omitempty"`
}

//+kubebuilder:object:root=true

// {{ resource.kind }}List contains a list of {{ resource.kind }}
type {{ resource.kind }}List struct {
    metav1.TypeMeta `json:",inline"`
    metav1.ListMeta `json:"metadata,omitempty"`
    Items           []{{ resource.kind }} `json:"items"`
}

{% set kinds = registry.kinds_for(group_version) if registry is defined else scheme_kinds %}
func init() {
    SchemeBuilder.Register({% for kind in kinds %}&{{ kind }}{}{% if not loop.last %}, {% endif %}{% endfor %})
}
"""
