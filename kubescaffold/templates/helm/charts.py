"""Helm chart files for the controller manager.

Chart bodies are Helm templates themselves, so their ``{{ ... }}`` actions
are wrapped in ``{% raw %}`` blocks and pass through rendering untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

from kubescaffold.machinery import PROJECT, Facets, IfExistsAction, Template


def chart_dir(facets: Facets) -> str:
    return f"config/charts/{facets.project.project_name}"


@dataclass
class HelmIgnore(Template):
    """Scaffolds the chart's ``.helmignore``.

    Skipped when it already exists (e.g. because a webhook was already
    created), unless forced.
    """

    requires = frozenset({PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return f"{chart_dir(facets)}/.helmignore"

    def get_body(self, facets: Facets) -> str:
        return HELM_IGNORE_TEMPLATE


@dataclass
class Helpers(Template):
    """Scaffolds ``templates/_helpers.tpl`` with the chart's named templates."""

    webhook_enabled: bool = False

    requires = frozenset({PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return f"{chart_dir(facets)}/templates/_helpers.tpl"

    def get_body(self, facets: Facets) -> str:
        return HELPERS_TEMPLATE

    def extra_context(self, facets: Facets) -> dict[str, object]:
        return {"webhook_enabled": self.webhook_enabled}


HELM_IGNORE_TEMPLATE = """\
# Patterns to ignore when building packages.
# This supports shell glob matching, relative path matching, and
# negation (prefixed with !). Only one pattern per line.
.DS_Store
# Common VCS dirs
.git/
.gitignore
.bzr/
.bzrignore
.hg/
.hgignore
.svn/
# Common backup files
*.swp
*.bak
*.tmp
*.orig
*~
# Various IDEs
.project
.idea/
*.tmproj
.vscode/

"""

HELPERS_TEMPLATE = """\
{% raw %}
{{/*
Expand the name of the chart.
*/}}
{{- define "chart.name" -}}
{{- default .Chart.Name .Values.nameOverride | trunc 63 | trimSuffix "-" }}
{{- end }}

{{/*
Create a default fully qualified app name.
*/}}
{{- define "chart.fullname" -}}
{{- if .Values.fullnameOverride }}
{{- .Values.fullnameOverride | trunc 63 | trimSuffix "-" }}
{{- else }}
{{- printf "%s-%s" .Release.Name (include "chart.name" .) | trunc 63 | trimSuffix "-" }}
{{- end }}
{{- end }}

{{/*
Common labels
*/}}
{{- define "chart.labels" -}}
app.kubernetes.io/name: {{ include "chart.name" . }}
app.kubernetes.io/instance: {{ .Release.Name }}
app.kubernetes.io/managed-by: {{ .Release.Service }}
{{- end }}
{% endraw %}
{% if webhook_enabled %}
{% raw %}

{{/*
Name of the secret holding the webhook serving certificate.
*/}}
{{- define "chart.webhookCertSecret" -}}
{{- printf "%s-webhook-server-cert" (include "chart.fullname" .) }}
{{- end }}
{% endraw %}
{% endif %}
"""
