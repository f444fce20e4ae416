"""Helm chart templates for serving admission webhooks."""

from __future__ import annotations

from dataclasses import dataclass

from kubescaffold.machinery import PROJECT, Facets, IfExistsAction, Template

from .charts import chart_dir


@dataclass
class WebhookService(Template):
    """Scaffolds the Service that fronts the webhook server."""

    requires = frozenset({PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return f"{chart_dir(facets)}/templates/webhook/service.yaml"

    def get_body(self, facets: Facets) -> str:
        return WEBHOOK_SERVICE_TEMPLATE


@dataclass
class WebhookCertificate(Template):
    """Scaffolds the cert-manager Issuer and Certificate for the webhook."""

    requires = frozenset({PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return f"{chart_dir(facets)}/templates/webhook/certificate.yaml"

    def get_body(self, facets: Facets) -> str:
        return WEBHOOK_CERTIFICATE_TEMPLATE


@dataclass
class WebhookCertManagerCheck(Template):
    """Scaffolds the install-time check that cert-manager is present."""

    requires = frozenset({PROJECT})
    default_if_exists = IfExistsAction.SKIP

    def default_path(self, facets: Facets) -> str:
        return f"{chart_dir(facets)}/templates/webhook/certmanager-check.yaml"

    def get_body(self, facets: Facets) -> str:
        return WEBHOOK_CERT_MANAGER_CHECK_TEMPLATE


WEBHOOK_SERVICE_TEMPLATE = """\
{% raw %}
{{- if .Values.webhook.enabled }}
apiVersion: v1
kind: Service
metadata:
  name: {{ include "chart.fullname" . }}-webhook-service
  namespace: {{ .Release.Namespace }}
  labels:
    {{- include "chart.labels" . | nindent 4 }}
spec:
  ports:
    - port: 443
      protocol: TCP
      targetPort: 9443
  selector:
    control-plane: controller-manager
{{- end }}
{% endraw %}
"""

WEBHOOK_CERTIFICATE_TEMPLATE = """\
{% raw %}
{{- if .Values.webhook.enabled }}
apiVersion: cert-manager.io/v1
kind: Issuer
metadata:
  name: {{ include "chart.fullname" . }}-selfsigned-issuer
  namespace: {{ .Release.Namespace }}
spec:
  selfSigned: {}
---
apiVersion: cert-manager.io/v1
kind: Certificate
metadata:
  name: {{ include "chart.fullname" . }}-serving-cert
  namespace: {{ .Release.Namespace }}
spec:
  dnsNames:
    - {{ include "chart.fullname" . }}-webhook-service.{{ .Release.Namespace }}.svc
    - {{ include "chart.fullname" . }}-webhook-service.{{ .Release.Namespace }}.svc.cluster.local
  issuerRef:
    kind: Issuer
    name: {{ include "chart.fullname" . }}-selfsigned-issuer
  secretName: {{ include "chart.webhookCertSecret" . }}
{{- end }}
{% endraw %}
"""

WEBHOOK_CERT_MANAGER_CHECK_TEMPLATE = """\
{% raw %}
{{- if .Values.webhook.enabled }}
{{- if not (.Capabilities.APIVersions.Has "cert-manager.io/v1") }}
{{- fail "cert-manager is required to serve webhooks; install it or set webhook.enabled=false" }}
{{- end }}
{{- end }}
{% endraw %}
"""
