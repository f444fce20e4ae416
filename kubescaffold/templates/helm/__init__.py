"""Helm chart builders."""

from .charts import Helpers, HelmIgnore
from .webhook import WebhookCertManagerCheck, WebhookCertificate, WebhookService

__all__ = [
    "HelmIgnore",
    "Helpers",
    "WebhookCertManagerCheck",
    "WebhookCertificate",
    "WebhookService",
]
