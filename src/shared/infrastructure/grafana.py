"""
Grafana OTLP Metrics Exporter
==============================

Pushes classifier usage metrics (tokens, latency) to Grafana Cloud via OTLP.

Metrics exported:
- llm_latency_ms: completion request latency in milliseconds
- llm_prompt_tokens / llm_completion_tokens: token usage per request

Exporting is best effort: failures are logged and reported as False.
"""

import base64
import time
from typing import Optional, Dict, List

import httpx

from src.config import settings
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class GrafanaOTLPExporter:
    """
    Export LLM metrics to Grafana Cloud via the OTLP HTTP endpoint.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        api_key: Optional[str] = None,
        instance_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._host = host or settings.grafana_host
        self._api_key = api_key or settings.grafana_api_key
        self._instance_id = instance_id or settings.grafana_instance_id
        self._transport = transport
        self._enabled = bool(self._host and self._api_key and self._instance_id)

        if self._enabled:
            auth_pair = f"{self._instance_id}:{self._api_key}"
            self._auth_encoded = base64.b64encode(auth_pair.encode()).decode()
            if "/otlp/v1/metrics" not in self._host:
                self._url = f"{self._host.rstrip('/')}/otlp/v1/metrics"
            else:
                self._url = self._host
            logger.info(
                "Grafana OTLP exporter initialized",
                extra={"host": self._host, "instance_id": self._instance_id}
            )

    def is_enabled(self) -> bool:
        """Check if exporter is properly configured."""
        return self._enabled

    @property
    def url(self) -> Optional[str]:
        return self._url if self._enabled else None

    @staticmethod
    def _gauge(name: str, unit: str, value: int, timestamp_ns: int, attributes: List[dict]) -> dict:
        return {
            "name": name,
            "unit": unit,
            "gauge": {
                "dataPoints": [
                    {
                        "asInt": value,
                        "timeUnixNano": timestamp_ns,
                        "attributes": attributes
                    }
                ]
            }
        }

    def build_payload(
        self,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int,
        operation: str,
        attributes: Optional[Dict[str, str]] = None
    ) -> dict:
        """Build the OTLP JSON body for one completion call."""
        timestamp_ns = int(time.time() * 1_000_000_000)

        metric_attributes = [
            {"key": "model", "value": {"stringValue": model}},
            {"key": "operation", "value": {"stringValue": operation}},
            {"key": "service", "value": {"stringValue": settings.app_name}},
        ]
        for key, value in (attributes or {}).items():
            metric_attributes.append({"key": key, "value": {"stringValue": str(value)}})

        return {
            "resourceMetrics": [
                {
                    "resource": {
                        "attributes": [
                            {"key": "service.name", "value": {"stringValue": settings.app_name}},
                            {"key": "service.version", "value": {"stringValue": settings.app_version}},
                            {"key": "deployment.environment", "value": {"stringValue": settings.environment}},
                        ]
                    },
                    "scopeMetrics": [
                        {
                            "metrics": [
                                self._gauge("llm_latency_ms", "ms", latency_ms, timestamp_ns, metric_attributes),
                                self._gauge("llm_prompt_tokens", "1", prompt_tokens, timestamp_ns, metric_attributes),
                                self._gauge("llm_completion_tokens", "1", completion_tokens, timestamp_ns, metric_attributes),
                            ]
                        }
                    ]
                }
            ]
        }

    async def export_llm_metrics(
        self,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int,
        operation: str = "chat_completion",
        attributes: Optional[Dict[str, str]] = None
    ) -> bool:
        """
        Export LLM usage metrics to Grafana.

        Returns:
            True if export succeeded, False otherwise
        """
        if not self._enabled:
            return False

        payload = self.build_payload(
            model, prompt_tokens, completion_tokens, latency_ms, operation, attributes
        )
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {self._auth_encoded}",
            "X-Grafana-Org-Id": str(self._instance_id)
        }

        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.post(self._url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error("Error exporting metrics to Grafana", extra={"error": str(e)})
            return False

        if response.status_code in (200, 202):
            logger.debug(
                "LLM metrics exported to Grafana",
                extra={"model": model, "operation": operation, "latency_ms": latency_ms}
            )
            return True

        logger.warning(
            "Failed to export metrics to Grafana",
            extra={
                "status_code": response.status_code,
                "response": response.text[:500],
                "url": self._url
            }
        )
        return False


# Global exporter instance
_grafana_exporter: Optional[GrafanaOTLPExporter] = None


def get_grafana_exporter() -> Optional[GrafanaOTLPExporter]:
    """Get or create global Grafana exporter instance."""
    global _grafana_exporter
    if _grafana_exporter is None:
        _grafana_exporter = GrafanaOTLPExporter()
    return _grafana_exporter


def init_grafana_exporter(
    host: str,
    api_key: str,
    instance_id: str
) -> GrafanaOTLPExporter:
    """Initialize Grafana exporter with credentials."""
    global _grafana_exporter
    _grafana_exporter = GrafanaOTLPExporter(
        host=host,
        api_key=api_key,
        instance_id=instance_id
    )
    return _grafana_exporter
