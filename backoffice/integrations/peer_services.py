# ==== PEER SERVICES INTEGRATION CLIENT ==== #

"""
HTTP client for the sibling order and invoice services.

This module fetches order and invoice statistics, builds a consolidated
report from both, and notifies the order service about new invoices.
Transport failures are logged and folded into the return values; the
client does not retry.
"""

import time
from datetime import datetime
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import Any, Dict, Optional

import httpx

from backoffice.observability.logging import ContextualLogger, log_business_event
from backoffice.observability.metrics import (
    integration_request_duration_seconds,
    integration_requests_total,
)
from backoffice.observability.tracing import get_tracer
from backoffice.settings import settings


# ==== MODULE INITIALIZATION ==== #


tracer = get_tracer(__name__)
logger = ContextualLogger(__name__)

ORDERS_SERVICE = "orders"
INVOICES_SERVICE = "invoices"


# ==== INTEGRATION CLIENT CLASS ==== #


class IntegrationClient:
    """
    Client for the order (A) and invoice (B) peer services.

    Owns a single ``httpx.AsyncClient``; close it with ``aclose()`` or use
    the client as an async context manager.
    """

    def __init__(
        self,
        orders_base_url: Optional[str] = None,
        invoices_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize integration client with peer endpoints.

        Args:
            orders_base_url (Optional[str]): Order service API root
            invoices_base_url (Optional[str]): Invoice service API root
            timeout (Optional[float]): Request timeout in seconds
            transport (Optional[httpx.AsyncBaseTransport]): Custom transport
        """
        self.orders_base_url = (orders_base_url or settings.ORDERS_SERVICE_URL).rstrip("/")
        self.invoices_base_url = (invoices_base_url or settings.INVOICES_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.INTEGRATION_TIMEOUT_SECONDS

        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def __aenter__(self) -> "IntegrationClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ==== STATISTICS ==== #

    async def get_order_stats(self) -> Dict[str, Any]:
        """
        Fetch order statistics from the order service.

        Returns:
            Dict[str, Any]: Decoded JSON statistics

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not JSON
        """
        return await self._get_json(
            ORDERS_SERVICE, "get_order_stats", f"{self.orders_base_url}/orders/stats"
        )

    async def get_invoice_stats(self) -> Dict[str, Any]:
        """
        Fetch invoice statistics from the invoice service.

        Returns:
            Dict[str, Any]: Decoded JSON statistics

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not JSON
        """
        return await self._get_json(
            INVOICES_SERVICE, "get_invoice_stats", f"{self.invoices_base_url}/invoices/stats"
        )

    async def get_stats(self) -> Dict[str, Any]:
        """
        Build a consolidated report from order and invoice statistics.

        Never raises for peer failures: the report then carries an
        ``error`` entry and a zero consolidated total.

        Returns:
            Dict[str, Any]: Report with totals, raw statistics and generation time
        """
        with tracer.start_as_current_span("integration_get_stats") as span:
            report: Dict[str, Any] = {}

            try:
                order_stats = await self.get_order_stats()
                invoice_stats = await self.get_invoice_stats()
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Failed to build consolidated report", error=str(e))
                span.set_attribute("error", str(e))
                report["error"] = f"Failed to build report: {e}"
                report["consolidated_total"] = Decimal("0")
                return report

            orders_total = extract_total(order_stats, "total")
            invoices_total = extract_total(invoice_stats, "total")

            report["orders_total"] = orders_total
            report["invoices_total"] = invoices_total
            report["consolidated_total"] = orders_total + invoices_total
            report["order_stats"] = order_stats
            report["invoice_stats"] = invoice_stats
            report["generated_at"] = datetime.now().isoformat()

            span.set_attribute("consolidated_total", str(report["consolidated_total"]))
            return report

    # ==== NOTIFICATIONS ==== #

    async def notify_event(self, event_id: str, amount: Decimal) -> bool:
        """
        Notify the order service that a new invoice was created.

        Args:
            event_id (str): Invoice identifier
            amount (Decimal): Invoice amount, sent as a decimal string

        Returns:
            bool: True if the order service answered with a 2xx status
        """
        url = f"{self.orders_base_url}/notifications/new-invoice"
        payload = {
            "invoice_id": event_id,
            "amount": None if amount is None else str(amount),
        }

        with tracer.start_as_current_span("integration_notify_event") as span:
            span.set_attribute("invoice_id", str(event_id))
            start_time = time.perf_counter()

            try:
                response = await self._client.post(url, json=payload)
            except httpx.HTTPError as e:
                self._record(ORDERS_SERVICE, "notify_event", "error", start_time)
                logger.error("Failed to notify new invoice", invoice_id=event_id, error=str(e))
                return False

            success = response.is_success
            self._record(
                ORDERS_SERVICE, "notify_event", "success" if success else "rejected", start_time
            )
            span.set_attribute("status_code", response.status_code)

            if success:
                log_business_event("invoice_notified", invoice_id=event_id, amount=payload["amount"])
            else:
                logger.warning(
                    "Order service rejected invoice notification",
                    invoice_id=event_id,
                    status_code=response.status_code,
                )
            return success

    # ==== INTERNAL HELPER METHODS ==== #

    async def _get_json(self, service: str, operation: str, url: str) -> Dict[str, Any]:
        start_time = time.perf_counter()
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError):
            self._record(service, operation, "error", start_time)
            raise

        self._record(service, operation, "success", start_time)
        return data

    @staticmethod
    def _record(service: str, operation: str, outcome: str, start_time: float) -> None:
        integration_requests_total.labels(
            service=service, operation=operation, outcome=outcome
        ).inc()
        integration_request_duration_seconds.labels(
            service=service, operation=operation
        ).observe(time.perf_counter() - start_time)


# ==== HELPERS ==== #


def extract_total(stats: Dict[str, Any], key: str) -> Decimal:
    """
    Read a numeric total from a statistics payload.

    Args:
        stats (Dict[str, Any]): Decoded statistics
        key (str): Key holding the total

    Returns:
        Decimal: The total, or 0 when missing or not numeric
    """
    value = stats.get(key) if isinstance(stats, dict) else None

    if isinstance(value, bool) or not isinstance(value, (Number, str)):
        return Decimal("0")

    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


# ==== GLOBAL CLIENT INSTANCE ==== #


_integration_client: Optional[IntegrationClient] = None


def get_integration_client() -> IntegrationClient:
    """
    Get global integration client instance.

    Returns:
        IntegrationClient: Process-wide client
    """
    global _integration_client
    if _integration_client is None:
        _integration_client = IntegrationClient()
    return _integration_client
