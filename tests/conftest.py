# ==== SHARED TEST FIXTURES AND CONFIGURATION ==== #

"""
Shared test fixtures and configuration.

Environment variables are set before the package is imported so the
settings object picks up the test endpoints.
"""

import os
from decimal import Decimal

import pytest


# ==== FORCE ENVIRONMENT SETUP BEFORE ANY IMPORTS ==== #

os.environ.update({
    "APP_ENV": "test",
    "LOG_LEVEL": "WARNING",
    "ORDERS_SERVICE_URL": "http://orders-service/api",
    "INVOICES_SERVICE_URL": "http://invoices-service/api",
    "INTEGRATION_TIMEOUT_SECONDS": "1",
})
os.environ.pop("PRICING_POLICY_PATH", None)
os.environ.pop("OTEL_EXPORTER_OTLP_ENDPOINT", None)

from backoffice.business.pricing import DiscountTier, PricingPolicy
from backoffice.services.policy_loader import reload_pricing_policy


# ==== POLICY FIXTURES ==== #


@pytest.fixture(autouse=True)
def fresh_pricing_policy():
    """Clear the cached pricing policy around every test."""
    reload_pricing_policy()
    yield
    reload_pricing_policy()


@pytest.fixture
def flat_policy() -> PricingPolicy:
    """A two-tier policy with an 8% tax rate for override tests."""
    return PricingPolicy(
        discount_tiers=(
            DiscountTier(lower_bound=Decimal("0"), percentage=Decimal("0")),
            DiscountTier(lower_bound=Decimal("200.00"), percentage=Decimal("20")),
        ),
        default_tax_percentage=Decimal("8"),
        currency="EUR",
    )


@pytest.fixture
def policy_file(tmp_path):
    """Write a custom pricing policy YAML and return its path."""
    path = tmp_path / "pricing.yaml"
    path.write_text(
        "currency: EUR\n"
        "default_tax_percentage: \"21.00\"\n"
        "discount_tiers:\n"
        "  - lower_bound: \"500.00\"\n"
        "    percentage: \"7.50\"\n"
        "  - lower_bound: \"0.00\"\n"
        "    percentage: \"2.50\"\n",
        encoding="utf-8",
    )
    return str(path)
