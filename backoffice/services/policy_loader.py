# ==== POLICY LOADER SERVICE ==== #

"""
Policy loader for the pricing configuration.

Loads the tiered discount and tax policy from YAML once per process and
hands out the same immutable ``PricingPolicy`` afterwards, falling back to
built-in defaults when no policy file is present.
"""

import functools
import os
from typing import Optional

import yaml

from backoffice.business.pricing import DEFAULT_PRICING_POLICY, PricingPolicy
from backoffice.observability.logging import ContextualLogger
from backoffice.observability.tracing import get_tracer
from backoffice.settings import settings


tracer = get_tracer(__name__)
logger = ContextualLogger(__name__)

DEFAULT_POLICY_PATH = os.path.join(
    os.path.dirname(__file__),
    "..",
    "business",
    "policies",
    "default_pricing.yaml"
)


# ==== PRICING CONFIGURATION LOADING ==== #


def get_pricing_policy(path: Optional[str] = None) -> PricingPolicy:
    """
    Get the pricing policy.

    Resolves the policy file from the argument, then the
    ``PRICING_POLICY_PATH`` setting, then the packaged default.

    Args:
        path (Optional[str]): Explicit policy file path

    Returns:
        PricingPolicy: Cached immutable pricing policy
    """
    resolved = path or settings.PRICING_POLICY_PATH or DEFAULT_POLICY_PATH
    return _load_pricing_policy(os.path.abspath(resolved))


@functools.lru_cache(maxsize=16)
def _load_pricing_policy(config_path: str) -> PricingPolicy:
    """
    Load and validate a pricing policy file.

    Args:
        config_path (str): Absolute path of the YAML policy

    Returns:
        PricingPolicy: Parsed policy, or the built-in defaults if the file is missing

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the content does not describe a policy
    """
    with tracer.start_as_current_span("load_pricing_policy") as span:
        span.set_attribute("config_path", config_path)

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            span.set_attribute("config_loaded", False)
            span.set_attribute("fallback_used", True)
            logger.warning("Pricing policy file not found, using defaults", path=config_path)
            return DEFAULT_PRICING_POLICY

        policy = PricingPolicy.model_validate(config)

        span.set_attribute("config_loaded", True)
        span.set_attribute("tier_count", len(policy.discount_tiers))
        logger.debug(
            "Pricing policy loaded",
            path=config_path,
            tiers=len(policy.discount_tiers),
            default_tax_percentage=str(policy.default_tax_percentage),
        )
        return policy


def reload_pricing_policy() -> None:
    """Drop cached policies so the next lookup re-reads the file."""
    _load_pricing_policy.cache_clear()
