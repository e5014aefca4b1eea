# ==== PRICING POLICY MODELS ==== #

"""
Pricing policy models for tiered discounts and tax.

The policy is loaded once at process start and never changes afterwards,
so every model here is frozen. Amounts and percentages are ``Decimal``
throughout; percentages are whole-number style (10 means 10%).
"""

from decimal import Decimal
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==== DISCOUNT TIERS ==== #


class DiscountTier(BaseModel):
    """A discount bracket: amounts at or above ``lower_bound`` get ``percentage``."""

    model_config = ConfigDict(frozen=True)

    lower_bound: Decimal
    percentage: Decimal = Field(..., ge=Decimal("0"), le=Decimal("100"))


# ==== PRICING POLICY ==== #


class PricingPolicy(BaseModel):
    """
    Immutable tier and tax configuration.

    Tiers are kept sorted by lower bound. The lowest tier also applies to
    any amount below its own bound, so exactly one tier matches every
    amount.
    """

    model_config = ConfigDict(frozen=True)

    discount_tiers: Tuple[DiscountTier, ...] = Field(..., min_length=1)
    default_tax_percentage: Decimal = Field(..., ge=Decimal("0"), le=Decimal("100"))
    currency: str = "USD"

    @field_validator("discount_tiers")
    @classmethod
    def _sort_tiers(cls, tiers: Tuple[DiscountTier, ...]) -> Tuple[DiscountTier, ...]:
        ordered = tuple(sorted(tiers, key=lambda tier: tier.lower_bound))
        for lower, upper in zip(ordered, ordered[1:]):
            if lower.lower_bound == upper.lower_bound:
                raise ValueError(
                    f"duplicate discount tier lower bound: {upper.lower_bound}"
                )
        return ordered

    def tier_for(self, amount: Decimal) -> DiscountTier:
        """Return the tier whose bracket contains ``amount``.

        Boundary values belong to the higher tier.
        """
        for tier in reversed(self.discount_tiers):
            if amount >= tier.lower_bound:
                return tier
        return self.discount_tiers[0]


# ==== DEFAULTS ==== #


DEFAULT_PRICING_POLICY = PricingPolicy(
    discount_tiers=(
        DiscountTier(lower_bound=Decimal("0.00"), percentage=Decimal("5.00")),
        DiscountTier(lower_bound=Decimal("1000.00"), percentage=Decimal("10.00")),
        DiscountTier(lower_bound=Decimal("5000.00"), percentage=Decimal("15.00")),
    ),
    default_tax_percentage=Decimal("15.00"),
    currency="USD",
)
