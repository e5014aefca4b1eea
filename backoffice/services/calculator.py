# ==== TIERED FINANCIAL CALCULATOR ==== #

"""
Tiered financial calculations for orders and invoices.

This module selects a discount tier for an amount, applies discounts and
tax, and composes the full business breakdown consumed by the order and
invoice services. All arithmetic is done with ``Decimal`` under an
unbounded-precision context, so no digit is ever rounded away and repeated
calls on the same input return the same value digit for digit.
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from backoffice.business.pricing import PricingPolicy
from backoffice.exceptions import InvalidArgumentError, require_present
from backoffice.observability.logging import ContextualLogger
from backoffice.observability.metrics import calculations_total
from backoffice.observability.tracing import get_tracer
from backoffice.services.policy_loader import get_pricing_policy


tracer = get_tracer(__name__)
logger = ContextualLogger(__name__)

HUNDRED = Decimal("100")
ZERO = Decimal("0.00")

# Multiplying, adding and dividing by 100 always terminate, so under this
# context every result is exact.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_POLICY_DEFAULT = object()


# ==== RESULT MODEL ==== #


class CalculationResult(BaseModel):
    """Breakdown of a full business calculation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    original_amount: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    subtotal: Decimal
    tax_percentage: Decimal
    tax_amount: Decimal
    total: Decimal


# ==== INPUT COERCION ==== #


def to_decimal(value: Any, field: str) -> Decimal:
    """
    Convert a monetary input to a finite ``Decimal``.

    Floats go through their shortest repr so no binary expansion leaks
    into the result.

    Args:
        value (Any): Decimal, int, float or numeric string
        field (str): Argument name reported on failure

    Returns:
        Decimal: Exact decimal value

    Raises:
        InvalidArgumentError: If the value is None, not numeric, NaN or infinite
    """
    require_present(value, field)

    if isinstance(value, bool):
        raise InvalidArgumentError("must be a number", field=field, value=value)

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(repr(value) if isinstance(value, float) else value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidArgumentError("must be a number", field=field, value=value) from None

    if not result.is_finite():
        raise InvalidArgumentError("must be a finite number", field=field, value=value)
    return result


def _policy(policy: Optional[PricingPolicy]) -> PricingPolicy:
    return policy if policy is not None else get_pricing_policy()


def _percent_of(amount: Decimal, percentage: Decimal) -> Decimal:
    with localcontext(EXACT_CONTEXT):
        return amount * percentage / HUNDRED


# ==== DISCOUNTS ==== #


def select_discount_percentage(
    amount: Any,
    policy: Optional[PricingPolicy] = None
) -> Decimal:
    """
    Select the tiered discount percentage for an amount.

    With the default policy: below 1000.00 gets 5%, 1000.00 up to 4999.99
    gets 10% and 5000.00 or more gets 15%.

    Args:
        amount (Any): Amount to classify
        policy (Optional[PricingPolicy]): Policy override, defaults to the loaded policy

    Returns:
        Decimal: Discount percentage (10 means 10%)

    Raises:
        InvalidArgumentError: If amount is None
    """
    amount = to_decimal(amount, "amount")
    return _policy(policy).tier_for(amount).percentage


def apply_discount(amount: Any, percentage: Any) -> Decimal:
    """
    Subtract ``percentage`` percent of ``amount`` from it.

    Args:
        amount (Any): Original amount
        percentage (Any): Discount percentage (10 means 10%)

    Returns:
        Decimal: Discounted amount

    Raises:
        InvalidArgumentError: If either input is None
    """
    amount = to_decimal(amount, "amount")
    percentage = to_decimal(percentage, "percentage")
    with localcontext(EXACT_CONTEXT):
        return amount - _percent_of(amount, percentage)


def apply_tiered_discount(
    amount: Any,
    policy: Optional[PricingPolicy] = None
) -> Decimal:
    """Apply the discount of the tier the amount falls in."""
    amount = to_decimal(amount, "amount")
    return apply_discount(amount, select_discount_percentage(amount, policy))


# ==== TAX ==== #


def calculate_tax(amount: Any, policy: Optional[PricingPolicy] = None) -> Decimal:
    """
    Compute the tax owed on an amount at the default rate.

    Args:
        amount (Any): Taxable amount
        policy (Optional[PricingPolicy]): Policy override

    Returns:
        Decimal: Tax amount only
    """
    amount = to_decimal(amount, "amount")
    return _percent_of(amount, _policy(policy).default_tax_percentage)


def apply_tax(
    subtotal: Any,
    tax_percentage: Any = _POLICY_DEFAULT,
    policy: Optional[PricingPolicy] = None
) -> Decimal:
    """
    Add ``tax_percentage`` percent of ``subtotal`` to it.

    When ``tax_percentage`` is omitted the policy's default rate applies.

    Args:
        subtotal (Any): Post-discount subtotal
        tax_percentage (Any): Tax percentage override (15 means 15%)
        policy (Optional[PricingPolicy]): Policy supplying the default rate

    Returns:
        Decimal: Total including tax

    Raises:
        InvalidArgumentError: If subtotal is None or tax_percentage is passed as None
    """
    subtotal = to_decimal(subtotal, "subtotal")
    if tax_percentage is _POLICY_DEFAULT:
        tax_percentage = _policy(policy).default_tax_percentage
    tax_percentage = to_decimal(tax_percentage, "tax_percentage")
    with localcontext(EXACT_CONTEXT):
        return subtotal + _percent_of(subtotal, tax_percentage)


def apply_default_tax(subtotal: Any, policy: Optional[PricingPolicy] = None) -> Decimal:
    """Add tax at the policy's default rate."""
    return apply_tax(subtotal, policy=policy)


# ==== FULL CALCULATION ==== #


def calculate_full(
    original_amount: Any,
    policy: Optional[PricingPolicy] = None
) -> CalculationResult:
    """
    Run the full business calculation: tiered discount, then tax.

    The discount is taken from the original amount and tax is charged on
    the discounted subtotal only. Amounts are not range checked here;
    zero and negative amounts are computed like any other.

    Args:
        original_amount (Any): Amount before discounts and tax
        policy (Optional[PricingPolicy]): Policy override

    Returns:
        CalculationResult: Full breakdown of the calculation

    Raises:
        InvalidArgumentError: If original_amount is None
    """
    original_amount = to_decimal(original_amount, "original_amount")
    policy = _policy(policy)

    with tracer.start_as_current_span("calculate_full") as span, localcontext(EXACT_CONTEXT):
        discount_percentage = select_discount_percentage(original_amount, policy)
        discount_amount = _percent_of(original_amount, discount_percentage)
        subtotal = original_amount - discount_amount
        tax_percentage = policy.default_tax_percentage
        tax_amount = _percent_of(subtotal, tax_percentage)
        total = subtotal + tax_amount

        span.set_attribute("discount_percentage", str(discount_percentage))
        span.set_attribute("tax_percentage", str(tax_percentage))

        calculations_total.labels(discount_percentage=str(discount_percentage)).inc()
        logger.debug(
            "Full calculation completed",
            original_amount=str(original_amount),
            discount_percentage=str(discount_percentage),
            total=str(total),
        )

        return CalculationResult(
            original_amount=original_amount,
            discount_percentage=discount_percentage,
            discount_amount=discount_amount,
            subtotal=subtotal,
            tax_percentage=tax_percentage,
            tax_amount=tax_amount,
            total=total,
        )


# ==== SUMMATION ==== #


def sum_all(values: Optional[Iterable[Any]]) -> Decimal:
    """
    Sum monetary amounts, skipping missing entries.

    Args:
        values (Optional[Iterable[Any]]): Amounts, any of which may be None

    Returns:
        Decimal: Total, 0.00 for an empty sequence

    Raises:
        InvalidArgumentError: If values itself is None
    """
    require_present(values, "values")

    total = ZERO
    with localcontext(EXACT_CONTEXT):
        for index, value in enumerate(values):
            if value is not None:
                total += to_decimal(value, f"values[{index}]")
    return total
