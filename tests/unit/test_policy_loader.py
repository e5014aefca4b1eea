"""Unit tests for pricing policy models and loading."""

from decimal import Decimal

import pytest
import yaml
from pydantic import ValidationError

from backoffice.business.pricing import DEFAULT_PRICING_POLICY, DiscountTier, PricingPolicy
from backoffice.services import policy_loader
from backoffice.services.policy_loader import get_pricing_policy, reload_pricing_policy


@pytest.mark.unit
class TestPricingPolicyModel:
    """Test cases for the pricing policy model."""

    def test_tiers_are_sorted(self):
        policy = PricingPolicy(
            discount_tiers=[
                DiscountTier(lower_bound=Decimal("5000"), percentage=Decimal("15")),
                DiscountTier(lower_bound=Decimal("0"), percentage=Decimal("5")),
            ],
            default_tax_percentage=Decimal("15"),
        )

        assert [tier.lower_bound for tier in policy.discount_tiers] == [Decimal("0"), Decimal("5000")]

    def test_duplicate_bounds_rejected(self):
        with pytest.raises(ValidationError, match="duplicate discount tier"):
            PricingPolicy(
                discount_tiers=[
                    DiscountTier(lower_bound=Decimal("0"), percentage=Decimal("5")),
                    DiscountTier(lower_bound=Decimal("0"), percentage=Decimal("10")),
                ],
                default_tax_percentage=Decimal("15"),
            )

    def test_at_least_one_tier_required(self):
        with pytest.raises(ValidationError):
            PricingPolicy(discount_tiers=[], default_tax_percentage=Decimal("15"))

    def test_percentage_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            DiscountTier(lower_bound=Decimal("0"), percentage=Decimal("120"))

    def test_policy_is_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_PRICING_POLICY.default_tax_percentage = Decimal("0")

    def test_tier_for_boundaries(self):
        assert DEFAULT_PRICING_POLICY.tier_for(Decimal("999.99")).percentage == Decimal("5")
        assert DEFAULT_PRICING_POLICY.tier_for(Decimal("1000.00")).percentage == Decimal("10")


@pytest.mark.unit
class TestPolicyLoader:
    """Test cases for policy file loading."""

    def test_packaged_policy_matches_defaults(self):
        """The shipped YAML describes the same policy as the built-in fallback."""
        assert get_pricing_policy() == DEFAULT_PRICING_POLICY

    def test_policy_is_cached(self):
        assert get_pricing_policy() is get_pricing_policy()

    def test_custom_policy_file(self, policy_file):
        policy = get_pricing_policy(policy_file)

        assert policy.currency == "EUR"
        assert policy.default_tax_percentage == Decimal("21.00")
        assert [tier.percentage for tier in policy.discount_tiers] == [Decimal("2.50"), Decimal("7.50")]

    def test_settings_path_used(self, policy_file, monkeypatch):
        monkeypatch.setattr(policy_loader.settings, "PRICING_POLICY_PATH", policy_file)

        assert get_pricing_policy().currency == "EUR"

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        policy = get_pricing_policy(str(tmp_path / "missing.yaml"))

        assert policy == DEFAULT_PRICING_POLICY

    def test_invalid_policy_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("default_tax_percentage: \"15\"\ndiscount_tiers: []\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            get_pricing_policy(str(path))

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "malformed.yaml"
        path.write_text("discount_tiers: [unclosed\n", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            get_pricing_policy(str(path))

    def test_reload_rereads_file(self, policy_file):
        first = get_pricing_policy(policy_file)

        with open(policy_file, "a", encoding="utf-8") as f:
            f.write("  - lower_bound: \"900.00\"\n    percentage: \"9.00\"\n")

        assert get_pricing_policy(policy_file) is first
        reload_pricing_policy()
        assert len(get_pricing_policy(policy_file).discount_tiers) == 3
