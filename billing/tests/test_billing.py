# billing/tests/test_billing.py
"""
Tests for billing module.

Tests:
- Plan parsing and the checkout line item
- Stripe client configuration
- Customer, checkout and portal creation (mocked Stripe)
- Stripe error wrapping
"""

from __future__ import annotations

import pytest
import stripe
from unittest.mock import patch, MagicMock

from app.config import AppConfig


@pytest.fixture
def config():
    return AppConfig(
        stripe_secret_key="sk_test_123456789",
        stripe_price_id="price_test_premium",
        supabase_url="http://localhost:54321",
        supabase_service_role_key="service-role",
    )


# =============================================================================
# Product Tests
# =============================================================================


class TestSubscriptionPlan:
    """Tests for SubscriptionPlan parsing."""

    def test_known_values(self):
        from billing.products import SubscriptionPlan

        assert SubscriptionPlan.parse("free") is SubscriptionPlan.FREE
        assert SubscriptionPlan.parse("premium") is SubscriptionPlan.PREMIUM

    def test_missing_is_free(self):
        from billing.products import SubscriptionPlan

        assert SubscriptionPlan.parse(None) is SubscriptionPlan.FREE

    def test_unknown_is_free(self):
        """Unrecognised values fall through to FREE."""
        from billing.products import SubscriptionPlan

        assert SubscriptionPlan.parse("canceled") is SubscriptionPlan.FREE
        assert SubscriptionPlan.parse("PREMIUM") is SubscriptionPlan.FREE

    def test_has_subscription(self):
        from billing.products import SubscriptionPlan

        assert SubscriptionPlan.PREMIUM.has_subscription is True
        assert SubscriptionPlan.FREE.has_subscription is False


class TestLineItem:
    """Tests for the checkout line item."""

    def test_premium_line_item(self):
        from billing.products import premium_line_item

        item = premium_line_item("price_abc")

        assert item.to_params() == {"price": "price_abc", "quantity": 1}


# =============================================================================
# Stripe Client Tests
# =============================================================================


class TestStripeClient:
    """Tests for Stripe client configuration."""

    def test_is_test_key(self):
        from billing.stripe_client import is_test_key

        assert is_test_key("sk_test_abc") is True
        assert is_test_key("rk_test_abc") is True
        assert is_test_key("sk_live_abc") is False

    def test_init_without_key(self):
        """init_stripe refuses an empty key."""
        from billing.stripe_client import init_stripe

        assert init_stripe("", "2023-10-16") is False

    def test_init_sets_key_and_version(self):
        """init_stripe configures the SDK module."""
        from billing.stripe_client import init_stripe

        with patch.object(stripe, "api_key", None), patch.object(stripe, "api_version", None):
            assert init_stripe("sk_test_abc", "2023-10-16") is True
            assert stripe.api_key == "sk_test_abc"
            assert stripe.api_version == "2023-10-16"

    def test_get_stripe_without_key_raises(self):
        """get_stripe raises when no key is configured."""
        from billing.stripe_client import get_stripe

        with patch.object(stripe, "api_key", None):
            with pytest.raises(RuntimeError, match="STRIPE_SECRET_KEY"):
                get_stripe("", "2023-10-16")

    def test_get_stripe_returns_module(self):
        from billing.stripe_client import get_stripe

        with patch.object(stripe, "api_key", None), patch.object(stripe, "api_version", None):
            assert get_stripe("sk_test_abc", "2023-10-16") is stripe


# =============================================================================
# Service Tests (with mocked Stripe)
# =============================================================================


class TestBillingService:
    """Tests for billing service functions."""

    @patch("billing.service.get_stripe")
    def test_create_customer(self, mock_get_stripe, config):
        """create_customer returns the new customer id."""
        from billing.service import create_customer

        mock_stripe = MagicMock()
        mock_stripe.Customer.create.return_value = MagicMock(id="cus_test_123")
        mock_get_stripe.return_value = mock_stripe

        customer_id = create_customer(config, email="a@example.com", name="A")

        assert customer_id == "cus_test_123"
        mock_stripe.Customer.create.assert_called_once_with(
            email="a@example.com",
            name="A",
            description="Customer for a@example.com",
        )
        mock_get_stripe.assert_called_once_with("sk_test_123456789", "2023-10-16")

    @patch("billing.service.get_stripe")
    def test_create_checkout_session(self, mock_get_stripe, config):
        """create_checkout_session creates a subscription checkout."""
        from billing.service import create_checkout_session, SessionKind

        mock_stripe = MagicMock()
        mock_stripe.checkout.Session.create.return_value = MagicMock(
            id="cs_test_123",
            url="https://checkout.stripe.com/c/pay/cs_test_123",
        )
        mock_get_stripe.return_value = mock_stripe

        result = create_checkout_session(
            config,
            customer_id="cus_1",
            success_url="http://example.com/success",
            cancel_url="http://example.com/cancel",
        )

        assert result.kind is SessionKind.CHECKOUT
        assert result.id == "cs_test_123"
        assert "checkout.stripe.com" in result.url

        call_kwargs = mock_stripe.checkout.Session.create.call_args[1]
        assert call_kwargs["mode"] == "subscription"
        assert call_kwargs["customer"] == "cus_1"
        assert call_kwargs["line_items"] == [{"price": "price_test_premium", "quantity": 1}]

    @patch("billing.service.get_stripe")
    def test_create_portal_session(self, mock_get_stripe, config):
        """create_portal_session returns the portal URL."""
        from billing.service import create_portal_session, SessionKind

        mock_stripe = MagicMock()
        mock_stripe.billing_portal.Session.create.return_value = MagicMock(
            id="bps_123",
            url="https://billing.stripe.com/p/session/bps_123",
        )
        mock_get_stripe.return_value = mock_stripe

        result = create_portal_session(config, customer_id="cus_1", return_url="http://example.com/profile")

        assert result.kind is SessionKind.PORTAL
        assert result.url == "https://billing.stripe.com/p/session/bps_123"
        mock_stripe.billing_portal.Session.create.assert_called_once_with(
            customer="cus_1",
            return_url="http://example.com/profile",
        )

    @patch("billing.service.get_stripe")
    def test_stripe_error_wrapped(self, mock_get_stripe, config):
        """Stripe errors become ProviderError."""
        from billing.service import create_portal_session, ProviderError

        mock_stripe = MagicMock()
        mock_stripe.billing_portal.Session.create.side_effect = stripe.StripeError(
            "No configuration provided"
        )
        mock_get_stripe.return_value = mock_stripe

        with pytest.raises(ProviderError, match="No configuration provided"):
            create_portal_session(config, customer_id="cus_1", return_url="http://x/profile")

    @patch("billing.service.get_stripe", side_effect=RuntimeError("Stripe not initialized. Check STRIPE_SECRET_KEY."))
    def test_unconfigured_stripe_wrapped(self, mock_get_stripe, config):
        """A missing key surfaces as ProviderError."""
        from billing.service import create_customer, ProviderError

        with pytest.raises(ProviderError, match="STRIPE_SECRET_KEY"):
            create_customer(config, email="a@example.com")

    def test_provider_error_is_provisioning_error(self):
        from billing.service import ProviderError
        from provisioning.errors import ProvisioningError

        assert issubclass(ProviderError, ProvisioningError)
