"""Unit tests for the Stripe adapter. The SDK is patched; no network."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from src.am_common.errors import PaymentProcessorError, WebhookSignatureError
from src.am_payment.domain.processor import CardDeclinedError
from src.am_payment.infrastructure.stripe_processor import (
    StripeProcessor,
    _intent_id_from_card_error,
)


@pytest.fixture
def processor() -> StripeProcessor:
    return StripeProcessor(api_key="sk_test_x", webhook_secret="whsec_x")


def _charge(processor: StripeProcessor):
    return processor.charge_off_session(
        customer_id="cus_1",
        payment_method_id="pm_1",
        amount_cents=2500,
        currency="usd",
        metadata={"auction_id": "a-1", "winner_id": "u-1", "type": "winner_charge"},
        idempotency_key="auction_a-1_winner_u-1",
        description="Winning bid",
    )


class TestChargeOffSession:
    async def test_success(self, processor) -> None:
        intent = SimpleNamespace(id="pi_1", status="succeeded")
        with patch("stripe.PaymentIntent.create", return_value=intent) as create:
            result = await _charge(processor)

        assert result.payment_intent_id == "pi_1"
        assert result.status == "succeeded"
        kwargs = create.call_args.kwargs
        assert kwargs["idempotency_key"] == "auction_a-1_winner_u-1"
        assert kwargs["off_session"] is True
        assert kwargs["confirm"] is True
        assert kwargs["amount"] == 2500

    async def test_card_error_becomes_decline(self, processor) -> None:
        err = stripe.CardError("Your card was declined.", None, "card_declined")
        with patch("stripe.PaymentIntent.create", side_effect=err):
            with pytest.raises(CardDeclinedError):
                await _charge(processor)

    async def test_other_stripe_error_is_processor_error(self, processor) -> None:
        with patch("stripe.PaymentIntent.create", side_effect=stripe.APIConnectionError("down")):
            with pytest.raises(PaymentProcessorError):
                await _charge(processor)


class TestIntentIdFromCardError:
    def test_string_intent(self) -> None:
        exc = SimpleNamespace(error=SimpleNamespace(payment_intent="pi_9"))
        assert _intent_id_from_card_error(exc) == "pi_9"

    def test_expanded_intent(self) -> None:
        exc = SimpleNamespace(error=SimpleNamespace(payment_intent={"id": "pi_8"}))
        assert _intent_id_from_card_error(exc) == "pi_8"

    def test_no_intent(self) -> None:
        assert _intent_id_from_card_error(SimpleNamespace(error=None)) is None


class TestParseWebhook:
    def test_missing_signature(self, processor) -> None:
        with pytest.raises(WebhookSignatureError):
            processor.parse_webhook(b"{}", None)

    def test_bad_signature(self, processor) -> None:
        err = stripe.SignatureVerificationError("No signatures found", "t=1,v1=bad")
        with patch("stripe.Webhook.construct_event", side_effect=err):
            with pytest.raises(WebhookSignatureError):
                processor.parse_webhook(b"{}", "t=1,v1=bad")

    def test_valid_event_flattened(self, processor) -> None:
        event = {
            "id": "evt_1",
            "type": "payment_intent.succeeded",
            "data": {"object": {"id": "pi_1"}},
        }
        with patch("stripe.Webhook.construct_event", return_value=event) as construct:
            result = processor.parse_webhook(b"{}", "t=1,v1=ok")
        construct.assert_called_once_with(b"{}", "t=1,v1=ok", "whsec_x")
        assert result == {"id": "evt_1", "type": "payment_intent.succeeded", "object": {"id": "pi_1"}}
