"""Unit tests for PaymentApplicationService with a mocked processor."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.am_common.errors import NoProcessorCustomerError, WebhookSignatureError
from src.am_payment.application.service import PaymentApplicationService
from src.am_payment.domain.models import CardSummary, Customer


@pytest.fixture
def processor() -> AsyncMock:
    mock = AsyncMock()
    mock.create_customer.return_value = "cus_new"
    mock.create_setup_intent.return_value = "seti_secret"
    mock.attach_default_payment_method.return_value = CardSummary(
        payment_method_id="pm_1", brand="visa", last4="4242", exp_month=12, exp_year=2030
    )
    mock.parse_webhook = MagicMock()
    return mock


@pytest.fixture
def customers() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def payments() -> AsyncMock:
    mock = AsyncMock()
    mock.update_status_by_intent.return_value = 1
    return mock


@pytest.fixture
def service(processor, customers, payments) -> PaymentApplicationService:
    return PaymentApplicationService(processor=processor, customers=customers, payments=payments)


class TestSetupIntent:
    async def test_creates_customer_when_missing(self, service, processor, customers) -> None:
        customers.get_customer.return_value = None
        db = AsyncMock()
        result = await service.create_setup_intent(db, "u-1", "ada@example.com")

        processor.create_customer.assert_awaited_once_with("u-1", "ada@example.com")
        customers.upsert_processor_customer.assert_awaited_once_with(db, "u-1", "cus_new")
        db.commit.assert_awaited_once()
        assert result.customer_id == "cus_new"
        assert result.client_secret == "seti_secret"

    async def test_reuses_existing_customer(self, service, processor, customers) -> None:
        customers.get_customer.return_value = Customer("u-1", "cus_old", None)
        db = AsyncMock()
        result = await service.create_setup_intent(db, "u-1", None)

        processor.create_customer.assert_not_awaited()
        processor.create_setup_intent.assert_awaited_once_with("cus_old")
        db.commit.assert_not_awaited()
        assert result.customer_id == "cus_old"


class TestAttachDefault:
    async def test_stores_card_summary(self, service, customers) -> None:
        customers.get_customer.return_value = Customer("u-1", "cus_1", None)
        db = AsyncMock()
        result = await service.attach_default(db, "u-1", "pm_1")

        stored: CardSummary = customers.set_payment_method.call_args.args[2]
        assert stored.last4 == "4242"
        assert result.last4 == "4242"
        db.commit.assert_awaited_once()

    async def test_requires_processor_customer(self, service, customers, processor) -> None:
        customers.get_customer.return_value = None
        db = AsyncMock()
        with pytest.raises(NoProcessorCustomerError) as exc_info:
            await service.attach_default(db, "u-1", "pm_1")
        assert exc_info.value.code == 4002
        processor.attach_default_payment_method.assert_not_awaited()
        db.rollback.assert_awaited_once()


class TestWebhook:
    async def test_succeeded_updates_payment(self, service, processor, payments) -> None:
        processor.parse_webhook.return_value = {
            "id": "evt_1",
            "type": "payment_intent.succeeded",
            "object": {"id": "pi_1"},
        }
        db = AsyncMock()
        result = await service.handle_webhook(db, b"{}", "t=1,v1=sig")

        payments.update_status_by_intent.assert_awaited_once_with(db, "pi_1", "succeeded")
        db.commit.assert_awaited_once()
        assert result == {"received": True, "type": "payment_intent.succeeded"}

    async def test_failed_updates_payment(self, service, processor, payments) -> None:
        processor.parse_webhook.return_value = {
            "id": "evt_2",
            "type": "payment_intent.payment_failed",
            "object": {"id": "pi_2"},
        }
        await service.handle_webhook(AsyncMock(), b"{}", "sig")
        assert payments.update_status_by_intent.call_args.args[2] == "failed"

    async def test_unrelated_event_acknowledged(self, service, processor, payments) -> None:
        processor.parse_webhook.return_value = {
            "id": "evt_3",
            "type": "customer.updated",
            "object": {"id": "cus_1"},
        }
        result = await service.handle_webhook(AsyncMock(), b"{}", "sig")
        payments.update_status_by_intent.assert_not_awaited()
        assert result["received"] is True

    async def test_bad_signature_propagates(self, service, processor, payments) -> None:
        processor.parse_webhook.side_effect = WebhookSignatureError()
        with pytest.raises(WebhookSignatureError):
            await service.handle_webhook(AsyncMock(), b"{}", None)
        payments.update_status_by_intent.assert_not_awaited()
