"""Tests for payments, products, store and invoice tools."""

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from ghl_mcp.models import (
    BusinessDetails,
    ContactDetails,
    Discount,
    FulfilledItem,
    InvoiceItem,
    RecurrenceRule,
    ScheduleOptions,
    SentTo,
    ShippingCountry,
    ShippingState,
    Tracking,
)
from ghl_mcp.tools import invoices, payments, products, store


@pytest.fixture
def invoice_parts():
    """The nested arguments every invoice-like document needs."""
    return {
        "business_details": BusinessDetails(name="Acme", phone_no="+15550001111"),
        "contact_details": ContactDetails(id="c1", name="Ann", email="ann@example.com"),
        "items": [InvoiceItem(name="Consulting", currency="USD", amount=150.0, qty=2)],
        "discount": Discount(type="percentage", value=10),
    }


class TestPayments:
    """Tests for payment tools."""

    def test_fulfillment_payload(self, fake_client):
        payments.create_order_fulfillment(
            "o1",
            trackings=[Tracking(tracking_number="1Z999", shipping_carrier="UPS")],
            items=[FulfilledItem(price_id="price1", qty=1)],
            notify_customer=True,
        )

        path = fake_client.post.call_args.args[0]
        body = fake_client.post.call_args.kwargs["json"]
        assert path == "/payments/orders/o1/fulfillments"
        assert body == {
            "altId": "loc123",
            "altType": "location",
            "trackings": [{"trackingNumber": "1Z999", "shippingCarrier": "UPS"}],
            "items": [{"priceId": "price1", "qty": 1}],
            "notifyCustomer": True,
        }

    def test_negative_coupon_rejected(self, fake_client):
        with pytest.raises(ToolError, match="must not be negative"):
            payments.create_coupon("Summer", "SUMMER", "percentage", -5, "2025-06-01T00:00:00Z")
        fake_client.post.assert_not_called()

    def test_create_coupon(self, fake_client):
        fake_client.post.return_value = {"_id": "cp1"}

        result = payments.create_coupon("Summer", "SUMMER", "amount", 20.0, "2025-06-01T00:00:00Z")

        body = fake_client.post.call_args.kwargs["json"]
        assert body["discountType"] == "amount"
        assert body["discountValue"] == 20.0
        assert result == {"success": True, "data": {"_id": "cp1"}, "message": "Coupon 'SUMMER' created"}

    def test_delete_coupon_sends_body(self, fake_client):
        payments.delete_coupon("cp1")

        fake_client.delete.assert_called_once_with(
            "/payments/coupon", json={"altId": "loc123", "altType": "location", "id": "cp1"},
        )


class TestProducts:
    """Tests for product tools."""

    def test_list_products_pagination(self, fake_client):
        fake_client.get.return_value = {"products": [{"_id": "p1"}, {"_id": "p2"}], "total": [{"total": 5}]}

        result = products.list_products(limit=2, offset=0, search="shirt")

        params = fake_client.get.call_args.kwargs["params"]
        assert params["search"] == "shirt"
        assert result["pagination"] == {"total": 5, "returned": 2, "limit": 2, "offset": 0, "has_more": True}
        assert result["filters"]["search"] == "shirt"

    def test_list_products_limit(self, fake_client):
        with pytest.raises(ToolError, match="between 1 and 100"):
            products.list_products(limit=0)

    def test_create_product(self, fake_client):
        fake_client.post.return_value = {"_id": "p1"}

        result = products.create_product("T-Shirt", "PHYSICAL")

        assert fake_client.post.call_args.kwargs["json"]["productType"] == "PHYSICAL"
        assert result["product"] == {"_id": "p1"}


class TestStore:
    """Tests for store tools."""

    def test_create_shipping_zone(self, fake_client):
        fake_client.post.return_value = {"data": {"_id": "z1"}}

        result = store.create_shipping_zone("US", [ShippingCountry(code="US", states=[ShippingState(code="CA")])])

        body = fake_client.post.call_args.kwargs["json"]
        assert body["countries"] == [{"code": "US", "states": [{"code": "CA"}]}]
        assert body["altType"] == "location"
        assert result["shipping_zone"] == {"_id": "z1"}

    def test_negative_rate_rejected(self, fake_client):
        with pytest.raises(ToolError, match="must not be negative"):
            store.create_shipping_rate("z1", "Ground", "USD", -1, "FLAT")

    def test_empty_store_setting(self, fake_client):
        fake_client.get.return_value = {"data": {}}

        result = store.get_store_setting()

        assert result["store_setting"] is None
        assert result["message"] == "No store settings configured for this location"


class TestInvoices:
    """Tests for invoice and estimate tools."""

    def test_create_invoice(self, fake_client, invoice_parts):
        fake_client.post.return_value = {"_id": "inv1"}

        result = invoices.create_invoice(
            name="October", currency="USD", issue_date="2025-10-20", live_mode=False,
            sent_to=SentTo(email=["ann@example.com"]), title="Consulting", **invoice_parts,
        )

        body = fake_client.post.call_args.kwargs["json"]
        assert fake_client.post.call_args.args[0] == "/invoices/"
        assert body["altId"] == "loc123"
        assert body["items"] == [{"name": "Consulting", "currency": "USD", "amount": 150.0, "qty": 2, "type": "one_time"}]
        assert body["businessDetails"] == {"name": "Acme", "phoneNo": "+15550001111"}
        assert body["contactDetails"]["email"] == "ann@example.com"
        assert body["sentTo"] == {"email": ["ann@example.com"]}
        assert body["issueDate"] == "2025-10-20"
        assert result["data"] == {"_id": "inv1"}

    def test_title_limit(self, fake_client, invoice_parts):
        with pytest.raises(ToolError, match="40 characters"):
            invoices.create_invoice(
                name="October", currency="USD", issue_date="2025-10-20", live_mode=False,
                sent_to=SentTo(), title="x" * 41, **invoice_parts,
            )
        fake_client.post.assert_not_called()

    def test_schedule_takes_one_mode(self, fake_client, invoice_parts):
        schedule = ScheduleOptions(
            execute_at="2025-11-01",
            rrule=RecurrenceRule(interval_type="monthly", interval=1, start_date="2025-11-01"),
        )
        with pytest.raises(ToolError, match="execute_at or rrule"):
            invoices.create_invoice_schedule(
                name="Retainer", currency="USD", live_mode=False, schedule=schedule, **invoice_parts,
            )

    def test_late_fees_payload(self, fake_client):
        invoices.update_invoice_template_late_fees("t1", True, fee_type="fixed", fee_amount=25.0, grace_period_days=5)

        path = fake_client.patch.call_args.args[0]
        body = fake_client.patch.call_args.kwargs["json"]
        assert path == "/invoices/template/t1/late-fees-configuration"
        assert body["lateFeesConfiguration"] == {
            "enable": True,
            "type": "fixed",
            "value": 25.0,
            "grace": {"intervalCount": 5, "interval": "day"},
        }

    def test_payment_methods_payload(self, fake_client):
        invoices.update_invoice_template_payment_methods("t1", credit_card=True, cash=False)

        body = fake_client.patch.call_args.kwargs["json"]
        assert body["paymentMethods"] == {"creditCard": True, "cash": False}

    def test_record_payment_rejects_zero(self, fake_client):
        with pytest.raises(ToolError, match="positive"):
            invoices.record_invoice_payment("inv1", "cash", "paid at desk", amount=0)

    def test_generate_invoice_number(self, fake_client):
        fake_client.get.return_value = {"invoiceNumber": 1042}

        result = invoices.generate_invoice_number()

        assert result["invoice_number"] == 1042
        assert fake_client.get.call_args.kwargs["params"] == {"altId": "loc123", "altType": "location"}
