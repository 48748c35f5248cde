"""Payments tools: white-label providers, orders, fulfillments, transactions,
subscriptions, coupons and custom payment providers.

These endpoints are scoped by ``altId``/``altType`` rather than locationId;
``alt_id`` defaults to the configured location.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import FulfilledItem, FuturePaymentsConfig, ProviderKeys, Tracking, payload
from .common import api, items, location

CATEGORY = "payments"


def _alt(alt_id: Optional[str], alt_type: str = "location") -> Dict[str, Any]:
    return {"altId": alt_id or location(), "altType": alt_type}


def _result(data: Any, message: str) -> dict:
    return {"success": True, "data": data, "message": message}


# White-label providers

@ghl_tool(CATEGORY, action="create white-label integration provider")
def create_whitelabel_integration_provider(
    unique_name: str,
    title: str,
    provider: Literal["authorize-net", "nmi"],
    description: str,
    image_url: str,
    alt_id: Optional[str] = None,
) -> dict:
    """Register a white-label payment provider (Authorize.net or NMI).

    Args:
        unique_name: Lowercase letters, digits and hyphens, e.g. "my-agency-payments"
        title: Display name
        provider: authorize-net or nmi
        description: Provider description
        image_url: Logo URL (200x200 recommended)
        alt_id: Location ID (default: configured)
    """
    data = api().post("/payments/integrations/provider/whitelabel", json={
        **_alt(alt_id),
        "uniqueName": unique_name,
        "title": title,
        "provider": provider,
        "description": description,
        "imageUrl": image_url,
    })
    return _result(data, f"White-label provider '{unique_name}' created")


@ghl_tool(CATEGORY, action="list white-label integration providers")
def list_whitelabel_integration_providers(
    alt_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> dict:
    data = api().get("/payments/integrations/provider/whitelabel", params={
        **_alt(alt_id),
        "limit": limit,
        "offset": offset,
    })
    return _result(data, "Retrieved white-label providers")


# Orders

@ghl_tool(CATEGORY, action="list orders")
def list_orders(
    alt_id: Optional[str] = None,
    alt_type: str = "location",
    location_id: Optional[str] = None,
    status: Optional[str] = None,
    payment_mode: Optional[Literal["live", "test"]] = None,
    start_at: Optional[str] = None,
    end_at: Optional[str] = None,
    search: Optional[str] = None,
    contact_id: Optional[str] = None,
    funnel_product_ids: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> dict:
    """List orders with filters.

    Args:
        alt_id: Location or company ID (default: configured location)
        alt_type: Identifier type (default: location)
        location_id: Sub-account filter
        status: e.g. "pending", "paid", "refunded"
        payment_mode: live or test
        start_at: From date, YYYY-MM-DD
        end_at: To date, YYYY-MM-DD
        search: Order name search
        contact_id: Contact filter
        funnel_product_ids: Comma-separated product IDs
        limit: Orders per page (default: 10)
        offset: Orders to skip (default: 0)
    """
    data = api().get("/payments/orders", params={
        **_alt(alt_id, alt_type),
        "locationId": location_id,
        "status": status,
        "paymentMode": payment_mode,
        "startAt": start_at,
        "endAt": end_at,
        "search": search,
        "contactId": contact_id,
        "funnelProductIds": funnel_product_ids,
        "limit": limit,
        "offset": offset,
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} orders")


@ghl_tool(CATEGORY, action="get order")
def get_order_by_id(order_id: str, alt_id: Optional[str] = None, alt_type: str = "location", location_id: Optional[str] = None) -> dict:
    data = api().get(f"/payments/orders/{order_id}", params={**_alt(alt_id, alt_type), "locationId": location_id})
    return _result(data, f"Retrieved order {order_id}")


@ghl_tool(CATEGORY, action="create order fulfillment")
def create_order_fulfillment(
    order_id: str,
    trackings: List[Tracking],
    items: List[FulfilledItem],
    notify_customer: bool,
    alt_id: Optional[str] = None,
) -> dict:
    """Mark order items as shipped.

    Args:
        order_id: Order to fulfill
        trackings: [{tracking_number, shipping_carrier, tracking_url}]
        items: [{price_id, qty}] being shipped
        notify_customer: Email the customer a shipment notice
        alt_id: Location ID (default: configured)
    """
    data = api().post(f"/payments/orders/{order_id}/fulfillments", json={
        **_alt(alt_id),
        "trackings": payload(trackings),
        "items": payload(items),
        "notifyCustomer": notify_customer,
    })
    return _result(data, f"Fulfillment created for order {order_id}")


@ghl_tool(CATEGORY, action="list order fulfillments")
def list_order_fulfillments(order_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().get(f"/payments/orders/{order_id}/fulfillments", params=_alt(alt_id))
    return _result(data, f"Retrieved fulfillments for order {order_id}")


# Transactions

@ghl_tool(CATEGORY, action="list transactions")
def list_transactions(
    alt_id: Optional[str] = None,
    alt_type: str = "location",
    location_id: Optional[str] = None,
    payment_mode: Optional[Literal["live", "test"]] = None,
    start_at: Optional[str] = None,
    end_at: Optional[str] = None,
    entity_source_type: Optional[str] = None,
    entity_source_sub_type: Optional[str] = None,
    search: Optional[str] = None,
    subscription_id: Optional[str] = None,
    entity_id: Optional[str] = None,
    contact_id: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> dict:
    """List payment transactions with filters (dates are YYYY-MM-DD)."""
    data = api().get("/payments/transactions", params={
        **_alt(alt_id, alt_type),
        "locationId": location_id,
        "paymentMode": payment_mode,
        "startAt": start_at,
        "endAt": end_at,
        "entitySourceType": entity_source_type,
        "entitySourceSubType": entity_source_sub_type,
        "search": search,
        "subscriptionId": subscription_id,
        "entityId": entity_id,
        "contactId": contact_id,
        "limit": limit,
        "offset": offset,
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} transactions")


@ghl_tool(CATEGORY, action="get transaction")
def get_transaction_by_id(
    transaction_id: str,
    alt_id: Optional[str] = None,
    alt_type: str = "location",
    location_id: Optional[str] = None,
) -> dict:
    data = api().get(f"/payments/transactions/{transaction_id}", params={
        **_alt(alt_id, alt_type),
        "locationId": location_id,
    })
    return _result(data, f"Retrieved transaction {transaction_id}")


# Subscriptions

@ghl_tool(CATEGORY, action="list subscriptions")
def list_subscriptions(
    alt_id: Optional[str] = None,
    entity_id: Optional[str] = None,
    payment_mode: Optional[Literal["live", "test"]] = None,
    start_at: Optional[str] = None,
    end_at: Optional[str] = None,
    entity_source_type: Optional[str] = None,
    search: Optional[str] = None,
    contact_id: Optional[str] = None,
    id: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> dict:
    """List recurring subscriptions with filters (dates are YYYY-MM-DD)."""
    data = api().get("/payments/subscriptions", params={
        **_alt(alt_id),
        "entityId": entity_id,
        "paymentMode": payment_mode,
        "startAt": start_at,
        "endAt": end_at,
        "entitySourceType": entity_source_type,
        "search": search,
        "contactId": contact_id,
        "id": id,
        "limit": limit,
        "offset": offset,
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} subscriptions")


@ghl_tool(CATEGORY, action="get subscription")
def get_subscription_by_id(subscription_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().get(f"/payments/subscriptions/{subscription_id}", params=_alt(alt_id))
    return _result(data, f"Retrieved subscription {subscription_id}")


# Coupons

@ghl_tool(CATEGORY, action="list coupons")
def list_coupons(
    alt_id: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    status: Optional[Literal["scheduled", "active", "expired"]] = None,
    search: Optional[str] = None,
) -> dict:
    data = api().get("/payments/coupon/list", params={
        **_alt(alt_id),
        "limit": limit,
        "offset": offset,
        "status": status,
        "search": search,
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} coupons")


def _coupon_body(
    alt_id, name, code, discount_type, discount_value, start_date, end_date, usage_limit,
    product_ids, apply_to_future_payments, apply_to_future_payments_config, limit_per_customer,
) -> Dict[str, Any]:
    return {
        **_alt(alt_id),
        "name": name,
        "code": code,
        "discountType": discount_type,
        "discountValue": discount_value,
        "startDate": start_date,
        "endDate": end_date,
        "usageLimit": usage_limit,
        "productIds": product_ids,
        "applyToFuturePayments": apply_to_future_payments,
        "applyToFuturePaymentsConfig": payload(apply_to_future_payments_config),
        "limitPerCustomer": limit_per_customer,
    }


@ghl_tool(CATEGORY, action="create coupon")
def create_coupon(
    name: str,
    code: str,
    discount_type: Literal["percentage", "amount"],
    discount_value: float,
    start_date: str,
    end_date: Optional[str] = None,
    usage_limit: Optional[int] = None,
    product_ids: Optional[List[str]] = None,
    apply_to_future_payments: Optional[bool] = None,
    apply_to_future_payments_config: Optional[FuturePaymentsConfig] = None,
    limit_per_customer: Optional[bool] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create a discount coupon.

    Args:
        name: Display name
        code: Code customers enter, e.g. "SUMMER2024"
        discount_type: percentage or amount
        discount_value: 20 means 20% for percentage; 20.00 means 20.00 off for amount
        start_date: ISO 8601 start
        end_date: ISO 8601 end
        usage_limit: Total redemptions allowed
        product_ids: Products it applies to (default: all)
        apply_to_future_payments: Also discount subscription renewals
        apply_to_future_payments_config: {type forever|fixed, duration, duration_type "months"}
        limit_per_customer: One use per customer
        alt_id: Location ID (default: configured)
    """
    if discount_value < 0:
        raise ValueError("discount_value must not be negative")
    data = api().post("/payments/coupon", json=_coupon_body(
        alt_id, name, code, discount_type, discount_value, start_date, end_date, usage_limit,
        product_ids, apply_to_future_payments, apply_to_future_payments_config, limit_per_customer,
    ))
    return _result(data, f"Coupon '{code}' created")


@ghl_tool(CATEGORY, action="update coupon")
def update_coupon(
    id: str,
    name: str,
    code: str,
    discount_type: Literal["percentage", "amount"],
    discount_value: float,
    start_date: str,
    end_date: Optional[str] = None,
    usage_limit: Optional[int] = None,
    product_ids: Optional[List[str]] = None,
    apply_to_future_payments: Optional[bool] = None,
    apply_to_future_payments_config: Optional[FuturePaymentsConfig] = None,
    limit_per_customer: Optional[bool] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Update a coupon. Same fields as create_coupon plus the coupon id."""
    if discount_value < 0:
        raise ValueError("discount_value must not be negative")
    body = _coupon_body(
        alt_id, name, code, discount_type, discount_value, start_date, end_date, usage_limit,
        product_ids, apply_to_future_payments, apply_to_future_payments_config, limit_per_customer,
    )
    data = api().put("/payments/coupon", json=dict(body, id=id))
    return _result(data, f"Coupon {id} updated")


@ghl_tool(CATEGORY, action="delete coupon")
def delete_coupon(id: str, alt_id: Optional[str] = None) -> dict:
    data = api().delete("/payments/coupon", json={**_alt(alt_id), "id": id})
    return _result(data, f"Coupon {id} deleted")


@ghl_tool(CATEGORY, action="get coupon")
def get_coupon(id: str, code: str, alt_id: Optional[str] = None) -> dict:
    data = api().get("/payments/coupon", params={**_alt(alt_id), "id": id, "code": code})
    return _result(data, f"Retrieved coupon {code}")


# Custom payment providers

@ghl_tool(CATEGORY, action="create custom provider integration")
def create_custom_provider_integration(
    name: str,
    description: str,
    payments_url: str,
    query_url: str,
    image_url: str,
    location_id: Optional[str] = None,
) -> dict:
    """Register a custom payment gateway for a location.

    Args:
        name: Gateway name
        description: Gateway description
        payments_url: Checkout page loaded in an iframe
        query_url: Endpoint GHL calls to verify payments
        image_url: Logo URL
        location_id: Location (default: configured)
    """
    data = api().post("/payments/custom-provider/provider", params={"locationId": location(location_id)}, json={
        "name": name,
        "description": description,
        "paymentsUrl": payments_url,
        "queryUrl": query_url,
        "imageUrl": image_url,
    })
    return _result(data, f"Custom provider '{name}' created")


@ghl_tool(CATEGORY, action="delete custom provider integration")
def delete_custom_provider_integration(location_id: Optional[str] = None) -> dict:
    data = api().delete("/payments/custom-provider/provider", params={"locationId": location(location_id)})
    return _result(data, "Custom provider deleted")


@ghl_tool(CATEGORY, action="get custom provider config")
def get_custom_provider_config(location_id: Optional[str] = None) -> dict:
    data = api().get("/payments/custom-provider/connect", params={"locationId": location(location_id)})
    return _result(data, "Retrieved custom provider config")


@ghl_tool(CATEGORY, action="create custom provider config")
def create_custom_provider_config(live: ProviderKeys, test: ProviderKeys, location_id: Optional[str] = None) -> dict:
    """Connect live and test keys ({api_key, publishable_key}) to the custom provider."""
    data = api().post("/payments/custom-provider/connect", params={"locationId": location(location_id)}, json={
        "live": payload(live),
        "test": payload(test),
    })
    return _result(data, "Custom provider config created")


@ghl_tool(CATEGORY, action="disconnect custom provider config")
def disconnect_custom_provider_config(live_mode: bool, location_id: Optional[str] = None) -> dict:
    """Disconnect the live (live_mode=True) or test keys of the custom provider."""
    data = api().post("/payments/custom-provider/disconnect", params={"locationId": location(location_id)}, json={
        "liveMode": live_mode,
    })
    return _result(data, f"Custom provider {'live' if live_mode else 'test'} config disconnected")
