"""Store tools: shipping zones, shipping rates, shipping carriers and store settings.

Amounts are in the account currency; weights are in grams.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import CarrierService, OrderProduct, ShippingAddress, ShippingCountry, ShippingOrigin, payload
from .common import api, items, location, pick

CATEGORY = "store"

ConditionType = Literal["PRICE", "WEIGHT", "FLAT"]


def _alt(location_id: Optional[str]) -> Dict[str, Any]:
    return {"altId": location(location_id), "altType": "location"}


def _data(response: Any) -> Any:
    """Store endpoints wrap their payload in ``data``."""
    return pick(response, "data", response)


def _listing(response: Any, key: str, noun: str) -> dict:
    found = items(response, "data")
    total = pick(response, "total", len(found))
    return {"success": True, key: found, "total": total, "message": f"Retrieved {len(found)} {noun} ({total} total)"}


# Shipping zones

@ghl_tool(CATEGORY, action="create shipping zone")
def create_shipping_zone(name: str, countries: List[ShippingCountry], location_id: Optional[str] = None) -> dict:
    """Create a shipping zone.

    Args:
        name: Zone name, e.g. "US Mainland"
        countries: [{code, states: [{code}]}]; omit states to cover the whole country
        location_id: Location (default: configured)
    """
    zone = _data(api().post("/store/shipping-zone", json={
        **_alt(location_id),
        "name": name,
        "countries": payload(countries),
    }))
    return {
        "success": True,
        "shipping_zone": zone,
        "message": f"Shipping zone '{name}' created with {len(countries)} country(ies)",
    }


@ghl_tool(CATEGORY, action="list shipping zones")
def list_shipping_zones(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    with_shipping_rate: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    data = api().get("/store/shipping-zone", params={
        **_alt(location_id),
        "limit": limit,
        "offset": offset,
        "withShippingRate": with_shipping_rate,
    })
    return _listing(data, "shipping_zones", "shipping zones")


@ghl_tool(CATEGORY, action="get shipping zone")
def get_shipping_zone(
    shipping_zone_id: str,
    with_shipping_rate: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    data = api().get(f"/store/shipping-zone/{shipping_zone_id}", params={
        **_alt(location_id),
        "withShippingRate": with_shipping_rate,
    })
    return {"success": True, "shipping_zone": _data(data)}


@ghl_tool(CATEGORY, action="update shipping zone")
def update_shipping_zone(
    shipping_zone_id: str,
    name: Optional[str] = None,
    countries: Optional[List[ShippingCountry]] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Rename a zone or replace its country list."""
    zone = _data(api().put(f"/store/shipping-zone/{shipping_zone_id}", json={
        **_alt(location_id),
        "name": name,
        "countries": payload(countries),
    }))
    return {"success": True, "shipping_zone": zone, "message": "Shipping zone updated successfully"}


@ghl_tool(CATEGORY, action="delete shipping zone")
def delete_shipping_zone(shipping_zone_id: str, location_id: Optional[str] = None) -> dict:
    """Delete a zone together with its shipping rates."""
    data = api().delete(f"/store/shipping-zone/{shipping_zone_id}", params=_alt(location_id))
    return {
        "success": True,
        "deleted": pick(data, "success", True),
        "message": f"Shipping zone {shipping_zone_id} deleted successfully",
    }


# Shipping rates

@ghl_tool(CATEGORY, action="get available shipping rates")
def get_available_shipping_rates(
    country: str,
    address: ShippingAddress,
    total_order_amount: float,
    total_order_weight: float,
    products: List[OrderProduct],
    source: Optional[str] = None,
    coupon_code: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Quote the shipping options an order qualifies for.

    Args:
        country: Destination country code, e.g. "US"
        address: Destination address; its country must match country
        total_order_amount: Order total in the account currency
        total_order_weight: Order weight in grams
        products: [{id, quantity}]
        source: Order source
        coupon_code: Coupon applied to the order
        location_id: Location (default: configured)
    """
    data = api().post("/store/shipping-zone/shipping-rates", json={
        **_alt(location_id),
        "country": country,
        "address": payload(address),
        "totalOrderAmount": total_order_amount,
        "totalOrderWeight": total_order_weight,
        "source": source,
        "products": payload(products),
        "couponCode": coupon_code,
    })
    rates = items(data, "data")
    return {"success": True, "rates": rates, "message": f"Found {len(rates)} available shipping rates"}


@ghl_tool(CATEGORY, action="create shipping rate")
def create_shipping_rate(
    shipping_zone_id: str,
    name: str,
    currency: str,
    amount: float,
    condition_type: ConditionType,
    min_condition: Optional[float] = None,
    max_condition: Optional[float] = None,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Add a rate to a shipping zone.

    Args:
        shipping_zone_id: Zone the rate belongs to
        name: Customer-facing name, e.g. "Standard Ground"
        currency: Currency code, e.g. "USD"
        amount: Shipping cost in the account currency (0 = free)
        condition_type: PRICE (order amount), WEIGHT (order weight) or FLAT (always)
        min_condition: Lower bound for PRICE/WEIGHT
        max_condition: Upper bound for PRICE/WEIGHT
        description: Shown to customers
        location_id: Location (default: configured)
    """
    if amount < 0:
        raise ValueError("amount must not be negative")
    rate = _data(api().post(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate", json={
        **_alt(location_id),
        "name": name,
        "currency": currency,
        "amount": amount,
        "conditionType": condition_type,
        "minCondition": min_condition,
        "maxCondition": max_condition,
        "description": description,
    }))
    return {"success": True, "shipping_rate": rate, "message": f"Shipping rate '{name}' created"}


@ghl_tool(CATEGORY, action="list shipping rates")
def list_shipping_rates(
    shipping_zone_id: str,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    location_id: Optional[str] = None,
) -> dict:
    data = api().get(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate", params={
        **_alt(location_id),
        "limit": limit,
        "offset": offset,
    })
    return _listing(data, "shipping_rates", "shipping rates")


@ghl_tool(CATEGORY, action="get shipping rate")
def get_shipping_rate(shipping_zone_id: str, shipping_rate_id: str, location_id: Optional[str] = None) -> dict:
    data = api().get(
        f"/store/shipping-zone/{shipping_zone_id}/shipping-rate/{shipping_rate_id}", params=_alt(location_id)
    )
    return {"success": True, "shipping_rate": _data(data)}


@ghl_tool(CATEGORY, action="update shipping rate")
def update_shipping_rate(
    shipping_zone_id: str,
    shipping_rate_id: str,
    name: Optional[str] = None,
    amount: Optional[float] = None,
    currency: Optional[str] = None,
    condition_type: Optional[ConditionType] = None,
    min_condition: Optional[float] = None,
    max_condition: Optional[float] = None,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    if amount is not None and amount < 0:
        raise ValueError("amount must not be negative")
    rate = _data(api().put(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate/{shipping_rate_id}", json={
        **_alt(location_id),
        "name": name,
        "amount": amount,
        "currency": currency,
        "conditionType": condition_type,
        "minCondition": min_condition,
        "maxCondition": max_condition,
        "description": description,
    }))
    return {"success": True, "shipping_rate": rate, "message": "Shipping rate updated successfully"}


@ghl_tool(CATEGORY, action="delete shipping rate")
def delete_shipping_rate(shipping_zone_id: str, shipping_rate_id: str, location_id: Optional[str] = None) -> dict:
    api().delete(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate/{shipping_rate_id}", params=_alt(location_id))
    return {"success": True, "message": f"Shipping rate {shipping_rate_id} deleted successfully"}


# Shipping carriers

@ghl_tool(CATEGORY, action="create shipping carrier")
def create_shipping_carrier(
    name: str,
    callback_url: str,
    services: Optional[List[CarrierService]] = None,
    allows_multiple_service_selection: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Register a carrier that quotes live rates through a callback.

    Args:
        name: Carrier name, e.g. "UPS"
        callback_url: HTTPS endpoint that receives rate requests
        services: [{name, value}], e.g. {"name": "Ground", "value": "ups_ground"}
        allows_multiple_service_selection: Let customers pick several services
        location_id: Location (default: configured)
    """
    carrier = _data(api().post("/store/shipping-carrier", json={
        **_alt(location_id),
        "name": name,
        "callbackUrl": callback_url,
        "services": payload(services),
        "allowsMultipleServiceSelection": allows_multiple_service_selection,
    }))
    return {"success": True, "shipping_carrier": carrier, "message": f"Shipping carrier '{name}' created"}


@ghl_tool(CATEGORY, action="list shipping carriers")
def list_shipping_carriers(location_id: Optional[str] = None) -> dict:
    data = api().get("/store/shipping-carrier", params=_alt(location_id))
    return _listing(data, "shipping_carriers", "shipping carriers")


@ghl_tool(CATEGORY, action="get shipping carrier")
def get_shipping_carrier(shipping_carrier_id: str, location_id: Optional[str] = None) -> dict:
    data = api().get(f"/store/shipping-carrier/{shipping_carrier_id}", params=_alt(location_id))
    return {"success": True, "shipping_carrier": _data(data)}


@ghl_tool(CATEGORY, action="update shipping carrier")
def update_shipping_carrier(
    shipping_carrier_id: str,
    name: Optional[str] = None,
    callback_url: Optional[str] = None,
    services: Optional[List[CarrierService]] = None,
    allows_multiple_service_selection: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    carrier = _data(api().put(f"/store/shipping-carrier/{shipping_carrier_id}", json={
        **_alt(location_id),
        "name": name,
        "callbackUrl": callback_url,
        "services": payload(services),
        "allowsMultipleServiceSelection": allows_multiple_service_selection,
    }))
    return {"success": True, "shipping_carrier": carrier, "message": "Shipping carrier updated successfully"}


@ghl_tool(CATEGORY, action="delete shipping carrier")
def delete_shipping_carrier(shipping_carrier_id: str, location_id: Optional[str] = None) -> dict:
    api().delete(f"/store/shipping-carrier/{shipping_carrier_id}", params=_alt(location_id))
    return {"success": True, "message": f"Shipping carrier {shipping_carrier_id} deleted successfully"}


# Store settings

@ghl_tool(CATEGORY, action="create store setting")
def create_store_setting(
    shipping_origin: ShippingOrigin,
    store_order_notification: Optional[str] = None,
    store_order_fulfillment_notification: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Create or replace the store settings.

    Args:
        shipping_origin: Warehouse address {name, street1, street2, city, state, zip, country}
        store_order_notification: Email notified of new orders
        store_order_fulfillment_notification: Email notified of fulfillments
        location_id: Location (default: configured)
    """
    settings = _data(api().post("/store/store-setting", json={
        **_alt(location_id),
        "shippingOrigin": payload(shipping_origin),
        "storeOrderNotification": store_order_notification,
        "storeOrderFulfillmentNotification": store_order_fulfillment_notification,
    }))
    return {"success": True, "store_setting": settings, "message": "Store settings saved successfully"}


@ghl_tool(CATEGORY, action="get store setting")
def get_store_setting(location_id: Optional[str] = None) -> dict:
    settings = _data(api().get("/store/store-setting", params=_alt(location_id)))
    if not settings:
        return {"success": True, "store_setting": None, "message": "No store settings configured for this location"}
    return {"success": True, "store_setting": settings, "message": "Retrieved store settings"}
