"""Product catalog tools: products, prices, inventory and collections."""

from __future__ import annotations

from typing import Any, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import SeoSettings, payload
from .common import api, items, location, pick

CATEGORY = "products"

ProductType = Literal["DIGITAL", "PHYSICAL", "SERVICE", "PHYSICAL/DIGITAL"]


def _total(data: Any) -> int:
    """GHL reports totals as a number, {"total": n} or [{"total": n}]."""
    total = pick(data, "total", 0)
    if isinstance(total, list):
        total = total[0] if total else 0
    if isinstance(total, dict):
        total = total.get("total", 0)
    return total or 0


@ghl_tool(CATEGORY, action="create product")
def create_product(
    name: str,
    product_type: ProductType,
    description: Optional[str] = None,
    image: Optional[str] = None,
    available_in_store: Optional[bool] = None,
    slug: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Create a product. Add pricing afterwards with create_price.

    Args:
        name: Customer-facing name
        product_type: DIGITAL, PHYSICAL, SERVICE or PHYSICAL/DIGITAL
        description: HTML or markdown description
        image: Image URL (1200x1200 recommended)
        available_in_store: Show the product in the store (GHL default: True)
        slug: URL slug, generated from the name when omitted
        location_id: Location (default: configured)
    """
    data = api().post("/products/", json={
        "name": name,
        "productType": product_type,
        "description": description,
        "image": image,
        "availableInStore": available_in_store,
        "slug": slug,
        "locationId": location(location_id),
    })
    return {"success": True, "message": "Product created successfully", "product": data}


@ghl_tool(CATEGORY, action="list products")
def list_products(
    limit: int = 20,
    offset: int = 0,
    search: Optional[str] = None,
    store_id: Optional[str] = None,
    included_in_store: Optional[bool] = None,
    available_in_store: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    """List products with search and store filters.

    Args:
        limit: Products to return, 1-100 (default: 20)
        offset: Products to skip (default: 0)
        search: Name search
        store_id: Store filter
        included_in_store: Store inclusion filter
        available_in_store: Visibility filter

    Returns:
        {"success": True, "products": [...], "pagination": {...}, "filters": {...}}
    """
    if not 1 <= limit <= 100:
        raise ValueError("limit must be between 1 and 100")
    data = api().get("/products/", params={
        "locationId": location(location_id),
        "limit": limit,
        "offset": offset,
        "search": search,
        "storeId": store_id,
        "includedInStore": included_in_store,
        "availableInStore": available_in_store,
    })
    products = items(data, "products")
    total = _total(data)
    return {
        "success": True,
        "products": products,
        "pagination": {
            "total": total,
            "returned": len(products),
            "limit": limit,
            "offset": offset,
            "has_more": offset + len(products) < total,
        },
        "filters": {
            "search": search,
            "store_id": store_id,
            "included_in_store": included_in_store,
            "available_in_store": available_in_store,
        },
    }


@ghl_tool(CATEGORY, action="get product")
def get_product(product_id: str, location_id: Optional[str] = None) -> dict:
    """Get a product. Call this before update_product to read its name and type."""
    data = api().get(f"/products/{product_id}", params={"locationId": location(location_id)})
    return {"success": True, "product": data}


@ghl_tool(CATEGORY, action="update product")
def update_product(
    product_id: str,
    name: str,
    product_type: ProductType,
    description: Optional[str] = None,
    image: Optional[str] = None,
    available_in_store: Optional[bool] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Update a product.

    GHL requires name and product_type on every update, even when unchanged;
    the type itself cannot be changed.
    """
    data = api().put(f"/products/{product_id}", json={
        "name": name,
        "productType": product_type,
        "description": description,
        "image": image,
        "availableInStore": available_in_store,
        "locationId": location(location_id),
    })
    return {"success": True, "message": "Product updated successfully", "product": data}


@ghl_tool(CATEGORY, action="delete product")
def delete_product(product_id: str, location_id: Optional[str] = None) -> dict:
    """Permanently delete a product and its prices."""
    data = api().delete(f"/products/{product_id}", params={"locationId": location(location_id)})
    return {"success": True, "message": "Product deleted successfully", "status": pick(data, "status", True)}


@ghl_tool(CATEGORY, action="create price")
def create_price(
    product_id: str,
    name: str,
    type: Literal["one_time", "recurring"],
    currency: str,
    amount: float,
    compare_at_price: Optional[float] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Add a price (variant) to a product.

    Args:
        product_id: Product to price
        name: Variant name, e.g. "Standard" or "Large - Blue"
        type: one_time or recurring
        currency: Currency code, e.g. "USD"
        amount: Float with decimals, 99.00 = $99.00 (not cents)
        compare_at_price: Original price shown struck through, also a float
        location_id: Location (default: configured)
    """
    if amount < 0 or (compare_at_price is not None and compare_at_price < 0):
        raise ValueError("amount and compare_at_price must not be negative")
    data = api().post(f"/products/{product_id}/price", json={
        "name": name,
        "type": type,
        "currency": currency,
        "amount": amount,
        "compareAtPrice": compare_at_price,
        "locationId": location(location_id),
    })
    return {"success": True, "message": "Price created successfully", "price": data}


@ghl_tool(CATEGORY, action="list prices")
def list_prices(
    product_id: str,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    location_id: Optional[str] = None,
) -> dict:
    data = api().get(f"/products/{product_id}/price", params={
        "locationId": location(location_id),
        "limit": limit,
        "offset": offset,
    })
    prices = items(data, "prices")
    return {
        "success": True,
        "prices": prices,
        "pagination": {"total": _total(data) or len(prices), "returned": len(prices)},
        "product_id": product_id,
    }


@ghl_tool(CATEGORY, action="list inventory")
def list_inventory(
    limit: int = 20,
    offset: int = 0,
    search: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """List inventory items with stock levels."""
    data = api().get("/products/inventory", params={
        "altId": location(location_id),
        "altType": "location",
        "limit": limit,
        "offset": offset,
        "search": search,
    })
    inventory = items(data, "inventory")
    return {
        "success": True,
        "inventory": inventory,
        "pagination": {"total": _total(data), "returned": len(inventory)},
        "filters": {"search": search},
    }


@ghl_tool(CATEGORY, action="create product collection")
def create_product_collection(
    name: str,
    slug: str,
    image: Optional[str] = None,
    seo: Optional[SeoSettings] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Create a product collection.

    Args:
        name: Collection name, e.g. "Summer Sale"
        slug: URL slug, e.g. "summer-sale"
        image: Banner image URL (1200x400 recommended)
        seo: {title, description} for search engines
        location_id: Location (default: configured)
    """
    data = api().post("/products/collections", json={
        "altId": location(location_id),
        "altType": "location",
        "name": name,
        "slug": slug,
        "image": image,
        "seo": payload(seo),
    })
    return {"success": True, "message": "Collection created successfully", "collection": pick(data, "data", data)}


@ghl_tool(CATEGORY, action="list product collections")
def list_product_collections(
    limit: int = 20,
    offset: int = 0,
    name: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    data = api().get("/products/collections", params={
        "altId": location(location_id),
        "altType": "location",
        "limit": limit,
        "offset": offset,
        "name": name,
    })
    collections = items(data, "data")
    return {
        "success": True,
        "collections": collections,
        "pagination": {"total": _total(data), "returned": len(collections)},
        "filters": {"name": name},
    }
