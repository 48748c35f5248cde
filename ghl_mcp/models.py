"""Pydantic models for nested tool arguments.

Fields are snake_case in Python and camelCase on the wire (and in the tool
input schema). Unknown keys are kept so newer GHL fields pass through.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GHLModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with GHL field names, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


def payload(value: Any) -> Any:
    """Serialize a model, a list of models, or pass plain values through."""
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return value.to_payload() if isinstance(value, GHLModel) else value.model_dump(exclude_none=True)
    if isinstance(value, list):
        return [payload(v) for v in value]
    return value


# Contacts / conversations

class CustomFieldValue(GHLModel):
    id: str = Field(description="Custom field ID")
    field_value: Any = Field(alias="field_value", description="Value to store")


class MessageError(GHLModel):
    code: Optional[str] = None
    type: Optional[str] = None
    message: Optional[str] = None


class CallDetails(GHLModel):
    to: Optional[str] = Field(default=None, description="Number that received the call")
    from_: Optional[str] = Field(default=None, alias="from", description="Number that placed the call")
    status: Optional[Literal["pending", "completed", "answered", "busy", "no-answer", "failed", "canceled", "voicemail"]] = None


# Locations

class ProspectInfo(GHLModel):
    first_name: str
    last_name: str
    email: str


# Objects / associations / custom fields

class ObjectLabels(GHLModel):
    singular: str
    plural: str


class PrimaryDisplayProperty(GHLModel):
    key: str
    name: str
    data_type: Literal["TEXT", "NUMERICAL"]


class FieldOption(GHLModel):
    key: str
    label: str
    url: Optional[str] = Field(default=None, description="RADIO type only")


# Payments

class Tracking(GHLModel):
    tracking_number: str
    shipping_carrier: str
    tracking_url: Optional[str] = None


class FulfilledItem(GHLModel):
    price_id: str
    qty: int = Field(ge=1)


class FuturePaymentsConfig(GHLModel):
    type: Literal["forever", "fixed"]
    duration: Optional[int] = Field(default=None, ge=1)
    duration_type: Optional[Literal["months"]] = None


class ProviderKeys(GHLModel):
    api_key: str
    publishable_key: str


# Products / store

class SeoSettings(GHLModel):
    title: Optional[str] = None
    description: Optional[str] = None


class ShippingState(GHLModel):
    code: str


class ShippingCountry(GHLModel):
    code: str = Field(description="2-letter country code")
    states: Optional[List[ShippingState]] = Field(default=None, description="Omit to include all states")


class ShippingAddress(GHLModel):
    name: Optional[str] = None
    company_name: Optional[str] = None
    address_line1: Optional[str] = None
    city: str
    state: Optional[str] = None
    country: str
    zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class OrderProduct(GHLModel):
    id: str
    quantity: int = Field(ge=1)


class CarrierService(GHLModel):
    name: str
    value: str


class ShippingOrigin(GHLModel):
    name: str
    street1: str
    street2: Optional[str] = None
    city: str
    state: Optional[str] = None
    zip: str
    country: str = Field(description="2-letter country code")
    phone: Optional[str] = None
    email: Optional[str] = None


# Social

class SocialMedia(GHLModel):
    url: str
    caption: Optional[str] = None
    type: Optional[str] = Field(default=None, description="MIME type")


class TikTokPostDetails(GHLModel):
    privacy_level: Optional[str] = Field(default=None, description='e.g. "PUBLIC_TO_EVERYONE"')
    promote_other_brand: Optional[bool] = None
    enable_comment: Optional[bool] = None
    enable_duet: Optional[bool] = None
    enable_stitch: Optional[bool] = None
    video_disclosure: Optional[bool] = None
    promote_your_brand: Optional[bool] = None


class GmbPostDetails(GHLModel):
    gmb_event_type: Optional[Literal["STANDARD", "EVENT", "OFFER"]] = None
    title: Optional[str] = None
    action_type: Optional[Literal["book", "order", "shop", "learn_more", "sign_up", "call"]] = None


# Invoices / estimates

class BusinessDetails(GHLModel):
    name: Optional[str] = None
    phone_no: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None


class ContactDetails(GHLModel):
    id: str
    name: str
    email: Optional[str] = None
    phone_no: Optional[str] = None


class InvoiceItem(GHLModel):
    name: str
    description: Optional[str] = None
    currency: str
    amount: float = Field(description="Float in the account currency (99.00 = $99.00), not cents")
    qty: float
    type: Literal["one_time", "recurring"] = "one_time"


class Discount(GHLModel):
    type: Literal["percentage", "fixed"]
    value: Optional[float] = None


class SentTo(GHLModel):
    email: Optional[List[str]] = None
    phone_no: Optional[List[str]] = None


class RecurrenceRule(GHLModel):
    interval_type: Literal["daily", "weekly", "monthly", "yearly"]
    interval: int
    start_date: str
    day_of_month: Optional[int] = None
    day_of_week: Optional[Literal["mo", "tu", "we", "th", "fr", "sa", "su"]] = None
    num_of_week: Optional[int] = None
    count: Optional[int] = None


class ScheduleOptions(GHLModel):
    execute_at: Optional[str] = Field(default=None, description="One-time execution date YYYY-MM-DD")
    rrule: Optional[RecurrenceRule] = None


class AutoPayment(GHLModel):
    enable: bool
    type: Optional[str] = None
    payment_method_id: Optional[str] = None
    customer_id: Optional[str] = None
    card_id: Optional[str] = None


class FrequencySettings(GHLModel):
    enabled: bool = False
