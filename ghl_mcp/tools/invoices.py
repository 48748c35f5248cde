"""Invoice tools: invoice templates, recurring schedules, invoices, estimates
and estimate templates.

Every endpoint here is scoped by ``altId``/``altType``; ``alt_id`` defaults to
the configured location. Amounts are floats in the account currency
(99.00 = $99.00), never cents.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import (
    AutoPayment,
    BusinessDetails,
    ContactDetails,
    Discount,
    FrequencySettings,
    InvoiceItem,
    ScheduleOptions,
    SentTo,
    payload,
)
from .common import api, items, location, pick

CATEGORY = "invoices"

SendAction = Literal["email", "sms", "sms_and_email", "send_manually"]
TITLE_LIMIT = 40


def _alt(alt_id: Optional[str]) -> Dict[str, Any]:
    return {"altId": alt_id or location(), "altType": "location"}


def _result(data: Any, message: str) -> dict:
    return {"success": True, "data": data, "message": message}


def _check_title(title: Optional[str]) -> None:
    if title is not None and len(title) > TITLE_LIMIT:
        raise ValueError(f"title must be {TITLE_LIMIT} characters or fewer")


def _document(
    alt_id: Optional[str],
    name: str,
    currency: str,
    business_details: Optional[BusinessDetails],
    line_items: Optional[List[InvoiceItem]],
    discount: Optional[Discount],
    title: Optional[str],
    terms_notes: Optional[str],
    **extra: Any,
) -> Dict[str, Any]:
    """Fields shared by invoice, schedule, estimate and template bodies."""
    body = {
        **_alt(alt_id),
        "name": name,
        "currency": currency,
        "businessDetails": payload(business_details),
        "items": payload(line_items),
        "discount": payload(discount),
        "title": title,
        "termsNotes": terms_notes,
    }
    body.update(extra)
    return body


# Invoice templates

@ghl_tool(CATEGORY, action="create invoice template")
def create_invoice_template(
    name: str,
    currency: str,
    business_details: BusinessDetails,
    items: List[InvoiceItem],
    discount: Discount,
    title: Optional[str] = None,
    terms_notes: Optional[str] = None,
    invoice_number_prefix: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create a reusable invoice template.

    Args:
        name: Internal template name
        currency: Currency code, e.g. "USD"
        business_details: {name, phone_no, website, logo_url}
        items: Line items [{name, description, currency, amount, qty, type}];
            amount is a float, 99.00 = $99.00
        discount: {type percentage|fixed, value}
        title: Customer-facing title
        terms_notes: Terms and conditions
        invoice_number_prefix: Prefix for generated invoice numbers
        alt_id: Location ID (default: configured)
    """
    data = api().post("/invoices/template", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        invoiceNumberPrefix=invoice_number_prefix,
    ))
    return _result(data, f"Invoice template '{name}' created")


@ghl_tool(CATEGORY, action="list invoice templates")
def list_invoice_templates(
    limit: int = 10,
    offset: int = 0,
    status: Optional[str] = None,
    search: Optional[str] = None,
    payment_mode: Optional[Literal["default", "live", "test"]] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().get("/invoices/template", params={
        **_alt(alt_id),
        "limit": str(limit),
        "offset": str(offset),
        "status": status,
        "search": search,
        "paymentMode": payment_mode,
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} invoice templates")


@ghl_tool(CATEGORY, action="get invoice template")
def get_invoice_template(template_id: str, alt_id: Optional[str] = None) -> dict:
    return _result(api().get(f"/invoices/template/{template_id}", params=_alt(alt_id)), "Retrieved invoice template")


@ghl_tool(CATEGORY, action="update invoice template")
def update_invoice_template(
    template_id: str,
    name: str,
    currency: str,
    business_details: BusinessDetails,
    items: List[InvoiceItem],
    discount: Discount,
    title: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Replace a template. GHL expects the complete template, not a patch."""
    data = api().put(f"/invoices/template/{template_id}", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
    ))
    return _result(data, f"Invoice template {template_id} updated")


@ghl_tool(CATEGORY, action="delete invoice template")
def delete_invoice_template(template_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().delete(f"/invoices/template/{template_id}", params=_alt(alt_id))
    return _result(data, f"Invoice template {template_id} deleted")


@ghl_tool(CATEGORY, action="update invoice template late fees")
def update_invoice_template_late_fees(
    template_id: str,
    enabled: bool,
    fee_type: Optional[Literal["percentage", "fixed"]] = None,
    fee_amount: Optional[float] = None,
    grace_period_days: Optional[int] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Configure automatic late fees on a template.

    Args:
        template_id: Template to configure
        enabled: Turn late fees on or off
        fee_type: percentage or fixed
        fee_amount: Percentage, or fixed amount in the account currency
        grace_period_days: Days after the due date before the fee applies
        alt_id: Location ID (default: configured)
    """
    config = {"enable": enabled, "type": fee_type, "value": fee_amount}
    if grace_period_days is not None:
        config["grace"] = {"intervalCount": grace_period_days, "interval": "day"}
    data = api().patch(f"/invoices/template/{template_id}/late-fees-configuration", json={
        **_alt(alt_id),
        "lateFeesConfiguration": {k: v for k, v in config.items() if v is not None},
    })
    return _result(data, f"Late fees {'enabled' if enabled else 'disabled'} for template {template_id}")


@ghl_tool(CATEGORY, action="update invoice template payment methods")
def update_invoice_template_payment_methods(
    template_id: str,
    credit_card: Optional[bool] = None,
    ach: Optional[bool] = None,
    cash: Optional[bool] = None,
    check: Optional[bool] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Choose which payment methods invoices from a template accept."""
    methods = {"creditCard": credit_card, "ach": ach, "cash": cash, "check": check}
    data = api().patch(f"/invoices/template/{template_id}/payment-methods-configuration", json={
        **_alt(alt_id),
        "paymentMethods": {k: v for k, v in methods.items() if v is not None},
    })
    return _result(data, f"Payment methods updated for template {template_id}")


# Invoice schedules

@ghl_tool(CATEGORY, action="create invoice schedule")
def create_invoice_schedule(
    name: str,
    currency: str,
    live_mode: bool,
    business_details: BusinessDetails,
    contact_details: ContactDetails,
    items: List[InvoiceItem],
    discount: Discount,
    schedule: ScheduleOptions,
    title: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create a recurring (or one-off scheduled) invoice.

    Args:
        name: Schedule name
        currency: Currency code
        live_mode: False for test mode, True for production
        business_details: {name, phone_no, website}
        contact_details: Customer {id, name, email, phone_no}
        items: Line items; amount is a float in the account currency
        discount: {type percentage|fixed, value}
        schedule: Either {execute_at: "YYYY-MM-DD"} for a single run or
            {rrule: {interval_type daily|weekly|monthly|yearly, interval, start_date,
            day_of_month (-1..28), day_of_week mo..su, num_of_week (-1..4), count}}
        title: Title shown to the customer (max 40 characters)
        terms_notes: Terms and conditions
        alt_id: Location ID (default: configured)
    """
    _check_title(title)
    if schedule.execute_at and schedule.rrule:
        raise ValueError("schedule takes execute_at or rrule, not both")
    data = api().post("/invoices/schedule", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        liveMode=live_mode,
        contactDetails=payload(contact_details),
        schedule=payload(schedule),
    ))
    return _result(data, f"Invoice schedule '{name}' created")


@ghl_tool(CATEGORY, action="list invoice schedules")
def list_invoice_schedules(
    limit: int = 10,
    offset: int = 0,
    status: Optional[str] = None,
    search: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().get("/invoices/schedule", params={
        **_alt(alt_id),
        "limit": str(limit),
        "offset": str(offset),
        "status": status,
        "search": search,
    })
    return _result(data, f"Retrieved {len(items(data, 'schedules'))} invoice schedules")


@ghl_tool(CATEGORY, action="get invoice schedule")
def get_invoice_schedule(schedule_id: str, alt_id: Optional[str] = None) -> dict:
    return _result(api().get(f"/invoices/schedule/{schedule_id}", params=_alt(alt_id)), "Retrieved invoice schedule")


@ghl_tool(CATEGORY, action="update invoice schedule")
def update_invoice_schedule(
    schedule_id: str,
    name: Optional[str] = None,
    template_id: Optional[str] = None,
    frequency: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().put(f"/invoices/schedule/{schedule_id}", json={
        **_alt(alt_id),
        "name": name,
        "templateId": template_id,
        "frequency": frequency,
    })
    return _result(data, f"Invoice schedule {schedule_id} updated")


@ghl_tool(CATEGORY, action="delete invoice schedule")
def delete_invoice_schedule(schedule_id: str, alt_id: Optional[str] = None) -> dict:
    """Delete a schedule. This stops its automated billing."""
    data = api().delete(f"/invoices/schedule/{schedule_id}", params=_alt(alt_id))
    return _result(data, f"Invoice schedule {schedule_id} deleted")


@ghl_tool(CATEGORY, action="schedule invoice schedule")
def schedule_invoice_schedule(schedule_id: str, live_mode: bool, alt_id: Optional[str] = None) -> dict:
    """Activate a schedule so it starts generating invoices."""
    data = api().post(f"/invoices/schedule/{schedule_id}/schedule", json={**_alt(alt_id), "liveMode": live_mode})
    return _result(data, f"Invoice schedule {schedule_id} activated")


@ghl_tool(CATEGORY, action="set up auto-payment for invoice schedule")
def auto_payment_invoice_schedule(
    schedule_id: str,
    id: str,
    auto_payment: AutoPayment,
    alt_id: Optional[str] = None,
) -> dict:
    """Charge a saved payment method automatically for each scheduled invoice.

    Args:
        schedule_id: Schedule to configure
        id: Payment method or customer ID
        auto_payment: {enable, type "card"|"us_bank_account", payment_method_id, customer_id, card_id}
        alt_id: Location ID (default: configured)
    """
    data = api().post(f"/invoices/schedule/{schedule_id}/auto-payment", json={
        **_alt(alt_id),
        "id": id,
        "autoPayment": payload(auto_payment),
    })
    return _result(data, f"Auto-payment {'enabled' if auto_payment.enable else 'disabled'} for schedule {schedule_id}")


@ghl_tool(CATEGORY, action="cancel invoice schedule")
def cancel_invoice_schedule(schedule_id: str, alt_id: Optional[str] = None) -> dict:
    """Stop a schedule without deleting it; it can be activated again."""
    data = api().post(f"/invoices/schedule/{schedule_id}/cancel", json=_alt(alt_id))
    return _result(data, f"Invoice schedule {schedule_id} cancelled")


# Invoices

@ghl_tool(CATEGORY, action="create invoice")
def create_invoice(
    name: str,
    currency: str,
    issue_date: str,
    live_mode: bool,
    business_details: BusinessDetails,
    contact_details: ContactDetails,
    items: List[InvoiceItem],
    discount: Discount,
    sent_to: SentTo,
    title: Optional[str] = None,
    due_date: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create an invoice for a contact.

    Args:
        name: Invoice name
        currency: Currency code
        issue_date: YYYY-MM-DD
        live_mode: False for test mode, True for production
        business_details: {name, phone_no, website, logo_url}
        contact_details: Customer {id, name, email, phone_no}
        items: Line items; amount is a float, 150000.00 = $150,000
        discount: {type percentage|fixed, value}
        sent_to: Recipients {email: [...]}
        title: Title shown to the customer (max 40 characters)
        due_date: YYYY-MM-DD
        terms_notes: Terms and conditions
        alt_id: Location ID (default: configured)
    """
    _check_title(title)
    data = api().post("/invoices/", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        issueDate=issue_date,
        dueDate=due_date,
        liveMode=live_mode,
        contactDetails=payload(contact_details),
        sentTo=payload(sent_to),
    ))
    return _result(data, f"Invoice '{name}' created")


@ghl_tool(CATEGORY, action="list invoices")
def list_invoices(
    limit: int = 10,
    offset: int = 0,
    status: Optional[str] = None,
    contact_id: Optional[str] = None,
    search: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().get("/invoices/", params={
        **_alt(alt_id),
        "limit": str(limit),
        "offset": str(offset),
        "status": status,
        "contactId": contact_id,
        "search": search,
    })
    return _result(data, f"Retrieved {len(items(data, 'invoices'))} invoices")


@ghl_tool(CATEGORY, action="get invoice")
def get_invoice(invoice_id: str, alt_id: Optional[str] = None) -> dict:
    return _result(api().get(f"/invoices/{invoice_id}", params=_alt(alt_id)), f"Retrieved invoice {invoice_id}")


@ghl_tool(CATEGORY, action="update invoice")
def update_invoice(
    invoice_id: str,
    title: Optional[str] = None,
    currency: Optional[str] = None,
    due_date: Optional[str] = None,
    items: Optional[List[InvoiceItem]] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Update a draft invoice. Only the fields you pass are sent."""
    _check_title(title)
    data = api().put(f"/invoices/{invoice_id}", json={
        **_alt(alt_id),
        "title": title,
        "currency": currency,
        "dueDate": due_date,
        "items": payload(items),
    })
    return _result(data, f"Invoice {invoice_id} updated")


@ghl_tool(CATEGORY, action="delete invoice")
def delete_invoice(invoice_id: str, alt_id: Optional[str] = None) -> dict:
    return _result(api().delete(f"/invoices/{invoice_id}", params=_alt(alt_id)), f"Invoice {invoice_id} deleted")


@ghl_tool(CATEGORY, action="void invoice")
def void_invoice(invoice_id: str, alt_id: Optional[str] = None) -> dict:
    """Void an invoice. It stays on record but can no longer be paid."""
    data = api().post(f"/invoices/{invoice_id}/void", json=_alt(alt_id))
    return _result(data, f"Invoice {invoice_id} voided")


@ghl_tool(CATEGORY, action="send invoice")
def send_invoice(
    invoice_id: str,
    action: SendAction,
    live_mode: bool,
    user_id: str,
    alt_id: Optional[str] = None,
) -> dict:
    """Deliver an invoice by email, SMS, both, or mark it sent manually."""
    data = api().post(f"/invoices/{invoice_id}/send", json={
        **_alt(alt_id),
        "action": action,
        "liveMode": live_mode,
        "userId": user_id,
    })
    return _result(data, f"Invoice {invoice_id} sent ({action})")


@ghl_tool(CATEGORY, action="record invoice payment")
def record_invoice_payment(
    invoice_id: str,
    mode: Literal["cash", "card", "cheque", "bank_transfer", "other"],
    notes: str,
    amount: Optional[float] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Record a payment received outside GHL.

    Args:
        invoice_id: Invoice being paid
        mode: cash, card, cheque, bank_transfer or other
        notes: Payment notes
        amount: Partial amount in the account currency (default: the full balance)
        alt_id: Location ID (default: configured)
    """
    if amount is not None and amount <= 0:
        raise ValueError("amount must be positive")
    data = api().post(f"/invoices/{invoice_id}/record-payment", json={
        **_alt(alt_id),
        "mode": mode,
        "notes": notes,
        "amount": amount,
    })
    return _result(data, f"Payment recorded for invoice {invoice_id}")


@ghl_tool(CATEGORY, action="generate invoice number")
def generate_invoice_number(alt_id: Optional[str] = None) -> dict:
    data = api().get("/invoices/generate-invoice-number", params=_alt(alt_id))
    number = pick(data, "invoiceNumber")
    return {"success": True, "invoice_number": number, "data": data, "message": f"Next invoice number: {number}"}


@ghl_tool(CATEGORY, action="create Text2Pay invoice")
def text2pay_invoice(
    name: str,
    currency: str,
    issue_date: str,
    live_mode: bool,
    action: Literal["draft", "send"],
    user_id: str,
    contact_details: ContactDetails,
    items: List[InvoiceItem],
    sent_to: SentTo,
    title: Optional[str] = None,
    discount: Optional[Discount] = None,
    business_details: Optional[BusinessDetails] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create an invoice and text its payment link in one step.

    Args:
        name: Invoice name
        currency: Currency code
        issue_date: YYYY-MM-DD
        live_mode: False for test mode, True for production
        action: "draft" to only create, "send" to create and text it
        user_id: User creating or sending the invoice
        contact_details: Customer {id, name, phone_no, email}; phone_no is needed for SMS
        items: Line items; amount is a float in the account currency
        sent_to: Recipients {phone_no: [...], email: [...]}
        title: Title shown to the customer (max 40 characters)
        discount: {type percentage|fixed, value}
        business_details: {name, phone_no, website}
        alt_id: Location ID (default: configured)
    """
    _check_title(title)
    data = api().post("/invoices/text2pay", json=_document(
        alt_id, name, currency, business_details, items, discount, title, None,
        issueDate=issue_date,
        liveMode=live_mode,
        action=action,
        userId=user_id,
        contactDetails=payload(contact_details),
        sentTo=payload(sent_to),
    ))
    return _result(data, f"Text2Pay invoice '{name}' {'sent' if action == 'send' else 'saved as draft'}")


# Estimates

@ghl_tool(CATEGORY, action="create estimate")
def create_estimate(
    name: str,
    currency: str,
    business_details: BusinessDetails,
    contact_details: ContactDetails,
    items: List[InvoiceItem],
    discount: Discount,
    frequency_settings: Optional[FrequencySettings] = None,
    title: Optional[str] = None,
    expiry_date: Optional[str] = None,
    issue_date: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Create a quote for a contact.

    Args:
        name: Estimate name
        currency: Currency code
        business_details: {name, phone_no, website, logo_url}
        contact_details: Customer {id, name, email, phone_no}
        items: Line items; amount is a float, 150.00 = $150.00
        discount: {type percentage|fixed, value}
        frequency_settings: {enabled}; false for one-time estimates (default)
        title: Customer-facing title
        expiry_date: YYYY-MM-DD
        issue_date: YYYY-MM-DD
        terms_notes: Terms and conditions
        alt_id: Location ID (default: configured)
    """
    data = api().post("/invoices/estimate", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        contactDetails=payload(contact_details),
        frequencySettings=payload(frequency_settings or FrequencySettings()),
        expiryDate=expiry_date,
        issueDate=issue_date,
    ))
    return _result(data, f"Estimate '{name}' created")


@ghl_tool(CATEGORY, action="list estimates")
def list_estimates(
    limit: int = 10,
    offset: int = 0,
    status: Optional[Literal["all", "draft", "sent", "accepted", "declined", "invoiced", "viewed"]] = None,
    contact_id: Optional[str] = None,
    search: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().get("/invoices/estimate/list", params={
        **_alt(alt_id),
        "limit": str(limit),
        "offset": str(offset),
        "status": status,
        "contactId": contact_id,
        "search": search,
    })
    return _result(data, f"Retrieved {len(items(data, 'estimates'))} estimates")


@ghl_tool(CATEGORY, action="get estimate")
def get_estimate(estimate_id: str, alt_id: Optional[str] = None) -> dict:
    return _result(api().get(f"/invoices/estimate/{estimate_id}", params=_alt(alt_id)), f"Retrieved estimate {estimate_id}")


@ghl_tool(CATEGORY, action="update estimate")
def update_estimate(
    estimate_id: str,
    name: str,
    currency: str,
    business_details: BusinessDetails,
    contact_details: ContactDetails,
    items: List[InvoiceItem],
    discount: Discount,
    frequency_settings: Optional[FrequencySettings] = None,
    title: Optional[str] = None,
    expiry_date: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Replace an estimate. GHL expects the complete estimate, not a patch."""
    data = api().put(f"/invoices/estimate/{estimate_id}", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        contactDetails=payload(contact_details),
        frequencySettings=payload(frequency_settings or FrequencySettings()),
        expiryDate=expiry_date,
    ))
    return _result(data, f"Estimate {estimate_id} updated")


@ghl_tool(CATEGORY, action="delete estimate")
def delete_estimate(estimate_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().delete(f"/invoices/estimate/{estimate_id}", json=_alt(alt_id))
    return _result(data, f"Estimate {estimate_id} deleted")


@ghl_tool(CATEGORY, action="send estimate")
def send_estimate(
    estimate_id: str,
    action: SendAction,
    live_mode: bool,
    user_id: str,
    estimate_name: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().post(f"/invoices/estimate/{estimate_id}/send", json={
        **_alt(alt_id),
        "action": action,
        "liveMode": live_mode,
        "userId": user_id,
        "estimateName": estimate_name,
    })
    return _result(data, f"Estimate {estimate_id} sent ({action})")


@ghl_tool(CATEGORY, action="create invoice from estimate")
def create_invoice_from_estimate(
    estimate_id: str,
    mark_as_invoiced: bool = True,
    version: Optional[Literal["v1", "v2"]] = None,
    alt_id: Optional[str] = None,
) -> dict:
    """Turn an accepted estimate into an invoice."""
    data = api().post(f"/invoices/estimate/{estimate_id}/invoice", json={
        **_alt(alt_id),
        "markAsInvoiced": mark_as_invoiced,
        "version": version,
    })
    return _result(data, f"Invoice created from estimate {estimate_id}")


@ghl_tool(CATEGORY, action="generate estimate number")
def generate_estimate_number(alt_id: Optional[str] = None) -> dict:
    data = api().get("/invoices/estimate/number/generate", params=_alt(alt_id))
    number = pick(data, "estimateNumber")
    return {"success": True, "estimate_number": number, "data": data, "message": f"Next estimate number: {number}"}


# Estimate templates

@ghl_tool(CATEGORY, action="list estimate templates")
def list_estimate_templates(limit: int = 10, offset: int = 0, alt_id: Optional[str] = None) -> dict:
    data = api().get("/invoices/estimate/template", params={
        **_alt(alt_id),
        "limit": str(limit),
        "offset": str(offset),
    })
    return _result(data, f"Retrieved {len(items(data, 'data'))} estimate templates")


@ghl_tool(CATEGORY, action="get estimate template")
def get_estimate_template(template_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().get(f"/invoices/estimate/template/{template_id}", params=_alt(alt_id))
    return _result(data, "Retrieved estimate template")


@ghl_tool(CATEGORY, action="create estimate template")
def create_estimate_template(
    name: str,
    currency: str,
    business_details: BusinessDetails,
    items: List[InvoiceItem],
    discount: Discount,
    title: Optional[str] = None,
    terms_notes: Optional[str] = None,
    estimate_number_prefix: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().post("/invoices/estimate/template", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
        estimateNumberPrefix=estimate_number_prefix,
    ))
    return _result(data, f"Estimate template '{name}' created")


@ghl_tool(CATEGORY, action="update estimate template")
def update_estimate_template(
    template_id: str,
    name: str,
    currency: str,
    business_details: BusinessDetails,
    items: List[InvoiceItem],
    discount: Discount,
    title: Optional[str] = None,
    terms_notes: Optional[str] = None,
    alt_id: Optional[str] = None,
) -> dict:
    data = api().put(f"/invoices/estimate/template/{template_id}", json=_document(
        alt_id, name, currency, business_details, items, discount, title, terms_notes,
    ))
    return _result(data, f"Estimate template {template_id} updated")


@ghl_tool(CATEGORY, action="delete estimate template")
def delete_estimate_template(template_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().delete(f"/invoices/estimate/template/{template_id}", json=_alt(alt_id))
    return _result(data, f"Estimate template {template_id} deleted")


@ghl_tool(CATEGORY, action="preview estimate template")
def preview_estimate_template(template_id: str, alt_id: Optional[str] = None) -> dict:
    data = api().get("/invoices/estimate/template/preview", params={**_alt(alt_id), "templateId": template_id})
    return _result(data, f"Preview generated for estimate template {template_id}")
