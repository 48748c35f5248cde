"""Conversation tools: messaging, conversation management, calls and live chat."""

from __future__ import annotations

import base64
from typing import List, Literal, Optional

from mcp.server.fastmcp.exceptions import ToolError

from ..errors import AUTH_HINT, PERMISSION_HINT, ErrorHint, GHLAPIError, explain
from ..mcp_server import ghl_tool
from ..models import CallDetails, MessageError, payload
from .common import api, items, location, pick, unwrap

CATEGORY = "conversation"

# Conversations endpoints are served under an older API version
VERSION = "2021-04-15"

CALL_NOT_CONFIGURED = (
    "Call functionality is not configured for this GHL account. "
    "Set up a phone number or calling provider under Settings > Phone Numbers "
    "and make sure the account has calling enabled."
)
CALL_HINTS = (
    ErrorHint(CALL_NOT_CONFIGURED, status=500),
    ErrorHint(CALL_NOT_CONFIGURED, keywords=("internal server error",)),
)
RECORDING_HINTS = (
    ErrorHint(CALL_NOT_CONFIGURED + " Also verify the message ID belongs to a call, not an SMS or email.", status=500),
)
TRANSCRIPTION_HINTS = (
    ErrorHint(
        CALL_NOT_CONFIGURED + " Call transcription must be enabled, and the message ID must belong to a call.",
        status=500,
    ),
)
MESSAGE_STATUS_HINTS = (
    ErrorHint(
        "Cannot update message status: no conversation provider is configured. The message exists, "
        "but status updates need an active SMS provider (Twilio, LC Phone, etc.). "
        "You can still read it with get_message.",
        status=403,
        keywords=("No conversation provider found",),
    ),
    ErrorHint(
        "Cannot update message status: this message type (typically email) has a read-only status "
        "in the GHL API. Use get_email_message or get_message to read it.",
        status=401,
        keywords=("No message found",),
    ),
    ErrorHint(
        "Permission denied: cannot update message status. Check that the token can write messages "
        "and that the messaging provider is active.",
        status=403,
    ),
    AUTH_HINT,
    ErrorHint("Message not found. It may have been deleted or the ID is incorrect.", status=404),
)


@ghl_tool(CATEGORY, action="send SMS")
def send_sms(contact_id: str, message: str, from_number: Optional[str] = None) -> dict:
    """Send an SMS to a contact.

    The contact must have a phone number and the location needs an SMS
    provider.

    Args:
        contact_id: Recipient contact ID
        message: Text body (max 1600 characters)
        from_number: Sending number in E.164 format (default: location number)

    Returns:
        {"success": True, "message_id": str, "conversation_id": str, "message": str}
    """
    if len(message) > 1600:
        raise ValueError("SMS message must be 1600 characters or fewer")
    data = api().post("/conversations/messages", json={
        "type": "SMS",
        "contactId": contact_id,
        "message": message,
        "fromNumber": from_number,
    }, version=VERSION)
    return {
        "success": True,
        "message_id": pick(data, "messageId"),
        "conversation_id": pick(data, "conversationId"),
        "message": f"SMS sent successfully to contact {contact_id}",
    }


@ghl_tool(CATEGORY, action="send email")
def send_email(
    contact_id: str,
    subject: str,
    html: str,
    message: Optional[str] = None,
    email_from: Optional[str] = None,
    attachments: Optional[List[str]] = None,
    email_cc: Optional[List[str]] = None,
    email_bcc: Optional[List[str]] = None,
) -> dict:
    """Send an email to a contact.

    Args:
        contact_id: Recipient contact ID
        subject: Subject line
        html: HTML body (required)
        message: Plain-text body
        email_from: Sender address (default: location default)
        attachments: Attachment URLs
        email_cc: CC addresses
        email_bcc: BCC addresses
    """
    data = api().post("/conversations/messages", json={
        "type": "Email",
        "contactId": contact_id,
        "subject": subject,
        "message": message,
        "html": html,
        "emailFrom": email_from,
        "emailCc": email_cc,
        "emailBcc": email_bcc,
        "attachments": attachments,
    }, version=VERSION)
    return {
        "success": True,
        "message_id": pick(data, "messageId"),
        "conversation_id": pick(data, "conversationId"),
        "email_message_id": pick(data, "emailMessageId"),
        "message": f"Email sent successfully to contact {contact_id}",
    }


@ghl_tool(CATEGORY, action="search conversations")
def search_conversations(
    contact_id: Optional[str] = None,
    query: Optional[str] = None,
    status: Literal["all", "read", "unread", "starred", "recents"] = "all",
    limit: int = 20,
    assigned_to: Optional[str] = None,
) -> dict:
    """Search conversations in the location.

    Args:
        contact_id: Only conversations with this contact
        query: Free-text search
        status: all, read, unread, starred or recents (default: all)
        limit: Maximum results (default: 20)
        assigned_to: Only conversations assigned to this user ID

    Returns:
        {"success": True, "conversations": [...], "total": int, "message": str}
    """
    data = api().get("/conversations/search", params={
        "locationId": location(),
        "contactId": contact_id,
        "query": query,
        "status": status,
        "limit": limit,
        "assignedTo": assigned_to,
    }, version=VERSION)
    conversations = items(data, "conversations")
    total = pick(data, "total", len(conversations))
    return {
        "success": True,
        "conversations": conversations,
        "total": total,
        "message": f"Found {len(conversations)} conversations ({total} total)",
    }


@ghl_tool(CATEGORY, action="get conversation")
def get_conversation(
    conversation_id: str,
    limit: int = 20,
    message_types: Optional[List[str]] = None,
) -> dict:
    """Get a conversation and its latest messages.

    Args:
        conversation_id: Conversation ID
        limit: Messages to return (default: 20)
        message_types: Filter, e.g. ["TYPE_SMS", "TYPE_EMAIL"]

    Returns:
        {"success": True, "conversation": dict, "messages": [...], "has_more_messages": bool, "message": str}
    """
    client = api()
    conversation = client.get(f"/conversations/{conversation_id}", version=VERSION)
    data = client.get(f"/conversations/{conversation_id}/messages", params={
        "limit": limit,
        "type": ",".join(message_types) if message_types else None,
    }, version=VERSION)
    # Messages arrive as {"messages": {"messages": [...], "nextPage": bool}}
    page = pick(data, "messages", {})
    if isinstance(page, list):
        messages, next_page = page, pick(data, "nextPage", False)
    else:
        messages, next_page = items(page, "messages"), pick(page, "nextPage", False)
    return {
        "success": True,
        "conversation": unwrap(conversation, "conversation"),
        "messages": messages,
        "has_more_messages": bool(next_page),
        "message": f"Retrieved conversation with {len(messages)} messages",
    }


@ghl_tool(CATEGORY, action="create conversation")
def create_conversation(contact_id: str) -> dict:
    """Start a new conversation with a contact."""
    data = api().post("/conversations/", json={"locationId": location(), "contactId": contact_id}, version=VERSION)
    conversation = unwrap(data, "conversation")
    return {
        "success": True,
        "conversation_id": pick(conversation, "id"),
        "message": f"Conversation created successfully with contact {contact_id}",
    }


@ghl_tool(CATEGORY, action="update conversation")
def update_conversation(conversation_id: str, starred: Optional[bool] = None, unread_count: Optional[int] = None) -> dict:
    """Star/unstar a conversation or set its unread count (0 marks it read)."""
    data = api().put(f"/conversations/{conversation_id}", json={
        "locationId": location(),
        "starred": starred,
        "unreadCount": unread_count,
    }, version=VERSION)
    return {"success": True, "conversation": unwrap(data, "conversation"), "message": "Conversation updated successfully"}


@ghl_tool(CATEGORY, action="get recent messages")
def get_recent_messages(limit: int = 10, status: Literal["all", "unread"] = "unread") -> dict:
    """Get the most recently active conversations, newest first.

    Args:
        limit: Conversations to return (default: 10)
        status: "unread" (default) or "all"

    Returns:
        {"success": True, "conversations": [simplified rows], "message": str}
    """
    if status not in ("all", "unread"):
        status = "unread"
    data = api().get("/conversations/search", params={
        "locationId": location(),
        "limit": limit,
        "status": status,
        "sortBy": "last_message_date",
        "sort": "desc",
    }, version=VERSION)
    rows = [
        {
            "conversationId": conv.get("id"),
            "contactName": conv.get("fullName") or conv.get("contactName"),
            "contactEmail": conv.get("email"),
            "contactPhone": conv.get("phone"),
            "lastMessageBody": conv.get("lastMessageBody"),
            "lastMessageType": conv.get("lastMessageType"),
            "unreadCount": conv.get("unreadCount"),
            "starred": conv.get("starred"),
        }
        for conv in items(data, "conversations")
    ]
    return {"success": True, "conversations": rows, "message": f"Retrieved {len(rows)} recent conversations"}


@ghl_tool(CATEGORY, action="delete conversation")
def delete_conversation(conversation_id: str) -> dict:
    api().delete(f"/conversations/{conversation_id}", version=VERSION)
    return {"success": True, "message": "Conversation deleted successfully"}


@ghl_tool(CATEGORY, action="get email message")
def get_email_message(email_message_id: str) -> dict:
    """Get an email message (subject, body, recipients) by its email message ID."""
    data = api().get(f"/conversations/messages/email/{email_message_id}", version=VERSION)
    return {
        "success": True,
        "email_message": unwrap(data, "emailMessage"),
        "message": f"Retrieved email message with ID {email_message_id}",
    }


@ghl_tool(CATEGORY, action="get message")
def get_message(message_id: str) -> dict:
    """Get any conversation message by ID."""
    data = api().get(f"/conversations/messages/{message_id}", version=VERSION)
    return {"success": True, "message_data": unwrap(data, "message"), "message": f"Retrieved message with ID {message_id}"}


@ghl_tool(CATEGORY, action="upload message attachments")
def upload_message_attachments(conversation_id: str, attachment_urls: List[str]) -> dict:
    """Attach hosted files to a conversation so they can be sent in messages."""
    data = api().post("/conversations/messages/upload", json={
        "conversationId": conversation_id,
        "locationId": location(),
        "attachmentUrls": attachment_urls,
    }, version=VERSION)
    return {
        "success": True,
        "uploaded_files": pick(data, "uploadedFiles", data),
        "message": f"Attachments uploaded successfully to conversation {conversation_id}",
    }


@ghl_tool(CATEGORY, action="update message status", hints=MESSAGE_STATUS_HINTS)
def update_message_status(
    message_id: str,
    status: Literal["delivered", "failed", "pending", "read"],
    error: Optional[MessageError] = None,
    email_message_id: Optional[str] = None,
    recipients: Optional[List[str]] = None,
) -> dict:
    """Update the delivery status of a message sent through a custom provider.

    Only works for messages whose conversation provider is active; email
    statuses are read-only.

    Args:
        message_id: Message ID
        status: delivered, failed, pending or read
        error: Failure details {code, type, message} when status is failed
        email_message_id: Email message ID, for email messages
        recipients: Recipient addresses, for email messages
    """
    api().put(f"/conversations/messages/{message_id}/status", json={
        "status": status,
        "error": payload(error),
        "emailMessageId": email_message_id,
        "recipients": recipients,
    }, version=VERSION)
    return {"success": True, "message": f"Message status updated to {status} successfully"}


InboundType = Literal["SMS", "Email", "WhatsApp", "GMB", "IG", "FB", "Custom", "WebChat", "Live_Chat", "Call"]


@ghl_tool(CATEGORY, action="add inbound message")
def add_inbound_message(
    type: InboundType,
    conversation_id: str,
    conversation_provider_id: str,
    message: Optional[str] = None,
    attachments: Optional[List[str]] = None,
    html: Optional[str] = None,
    subject: Optional[str] = None,
    email_from: Optional[str] = None,
    email_to: Optional[str] = None,
    email_cc: Optional[List[str]] = None,
    email_bcc: Optional[List[str]] = None,
    email_message_id: Optional[str] = None,
    alt_id: Optional[str] = None,
    date: Optional[str] = None,
    call: Optional[CallDetails] = None,
) -> dict:
    """Record a message received through an external channel.

    Args:
        type: Channel: SMS, Email, WhatsApp, GMB, IG, FB, Custom, WebChat, Live_Chat or Call
        conversation_id: Conversation to add the message to
        conversation_provider_id: Custom conversation provider ID
        message: Text body
        attachments: Attachment URLs
        html: HTML body (Email)
        subject: Subject (Email)
        email_from: Sender (Email)
        email_to: Recipient (Email)
        email_cc: CC (Email)
        email_bcc: BCC (Email)
        email_message_id: Email thread ID to reply into
        alt_id: External message ID
        date: Message date (ISO 8601)
        call: Call details {to, from, status} (Call)
    """
    try:
        data = api().post("/conversations/messages/inbound", json={
            "type": type,
            "conversationId": conversation_id,
            "conversationProviderId": conversation_provider_id,
            "message": message,
            "attachments": attachments,
            "html": html,
            "subject": subject,
            "emailFrom": email_from,
            "emailTo": email_to,
            "emailCc": email_cc,
            "emailBcc": email_bcc,
            "emailMessageId": email_message_id,
            "altId": alt_id,
            "date": date,
            "call": payload(call),
        }, version=VERSION)
    except GHLAPIError as e:
        if type == "Call":
            raise ToolError(explain(e, CALL_HINTS, "add inbound message")) from e
        raise
    return {
        "success": True,
        "message_id": pick(data, "messageId"),
        "conversation_id": pick(data, "conversationId", conversation_id),
        "message": f"Inbound message added successfully to conversation {conversation_id}",
    }


@ghl_tool(CATEGORY, action="add outbound call", hints=CALL_HINTS)
def add_outbound_call(
    conversation_id: str,
    conversation_provider_id: str,
    to: Optional[str] = None,
    from_number: Optional[str] = None,
    status: Optional[Literal["pending", "completed", "answered", "busy", "no-answer", "failed", "canceled", "voicemail"]] = None,
    attachments: Optional[List[str]] = None,
    alt_id: Optional[str] = None,
    date: Optional[str] = None,
) -> dict:
    """Log an outbound call made through a custom provider.

    Args:
        conversation_id: Conversation ID
        conversation_provider_id: Custom conversation provider ID
        to: Number called
        from_number: Number that placed the call
        status: Call outcome
        attachments: Recording URLs
        alt_id: External call ID
        date: Call date (ISO 8601)
    """
    call = CallDetails(to=to, from_=from_number, status=status)
    data = api().post("/conversations/messages/outbound", json={
        "type": "Call",
        "conversationId": conversation_id,
        "conversationProviderId": conversation_provider_id,
        "attachments": attachments,
        "altId": alt_id,
        "date": date,
        "call": call.to_payload(),
    }, version=VERSION)
    return {
        "success": True,
        "message_id": pick(data, "messageId"),
        "conversation_id": pick(data, "conversationId", conversation_id),
        "message": f"Outbound call added successfully to conversation {conversation_id}",
    }


@ghl_tool(CATEGORY, action="get message recording", hints=RECORDING_HINTS)
def get_message_recording(message_id: str) -> dict:
    """Download a call recording. The audio is returned base64-encoded."""
    content, content_type = api().download(
        f"/conversations/messages/{message_id}/locations/{location()}/recording", version=VERSION
    )
    return {
        "success": True,
        "recording": base64.b64encode(content).decode("ascii"),
        "content_type": content_type,
        "message": f"Retrieved call recording for message {message_id}",
    }


@ghl_tool(CATEGORY, action="get message transcription", hints=TRANSCRIPTION_HINTS)
def get_message_transcription(message_id: str) -> dict:
    """Get the sentence-level transcription of a call."""
    data = api().get(f"/conversations/locations/{location()}/messages/{message_id}/transcription", version=VERSION)
    transcriptions = data if isinstance(data, list) else items(data, "transcriptions")
    return {
        "success": True,
        "transcriptions": transcriptions,
        "message": f"Retrieved call transcription for message {message_id}",
    }


@ghl_tool(CATEGORY, action="download transcription")
def download_transcription(message_id: str) -> dict:
    """Download a call transcription as plain text."""
    data = api().get(
        f"/conversations/locations/{location()}/messages/{message_id}/transcription/download", version=VERSION
    )
    return {
        "success": True,
        "transcription": data if isinstance(data, str) else str(data),
        "message": f"Downloaded call transcription for message {message_id}",
    }


@ghl_tool(CATEGORY, action="cancel scheduled message")
def cancel_scheduled_message(message_id: str) -> dict:
    data = api().delete(f"/conversations/messages/{message_id}/schedule", version=VERSION)
    return {
        "success": True,
        "status": pick(data, "status"),
        "message": pick(data, "message", "Scheduled message cancelled successfully"),
    }


@ghl_tool(CATEGORY, action="cancel scheduled email")
def cancel_scheduled_email(email_message_id: str) -> dict:
    data = api().delete(f"/conversations/messages/email/{email_message_id}/schedule", version=VERSION)
    return {
        "success": True,
        "status": pick(data, "status"),
        "message": pick(data, "message", "Scheduled email cancelled successfully"),
    }


@ghl_tool(CATEGORY, action="send live chat typing indicator")
def live_chat_typing(visitor_id: str, conversation_id: str, is_typing: bool) -> dict:
    """Show or hide the agent typing indicator in a live chat widget."""
    data = api().post("/conversations/providers/live-chat/typing", json={
        "locationId": location(),
        "isTyping": is_typing,
        "visitorId": visitor_id,
        "conversationId": conversation_id,
    }, version=VERSION)
    return {
        "success": bool(pick(data, "success", True)),
        "message": f"Live chat typing indicator {'enabled' if is_typing else 'disabled'} successfully",
    }
