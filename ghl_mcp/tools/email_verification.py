"""Email verification (billed per check to the location wallet)."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from ..errors import GHLAPIError
from ..mcp_server import ghl_tool
from .common import api, location

CATEGORY = "email_verification"

logger = logging.getLogger("ghl_mcp.tools.email_verification")


def _summary(verification: dict) -> str:
    if "result" not in verification:
        return f"Email verification not processed: {verification.get('message')}"
    message = f"Email verification completed. Result: {verification.get('result')}, Risk: {verification.get('risk')}"
    reasons = verification.get("reason") or []
    if reasons:
        message += f", Reasons: {', '.join(str(r) for r in reasons)}"
    recommendation = verification.get("leadconnectorRecomendation") or {}
    if recommendation.get("isEmailValid") is not None:
        message += f", Recommended: {'Valid' if recommendation['isEmailValid'] else 'Invalid'}"
    return message


@ghl_tool(CATEGORY, action="verify email")
def verify_email(type: Literal["email", "contact"], verify: str, location_id: Optional[str] = None) -> dict:
    """Check whether an email address is deliverable.

    Charges are deducted from the location wallet. Failures are reported
    in the result (success False) instead of as a tool error.

    Args:
        type: "email" to check an address, "contact" to check a contact's email
        verify: The email address, or the contact ID
        location_id: Location to bill (default: configured)

    Returns:
        {"success": bool, "verification": dict, "message": str}
        where verification carries result (deliverable, undeliverable, risky,
        unknown), risk, reason and leadconnectorRecomendation.
    """
    try:
        data = api().post("/email/verify", params={"locationId": location(location_id)}, json={
            "type": type,
            "verify": verify,
        })
    except (GHLAPIError, ValueError) as e:
        logger.warning("verify_email: %s", e)
        return {
            "success": False,
            "verification": {"verified": False, "message": str(e), "address": verify},
            "message": f"Failed to verify email: {e}",
        }
    verification = data if isinstance(data, dict) else {"message": str(data)}
    return {"success": True, "verification": verification, "message": _summary(verification)}
