"""
Input Validation Functions.

Outlet WhatsApp numbers are validated with Google's phonenumbers library and
stored in E.164 form (e.g. "+60123456789"), so wa.me links always carry a
full international number.
"""

import logging

import phonenumbers
from phonenumbers.phonenumberutil import NumberParseException

from . import config

logger = logging.getLogger(__name__)


def normalize_whatsapp_number(raw: str, region: str | None = None) -> str:
    """
    Validate a WhatsApp number and return it in E.164 format.

    Args:
        raw: Number as typed in the back office. Local numbers without a
            country code are read in ``region``.
        region: ISO region code for local numbers; defaults to
            ``config.DEFAULT_PHONE_REGION``.

    Returns:
        The E.164 number, or "" when ``raw`` is blank.

    Raises:
        ValueError: The number cannot be parsed or is not a valid number.
    """
    if not raw or not raw.strip():
        return ""
    region = region or config.DEFAULT_PHONE_REGION
    try:
        parsed = phonenumbers.parse(raw, region)
    except NumberParseException as e:
        logger.warning("Unparseable WhatsApp number %r: %s", raw, e)
        raise ValueError(f"Invalid WhatsApp number: {raw}") from e

    if not phonenumbers.is_valid_number(parsed):
        logger.warning("Invalid WhatsApp number %r", raw)
        raise ValueError(f"Invalid WhatsApp number: {raw}")

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
