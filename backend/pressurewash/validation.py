import logging
import re
from typing import Any, Mapping, Optional

from .errors import (
    InvalidCondition,
    InvalidPhone,
    InvalidSize,
    MalformedRequest,
    MissingAddress,
    MissingName,
    MissingPhone,
    MissingService,
    ValidationFailure,
)
from .models import (
    CONDITIONS,
    DEFAULT_CONDITION,
    DEFAULT_SIZE,
    SERVICES,
    SIZES,
    QuoteSubmission,
)

logger = logging.getLogger(__name__)

MIN_PHONE_DIGITS = 10

INTAKE_FIELDS = ("address", "name", "phone", "service", "size", "condition")

# Compact spellings some clients send instead of the form labels
SERVICE_ALIASES = {
    "HouseWash": "House Wash",
    "DeckPatio": "Deck/Patio",
}

_NON_DIGIT = re.compile(r"\D")


def phone_digits(phone: str) -> str:
    return _NON_DIGIT.sub("", phone)


def normalize_service(value: Optional[str]) -> Optional[str]:
    """
    Map a submitted service to its form label, or None if it isn't one.
    """
    if value is None:
        return None
    value = value.strip()
    value = SERVICE_ALIASES.get(value, value)
    return value if value in SERVICES else None


def normalize_size(value: Optional[str]) -> str:
    if value is None or not value.strip():
        return DEFAULT_SIZE
    value = value.strip()
    if value not in SIZES:
        raise InvalidSize()
    return value


def normalize_condition(value: Optional[str]) -> str:
    if value is None or not value.strip():
        return DEFAULT_CONDITION
    value = value.strip()
    if value not in CONDITIONS:
        raise InvalidCondition()
    return value


def _check_shape(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedRequest()

    for key in INTAKE_FIELDS:
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedRequest()

    return raw


def validate_quote_request(raw: Any) -> QuoteSubmission:
    """
    Check a submitted quote body and return the normalized request.

    Raises the first failure found, in this order: body shape, address,
    name, phone, service, then size and condition. Size and condition
    fall back to Medium / Light when left blank.
    """
    try:
        body = _check_shape(raw)

        address = (body.get("address") or "").strip()
        if not address:
            raise MissingAddress()

        name = (body.get("name") or "").strip()
        if not name:
            raise MissingName()

        phone = (body.get("phone") or "").strip()
        if not phone:
            raise MissingPhone()
        if len(phone_digits(phone)) < MIN_PHONE_DIGITS:
            raise InvalidPhone()

        service = normalize_service(body.get("service"))
        if service is None:
            raise MissingService()

        size = normalize_size(body.get("size"))
        condition = normalize_condition(body.get("condition"))
    except ValidationFailure as exc:
        logger.warning("Quote request rejected: %s", exc.code)
        raise

    return QuoteSubmission(
        address=address,
        name=name,
        phone=phone,
        service=service,
        size=size,
        condition=condition,
    )
