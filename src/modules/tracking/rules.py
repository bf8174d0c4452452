"""Pure validation rules for the status columns.

Nothing here touches persistence or knows about roles beyond
``can_write_status``; the service combines them.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.constants import STATUS_WRITER_ROLES
from modules.tracking.constants import (
    CHECK_VALUES,
    DELIVERED,
    DELIVERY_REQUIRED_FIELDS,
    DELIVERY_VALUES,
    PICKUP_CODES,
    STATUS_VALUE_MAX_LENGTH,
    StatusType,
)
from modules.tracking.exceptions import StatusValidationError


class DeliveryDetails(BaseModel):
    """Proof of delivery required when DELIVERY becomes ``Delivered``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    time: str = Field(min_length=1)
    address: str = Field(min_length=1)
    po: str = Field(min_length=1)
    delivered_by: str = Field(min_length=1, alias="deliveredBy")

    def as_payload(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


def is_transition_allowed(column: str, value: str) -> bool:
    """Whether *value* may be written to *column* (ignoring extra data)."""
    if not isinstance(value, str) or len(value) > STATUS_VALUE_MAX_LENGTH:
        return False
    if column == StatusType.ORDER:
        return True
    if column == StatusType.PICKUP:
        primary, _, secondary = value.partition(" ")
        if primary not in PICKUP_CODES:
            return False
        return not secondary or secondary in PICKUP_CODES[primary]
    if column == StatusType.DELIVERY:
        return value in DELIVERY_VALUES
    if column == StatusType.CHECK:
        return value in CHECK_VALUES
    return False


def can_write_status(role: str) -> bool:
    return role in STATUS_WRITER_ROLES


def validate_status(
    column: str,
    value: str,
    additional_data: Optional[Mapping[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """Validate a column write and return the normalized additional data.

    DELIVERY + ``Delivered`` must carry every delivery field; other
    writes keep whatever freeform mapping they were given.

    Raises:
        StatusValidationError: the value or its additional data is invalid.
    """
    if column not in StatusType.values:
        raise StatusValidationError(
            f"Unknown status type {column!r}.", field="status_type", status_type=column
        )
    if not isinstance(value, str):
        raise StatusValidationError(
            "Status value must be a string.", field="status_value", status_type=column
        )
    if len(value) > STATUS_VALUE_MAX_LENGTH:
        raise StatusValidationError(
            f"Status value cannot exceed {STATUS_VALUE_MAX_LENGTH} characters.",
            field="status_value",
            status_type=column,
        )
    if not is_transition_allowed(column, value):
        raise StatusValidationError(
            f"Invalid {column} status value {value!r}.",
            field="status_value",
            status_type=column,
            status_value=value,
        )
    if column == StatusType.DELIVERY and value == DELIVERED:
        return _delivery_details(additional_data).as_payload()
    return dict(additional_data) if additional_data else None


def _delivery_details(additional_data: Optional[Mapping[str, Any]]) -> DeliveryDetails:
    data = dict(additional_data or {})
    missing = [name for name in DELIVERY_REQUIRED_FIELDS if not str(data.get(name) or "").strip()]
    if missing:
        raise StatusValidationError(
            f"{', '.join(missing)} required when status is {DELIVERED!r}.",
            field=missing[0],
            missing_fields=missing,
            status_type=StatusType.DELIVERY,
        )
    try:
        return DeliveryDetails.model_validate(data)
    except PydanticValidationError as exc:
        raise StatusValidationError(
            "Invalid delivery details.", status_type=StatusType.DELIVERY
        ) from exc


def compose_order_value(primary: str, secondary: str = "") -> str:
    """``"<primary> - <secondary>"``, or just the primary when alone."""
    primary, secondary = (primary or "").strip(), (secondary or "").strip()
    if not primary:
        return ""
    value = f"{primary} - {secondary}" if secondary else primary
    if len(value) > STATUS_VALUE_MAX_LENGTH:
        raise StatusValidationError(
            f"Status value cannot exceed {STATUS_VALUE_MAX_LENGTH} characters.",
            field="status_value",
            status_type=StatusType.ORDER,
        )
    return value


def compose_pickup_value(primary: str, secondary: str = "") -> str:
    """``"<primary> <code>"`` after checking the code belongs to the primary."""
    primary, secondary = (primary or "").strip(), (secondary or "").strip()
    if primary not in PICKUP_CODES:
        raise StatusValidationError(
            f"Primary status must be one of {', '.join(PICKUP_CODES)}.",
            field="primary",
            status_type=StatusType.PICKUP,
        )
    if secondary and secondary not in PICKUP_CODES[primary]:
        raise StatusValidationError(
            f"Invalid secondary status {secondary!r} for {primary!r}.",
            field="secondary",
            status_type=StatusType.PICKUP,
            allowed=list(PICKUP_CODES[primary]),
        )
    return f"{primary} {secondary}" if secondary else primary
