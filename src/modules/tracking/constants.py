"""Status workflow constants.

Four independent columns per project (ORDER, PICKUP, DELIVERY, CHECK),
each with its own set of accepted values.
"""

from django.db import models


class StatusType(models.TextChoices):
    ORDER = "ORDER", "Order"
    PICKUP = "PICKUP", "Pickup"
    DELIVERY = "DELIVERY", "Delivery"
    CHECK = "CHECK", "Check"


COLUMNS: tuple[str, ...] = (
    StatusType.ORDER,
    StatusType.PICKUP,
    StatusType.DELIVERY,
    StatusType.CHECK,
)

STATUS_VALUE_MAX_LENGTH = 100

PICKUP_CODES: dict[str, tuple[str, ...]] = {
    "Picked": ("(B.T.W)", "(D.T.S)", "(B.T.W/MP)", "(D.T.S/MP)"),
    "Failed": ("(E.S)", "(E.H)"),
}

DELIVERED = "Delivered"
DELIVERY_VALUES: tuple[str, ...] = ("", DELIVERED)
DELIVERY_REQUIRED_FIELDS: tuple[str, ...] = ("time", "address", "po", "deliveredBy")

CHECK_VALUES: tuple[str, ...] = ("Check and sign(C.B/PM)", "(C.B)", "WH)", "")

PENDING_VALUE = "PENDING"

# Column values written when a project is spawned.  ON_CREATE marks an
# order that was just placed; ON_CONFIRM marks tracking that starts at
# confirmation, with every column waiting.
ON_CREATE: dict[str, str] = {
    StatusType.ORDER: PENDING_VALUE,
    StatusType.PICKUP: "",
    StatusType.DELIVERY: "",
    StatusType.CHECK: "",
}
ON_CONFIRM: dict[str, str] = {column: PENDING_VALUE for column in COLUMNS}
