"""Material domain constants."""

from django.db import models


class MaterialType(models.TextChoices):
    AUXILIARY = "AUXILIARY", "Auxiliary material"
    FINISHED = "FINISHED", "Finished goods"


PRICE_DECIMAL_PLACES = 4
PRICE_MAX_DIGITS = 14
