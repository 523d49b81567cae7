"""
Row Model
=========
One record of the input table, prior to resolution.
"""

import math
from typing import Optional
from pydantic import ConfigDict, field_serializer

from .base import GalleryModel


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """NaN/inf have no JSON form; they serialize as null."""
    if value is None or not math.isfinite(value):
        return None
    return value


class Row(GalleryModel):
    """
    Parsed table row.

    Fields:
        name: Display label ("Name" column)
        results: Result count ("Results" column, NaN if not numeric)
        cpr: Cost per result ("CPR" column, NaN if not numeric)
        link: Post URL, may carry a "#context" fragment
    """

    model_config = ConfigDict(extra="ignore", frozen=True, from_attributes=False)

    name: Optional[str] = None
    results: Optional[float] = None
    cpr: Optional[float] = None
    link: Optional[str] = None

    @field_serializer("results", "cpr", when_used="json")
    def serialize_number(self, v: Optional[float]) -> Optional[float]:
        return finite_or_none(v)
