"""Geographic shapes used to confine results to an area."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .constants import CENTER, CIRCLE, METERS


class Shape(BaseModel):
    """Base class for geo sub-queries sent as the ``geo`` parameter."""

    model_config = ConfigDict(frozen=True)

    def to_json_object(self) -> Dict[str, Any]:
        raise NotImplementedError


class Circle(Shape):
    """Results within ``meters`` of a center point.

    Examples:
        >>> Circle(center_lat=34.06, center_long=-118.41, meters=500).to_json_object()
        {'$circle': {'$center': [34.06, -118.41], '$meters': 500}}
    """

    center_lat: float = Field(ge=-90, le=90)
    center_long: float = Field(ge=-180, le=180)
    meters: int = Field(ge=0)

    def to_json_object(self) -> Dict[str, Any]:
        return {
            CIRCLE: {
                CENTER: [self.center_lat, self.center_long],
                METERS: self.meters,
            }
        }


__all__ = ["Circle", "Shape"]
