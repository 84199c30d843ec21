# -*- coding: utf-8 -*-
"""
Run parameters for fetch calculations.

``FetchParameters`` validates and coerces the user-facing parameters once,
before any geometry work starts. Any validation problem surfaces as
``InvalidParameter``.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fetch_utils import isint

from .constants import (
    DEFAULT_CIRCLE_FIDELITY,
    DEFAULT_DIRECTIONS,
    DEFAULT_MAX_DIST_KM,
    MAX_CIRCLE_FIDELITY,
    MAX_DIRECTIONS,
    MAX_MAX_DIST_KM,
    MIN_CIRCLE_FIDELITY,
    MIN_DIRECTIONS,
    MIN_MAX_DIST_KM,
)
from .exceptions import InvalidParameter


def _as_number(value: Any, name: str) -> float:
    """Return *value* as a finite float or raise InvalidParameter."""
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be a single number, not a boolean.")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameter(f"{name} must be a single number.") from None
    if not math.isfinite(number):
        raise InvalidParameter(f"{name} must be a finite number.")
    return number


def coerce_n_directions(value: Any) -> int:
    """Coerce the number of directions per quadrant to an int in [1, 20].

    Fractional values are rounded to the nearest whole number.
    """
    n_directions = int(round(_as_number(value, "n_directions")))
    if n_directions < MIN_DIRECTIONS or n_directions > MAX_DIRECTIONS:
        raise InvalidParameter(
            f"n_directions must be between {MIN_DIRECTIONS} and {MAX_DIRECTIONS}."
        )
    return n_directions


def coerce_max_dist(value: Any) -> float:
    """Coerce the maximum fetch distance (km) to a float in [1, 500]."""
    max_dist = _as_number(value, "max_dist")
    if max_dist < MIN_MAX_DIST_KM or max_dist > MAX_MAX_DIST_KM:
        raise InvalidParameter(
            f"max_dist must be between {MIN_MAX_DIST_KM:g} and {MAX_MAX_DIST_KM:g} km."
        )
    return max_dist


class FetchParameters(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_dist: float = DEFAULT_MAX_DIST_KM
    n_directions: int = DEFAULT_DIRECTIONS
    circle_fidelity: int = Field(
        default=DEFAULT_CIRCLE_FIDELITY, ge=MIN_CIRCLE_FIDELITY, le=MAX_CIRCLE_FIDELITY
    )
    quiet: bool = False
    site_names: Optional[List[str]] = None

    @field_validator("max_dist", mode="before")
    @classmethod
    def _check_max_dist(cls, value):
        return coerce_max_dist(value)

    @field_validator("n_directions", mode="before")
    @classmethod
    def _check_n_directions(cls, value):
        return coerce_n_directions(value)

    @field_validator("circle_fidelity", mode="before")
    @classmethod
    def _check_circle_fidelity(cls, value):
        if not isint(value):
            raise InvalidParameter("circle_fidelity must be a whole number.")
        return int(float(value))

    @field_validator("site_names", mode="before")
    @classmethod
    def _names_as_strings(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            return [value]
        return [str(name) for name in value]

    @property
    def max_dist_m(self) -> float:
        return self.max_dist * 1000.0


def validate_parameters(**kwargs) -> FetchParameters:
    """Build FetchParameters, reporting any problem as InvalidParameter."""
    try:
        return FetchParameters(**kwargs)
    except ValidationError as e:
        raise InvalidParameter(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(messages)
