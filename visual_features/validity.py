"""
Depth Validity Checks
=====================

A feature point handed to a control law must have a strictly positive,
non-negligible depth: the point interaction matrix divides by Z, so a negative
depth flips the sign of the control command and a null depth makes it blow up.

The checks run in severity order. A point behind the camera is reported
before a point that is merely too close to the optical center.
"""

import math
import numbers
from typing import Optional

from .exceptions import (
    BehindCameraError,
    DegenerateDepthError,
    InvalidHomogeneousPointError,
    NearZeroDepthError,
)


DEPTH_EPSILON = 1e-6


def depth_error(Z: float) -> Optional[DegenerateDepthError]:
    """
    Classify a depth value, returning the failure instead of raising it.

    Args:
        Z: Depth along the optical axis

    Returns:
        BehindCameraError if Z < 0, NearZeroDepthError if |Z| < DEPTH_EPSILON
        (or Z is NaN), None if the depth is usable.

    Raises:
        TypeError: if Z is not a real number (None, bool, ...)
    """
    if isinstance(Z, bool) or not isinstance(Z, numbers.Real):
        raise TypeError(f"Depth must be a real number, got {Z!r}")
    if Z < 0:
        return BehindCameraError(Z)
    if math.isnan(Z) or abs(Z) < DEPTH_EPSILON:
        return NearZeroDepthError(Z)
    return None


def check_depth(Z: float) -> None:
    """Raise the DegenerateDepthError subclass matching an invalid depth."""
    error = depth_error(Z)
    if error is not None:
        raise error


def homogeneous_depth(point) -> float:
    """
    Dehomogenized depth Z / W of a camera-frame point.

    Raises:
        InvalidHomogeneousPointError: if W is zero or not finite
    """
    if point.W == 0 or not math.isfinite(point.W):
        raise InvalidHomogeneousPointError(point.W)
    return point.Z / point.W
