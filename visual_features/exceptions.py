"""
Feature Construction Errors
===========================

Every failure raised while building a feature point has its own class so that
orchestration code can tell a point behind the camera from a numerically
degenerate one and react differently (drop one point vs. abort the loop).
"""


class FeatureBuildError(Exception):
    """Base class for all feature construction failures."""


class DegenerateDepthError(FeatureBuildError, ValueError):
    """The depth of a 3D point cannot be used in an interaction matrix."""

    reason = "degenerate depth"

    def __init__(self, depth: float, message: str = None):
        self.depth = depth
        if message is None:
            message = f"{self.reason} (Z = {depth!r})"
        super().__init__(message)


class BehindCameraError(DegenerateDepthError):
    """The point lies behind the optical center (Z < 0)."""

    reason = "point is behind the camera"


class NearZeroDepthError(DegenerateDepthError):
    """The point is numerically coincident with the camera center."""

    reason = "point depth is null"


class InvalidHomogeneousPointError(FeatureBuildError, ValueError):
    """A homogeneous point cannot be dehomogenized (W is zero or not finite)."""

    def __init__(self, w: float):
        self.w = w
        super().__init__(f"cannot dehomogenize point with W = {w!r}")
