"""
Value Types
===========

Short-lived values exchanged between trackers, the feature builder and the
control law. All of them are immutable; a new instance is created for every
tracking iteration.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

import numpy as np

from .camera_parameters import CameraIntrinsics
from .utils import transform_point
from .validity import check_depth


@dataclass(frozen=True)
class PixelPoint:
    """
    Sub-pixel image location.

    u is the column coordinate and v the row coordinate. The (i, j) row/column
    aliases are provided for trackers that report points that way.
    """

    u: float
    v: float

    @classmethod
    def from_row_col(cls, i: float, j: float) -> "PixelPoint":
        return cls(u=float(j), v=float(i))

    @property
    def i(self) -> float:
        return self.v

    @property
    def j(self) -> float:
        return self.u

    def as_tuple(self) -> Tuple[float, float]:
        return (self.u, self.v)


@dataclass(frozen=True)
class CameraFramePoint:
    """
    Homogeneous 3D point in the camera frame with its cached projection.

    Attributes:
        X, Y, Z, W: Homogeneous camera-frame coordinates
        x, y: Normalized image-plane projection computed by the geometry module
    """

    X: float
    Y: float
    Z: float
    W: float
    x: float
    y: float

    @classmethod
    def from_homogeneous(cls, X: float, Y: float, Z: float, W: float = 1.0) -> "CameraFramePoint":
        """
        Build a point and compute its perspective projection x = X/Z, y = Y/Z.

        The projection is NaN when Z is zero; such a point is rejected later by
        the depth check.
        """
        if Z != 0:
            x, y = X / Z, Y / Z
        else:
            x = y = math.nan
        return cls(X=float(X), Y=float(Y), Z=float(Z), W=float(W), x=float(x), y=float(y))

    @classmethod
    def from_object_point(cls, object_point, cMo) -> "CameraFramePoint":
        """
        Express an object-frame point in the camera frame and project it.

        Args:
            object_point: 3D point or homogeneous 4-vector in the object frame
            cMo: Pose of the object frame expressed in the camera frame, as a
                 4x4 matrix or an [x, y, z, roll, pitch, yaw] vector

        Returns:
            CameraFramePoint with its cached projection
        """
        X, Y, Z, W = transform_point(cMo, object_point)
        return cls.from_homogeneous(X, Y, Z, W)

    @property
    def homogeneous(self) -> np.ndarray:
        return np.array([self.X, self.Y, self.Z, self.W], dtype=np.float64)


@dataclass(frozen=True)
class FeaturePoint:
    """
    Visual feature point: normalized image-plane coordinates and depth.

    Z is None when the feature was built from a 2D observation only. The
    interaction matrix of a point needs Z, so callers must supply it with
    with_depth() before using such a feature in a 3D-dependent control law.
    """

    x: float
    y: float
    Z: Optional[float] = None

    @property
    def has_depth(self) -> bool:
        return self.Z is not None

    def with_depth(self, Z: float) -> "FeaturePoint":
        """Return a copy of this feature with a validated depth."""
        check_depth(Z)
        return replace(self, Z=float(Z))

    def to_vector(self) -> np.ndarray:
        """Feature vector s = [x, y]."""
        return np.array([self.x, self.y], dtype=np.float64)


class CentroidTracker(ABC):
    """Capability of 2D trackers (blob, keypoint) that report a centroid."""

    @abstractmethod
    def get_centroid(self) -> PixelPoint:
        """Return the current tracked location in pixels."""
        pass


@dataclass(frozen=True)
class PixelObservation:
    """A pixel location observed in an image taken by a camera."""

    intrinsics: CameraIntrinsics
    pixel: Union[PixelPoint, Tuple[float, float]]


@dataclass(frozen=True)
class CentroidObservation:
    """A 2D tracker observed in an image taken by a camera."""

    intrinsics: CameraIntrinsics
    tracker: object


@dataclass(frozen=True)
class NoisyCameraFramePoint:
    """
    A camera-frame point whose projection is corrupted by a calibration error.

    The projection is mapped to pixels with the reference intrinsics and back
    to meters with the perturbed ones.
    """

    point: CameraFramePoint
    reference: CameraIntrinsics
    perturbed: CameraIntrinsics
