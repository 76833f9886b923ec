"""
Camera Intrinsic Parameters
===========================

Immutable pinhole camera model used by every pixel <-> meter conversion.

Intrinsics are usually produced by a calibration tool. Two dictionary layouts
are accepted:

    # Calibration result layout
    {
        "camera_matrix": [[fx, 0, cx], [0, fy, cy], [0, 0, 1]],
        "distortion_coefficients": [k1, k2, p1, p2, k3]
    }

    # Flat layout
    {"fx": 600.0, "fy": 600.0, "cx": 320.0, "cy": 240.0}

Distortion coefficients follow OpenCV ordering (k1, k2, p1, p2[, k3[, k4, k5,
k6[, s1, s2, s3, s4[, tx, ty]]]]). An empty tuple selects the pure perspective
projection model.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np


# Coefficient counts accepted by OpenCV's distortion models
SUPPORTED_DISTORTION_SIZES = (0, 4, 5, 8, 12, 14)


@dataclass(frozen=True)
class CameraIntrinsics:
    """
    Intrinsic camera parameters.

    Attributes:
        fx, fy: Focal lengths in pixels
        cx, cy: Principal point in pixels
        distortion_coefficients: OpenCV-ordered distortion coefficients
    """

    fx: float
    fy: float
    cx: float
    cy: float
    distortion_coefficients: Tuple[float, ...] = field(default=())

    def __post_init__(self):
        for name in ("fx", "fy", "cx", "cy"):
            value = getattr(self, name)
            if (isinstance(value, (bool, np.bool_))
                    or not isinstance(value, (int, float, np.floating, np.integer))
                    or not math.isfinite(value)):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
            object.__setattr__(self, name, float(value))

        if self.fx == 0.0 or self.fy == 0.0:
            raise ValueError("Focal lengths fx and fy must be non-zero")

        coefficients = tuple(float(c) for c in np.ravel(np.asarray(self.distortion_coefficients, dtype=np.float64)))
        if len(coefficients) not in SUPPORTED_DISTORTION_SIZES:
            raise ValueError(
                f"Unsupported number of distortion coefficients: {len(coefficients)} "
                f"(expected one of {SUPPORTED_DISTORTION_SIZES})"
            )
        if not all(math.isfinite(c) for c in coefficients):
            raise ValueError("Distortion coefficients must be finite")
        object.__setattr__(self, "distortion_coefficients", coefficients)

    @property
    def camera_matrix(self) -> np.ndarray:
        """3x3 intrinsic matrix K."""
        return np.array([
            [self.fx, 0.0, self.cx],
            [0.0, self.fy, self.cy],
            [0.0, 0.0, 1.0]
        ], dtype=np.float64)

    @property
    def distortion_array(self) -> np.ndarray:
        """Distortion coefficients as a float64 array (empty when undistorted)."""
        return np.array(self.distortion_coefficients, dtype=np.float64)

    @property
    def has_distortion(self) -> bool:
        return any(c != 0.0 for c in self.distortion_coefficients)

    @classmethod
    def from_matrix(cls, camera_matrix, distortion_coefficients: Optional[Sequence[float]] = None) -> "CameraIntrinsics":
        """
        Build intrinsics from a 3x3 camera matrix.

        Args:
            camera_matrix: 3x3 intrinsic matrix [[fx, 0, cx], [0, fy, cy], [0, 0, 1]]
            distortion_coefficients: Optional distortion coefficients (any shape, flattened)

        Returns:
            CameraIntrinsics instance
        """
        K = np.asarray(camera_matrix, dtype=np.float64)
        if K.shape != (3, 3):
            raise ValueError(f"Camera matrix must be 3x3, got shape {K.shape}")

        if distortion_coefficients is None:
            distortion_coefficients = ()

        return cls(
            fx=K[0, 0],
            fy=K[1, 1],
            cx=K[0, 2],
            cy=K[1, 2],
            distortion_coefficients=tuple(np.ravel(np.asarray(distortion_coefficients, dtype=np.float64)))
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CameraIntrinsics":
        """Build intrinsics from a calibration result or flat dictionary."""
        distortion = data.get("distortion_coefficients")

        if "camera_matrix" in data:
            return cls.from_matrix(data["camera_matrix"], distortion)

        missing = [key for key in ("fx", "fy", "cx", "cy") if key not in data]
        if missing:
            raise ValueError(f"Missing intrinsic parameters: {', '.join(missing)}")

        return cls(
            fx=data["fx"],
            fy=data["fy"],
            cx=data["cx"],
            cy=data["cy"],
            distortion_coefficients=() if distortion is None else tuple(np.ravel(distortion))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the calibration result layout."""
        return {
            "camera_matrix": self.camera_matrix.tolist(),
            "distortion_coefficients": list(self.distortion_coefficients)
        }

