"""
Visual Features - Feature Point Module
======================================

This module turns tracker observations into visual feature points for
image-based visual servoing:
- Pixel <-> normalized image-plane conversion with camera intrinsics
- Feature point construction from 2D trackers, pixel locations and 3D points
- Simulated calibration noise for robustness studies
- Depth validation before a feature reaches a control law

The interaction matrix itself is computed by the control law, outside of
this package.
"""

from .camera_parameters import CameraIntrinsics
from .conversion import convert_point, convert_points, project_points, project_to_pixel
from .exceptions import (
    BehindCameraError,
    DegenerateDepthError,
    FeatureBuildError,
    InvalidHomogeneousPointError,
    NearZeroDepthError,
)
from .feature_builder import FeaturePointBuilder, build_feature_point
from .types import (
    CameraFramePoint,
    CentroidObservation,
    CentroidTracker,
    FeaturePoint,
    NoisyCameraFramePoint,
    PixelObservation,
    PixelPoint,
)
from .validity import DEPTH_EPSILON, check_depth, depth_error, homogeneous_depth

__all__ = [
    'CameraIntrinsics',
    'convert_point',
    'convert_points',
    'project_points',
    'project_to_pixel',
    'BehindCameraError',
    'DegenerateDepthError',
    'FeatureBuildError',
    'InvalidHomogeneousPointError',
    'NearZeroDepthError',
    'FeaturePointBuilder',
    'build_feature_point',
    'CameraFramePoint',
    'CentroidObservation',
    'CentroidTracker',
    'FeaturePoint',
    'NoisyCameraFramePoint',
    'PixelObservation',
    'PixelPoint',
    'DEPTH_EPSILON',
    'check_depth',
    'depth_error',
    'homogeneous_depth',
]
