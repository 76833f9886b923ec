"""
Pixel <-> Meter Conversion
==========================

Conversion between pixel coordinates and normalized image-plane coordinates
(meters at unit depth).

Without distortion the perspective model is inverted in closed form:

    x = (u - cx) / fx        u = x * fx + cx
    y = (v - cy) / fy        v = y * fy + cy

With distortion coefficients the OpenCV distortion model is used: pixels are
undistorted iteratively with cv2.undistortPoints and normalized points are
distorted with cv2.projectPoints.

Pixel coordinates are never range-checked. Trackers may legitimately
extrapolate outside the sensor.
"""

from typing import Tuple, Union

import cv2
import numpy as np

from .camera_parameters import CameraIntrinsics
from .types import PixelPoint


# Termination criteria of the iterative undistortion
UNDISTORT_CRITERIA = (cv2.TERM_CRITERIA_COUNT | cv2.TERM_CRITERIA_EPS, 100, 1e-12)


def _as_pixel_pair(pixel: Union[PixelPoint, Tuple[float, float]]) -> Tuple[float, float]:
    if isinstance(pixel, PixelPoint):
        return pixel.u, pixel.v
    u, v = pixel
    return float(u), float(v)


def convert_points(intrinsics: CameraIntrinsics, pixels) -> np.ndarray:
    """
    Convert pixel coordinates to normalized image-plane coordinates.

    Args:
        intrinsics: Camera intrinsic parameters
        pixels: Array-like of shape (N, 2) holding (u, v) pixel coordinates

    Returns:
        np.ndarray of shape (N, 2) holding (x, y) normalized coordinates
    """
    pixels = np.asarray(pixels, dtype=np.float64).reshape(-1, 2)

    if not intrinsics.has_distortion:
        principal_point = np.array([intrinsics.cx, intrinsics.cy])
        focal = np.array([intrinsics.fx, intrinsics.fy])
        return (pixels - principal_point) / focal

    if len(pixels) == 0:
        return np.empty((0, 2), dtype=np.float64)

    normalized = cv2.undistortPoints(
        pixels.reshape(-1, 1, 2),
        intrinsics.camera_matrix,
        intrinsics.distortion_array,
        None,
        None,
        criteria=UNDISTORT_CRITERIA
    )
    return normalized.reshape(-1, 2).astype(np.float64)


def project_points(intrinsics: CameraIntrinsics, points) -> np.ndarray:
    """
    Convert normalized image-plane coordinates to pixel coordinates.

    Args:
        intrinsics: Camera intrinsic parameters
        points: Array-like of shape (N, 2) holding (x, y) normalized coordinates

    Returns:
        np.ndarray of shape (N, 2) holding (u, v) pixel coordinates
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)

    if not intrinsics.has_distortion:
        principal_point = np.array([intrinsics.cx, intrinsics.cy])
        focal = np.array([intrinsics.fx, intrinsics.fy])
        return points * focal + principal_point

    if len(points) == 0:
        return np.empty((0, 2), dtype=np.float64)

    # Points on the unit-depth plane seen from an identity pose
    rays = np.hstack([points, np.ones((len(points), 1))]).reshape(-1, 1, 3)
    projected, _ = cv2.projectPoints(
        rays,
        np.zeros(3),
        np.zeros(3),
        intrinsics.camera_matrix,
        intrinsics.distortion_array
    )
    return projected.reshape(-1, 2).astype(np.float64)


def convert_point(intrinsics: CameraIntrinsics, pixel: Union[PixelPoint, Tuple[float, float]]) -> Tuple[float, float]:
    """
    Convert one pixel location to normalized image-plane coordinates.

    Args:
        intrinsics: Camera intrinsic parameters
        pixel: PixelPoint or (u, v) pair

    Returns:
        (x, y) in meters at unit depth
    """
    u, v = _as_pixel_pair(pixel)

    if not intrinsics.has_distortion:
        return (u - intrinsics.cx) / intrinsics.fx, (v - intrinsics.cy) / intrinsics.fy

    x, y = convert_points(intrinsics, [(u, v)])[0]
    return float(x), float(y)


def project_to_pixel(intrinsics: CameraIntrinsics, x: float, y: float) -> Tuple[float, float]:
    """
    Convert normalized image-plane coordinates to a pixel location.

    Args:
        intrinsics: Camera intrinsic parameters
        x, y: Normalized coordinates

    Returns:
        (u, v) pixel coordinates
    """
    if not intrinsics.has_distortion:
        return x * intrinsics.fx + intrinsics.cx, y * intrinsics.fy + intrinsics.cy

    u, v = project_points(intrinsics, [(x, y)])[0]
    return float(u), float(v)
