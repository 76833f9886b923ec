"""
Example: Building Visual Feature Points
=======================================

This example shows the three ways a visual servoing loop obtains point
features:
1. From a 2D tracker, completing the depth with a pose estimate
2. From 3D points expressed in the camera frame
3. From 3D points seen through a wrong calibration (robustness study)
"""

import sys
import os
import numpy as np

# Add the package to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from visual_features import (
    CameraFramePoint,
    CameraIntrinsics,
    CentroidObservation,
    DegenerateDepthError,
    FeaturePointBuilder,
    NoisyCameraFramePoint,
    PixelPoint,
    project_to_pixel,
)


class DotTracker:
    """Stand-in for a blob tracker locked on a dot at a fixed pixel."""

    def __init__(self, u, v):
        self.cog = PixelPoint(u, v)

    def get_centroid(self):
        return self.cog


def report_failure(error, observation):
    print(f"  dropped {type(error).__name__}: {error}")


def example_tracked_dot(cam, builder):
    """Feature from a 2D tracker, depth supplied afterwards."""
    print("=== 2D Tracker Example ===")

    s = builder.build(CentroidObservation(cam, DotTracker(380.0, 210.0)))
    print(f"From centroid: x={s.x:.4f} y={s.y:.4f} has_depth={s.has_depth}")

    # Depth usually comes from a pose estimation
    s = s.with_depth(1.2)
    print(f"With depth:    x={s.x:.4f} y={s.y:.4f} Z={s.Z:.4f}")


def example_target_points(builder):
    """Features of the four corners of a square target."""
    print("\n=== 3D Point Example ===")

    corners = np.array([
        [-0.05, -0.05, 0.0],
        [0.05, -0.05, 0.0],
        [0.05, 0.05, 0.0],
        [-0.05, 0.05, 0.0],
    ])

    # The second pose puts half of the target behind the camera
    for cMo in ([0.0, 0.0, 0.5, 0.1, 0.2, 0.0],
                [0.0, 0.0, 0.0, 0.0, np.pi / 2, 0.0]):
        features = []
        for corner in corners:
            try:
                features.append(builder.build(CameraFramePoint.from_object_point(corner, cMo)))
            except DegenerateDepthError:
                continue
        print(f"Valid features: {len(features)}/{len(corners)}")
        for s in features:
            print(f"  x={s.x:+.4f} y={s.y:+.4f} Z={s.Z:.4f}")


def example_calibration_noise(cam, builder):
    """Features disturbed by a calibration error."""
    print("\n=== Calibration Noise Example ===")

    wrong_cam = CameraIntrinsics(fx=610.0, fy=590.0, cx=322.0, cy=238.0)
    point = CameraFramePoint.from_homogeneous(0.12, -0.06, 1.2)

    clean = builder.build(point)
    noisy = builder.build(NoisyCameraFramePoint(point, cam, wrong_cam))

    print(f"Pixel:  {project_to_pixel(cam, point.x, point.y)}")
    print(f"Clean:  x={clean.x:.6f} y={clean.y:.6f} Z={clean.Z}")
    print(f"Noisy:  x={noisy.x:.6f} y={noisy.y:.6f} Z={noisy.Z}")
    print(f"Error:  {np.linalg.norm(noisy.to_vector() - clean.to_vector()):.6f}")


if __name__ == "__main__":
    print("Visual Features - Usage Examples")
    print("=" * 50)

    cam = CameraIntrinsics.from_dict({
        "camera_matrix": [[600.0, 0.0, 320.0], [0.0, 600.0, 240.0], [0.0, 0.0, 1.0]],
        "distortion_coefficients": [0.0, 0.0, 0.0, 0.0, 0.0]
    })
    builder = FeaturePointBuilder(on_error=report_failure)

    example_tracked_dot(cam, builder)
    example_target_points(builder)
    example_calibration_noise(cam, builder)
