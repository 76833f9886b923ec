"""
Geometry utility functions
==========================

Rigid transformation helpers used to express object-frame points in the
camera frame before they are turned into feature points.

A pose is given either as a 4x4 homogeneous matrix or as a 6-vector
[x, y, z, roll, pitch, yaw] (radians, R = Rz(yaw) @ Ry(pitch) @ Rx(roll)).
"""

import numpy as np


def rpy_to_matrix(coords) -> np.ndarray:
    """
    Rotation matrix from roll-pitch-yaw angles (radians).

    Args:
        coords: [roll, pitch, yaw]

    Returns:
        3x3 rotation matrix
    """
    roll, pitch, yaw = np.asarray(coords, dtype=np.float64).reshape(3)
    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    Rx = np.array([[1.0, 0.0, 0.0], [0.0, cr, -sr], [0.0, sr, cr]])
    Ry = np.array([[cp, 0.0, sp], [0.0, 1.0, 0.0], [-sp, 0.0, cp]])
    Rz = np.array([[cy, -sy, 0.0], [sy, cy, 0.0], [0.0, 0.0, 1.0]])
    return Rz @ Ry @ Rx


def xyz_rpy_to_matrix(xyz_rpy) -> np.ndarray:
    """
    4x4 pose matrix from a translation and roll-pitch-yaw angles.

    Args:
        xyz_rpy: [x, y, z, roll, pitch, yaw]

    Returns:
        4x4 homogeneous transformation matrix
    """
    xyz_rpy = np.asarray(xyz_rpy, dtype=np.float64).reshape(6)
    pose = np.eye(4, dtype=np.float64)
    pose[:3, :3] = rpy_to_matrix(xyz_rpy[3:])
    pose[:3, 3] = xyz_rpy[:3]
    return pose


def as_pose_matrix(pose) -> np.ndarray:
    """Return a 4x4 matrix for a pose given as a 4x4 matrix or an xyz/rpy 6-vector."""
    pose = np.asarray(pose, dtype=np.float64)
    if pose.shape == (4, 4):
        return pose
    if pose.shape == (6,):
        return xyz_rpy_to_matrix(pose)
    raise ValueError(f"Pose must be 4x4 or an [x, y, z, roll, pitch, yaw] vector, got shape {pose.shape}")


def to_homogeneous(point) -> np.ndarray:
    """Return a 4-vector for a 3D point, or the point itself if already homogeneous."""
    point = np.asarray(point, dtype=np.float64).reshape(-1)
    if point.shape == (3,):
        return np.append(point, 1.0)
    if point.shape == (4,):
        return point
    raise ValueError(f"Expected a 3D or homogeneous point, got shape {point.shape}")


def transform_point(pose, point) -> np.ndarray:
    """
    Change the frame of a point.

    Args:
        pose: Transformation from the point's frame to the target frame,
              4x4 matrix or [x, y, z, roll, pitch, yaw]
        point: 3D point or homogeneous 4-vector

    Returns:
        Homogeneous 4-vector expressed in the target frame
    """
    return as_pose_matrix(pose) @ to_homogeneous(point)
