"""
Unit tests for value types and geometry helpers.
"""
import dataclasses
import math

import numpy as np
import pytest

from visual_features.exceptions import BehindCameraError, NearZeroDepthError
from visual_features.types import CameraFramePoint, FeaturePoint, PixelPoint
from visual_features.utils import (
    as_pose_matrix,
    rpy_to_matrix,
    to_homogeneous,
    transform_point,
    xyz_rpy_to_matrix,
)


class TestPixelPoint:
    """Test pixel point conventions."""

    @pytest.mark.unit
    def test_row_column_aliases(self):
        """Test that i is the row (v) and j is the column (u)."""
        p = PixelPoint.from_row_col(210.0, 380.0)

        assert p.u == 380.0
        assert p.v == 210.0
        assert p.i == 210.0
        assert p.j == 380.0
        assert p.as_tuple() == (380.0, 210.0)


class TestFeaturePoint:
    """Test the feature point value."""

    @pytest.mark.unit
    def test_depth_unset_by_default(self):
        """Test that a 2D feature exposes no depth rather than zero."""
        s = FeaturePoint(x=0.1, y=-0.05)

        assert s.Z is None
        assert not s.has_depth

    @pytest.mark.unit
    def test_with_depth_returns_new_value(self):
        """Test that supplying depth does not modify the original feature."""
        s = FeaturePoint(x=0.1, y=-0.05)
        s_3d = s.with_depth(1.2)

        assert s_3d is not s
        assert s_3d == FeaturePoint(0.1, -0.05, 1.2)
        assert s_3d.has_depth
        assert s.Z is None

    @pytest.mark.unit
    def test_with_depth_is_validated(self):
        """Test that an invalid depth cannot be attached."""
        s = FeaturePoint(x=0.1, y=-0.05)

        with pytest.raises(BehindCameraError):
            s.with_depth(-1.0)
        with pytest.raises(NearZeroDepthError):
            s.with_depth(0.0)

    @pytest.mark.unit
    def test_with_depth_requires_a_number(self):
        """Test that None and booleans are not accepted as depth."""
        s = FeaturePoint(x=0.1, y=-0.05)

        with pytest.raises(TypeError, match="real number"):
            s.with_depth(None)
        with pytest.raises(TypeError, match="real number"):
            s.with_depth(True)
        assert s.Z is None

    @pytest.mark.unit
    def test_is_immutable(self):
        """Test that features cannot be modified in place."""
        s = FeaturePoint(x=0.1, y=-0.05, Z=1.2)

        with pytest.raises(dataclasses.FrozenInstanceError):
            s.Z = 2.0

    @pytest.mark.unit
    def test_to_vector(self):
        """Test the feature vector s = [x, y]."""
        np.testing.assert_array_equal(FeaturePoint(0.1, -0.05, 1.2).to_vector(), [0.1, -0.05])


class TestCameraFramePoint:
    """Test camera-frame point producers."""

    @pytest.mark.unit
    def test_from_homogeneous(self):
        """Test perspective projection of a camera-frame point."""
        point = CameraFramePoint.from_homogeneous(0.12, -0.06, 1.2)

        assert point.x == pytest.approx(0.1)
        assert point.y == pytest.approx(-0.05)
        assert point.W == 1.0
        np.testing.assert_array_equal(point.homogeneous, [0.12, -0.06, 1.2, 1.0])

    @pytest.mark.unit
    def test_projection_is_scale_invariant(self):
        """Test that the projection does not depend on W."""
        point = CameraFramePoint.from_homogeneous(0.24, -0.12, 2.4, 2.0)

        assert point.x == pytest.approx(0.1)
        assert point.y == pytest.approx(-0.05)

    @pytest.mark.unit
    def test_zero_depth_projection(self):
        """Test that a point on the focal plane has no projection."""
        point = CameraFramePoint.from_homogeneous(0.1, 0.1, 0.0)

        assert math.isnan(point.x)
        assert math.isnan(point.y)

    @pytest.mark.unit
    def test_from_object_point(self):
        """Test changing the frame of an object point before projecting it."""
        cMo = xyz_rpy_to_matrix([0.0, 0.0, 1.0, 0.0, 0.0, 0.0])

        point = CameraFramePoint.from_object_point([0.12, -0.06, 0.2], cMo)

        assert point.Z == pytest.approx(1.2)
        assert point.x == pytest.approx(0.1)
        assert point.y == pytest.approx(-0.05)

    @pytest.mark.unit
    def test_from_object_point_rotated(self):
        """Test a half turn around the camera y axis."""
        cMo = xyz_rpy_to_matrix([0.0, 0.0, 2.0, 0.0, np.pi, 0.0])

        point = CameraFramePoint.from_object_point([0.5, 0.0, 0.5], cMo)

        assert point.X == pytest.approx(-0.5)
        assert point.Z == pytest.approx(1.5)
        assert point.x == pytest.approx(-1.0 / 3.0)

    @pytest.mark.unit
    def test_from_object_point_pose_vector(self):
        """Test that an [x, y, z, roll, pitch, yaw] pose gives the same point as its matrix."""
        pose = [0.02, -0.01, 0.6, 0.05, -0.03, 0.1]

        from_vector = CameraFramePoint.from_object_point([0.05, 0.05, 0.0], pose)
        from_matrix = CameraFramePoint.from_object_point([0.05, 0.05, 0.0], xyz_rpy_to_matrix(pose))

        np.testing.assert_allclose(from_vector.homogeneous, from_matrix.homogeneous, atol=1e-15)
        assert from_vector.x == pytest.approx(from_matrix.x, abs=1e-15)


class TestGeometryUtilities:
    """Test rigid transformation helpers."""

    @pytest.mark.unit
    def test_rpy_to_matrix_identity(self):
        """Test that zero angles give the identity rotation."""
        np.testing.assert_array_almost_equal(rpy_to_matrix([0.0, 0.0, 0.0]), np.eye(3))

    @pytest.mark.unit
    def test_rpy_to_matrix_is_rotation(self):
        """Test orthonormality of an arbitrary rotation."""
        R = rpy_to_matrix([0.3, -0.2, 1.1])

        np.testing.assert_array_almost_equal(R @ R.T, np.eye(3))
        assert abs(np.linalg.det(R) - 1.0) < 1e-9

    @pytest.mark.unit
    def test_rpy_to_matrix_yaw(self):
        """Test that a quarter turn in yaw maps the x axis onto the y axis."""
        R = rpy_to_matrix([0.0, 0.0, np.pi / 2])

        np.testing.assert_array_almost_equal(R @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0])

    @pytest.mark.unit
    def test_rpy_to_matrix_order(self):
        """Test that roll is applied first, then pitch, then yaw."""
        R = rpy_to_matrix([np.pi / 2, np.pi / 2, 0.0])

        # Roll takes y to z, pitch then takes z to x
        np.testing.assert_array_almost_equal(R @ [0.0, 1.0, 0.0], [1.0, 0.0, 0.0])

    @pytest.mark.unit
    def test_as_pose_matrix(self):
        """Test both pose representations and the rejection of others."""
        T = xyz_rpy_to_matrix([0.1, 0.2, 0.3, 0.4, -0.5, 0.6])

        np.testing.assert_array_equal(as_pose_matrix(T), T)
        np.testing.assert_array_equal(as_pose_matrix([0.1, 0.2, 0.3, 0.4, -0.5, 0.6]), T)
        np.testing.assert_array_almost_equal(T[:3, :3] @ T[:3, :3].T, np.eye(3))

        with pytest.raises(ValueError, match="roll"):
            as_pose_matrix([0.1, 0.2, 0.3])

    @pytest.mark.unit
    def test_to_homogeneous(self):
        """Test 3D and 4D inputs."""
        np.testing.assert_array_equal(to_homogeneous([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0, 1.0])
        np.testing.assert_array_equal(to_homogeneous([2.0, 4.0, 6.0, 2.0]), [2.0, 4.0, 6.0, 2.0])

        with pytest.raises(ValueError):
            to_homogeneous([1.0, 2.0])

    @pytest.mark.unit
    def test_transform_point_requires_4x4(self):
        """Test that malformed transformations are rejected."""
        with pytest.raises(ValueError, match="4x4"):
            transform_point(np.eye(3), [0.0, 0.0, 1.0])
