"""
Feature Point Builder
=====================

Builds FeaturePoint values from tracker observations.

Supported observations:
- a 2D tracker exposing get_centroid() (blob or keypoint tracker)
- a raw pixel location
- a 3D camera-frame point whose projection was computed upstream
- a 3D camera-frame point seen through a deliberately wrong calibration

The 2D observations only give (x, y): the depth must be supplied afterwards
with FeaturePoint.with_depth(). 3D observations give the depth Z = Z/W, which
is validated before the feature is returned.

Usage:
    builder = FeaturePointBuilder(on_error=my_hook)
    s = builder.build(CameraFramePoint.from_homogeneous(0.12, -0.06, 1.2))
    s_2d = builder.build(PixelObservation(intrinsics, PixelPoint(330.5, 212.0)))
"""

from typing import Callable, Optional, Tuple, Union

from .camera_parameters import CameraIntrinsics
from .conversion import convert_point, project_to_pixel
from .exceptions import FeatureBuildError, InvalidHomogeneousPointError
from .types import (
    CameraFramePoint,
    CentroidObservation,
    FeaturePoint,
    NoisyCameraFramePoint,
    PixelObservation,
    PixelPoint,
)
from .validity import depth_error, homogeneous_depth


ErrorHook = Callable[[FeatureBuildError, object], None]


class FeaturePointBuilder:
    """
    Converts tracker observations into visual feature points.

    A builder keeps no per-observation state and can be shared between
    control loops.
    """

    def __init__(self, on_error: Optional[ErrorHook] = None, verbose: bool = False):
        """
        Initialize the builder.

        Args:
            on_error: Optional callable invoked as on_error(error, observation)
                      each time a construction fails, before the error is raised
            verbose: Whether to print failed constructions
        """
        self.on_error = on_error
        self.verbose = verbose

    def build(self, observation) -> FeaturePoint:
        """
        Build a feature point from any supported observation.

        Args:
            observation: PixelObservation, CentroidObservation, CameraFramePoint
                         or NoisyCameraFramePoint

        Returns:
            New FeaturePoint

        Raises:
            DegenerateDepthError: if a camera-frame point has an unusable depth
            InvalidHomogeneousPointError: if a camera-frame point has W == 0
            TypeError: if the observation type is not supported
        """
        if isinstance(observation, PixelObservation):
            return self.from_pixel(observation.intrinsics, observation.pixel)
        if isinstance(observation, CentroidObservation):
            return self.from_centroid(observation.intrinsics, observation.tracker)
        if isinstance(observation, NoisyCameraFramePoint):
            return self.from_camera_point_with_noise(observation.reference, observation.perturbed, observation.point)
        if isinstance(observation, CameraFramePoint):
            return self.from_camera_point(observation)
        if isinstance(observation, PixelPoint):
            raise TypeError("A PixelPoint carries no camera parameters, wrap it in a PixelObservation")
        raise TypeError(f"Unsupported observation type: {type(observation).__name__}")

    def from_centroid(self, intrinsics: CameraIntrinsics, tracker) -> FeaturePoint:
        """
        Build a depth-less feature from the centroid of a 2D tracker.

        Args:
            intrinsics: Parameters of the camera that acquired the tracked image
            tracker: Object exposing get_centroid() returning a PixelPoint or (u, v)

        Returns:
            FeaturePoint with Z unset
        """
        if not callable(getattr(tracker, "get_centroid", None)):
            raise TypeError(f"{type(tracker).__name__} does not provide get_centroid()")

        centroid = tracker.get_centroid()
        if not isinstance(centroid, PixelPoint):
            u, v = centroid
            centroid = PixelPoint(float(u), float(v))

        return self._from_pixel(intrinsics, centroid)

    def from_pixel(self, intrinsics: CameraIntrinsics, pixel: Union[PixelPoint, Tuple[float, float]]) -> FeaturePoint:
        """Build a depth-less feature from a pixel location."""
        return self._from_pixel(intrinsics, pixel)

    def from_camera_point(self, point: CameraFramePoint) -> FeaturePoint:
        """
        Build a feature from a camera-frame point.

        The feature takes the cached projection (x, y) of the point and its
        depth Z/W.

        Raises:
            BehindCameraError: if Z/W < 0
            NearZeroDepthError: if |Z/W| < DEPTH_EPSILON
            InvalidHomogeneousPointError: if W == 0
        """
        Z = self._depth(point)

        error = depth_error(Z)
        if error is not None:
            self._report(error, point)
            raise error

        return FeaturePoint(x=point.x, y=point.y, Z=Z)

    def from_camera_point_with_noise(self,
                                     reference: CameraIntrinsics,
                                     perturbed: CameraIntrinsics,
                                     point: CameraFramePoint) -> FeaturePoint:
        """
        Build a feature whose coordinates carry a calibration error.

        The projection (x, y) of the point is converted to pixels with the
        reference parameters, then back to meters with the perturbed ones.
        The depth is Z/W and is not validated: the point is expected to come
        from a simulation where it is known to be in front of the camera.

        Args:
            reference: Camera parameters used to go from meters to pixels
            perturbed: Camera parameters used to go back from pixels to meters
            point: Camera-frame point

        Returns:
            New FeaturePoint
        """
        Z = self._depth(point)

        u, v = project_to_pixel(reference, point.x, point.y)
        x, y = convert_point(perturbed, (u, v))

        return FeaturePoint(x=x, y=y, Z=Z)

    def _from_pixel(self, intrinsics: CameraIntrinsics, pixel) -> FeaturePoint:
        x, y = convert_point(intrinsics, pixel)
        return FeaturePoint(x=x, y=y)

    def _depth(self, point: CameraFramePoint) -> float:
        try:
            return homogeneous_depth(point)
        except InvalidHomogeneousPointError as error:
            self._report(error, point)
            raise

    def _report(self, error: FeatureBuildError, observation) -> None:
        if self.verbose:
            print(f"Feature construction failed: {error}")
        if self.on_error is not None:
            self.on_error(error, observation)


_default_builder = FeaturePointBuilder()


def build_feature_point(observation) -> FeaturePoint:
    """Build a feature point with a builder that has no error hook."""
    return _default_builder.build(observation)
