"""
pytest configuration file for visual features
"""
import pytest
import sys
import numpy as np
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from visual_features import CameraIntrinsics, PixelPoint

# Test configuration
pytest_plugins = []

@pytest.fixture
def reference_intrinsics():
    """Reference camera parameters (pure perspective model)."""
    return CameraIntrinsics(fx=600.0, fy=600.0, cx=320.0, cy=240.0)

@pytest.fixture
def perturbed_intrinsics():
    """Slightly wrong camera parameters used to inject calibration noise."""
    return CameraIntrinsics(fx=610.0, fy=590.0, cx=322.0, cy=238.0)

@pytest.fixture
def mock_camera_matrix():
    """Sample camera matrix for testing."""
    return np.array([
        [800.0, 0.0, 320.0],
        [0.0, 800.0, 240.0],
        [0.0, 0.0, 1.0]
    ], dtype=np.float64)

@pytest.fixture
def mock_distortion_coefficients():
    """Sample distortion coefficients for testing."""
    return np.array([-0.2, 0.1, 0.001, 0.001, -0.05], dtype=np.float64)

@pytest.fixture
def distorted_intrinsics(mock_camera_matrix, mock_distortion_coefficients):
    """Camera parameters with a radial-tangential distortion model."""
    return CameraIntrinsics.from_matrix(mock_camera_matrix, mock_distortion_coefficients)

@pytest.fixture
def sample_calibration_result(mock_camera_matrix, mock_distortion_coefficients):
    """Calibration result dictionary as written by a calibration tool."""
    return {
        "camera_matrix": mock_camera_matrix.tolist(),
        "distortion_coefficients": [mock_distortion_coefficients.tolist()],
        "rms_error": 0.21
    }

class StaticCentroidTracker:
    """Duck-typed 2D tracker returning a fixed centroid."""

    def __init__(self, centroid):
        self.centroid = centroid
        self.calls = 0

    def get_centroid(self):
        self.calls += 1
        return self.centroid

@pytest.fixture
def centroid_tracker():
    """2D tracker whose centroid is at pixel (380, 210)."""
    return StaticCentroidTracker(PixelPoint(380.0, 210.0))

# Configure test collection
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and organize tests."""
    for item in items:
        # Mark tests that exercise the OpenCV distortion model
        if "distort" in item.nodeid:
            item.add_marker(pytest.mark.opencv)

# Test markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "opencv: marks tests that require OpenCV"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
