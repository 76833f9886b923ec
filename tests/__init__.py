"""
Tests package for Visual Features

This package contains all test modules for the feature point builder,
organized by test type:

- unit/: Unit tests for individual modules and classes
- integration/: Multi-step workflows from tracker output to feature points
"""
