"""Pytest fixtures for pathtidy tests."""

import tempfile

import pytest

from pathtidy.models import ClosePrimitive, CubicPrimitive, LinePrimitive, MovePrimitive
from pathtidy.path.sequence import PrimitiveSequence


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from pathtidy.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def uturn_sequence():
    """A line, two quarter turns that reverse direction, and a line back."""
    return PrimitiveSequence([
        MovePrimitive(last=[0, 0]),
        LinePrimitive(last=[10, 0]),
        CubicPrimitive(control1=[12.75, 0], control2=[15, 2.25], last=[15, 5]),
        CubicPrimitive(control1=[15, 7.75], control2=[12.25, 10], last=[10, 10]),
        LinePrimitive(last=[0, 10]),
    ])


@pytest.fixture
def racetrack_sequence():
    """
    Closed-looking outline: quarter-turn end on the right, a gentler end on
    the left that only the end-of-path test recognises.
    """
    return PrimitiveSequence([
        MovePrimitive(last=[0, 0]),
        LinePrimitive(last=[10, 0]),
        CubicPrimitive(control1=[12.75, 0], control2=[15, 2.25], last=[15, 5]),
        CubicPrimitive(control1=[15, 7.75], control2=[12.25, 10], last=[10, 10]),
        LinePrimitive(last=[0, 10]),
        CubicPrimitive(control1=[-3, 10], control2=[-6, 7], last=[-5, 5]),
        CubicPrimitive(control1=[-4, 3], control2=[-2, 0], last=[0, 0]),
    ])


@pytest.fixture
def square_sequence():
    """Move plus four lines of length 3."""
    return PrimitiveSequence([
        MovePrimitive(last=[0, 0]),
        LinePrimitive(last=[3, 0]),
        LinePrimitive(last=[3, 3]),
        LinePrimitive(last=[0, 3]),
        LinePrimitive(last=[0, 0]),
    ])


@pytest.fixture
def closed_triangle_sequence():
    return PrimitiveSequence([
        MovePrimitive(last=[0, 0]),
        LinePrimitive(last=[10, 0]),
        LinePrimitive(last=[10, 10]),
        ClosePrimitive(last=[0, 0]),
    ])
