"""Shared fixtures for Digital Rain tests."""

import io
import os
import random
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from digital_rain.config import RainConfig


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    return RainConfig(density=1.0, charset=("X",), min_length=2, max_length=2, seed=42)


@pytest.fixture
def out():
    return io.StringIO()
