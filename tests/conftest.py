"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
import numpy as np
from pathlib import Path

# Add the 'src' directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))


@pytest.fixture
def registry():
    """A fresh innovation registry, so tests never share innovation numbers."""
    from neatgraph.genotype.innovation_registry import InnovationRegistry
    return InnovationRegistry()


@pytest.fixture
def config():
    """Default configuration."""
    from neatgraph.run.config import Config
    return Config()


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    np.random.seed(42)
    random.seed(42)
    yield
    np.random.seed(None)
    random.seed(None)
