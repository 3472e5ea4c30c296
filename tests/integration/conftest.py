"""
Shared fixtures for integration tests.
"""

import random
import pytest

from neatgraph.genotype import Genome, DefaultMutator
from neatgraph.run.config import Config


@pytest.fixture
def evolution_config():
    """A configuration growing genomes quickly."""
    config = Config()
    config.node_add_probability       = 0.3
    config.connection_add_probability = 0.8
    return config


@pytest.fixture
def make_population(registry, evolution_config):
    """Return a function creating minimal genomes sharing the registry."""
    def _make(size, num_inputs=3, num_outputs=2, config=evolution_config):
        return [Genome(num_inputs, num_outputs, registry, config, DefaultMutator(config, random.Random(i)))
                for i in range(size)]
    return _make
