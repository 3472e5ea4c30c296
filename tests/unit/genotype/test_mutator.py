"""
Unit tests for the mutation operators.

Tests cover the 'add node' and 'add connection' structural mutations,
eligibility rules, enabling/disabling connections, weight mutation,
and the combined 'mutate()' entry point.
"""

import random
import pytest

from neatgraph.genotype.connection_gene import ConnectionGene, structural_key
from neatgraph.genotype.genome          import Genome
from neatgraph.genotype.mutator         import (Mutator, DefaultMutator, MutationReport,
                                                AddNodeResult, AddConnectionResult)
from neatgraph.genotype.node_gene       import NodeGene, NodeType
from neatgraph.run.config               import Config


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def mutator(config):
    return DefaultMutator(config, random.Random(7))


@pytest.fixture
def recurrent_mutator():
    config = Config()
    config.allow_recurrent = True
    return DefaultMutator(config, random.Random(7))


@pytest.fixture
def always_config():
    """Config applying every structural mutation, never touching weights."""
    config = Config()
    config.node_add_probability           = 1.0
    config.connection_add_probability     = 1.0
    config.connection_enable_probability  = 1.0
    config.connection_disable_probability = 1.0
    config.weight_perturb_prob            = 0.0
    config.weight_replace_prob            = 0.0
    return config


@pytest.fixture
def never_config():
    """Config never mutating anything."""
    config = Config()
    config.node_add_probability           = 0.0
    config.connection_add_probability     = 0.0
    config.connection_enable_probability  = 0.0
    config.connection_disable_probability = 0.0
    config.weight_perturb_prob            = 0.0
    config.weight_replace_prob            = 0.0
    return config


# ============================================================================
# Test: Mutator interface
# ============================================================================

class TestMutatorInterface:

    def test_mutator_is_abstract(self):
        with pytest.raises(TypeError):
            Mutator()

    def test_default_mutator_defaults(self):
        assert isinstance(DefaultMutator(), Mutator)

    def test_mutation_report_defaults(self):
        report = MutationReport()

        assert report.add_node is None
        assert report.add_connection is None
        assert report.enabled is False
        assert report.disabled is False


# ============================================================================
# Test: Eligibility
# ============================================================================

class TestEligibility:
    """Test which connections and nodes a mutation may use."""

    def test_no_connections(self, registry, config):
        genome = Genome(2, 1, registry, config)
        assert DefaultMutator.eligible_connections(genome) == []

    def test_only_enabled_connections(self, registry, config):
        genome = Genome(2, 1, registry, config)
        conn1  = ConnectionGene(0, 2, 1.0, enabled=True)
        conn2  = ConnectionGene(1, 2, 1.0, enabled=False)
        genome.add_innovation(conn1)
        genome.add_innovation(conn2)

        assert DefaultMutator.eligible_connections(genome) == [conn1]

    def test_eligible_nodes_minimal_genome(self, registry, config):
        genome = Genome(3, 2, registry, config)
        eligible_in, eligible_out = DefaultMutator.eligible_nodes(genome)

        assert len(eligible_in)  == 3
        assert len(eligible_out) == 2

    def test_hidden_node_is_eligible_both_ways(self, registry, config):
        genome = Genome(3, 2, registry, config)
        hidden = NodeGene(5, NodeType.HIDDEN, config)
        genome.add_node(hidden)

        eligible_in, eligible_out = DefaultMutator.eligible_nodes(genome)

        assert len(eligible_in)  == 4
        assert len(eligible_out) == 3
        assert hidden in eligible_in
        assert hidden in eligible_out

    def test_bias_node_is_a_source(self, registry, config):
        genome = Genome(3, 2, registry, config)
        bias   = NodeGene(5, NodeType.BIAS)
        genome.add_node(bias)

        eligible_in, eligible_out = DefaultMutator.eligible_nodes(genome)

        assert bias in eligible_in
        assert bias not in eligible_out


# ============================================================================
# Test: add_node
# ============================================================================

class TestAddNode:
    """Test the 'add node' structural mutation."""

    def test_no_eligible_connections(self, registry, mutator, config):
        genome = Genome(2, 1, registry, config)
        genome.add_innovation(ConnectionGene(0, 2, 0.5, enabled=False))

        assert mutator.add_node(genome) == AddNodeResult.NO_ELIGIBLE_CONNECTIONS
        assert len(genome.node_genes) == 3
        assert len(genome.conn_genes) == 1
        assert registry.count() == 1

    def test_split_after_enabling(self, registry, mutator, config):
        registry.clear()
        genome = Genome(2, 1, registry, config)
        conn   = ConnectionGene(0, 2, 0.5, enabled=False)
        genome.add_innovation(conn)
        assert mutator.add_node(genome) == AddNodeResult.NO_ELIGIBLE_CONNECTIONS

        conn.enabled = True
        assert mutator.add_node(genome) == AddNodeResult.SUCCESS

        assert conn.enabled is False
        assert len(genome.node_genes) == 4
        assert len(genome.conn_genes) == 3
        assert registry.count() == 3

        new_node = genome.node_genes[-1]
        assert new_node.type == NodeType.HIDDEN
        for key in (structural_key(0, new_node.id), structural_key(new_node.id, 2)):
            assert key in genome.conn_keys
            assert key in registry

    def test_split_weights(self, registry, mutator, config):
        genome = Genome(2, 1, registry, config)
        genome.add_innovation(ConnectionGene(0, 2, -0.75))

        mutator.add_node(genome)

        conn_in, conn_out = genome.conn_genes[1:]
        assert conn_in.weight  == 1.0
        assert conn_out.weight == -0.75
        assert conn_in.enabled and conn_out.enabled

    def test_new_node_id_after_existing_nodes(self, registry, mutator, config):
        genome = Genome(2, 1, registry, config)
        genome.add_innovation(ConnectionGene(0, 2, 1.0))

        mutator.add_node(genome)

        assert genome.node_genes[-1].id == 3

    def test_same_split_in_two_genomes(self, registry, mutator, config):
        genome1 = Genome(2, 1, registry, config)
        genome2 = Genome(2, 1, registry, config)
        genome1.add_innovation(ConnectionGene(0, 2, 1.0))
        genome2.add_innovation(ConnectionGene(0, 2, 2.0))

        mutator.add_node(genome1)
        mutator.add_node(genome2)

        assert genome1.node_genes[-1].id == genome2.node_genes[-1].id
        assert [c.innovation for c in genome1.conn_genes] == [c.innovation for c in genome2.conn_genes]
        assert registry.count() == 3

    def test_resplit_gets_new_node(self, registry, mutator, config):
        genome = Genome(2, 1, registry, config)
        conn   = ConnectionGene(0, 2, 1.0)
        genome.add_innovation(conn)
        mutator.add_node(genome)

        # Leave the original connection as the only enabled one
        for other in genome.conn_genes[1:]:
            other.enabled = False
        conn.enabled = True
        mutator.add_node(genome)

        node_ids = [node.id for node in genome.node_genes]
        assert len(node_ids) == len(set(node_ids))
        assert node_ids[-2:] == [3, 4]


# ============================================================================
# Test: add_connection
# ============================================================================

class TestAddConnection:
    """Test the 'add connection' structural mutation."""

    def test_success_then_already_exists(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)

        assert mutator.add_connection(genome) == AddConnectionResult.SUCCESS
        assert structural_key(0, 1) in genome.conn_keys
        assert registry.count() == 1

        assert mutator.add_connection(genome) == AddConnectionResult.ALREADY_EXISTS
        assert len(genome.conn_genes) == 1

    def test_success_once_key_is_absent(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)
        mutator.add_connection(genome)
        genome.conn_keys.discard(structural_key(0, 1))

        assert mutator.add_connection(genome) == AddConnectionResult.SUCCESS
        assert len(genome.conn_genes) == 2
        assert registry.count() == 1

    def test_weight_within_bounds(self, registry, config):
        config.min_weight = -0.1
        config.max_weight =  0.1
        genome = Genome(1, 1, registry, config)

        DefaultMutator(config, random.Random(3)).add_connection(genome)

        assert -0.1 <= genome.conn_genes[0].weight <= 0.1

    def _saturated_genome(self, registry, config):
        """A genome where the only missing connection is the hidden self loop."""
        genome = Genome(1, 1, registry, config)
        genome.add_node(NodeGene(2, NodeType.HIDDEN, config))
        for node_in, node_out in ((0, 1), (0, 2), (2, 1)):
            genome.add_innovation(ConnectionGene(node_in, node_out, 1.0))
        return genome

    def test_would_create_cycle(self, registry, mutator, config):
        genome  = self._saturated_genome(registry, config)
        results = {mutator.add_connection(genome) for _ in range(100)}

        assert AddConnectionResult.WOULD_CREATE_CYCLE in results
        assert AddConnectionResult.SUCCESS not in results
        assert structural_key(2, 2) not in genome.conn_keys

    def test_recurrent_connection_allowed(self, registry, recurrent_mutator):
        genome  = self._saturated_genome(registry, Config())
        results = {recurrent_mutator.add_connection(genome) for _ in range(100)}

        assert AddConnectionResult.SUCCESS in results
        assert AddConnectionResult.WOULD_CREATE_CYCLE not in results
        assert structural_key(2, 2) in genome.conn_keys


# ============================================================================
# Test: Enable / disable / weights
# ============================================================================

class TestOtherMutations:

    def test_enable_without_disabled_connections(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)
        genome.add_innovation(ConnectionGene(0, 1, 1.0))
        assert mutator.enable_connection(genome) is False

    def test_enable_connection(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)
        conn   = ConnectionGene(0, 1, 1.0, enabled=False)
        genome.add_innovation(conn)

        assert mutator.enable_connection(genome) is True
        assert conn.enabled is True

    def test_disable_without_enabled_connections(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)
        assert mutator.disable_connection(genome) is False

    def test_disable_connection(self, registry, mutator, config):
        genome = Genome(1, 1, registry, config)
        conn   = ConnectionGene(0, 1, 1.0)
        genome.add_innovation(conn)

        assert mutator.disable_connection(genome) is True
        assert conn.enabled is False

    def test_mutate_weights(self, registry, config):
        config.weight_perturb_prob = 1.0
        genome = Genome(2, 1, registry, config)
        genome.add_innovation(ConnectionGene(0, 2, 0.0))
        genome.add_innovation(ConnectionGene(1, 2, 0.0))

        DefaultMutator(config, random.Random(5)).mutate_weights(genome)

        assert all(conn.weight != 0.0 for conn in genome.conn_genes)


# ============================================================================
# Test: mutate
# ============================================================================

class TestMutate:
    """Test applying all mutations at once."""

    def test_every_mutation_attempted(self, registry, always_config):
        genome = Genome(1, 1, registry, always_config)
        genome.add_innovation(ConnectionGene(0, 1, 1.0))

        report = DefaultMutator(always_config, random.Random(1)).mutate(genome)

        assert report.add_node == AddNodeResult.SUCCESS
        assert report.add_connection is not None
        assert len(genome.hidden_nodes) == 1

    def test_nothing_attempted(self, registry, never_config):
        genome = Genome(1, 1, registry, never_config)
        genome.add_innovation(ConnectionGene(0, 1, 0.3))

        report = DefaultMutator(never_config, random.Random(1)).mutate(genome)

        assert report.add_node is None
        assert report.add_connection is None
        assert report.enabled is False
        assert report.disabled is False
        assert genome.conn_genes[0].weight == 0.3
        assert len(genome.node_genes) == 2

    def test_genome_mutate_uses_its_mutator(self, registry, always_config):
        genome = Genome(1, 1, registry, always_config,
                        DefaultMutator(always_config, random.Random(2)))
        genome.add_innovation(ConnectionGene(0, 1, 1.0))

        report = genome.mutate()

        assert isinstance(report, MutationReport)
        assert report.add_node == AddNodeResult.SUCCESS
