"""
NEAT Mutator Module

This module implements the mutation operators of the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    AddNodeResult:       Outcome of the 'add node' mutation
    AddConnectionResult: Outcome of the 'add connection' mutation
    MutationReport:      Outcomes of one round of mutations applied to a genome
    Mutator:             Abstract base class defining the mutation operations
    DefaultMutator:      The standard NEAT mutation operators
"""

import logging
import random
from abc    import ABC, abstractmethod
from enum   import Enum
from typing import TYPE_CHECKING

import numpy as np

from neatgraph.run.config               import Config
from neatgraph.genotype.connection_gene import ConnectionGene, structural_key
from neatgraph.genotype.node_gene       import NodeType, NodeGene, SOURCE_TYPES, DESTINATION_TYPES

if TYPE_CHECKING:
    from neatgraph.genotype.genome import Genome

logger = logging.getLogger(__name__)

class AddNodeResult(Enum):
    SUCCESS                 = "success"
    NO_ELIGIBLE_CONNECTIONS = "noEligibleConnections"

class AddConnectionResult(Enum):
    SUCCESS            = "success"
    ALREADY_EXISTS     = "alreadyExists"
    WOULD_CREATE_CYCLE = "wouldCreateCycle"

class MutationReport:
    """
    Outcomes of one call to 'Mutator.mutate()'.

    Public Attributes:
        add_node:       Result of the 'add node' mutation (None if not attempted)
        add_connection: Result of the 'add connection' mutation (None if not attempted)
        enabled:        Whether a disabled connection was enabled
        disabled:       Whether an enabled connection was disabled
    """

    def __init__(self):
        self.add_node      : AddNodeResult       | None = None
        self.add_connection: AddConnectionResult | None = None
        self.enabled       : bool = False
        self.disabled      : bool = False

    def __repr__(self):
        return (f"MutationReport(add_node={self.add_node}, add_connection={self.add_connection}, "
                f"enabled={self.enabled}, disabled={self.disabled})")

class Mutator(ABC):
    """
    Abstract base class for the strategies mutating a genome.

    A mutator exposes the complete set of mutation operations; a genome holds
    the mutator chosen when it was created and callers only ever go through
    this interface. Every operation mutates the genome in place. Structural
    operations report their outcome instead of raising: finding nothing to
    mutate is a normal event in an evolutionary run.

    Public Methods (must be implemented by subclasses):
        add_node(genome):           Split an enabled connection with a new hidden node
        add_connection(genome):     Connect two nodes not yet connected
        mutate_weights(genome):     Perturb or replace connection weights
        enable_connection(genome):  Enable a disabled connection
        disable_connection(genome): Disable an enabled connection

    Public Methods:
        mutate(genome): Apply every operation, each with its configured probability
    """

    def __init__(self, config: Config | None = None, rng: random.Random | None = None):
        """
        Parameters:
            config: Stores configuration parameters (defaults used if None)
            rng:    Source of randomness; pass a seeded instance for reproducible runs
        """
        self._config: Config        = config if config is not None else Config()
        self._rng   : random.Random = rng    if rng    is not None else random.Random()

    @abstractmethod
    def add_node(self, genome: 'Genome') -> AddNodeResult:
        pass

    @abstractmethod
    def add_connection(self, genome: 'Genome') -> AddConnectionResult:
        pass

    @abstractmethod
    def mutate_weights(self, genome: 'Genome') -> None:
        pass

    @abstractmethod
    def enable_connection(self, genome: 'Genome') -> bool:
        pass

    @abstractmethod
    def disable_connection(self, genome: 'Genome') -> bool:
        pass

    def mutate(self, genome: 'Genome') -> MutationReport:
        """
        Apply to the genome all possible mutation operations.

        Each structural mutation occurs randomly with the probability given in
        the configuration; connection weights are always offered a mutation.

        Parameters:
            genome: the genome to mutate

        Returns:
            the outcome of the structural mutations
        """
        report = MutationReport()

        if self._rng.random() < self._config.node_add_probability:
            report.add_node = self.add_node(genome)
        if self._rng.random() < self._config.connection_add_probability:
            report.add_connection = self.add_connection(genome)
        if self._rng.random() < self._config.connection_enable_probability:
            report.enabled = self.enable_connection(genome)
        if self._rng.random() < self._config.connection_disable_probability:
            report.disabled = self.disable_connection(genome)

        self.mutate_weights(genome)
        return report

class DefaultMutator(Mutator):
    """
    The standard NEAT mutation operators.

    Structural mutations consult the innovation registry of the genome, so that
    a structure discovered independently by several genomes gets the same
    innovation numbers (and, for split connections, the same node ID) in all of them.
    """

    @staticmethod
    def eligible_connections(genome: 'Genome') -> list[ConnectionGene]:
        """The connections which may be split by 'add_node()': all enabled ones."""
        return [conn for conn in genome.conn_genes if conn.enabled]

    @staticmethod
    def eligible_nodes(genome: 'Genome') -> tuple[list[NodeGene], list[NodeGene]]:
        """
        The nodes which may be the ends of a connection created by 'add_connection()'.
        Hidden nodes can be both the start and the end of a connection, so
        they appear in both lists.

        Returns:
            2-tuple: (nodes which may start a connection, nodes which may end a connection)
        """
        eligible_in  = [node for node in genome.node_genes if node.type in SOURCE_TYPES]
        eligible_out = [node for node in genome.node_genes if node.type in DESTINATION_TYPES]
        return eligible_in, eligible_out

    def add_node(self, genome: 'Genome') -> AddNodeResult:
        """
        Split an existing connection by adding a new node.

        The connection to split is selected at random from all 'enabled' connections
        and is disabled. The new hidden node is connected to the two ends of the split
        connection: the incoming connection gets weight 1.0 and the outgoing connection
        inherits the old weight, so the new network initially behaves much like the old one.

        Parameters:
            genome: the genome to mutate

        Returns:
            NO_ELIGIBLE_CONNECTIONS if the genome has no enabled connection, SUCCESS otherwise
        """
        enabled_conn_genes = self.eligible_connections(genome)
        if not enabled_conn_genes:
            logger.debug("add_node: no enabled connection to split")
            return AddNodeResult.NO_ELIGIBLE_CONNECTIONS
        split_conn_gene = self._rng.choice(enabled_conn_genes)

        # The connection being split must be disabled.
        split_conn_gene.enabled = False

        # From the registry, get the ID for the new node. If this genome already
        # has that node (it split the same connection before, which was enabled
        # again since) the new node needs an ID of its own.
        floor       = genome.next_node_id()
        new_node_id = genome.registry.split_node_id(split_conn_gene.innovation, floor)
        if genome.has_node(new_node_id):
            new_node_id = genome.registry.fresh_node_id(floor)

        genome.add_node(NodeGene(new_node_id, NodeType.HIDDEN, self._config))

        # First new connection: input -> new node (weight = 1.0)
        genome.add_innovation(ConnectionGene(split_conn_gene.node_in, new_node_id, 1.0))

        # Second new connection: new node -> output (weight = old weight)
        genome.add_innovation(ConnectionGene(new_node_id, split_conn_gene.node_out, split_conn_gene.weight))

        logger.debug("add_node: split %s with node %d", split_conn_gene, new_node_id)
        return AddNodeResult.SUCCESS

    def add_connection(self, genome: 'Genome') -> AddConnectionResult:
        """
        Add a new connection between two existing nodes.

        The ends of the new connection are selected at random among the eligible
        nodes. The connection is not added if the genome already has a connection
        with the same ends, or if it would create a cycle while the configuration
        does not allow recurrent networks.

        Parameters:
            genome: the genome to mutate

        Returns:
            SUCCESS, ALREADY_EXISTS or WOULD_CREATE_CYCLE
        """
        eligible_in, eligible_out = self.eligible_nodes(genome)
        node_in  = self._rng.choice(eligible_in).id
        node_out = self._rng.choice(eligible_out).id

        if structural_key(node_in, node_out) in genome.conn_keys:
            logger.debug("add_connection: %d => %d already exists", node_in, node_out)
            return AddConnectionResult.ALREADY_EXISTS

        if not self._config.allow_recurrent and genome.would_create_cycle(node_in, node_out):
            logger.debug("add_connection: %d => %d would create a cycle", node_in, node_out)
            return AddConnectionResult.WOULD_CREATE_CYCLE

        weight = self._rng.gauss(self._config.weight_init_mean, self._config.weight_init_stdev)
        weight = float(np.clip(weight, self._config.min_weight, self._config.max_weight))
        innovation = genome.add_innovation(ConnectionGene(node_in, node_out, weight))

        logger.debug("add_connection: added %d => %d (innovation %d)", node_in, node_out, innovation)
        return AddConnectionResult.SUCCESS

    def mutate_weights(self, genome: 'Genome') -> None:
        """Offer every connection of the genome a weight mutation."""
        for conn in genome.conn_genes:
            conn.mutate(self._config, self._rng)

    def enable_connection(self, genome: 'Genome') -> bool:
        """
        Randomly enable a currently disabled connection.

        Returns:
            whether a connection was enabled
        """
        disabled_conns = [c for c in genome.conn_genes if not c.enabled]
        if not disabled_conns:
            return False
        self._rng.choice(disabled_conns).enabled = True
        return True

    def disable_connection(self, genome: 'Genome') -> bool:
        """
        Randomly disable a currently enabled connection.

        Returns:
            whether a connection was disabled
        """
        enabled_conns = [c for c in genome.conn_genes if c.enabled]
        if not enabled_conns:
            return False
        self._rng.choice(enabled_conns).enabled = False
        return True

