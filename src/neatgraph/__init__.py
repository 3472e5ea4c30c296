"""
neatgraph - growing neural network topologies with NEAT.

This package implements the structural core of the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm: genomes made of node and connection genes, an
innovation registry shared by all genomes of a run (so the same structural
mutation gets the same innovation number everywhere), the mutation operators
growing a genome, and the compilation of a genome into an executable network.

Main components:
- genotype:    Genetic encoding (genomes, genes, innovation registry, mutators)
- phenotype:   The network compiled from a genome
- run:         Configuration and parallel mutation
- activations: Activation functions for neural networks

Example:
    >>> from neatgraph import Genome, InnovationRegistry
    >>> registry = InnovationRegistry()
    >>> genome   = Genome(3, 2, registry)
    >>> genome.mutator.add_connection(genome)
    <AddConnectionResult.SUCCESS: 'success'>
    >>> network  = genome.generate_phenotype()
    >>> outputs  = network.forward_pass([0.5, -1.0, 2.0])
"""

__version__ = "0.1.0"

from neatgraph.run.config         import Config
from neatgraph.run.parallel       import mutate_genomes
from neatgraph.genotype           import (AddConnectionResult,
                                          AddNodeResult,
                                          ConnectionGene,
                                          DefaultMutator,
                                          Genome,
                                          InnovationRegistry,
                                          MutationReport,
                                          Mutator,
                                          NodeGene,
                                          NodeType)
from neatgraph.phenotype          import Network, Neuron

__all__ = [
    "AddConnectionResult",
    "AddNodeResult",
    "Config",
    "ConnectionGene",
    "DefaultMutator",
    "Genome",
    "InnovationRegistry",
    "MutationReport",
    "Mutator",
    "Network",
    "Neuron",
    "NodeGene",
    "NodeType",
    "mutate_genomes",
]
