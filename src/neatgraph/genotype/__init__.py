"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm: the genes encoding a network, the registry keeping
innovation numbers consistent across genomes, and the mutation operators.

Modules:
    node_gene:           NodeType enumeration and NodeGene class
    connection_gene:     ConnectionGene class and structural_key function
    innovation_registry: InnovationRegistry class
    mutator:             Mutator interface, DefaultMutator and mutation results
    genome:              Genome class

Exported Classes:
    NodeType:            Enumeration for node types (INPUT, HIDDEN, OUTPUT, BIAS)
    NodeGene:            Gene encoding a single network node
    ConnectionGene:      Gene encoding a weighted connection between nodes
    InnovationRegistry:  Shared registry of innovation numbers
    Mutator:             Abstract mutation strategy
    DefaultMutator:      Standard NEAT mutation strategy
    AddNodeResult:       Outcome of the 'add node' mutation
    AddConnectionResult: Outcome of the 'add connection' mutation
    MutationReport:      Outcomes of one round of mutations
    Genome:              Complete genome representing a neural network
"""

from neatgraph.genotype.node_gene           import NodeType, NodeGene
from neatgraph.genotype.connection_gene     import ConnectionGene, structural_key
from neatgraph.genotype.innovation_registry import InnovationRegistry
from neatgraph.genotype.mutator             import (Mutator,
                                                    DefaultMutator,
                                                    AddNodeResult,
                                                    AddConnectionResult,
                                                    MutationReport)
from neatgraph.genotype.genome              import Genome

__all__ = ['AddConnectionResult',
           'AddNodeResult',
           'ConnectionGene',
           'DefaultMutator',
           'Genome',
           'InnovationRegistry',
           'MutationReport',
           'Mutator',
           'NodeGene',
           'NodeType',
           'structural_key']
