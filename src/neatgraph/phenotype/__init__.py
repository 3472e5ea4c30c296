"""
NEAT Phenotype Package

This package implements the phenotype representation for the NEAT (NeuroEvolution
of Augmenting Topologies) algorithm: the computation graph compiled from a genome,
in which each neuron knows its incoming and outgoing enabled connections.

Modules:
    network: Neuron and Network classes

Exported Classes:
    Neuron:  A computational node, holding its incident enabled connections
    Network: The computation graph compiled from a genome
"""

from neatgraph.phenotype.network import Neuron, Network

__all__ = ['Neuron',
           'Network']
