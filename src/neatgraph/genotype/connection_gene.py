"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Functions:
    structural_key: Structural identity of a connection, from its endpoints only

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import random
import numpy as np
from neatgraph.run.config import Config

def structural_key(node_in: int, node_out: int) -> tuple[int, int]:
    """
    Get the structural key (a.k.a. structural hash) of a connection.

    The key is a pure function of the connection endpoints. The weight, the
    'enabled' flag and the innovation number must never participate in it:
    two connections joining the same nodes always collide, no matter how or
    when they were created, which is what lets the innovation registry give
    them the same innovation number and lets a genome reject duplicates.

    Parameters:
        node_in:  ID of the source node
        node_out: ID of the destination node

    Returns:
        the key identifying the connection structure
    """
    return (node_in, node_out)

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    Connection genes are identified by their innovation number, assigned by the
    innovation registry when the gene is added to a genome; the number depends
    only on the connection endpoints.

    Connections can be enabled or disabled, allowing NEAT to preserve structural
    information while deactivating pathways. Connections are never deleted.

    Public Attributes:
        node_in:    ID of the source node
        node_out:   ID of the destination node
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network
        innovation: Global innovation number (None until registered)

    Public Properties:
        structural_key: Key identifying the connection structure (endpoints only)

    Public Methods:
        mutate(config): Stochastically mutate the connection weight
    """

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float      = 0.0,
                 enabled   : bool       = True,
                 innovation: int | None = None):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    ID of the source node
            node_out:   ID of the destination node
            weight:     Weight of the connection
            enabled:    Whether this connection is active in the network
            innovation: Innovation number; overwritten by the innovation registry
        """
        self.node_in   : int        = node_in
        self.node_out  : int        = node_out
        self.weight    : float      = weight
        self.enabled   : bool       = enabled
        self.innovation: int | None = innovation

    @property
    def structural_key(self) -> tuple[int, int]:
        """The structural key of this connection (depends on its endpoints only)."""
        return structural_key(self.node_in, self.node_out)

    def mutate(self, config: Config, rng: random.Random | None = None) -> None:
        """
        Stochastically mutate the (gene describing the) connection.

        Both whether a mutation occurs and its nature & magnitude are stochastic.
        For a connection gene, mutating means changing the 'weight' parameter.
        Mutating a parameter can be accomplished in two ways:
         + modifying the current value additively by a small amount
         + replacing the current value by a new one

        Parameters:
            config: Stores configuration parameters
            rng:    Source of randomness (defaults to the 'random' module)
        """
        rng = rng or random
        perturb_prob = config.weight_perturb_prob   # prob of perturbing the 'weight'
        replace_prob = config.weight_replace_prob   # prob of replacing  the 'weight'

        r = rng.random()
        if r < perturb_prob:
            chg_weight  = rng.gauss(0, config.weight_perturb_strength)
            new_weight  = self.weight + chg_weight
            self.weight = float(np.clip(new_weight, config.min_weight, config.max_weight))

        elif r < perturb_prob + replace_prob:
            self.weight = rng.uniform(config.min_weight, config.max_weight)

    def __repr__(self):
        return (f"ConnectionGene(node_in={self.node_in:03d}, node_out={self.node_out:03d},"
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self.innovation})")

    def __str__(self):
        innov = "---" if self.innovation is None else f"{self.innovation:03d}"
        s  = f"[{innov},{'E' if self.enabled else 'D'},"
        s += f"{self.node_in:02d}=>{self.node_out:02d},{self.weight:+.02f}]"
        return s
