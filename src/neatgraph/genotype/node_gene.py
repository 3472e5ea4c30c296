"""
NEAT Node Gene Module.

This module implements the NodeGene class and NodeType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT, BIAS)
    NodeGene: Gene encoding a single network node
"""

import numpy as np
from enum   import Enum
from typing import Callable

from neatgraph.activations import activations, activation_codes
from neatgraph.run.config  import Config

class NodeType(Enum):
    """
    Nodes come in four types: input, hidden, output, bias.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"
    BIAS   = "B"

# Node types which can be the 'from' end of a connection
SOURCE_TYPES      = (NodeType.INPUT, NodeType.BIAS, NodeType.HIDDEN)

# Node types which can be the 'to' end of a connection
DESTINATION_TYPES = (NodeType.OUTPUT, NodeType.HIDDEN)

class NodeGene:
    """
    A gene describing a node in a Neural Network.

    Node genes are identified by an integer ID, unique within a genome, which
    remains stable as the genome grows. Input and output nodes are created
    together with the genome; hidden nodes are created by splitting an existing
    connection. Nodes are never removed.

    Input nodes pass their input through unchanged and bias nodes always
    output 1.0, so neither carries an activation function. Hidden and output
    nodes compute: activation(weighted_input + bias)

    Public Attributes:
        id:              Unique identifier for this node (within its genome)
        type:            Type of node (INPUT, HIDDEN, OUTPUT or BIAS)
        bias:            Bias value added to the node's weighted input
        activation_name: Name of the activation function (e.g., 'tanh', 'relu')
        activation:      The activation function itself (callable)
    """

    def __init__(self,
                 node_id        : int,
                 node_type      : NodeType,
                 config         : Config | None = None,
                 bias           : float  | None = None,
                 activation_name: str    | None = None):
        """
        Initialize a node gene.
        If 'bias' is not specified, it is drawn according to the configuration
        (0.0 when no configuration is given). If 'activation_name' is not
        specified, the configuration default is used ('sigmoid' without one).

        Parameters:
            node_id:         Unique identifier for this node
            node_type:       Type of node (INPUT, HIDDEN, OUTPUT or BIAS)
            config:          Stores configuration parameters
            bias:            Bias value added to the node's weighted input
            activation_name: Name of activation function (e.g., 'tanh', 'relu')

        Raises:
            ValueError: If the activation function is unknown
        """
        self.id  : int      = node_id
        self.type: NodeType = node_type

        if node_type in (NodeType.INPUT, NodeType.BIAS):
            self.bias           : float     = 0.0
            self.activation_name: str | None = None
            self.activation                 = None
            return

        if bias is None:
            bias = 0.0
            if config is not None:
                bias = config.bias_init_mean
                if config.bias_init_stdev > 0:
                    bias = float(np.random.normal(config.bias_init_mean, config.bias_init_stdev))
        self.bias = bias

        if activation_name is None:
            activation_name = config.activation_initial if config is not None else 'sigmoid'
        if activation_name not in activations:
            raise ValueError(f"Unknown activation function '{activation_name}' for node {node_id}")

        self.activation_name = activation_name
        self.activation: Callable[[float], float] | None = activations[activation_name]

    def __repr__(self):
        return (f"NodeGene(node_id={self.id:+03d}, node_type=NodeType.{self.type.name:6s},"
                f"bias={self.bias}, activation={self.activation_name})")

    def __str__(self):
        if self.type in (NodeType.INPUT, NodeType.BIAS):
            return f"[{self.type.value}{self.id}]"
        else:
            act_code = activation_codes.get(self.activation_name, "???")
            return f"[{self.type.value}{self.id},{act_code},b={self.bias:.2f}]"
