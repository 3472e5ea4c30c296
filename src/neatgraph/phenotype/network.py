"""
NEAT Network Module

This module implements the phenotype representation for the NEAT algorithm:
the executable graph compiled from a genome.

Classes:
    Neuron:  A computational node, holding its incident enabled connections
    Network: The computation graph compiled from a genome
"""

from typing import Callable, TYPE_CHECKING
import graphviz  # type: ignore

from neatgraph.genotype.node_gene import NodeType, NodeGene

if TYPE_CHECKING:
    from neatgraph.genotype import ConnectionGene, Genome

class Neuron:
    """
    A computational node (neuron) in a neural network.

    This class represents the phenotype manifestation of a NodeGene. Each neuron
    wraps a NodeGene and keeps the lists of enabled connections ending at it
    ('incoming') and starting at it ('outgoing'). The lists reference the genome's
    own ConnectionGene objects and are rebuilt every time the network is compiled.

    Input neurons pass their input through unchanged, bias neurons output 1.0.
    Hidden and output neurons compute their output as:
        activation(weighted_input + bias)

    Public Attributes:
        incoming: Enabled connections ending at this neuron
        outgoing: Enabled connections starting at this neuron
        output:   The last computed output value (0.0 before the first pass)
    """

    def __init__(self, gene: NodeGene):
        """
        Parameters:
            gene: the gene encoding the Node/Neuron
        """
        self._gene   : NodeGene               = gene
        self.incoming: list['ConnectionGene'] = []
        self.outgoing: list['ConnectionGene'] = []
        self.output  : float                  = 0.0

    @property
    def gene(self) -> NodeGene:
        return self._gene

    @property
    def id(self) -> int:
        return self._gene.id

    @property
    def type(self) -> NodeType:
        return self._gene.type

    @property
    def bias(self) -> float:
        return self._gene.bias

    @property
    def activation(self) -> Callable[[float], float] | None:
        return self._gene.activation

    def calculate_output(self, input_data: float) -> None:
        """
        Calculate the output of this node/neuron.
        The result is saved internally in 'self.output'.

        Parameters:
            input_data: the input, or the weighted sum of the incoming connections
        """
        if self.type == NodeType.INPUT:
            self.output = input_data
        elif self.type == NodeType.BIAS:
            self.output = 1.0
        else:
            self.output = float(self.activation(input_data + self.bias))

    def __repr__(self):
        return (f"Neuron(gene={self._gene}, incoming={len(self.incoming)}, outgoing={len(self.outgoing)})")

class Network:
    """
    The computation graph compiled from a genome (a.k.a. the phenotype).

    Compiling walks the genome's connection genes once: every enabled connection
    is appended to the 'outgoing' list of its source neuron and to the 'incoming'
    list of its destination neuron. Disabled connections are left out.

    The network does not follow later changes to the genome; 'Genome.generate_phenotype()'
    (or 'rebuild()') must be called again after mutating it. Rebuilding discards the
    previous wiring, adds neurons for nodes created since, and keeps each neuron's
    last output (the state carried by recurrent connections).

    During a forward pass neurons are evaluated in topological order. If the network
    is recurrent, whenever only cycles remain the hidden neuron with the fewest
    unevaluated inputs is evaluated next; a connection whose source has not been
    evaluated yet in the current pass carries the source output of the previous pass.

    Public Attributes:
        neurons: Dictionary mapping node IDs to Neuron objects

    Public Properties:
        number_nodes:               Total number of nodes in the network
        number_nodes_hidden:        Number of hidden nodes in the network
        number_connections:         Total number of connections in the genome
        number_connections_enabled: Number of connections wired into the network

    Public Methods:
        rebuild():            Recompile the wiring from the genome
        forward_pass(inputs): Process inputs through the network and return outputs
        reset():              Zero the output of all neurons
        visualize(view):      Draw the network with Graphviz
    """

    def __init__(self, genome: 'Genome'):
        """
        Parameters:
            genome: the Genome encoding the network
        """
        self._genome = genome
        self.neurons: dict[int, Neuron] = {}
        self.rebuild()

    def rebuild(self) -> None:
        """
        Recompile the network wiring from the current state of the genome.

        Raises:
            ValueError: If a connection references a node missing from the genome
        """
        for gene in self._genome.node_genes:
            neuron = self.neurons.get(gene.id)
            if neuron is None or neuron.gene is not gene:
                self.neurons[gene.id] = Neuron(gene)

        for neuron in self.neurons.values():
            neuron.incoming = []
            neuron.outgoing = []

        for conn in self._genome.conn_genes:
            if not conn.enabled:
                continue
            if conn.node_in not in self.neurons:
                raise ValueError(f"Connection {conn} references non-existent source node: {conn.node_in}")
            if conn.node_out not in self.neurons:
                raise ValueError(f"Connection {conn} references non-existent destination node: {conn.node_out}")
            self.neurons[conn.node_in ].outgoing.append(conn)
            self.neurons[conn.node_out].incoming.append(conn)

        self._input_ids    = [gene.id for gene in self._genome.input_nodes]
        self._output_ids   = [gene.id for gene in self._genome.output_nodes]
        self._sorted_nodes = self._evaluation_order()

    def _evaluation_order(self) -> list[int]:
        """
        Sort the neurons using Kahn's algorithm over the enabled connections.

        When the remaining neurons all wait on a cycle, the cycle is broken by
        evaluating next the remaining non-output neuron with the fewest
        unevaluated inputs (lowest ID on ties).

        Returns:
            List of node IDs in evaluation order
        """
        in_degree = {node_id: len(neuron.incoming) for node_id, neuron in self.neurons.items()}
        remaining = set(self.neurons)
        ready     = sorted(node_id for node_id, degree in in_degree.items() if degree == 0)
        result    = []

        while remaining:
            if not ready:
                forced = min(remaining, key=lambda n: (self.neurons[n].type == NodeType.OUTPUT, in_degree[n], n))
                ready.append(forced)

            node_id = ready.pop(0)
            if node_id not in remaining:
                continue
            remaining.discard(node_id)
            result.append(node_id)

            # Process all outgoing edges
            for conn in self.neurons[node_id].outgoing:
                in_degree[conn.node_out] -= 1
                if in_degree[conn.node_out] == 0 and conn.node_out in remaining:
                    ready.append(conn.node_out)

        return result

    @property
    def number_nodes(self) -> int:
        """Total number of nodes in the network."""
        return len(self.neurons)

    @property
    def number_nodes_hidden(self) -> int:
        """Number of hidden nodes in the network."""
        return sum(1 for neuron in self.neurons.values() if neuron.type == NodeType.HIDDEN)

    @property
    def number_connections(self) -> int:
        """Total number of connections in the genome (enabled or not)."""
        return len(self._genome.conn_genes)

    @property
    def number_connections_enabled(self) -> int:
        """Number of enabled connections, i.e. wired into the network."""
        return sum(len(neuron.outgoing) for neuron in self.neurons.values())

    def reset(self) -> None:
        """Zero the output of all neurons, forgetting any recurrent state."""
        for neuron in self.neurons.values():
            neuron.output = 0.0

    def forward_pass(self, inputs: list[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Parameters:
            inputs: the network inputs (as many as input neurons)

        Returns:
            the results of passing the inputs through the network (as many as output neurons)

        Raises:
            ValueError: If the number of inputs does not match the number of input neurons
        """
        if len(inputs) != len(self._input_ids):
            raise ValueError(f"Expected {len(self._input_ids)} inputs, got {len(inputs)}")

        # Set input values
        for i, input_id in enumerate(self._input_ids):
            self.neurons[input_id].calculate_output(float(inputs[i]))

        # Propagate values through the network, in evaluation order
        for node_id in self._sorted_nodes:
            neuron = self.neurons[node_id]
            if neuron.type == NodeType.INPUT:   # already set
                continue
            input_data = sum(c.weight * self.neurons[c.node_in].output for c in neuron.incoming)
            neuron.calculate_output(input_data)

        return [self.neurons[ID].output for ID in self._output_ids]

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout

        node_style = {'style': 'filled', 'shape': 'circle', 'fontsize': '8', 'width': '0.5', 'fixedsize': 'true'}
        fillcolor  = {NodeType.INPUT : 'lightgrey',
                      NodeType.BIAS  : 'khaki',
                      NodeType.HIDDEN: 'lightblue',
                      NodeType.OUTPUT: 'white'}
        clusters   = {NodeType.INPUT : ('cluster_input' , 'source'),
                      NodeType.BIAS  : ('cluster_bias'  , 'source'),
                      NodeType.HIDDEN: ('cluster_hidden', 'same'),
                      NodeType.OUTPUT: ('cluster_output', 'sink')}

        for node_type, (cluster_name, rank) in clusters.items():
            node_ids = sorted(n for n, neuron in self.neurons.items() if neuron.type == node_type)
            if not node_ids:
                continue
            with dot.subgraph(name=cluster_name) as cluster:
                cluster.attr(rank=rank, style='invisible')
                for node_id in node_ids:
                    cluster.node(str(node_id), label=str(node_id), fillcolor=fillcolor[node_type], **node_style)

        # Add edges with weights (both enabled and disabled)
        for conn in self._genome.conn_genes:
            dot.edge(str(conn.node_in), str(conn.node_out),
                     label=f"i={conn.innovation},w={conn.weight:.2f}",
                     fontsize='6',
                     color='black' if conn.enabled else 'lightgray')

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        return "\n".join(f"  {neuron}" for neuron in self.neurons.values())
