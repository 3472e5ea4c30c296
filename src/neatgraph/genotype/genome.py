"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

from typing import TYPE_CHECKING

from neatgraph.run.config                   import Config
from neatgraph.genotype.connection_gene     import ConnectionGene
from neatgraph.genotype.innovation_registry import InnovationRegistry
from neatgraph.genotype.mutator             import Mutator, DefaultMutator, MutationReport
from neatgraph.genotype.node_gene           import NodeType, NodeGene

if TYPE_CHECKING:
    from neatgraph.phenotype.network import Network

class Genome:
    """
    A NEAT genome representing a neural network as a collection of node and connection genes.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. It consists of:
    - Node genes: describe network nodes (input, output, hidden, bias)
    - Connection genes: describe weighted connections between nodes, each carrying
      an innovation number issued by the innovation registry shared by all genomes

    A minimal genome contains only input and output nodes with no connections. Via mutation
    operations (delegated to the genome's Mutator), genomes grow by adding nodes and
    connections. Nodes and connections are never removed; connections may be disabled.

    Both genes are kept in ordered lists, in the order they were added. The genome also
    remembers the structural keys of its connections, so that a mutation can tell in
    constant time whether a connection already exists.

    Node numbering convention:
        - Input nodes:  [0, num_inputs)
        - Output nodes: [num_inputs, num_inputs + num_outputs)
        - Hidden nodes: [num_inputs + num_outputs, ...)

    Public Attributes:
        node_genes: List of NodeGene objects, input & output nodes first
        conn_genes: List of ConnectionGene objects (this genome's local copies)
        conn_keys:  Set of the structural keys of all connections in the genome
        mutator:    The strategy used to mutate this genome
        phenotype:  The network compiled by the last 'generate_phenotype()' (or None)

    Public Properties:
        registry:     The innovation registry shared with the other genomes
        input_nodes:  List of all input node genes
        output_nodes: List of all output node genes
        hidden_nodes: List of all hidden node genes
        bias_nodes:   List of all bias node genes

    Public Methods:
        add_node(node):             Append a node gene
        add_innovation(conn):       Register a connection gene and append it
        generate_phenotype():       Compile the genome into an executable network
        mutate():                   Apply the mutator's mutation operations
        get_node(node_id):          Look up a node gene by ID
        would_create_cycle(a, b):   Whether the connection a => b would close a cycle
        to_dict():                  Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict, registry): Create a genome from a dictionary description
    """

    def __init__(self,
                 num_inputs : int,
                 num_outputs: int,
                 registry   : InnovationRegistry,
                 config     : Config  | None = None,
                 mutator    : Mutator | None = None):
        """
        Initialize a minimal Genome.

        A minimal genome is defined as a genome that describes the smallest possible network:
        a network consisting of only input and output nodes (whose number never changes) and
        having no connections.

        Parameters:
            num_inputs:  Number of input nodes
            num_outputs: Number of output nodes
            registry:    Innovation registry, shared by all genomes of the run
            config:      Stores configuration parameters (defaults used if None)
            mutator:     Mutation strategy (a DefaultMutator if None)

        Raises:
            ValueError: If the number of input or output nodes is not positive
        """
        if num_inputs <= 0:
            raise ValueError(f"A genome needs at least one input node, got {num_inputs}")
        if num_outputs <= 0:
            raise ValueError(f"A genome needs at least one output node, got {num_outputs}")

        self._config   = config if config is not None else Config()
        self._registry = registry
        self._num_inputs  = num_inputs
        self._num_outputs = num_outputs

        self.node_genes: list[NodeGene]       = []
        self.conn_genes: list[ConnectionGene] = []
        self.conn_keys : set[tuple[int, int]] = set()
        self._node_index: dict[int, NodeGene] = {}   # node ID => node gene

        self.mutator  : Mutator           = mutator if mutator is not None else DefaultMutator(self._config)
        self.phenotype: 'Network | None' = None

        # Initialize input nodes
        # By convention, input nodes are numbered: [0, NUMBER INPUT NODES - 1)
        for i in range(num_inputs):
            self.add_node(NodeGene(i, NodeType.INPUT, self._config))

        # Initialize output nodes
        # By convention, output nodes are numbered: [NUMBER INPUT NODES, NUMBER INPUT NODES + NUMBER OUTPUT NODES - 1)
        for i in range(num_outputs):
            self.add_node(NodeGene(num_inputs + i, NodeType.OUTPUT, self._config))

    @classmethod
    def from_dict(cls,
                  genome_dict: dict,
                  registry   : InnovationRegistry,
                  config     : Config | None = None) -> 'Genome':
        """
        Create a Genome from a dictionary description.

        Dictionary format:
            {
                "nodes": [
                    {"id": 0, "type": "input"},
                    {"id": 1, "type": "input"},
                    {"id": 2, "type": "output", "bias": 0.0, "activation": "sigmoid"},
                    {"id": 3, "type": "hidden", "bias": 0.5, "activation": "relu"},
                    {"id": 4, "type": "bias"}
                ],
                "connections": [
                    {"from": 0, "to": 3, "weight":  0.5, "enabled": true},
                    {"from": 1, "to": 3, "weight": -0.3, "enabled": true},
                    {"from": 3, "to": 2, "weight":  1.5, "enabled": true}
                ]
            }

        Every connection is registered with 'registry', so the innovation numbers
        are those of the registry (any "innovation" field is ignored).

        Parameters:
            genome_dict: Dictionary describing the genome structure
            registry:    Innovation registry, shared by all genomes of the run
            config:      Stores configuration parameters (defaults used if None)

        Returns:
            A new Genome object with the specified structure

        Raises:
            ValueError: If the structure is invalid (node numbering, unknown nodes, etc.)
            KeyError:   If required fields are missing from the dictionary
        """
        nodes_data   = genome_dict["nodes"]
        input_ids    = sorted(n["id"] for n in nodes_data if n["type"] == "input")
        output_ids   = sorted(n["id"] for n in nodes_data if n["type"] == "output")
        num_inputs   = len(input_ids)
        num_outputs  = len(output_ids)

        # Validate node numbering convention
        if input_ids != list(range(num_inputs)):
            raise ValueError(f"Input nodes must be numbered {list(range(num_inputs))}, got {input_ids}")
        if output_ids != list(range(num_inputs, num_inputs + num_outputs)):
            raise ValueError(f"Output nodes must be numbered "
                             f"{list(range(num_inputs, num_inputs + num_outputs))}, got {output_ids}")

        all_ids = [n["id"] for n in nodes_data]
        if len(all_ids) != len(set(all_ids)):
            raise ValueError("Duplicate node IDs found in node list")

        genome = cls(num_inputs, num_outputs, registry, config)

        # Output nodes were created with default parameters, replace them
        outputs_data = {n["id"]: n for n in nodes_data if n["type"] == "output"}
        for position, node in enumerate(genome.node_genes):
            if node.type == NodeType.OUTPUT:
                node_data = outputs_data[node.id]
                new_node  = NodeGene(node.id,
                                     NodeType.OUTPUT,
                                     genome._config,
                                     node_data.get("bias", 0.0),
                                     node_data.get("activation"))
                genome.node_genes[position] = new_node
                genome._node_index[node.id] = new_node

        # Add hidden and bias nodes, in the order they appear
        for node_data in nodes_data:
            if node_data["type"] == "hidden":
                genome.add_node(NodeGene(node_data["id"],
                                         NodeType.HIDDEN,
                                         genome._config,
                                         node_data.get("bias", 0.0),
                                         node_data.get("activation")))
            elif node_data["type"] == "bias":
                genome.add_node(NodeGene(node_data["id"], NodeType.BIAS))
            elif node_data["type"] not in ("input", "output"):
                raise ValueError(f"Unknown node type '{node_data['type']}' for node {node_data['id']}")

        for conn_data in genome_dict.get("connections", []):
            node_in  = conn_data["from"]
            node_out = conn_data["to"]

            # Validate that nodes exist
            if node_in not in genome._node_index:
                raise ValueError(f"Connection references non-existent source node: {node_in}")
            if node_out not in genome._node_index:
                raise ValueError(f"Connection references non-existent destination node: {node_out}")

            # Validate the types of the connection ends
            if genome._node_index[node_in].type == NodeType.OUTPUT:
                raise ValueError(f"Connection cannot start at output node {node_in}")
            if genome._node_index[node_out].type in (NodeType.INPUT, NodeType.BIAS):
                raise ValueError(f"Connection cannot end at {genome._node_index[node_out].type.name.lower()} node {node_out}")

            # Validate that connection wouldn't create a cycle (unless the network may be recurrent)
            if not genome._config.allow_recurrent and genome.would_create_cycle(node_in, node_out):
                raise ValueError(f"Connection from {node_in} to {node_out} would create a cycle")

            genome.add_innovation(ConnectionGene(node_in,
                                                 node_out,
                                                 conn_data["weight"],
                                                 conn_data.get("enabled", True)))
        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(). Nodes and connections are
        listed in the order they were added to the genome; connections also
        report their innovation number.

        Returns:
            Dictionary with the format described in 'from_dict()'
        """
        nodes = []
        for node in self.node_genes:
            node_dict = {"id": node.id, "type": node.type.name.lower()}
            if node.type in (NodeType.HIDDEN, NodeType.OUTPUT):
                node_dict["bias"]       = node.bias
                node_dict["activation"] = node.activation_name
            nodes.append(node_dict)

        connections = []
        for conn in self.conn_genes:
            connections.append({
                "from"      : conn.node_in,
                "to"        : conn.node_out,
                "weight"    : conn.weight,
                "enabled"   : conn.enabled,
                "innovation": conn.innovation
            })

        return {
            "nodes"      : nodes,
            "connections": connections
        }

    @property
    def registry(self) -> InnovationRegistry:
        return self._registry

    @property
    def config(self) -> Config:
        return self._config

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def num_outputs(self) -> int:
        return self._num_outputs

    @property
    def input_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.INPUT]

    @property
    def output_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.OUTPUT]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.HIDDEN]

    @property
    def bias_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.BIAS]

    def add_node(self, node: NodeGene) -> None:
        """
        Append a node gene to the genome.
        No check is made for ID collisions, callers must ensure the ID is unique.
        Hidden and bias node IDs are reserved in the registry, so no other
        genome can later use them for a different node.

        Parameters:
            node: the node gene to append
        """
        self.node_genes.append(node)
        self._node_index[node.id] = node
        if node.type in (NodeType.HIDDEN, NodeType.BIAS):
            self._registry.reserve_node_id(node.id)

    def add_innovation(self, conn: ConnectionGene) -> int:
        """
        Register a connection gene with the innovation registry and append it to the genome.
        The registry sets 'conn.innovation' to the innovation number of its structure.
        Safe to call concurrently from genomes sharing the registry.

        Parameters:
            conn: the connection gene to add

        Returns:
            the innovation number assigned to the connection
        """
        innovation = self._registry.add_innovation(conn)
        self.conn_genes.append(conn)
        self.conn_keys.add(conn.structural_key)
        return innovation

    def get_node(self, node_id: int) -> NodeGene:
        """
        Look up a node gene by ID.

        Raises:
            KeyError: If the node ID does not exist in the genome
        """
        if node_id not in self._node_index:
            raise KeyError(f"Node with ID {node_id} does not exist in the genome")
        return self._node_index[node_id]

    def has_node(self, node_id: int) -> bool:
        return node_id in self._node_index

    def next_node_id(self) -> int:
        """One past the largest node ID in the genome."""
        return max(self._node_index) + 1

    def generate_phenotype(self) -> 'Network':
        """
        Compile the genome into an executable network.

        The first call creates the network, later calls rebuild its wiring from
        the current connection genes (the previous wiring is discarded). Only
        enabled connections are wired. Mutations do not update the network: call
        this method again after mutating the genome.

        Returns:
            the compiled network (also stored in 'self.phenotype')
        """
        from neatgraph.phenotype.network import Network

        if self.phenotype is None:
            self.phenotype = Network(self)
        else:
            self.phenotype.rebuild()
        return self.phenotype

    def mutate(self) -> MutationReport:
        """
        Apply the mutator's mutation operations to this genome.

        Returns:
            the outcome of the structural mutations attempted
        """
        return self.mutator.mutate(self)

    def would_create_cycle(self, from_node: int, to_node: int) -> bool:
        """
        Check if adding a connection from_node -> to_node would create a cycle.
        Uses DFS to check if there's already a path from 'to_node' back to 'from_node'.
        Considers ALL connections (both enabled and disabled), since disabled
        connections may be enabled again later.

        Parameters:
            from_node: proposed start of the new connection
            to_node:   proposed end   of the new connection

        Returns:
            whether adding the new connection would create a cycle in the network
        """
        # A self loop is a cycle.
        if from_node == to_node:
            return True

        adjacency: dict[int, list[int]] = {}
        for conn_gene in self.conn_genes:
            adjacency.setdefault(conn_gene.node_in, []).append(conn_gene.node_out)

        # If we can reach 'from_node' starting at 'to_node', then adding a
        # connection 'from_node' -> 'to_node' would create a network cycle
        visited = set()
        stack = [to_node]

        while stack:

            current = stack.pop()
            if current == from_node:
                return True   # found path 'to_node' -> 'from_node', would create cycle
            if current in visited:
                continue
            visited.add(current)
            stack.extend(adjacency.get(current, []))

        return False

    def __str__(self):
        node_genes_str = ''.join(str(node) for node in self.node_genes)
        conn_genes_str = ''.join(str(conn) for conn in self.conn_genes)
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}"
