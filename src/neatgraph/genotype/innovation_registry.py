"""
NEAT Innovation Registry Module

This module implements the InnovationRegistry class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationRegistry: Shared registry of innovation numbers and split node IDs
"""

import copy
import logging
import threading
from itertools import count
from typing    import TYPE_CHECKING

if TYPE_CHECKING:
    from neatgraph.genotype.connection_gene import ConnectionGene

logger = logging.getLogger(__name__)

class InnovationRegistry:
    """
    Tracks structural changes across all genomes of an evolutionary run.
    Ensures the same structural change gets the same innovation number
    (for connections) and ID (for nodes created by splitting a connection),
    no matter which genome discovers it first.

    A single registry is created by the caller and handed to every genome of
    the run. Genomes may be mutated concurrently from several threads: every
    read-modify-write of the registry state happens while holding an internal
    lock, so two genomes proposing the same connection at the same time always
    receive the same innovation number.

    The registry keeps its own (canonical) copy of the first connection gene
    registered for each structure; genomes keep their local copies, whose
    weight and 'enabled' status evolve independently.

    Public Properties:
        innovation_ids: Snapshot of the structural key => innovation number mapping
        innovations:    Snapshot of the structural key => canonical connection mapping

    Public Methods:
        add_innovation(conn):             Assign the canonical innovation number to a connection
        get_id(key):                      Innovation number for a structural key (or None)
        split_node_id(innovation, floor): Node ID for the hidden node splitting a connection
        fresh_node_id(floor):             A never-used node ID
        reserve_node_id(node_id):         Mark a node ID as taken
        count():                          Number of distinct innovations
        clear():                          Reset the registry
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        """Reset all state. Caller must hold the lock (or be the constructor)."""

        # For each connection ever registered, map its structural key
        # to its innovation number and to its canonical gene.
        self._innovation_ids: dict[tuple[int, int], int]              = {}
        self._innovations   : dict[tuple[int, int], 'ConnectionGene'] = {}

        # When a connection is split, tracks the ID of the node created.
        self._split_node_ids: dict[int, int] = {}   # split innovation number -> new node ID

        self._next_innovation_number = count(0)
        self._next_node_id           = 0

    def add_innovation(self, conn: 'ConnectionGene') -> int:
        """
        Get the innovation number for a connection, identified by its structural key.
        Returns the existing innovation number if this structure was registered
        before, otherwise assigns a new innovation number and records 'conn' as
        the canonical connection for this structure.
        Either way, the innovation number is written into 'conn.innovation'; any
        number proposed by the caller is ignored, as are the weight and the
        'enabled' status.

        Parameters:
            conn: the connection to register

        Returns:
            connection ID (a.k.a. innovation number)
        """
        key = conn.structural_key
        with self._lock:

            # This is a new connection
            if key not in self._innovation_ids:
                innovation = next(self._next_innovation_number)
                self._innovation_ids[key] = innovation
                canonical = copy.copy(conn)
                canonical.innovation = innovation
                self._innovations[key] = canonical
                logger.debug("New innovation %d for connection %d => %d", innovation, key[0], key[1])

            innovation = self._innovation_ids[key]

        conn.innovation = innovation
        return innovation

    def get_id(self, key: tuple[int, int]) -> int | None:
        """
        Get the innovation number assigned to a structural key.

        Parameters:
            key: structural key, see 'structural_key()'

        Returns:
            the innovation number, or None if the structure was never registered
        """
        with self._lock:
            return self._innovation_ids.get(key)

    def split_node_id(self, innovation: int, floor: int) -> int:
        """
        Get the ID of the hidden node created when splitting a connection.
        If this connection has been split before (by any genome) returns the
        same ID, otherwise allocates a new one. Splitting the same connection in
        different genomes therefore yields the same node, and so the same
        innovation numbers for the two replacement connections.

        Parameters:
            innovation: innovation number of the connection being split
            floor:      the new ID is not smaller than this (one past the
                        largest node ID of the genome requesting it)

        Returns:
            the node ID
        """
        with self._lock:
            if innovation not in self._split_node_ids:
                self._split_node_ids[innovation] = self._allocate_node_id(floor)
            return self._split_node_ids[innovation]

    def reserve_node_id(self, node_id: int) -> None:
        """
        Mark a node ID as taken, so that it is never handed out for a split.
        Needed for nodes whose ID was not issued by this registry (e.g. nodes
        of a genome loaded from a dictionary).

        Parameters:
            node_id: the ID in use
        """
        with self._lock:
            self._next_node_id = max(self._next_node_id, node_id + 1)

    def fresh_node_id(self, floor: int) -> int:
        """
        Get a node ID never handed out before, not smaller than 'floor'.
        Used when a genome already holds the node recorded for a split.

        Parameters:
            floor: lower bound for the new ID

        Returns:
            the node ID
        """
        with self._lock:
            return self._allocate_node_id(floor)

    def _allocate_node_id(self, floor: int) -> int:
        """Caller must hold the lock."""
        node_id = max(self._next_node_id, floor)
        self._next_node_id = node_id + 1
        return node_id

    @property
    def innovation_ids(self) -> dict[tuple[int, int], int]:
        with self._lock:
            return dict(self._innovation_ids)

    @property
    def innovations(self) -> dict[tuple[int, int], 'ConnectionGene']:
        with self._lock:
            return {key: copy.copy(conn) for key, conn in self._innovations.items()}

    def count(self) -> int:
        """Number of distinct canonical innovations recorded."""
        with self._lock:
            return len(self._innovations)

    def clear(self) -> None:
        """
        Remove all innovations and split records and reset the counters.
        Use it to isolate independent evolutionary runs; within a run the
        registry keeps accumulating.
        """
        with self._lock:
            self._reset()
        logger.debug("Innovation registry cleared")

    def __len__(self):
        return self.count()

    def __contains__(self, key: tuple[int, int]) -> bool:
        with self._lock:
            return key in self._innovation_ids

    def __repr__(self):
        return f"InnovationRegistry(innovations={self.count()})"
