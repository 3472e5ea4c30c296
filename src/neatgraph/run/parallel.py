"""
NEAT Parallel Mutation Module

This module mutates many genomes at once, using joblib to spread the work over
several threads. All genomes keep sharing the same innovation registry.
"""

import logging
from joblib import Parallel, delayed
from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from neatgraph.genotype import Genome, MutationReport

logger = logging.getLogger(__name__)

def mutate_genomes(genomes: Iterable['Genome'], num_jobs: int = 1) -> list['MutationReport']:
    """
    Mutate each genome in place with its own mutator.

    Threads (rather than processes) are used: the innovation registry is
    shared in memory by all genomes, and it is safe to call concurrently.
    Every genome must appear at most once, since a genome's own state is
    not guarded against concurrent mutation.

    Parameters:
        genomes:  the genomes to mutate
        num_jobs: Number of threads
                   1 = serial (default)
                  -1 = use all available CPU cores
                  >1 = use specified number of threads

    Returns:
        the mutation reports, in the same order as the genomes
    """
    genomes = list(genomes)
    if len({id(genome) for genome in genomes}) != len(genomes):
        raise ValueError("The same genome cannot be mutated twice concurrently")

    if num_jobs == 1:
        reports = [genome.mutate() for genome in genomes]
    else:
        reports = Parallel(n_jobs=num_jobs, prefer="threads")(
            delayed(genome.mutate)() for genome in genomes
        )

    logger.debug("Mutated %d genomes using %d job(s)", len(genomes), num_jobs)
    return reports
