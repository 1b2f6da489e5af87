"""Builds and deduplicates the (reactant, product) matching jobs of a reaction."""

import logging
from typing import Optional, Sequence

from ..domain.models.combination import Combination, JobTable
from ..domain.models.reaction import ReactionContainer

logger = logging.getLogger(__name__)

# Similarity value that forces a pair into the job list.
FORCED_PAIR = -1


def _is_candidate(
    container: ReactionContainer,
    i: int,
    j: int,
    similarity_matrix: Optional[Sequence[Sequence[float]]],
) -> bool:
    educt = container.get_educt(i)
    product = container.get_product(j)
    forced = (
        similarity_matrix is not None and similarity_matrix[i][j] == FORCED_PAIR
    )
    non_empty = educt.atom_count > 0 and product.atom_count > 0
    modified = container.is_educt_modified(i) or container.is_product_modified(j)
    return (non_empty or forced) and modified


def _is_equivalent(
    container: ReactionContainer, candidate: Combination, key: Combination
) -> bool:
    educt = container.get_educt(candidate.row_index)
    product = container.get_product(candidate.col_index)
    key_educt = container.get_educt(key.row_index)
    key_product = container.get_product(key.col_index)
    return (
        educt is key_educt
        and product is key_product
        and educt.atom_count == key_educt.atom_count
        and product.atom_count == key_product.atom_count
    )


def build_jobs(
    container: ReactionContainer,
    similarity_matrix: Optional[Sequence[Sequence[float]]] = None,
) -> JobTable:
    """
    Enumerate candidate jobs and fold equivalent ones into groups.

    Args:
        container: Per-strategy view of the reaction
        similarity_matrix: Optional reactant x product matrix; ``-1`` forces
            a pair to be considered even when a side is empty

    Returns:
        Representative job -> set of equivalent jobs, keys in row-major order
    """
    table: JobTable = {}
    educts = container.get_educt_count()
    products = container.get_product_count()
    if educts == 0 or products == 0:
        return table

    for i in range(educts):
        for j in range(products):
            if not _is_candidate(container, i, j, similarity_matrix):
                continue
            candidate = Combination(i, j)
            for key in table:
                if _is_equivalent(container, candidate, key):
                    table[key].add(candidate)
                    break
            else:
                table[candidate] = set()

    logger.debug(
        "Built %d job groups covering %d jobs",
        len(table),
        len(table) + sum(len(members) for members in table.values()),
    )
    return table
