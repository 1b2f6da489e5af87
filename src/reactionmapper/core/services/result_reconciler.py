"""Projects raw matcher solutions back onto a reaction's canonical containers."""

import logging
from typing import Dict, Iterable, Tuple

from ..domain.models.atom import Atom
from ..domain.models.combination import Combination, JobTable
from ..domain.models.mcs_solution import MCSSolution
from ..domain.models.reaction import ReactionContainer

logger = logging.getLogger(__name__)


def _relocate(
    solution: MCSSolution, container: ReactionContainer
) -> MCSSolution:
    educt = container.get_educt(solution.query_position)
    product = container.get_product(solution.target_position)
    mapping: Dict[Atom, Atom] = {}
    for query_atom, target_atom in solution.mapping.items():
        educt_atom = educt.get_atom_by_id(query_atom.atom_id)
        product_atom = product.get_atom_by_id(target_atom.atom_id)
        if educt_atom is None or product_atom is None:
            logger.warning(
                "Reconciliation gap in job %s: %s -> %s has no canonical atom",
                solution.combination,
                query_atom.atom_id,
                target_atom.atom_id,
            )
            continue
        mapping[educt_atom] = product_atom
    return MCSSolution(
        query_position=solution.query_position,
        target_position=solution.target_position,
        query_container=educt,
        target_container=product,
        mapping=mapping,
    )


def reconcile(
    solutions: Iterable[MCSSolution],
    table: JobTable,
    container: ReactionContainer,
) -> Tuple[MCSSolution, ...]:
    """
    Re-locate every raw solution on the canonical containers.

    Each job group is reconciled once: the representative's mapping is
    reported for the representative and again for every equivalent job.
    Solutions without a table entry are ignored.

    Args:
        solutions: Raw solutions in completion order
        table: Job groups the solutions were computed for
        container: Per-strategy view of the reaction

    Returns:
        Reconciled solutions
    """
    pending: Dict[Combination, set] = {key: set(members) for key, members in table.items()}
    reconciled = []
    for solution in solutions:
        key = solution.combination
        if key not in pending:
            logger.debug("No pending job group for solution %s", key)
            continue
        members = pending.pop(key)
        relocated = _relocate(solution, container)
        reconciled.append(relocated)
        for member in sorted(members):
            reconciled.append(relocated.relocated(member.row_index, member.col_index))
    return tuple(reconciled)
