import threading
import time
from types import MappingProxyType

import numpy as np
import pytest

from reactionmapper.config import MappingConfig
from reactionmapper.core.domain.exceptions import StandardizationError
from reactionmapper.core.domain.implementations.default_standardizer import (
    DefaultStandardizer,
)
from reactionmapper.core.domain.models.combination import Combination
from reactionmapper.core.domain.models.mapping_algorithm import MappingAlgorithm
from reactionmapper.core.domain.models.molecular_graph import MolecularGraph
from reactionmapper.core.domain.models.reaction import Reaction
from reactionmapper.core.services import match_dispatcher
from reactionmapper.core.services.be_matrix_builder import build_be_matrix
from reactionmapper.core.services.strategy_orchestrator import StrategyOrchestrator

from conftest import ElementMatcher, acetaldehyde, ethanol


class FlakyStandardizer(DefaultStandardizer):
    """Fails on the second call."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def standardize(self, reaction):
        self.calls += 1
        if self.calls == 2:
            raise StandardizationError("bad input")
        return super().standardize(reaction)


def test_all_strategies_report(element_matcher, simple_reaction):
    orchestrator = StrategyOrchestrator(DefaultStandardizer(), element_matcher)
    solutions = orchestrator.run(simple_reaction)

    assert set(solutions) == set(MappingAlgorithm)
    assert isinstance(solutions, MappingProxyType)
    for strategy, result in solutions.items():
        assert result.strategy is strategy
        assert result.mapped_atoms == 3
    with pytest.raises(TypeError):
        solutions[MappingAlgorithm.MINIMAL] = None


def test_each_strategy_owns_its_reaction(element_matcher, simple_reaction):
    solutions = StrategyOrchestrator(DefaultStandardizer(), element_matcher).run(
        simple_reaction
    )
    reactions = [result.reaction for result in solutions.values()]

    assert len({id(r) for r in reactions}) == len(reactions)
    assert all(r is not simple_reaction for r in reactions)
    for result in solutions.values():
        for atom in result.mapping:
            assert result.reaction.reactants[0].contains(atom)
            assert not simple_reaction.reactants[0].contains(atom)


def test_failed_standardization_skips_one_strategy(element_matcher, simple_reaction, caplog):
    solutions = StrategyOrchestrator(FlakyStandardizer(), element_matcher).run(
        simple_reaction
    )
    assert len(solutions) == 3
    assert "Standardization" in caplog.text


def test_failing_strategy_leaves_others_intact(
    element_matcher, simple_reaction, monkeypatch
):
    orchestrator = StrategyOrchestrator(DefaultStandardizer(), element_matcher)
    original = orchestrator.service.map_reaction

    def map_reaction(strategy, reaction, similarity_matrix=None):
        if strategy is MappingAlgorithm.MIXTURE:
            raise RuntimeError("boom")
        return original(strategy, reaction, similarity_matrix)

    monkeypatch.setattr(orchestrator.service, "map_reaction", map_reaction)
    solutions = orchestrator.run(simple_reaction)

    assert set(solutions) == set(MappingAlgorithm) - {MappingAlgorithm.MIXTURE}
    assert set(orchestrator.get_timings()) <= set(MappingAlgorithm)


def test_configured_strategy_subset(element_matcher, simple_reaction):
    config = MappingConfig(strategies=(MappingAlgorithm.MINIMAL,), max_workers=1)
    orchestrator = StrategyOrchestrator(DefaultStandardizer(), element_matcher, config)
    solutions = orchestrator.run(simple_reaction)

    assert list(solutions) == [MappingAlgorithm.MINIMAL]
    assert list(orchestrator.get_timings()) == [MappingAlgorithm.MINIMAL]
    assert orchestrator.get_timings()[MappingAlgorithm.MINIMAL] >= 0.0


def test_three_atom_reaction_end_to_end(simple_reaction):
    matcher = ElementMatcher()
    config = MappingConfig(strategies=(MappingAlgorithm.EXHAUSTIVE,))
    result = StrategyOrchestrator(DefaultStandardizer(), matcher, config).run(
        simple_reaction
    )[MappingAlgorithm.EXHAUSTIVE]

    assert len(matcher.calls) == 1
    assert len(result.solutions) == 1
    assert result.solutions[0].combination == Combination(0, 0)
    assert result.solutions[0].size == 3

    matrix = build_be_matrix(result.reaction.reactants, result.mapping, True)
    assert matrix.matrix.shape == (4, 4)
    assert np.array_equal(matrix.matrix, matrix.matrix.T)


def test_empty_containers_create_no_pool(element_matcher, monkeypatch):
    def no_pool(*args, **kwargs):
        raise AssertionError("pool created")

    monkeypatch.setattr(match_dispatcher, "ThreadPoolExecutor", no_pool)
    reaction = Reaction([MolecularGraph([], [], "R0")], [MolecularGraph([], [], "P0")])
    solutions = StrategyOrchestrator(DefaultStandardizer(), element_matcher).run(reaction)

    assert set(solutions) == set(MappingAlgorithm)
    assert all(not result.solutions for result in solutions.values())
    assert element_matcher.calls == []


def test_shared_reactant_reported_for_both_indices(element_matcher):
    shared = ethanol()
    reaction = Reaction([shared, shared], [acetaldehyde()])
    config = MappingConfig(strategies=(MappingAlgorithm.EXHAUSTIVE,))
    result = StrategyOrchestrator(DefaultStandardizer(), element_matcher, config).run(
        reaction
    )[MappingAlgorithm.EXHAUSTIVE]

    assert len(element_matcher.calls) == 1
    assert sorted(s.combination for s in result.solutions) == [
        Combination(0, 0),
        Combination(1, 0),
    ]
    assert result.reaction.reactants[0] is result.reaction.reactants[1]


def test_strategy_results_in_completion_order(element_matcher, simple_reaction, monkeypatch):
    config = MappingConfig(
        strategies=(MappingAlgorithm.EXHAUSTIVE, MappingAlgorithm.MINIMAL)
    )
    orchestrator = StrategyOrchestrator(DefaultStandardizer(), element_matcher, config)
    original = orchestrator.service.map_reaction
    minimal_done = threading.Event()

    def map_reaction(strategy, reaction, similarity_matrix=None):
        if strategy is MappingAlgorithm.EXHAUSTIVE:
            minimal_done.wait(timeout=5)
            time.sleep(0.2)
        result = original(strategy, reaction, similarity_matrix)
        if strategy is MappingAlgorithm.MINIMAL:
            minimal_done.set()
        return result

    monkeypatch.setattr(orchestrator.service, "map_reaction", map_reaction)
    solutions = orchestrator.run(simple_reaction)

    assert list(solutions) == [MappingAlgorithm.MINIMAL, MappingAlgorithm.EXHAUSTIVE]
