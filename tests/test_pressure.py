"""Tests for PressureMaximizer: time-budgeted valve search."""

import pytest

from valveflow.core.builder import GraphBuilder
from valveflow.core.parser import parse_lines
from valveflow.solver.distance_matrix import DistanceMatrixBuilder
from valveflow.solver.pressure import PressureMaximizer
from valveflow.solver.reducer import GraphReducer


def _sample_matrix(lines):
    graph = GraphBuilder().build(parse_lines(lines))
    retained = GraphReducer("AA").reduce(graph).ids()
    return DistanceMatrixBuilder().build(graph, retained)


def test_sample_answer(sample_lines):
    result = PressureMaximizer(_sample_matrix(sample_lines)).maximize("AA", 30)
    assert result.pressure == 1651


def test_path_accounts_for_pressure(sample_lines):
    matrix = _sample_matrix(sample_lines)
    result = PressureMaximizer(matrix).maximize("AA", 30)

    assert result.path[0] == ("AA", 30)
    assert len(set(result.opened)) == len(result.opened)
    total = sum(matrix.flow_rate(vid) * remaining for vid, remaining in result.path)
    assert total == result.pressure


def test_memoized_search_agrees(sample_lines):
    matrix = _sample_matrix(sample_lines)
    plain = PressureMaximizer(matrix).maximize("AA", 30)
    cached = PressureMaximizer(matrix, memoize=True).maximize("AA", 30)

    assert cached.pressure == plain.pressure


def test_monotonic_in_time_budget(sample_lines):
    maximizer = PressureMaximizer(_sample_matrix(sample_lines), memoize=True)
    results = [maximizer.maximize("AA", t).pressure for t in range(1, 31)]
    assert results == sorted(results)
    assert results[0] == 0


def test_all_zero_flow_yields_nothing():
    graph = GraphBuilder().build([
        ("AA", 0, ["BB", "CC"]),
        ("BB", 0, ["AA"]),
        ("CC", 0, ["AA", "DD"]),
        ("DD", 0, ["CC"]),
    ])
    matrix = DistanceMatrixBuilder().build(graph)
    for budget in (1, 5, 30, 100):
        assert PressureMaximizer(matrix).maximize("AA", budget).pressure == 0


def test_start_with_flow_is_credited_full_budget():
    graph = GraphBuilder().build([("AA", 5, ["BB"]), ("BB", 0, ["AA"])])
    matrix = DistanceMatrixBuilder().build(graph)
    assert PressureMaximizer(matrix).maximize("AA", 10).pressure == 50


def test_unreachable_in_time_is_skipped():
    """BB is 1 away: needs 2 time units, so a budget of 2 is not enough."""
    graph = GraphBuilder().build([("AA", 0, ["BB"]), ("BB", 7, ["AA"])])
    matrix = DistanceMatrixBuilder().build(graph)
    maximizer = PressureMaximizer(matrix)

    assert maximizer.maximize("AA", 2).pressure == 0
    assert maximizer.maximize("AA", 3).pressure == 7


def test_matrix_not_mutated(sample_lines):
    matrix = _sample_matrix(sample_lines)
    before = matrix.copy()
    PressureMaximizer(matrix).maximize("AA", 30)
    assert before == matrix


@pytest.mark.parametrize("budget", [0, -4])
def test_non_positive_budget_rejected(budget, sample_lines):
    with pytest.raises(ValueError):
        PressureMaximizer(_sample_matrix(sample_lines)).maximize("AA", budget)


def test_unknown_start_rejected(sample_lines):
    with pytest.raises(ValueError):
        PressureMaximizer(_sample_matrix(sample_lines)).maximize("ZZ", 30)
