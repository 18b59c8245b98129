import math

import numpy as np
import pytest

from numint import MidpointRule, Quadrature, TrapezoidRule


def direct_midpoint(f, a, b, level):
    n = 3 ** (level - 1)
    h = (b - a) / n
    return h * sum(f(a + (i + 0.5) * h) for i in range(n))


def direct_trapezoid(f, a, b, level):
    n = 2 ** (level - 1)
    h = (b - a) / n
    inner = sum(f(a + i * h) for i in range(1, n))
    return h * (0.5 * f(a) + inner + 0.5 * f(b))


def test_first_level_midpoint():
    rule = MidpointRule(math.exp, 1.0, 3.0)
    assert rule.next() == pytest.approx(2.0 * math.exp(2.0), rel=1e-15)


def test_first_level_trapezoid():
    rule = TrapezoidRule(math.exp, 1.0, 3.0)
    expected = 0.5 * 2.0 * (math.exp(1.0) + math.exp(3.0))
    assert rule.next() == pytest.approx(expected, rel=1e-15)


@pytest.mark.parametrize("rule_cls, direct", [
    (MidpointRule, direct_midpoint),
    (TrapezoidRule, direct_trapezoid),
])
def test_recursive_update_matches_direct_formula(rule_cls, direct):
    f = lambda x: math.sin(x) + x ** 2
    rule = rule_cls(f, 0.0, 2.0)
    for level in range(1, 7):
        s = rule.next()
        assert np.isclose(s, direct(f, 0.0, 2.0, level), rtol=1e-12)


@pytest.mark.parametrize("rule_cls", [MidpointRule, TrapezoidRule])
def test_refinement_count(rule_cls):
    rule = rule_cls(math.cos, 0.0, 1.0)
    assert rule.n == 0
    for k in range(1, 6):
        rule.next()
        assert rule.n == k


@pytest.mark.parametrize("rule_cls", [MidpointRule, TrapezoidRule])
def test_refinement_count_is_read_only(rule_cls):
    rule = rule_cls(math.cos, 0.0, 1.0)
    rule.next()
    with pytest.raises(AttributeError):
        rule.n = 0
    assert rule.n == 1


@pytest.mark.parametrize("rule_cls", [MidpointRule, TrapezoidRule])
def test_next_is_not_idempotent(rule_cls):
    rule = rule_cls(math.exp, 0.0, 1.0)
    assert rule.next() != rule.next()


@pytest.mark.parametrize("rule_cls", [MidpointRule, TrapezoidRule])
def test_independent_rules_are_deterministic(rule_cls):
    first = rule_cls(math.exp, 0.0, 1.0)
    second = rule_cls(math.exp, 0.0, 1.0)
    for _ in range(8):
        assert first.next() == second.next()


def test_midpoint_never_samples_endpoints(counting):
    f = counting(math.exp)
    rule = MidpointRule(f, 0.0, 1.0)
    for _ in range(6):
        rule.next()
    assert all(0.0 < x < 1.0 for x in f.calls)


def test_midpoint_reuses_previous_evaluations(counting):
    f = counting(math.exp)
    rule = MidpointRule(f, 0.0, 1.0)
    for _ in range(6):
        rule.next()
    assert len(f.calls) == 3 ** 5
    assert len(set(f.calls)) == len(f.calls)


def test_trapezoid_evaluation_count(counting):
    f = counting(math.exp)
    rule = TrapezoidRule(f, 0.0, 1.0)
    for _ in range(6):
        rule.next()
    assert len(f.calls) == 2 ** 5 + 1
    assert f.calls[0] == 0.0 and f.calls[1] == 1.0


@pytest.mark.parametrize("rule_cls", [MidpointRule, TrapezoidRule])
def test_error_decreases_past_third_level(rule_cls):
    exact = math.e - 1.0
    rule = rule_cls(math.exp, 0.0, 1.0)
    errors = [abs(rule.next() - exact) for _ in range(8)]
    tail = errors[2:]
    assert all(later < earlier for earlier, later in zip(tail, tail[1:]))


def test_nan_propagates_without_raising():
    rule = TrapezoidRule(lambda x: float("nan"), 0.0, 1.0)
    for _ in range(3):
        assert np.isnan(rule.next())


def test_base_class_has_no_formula():
    with pytest.raises(NotImplementedError):
        Quadrature(math.exp, 0.0, 1.0).next()
