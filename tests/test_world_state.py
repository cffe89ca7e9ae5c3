import numpy as np
import pytest

from goap.errors import WorldStateMismatchError
from goap.world_state import (
    DONT_CARE,
    check_compatible,
    heuristic,
    make_world_state,
    satisfies,
    states_equal,
)


def test_heuristic_sums_absolute_differences():
    assert heuristic(make_world_state([3, 1, 0]), make_world_state([1, 1, 4])) == 6.0


def test_heuristic_ignores_unconstrained_dimensions():
    current = make_world_state([0, 5])
    goal = make_world_state([2, DONT_CARE])
    assert heuristic(current, goal) == 2.0
    assert heuristic(current, make_world_state([DONT_CARE, DONT_CARE])) == 0.0


def test_heuristic_is_not_symmetric_in_its_goal_argument():
    a = make_world_state([0, DONT_CARE])
    b = make_world_state([1, 3])
    # Only the second argument's sentinel slots are ignored.
    assert heuristic(b, a) == 1.0
    assert heuristic(a, b) == 1.0 + 4.0


def test_satisfies_checks_only_constrained_slots():
    state = make_world_state([1, 1])
    assert satisfies(state, make_world_state([1, DONT_CARE]))
    assert not satisfies(state, make_world_state([0, DONT_CARE]))


def test_states_equal_is_exact_match():
    assert states_equal(make_world_state([1, 2]), make_world_state([1, 2]))
    assert not states_equal(make_world_state([1, 2]), make_world_state([2, 1]))
    assert not states_equal(make_world_state([1, 2]), make_world_state([1, 2, 0]))


def test_world_state_is_read_only():
    state = make_world_state([0, 1])
    assert state.dtype == np.int32
    with pytest.raises(ValueError):
        state[0] = 5


def test_world_state_must_be_one_dimensional():
    with pytest.raises(ValueError):
        make_world_state([[0, 1], [1, 0]])


def test_check_compatible_returns_common_length():
    assert check_compatible(make_world_state([0, 1]), make_world_state([1, DONT_CARE]), size=2) == 2


def test_check_compatible_rejects_length_mismatch():
    with pytest.raises(WorldStateMismatchError):
        check_compatible(make_world_state([0, 1]), make_world_state([1]))
    with pytest.raises(ValueError):
        check_compatible(make_world_state([0, 1]), make_world_state([1, 1]), size=3)
