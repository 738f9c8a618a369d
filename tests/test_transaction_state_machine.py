
import pytest

from app.collection.state_machine import InvalidTransition, assert_transition, is_terminal


def test_valid_transitions():
    assert_transition("PENDING", "SUCCESSFUL")
    assert_transition("PENDING", "FAILED")


def test_pending_cannot_stay_pending():
    with pytest.raises(InvalidTransition):
        assert_transition("PENDING", "PENDING")


def test_terminal_states_cannot_transition():
    with pytest.raises(InvalidTransition):
        assert_transition("SUCCESSFUL", "FAILED")
    with pytest.raises(InvalidTransition):
        assert_transition("FAILED", "SUCCESSFUL")
    assert is_terminal("SUCCESSFUL")
    assert is_terminal("FAILED")
    assert not is_terminal("PENDING")
