# app/collection/state_machine.py

from app.collection.model import FAILED, PENDING, SUCCESSFUL


class InvalidTransition(Exception):
    pass


ALLOWED = {
    PENDING: {SUCCESSFUL, FAILED},
    SUCCESSFUL: set(),
    FAILED: set(),
}


def assert_transition(old: str, new: str) -> None:
    if new not in ALLOWED.get(old, set()):
        raise InvalidTransition(f"Illegal transaction transition: {old} -> {new}")


def is_terminal(status: str) -> bool:
    return status in ALLOWED and not ALLOWED[status]
