from __future__ import annotations


class ContractViolation(AssertionError):
    """Raised when a caller breaks a precondition of the game core.

    These are programming errors (a non-normalized brick, a brick index outside the
    batch, placing where ``can_place`` is false). They are never meant to be caught
    and recovered from; user input is validated before it reaches the core.
    """


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ContractViolation(message)
