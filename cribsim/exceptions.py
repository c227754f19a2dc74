class ContractViolation(AssertionError):
    """A caller or strategy broke an invariant of the engine (hand capacity,
    index range, the 31 limit, the number of pegging rounds). Never recovered."""


class InvalidInput(ValueError):
    """Input that is well-typed but cannot be scored or parsed."""
