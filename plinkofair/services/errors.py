class PlinkoError(Exception):
    """Base class for every error raised by plinkofair."""


class InvalidInput(PlinkoError, ValueError):
    """The caller supplied a value outside the documented contract."""


class DrawBudgetExceeded(PlinkoError, RuntimeError):
    """A round asked its random source for more draws than the round allows."""


class RoundNotFound(PlinkoError, LookupError):
    pass


class RoundStateError(PlinkoError):
    """A lifecycle transition was requested from the wrong status."""
