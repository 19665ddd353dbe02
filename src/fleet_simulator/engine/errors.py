"""Engine error taxonomy.

Every failure is local and synchronous: raised where it is detected, never
retried, never accompanied by a partial result.
"""


class SimulationError(ValueError):
    """Base class for all engine failures."""


class InvalidParameter(SimulationError):
    """A parameter is outside its valid range (horizon, month length, unit
    value, initial fleet, or a negative monetary rate).

    Only reachable when ``SimulationParameters`` validation was bypassed,
    e.g. via ``model_construct``.
    """


class EmptyInput(SimulationError):
    """An aggregation step received an empty daily series."""


class DegenerateInput(SimulationError):
    """The initial cost basis is zero, so returns are undefined."""
