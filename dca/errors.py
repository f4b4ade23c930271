"""Errors raised by the simulation engine."""


class SimulationError(ValueError):
    """Base class for a rejected simulation run."""


class InvalidInputError(SimulationError):
    """Amounts, dates, frequency, or series length are unusable."""


class PriceIntegrityError(SimulationError):
    """A price series breaks ordering or positivity rules."""
    def __init__(self, message, point_date=None):
        super().__init__(message)
        self.point_date = point_date
