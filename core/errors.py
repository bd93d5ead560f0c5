"""
Dough Errors
Discriminated error kinds raised while formulating and scheduling a dough
"""


class DoughError(Exception):
    """Base class of every error raised by the dough engine"""


class DoughValidationError(DoughError, ValueError):
    """A value is missing, out of range or inconsistent with the others"""


class InfeasibleTemperatureError(DoughError):
    """
    The water temperature needed to reach the desired dough temperature
    is not physically attainable
    """

    def __init__(self, message: str, temperature: float):
        super().__init__(message)
        self.temperature = temperature


class YeastDoseError(DoughError):
    """No yeast quantity within the practical range satisfies the procedure"""


class LeaveningDurationExceededError(YeastDoseError):
    """The total leavening duration exceeds what the yeast can sustain"""

    def __init__(self, message: str, requested, maximum):
        super().__init__(message)
        self.requested = requested
        self.maximum = maximum


class StretchAndFoldError(DoughError):
    """The stretch and fold instants do not fit inside their leavening stage"""
