"""
Errors raised by the MGRS, UTM and UPS conversions.
"""


class MgrsError(ValueError):
    """Base class for every conversion failure. The message is meant to be shown to a user."""


class MalformedStringError(MgrsError):
    pass


class InvalidZoneError(MgrsError):
    pass


class InvalidLetterError(MgrsError):
    pass


class InvalidUpsZoneError(MgrsError):
    pass


class InvalidBandError(MgrsError):
    pass


class OddDigitCountError(MgrsError):
    pass


class OutOfRangeError(MgrsError):
    pass
