"""fivethreeone exceptions."""


class FiveThreeOneError(Exception):
    """Base exception for fivethreeone errors."""
    pass


class InvalidArgumentError(FiveThreeOneError, ValueError):
    """Raised for a bad week number, rounding step, percentage or history id."""
    pass
