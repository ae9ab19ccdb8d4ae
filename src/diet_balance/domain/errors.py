"""Domain exceptions."""


class DietBalanceError(Exception):
    """Base exception for diet balance domain errors."""


class InvalidInputError(DietBalanceError, ValueError):
    """Raised for values that can never be valid, such as negative portions."""
