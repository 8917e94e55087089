"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a battle or its creatures cannot be created."""


class InvalidStateError(Exception):
    """Raised when a command does not fit the current battle state."""
