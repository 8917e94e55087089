"""Battle rule violations raised by the domain layer."""


class BattleError(Exception):
    """Base exception for battle contract violations."""


class NotFoundError(BattleError, KeyError):
    """Raised when a creature, card, job or square lookup misses."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep the plain text.
        return str(self.args[0]) if self.args else ""


class SquareOccupiedError(BattleError):
    """Raised when placing onto a square that already has an occupant."""


class CardNotInHandError(BattleError):
    """Raised when the creature's card is not on the player's hand."""


class InsufficientSpaceError(BattleError):
    """Raised when a spawn needs more empty squares than the board has."""


class HandOverflowError(BattleError):
    """Raised when the player's hand already exceeds its maximum size."""


class UnsupportedSkillCategoryError(BattleError):
    """Raised when a skill of an unimplemented category is invoked."""
