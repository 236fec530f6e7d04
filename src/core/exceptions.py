"""
Exceptions raised by the domain layer, propagated unchanged through the Service layer.

Every failure is raised before any state is mutated, so catching one of these never leaves a half-applied move behind.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game."""


class InvalidRequestError(GameError):
    """Malformed request data (off-board coordinates, unknown piece codes, wrongly shaped grids)."""


class GameStateError(GameError):
    """A persisted snapshot could not be turned back into a consistent game."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested game."""


# --- REGISTRATION ---
class RegistrationError(GameError):
    pass


class AlreadyRegisteredError(RegistrationError):
    pass


class GameFullError(RegistrationError):
    pass


# --- BOARD INITIALIZATION ---
class InitError(GameError):
    pass


class NotAuthorizedError(InitError):
    pass


class AlreadyActiveError(InitError):
    pass


# --- MOVES (listed in the order the checks are performed) ---
class MoveError(GameError):
    pass


class GameNotActiveError(MoveError):
    pass


class UnknownPlayerError(MoveError):
    pass


class TurnViolationError(MoveError):
    pass


class DeadPieceError(MoveError):
    pass


class WrongColorPieceError(MoveError):
    pass


class ClaimMismatchError(MoveError):
    pass


class IllegalMoveError(MoveError):
    pass


# --- REVEALING RECORDED MOVES ---
class RevealError(GameError):
    pass


class UnknownMoveError(RevealError):
    pass


class AlreadyRevealedError(RevealError):
    pass


class RevealProofError(RevealError):
    pass
