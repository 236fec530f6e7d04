"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    AWAITING_INITIAL_BOARD = "awaiting initial board"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- NOTE the domain layer works with color *indices* (0 = white, 1 = black). These names are what crosses the API boundary.
class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
