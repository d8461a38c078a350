"""Storage layer for crossword puzzles"""

from .errors import CrosswordError, CrosswordNotFound, InternalError
from .models import Crossword, CrosswordMetadata, InsertableCrossword, GuardianCrossword

__all__ = [
    "CrosswordError",
    "CrosswordNotFound",
    "InternalError",
    "Crossword",
    "CrosswordMetadata",
    "InsertableCrossword",
    "GuardianCrossword",
]
