"""Errors raised by the crossword store"""


class CrosswordError(Exception):
    """Base exception for crossword store errors"""
    pass


class CrosswordNotFound(CrosswordError):
    """No crossword matched the requested series and id"""

    def __init__(self, crossword_id: str):
        self.crossword_id = crossword_id
        super().__init__(f"Crossword not found: {crossword_id}")


class InternalError(CrosswordError):
    """Storage or data integrity failure"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
