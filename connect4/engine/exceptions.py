class InvalidBoardError(ValueError):
    """Raised when a board snapshot could not have come from a legal game."""


class NoLegalMoveError(ValueError):
    """Raised when a move is requested on a board with no open column."""
