class MazeAnimatorError(Exception):
    """Base class for engine errors."""

class SearchStateError(MazeAnimatorError):
    """A search was stepped or queried outside the state that allows it."""

class GroupBookkeepingError(MazeAnimatorError):
    """A disjoint-set id is unknown or a room cell has no group."""

class GeneratorStateError(MazeAnimatorError):
    """A generator was stepped before initialize()."""
