"""Error kinds raised by maze generation."""


class MazeError(Exception):
    """Base class for all maze generation errors."""


class DegenerateGeometryError(MazeError, ValueError):
    """Polygon has too few vertices, zero area, or all points collinear."""


class InvalidInputError(MazeError, ValueError):
    """An operation received input it cannot work with (e.g. an empty sequence)."""


class LayoutRejected(MazeError):
    """Internal signal: a layout candidate failed its exclusion checks."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PlacementExhausted(MazeError):
    """Internal signal: waypoints could not be placed within the retry budget."""

    def __init__(self, attempts: int):
        super().__init__(f"Waypoint placement failed after {attempts} attempts")
        self.attempts = attempts


class LayoutExhausted(MazeError):
    """No layout passed its exclusion checks within the trial cap."""

    def __init__(self, trials: int, last_reason: str):
        super().__init__(f"No layout accepted after {trials} trials (last rejection: {last_reason})")
        self.trials = trials
        self.last_reason = last_reason
