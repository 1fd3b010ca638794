"""Error types raised by the spin engine."""


class InvalidConfiguration(ValueError):
    """The wheel cannot be built or spun with the given options.

    Raised for prize lists shorter than two entries, blank labels and
    inconsistent spin settings. No engine state changes when it is raised.
    """


class RenderSurfaceUnavailable(RuntimeError):
    """The drawing surface could not be obtained for this frame.

    Recoverable: the controller skips the draw and keeps ticking.
    """
