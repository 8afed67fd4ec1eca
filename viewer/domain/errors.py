class ViewerError(Exception):
    """Base class for errors raised inside the viewer pipeline."""

class NetworkFailure(ViewerError):
    """An endpoint was unreachable or answered with a non-success status."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason

class ParseFailure(ViewerError):
    """The snapshot payload did not match the expected shape."""

class EmptyGeometry(ViewerError):
    """No lanes to frame a viewport around."""
