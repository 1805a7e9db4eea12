class BlogError(Exception):
    """Base class for errors raised while loading blog content."""


class PostParseError(BlogError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ContentSourceError(BlogError):
    """The content source could not be enumerated at all."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
