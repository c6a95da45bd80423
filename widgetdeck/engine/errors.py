class WidgetSourceError(RuntimeError):
    """Base error for host-side widget retrieval."""


class SourceCacheError(WidgetSourceError):
    """The response cache file exists but cannot be used."""


class SourceResponseError(WidgetSourceError):
    """The remote answered with something that cannot be interpreted."""
