"""
Errors raised while mapping storefront events and recording them.

Mapping rules raise MappingError or UnknownEventError; sinks raise
SinkError. The service layer logs and drops the event in every case,
and the HTTP layer turns UnknownEventError into a 404.
"""


class PixelError(Exception):
    """Base exception for all pixel errors."""


class MappingError(PixelError):
    """Raw event is missing a structure its mapping rule requires."""


class UnknownEventError(PixelError):
    """No mapping rule exists for the lifecycle event name."""


class SinkError(PixelError):
    """Analytics sink rejected or failed to record an event."""


class SinkNotInitializedError(SinkError):
    """Sink was used before init() was called."""
