class BroadcastError(Exception):
    """Base class for failures surfaced by a broadcast run"""


class StoreUnavailable(BroadcastError):
    """The commit store could not service the request"""


class SchemaInvariantViolation(BroadcastError):
    """A claimed document does not have the shape of a commit record"""


class ResolutionUnavailable(BroadcastError):
    """The identity directory could not be queried"""


class PublishFailed(BroadcastError):
    """The publisher rejected or could not deliver the message"""


class DispatcherBusy(BroadcastError):
    """A dispatch cycle is already running on this dispatcher"""
