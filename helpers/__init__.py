from .app_config import AppConfig, build_mongo_uri
from .author_resolver import AuthorResolver
from .dispatcher import Dispatcher, DispatcherState
from .errors import (
    BroadcastError,
    DispatcherBusy,
    PublishFailed,
    ResolutionUnavailable,
    SchemaInvariantViolation,
    StoreUnavailable,
)
from .message_formatter import MAXLEN, build_attribution, format_commit_message, weighted_length
from .publisher import DryRunPublisher, Publisher, TwitterPublisher, create_publisher

__all__ = [
    'AppConfig',
    'AuthorResolver',
    'BroadcastError',
    'Dispatcher',
    'DispatcherBusy',
    'DispatcherState',
    'DryRunPublisher',
    'MAXLEN',
    'PublishFailed',
    'Publisher',
    'ResolutionUnavailable',
    'SchemaInvariantViolation',
    'StoreUnavailable',
    'TwitterPublisher',
    'build_attribution',
    'build_mongo_uri',
    'create_publisher',
    'format_commit_message',
    'weighted_length',
]
