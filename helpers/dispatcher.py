import logging
import threading
from enum import Enum
from typing import Callable, Optional
from models.commit import CommitRecord
from .errors import DispatcherBusy, ResolutionUnavailable
from .message_formatter import MAXLEN, format_commit_message

logger = logging.getLogger(__name__)


class DispatcherState(Enum):
    IDLE = 'idle'
    PROCESSING = 'processing'


class Dispatcher:
    """Claims one pending commit and publishes it"""

    def __init__(self, queue_repository, author_resolver, publisher,
                 formatter: Callable[..., str] = format_commit_message,
                 max_length: int = MAXLEN):
        self.queue_repository = queue_repository
        self.author_resolver = author_resolver
        self.publisher = publisher
        self.formatter = formatter
        self.max_length = max_length
        self.state = DispatcherState.IDLE
        self._lock = threading.Lock()

    def run_once(self) -> Optional[str]:
        """
        Run a single dispatch cycle

        Returns:
            str: the published message, or None when nothing was pending

        Raises:
            DispatcherBusy: another cycle is running on this dispatcher
        """
        if not self._lock.acquire(blocking=False):
            raise DispatcherBusy("A dispatch cycle is already running")
        self.state = DispatcherState.PROCESSING
        try:
            return self._dispatch()
        finally:
            self.state = DispatcherState.IDLE
            self._lock.release()

    def _dispatch(self) -> Optional[str]:
        commit = self.queue_repository.claim_next()
        if commit is None:
            logger.info("No pending commits")
            return None

        logger.info(f"Claimed commit {commit.sha}")
        handle = self._resolve_handle(commit)
        message = self.formatter(commit, handle, max_length=self.max_length)

        try:
            self.publisher.publish(message)
        except Exception:
            logger.exception(f"Failed to publish commit {commit.sha}")
            raise

        logger.info(f"Published commit {commit.sha}")
        return message

    def _resolve_handle(self, commit: CommitRecord) -> Optional[str]:
        if not commit.author:
            return None
        try:
            return self.author_resolver.resolve_handle(commit.author)
        except ResolutionUnavailable as e:
            logger.warning(f"Publishing {commit.sha} without a handle: {e}")
            return None
