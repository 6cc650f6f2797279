import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, TextIO
import tweepy
from .errors import PublishFailed

logger = logging.getLogger(__name__)

BROADCAST = 'broadcast'
DRY_RUN = 'dry-run'
PUBLISH_MODES = (BROADCAST, DRY_RUN)


class Publisher(ABC):
    """Destination of formatted commit messages"""

    @abstractmethod
    def publish(self, message: str) -> None:
        ...

    def close(self):
        pass


class TwitterPublisher(Publisher):
    """Posts messages as tweets with user-context credentials"""

    def __init__(self, api_key: str, api_key_secret: str, access_token: str,
                 access_token_secret: str, client: Optional[tweepy.Client] = None):
        self.client = client or tweepy.Client(
            consumer_key=api_key,
            consumer_secret=api_key_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
        )

    def publish(self, message: str) -> None:
        try:
            response = self.client.create_tweet(text=message)
        except tweepy.TweepyException as e:
            raise PublishFailed(f"Error posting tweet: {e}") from e
        tweet_id = response.data.get('id') if response and response.data else None
        logger.info(f"Posted tweet {tweet_id}")


class DryRunPublisher(Publisher):
    """Writes messages to a local stream instead of publishing them"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def publish(self, message: str) -> None:
        self.stream.write(f"{message}\n")
        self.stream.flush()


def create_publisher(config) -> Publisher:
    """Pick the publisher variant for the configured mode"""
    if config.publish_mode == BROADCAST:
        return TwitterPublisher(
            config.twitter_api_key,
            config.twitter_api_key_secret,
            config.twitter_access_token,
            config.twitter_access_token_secret,
        )
    if config.publish_mode == DRY_RUN:
        return DryRunPublisher()
    raise ValueError(f"Unknown publish mode: {config.publish_mode}")
