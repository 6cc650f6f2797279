#!/usr/bin/env python3
"""
Broadcast the newest pending commit.

Claims one commit from the pending collection, archives it, and publishes a
message about it. Meant to be triggered by a scheduler; each run handles at
most one commit and exits.
"""

import sys
import logging
from pymongo import MongoClient
from pymongo.server_api import ServerApi
from helpers.app_config import AppConfig
from helpers.author_resolver import AuthorResolver
from helpers.dispatcher import Dispatcher
from helpers.errors import BroadcastError
from helpers.publisher import create_publisher
from repositories.commit_queue_repository import CommitQueueRepository

logger = logging.getLogger(__name__)


def connect_mongo(config: AppConfig) -> MongoClient:
    """Create the MongoDB client with the Stable API enabled"""
    return MongoClient(
        config.mongodb_uri,
        server_api=ServerApi('1', strict=True, deprecation_errors=True),
    )


def run(config: AppConfig) -> None:
    resolver = AuthorResolver(config.github_token)
    publisher = create_publisher(config)
    try:
        with CommitQueueRepository(
            connect_mongo(config),
            database_name=config.database_name,
            pending_collection_name=config.pending_collection,
            archive_collection_name=config.archive_collection,
            use_transaction=config.use_transaction,
        ) as repository:
            dispatcher = Dispatcher(repository, resolver, publisher, max_length=config.max_length)
            dispatcher.run_once()
    finally:
        publisher.close()
        resolver.close()


def main() -> int:
    try:
        config = AppConfig.from_env()
    except ValueError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    logger.info(f"Starting commit broadcast in {config.publish_mode} mode")

    try:
        run(config)
    except BroadcastError as e:
        logger.error(f"Broadcast failed: {e}")
        return 1
    except Exception:
        logger.exception("Unexpected error during broadcast")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
