import logging
from typing import Optional
from pydantic import ValidationError
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError
from models.commit import CommitRecord
from helpers.errors import SchemaInvariantViolation, StoreUnavailable

logger = logging.getLogger(__name__)

# Newest first; identical dates fall back to the greatest sha
CLAIM_ORDER = [('date', DESCENDING), ('sha', DESCENDING)]


class CommitQueueRepository:
    """
    Pending commits queue backed by two MongoDB collections

    A claim removes the newest pending document with a single
    find-and-delete, then upserts it into the archive collection. The two
    writes are separate operations unless use_transaction is enabled, in
    which case they run inside one multi-document transaction.
    """

    def __init__(self, client: MongoClient, database_name: str = 'every-fkn-commit',
                 pending_collection_name: str = 'fresh-commits',
                 archive_collection_name: str = 'used-commits',
                 use_transaction: bool = False):
        self.client = client
        self.database_name = database_name
        self.use_transaction = use_transaction

        db = client[database_name]
        self.pending = db[pending_collection_name]
        self.archive_collection = db[archive_collection_name]

    def claim_next(self) -> Optional[CommitRecord]:
        """
        Remove and return the newest pending commit, archiving it afterwards

        Returns:
            CommitRecord or None when no commit is pending

        Raises:
            StoreUnavailable: the pending collection could not be read
            SchemaInvariantViolation: the claimed document is not a commit
        """
        if self.use_transaction:
            return self._claim_in_transaction()

        document = self._find_and_delete_newest()
        if document is None:
            return None

        record = self._to_record(document)
        try:
            self.archive(record)
        except StoreUnavailable as e:
            logger.error(f"Commit {record.sha} was claimed but could not be archived: {e}")
        return record

    def archive(self, record: CommitRecord) -> None:
        """Upsert a commit into the archive collection, keyed by sha"""
        try:
            self.archive_collection.update_one(
                {'sha': record.sha}, {'$set': record.to_document()}, upsert=True
            )
        except PyMongoError as e:
            raise StoreUnavailable(f"Error archiving commit {record.sha}: {e}") from e
        logger.info(f"Archived commit {record.sha}")

    def _find_and_delete_newest(self) -> Optional[dict]:
        try:
            return self.pending.find_one_and_delete({}, sort=CLAIM_ORDER)
        except PyMongoError as e:
            raise StoreUnavailable(f"Error claiming pending commit: {e}") from e

    def _to_record(self, document: dict) -> CommitRecord:
        try:
            return CommitRecord(**document)
        except ValidationError as e:
            raise SchemaInvariantViolation(
                f"Claimed document {document.get('_id')} is not a valid commit: {e}"
            ) from e

    def _claim_in_transaction(self) -> Optional[CommitRecord]:
        # Driver errors must reach with_transaction unwrapped so transient
        # conflicts between overlapping runs are retried
        def claim_and_archive(session):
            document = self.pending.find_one_and_delete({}, sort=CLAIM_ORDER, session=session)
            if document is None:
                return None
            record = self._to_record(document)
            self.archive_collection.update_one(
                {'sha': record.sha}, {'$set': record.to_document()},
                upsert=True, session=session
            )
            return record

        try:
            with self.client.start_session() as session:
                return session.with_transaction(claim_and_archive)
        except PyMongoError as e:
            raise StoreUnavailable(f"Error running claim transaction: {e}") from e

    def close(self):
        """Close the MongoDB connection"""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
