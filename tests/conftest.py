import threading
from datetime import datetime
import pytest


class FakeCollection:
    """Thread-safe in-memory stand-in for the pymongo collection calls used by the queue"""

    def __init__(self):
        self.documents = []
        self._lock = threading.Lock()
        self._next_id = 1

    def insert_one(self, document):
        with self._lock:
            stored = dict(document)
            stored.setdefault('_id', self._next_id)
            self._next_id += 1
            self.documents.append(stored)

    def find_one_and_delete(self, filter, sort=None, session=None):
        with self._lock:
            if not self.documents:
                return None
            ordered = list(self.documents)
            for key, direction in reversed(sort or []):
                ordered.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
            document = ordered[0]
            self.documents.remove(document)
            return document

    def update_one(self, filter, update, upsert=False, session=None):
        with self._lock:
            for document in self.documents:
                if all(document.get(k) == v for k, v in filter.items()):
                    document.update(update['$set'])
                    return
            if upsert:
                stored = dict(filter)
                stored.update(update['$set'])
                self.documents.append(stored)

    def count_documents(self, filter):
        with self._lock:
            return sum(
                1 for document in self.documents
                if all(document.get(k) == v for k, v in filter.items())
            )


class FakeClient:
    def __init__(self):
        self.databases = {}
        self.closed = False

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase())

    def close(self):
        self.closed = True


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


def make_commit_document(sha, date=None, author='alice', message='feat: add new feature'):
    return {
        'sha': sha,
        'author': author,
        'message': message,
        'url': f'https://github.com/owner/repo/commit/{sha}',
        'date': date or datetime(2023, 1, 1, 12, 0, 0),
    }


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def commit_document():
    return make_commit_document
