"""Shared in-memory collaborators for the option service tests."""

import io
from typing import Any, Dict, List, Optional, Tuple

import pytest

from rundeck_options.search.index import SearchIndex
from rundeck_options.search.ranker import VersionRanker
from rundeck_options.service.options import RundeckOptionsService
from rundeck_options.storage.base import ArtifactStorage, Asset, Blob, Bucket, Repository, RepositoryCatalog, StorageTx


def component(repository, group_id, artifact_id, version, extension="jar", classifier=None,
              base_version=None, last_modified=None):
    """Build an index document shaped like a repository manager component."""
    maven2 = {"extension": extension}
    if classifier:
        maven2["classifier"] = classifier
    if base_version:
        maven2["baseVersion"] = base_version
    attributes: Dict[str, Any] = {"maven2": maven2}
    if last_modified is not None:
        attributes["content"] = {"last_modified": last_modified}
    return {
        "format": "maven2",
        "repository_name": repository,
        "version": version,
        "attributes": {"maven2": {"groupId": group_id, "artifactId": artifact_id}},
        "assets": [{"attributes": attributes}],
    }


def _values(doc, path):
    if not path:
        return [doc]
    if isinstance(doc, list):
        found = []
        for item in doc:
            found.extend(_values(item, path))
        return found
    if isinstance(doc, dict) and path[0] in doc:
        return _values(doc[path[0]], path[1:])
    return []


class FakeIndex(SearchIndex):
    """Matches term filters against dotted paths; returns documents in stored order."""

    def __init__(self, documents=None, error=None):
        self.documents = list(documents or [])
        self.error = error
        self.calls: List[Tuple[tuple, tuple, int, int]] = []

    def search(self, filters, sort, offset, limit):
        self.calls.append((tuple(filters), tuple(sort), offset, limit))
        if self.error is not None:
            raise self.error
        matched = [
            doc for doc in self.documents
            if all(f.value in _values(doc, f.field.split(".")) for f in filters)
        ]
        return matched[offset:offset + limit]


class FakeCatalog(RepositoryCatalog):
    def __init__(self, repositories):
        self.repositories = {r.name: r for r in repositories}

    def get(self, name):
        return self.repositories.get(name)


class FakeTx(StorageTx):
    def __init__(self, files: Optional[Dict[str, bytes]]):
        self.files = files
        self.active = False
        self.begun = 0
        self.commits = 0
        self.saved: List[Asset] = []

    @property
    def is_active(self):
        return self.active

    def begin(self):
        self.active = True
        self.begun += 1

    def commit(self):
        self.active = False
        self.commits += 1

    def find_bucket(self, repository):
        if self.files is None:
            return None
        return Bucket(repository_name=repository.name, location=self.files)

    def find_asset(self, path, bucket):
        if path not in bucket.location:
            return None
        return Asset(name=path, blob_ref=path)

    def save_asset(self, asset):
        self.saved.append(asset)

    def require_blob(self, asset):
        data = self.files[asset.blob_ref]
        return Blob(stream=io.BytesIO(data), content_type="application/java-archive", size=len(data))


class FakeStorage(ArtifactStorage):
    """Files per repository name; a repository mapped to None has no bucket."""

    def __init__(self, files_by_repository):
        self.files_by_repository = files_by_repository
        self.txs: List[FakeTx] = []

    def new_tx(self, repository):
        tx = FakeTx(self.files_by_repository.get(repository.name))
        self.txs.append(tx)
        return tx


@pytest.fixture
def catalog():
    return FakeCatalog([
        Repository("releases", "maven2"),
        Repository("snapshots", "maven2"),
        Repository("npm-proxy", "npm"),
        Repository("empty", "maven2"),
    ])


@pytest.fixture
def index():
    return FakeIndex([
        component("releases", "com.foo", "bar", "1.9", last_modified=1514764800000),
        component("releases", "com.foo", "bar", "1.10", last_modified=1514678400000),
        component("releases", "com.foo", "bar", "1.2.3"),
        component("snapshots", "com.foo", "bar", "1.2.3-20180101.101010-5", base_version="1.2.3-SNAPSHOT"),
        component("snapshots", "com.foo", "bar", "1.2.3-20180102.192026-6", base_version="1.2.3-SNAPSHOT"),
    ])


@pytest.fixture
def storage():
    return FakeStorage({
        "releases": {
            "com/foo/bar/1.10/bar-1.10.jar": b"release-1.10",
            "com/foo/bar/1.2.3/bar-1.2.3.jar": b"release-1.2.3",
            "com/foo/bar/1.2.3/bar-1.2.3-sources.jar": b"sources-1.2.3",
        },
        "snapshots": {
            "com/foo/bar/1.2.3-SNAPSHOT/bar-1.2.3-20180102.192026-6.jar": b"snapshot-6",
            "com/foo/bar/1.2.3-SNAPSHOT/bar-1.2.3-20180101.101010-5.jar": b"snapshot-5",
        },
        "empty": None,
    })


@pytest.fixture
def service(catalog, index, storage):
    return RundeckOptionsService(catalog=catalog, ranker=VersionRanker(index), storage=storage)
