from __future__ import annotations

import pytest
from webdav3.exceptions import NoConnection, ResponseErrorCode

from recipe_cards.errors import StoreError
from recipe_cards.storage import WebDavStore


class FakeDavClient:
    def __init__(self, folders=(), files=None):
        self.folders = set(folders)
        self.files = dict(files or {})
        self.mkdir_calls = []
        self.list_error = None
        self.upload_error = None

    def list(self, remote_path="/"):
        if self.list_error:
            raise self.list_error
        return []

    def check(self, remote_path="/"):
        return remote_path in self.folders or remote_path in self.files

    def mkdir(self, remote_path):
        self.mkdir_calls.append(remote_path)
        self.folders.add(remote_path)
        return True

    def upload_to(self, buff, remote_path):
        if self.upload_error:
            raise self.upload_error
        self.files[remote_path] = buff


def make_store(client):
    return WebDavStore("https://cloud.example.com/dav", "me", "secret", client=client)


def test_connect_wraps_library_errors():
    client = FakeDavClient()
    client.list_error = ResponseErrorCode("https://cloud.example.com/dav", 401, "Unauthorized")
    with pytest.raises(StoreError, match="cannot connect"):
        make_store(client).connect()


def test_connect_succeeds():
    make_store(FakeDavClient()).connect()


def test_ensure_directory_creates_only_missing_segments():
    client = FakeDavClient(folders={"/Recettes"})
    store = make_store(client)

    store.ensure_directory("/Recettes/2024/03-18")
    assert client.mkdir_calls == ["/Recettes/2024", "/Recettes/2024/03-18"]

    store.ensure_directory("/Recettes/2024/03-18")
    assert client.mkdir_calls == ["/Recettes/2024", "/Recettes/2024/03-18"]


def test_ensure_directory_wraps_errors():
    class Broken(FakeDavClient):
        def mkdir(self, remote_path):
            raise ResponseErrorCode("https://cloud.example.com/dav", 403, "Forbidden")

    with pytest.raises(StoreError, match="mkdir /Recettes"):
        make_store(Broken()).ensure_directory("/Recettes")


def test_exists_and_write():
    client = FakeDavClient(folders={"/Recettes"})
    store = make_store(client)

    assert store.exists("/Recettes/card.jpg") is False
    store.write("/Recettes/card.jpg", b"data")
    assert client.files["/Recettes/card.jpg"] == b"data"
    assert store.exists("/Recettes/card.jpg") is True


def test_write_wraps_errors():
    client = FakeDavClient()
    client.upload_error = NoConnection("cloud.example.com")
    with pytest.raises(StoreError, match="write /Recettes/card.jpg"):
        make_store(client).write("/Recettes/card.jpg", b"data")


def test_ensure_directory_reports_refused_mkdir():
    class Refusing(FakeDavClient):
        def mkdir(self, remote_path):
            return False

    with pytest.raises(StoreError, match="refused"):
        make_store(Refusing()).ensure_directory("/Recettes")
