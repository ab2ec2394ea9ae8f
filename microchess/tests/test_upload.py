"""
Tests for the uploader.

The HTTP layer is replaced by a fake urlopen; no network access.
"""

import io
import json
import urllib.error

import pytest

from microchess.config import Settings
from microchess.core.errors import ConfigError, StoreReadError, UploadError
from microchess.upload import UploadJob, dedupe_by_final_position


class FakeResponse:
    def __init__(self, body: bytes):
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeUrlopen:
    def __init__(self, body=b"", error=None):
        self.body = body
        self.error = error
        self.requests = []

    def __call__(self, req, timeout=None):
        self.requests.append((req, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body)


def _settings(tmp_path, **overrides):
    env = {
        "MICROCHESS_OUTPUT_FILE": str(tmp_path / "games.json"),
        "METADATA_PATH": str(tmp_path / "metadata.json"),
        "JSONBIN_ACCESS_KEY": "secret-key",
        "JSONBIN_URL": "https://bins.example.test/v3/b",
        "JSONBIN_TIMEOUT": "7",
    }
    env.update(overrides)
    return Settings.from_env(env=env)


def _write_store(tmp_path, entries):
    with open(tmp_path / "games.json", "w") as f:
        json.dump(entries, f)


def test_dedupe_keeps_first_occurrence_in_order():
    entries = [
        {"seed": "a", "final_fen": "X"},
        {"seed": "b", "final_fen": "Y"},
        {"seed": "c", "final_fen": "X"},
        {"seed": "d"},
        {"seed": "e", "final_fen": "Y"},
        {"seed": "f"},
    ]

    deduped = dedupe_by_final_position(entries)

    assert [e["seed"] for e in deduped] == ["a", "b", "d", "f"]


def test_missing_access_key_is_config_error(tmp_path):
    settings = _settings(tmp_path, JSONBIN_ACCESS_KEY="")

    with pytest.raises(ConfigError):
        UploadJob(settings)


def test_successful_upload_writes_metadata(tmp_path):
    _write_store(
        tmp_path,
        [{"seed": "a", "final_fen": "X"}, {"seed": "b", "final_fen": "X"}],
    )
    payload = {"record": "abc", "metadata": {"id": "abc", "private": True}}
    urlopen = FakeUrlopen(body=json.dumps(payload).encode("utf-8"))
    job = UploadJob(_settings(tmp_path), urlopen=urlopen)

    assert job() == payload

    req, timeout = urlopen.requests[0]
    assert timeout == 7.0
    assert req.get_method() == "POST"
    assert req.full_url == "https://bins.example.test/v3/b"
    assert req.get_header("X-access-key") == "secret-key"
    assert req.get_header("X-bin-private") == "true"
    assert req.get_header("Content-type") == "application/json"
    assert json.loads(req.data.decode("utf-8")) == [{"seed": "a", "final_fen": "X"}]
    with open(tmp_path / "metadata.json") as f:
        assert json.load(f) == payload


def test_response_without_record_fails(tmp_path):
    _write_store(tmp_path, [])
    urlopen = FakeUrlopen(body=b'{"message": "Bin cannot be blank"}')
    job = UploadJob(_settings(tmp_path), urlopen=urlopen)

    with pytest.raises(UploadError):
        job()

    assert not (tmp_path / "metadata.json").exists()


def test_invalid_json_response_fails(tmp_path):
    _write_store(tmp_path, [])
    job = UploadJob(_settings(tmp_path), urlopen=FakeUrlopen(body=b"<html>"))

    with pytest.raises(UploadError):
        job()


def test_http_error_becomes_upload_error(tmp_path):
    _write_store(tmp_path, [{"seed": "a"}])
    error = urllib.error.HTTPError(
        "https://bins.example.test/v3/b", 401, "Unauthorized", {}, io.BytesIO(b'{"message": "bad key"}')
    )
    job = UploadJob(_settings(tmp_path), urlopen=FakeUrlopen(error=error))

    with pytest.raises(UploadError) as exc_info:
        job()

    assert "401" in str(exc_info.value)


def test_network_error_becomes_upload_error(tmp_path):
    _write_store(tmp_path, [{"seed": "a"}])
    error = urllib.error.URLError("connection refused")
    job = UploadJob(_settings(tmp_path), urlopen=FakeUrlopen(error=error))

    with pytest.raises(UploadError):
        job()


def test_missing_store_skips_attempt(tmp_path):
    urlopen = FakeUrlopen(body=b'{"record": "x"}')
    job = UploadJob(_settings(tmp_path), urlopen=urlopen)

    with pytest.raises(StoreReadError):
        job()

    assert urlopen.requests == []


def test_upload_reads_configured_source(tmp_path):
    other = tmp_path / "elsewhere.json"
    other.write_text(json.dumps([{"seed": "z", "final_fen": "Q"}]))
    urlopen = FakeUrlopen(body=b'{"record": "x"}')
    job = UploadJob(_settings(tmp_path, RANDOMCHESS_PATH=str(other)), urlopen=urlopen)

    job()

    req, _ = urlopen.requests[0]
    assert json.loads(req.data.decode("utf-8")) == [{"seed": "z", "final_fen": "Q"}]
