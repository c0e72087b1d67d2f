import asyncio
import hashlib
import io
from unittest.mock import MagicMock

import pytest

from filedesk.config.config_settings.config_schema import LocalClientConfig, LocalParams
from filedesk.infra.storage.local_client import LocalDiskClient
from filedesk.services.file.hashing import compute_content_hash, hash_stream


def test_hash_stream_matches_sha256():
    data = bytes(range(256)) * 300
    assert hash_stream(io.BytesIO(data), chunk_size=1000) == hashlib.sha256(data).hexdigest()


def test_hash_is_deterministic():
    assert hash_stream(io.BytesIO(b"same bytes")) == hash_stream(io.BytesIO(b"same bytes"))
    assert hash_stream(io.BytesIO(b"one")) != hash_stream(io.BytesIO(b"two"))


def test_compute_content_hash_reads_stored_object(tmp_path):
    client = LocalDiskClient(LocalClientConfig(type="local", params=LocalParams(base_path=str(tmp_path))))
    client.put_object("a/b.bin", io.BytesIO(b"payload"), 7, "application/octet-stream")

    assert asyncio.run(compute_content_hash(client, "a/b.bin")) == hashlib.sha256(b"payload").hexdigest()

    with pytest.raises(FileNotFoundError):
        asyncio.run(compute_content_hash(client, "a/missing.bin"))


# 测试读取中途出错时流仍然会被关闭
def test_stream_closed_on_read_error():
    stream = MagicMock()
    stream.read.side_effect = IOError("connection reset")
    client = MagicMock()
    client.open_object.return_value = stream

    with pytest.raises(IOError):
        asyncio.run(compute_content_hash(client, "x"))
    stream.close.assert_called_once()
