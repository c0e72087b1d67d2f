from datetime import timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest

from filedesk.infra.storage.local_client import LocalDiskClient
from filedesk.services.file import hashing
from tests.helpers import GET_FILE_URL, UPLOAD_URL, png_part, sha256_hex, stored_files


# 测试两个文件都成功上传：顺序、大小、摘要
def test_upload_two_files(client, auth_headers, storage_root):
    data_a, data_b = b"a" * 500, b"b" * 1000
    response = client.post(
        UPLOAD_URL,
        files=[png_part("A.png", 500, b"a"), png_part("B.png", 1000, b"b")],
        headers=auth_headers("file:upload"),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "SUCCESS"
    assert body["errors"] == []

    first, second = body["data"]
    assert [first["filename"], second["filename"]] == ["A.png", "B.png"]
    assert [first["fileSize"], second["fileSize"]] == [500, 1000]
    assert first["mimeType"] == "image/png"
    assert first["contentHash"] == sha256_hex(data_a)
    assert second["contentHash"] == sha256_hex(data_b)
    assert first["contentHash"] != second["contentHash"]
    assert first["id"] != second["id"]
    assert len(stored_files(storage_root)) == 2


# 测试 download_url 可以通过挂载的本地存储访问
def test_download_url_serves_stored_bytes(client, auth_headers):
    response = client.post(
        UPLOAD_URL,
        files=[("files", ("notes.txt", b"hello filedesk", "text/plain"))],
        headers=auth_headers("file:upload"),
    )
    record = response.json()["data"][0]
    assert record["downloadUrl"].startswith("http://testserver/files/files/")
    assert record["downloadUrl"].endswith(".txt")

    download = client.get(record["downloadUrl"])
    assert download.status_code == 200
    assert download.content == b"hello filedesk"


# 测试超出文件数量上限
def test_too_many_files(client, auth_headers, storage_root):
    parts = [png_part(f"{i}.png", 10) for i in range(6)]
    response = client.post(UPLOAD_URL, files=parts, headers=auth_headers("file:upload"))

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "TOO_MANY_FILES"
    assert body["variables"] == [{"name": "FIELD", "variable": "files"}]
    assert body["data"] is None
    assert stored_files(storage_root) == []


# 测试文件数量超出表单解析上限时仍然返回 TOO_MANY_FILES
@pytest.mark.parametrize("count", [8, 1001])
def test_too_many_files_beyond_form_limit(client, auth_headers, storage_root, count):
    parts = [png_part(f"{i}.png", 1) for i in range(count)]
    response = client.post(UPLOAD_URL, files=parts, headers=auth_headers("file:upload"))

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "TOO_MANY_FILES"
    assert body["variables"] == [{"name": "FIELD", "variable": "files"}]
    assert "Too many files" in body["cause"]
    assert stored_files(storage_root) == []


# 测试文件出现在未声明的字段中
def test_unexpected_field(client, auth_headers):
    response = client.post(
        UPLOAD_URL,
        files=[png_part("a.png", 10), png_part("b.png", 10, field="attachment")],
        headers=auth_headers("file:upload"),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "TOO_MANY_FILES"
    assert response.json()["variables"] == [{"name": "FIELD", "variable": "attachment"}]


# 测试文件过大，整个请求被拒绝
def test_file_too_large(client, auth_headers, storage_root):
    response = client.post(
        UPLOAD_URL,
        files=[png_part("small.png", 10), png_part("big.png", 2001)],
        headers=auth_headers("file:upload"),
    )
    assert response.status_code == 413
    assert response.json()["code"] == "FILE_TOO_LARGE"
    assert stored_files(storage_root) == []


# 测试不允许的 MIME 类型
def test_mime_type_not_allowed(client, auth_headers):
    response = client.post(
        UPLOAD_URL,
        files=[("files", ("archive.zip", b"PK\x03\x04", "application/zip"))],
        headers=auth_headers("file:upload"),
    )
    assert response.status_code == 415
    assert response.json()["code"] == "MIME_TYPE_NOT_ALLOWED"


# 测试没有上传任何文件
def test_no_files_uploaded(client, auth_headers):
    response = client.post(UPLOAD_URL, data={"comment": "nothing here"}, headers=auth_headers("file:upload"))
    assert response.status_code == 400
    assert response.json()["code"] == "NO_FILES_UPLOADED"


# 测试单个文件读取失败不影响其他文件
def test_partial_failure_keeps_siblings(client, auth_headers, storage_root):
    real_compute = hashing.compute_content_hash
    calls = []

    async def flaky_compute(storage_client, object_name):
        calls.append(object_name)
        if len(calls) == 2:
            raise FileNotFoundError(object_name)
        return await real_compute(storage_client, object_name)

    with patch("filedesk.services.file.upload_coordinator.compute_content_hash", flaky_compute):
        response = client.post(
            UPLOAD_URL,
            files=[png_part("A.png", 500, b"a"), png_part("B.png", 1000, b"b"), png_part("C.png", 20, b"c")],
            headers=auth_headers("file:upload"),
        )

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "SUCCESS"
    assert [record["filename"] for record in body["data"]] == ["A.png", "C.png"]
    assert len(body["errors"]) == 1
    assert body["errors"][0]["code"] == "FILE_NOT_FOUND"
    assert body["errors"][0]["variables"] == [{"name": "FILENAME", "variable": "B.png"}]
    assert "FileNotFoundError" in body["errors"][0]["cause"]
    # 失败文件的存储对象已被删除
    assert len(stored_files(storage_root)) == 2


# 测试所有文件都失败时，仍然返回空的成功列表
def test_all_files_fail_still_responds(client, auth_headers, storage_root):
    async def broken_compute(storage_client, object_name):
        raise OSError("storage offline")

    with patch("filedesk.services.file.upload_coordinator.compute_content_hash", broken_compute):
        response = client.post(
            UPLOAD_URL,
            files=[png_part("A.png", 10), png_part("B.png", 10)],
            headers=auth_headers("file:upload"),
        )

    body = response.json()
    assert response.status_code == 200
    assert body["data"] == []
    assert [err["code"] for err in body["errors"]] == ["FILE_NOT_FOUND", "FILE_NOT_FOUND"]
    assert stored_files(storage_root) == []


# 测试写入存储失败时清理已写入的文件
def test_storage_write_failure_cleans_up(client, app, app_config, auth_headers, storage_root):
    class FlakyDiskClient(LocalDiskClient):
        writes = 0

        def put_object(self, object_name, data, length, content_type):
            FlakyDiskClient.writes += 1
            if FlakyDiskClient.writes == 2:
                raise OSError("disk full")
            return super().put_object(object_name, data, length, content_type)

    app.state.storage_factory.register_client(
        "local_disk", FlakyDiskClient(app_config.storage_clients["local_disk"])
    )
    response = client.post(
        UPLOAD_URL,
        files=[png_part("A.png", 10), png_part("B.png", 10)],
        headers=auth_headers("file:upload"),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "UNKNOWN_ERROR"
    assert stored_files(storage_root) == []


# 测试未携带 Token
def test_upload_requires_token(client):
    response = client.post(UPLOAD_URL, files=[png_part("a.png", 10)])
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


# 测试 Token 过期
def test_upload_rejects_expired_token(client, auth_headers):
    headers = auth_headers("file:upload", expires_delta=timedelta(seconds=-10))
    response = client.post(UPLOAD_URL, files=[png_part("a.png", 10)], headers=headers)
    assert response.status_code == 401


# 测试缺少 file:upload 权限
def test_upload_requires_capability(client, auth_headers, storage_root):
    response = client.post(UPLOAD_URL, files=[png_part("a.png", 10)], headers=auth_headers("file:read"))
    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "FORBIDDEN"
    assert body["variables"] == [{"name": "CAPABILITY", "variable": "file:upload"}]
    assert stored_files(storage_root) == []


# 测试按 id 读取文件记录
def test_get_file(client, auth_headers):
    upload = client.post(UPLOAD_URL, files=[png_part("a.png", 42)], headers=auth_headers("file:upload"))
    record = upload.json()["data"][0]

    response = client.get(GET_FILE_URL, params={"id": record["id"]}, headers=auth_headers("file:read"))
    assert response.status_code == 200
    assert response.json()["data"] == record


def test_get_file_missing_id(client, auth_headers):
    response = client.get(GET_FILE_URL, headers=auth_headers("file:read"))
    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_PARAMETER"
    assert response.json()["variables"] == [{"name": "PARAMETER", "variable": "id"}]


def test_get_file_malformed_id(client, auth_headers):
    response = client.get(GET_FILE_URL, params={"id": "not-a-uuid"}, headers=auth_headers("file:read"))
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_get_file_unknown_id(client, auth_headers):
    response = client.get(GET_FILE_URL, params={"id": str(uuid4())}, headers=auth_headers("file:read"))
    assert response.status_code == 404
    assert response.json()["code"] == "FILE_RECORD_NOT_FOUND"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
