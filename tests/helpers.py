import hashlib

API_PREFIX = "/api/v1"
UPLOAD_URL = f"{API_PREFIX}/file/upload-file"
GET_FILE_URL = f"{API_PREFIX}/file/get-file"
PROFILE_URL = f"{API_PREFIX}/user/profile"


def stored_files(root):
    """返回存储目录下所有已写入的文件"""
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def png_part(name: str, size: int, fill: bytes = b"a", field: str = "files"):
    return field, (name, fill * size, "image/png")
