import hashlib
from contextlib import closing
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from filedesk.infra.storage.storage_interface import StorageClientInterface

HASH_ALGORITHM = "sha256"
HASH_CHUNK_SIZE = 64 * 1024


def hash_stream(stream: BinaryIO, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """分块读取流并返回十六进制摘要。相同的字节总是得到相同的结果。"""
    digest = hashlib.new(HASH_ALGORITHM)
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        digest.update(chunk)
    return digest.hexdigest()


def _hash_object(client: StorageClientInterface, object_name: str) -> str:
    # 无论成功与否，打开的对象流都会被关闭
    with closing(client.open_object(object_name)) as stream:
        return hash_stream(stream)


async def compute_content_hash(client: StorageClientInterface, object_name: str) -> str:
    """读取已存储的对象并计算内容摘要，阻塞 I/O 放到线程池中执行。"""
    return await run_in_threadpool(_hash_object, client, object_name)
