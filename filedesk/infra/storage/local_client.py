import shutil
from pathlib import Path
from typing import BinaryIO, Dict
from urllib.parse import quote

from filedesk.config.config_settings.config_schema import LocalClientConfig
from filedesk.core.logger import logger
from filedesk.infra.storage.storage_interface import StorageClientInterface


class LocalDiskClient(StorageClientInterface):
    """把对象保存在本地目录中，object_name 即相对路径。"""

    def __init__(self, config: LocalClientConfig):
        self.params = config.params
        self.base_path = Path(self.params.base_path).resolve()

    def _resolve(self, object_name: str) -> Path:
        path = (self.base_path / object_name).resolve()
        # object_name 由服务端生成，但仍然拒绝任何逃出 base_path 的路径
        if self.base_path not in path.parents:
            raise ValueError(f"Object name escapes the storage root: {object_name}")
        return path

    def put_object(self, object_name: str, data: BinaryIO, length: int, content_type: str) -> Dict:
        path = self._resolve(object_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"[Local Driver] Putting object: {object_name}")
        with path.open("wb") as f:
            shutil.copyfileobj(data, f)
        return {"ContentLength": path.stat().st_size, "ContentType": content_type}

    def open_object(self, object_name: str) -> BinaryIO:
        return self._resolve(object_name).open("rb")

    def remove_object(self, object_name: str) -> None:
        path = self._resolve(object_name)
        if path.exists():
            path.unlink()
            logger.info(f"[Local Driver] Removed object: {object_name}")

    def build_final_url(self, object_name: str) -> str:
        return f"{self.params.base_url.rstrip('/')}/{quote(object_name.lstrip('/'))}"
