from typing import Dict

from filedesk.config.config_settings.config_schema import (
    AppConfig,
    LocalClientConfig,
    S3ClientConfig,
    StorageProfileConfig,
)
from filedesk.core.logger import logger
from filedesk.infra.storage.local_client import LocalDiskClient
from filedesk.infra.storage.s3_client import S3CompatibleClient
from filedesk.infra.storage.storage_interface import StorageClientInterface


def build_client(config) -> StorageClientInterface:
    if isinstance(config, LocalClientConfig):
        return LocalDiskClient(config=config)
    if isinstance(config, S3ClientConfig):
        return S3CompatibleClient(config=config)
    raise ValueError(f"Unsupported storage client type: {getattr(config, 'type', config)!r}")


class StorageFactory:
    """
    按配置中的 storage_clients 创建所有存储客户端，并按 Storage Profile 分发。

    上传流程只认识 Profile 名称 (如 'profile_pictures')，
    通过 get_client_by_profile() 拿到对应的客户端。
    """

    def __init__(self, config: AppConfig):
        self._clients: Dict[str, StorageClientInterface] = {}
        self._profiles: Dict[str, StorageProfileConfig] = config.storage_profiles

        for name, client_config in config.storage_clients.items():
            try:
                self._clients[name] = build_client(client_config)
                logger.info(f"Storage client '{name}' ({client_config.type}) ready.")
            except Exception as e:
                # 单个客户端初始化失败不影响应用启动，使用它的 Profile 在调用时报错
                logger.exception(f"Storage client '{name}' failed to initialize and will be unavailable: {e}")

        if not self._clients:
            logger.warning("StorageFactory has no usable storage clients.")

    def register_client(self, client_name: str, client: StorageClientInterface) -> None:
        """替换或新增一个客户端实例。"""
        self._clients[client_name] = client

    def get_client(self, client_name: str) -> StorageClientInterface:
        """
        Raises:
            KeyError: 客户端未定义或初始化失败。
        """
        if client_name not in self._clients:
            logger.error(f"Storage client '{client_name}' requested but not available.")
            raise KeyError(f"Storage client '{client_name}' is not available. Check configuration and startup logs.")
        return self._clients[client_name]

    def get_profile_config(self, profile_name: str) -> StorageProfileConfig:
        """
        Raises:
            ValueError: Profile 未在配置中定义。
        """
        try:
            return self._profiles[profile_name]
        except KeyError:
            raise ValueError(f"Storage profile '{profile_name}' is not defined.") from None

    def get_client_by_profile(self, profile_name: str) -> StorageClientInterface:
        return self.get_client(self.get_profile_config(profile_name).client)

    def local_clients(self) -> Dict[str, LocalDiskClient]:
        return {name: client for name, client in self._clients.items() if isinstance(client, LocalDiskClient)}
