# filedesk/utils/url_builder.py

from typing import Optional

from filedesk.config.config_settings.config_schema import StorageCapabilities
from filedesk.core.logger import logger


def build_public_storage_url(
    object_name: str,
    cdn_base_url: Optional[str],
    public_base_url: Optional[str],  # 来自 S3Params.public_endpoint
    internal_base_url: Optional[str],  # 来自 S3Params.endpoint
    bucket_name: str,
    capabilities: StorageCapabilities
) -> str:
    """
    一个“纯”工具函数，用于根据传入的上下文构建公共 URL。

    URL 生成逻辑:
    1. 【CDN】如果配置了 cdn_base_url 且 capabilities 允许，优先使用。
    2. 【公网 Endpoint】如果配置了 public_base_url，根据 path_style 使用。
    3. 【内网 Endpoint】作为回退，根据 path_style 使用。
    4. 都没有配置时，假定是标准的 AWS S3，使用 virtual-hosted URL。
    """
    key = object_name.lstrip('/')

    if capabilities.supports_cdn_rewrite and cdn_base_url:
        # CDN URL 总是 "path" 风格 (e.g., cdn.com/object_name)
        return f"{cdn_base_url.rstrip('/')}/{key}"

    if public_base_url:
        base_url = public_base_url.rstrip('/')
        if capabilities.path_style == "path":
            return f"{base_url}/{bucket_name}/{key}"
        return f"{base_url}/{key}"

    if internal_base_url:
        logger.warning(
            f"Building public URL for {object_name} using internal endpoint. "
            f"Consider setting 'public_endpoint' for this client."
        )
        base_url = internal_base_url.rstrip('/')
        if capabilities.path_style == "path":
            return f"{base_url}/{bucket_name}/{key}"
        return f"{base_url}/{key}"

    return f"https://{bucket_name}.s3.amazonaws.com/{key}"
