from typing import BinaryIO, Dict, Optional

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import ClientError

from filedesk.config.config_settings.config_schema import S3ClientConfig, S3Params
from filedesk.core.logger import logger
from filedesk.infra.storage.storage_interface import StorageClientInterface
from filedesk.utils.url_builder import build_public_storage_url

# StorageCapabilities.signature_version -> botocore 的签名名称
_SIGNATURE_VERSIONS = {"v4": "s3v4", "v2": "s3"}


def _with_scheme(host: Optional[str], secure: bool) -> Optional[str]:
    if not host:
        return None
    return f"{'https' if secure else 'http'}://{host}"


def _boto_config(params: S3Params) -> BotoConfig:
    capabilities = params.capabilities
    # path_style 为 auto 时交给 boto3 自己判断
    addressing = None if capabilities.path_style == "auto" else capabilities.path_style
    return BotoConfig(
        signature_version=_SIGNATURE_VERSIONS.get(capabilities.signature_version, "s3v4"),
        s3={"addressing_style": addressing},
        connect_timeout=params.connect_timeout,
        read_timeout=params.read_timeout,
    )


class S3CompatibleClient(StorageClientInterface):
    """
    S3 兼容存储 (AWS S3 / MinIO / R2) 的客户端。
    具体能力差异 (ACL、建桶、CDN 改写) 由 StorageCapabilities 描述。
    """

    def __init__(self, config: S3ClientConfig, s3=None):
        self.params = config.params
        self.capabilities = self.params.capabilities
        self.bucket_name = self.params.bucket_name
        # endpoint 为空时由 boto3 按 region 推导 (AWS S3)
        self.endpoint_url = _with_scheme(self.params.endpoint, self.params.secure)
        self.public_base_url = _with_scheme(self.params.public_endpoint, self.params.secure_cdn)

        self.s3 = s3 or boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            region_name=self.params.region,
            aws_access_key_id=self.params.access_key,
            aws_secret_access_key=self.params.secret_key,
            config=_boto_config(self.params),
        )

        if self.capabilities.supports_bucket_creation:
            self.ensure_bucket()
        else:
            logger.debug(f"[S3 Driver] Bucket creation disabled for '{self.bucket_name}', skipping check.")

    def ensure_bucket(self) -> None:
        try:
            self.s3.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in ("404", "NoSuchBucket"):
                raise
            logger.info(f"[S3 Driver] Creating missing bucket '{self.bucket_name}'")
            self.s3.create_bucket(Bucket=self.bucket_name)

    def build_final_url(self, object_name: str) -> str:
        return build_public_storage_url(
            object_name=object_name,
            cdn_base_url=self.params.cdn_base_url,
            public_base_url=self.public_base_url,
            internal_base_url=self.endpoint_url,
            bucket_name=self.bucket_name,
            capabilities=self.capabilities,
        )

    def put_object(self, object_name: str, data: BinaryIO, length: int, content_type: str) -> Dict:
        logger.info(f"[S3 Driver] Uploading {object_name} ({length} bytes)")
        extra_args = {"ContentType": content_type}
        if self.capabilities.supports_acl and self.params.default_acl:
            extra_args["ACL"] = self.params.default_acl

        self.s3.upload_fileobj(data, self.bucket_name, object_name, ExtraArgs=extra_args)
        head = self.s3.head_object(Bucket=self.bucket_name, Key=object_name)
        # boto3 返回的 ETag 带双引号
        if head.get("ETag"):
            head["ETag"] = head["ETag"].strip('"')
        return head

    def open_object(self, object_name: str) -> BinaryIO:
        """返回 botocore 的 StreamingBody，支持 read(amt) 与 close()。"""
        return self.s3.get_object(Bucket=self.bucket_name, Key=object_name)["Body"]

    def remove_object(self, object_name: str) -> None:
        logger.info(f"[S3 Driver] Deleting {object_name}")
        self.s3.delete_object(Bucket=self.bucket_name, Key=object_name)
