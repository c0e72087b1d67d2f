from typing import Dict, Optional, Literal, Union, List

from pydantic import BaseModel, Field, field_validator, model_validator


class StorageCapabilities(BaseModel):
    """
    描述对象存储服务的特性与能力集。
    默认值代表一个“功能齐全”的 S3 兼容服务 (如 MinIO, AWS S3)。
    """

    supports_acl: bool = Field(
        default=True,
        description="是否支持对象 ACL 控制 (S3/MinIO: True, R2: False)"
    )

    supports_bucket_creation: bool = Field(
        default=True,
        description="是否允许通过API创建bucket"
    )

    supports_cdn_rewrite: bool = Field(
        default=True,
        description="是否支持将内网URL重写为CDN URL"
    )

    signature_version: Literal["v2", "v4"] = Field(
        default="v4",
        description="支持的签名算法版本 (v4 是现代标准)"
    )

    path_style: Literal["auto", "path", "virtual"] = Field(
        default="auto",
        description="默认寻址风格 (本地 MinIO 可能需要手动设为 'path')"
    )


class S3Params(BaseModel):
    """
    MinIO 或 S3 兼容服务的客户端参数
    """

    endpoint: Optional[str] = None
    """
    服务地址 (不含 http/https)。
    - AWS S3: 留空 (None)，Boto3 会根据 region 自动生成。
    - MinIO: 必须填写, e.g., 'your-minio:9000'
    """

    region: str = "us-east-1"
    access_key: str
    secret_key: str
    bucket_name: str
    secure: bool = True

    default_acl: Optional[str] = "public-read"
    """上传对象时使用的默认 ACL。Cloudflare R2 必须设置为 None"""

    public_endpoint: Optional[str] = None
    """公网访问端点 (不含 http/https, 不含 bucket)"""

    cdn_base_url: Optional[str] = None
    """CDN 完整域名 (含协议, 不含 bucket)"""

    secure_cdn: bool = True

    connect_timeout: int = 60
    read_timeout: int = 60

    capabilities: StorageCapabilities = Field(
        default_factory=StorageCapabilities,
        description="描述当前存储服务的特性与行为差异"
    )


class LocalParams(BaseModel):
    """本地磁盘存储的客户端参数 (开发环境 / 单机部署)"""
    base_path: str = Field("./uploads", description="文件落盘的根目录")
    base_url: str = Field(
        "http://localhost:8000/files",
        description="拼接 download_url 时使用的公开访问前缀"
    )
    mount_path: Optional[str] = Field(
        "/files",
        description="如果设置，应用会在此路径下以只读方式暴露 base_path；为 None 则不挂载"
    )


class S3ClientConfig(BaseModel):
    type: Literal['minio', 's3']
    params: S3Params


class LocalClientConfig(BaseModel):
    type: Literal['local']
    params: LocalParams = Field(default_factory=LocalParams)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    api_prefix: str = "/api/v1"
    env: str = "dev"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class DatabaseConfig(BaseModel):
    url: str
    echo: bool = False


class LoggingConfig(BaseModel):
    enable_file: bool = True
    log_dir: str = "./logs"
    rotation: str = "1 week"
    retention: str = "1 month"


class SecuritySettings(BaseModel):
    secret: str
    jwt_algorithm: str = "HS256"
    jwt_issuer: Optional[str] = None
    jwt_audience: Optional[str] = None

    @field_validator("secret")
    @classmethod
    def secret_must_be_resolved(cls, value: str) -> str:
        """未设置的环境变量会以 ${VAR} 原样保留，不能把它当作签名密钥。"""
        if not value.strip():
            raise ValueError("security_settings.secret must not be empty.")
        if "${" in value:
            raise ValueError(f"security_settings.secret contains an unresolved placeholder: {value}")
        return value


class StorageProfileConfig(BaseModel):
    """单个存储策略 (业务场景) 的配置"""
    client: str = Field(..., description="该策略使用的客户端名称")
    default_folder: str = Field(..., description="默认存储的文件夹，可包含 {year}/{month}/{day} 占位符")
    allowed_file_types: List[str] = Field(..., description="允许上传的MIME类型列表, e.g., ['image/jpeg', 'image/png']")
    max_file_size: int = Field(10 * 1024 * 1024, ge=0, description="单个文件的最大字节数，默认为 10MB")
    max_upload_files: int = Field(10, ge=1, description="一次请求中 files 字段允许的最大文件数")


class ModulesConfig(BaseModel):
    """REST 模块使用的 Storage Profile"""
    file_upload_profile: str = "general_files"
    profile_picture_profile: str = "profile_pictures"


# ========================================================================================
#
#   所有配置模型都要写在APPconfig上方
#
# ========================================================================================
class AppConfig(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    security_settings: SecuritySettings
    # 使用 Union 来支持多种不同的客户端配置结构，按 type 字段区分
    storage_clients: Dict[str, Union[LocalClientConfig, S3ClientConfig]]
    storage_profiles: Dict[str, StorageProfileConfig]
    modules: ModulesConfig = Field(default_factory=ModulesConfig)

    @model_validator(mode='after')
    def validate_profile_clients(self) -> 'AppConfig':
        """每个 profile 引用的 client 必须在 storage_clients 中定义。"""
        for profile_name, profile in self.storage_profiles.items():
            if profile.client not in self.storage_clients:
                raise ValueError(
                    f"Storage profile '{profile_name}' refers to unknown client '{profile.client}'."
                )
        for profile_name in (self.modules.file_upload_profile, self.modules.profile_picture_profile):
            if profile_name not in self.storage_profiles:
                raise ValueError(f"Module storage profile '{profile_name}' is not defined.")
        return self
