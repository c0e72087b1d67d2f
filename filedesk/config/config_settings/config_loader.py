import os
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Optional

import yaml
from dotenv import load_dotenv

from filedesk.config.config_settings.config_schema import AppConfig
from filedesk.core.logger import logger

CONFIG_DIR = Path(__file__).resolve().parents[1]
DEFAULT_ENV = "config"


def load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"配置文件未找到: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def interpolate_env_vars(obj):
    """
    替换 YAML 中的 ${VAR} 为 os.environ 中的值
    并做类型转换（true/false）
    """
    def convert(value: str):
        v = value.lower()
        if v == "true": return True
        if v == "false": return False
        return value

    if isinstance(obj, dict):
        return {k: interpolate_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [interpolate_env_vars(i) for i in obj]
    elif isinstance(obj, str):
        raw = Template(obj).safe_substitute(os.environ)
        return convert(raw)
    else:
        return obj


def get_env() -> str:
    return os.getenv("ENV", DEFAULT_ENV)


def load_environments(base_dir: Path, env: str) -> None:
    """分层加载 .env 文件：先加载通用 .env，再用 .env.{env} 覆盖。"""
    base_env_path = base_dir / ".env"
    if base_env_path.exists():
        load_dotenv(dotenv_path=base_env_path)
        logger.info(f"Loaded .env file: {base_env_path}")

    env_specific_path = base_dir / f".env.{env}"
    if env_specific_path.exists():
        # override=True 确保后加载的文件中的变量能覆盖之前加载的同名变量
        load_dotenv(dotenv_path=env_specific_path, override=True)
        logger.info(f"Loaded env specific .env file: {env_specific_path}")


def resolve_config_path(env: str) -> Path:
    """
    配置文件查找顺序：
    1. FILEDESK_CONFIG 环境变量指定的路径
    2. 包内的 {env}.yaml
    3. 包内默认的 config.yaml
    """
    explicit = os.getenv("FILEDESK_CONFIG")
    if explicit:
        return Path(explicit)

    env_path = CONFIG_DIR / f"{env}.yaml"
    if env_path.exists():
        return env_path
    return CONFIG_DIR / f"{DEFAULT_ENV}.yaml"


def load_app_config(path: Optional[Path] = None) -> AppConfig:
    """读取、插值并校验一份配置文件。不做缓存，测试可直接调用。"""
    env = get_env()
    load_environments(Path.cwd(), env)

    config_path = path or resolve_config_path(env)
    logger.info(f"Loading config file: {config_path} (env={env})")

    data = load_yaml(config_path)
    # 环境变量插值会使用刚刚加载完 .env 文件后的最新环境变量
    data = interpolate_env_vars(data)

    config = AppConfig(**data)
    logger.debug(f"Config loaded: {config.server}")
    return config


@lru_cache()
def get_app_config() -> AppConfig:
    return load_app_config()
