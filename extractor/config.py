"""
配置模块 (Configuration Module)
==============================

从环境变量和 .env 文件加载提取器配置：输出目录、JSON 缩进、键冲突策略、日志级别等。
"""

import logging
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import field_validator
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """
    应用配置类，继承自 Pydantic BaseSettings，支持从环境变量自动加载。

    属性:
        OUTPUT_DIR: 输出目录，每个提取器在其中写入一个 JSON 文件
        JSON_INDENT: 输出 JSON 的缩进空格数，0 表示紧凑输出
        STRICT_KEYS: 为 True 时，输出键冲突视为致命错误；否则后写覆盖并记录警告
        LOG_LEVEL: 日志级别名称
        SNAPSHOT_PATH: 默认的注册表快照文件路径（可被 CLI 参数覆盖）
    """
    OUTPUT_DIR: str = "extractor_output"
    JSON_INDENT: int = 2
    STRICT_KEYS: bool = False
    LOG_LEVEL: str = "INFO"
    SNAPSHOT_PATH: Optional[str] = None

    @field_validator("JSON_INDENT")
    @classmethod
    def validate_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("JSON_INDENT must be >= 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """校验 LOG_LEVEL 为标准 logging 级别名称，统一为大写。"""
        name = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v!r}")
        return name

    class Config:
        env_file = ".env"
        case_sensitive = False


# 全局单例，避免重复加载配置
_settings_instance = None


def get_settings() -> Settings:
    """
    获取配置单例。

    首次调用时创建 Settings 实例并缓存，后续调用返回同一实例。
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
