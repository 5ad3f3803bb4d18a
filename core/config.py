"""
配置管理系统

支持:
1. 环境变量读取
2. .env 文件
3. 类型验证
4. 敏感信息脱敏
"""
from functools import lru_cache
from typing import Optional, List
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenAISettings(BaseSettings):
    """生成式 AI 服务配置"""
    model_config = SettingsConfigDict(
        env_prefix="GENAI_",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GENAI_API_KEY", "API_KEY"),
        description="Gemini API 密钥",
    )
    model: str = Field(default="gemini-2.5-flash", description="模型名称")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="REST API 根地址",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="采样温度")
    timeout: float = Field(default=120.0, ge=1.0, description="请求超时（秒）")
    max_retries: int = Field(default=2, ge=0, le=10, description="连接重试次数")

    @property
    def is_configured(self) -> bool:
        """是否已配置密钥"""
        return bool(self.api_key)


class ViewerSettings(BaseSettings):
    """结构预览配置"""
    model_config = SettingsConfigDict(
        env_prefix="VIEWER_",
        extra="ignore"
    )

    render_cache_size: int = Field(default=256, ge=0, le=10000, description="渲染结果缓存条目数")
    max_atoms: int = Field(default=2000, ge=1, le=100000, description="解析与渲染允许的最大原子数")


class LoggingSettings(BaseSettings):
    """日志配置"""
    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        extra="ignore"
    )

    level: str = Field(default="INFO", description="日志级别")
    format: str = Field(default="json", description="日志格式: json, console")
    file_path: Optional[str] = Field(default=None, description="日志文件路径")
    max_size_mb: int = Field(default=100, ge=1, le=1000, description="日志文件最大大小 (MB)")
    backup_count: int = Field(default=7, ge=1, le=30, description="保留日志文件数")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"日志级别必须是 {allowed} 之一")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"日志格式必须是 {allowed} 之一")
        return v


class Settings(BaseSettings):
    """
    主配置类

    层级:
    1. 环境变量 (最高优先级)
    2. .env 文件
    3. 默认值 (最低优先级)

    使用示例:
    >>> settings = Settings()
    >>> print(settings.genai.model)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 应用基础配置
    app_name: str = Field(default="MatForge", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    debug: bool = Field(default=False, description="调试模式")
    environment: str = Field(default="development", description="运行环境: development, staging, production")

    # API 配置
    api_host: str = Field(default="0.0.0.0", description="API 监听地址")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API 监听端口")
    api_prefix: str = Field(default="/api/v1", description="API 路径前缀")
    cors_origins: str = Field(default="*", description="CORS 允许的源，逗号分隔")

    # 子配置
    genai: GenAISettings = Field(default_factory=GenAISettings)
    viewer: ViewerSettings = Field(default_factory=ViewerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"环境必须是 {allowed} 之一")
        return v

    @property
    def cors_origin_list(self) -> List[str]:
        """解析 CORS 源列表"""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def display_config(self) -> dict:
        """返回脱敏后的配置（用于日志/调试）"""
        return {
            "app_name": self.app_name,
            "app_version": self.app_version,
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "genai_model": self.genai.model,
            "genai_configured": self.genai.is_configured,
            "render_cache_size": self.viewer.render_cache_size,
            "max_atoms": self.viewer.max_atoms,
        }


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例（缓存）"""
    return Settings()
