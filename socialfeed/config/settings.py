"""
应用全局配置

从 config.yaml 加载配置，支持环境变量覆盖
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
import os


def _as_bool(value: str) -> bool:
    return str(value).lower() in ("true", "1", "yes")


class Settings:
    """应用全局配置（从 config.yaml 加载）"""

    def __init__(self, config_path: Optional[str] = None):
        # 加载 config.yaml（可通过 SOCIALFEED_CONFIG 指定路径）
        path = Path(
            config_path
            or os.getenv("SOCIALFEED_CONFIG", "")
            or Path(__file__).parent.parent.parent / "config.yaml"
        )
        self._config: Dict[str, Any] = {}
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

    def _get(self, section: str, key: str, default: Any = None) -> Any:
        return self._config.get(section, {}).get(key, default)

    # ==================== 应用基础配置 ====================
    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", self._get("app", "name", "SocialFeed API"))

    @property
    def APP_VERSION(self) -> str:
        return os.getenv("APP_VERSION", self._get("app", "version", "1.0.0"))

    @property
    def API_V1_PREFIX(self) -> str:
        return os.getenv("API_V1_PREFIX", self._get("app", "api_prefix", "/api"))

    @property
    def DEBUG(self) -> bool:
        return _as_bool(os.getenv("DEBUG", self._get("app", "debug", False)))

    # ==================== 数据库配置 ====================
    @property
    def DATABASE_ENABLED(self) -> bool:
        return _as_bool(os.getenv("DATABASE_ENABLED", self._get("database", "enabled", True)))

    @property
    def DATABASE_URL(self) -> Optional[str]:
        if not self.DATABASE_ENABLED:
            return None
        return os.getenv("DATABASE_URL", self._get("database", "url"))

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(os.getenv("DATABASE_POOL_SIZE", self._get("database", "pool_size", 10)))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(os.getenv("DATABASE_MAX_OVERFLOW", self._get("database", "max_overflow", 20)))

    # ==================== JWT 认证配置 ====================
    @property
    def JWT_SECRET_KEY(self) -> str:
        return os.getenv("JWT_SECRET_KEY", self._get("jwt", "secret_key", "change-me"))

    @property
    def JWT_ALGORITHM(self) -> str:
        return os.getenv("JWT_ALGORITHM", self._get("jwt", "algorithm", "HS256"))

    @property
    def JWT_EXPIRE_MINUTES(self) -> int:
        return int(os.getenv("JWT_EXPIRE_MINUTES", self._get("jwt", "expire_minutes", 60)))

    # ==================== CORS 配置 ====================
    @property
    def CORS_ORIGINS(self) -> List[str]:
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [origin.strip() for origin in env_origins.split(",")]
        return self._get("cors", "origins", ["*"])

    # ==================== 业务规则配置 ====================
    @property
    def DEFAULT_PAGE_SIZE(self) -> int:
        return int(os.getenv("DEFAULT_PAGE_SIZE", self._get("business", "default_page_size", 20)))

    @property
    def MAX_PAGE_SIZE(self) -> int:
        return int(os.getenv("MAX_PAGE_SIZE", self._get("business", "max_page_size", 100)))

    @property
    def COMMENT_MAX_LENGTH(self) -> int:
        return int(os.getenv("COMMENT_MAX_LENGTH", self._get("business", "comment_max_length", 1000)))

    # ==================== 信息流配置 ====================
    @property
    def FEED_SPLIT_RATIO(self) -> Dict[str, float]:
        """每种内容在一页中所占比例，例如 FEED_SPLIT_RATIO=article:0.6,media:0.4"""
        env_ratio = os.getenv("FEED_SPLIT_RATIO")
        if env_ratio:
            pairs = (item.split(":", 1) for item in env_ratio.split(",") if ":" in item)
            return {kind.strip(): float(ratio) for kind, ratio in pairs}
        ratio = self._get("feed", "split_ratio") or {}
        return {
            "article": float(ratio.get("article", 0.5)),
            "media": float(ratio.get("media", 0.5)),
        }

    @property
    def FEED_PREVIEW_LENGTH(self) -> int:
        return int(os.getenv("FEED_PREVIEW_LENGTH", self._get("feed", "content_preview_length", 200)))

    # ==================== 在线状态配置 ====================
    @property
    def PRESENCE_TTL_SECONDS(self) -> int:
        return int(os.getenv("PRESENCE_TTL_SECONDS", self._get("presence", "ttl_seconds", 300)))

    @property
    def PRESENCE_SWEEP_INTERVAL(self) -> int:
        return int(os.getenv("PRESENCE_SWEEP_INTERVAL", self._get("presence", "sweep_interval", 60)))

    # ==================== 日志配置 ====================
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", self._get("logging", "level", "INFO"))

    @property
    def LOG_FILE(self) -> Optional[str]:
        return os.getenv("LOG_FILE", self._get("logging", "file"))

    @property
    def LOG_ROTATION(self) -> str:
        return os.getenv("LOG_ROTATION", self._get("logging", "rotation", "10 MB"))

    @property
    def LOG_RETENTION(self) -> str:
        return os.getenv("LOG_RETENTION", self._get("logging", "retention", "7 days"))


# 全局配置实例
settings = Settings()
