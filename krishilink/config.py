"""
Configuration and environment handling for the KrishiLink client.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class ApiConfig(BaseModel):
    """REST API connection settings."""
    base_url: str = Field(
        default_factory=lambda: os.getenv("KRISHILINK_API_URL", "https://krishilink-server-side.vercel.app")
    )
    token: str = Field(default_factory=lambda: os.getenv("KRISHILINK_API_TOKEN", "dev-token"))
    timeout: float = Field(default_factory=lambda: float(os.getenv("KRISHILINK_API_TIMEOUT", "15")))


class ToastConfig(BaseModel):
    """Toast notification timing."""
    default_duration_ms: int = Field(default=4000, gt=0)
    tick_interval_ms: int = Field(default=100, gt=0)
    exit_grace_ms: int = Field(default=300, ge=0, description="Exit animation delay before removal")
    refresh_ticks: int = Field(default=5, gt=0, description="Ticks between toast stack redraws in the UI")

    @property
    def refresh_seconds(self) -> float:
        return self.tick_interval_ms * self.refresh_ticks / 1000


class UIConfig(BaseModel):
    """UI configuration."""
    page_title: str = Field(default="KrishiLink")
    page_icon: str = Field(default="🌾")
    theme_primary_color: str = Field(default="#4CAF50")
    latest_count: int = Field(default=6, description="Crops shown on the home page")
    port: int = Field(default_factory=lambda: int(os.getenv("KRISHILINK_UI_PORT", "8501")))


class Config(BaseModel):
    """Main configuration."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    toast: ToastConfig = Field(default_factory=ToastConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    log_level: str = Field(default_factory=lambda: os.getenv("KRISHILINK_LOG_LEVEL", "INFO"))


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
