"""
Centralized configuration management for the gpd plugin host.
Loads environment variables and provides default configurations.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings:
    """Host settings and configuration."""

    # Host wiring
    HOST_VARIANT: str = os.getenv("GPD_HOST_VARIANT", "types")  # 'command', 'types' or 'register'
    MODULE_NAME: str = os.getenv("GPD_MODULE_NAME", "mod_go")

    # Configuration injected into Module.init
    CONFIG_VERSION: str = os.getenv("GPD_CONFIG_VERSION", "v1")  # 'v1', 'v2' or 'env'
    ENV_PREFIX: str = os.getenv("GPD_ENV_PREFIX", "GPD_CFG_")
    INIT_TIMEOUT: float = float(os.getenv("GPD_INIT_TIMEOUT", "0"))  # 0 disables the deadline

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")
    LOG_FORMAT: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

    HOST_VARIANTS = ("command", "types", "register")
    CONFIG_VERSIONS = ("v1", "v2", "env")

    @classmethod
    def validate(cls) -> None:
        """Validate that the settings hold supported values."""
        problems = []
        if cls.HOST_VARIANT not in cls.HOST_VARIANTS:
            problems.append(f"GPD_HOST_VARIANT={cls.HOST_VARIANT!r}")
        if cls.CONFIG_VERSION not in cls.CONFIG_VERSIONS:
            problems.append(f"GPD_CONFIG_VERSION={cls.CONFIG_VERSION!r}")
        if not cls.MODULE_NAME:
            problems.append("GPD_MODULE_NAME is empty")
        if cls.INIT_TIMEOUT < 0:
            problems.append(f"GPD_INIT_TIMEOUT={cls.INIT_TIMEOUT!r}")

        if problems:
            raise ValueError(f"Invalid settings: {', '.join(problems)}")

# Global settings instance
settings = Settings()
