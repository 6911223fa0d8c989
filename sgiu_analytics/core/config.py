"""
Settings and environment management module for the SGIU analytics backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Defaults matching the dashboard's historical training behaviour
- Singleton pattern via @lru_cache for efficient access

Environment Variables (all prefixed with SGIU_):
- SGIU_TRAINING_ITERATIONS: Gradient descent iterations (default: 2000)
- SGIU_LEARNING_RATE: Gradient descent step size (default: 0.1)
- SGIU_L2_PENALTY: L2 regularization coefficient (default: 0.001)
- SGIU_MIN_TRAINING_ROWS: Rows required before a model is trained (default: 8)
- SGIU_LOGIT_CLIP: Absolute logit bound applied before exponentiation (default: 35.0)
- SGIU_CORS_ORIGINS: Dashboard origins allowed to call the API
- SGIU_LOG_LEVEL: Root logging level (default: INFO)

Usage:
    from sgiu_analytics.core.config import get_settings

    settings = get_settings()
    iterations = settings.training_iterations
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The training values here only seed the default TrainingConfig; any
    request may still override them individually.

    Attributes:
        training_iterations: Number of full-batch gradient descent iterations.
        learning_rate: Step size applied to each gradient update.
        l2_penalty: L2 coefficient added to the averaged data gradient.
        min_training_rows: Minimum labeled rows before training is attempted.
        logit_clip: Logits are clamped to [-logit_clip, logit_clip].
        cors_origins: Origins allowed by the CORS middleware.
        log_level: Logging level name for the root logger.
    """

    model_config = SettingsConfigDict(
        env_prefix='SGIU_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Logistic Training Defaults
    # =========================================================================

    training_iterations: int = Field(default=2000, ge=1)

    learning_rate: float = Field(default=0.1, gt=0)

    l2_penalty: float = Field(default=0.001, ge=0)

    # Usability guard for the dashboard, not a statistical requirement
    min_training_rows: int = Field(default=8, ge=1)

    # exp(35) is ~1.6e15, far from float64 overflow
    logit_clip: float = Field(default=35.0, gt=0)

    # =========================================================================
    # HTTP / Runtime
    # =========================================================================

    cors_origins: List[str] = [
        'http://localhost:5173',  # Vite dev server (admin dashboard)
        'http://127.0.0.1:5173',
    ]

    log_level: str = 'INFO'


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Raises:
        pydantic.ValidationError: If an environment variable has an invalid
            value (e.g., SGIU_LEARNING_RATE=-1).

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
