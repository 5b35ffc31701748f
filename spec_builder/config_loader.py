# Path: spec_builder/config_loader.py
"""
Configuration Loader for spec_builder

Loads configuration from .env file for the specification builder.
Singleton pattern ensures consistent configuration across all components.

NO hardcoded thresholds in engine code.
Matching thresholds, ordering and storage all come from environment
variables, falling back to the defaults below.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from spec_builder.constants import DEFAULT_SPEC_RULE


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Storage Defaults
DEFAULT_STORAGE_BACKEND: str = 'memory'

# Matching Defaults
DEFAULT_CONFIDENCE_THRESHOLD: float = 0.9
DEFAULT_FUZZY_FLOOR: float = 0.4
DEFAULT_SUBSTRING_SCORE: float = 0.8
DEFAULT_MAX_CANDIDATES: int = 3

# Specification Row Defaults
DEFAULT_ORDER_START: int = 10
DEFAULT_ORDER_STEP: int = 10

# Record Store Defaults
DEFAULT_AUDIT_LOG_LIMIT: int = 1000
DEFAULT_SEARCH_LIMIT: int = 20
DEFAULT_BROWSE_LIMIT: int = 50


class ConfigLoader:
    """
    Singleton configuration loader for spec_builder.

    Loads configuration from environment variables with type conversion
    and sensible defaults.

    Example:
        config = ConfigLoader()
        threshold = config.get('confidence_threshold')  # Returns float
        log_dir = config.get('log_dir')  # Returns Path or None
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # spec_builder/config_loader.py -> .env is in same directory
        current_file = Path(__file__).resolve()
        env_path = current_file.parent / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('SPEC_BUILDER_ENVIRONMENT', 'development'),
            'debug': self._get_bool('SPEC_BUILDER_DEBUG', False),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('SPEC_BUILDER_LOG_DIR'),
            'log_level': self._get_env('SPEC_BUILDER_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('SPEC_BUILDER_LOG_CONSOLE', True),

            # ================================================================
            # MATCHING CONFIGURATION
            # ================================================================
            'confidence_threshold': self._get_float(
                'SPEC_BUILDER_CONFIDENCE_THRESHOLD', DEFAULT_CONFIDENCE_THRESHOLD
            ),
            'fuzzy_floor': self._get_float(
                'SPEC_BUILDER_FUZZY_FLOOR', DEFAULT_FUZZY_FLOOR
            ),
            'substring_score': self._get_float(
                'SPEC_BUILDER_SUBSTRING_SCORE', DEFAULT_SUBSTRING_SCORE
            ),
            'max_candidates': self._get_int(
                'SPEC_BUILDER_MAX_CANDIDATES', DEFAULT_MAX_CANDIDATES
            ),

            # ================================================================
            # SPECIFICATION ROWS
            # ================================================================
            'order_start': self._get_int('SPEC_BUILDER_ORDER_START', DEFAULT_ORDER_START),
            'order_step': self._get_int('SPEC_BUILDER_ORDER_STEP', DEFAULT_ORDER_STEP),
            'default_rule': self._get_env('SPEC_BUILDER_DEFAULT_RULE', DEFAULT_SPEC_RULE),

            # ================================================================
            # RECORD STORES
            # ================================================================
            'audit_log_limit': self._get_int(
                'SPEC_BUILDER_AUDIT_LOG_LIMIT', DEFAULT_AUDIT_LOG_LIMIT
            ),
            'search_limit': self._get_int('SPEC_BUILDER_SEARCH_LIMIT', DEFAULT_SEARCH_LIMIT),
            'browse_limit': self._get_int('SPEC_BUILDER_BROWSE_LIMIT', DEFAULT_BROWSE_LIMIT),

            # ================================================================
            # STORAGE / DATABASE CONFIGURATION
            # ================================================================
            'storage_backend': self._get_env(
                'SPEC_BUILDER_STORAGE_BACKEND', DEFAULT_STORAGE_BACKEND
            ).strip().lower(),
            # Full URL wins over the individual PostgreSQL settings
            'db_url': self._get_env('SPEC_BUILDER_DB_URL', ''),
            'db_host': self._get_env('SPEC_BUILDER_DB_HOST', 'localhost'),
            'db_port': self._get_int('SPEC_BUILDER_DB_PORT', 5432),
            'db_name': self._get_env('SPEC_BUILDER_DB_NAME', 'spec_builder_db'),
            'db_user': self._get_env('SPEC_BUILDER_DB_USER', ''),
            'db_password': self._get_env('SPEC_BUILDER_DB_PASSWORD', ''),
            'db_pool_size': self._get_int('SPEC_BUILDER_DB_POOL_SIZE', 5),
            'db_pool_max_overflow': self._get_int('SPEC_BUILDER_DB_POOL_MAX_OVERFLOW', 10),
            'db_pool_timeout': self._get_int('SPEC_BUILDER_DB_POOL_TIMEOUT', 30),
            'db_pool_recycle': self._get_int('SPEC_BUILDER_DB_POOL_RECYCLE', 3600),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if not value:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_db_connection_string(self) -> str:
        """
        Build database connection string.

        Returns:
            SPEC_BUILDER_DB_URL if set, otherwise a PostgreSQL URL
        """
        if self._config['db_url']:
            return self._config['db_url']

        return (
            f"postgresql://{self._config['db_user']}:"
            f"{self._config['db_password']}@"
            f"{self._config['db_host']}:"
            f"{self._config['db_port']}/"
            f"{self._config['db_name']}"
        )

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"storage_backend={self._config.get('storage_backend')})"
        )


__all__ = ['ConfigLoader']
