"""
설정 패키지
환경변수 기반 설정과 로깅 구성을 한곳에서 import할 수 있도록 합니다.

사용법:
    from config import settings, get_sentiment_config, setup_logging
"""

from .settings import (
    Settings,
    settings,
    get_sentiment_config,
    get_logging_config,
    validate_all_configs,
)
from .logging_config import (
    LoggingConfig,
    setup_logging,
    get_logger,
)

__all__ = [
    'Settings', 'settings', 'get_sentiment_config', 'get_logging_config',
    'validate_all_configs', 'LoggingConfig', 'setup_logging', 'get_logger',
]
