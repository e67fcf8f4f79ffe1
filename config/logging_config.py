"""
로깅 설정 파일
감정점수 엔진의 로거별 핸들러 구성 (setup_logging 호출 시점에 적용)
"""

import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import get_logging_config

class LoggingConfig:
    """로깅 설정 관리 클래스"""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 log_dir: Optional[Path] = None):
        self.config = dict(config or get_logging_config())
        self.config.setdefault('encoding', 'utf-8')
        self.log_dir = Path(log_dir) if log_dir else Path(self.config['file']).parent

        # 로거별 설정
        analysis_handlers = ['console', 'file', 'analysis_file', 'error_file']
        self.logger_configs = {
            'SentimentAnalysis': {'handlers': analysis_handlers},
            'MarketSentiment': {'handlers': analysis_handlers},
            'SentimentTracker': {'handlers': analysis_handlers},
            'AggregateSentiment': {'handlers': analysis_handlers},
            'DataCollector': {'handlers': ['console', 'file', 'error_file']},
        }

        # 핸들러 설정
        self.handlers = {
            'console': {
                'class': logging.StreamHandler,
                'kwargs': {'stream': sys.stdout},
                'level': logging.INFO,
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
            'file': self._rotating(Path(self.config['file']).name, logging.DEBUG),
            'analysis_file': self._rotating('analysis.log', logging.DEBUG),
            'error_file': self._rotating('errors.log', logging.ERROR),
        }

        self.created_handlers: Dict[str, logging.Handler] = {}

    def _rotating(self, filename: str, level: int) -> Dict[str, Any]:
        return {
            'class': logging.handlers.RotatingFileHandler,
            'kwargs': {
                'filename': str(self.log_dir / filename),
                'maxBytes': self.config['max_bytes'],
                'backupCount': self.config['backup_count'],
                'encoding': self.config['encoding']
            },
            'level': level,
            'format': self.config['format']
        }

    def setup_logging(self) -> Dict[str, logging.Handler]:
        """로깅 설정 적용"""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        level = getattr(logging, self.config['level'], logging.INFO)

        # 핸들러 생성
        for handler_name, handler_config in self.handlers.items():
            handler = handler_config['class'](**handler_config['kwargs'])
            handler.setLevel(handler_config['level'])
            handler.setFormatter(logging.Formatter(
                handler_config['format'],
                datefmt=self.config['date_format']
            ))
            self.created_handlers[handler_name] = handler

        # 로거 설정
        for logger_name, logger_config in self.logger_configs.items():
            logger = logging.getLogger(logger_name)
            logger.setLevel(level)
            logger.propagate = False

            # 기존 핸들러 제거
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()

            for handler_name in logger_config['handlers']:
                logger.addHandler(self.created_handlers[handler_name])

        return self.created_handlers

    def get_log_files(self) -> Dict[str, Path]:
        """로그 파일 목록 반환"""
        return {
            name: Path(config['kwargs']['filename'])
            for name, config in self.handlers.items()
            if 'filename' in config['kwargs']
        }

_logging_config: Optional[LoggingConfig] = None

def setup_logging(config: Optional[Dict[str, Any]] = None,
                  log_dir: Optional[Path] = None) -> LoggingConfig:
    """로깅 시스템 초기화 (여러 번 호출 시 마지막 설정으로 교체)"""
    global _logging_config
    _logging_config = LoggingConfig(config, log_dir)
    _logging_config.setup_logging()
    return _logging_config

def get_logger(name: str) -> logging.Logger:
    """로거 반환 (setup_logging 이전 호출 가능)"""
    return logging.getLogger(name)
