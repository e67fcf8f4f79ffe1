"""
메인 설정 파일
감정점수 엔진 전반적인 설정 관리
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any

# 환경변수 로드
load_dotenv()

# 프로젝트 루트 디렉토리
PROJECT_ROOT = Path(__file__).parent.parent

def _parse_size(value: str) -> int:
    """'10MB' 형태의 크기 문자열을 바이트로 변환"""
    value = value.strip().upper()
    units = {'KB': 1024, 'MB': 1024 ** 2, 'GB': 1024 ** 3}
    for unit, factor in units.items():
        if value.endswith(unit):
            return int(float(value[:-len(unit)]) * factor)
    return int(value)

class Settings:
    """프로젝트 설정 클래스"""

    def __init__(self):
        # 기본 경로 설정 (디렉토리는 로깅 설정 시점에 생성)
        self.PROJECT_ROOT = PROJECT_ROOT
        self.LOGS_DIR = PROJECT_ROOT / 'logs'

        # 로깅 설정
        self.logging_config = self._load_logging_config()

        # 감정분석 설정
        self.sentiment_config = self._load_sentiment_config()

    def _load_logging_config(self) -> Dict[str, Any]:
        """로깅 설정 로드"""
        return {
            'level': os.getenv('LOG_LEVEL', 'INFO').upper(),
            'file': self.LOGS_DIR / os.getenv('LOG_FILE', 'app.log').replace('logs/', ''),
            'max_bytes': _parse_size(os.getenv('LOG_MAX_SIZE', '10MB')),
            'backup_count': int(os.getenv('LOG_BACKUP_COUNT', '5')),
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'date_format': '%Y-%m-%d %H:%M:%S'
        }

    def _load_sentiment_config(self) -> Dict[str, Any]:
        """감정분석 설정 로드"""
        return {
            # 이력 추적
            'history_size': int(os.getenv('SENTIMENT_HISTORY_SIZE', '1000')),
            'window_minutes': float(os.getenv('SENTIMENT_WINDOW_MINUTES', '60')),

            # 텍스트 분석 금융 키워드 가중치
            'keyword_weight': float(os.getenv('SENTIMENT_KEYWORD_WEIGHT', '1.5')),

            # 시세 감정 하위 점수 비중
            'weights': {
                'price': float(os.getenv('SENTIMENT_WEIGHT_PRICE', '0.40')),
                'volume': float(os.getenv('SENTIMENT_WEIGHT_VOLUME', '0.20')),
                'volatility': float(os.getenv('SENTIMENT_WEIGHT_VOLATILITY', '0.15')),
                'momentum': float(os.getenv('SENTIMENT_WEIGHT_MOMENTUM', '0.25'))
            },

            # 시장/섹터 요약 기준값
            'change_threshold': float(os.getenv('AGGREGATE_CHANGE_THRESHOLD', '0.5')),
            'ratio_threshold': float(os.getenv('AGGREGATE_RATIO_THRESHOLD', '0.6'))
        }

    def validate_config(self) -> list:
        """설정 유효성 검사"""
        errors = []
        config = self.sentiment_config

        # 하위 점수 비중 검증
        total_weight = sum(config['weights'].values())
        if abs(total_weight - 1.0) > 0.01:
            errors.append(f"감정점수 비중의 합이 1.0이 아닙니다. 현재: {total_weight}")

        if config['history_size'] <= 0:
            errors.append("SENTIMENT_HISTORY_SIZE는 0보다 커야 합니다.")

        if config['window_minutes'] <= 0:
            errors.append("SENTIMENT_WINDOW_MINUTES는 0보다 커야 합니다.")

        if not 0 <= config['ratio_threshold'] <= 1:
            errors.append("AGGREGATE_RATIO_THRESHOLD는 0~1 사이여야 합니다.")

        return errors

    def print_config_summary(self):
        """설정 요약 출력"""
        config = self.sentiment_config
        print("=" * 60)
        print("🚀 Market Sentiment Engine 설정 요약")
        print("=" * 60)

        print("📈 감정분석 설정:")
        weights = config['weights']
        print(f"  - 가격 등락: {weights['price']:.1%}")
        print(f"  - 거래량: {weights['volume']:.1%}")
        print(f"  - 변동성: {weights['volatility']:.1%}")
        print(f"  - 모멘텀: {weights['momentum']:.1%}")
        print(f"  - 이력 크기: {config['history_size']}")
        print(f"  - 조회 구간: {config['window_minutes']}분")

        print("\n📝 로깅:")
        print(f"  - 레벨: {self.logging_config['level']}")
        print(f"  - 파일: {self.logging_config['file']}")

        print("=" * 60)

# 글로벌 설정 인스턴스
settings = Settings()

# 편의 함수들
def get_sentiment_config() -> Dict[str, Any]:
    """감정분석 설정 반환"""
    return settings.sentiment_config

def get_logging_config() -> Dict[str, Any]:
    """로깅 설정 반환"""
    return settings.logging_config

def validate_all_configs() -> list:
    """모든 설정 유효성 검사"""
    return settings.validate_config()

# 사용 예시
if __name__ == "__main__":
    settings.print_config_summary()

    errors = validate_all_configs()
    if errors:
        print("\n❌ 설정 오류:")
        for error in errors:
            print(f"  - {error}")
    else:
        print("\n✅ 모든 설정이 올바릅니다.")
