"""
Market Sentiment Engine - 유틸리티 모듈 초기화
감정점수 엔진 전반에서 사용되는 유틸리티 함수들과 클래스들을
통합하여 쉽게 import할 수 있도록 합니다.

사용법:
    from src.utils import clamp, mean, variance
    from src.utils import validate_quote, InvalidQuoteError
    from src.utils import convert_to_python_types
"""

# 버전 정보
__version__ = "1.0.0"

# =============================================================================
# 계산 관련 유틸리티
# =============================================================================
from .calculation_utils import (
    CalculationError,
    ScoreCalculator,
    clamp,
    mean,
    variance,
    weighted_sum,
    safe_divide,
)

# =============================================================================
# 데이터 검증 유틸리티
# =============================================================================
from .data_validation import (
    DataValidationError,
    InvalidQuoteError,
    QuoteValidator,
    PriceFrameValidator,
    DataSanitizer,
    validate_quote,
    validate_price_frame,
    sanitize_numeric,
    require_fields,
    normalize_quote_record,
)

# =============================================================================
# JSON 유틸리티
# =============================================================================
from .json_utils import (
    convert_to_python_types,
    to_json,
    safe_json_dump,
)

__all__ = [
    'CalculationError', 'ScoreCalculator', 'clamp', 'mean', 'variance',
    'weighted_sum', 'safe_divide',
    'DataValidationError', 'InvalidQuoteError', 'QuoteValidator',
    'PriceFrameValidator', 'DataSanitizer', 'validate_quote',
    'validate_price_frame', 'sanitize_numeric', 'require_fields',
    'normalize_quote_record',
    'convert_to_python_types', 'to_json', 'safe_json_dump',
]
