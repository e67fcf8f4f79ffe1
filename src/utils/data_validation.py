"""
데이터 검증 유틸리티
시세(Quote) 입력값과 가격 데이터프레임의 유효성을 검증하는 함수들
"""

import math
import pandas as pd
import numpy as np
from typing import Any, Dict, Mapping, Optional, Sequence, Union
import logging

logger = logging.getLogger(__name__)

class DataValidationError(ValueError):
    """데이터 검증 오류"""
    pass

class InvalidQuoteError(DataValidationError):
    """감정분석에 사용할 수 없는 시세 데이터 (전일종가 0 등)"""
    pass

class QuoteValidator:
    """시세 데이터 검증 클래스"""

    REQUIRED_FIELDS = ('price', 'previous_close', 'day_high', 'day_low', 'volume')

    @staticmethod
    def validate_quote(quote: Any) -> None:
        """
        시세 검증 - 분석기 호출 전 호출자가 수행

        전일종가가 0이면 등락률을 계산할 수 없으므로 InvalidQuoteError.
        고가/저가 범위를 벗어난 현재가는 경고만 남긴다.
        """
        symbol = getattr(quote, 'symbol', '?')

        for field_name in QuoteValidator.REQUIRED_FIELDS:
            value = getattr(quote, field_name, None)
            if value is None:
                raise InvalidQuoteError(f"{symbol}: 필수 항목 누락 ({field_name})")
            if not isinstance(value, (int, float, np.integer, np.floating)) or isinstance(value, bool):
                raise InvalidQuoteError(f"{symbol}: 숫자 타입이 아닌 값 ({field_name}={value!r})")
            if math.isnan(value) or math.isinf(value):
                raise InvalidQuoteError(f"{symbol}: 유한하지 않은 값 ({field_name}={value})")

        if quote.previous_close == 0:
            raise InvalidQuoteError(f"{symbol}: 전일종가가 0입니다.")

        if not (quote.day_low <= quote.price <= quote.day_high):
            logger.warning(
                f"{symbol}: 현재가가 일중 범위를 벗어남 "
                f"(low={quote.day_low}, price={quote.price}, high={quote.day_high})"
            )

    # 레코드 키 별칭 (snake_case 우선)
    RECORD_FIELDS = {
        'price': ('price',),
        'previous_close': ('previous_close', 'previousClose'),
        'day_high': ('day_high', 'dayHigh'),
        'day_low': ('day_low', 'dayLow'),
    }
    OPTIONAL_RECORD_FIELDS = ('volume', 'weightage')

    @staticmethod
    def normalize_quote_record(record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        시세 레코드(JSON 딕셔너리) 정규화

        camelCase/snake_case 키를 모두 허용하고 숫자 항목을 float로 변환한다.
        누락되거나 숫자로 변환할 수 없는 값은 DataValidationError.
        """
        if not isinstance(record, Mapping):
            raise DataValidationError(f"시세 레코드는 딕셔너리여야 합니다: {record!r}")

        require_fields(record, ['symbol', *QuoteValidator.RECORD_FIELDS.values()])
        symbol = record['symbol']
        normalized = dict(record)

        for name, aliases in QuoteValidator.RECORD_FIELDS.items():
            raw = next(record[a] for a in aliases if record.get(a) is not None)
            value = DataSanitizer.sanitize_numeric_value(raw)
            if value is None:
                raise DataValidationError(f"{symbol}: 숫자가 아닌 값 ({name}={raw!r})")
            normalized[name] = value

        for name in QuoteValidator.OPTIONAL_RECORD_FIELDS:
            raw = record.get(name)
            if raw is None:
                continue
            value = DataSanitizer.sanitize_numeric_value(raw)
            if value is None:
                raise DataValidationError(f"{symbol}: 숫자가 아닌 값 ({name}={raw!r})")
            normalized[name] = value

        return normalized

class PriceFrameValidator:
    """주가 데이터프레임 검증 클래스"""

    REQUIRED_COLUMNS = ('high', 'low', 'close', 'volume')

    @staticmethod
    def find_column(df: pd.DataFrame, name: str) -> Optional[str]:
        """대소문자를 무시하고 컬럼명 찾기"""
        for col in df.columns:
            if str(col).lower() == name:
                return col
        return None

    @staticmethod
    def validate_price_dataframe(df: pd.DataFrame) -> bool:
        """주가 데이터프레임 검증 (필수 컬럼, 숫자 타입)"""
        if not isinstance(df, pd.DataFrame):
            return False

        for name in PriceFrameValidator.REQUIRED_COLUMNS:
            col = PriceFrameValidator.find_column(df, name)
            if col is None:
                logger.warning(f"필수 컬럼 누락: {name}")
                return False
            if not pd.api.types.is_numeric_dtype(df[col]):
                logger.warning(f"숫자 타입이 아닌 컬럼: {name}")
                return False

        return True

class DataSanitizer:
    """데이터 정제 클래스"""

    @staticmethod
    def sanitize_numeric_value(value: Any) -> Optional[float]:
        """숫자 값 정제 (NaN/inf/변환 불가 값은 None)"""
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, (int, float, np.integer, np.floating)):
            if np.isnan(value) or np.isinf(value):
                return None
            return float(value)

        if isinstance(value, str):
            cleaned = value.replace(',', '').strip()
            try:
                return float(cleaned)
            except ValueError:
                return None

        return None

# 편의 함수들
def validate_quote(quote: Any) -> None:
    """시세 검증"""
    QuoteValidator.validate_quote(quote)

def validate_price_frame(df: pd.DataFrame) -> bool:
    """주가 데이터프레임 검증"""
    return PriceFrameValidator.validate_price_dataframe(df)

def sanitize_numeric(value: Any) -> Optional[float]:
    """숫자 값 정제"""
    return DataSanitizer.sanitize_numeric_value(value)

def require_fields(record: Mapping[str, Any], fields: Sequence[Union[str, Sequence[str]]]) -> None:
    """딕셔너리 레코드의 필수 키 확인 (튜플은 별칭 목록, None 값은 누락으로 간주)"""
    missing = []
    for field in fields:
        aliases = (field,) if isinstance(field, str) else tuple(field)
        if all(record.get(alias) is None for alias in aliases):
            missing.append(aliases[0])
    if missing:
        raise DataValidationError(f"필수 항목 누락: {', '.join(missing)}")

def normalize_quote_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """시세 레코드 정규화"""
    return QuoteValidator.normalize_quote_record(record)
