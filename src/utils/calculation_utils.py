"""
계산 유틸리티
감정점수 산출에 쓰이는 클램핑, 평균, 분산 계산 함수들
"""

import math
import numpy as np
from typing import Iterable, List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)

class CalculationError(Exception):
    """계산 오류"""
    pass

class ScoreCalculator:
    """점수 계산 클래스"""

    @staticmethod
    def clamp(value: float, lower: float, upper: float) -> float:
        """값을 [lower, upper] 구간으로 제한"""
        if lower > upper:
            raise CalculationError(f"하한이 상한보다 큽니다: {lower} > {upper}")
        return max(lower, min(upper, value))

    @staticmethod
    def mean(values: Sequence[float], default: Optional[float] = None) -> float:
        """산술평균 (빈 시퀀스는 default 반환)"""
        if len(values) == 0:
            if default is None:
                raise CalculationError("평균을 계산할 데이터가 없습니다.")
            return default
        return float(np.mean(values))

    @staticmethod
    def variance(values: Sequence[float]) -> float:
        """모분산 (평균 주변 편차 제곱의 평균)"""
        if len(values) == 0:
            raise CalculationError("분산을 계산할 데이터가 없습니다.")
        return float(np.var(values))

    @staticmethod
    def weighted_sum(values: Sequence[float], weights: Sequence[float]) -> float:
        """가중합"""
        if len(values) != len(weights):
            raise CalculationError("값과 가중치의 길이가 같아야 합니다.")
        return float(np.dot(values, weights))

def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """안전한 나눗셈"""
    try:
        if denominator == 0 or math.isnan(denominator) or math.isinf(denominator):
            return default
        result = numerator / denominator
        return result if not (math.isnan(result) or math.isinf(result)) else default
    except (ZeroDivisionError, ValueError, OverflowError):
        return default

# 편의 함수들
def clamp(value: float, lower: float, upper: float) -> float:
    return ScoreCalculator.clamp(value, lower, upper)

def mean(values: Iterable[float], default: Optional[float] = None) -> float:
    return ScoreCalculator.mean(list(values), default)

def variance(values: Iterable[float]) -> float:
    return ScoreCalculator.variance(list(values))

def weighted_sum(values: List[float], weights: List[float]) -> float:
    return ScoreCalculator.weighted_sum(values, weights)
