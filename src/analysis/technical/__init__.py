"""
Technical Analysis Module
감정점수 엔진이 사용하는 가격 기반 지표 패키지
"""

from .momentum_indicators import MomentumIndicators

__all__ = [
    'MomentumIndicators',
]
