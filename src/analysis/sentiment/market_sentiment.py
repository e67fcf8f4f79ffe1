"""
시세 기반 종목 감정분석 엔진

가격 등락, 거래량, 일중 변동성, 단기 모멘텀 4개 하위 점수(0~10)를
가중 합산하여 종합 감정점수, 신뢰도, 추세, 강도를 산출한다.

가중치 (기본값):
- 가격 등락: 40%
- 거래량: 20%
- 변동성: 15%
- 모멘텀: 25%

전제조건: previous_close != 0 (호출자가 검증, src.utils.validate_quote)
"""

import logging
from typing import Dict, Optional, Sequence

from src.analysis.sentiment.models import (
    MarketTrend, Quote, SignalStrength, StockSentimentData,
)
from src.analysis.technical.momentum_indicators import MomentumIndicators
from src.utils.calculation_utils import clamp, variance, weighted_sum

DEFAULT_WEIGHTS = {
    'price': 0.40,
    'volume': 0.20,
    'volatility': 0.15,
    'momentum': 0.25,
}

SCORE_MIN = 0.0
SCORE_MAX = 10.0

class MarketSentimentAnalyzer:
    """시세 기반 감정분석 클래스"""

    NEUTRAL_VOLUME_SENTIMENT = 5.0
    BULLISH_THRESHOLD = 6.5
    BEARISH_THRESHOLD = 3.5
    MOMENTUM_WINDOW = 5

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        self.logger = logging.getLogger('MarketSentiment')
        self.weights = dict(DEFAULT_WEIGHTS)
        if weights:
            self.weights.update(weights)

    def analyze_stock(self, price: float, previous_close: float, day_high: float,
                      day_low: float, volume: float, avg_volume: Optional[float] = None,
                      price_history: Optional[Sequence[float]] = None) -> StockSentimentData:
        """종목 감정분석 실행"""
        change_pct = MomentumIndicators.change_percent(price, previous_close)
        day_range = MomentumIndicators.day_range_percent(day_high, day_low, previous_close)

        price_score = self._bound(self.price_sentiment(change_pct))
        volume_score = self._bound(self.volume_sentiment(volume, avg_volume, change_pct))
        volatility_score = self._bound(self.volatility_sentiment(day_range))
        momentum_score = self._bound(self.momentum_sentiment(price_history, price_score))

        signals = [price_score, volume_score, volatility_score, momentum_score]
        overall = self._bound(weighted_sum(signals, [
            self.weights['price'],
            self.weights['volume'],
            self.weights['volatility'],
            self.weights['momentum'],
        ]))

        result = StockSentimentData(
            price_sentiment=price_score,
            volume_sentiment=volume_score,
            volatility_sentiment=volatility_score,
            momentum_sentiment=momentum_score,
            overall_sentiment=overall,
            confidence=self.signal_confidence(signals),
            trend=self.classify_trend(overall),
            strength=self.classify_strength(change_pct, volume, avg_volume),
        )

        self.logger.debug(
            f"시세 감정분석: change={change_pct:.2f}%, overall={overall:.2f}, "
            f"trend={result.trend.value}, strength={result.strength.value}"
        )
        return result

    def analyze_quote(self, quote: Quote, avg_volume: Optional[float] = None,
                      price_history: Optional[Sequence[float]] = None) -> StockSentimentData:
        """Quote 객체로 감정분석"""
        return self.analyze_stock(
            quote.price, quote.previous_close, quote.day_high, quote.day_low,
            quote.volume, avg_volume, price_history,
        )

    # =============================================================================
    # 하위 점수
    # =============================================================================

    @staticmethod
    def price_sentiment(change_pct: float) -> float:
        """가격 등락률 점수 (구간별 선형, 비감소)"""
        if change_pct > 5:
            return 9.0 + (change_pct - 5) * 0.1
        elif change_pct > 2:
            return 7.0 + (change_pct - 2) * 0.5
        elif change_pct > 0:
            return 5.5 + change_pct * 0.5
        elif change_pct > -2:
            return 4.5 + (change_pct + 2) * 0.5
        elif change_pct > -5:
            return 3.0 + (change_pct + 2) * 0.5
        else:
            return 1.0 + (change_pct + 5) * 0.1

    def volume_sentiment(self, volume: float, avg_volume: Optional[float],
                         change_pct: float) -> float:
        """거래량 점수 - 평균 거래량 대비 배수가 가격 방향을 확인"""
        if not avg_volume:
            return self.NEUTRAL_VOLUME_SENTIMENT

        ratio = volume / avg_volume
        if ratio > 2:
            return 8.0 if change_pct > 0 else 2.0
        elif ratio > 1.5:
            return 7.0 if change_pct > 0 else 3.0
        elif ratio > 1:
            return 5.0
        else:
            return 4.0

    @staticmethod
    def volatility_sentiment(day_range_pct: float) -> float:
        """변동성 점수 - 일중 변동폭이 클수록 낮음"""
        if day_range_pct > 10:
            return 3.0
        elif day_range_pct > 5:
            return 4.0
        else:
            return 6.0

    def momentum_sentiment(self, price_history: Optional[Sequence[float]],
                           fallback: float) -> float:
        """단기 모멘텀 점수 - 이력이 부족하면 가격 점수로 대체"""
        momentum = MomentumIndicators.price_momentum(price_history, self.MOMENTUM_WINDOW)
        if momentum is None:
            return fallback

        if momentum > 3:
            return 8.0 + momentum * 0.2
        elif momentum > 1:
            return 6.5 + momentum * 0.5
        elif momentum > -1:
            return 4.5 + momentum * 1.0
        elif momentum > -3:
            return 2.5 + (momentum + 1) * 1.0
        else:
            return 1.0 + (momentum + 3) * 0.2

    # =============================================================================
    # 분류
    # =============================================================================

    @classmethod
    def classify_trend(cls, overall: float) -> MarketTrend:
        if overall > cls.BULLISH_THRESHOLD:
            return MarketTrend.BULLISH
        if overall < cls.BEARISH_THRESHOLD:
            return MarketTrend.BEARISH
        return MarketTrend.SIDEWAYS

    @staticmethod
    def classify_strength(change_pct: float, volume: float,
                          avg_volume: Optional[float]) -> SignalStrength:
        ratio = volume / avg_volume if avg_volume else None

        if abs(change_pct) > 5 or (ratio is not None and ratio > 2):
            return SignalStrength.STRONG
        if abs(change_pct) > 2 or (ratio is not None and ratio > 1.5):
            return SignalStrength.MODERATE
        return SignalStrength.WEAK

    @staticmethod
    def signal_confidence(signals: Sequence[float]) -> float:
        """하위 점수 간 일치도 기반 신뢰도 (분산이 작을수록 높음)"""
        spread = variance(signals)
        return clamp(1 - spread / 25, 0.3, 1.0)

    @staticmethod
    def _bound(score: float) -> float:
        return clamp(score, SCORE_MIN, SCORE_MAX)
