"""
감정분석 데이터 모델
텍스트/시세 감정분석 결과와 이력 항목을 표현하는 불변 값 객체들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from src.utils.data_validation import InvalidQuoteError

class SentimentLabel(Enum):
    """감정 레이블"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

class MarketTrend(Enum):
    """시장 추세"""
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"

class SignalStrength(Enum):
    """신호 강도"""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"

class SentimentDirection(Enum):
    """감정 추이 방향"""
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"

@dataclass(frozen=True)
class Quote:
    """종목 시세 스냅샷"""
    symbol: str
    price: float
    previous_close: float
    day_high: float
    day_low: float
    volume: float
    name: Optional[str] = None
    sector: Optional[str] = None
    weightage: float = 0.0

    @property
    def change(self) -> float:
        return self.price - self.previous_close

    @property
    def change_percent(self) -> float:
        """전일 대비 등락률 (%), 전일종가 0이면 0.0"""
        if self.previous_close == 0:
            return 0.0
        return self.change / self.previous_close * 100

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Quote':
        """camelCase/snake_case 딕셔너리에서 생성"""
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        return cls(
            symbol=str(pick('symbol', default='')),
            price=pick('price'),
            previous_close=pick('previous_close', 'previousClose'),
            day_high=pick('day_high', 'dayHigh'),
            day_low=pick('day_low', 'dayLow'),
            volume=pick('volume', default=0),
            name=pick('name'),
            sector=pick('sector'),
            weightage=pick('weightage', default=0.0),
        )

@dataclass(frozen=True)
class SentimentResult:
    """텍스트 감정분석 결과"""
    score: float
    comparative: float
    label: SentimentLabel
    confidence: float
    magnitude: float
    keywords: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'comparative': self.comparative,
            'label': self.label.value,
            'confidence': self.confidence,
            'magnitude': self.magnitude,
            'keywords': sorted(self.keywords),
        }

@dataclass(frozen=True)
class StockSentimentData:
    """시세 기반 종목 감정분석 결과 (0~10 척도)"""
    price_sentiment: float
    volume_sentiment: float
    volatility_sentiment: float
    momentum_sentiment: float
    overall_sentiment: float
    confidence: float
    trend: MarketTrend
    strength: SignalStrength

    @property
    def label(self) -> SentimentLabel:
        """종합점수 기준 레이블 (>6.5 긍정, <3.5 부정)"""
        if self.overall_sentiment > 6.5:
            return SentimentLabel.POSITIVE
        if self.overall_sentiment < 3.5:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        """API 응답 형태"""
        return {
            'label': self.label.value,
            'score': self.overall_sentiment,
            'confidence': self.confidence,
            'trend': self.trend.value,
            'strength': self.strength.value,
            'details': {
                'priceSentiment': self.price_sentiment,
                'volumeSentiment': self.volume_sentiment,
                'volatilitySentiment': self.volatility_sentiment,
                'momentumSentiment': self.momentum_sentiment,
            },
        }

@dataclass(frozen=True)
class SentimentHistoryEntry:
    """감정분석 이력 항목"""
    timestamp: float
    sentiment: SentimentResult
    text: str
    stock_sentiment: Optional[StockSentimentData] = None
    symbol: Optional[str] = None

__all__ = [
    'SentimentLabel', 'MarketTrend', 'SignalStrength', 'SentimentDirection',
    'Quote', 'SentimentResult', 'StockSentimentData', 'SentimentHistoryEntry',
    'InvalidQuoteError',
]
