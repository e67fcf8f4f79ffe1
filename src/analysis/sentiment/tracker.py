"""
감정분석 이력 추적기
최근 분석 결과를 고정 크기 버퍼에 보관하고 구간 평균/추이를 계산
"""

import time
import logging
import threading
from collections import deque
from typing import Callable, List, Optional

from src.analysis.sentiment.market_sentiment import MarketSentimentAnalyzer
from src.analysis.sentiment.models import (
    SentimentDirection, SentimentHistoryEntry, SentimentLabel,
    SentimentResult, StockSentimentData,
)
from src.utils.calculation_utils import mean

DEFAULT_HISTORY_SIZE = 1000
DEFAULT_WINDOW_MINUTES = 60

class SentimentTracker:
    """감정분석 이력 추적 클래스 (서비스가 소유하고 주입)"""

    AGGREGATE_LABEL_THRESHOLD = 0.5
    TREND_BATCH_SIZE = 10
    TREND_THRESHOLD = 0.3
    EMPTY_WINDOW_CONFIDENCE = 0.5

    def __init__(self, max_history_size: int = DEFAULT_HISTORY_SIZE,
                 clock: Callable[[], float] = time.time,
                 window_minutes: float = DEFAULT_WINDOW_MINUTES):
        if max_history_size <= 0:
            raise ValueError(f"이력 크기는 0보다 커야 합니다: {max_history_size}")

        self.logger = logging.getLogger('SentimentTracker')
        self.max_history_size = max_history_size
        self.window_minutes = window_minutes
        self._clock = clock
        self._history = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def add_sentiment(self, text: str, sentiment: SentimentResult,
                      stock_sentiment: Optional[StockSentimentData] = None,
                      symbol: Optional[str] = None) -> SentimentHistoryEntry:
        """이력 추가 (추가와 초과분 제거를 한 번에 수행)"""
        entry = SentimentHistoryEntry(
            timestamp=self._clock(),
            sentiment=sentiment,
            text=text,
            stock_sentiment=stock_sentiment,
            symbol=symbol,
        )

        with self._lock:
            self._history.append(entry)
            evicted = 0
            while len(self._history) > self.max_history_size:
                self._history.popleft()
                evicted += 1

        if evicted:
            self.logger.debug(f"오래된 이력 {evicted}건 제거")
        return entry

    def snapshot(self) -> List[SentimentHistoryEntry]:
        """현재 이력의 복사본 (오래된 순)"""
        with self._lock:
            return list(self._history)

    def clear(self):
        with self._lock:
            self._history.clear()

    def get_recent_sentiment(self, window_minutes: Optional[float] = None) -> SentimentResult:
        """최근 구간 텍스트 감정 평균 (시세 분석 항목 제외)"""
        entries = [e for e in self._entries_in_window(window_minutes) if e.stock_sentiment is None]

        if not entries:
            return SentimentResult(
                score=0.0,
                comparative=0.0,
                label=SentimentLabel.NEUTRAL,
                confidence=self.EMPTY_WINDOW_CONFIDENCE,
                magnitude=0.0,
                keywords=frozenset(),
            )

        avg_score = mean([e.sentiment.score for e in entries])
        avg_confidence = mean([e.sentiment.confidence for e in entries])
        keywords = frozenset().union(*(e.sentiment.keywords for e in entries))

        if avg_score > self.AGGREGATE_LABEL_THRESHOLD:
            label = SentimentLabel.POSITIVE
        elif avg_score < -self.AGGREGATE_LABEL_THRESHOLD:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        return SentimentResult(
            score=avg_score,
            comparative=avg_score / len(entries),
            label=label,
            confidence=avg_confidence,
            magnitude=abs(avg_score),
            keywords=keywords,
        )

    def get_stock_sentiment_trend(self, symbol: str,
                                  window_minutes: Optional[float] = None) -> Optional[StockSentimentData]:
        """
        최근 구간 종목 감정 추이

        종합점수와 신뢰도는 구간 평균, 하위 점수와 강도는 가장 최근 항목 값.
        종목 없이 기록된 항목은 모든 종목 조회에 포함된다.
        """
        wanted = symbol.upper() if symbol else None
        stock_entries = [
            e.stock_sentiment for e in self._entries_in_window(window_minutes)
            if e.stock_sentiment is not None
            and (e.symbol is None or wanted is None or e.symbol.upper() == wanted)
        ]

        if not stock_entries:
            return None

        avg_overall = mean([s.overall_sentiment for s in stock_entries])
        avg_confidence = mean([s.confidence for s in stock_entries])
        latest = stock_entries[-1]

        return StockSentimentData(
            price_sentiment=latest.price_sentiment,
            volume_sentiment=latest.volume_sentiment,
            volatility_sentiment=latest.volatility_sentiment,
            momentum_sentiment=latest.momentum_sentiment,
            overall_sentiment=avg_overall,
            confidence=avg_confidence,
            trend=MarketSentimentAnalyzer.classify_trend(avg_overall),
            strength=latest.strength,
        )

    def get_trending_sentiment(self) -> SentimentDirection:
        """텍스트 항목 중 최근 10건과 그 이전 10건의 평균 점수 비교"""
        entries = [e for e in self.snapshot() if e.stock_sentiment is None]
        batch = self.TREND_BATCH_SIZE

        if len(entries) < batch:
            return SentimentDirection.STABLE

        recent = entries[-batch:]
        older = entries[-2 * batch:-batch]
        if not older:
            return SentimentDirection.STABLE

        difference = (
            mean([e.sentiment.score for e in recent])
            - mean([e.sentiment.score for e in older])
        )

        if difference > self.TREND_THRESHOLD:
            return SentimentDirection.IMPROVING
        if difference < -self.TREND_THRESHOLD:
            return SentimentDirection.DECLINING
        return SentimentDirection.STABLE

    def _entries_in_window(self, window_minutes: Optional[float]) -> List[SentimentHistoryEntry]:
        if window_minutes is None:
            window_minutes = self.window_minutes
        cutoff = self._clock() - window_minutes * 60
        return [e for e in self.snapshot() if e.timestamp > cutoff]
