"""
종합 감정분석 서비스
텍스트/시세 분석기와 이력 추적기를 묶어 종목, 시장, 섹터 단위 요약을 제공
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from src.analysis.sentiment.market_sentiment import MarketSentimentAnalyzer
from src.analysis.sentiment.models import (
    InvalidQuoteError, MarketTrend, Quote, SentimentLabel,
    SentimentResult, SignalStrength,
)
from src.analysis.sentiment.news_sentiment import summarize_news_frame
from src.analysis.sentiment.sentiment_analyzer import SentimentAnalyzer
from src.analysis.sentiment.tracker import SentimentTracker
from src.utils.calculation_utils import clamp, safe_divide
from src.utils.data_validation import validate_quote

DEFAULT_CHANGE_THRESHOLD = 0.5
DEFAULT_RATIO_THRESHOLD = 0.6
TOP_STOCKS_PER_SECTOR = 3

class AggregateSentimentService:
    """종합 감정분석 서비스 클래스"""

    FALLBACK_CONFIDENCE = 0.6

    def __init__(self, text_analyzer: Optional[SentimentAnalyzer] = None,
                 market_analyzer: Optional[MarketSentimentAnalyzer] = None,
                 tracker: Optional[SentimentTracker] = None,
                 change_threshold: float = DEFAULT_CHANGE_THRESHOLD,
                 ratio_threshold: float = DEFAULT_RATIO_THRESHOLD):
        self.logger = logging.getLogger('AggregateSentiment')
        self.text_analyzer = text_analyzer or SentimentAnalyzer()
        self.market_analyzer = market_analyzer or MarketSentimentAnalyzer()
        self.tracker = tracker if tracker is not None else SentimentTracker()
        self.change_threshold = change_threshold
        self.ratio_threshold = ratio_threshold

    @classmethod
    def from_settings(cls, sentiment_config: Mapping[str, Any]) -> 'AggregateSentimentService':
        """설정 딕셔너리(config.settings.get_sentiment_config)로 생성"""
        return cls(
            text_analyzer=SentimentAnalyzer(keyword_weight=sentiment_config['keyword_weight']),
            market_analyzer=MarketSentimentAnalyzer(weights=sentiment_config['weights']),
            tracker=SentimentTracker(
                max_history_size=sentiment_config['history_size'],
                window_minutes=sentiment_config['window_minutes'],
            ),
            change_threshold=sentiment_config['change_threshold'],
            ratio_threshold=sentiment_config['ratio_threshold'],
        )

    # =============================================================================
    # 개별 분석
    # =============================================================================

    def analyze_text(self, text: str) -> SentimentResult:
        """텍스트 감정분석 후 이력에 기록"""
        result = self.text_analyzer.analyze(text)
        self.tracker.add_sentiment(text, result)
        return result

    def analyze_quote(self, quote: Quote, avg_volume: Optional[float] = None,
                      price_history: Optional[Sequence[float]] = None) -> Dict[str, Any]:
        """
        종목 시세 감정분석

        시세 검증에 실패하면 등락률만으로 계산한 기본 감정을 반환하고
        이력에는 기록하지 않는다.
        """
        try:
            validate_quote(quote)
        except InvalidQuoteError as e:
            self.logger.warning(f"시세 감정분석 불가, 기본 감정으로 대체: {e}")
            return self.basic_sentiment(quote.change_percent)

        stock_sentiment = self.market_analyzer.analyze_quote(quote, avg_volume, price_history)
        summary = f"{quote.symbol} {quote.change_percent:+.2f}%"
        text_sentiment = SentimentResult(
            score=0.0, comparative=0.0, label=stock_sentiment.label,
            confidence=stock_sentiment.confidence, magnitude=0.0,
        )
        self.tracker.add_sentiment(summary, text_sentiment,
                                   stock_sentiment=stock_sentiment, symbol=quote.symbol)
        return stock_sentiment.to_dict()

    @classmethod
    def basic_sentiment(cls, change_pct: float) -> Dict[str, Any]:
        """등락률 기반 기본 감정 (상세 분석 불가 시)"""
        if change_pct > 2:
            label = SentimentLabel.POSITIVE
        elif change_pct < -2:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        if change_pct > 1:
            trend = MarketTrend.BULLISH
        elif change_pct < -1:
            trend = MarketTrend.BEARISH
        else:
            trend = MarketTrend.SIDEWAYS

        if abs(change_pct) > 5:
            strength = SignalStrength.STRONG
        elif abs(change_pct) > 2:
            strength = SignalStrength.MODERATE
        else:
            strength = SignalStrength.WEAK

        return {
            'label': label.value,
            'score': clamp(5 + change_pct * 0.5, 0.0, 10.0),
            'confidence': cls.FALLBACK_CONFIDENCE,
            'trend': trend.value,
            'strength': strength.value,
        }

    # =============================================================================
    # 시장/섹터 요약
    # =============================================================================

    def classify_movement(self, avg_change: float, positive_ratio: float,
                          negative_ratio: float) -> Tuple[SentimentLabel, float, float]:
        """평균 등락률과 상승/하락 비율로 집단 감정 판정"""
        if avg_change > self.change_threshold and positive_ratio > self.ratio_threshold:
            label = SentimentLabel.POSITIVE
            score = 7.5 + avg_change * 0.5
            confidence = 0.8 + positive_ratio * 0.2
        elif avg_change < -self.change_threshold and negative_ratio > self.ratio_threshold:
            label = SentimentLabel.NEGATIVE
            score = 2.5 - abs(avg_change) * 0.5
            confidence = 0.8 + negative_ratio * 0.2
        else:
            label = SentimentLabel.NEUTRAL
            score = 5.0 + avg_change * 0.3
            confidence = 0.6 + abs(avg_change) * 0.2

        return label, clamp(score, 0.0, 10.0), clamp(confidence, 0.1, 1.0)

    def summarize_market(self, quotes: Iterable[Quote]) -> Dict[str, Any]:
        """시장 전체 감정 요약"""
        df = self._quotes_to_frame(quotes)
        total = len(df)

        gainers = int((df['change_percent'] > 0).sum()) if total else 0
        losers = int((df['change_percent'] < 0).sum()) if total else 0
        positive_ratio = safe_divide(gainers, total)
        negative_ratio = safe_divide(losers, total)
        avg_change = float(df['change_percent'].mean()) if total else 0.0

        label, score, confidence = self.classify_movement(avg_change, positive_ratio, negative_ratio)
        self.logger.info(
            f"시장 감정 요약: {total}종목, 평균 {avg_change:+.2f}%, {label.value}"
        )

        return {
            'totalStocks': total,
            'gainers': gainers,
            'losers': losers,
            'unchanged': total - gainers - losers,
            'positiveRatio': positive_ratio,
            'negativeRatio': negative_ratio,
            'avgChange': avg_change,
            'totalVolume': float(df['volume'].sum()) if total else 0.0,
            'marketSentiment': {
                'label': label.value,
                'score': score,
                'confidence': confidence,
            },
        }

    def summarize_sectors(self, quotes: Iterable[Quote]) -> List[Dict[str, Any]]:
        """섹터별 감정 요약 (가중치 합 내림차순)"""
        df = self._quotes_to_frame(quotes)
        if df.empty:
            return []

        df = df[df['sector'].notna() & (df['sector'] != '')]
        sectors = []

        for sector, group in df.groupby('sector', sort=False):
            count = len(group)
            gainers = int((group['change_percent'] > 0).sum())
            losers = int((group['change_percent'] < 0).sum())
            avg_change = float(group['change_percent'].mean())

            label, score, confidence = self.classify_movement(
                avg_change, gainers / count, losers / count
            )

            top = group.assign(abs_change=group['change_percent'].abs()) \
                       .nlargest(TOP_STOCKS_PER_SECTOR, 'abs_change')

            sectors.append({
                'sector': sector,
                'stockCount': count,
                'totalWeightage': float(group['weightage'].sum()),
                'avgChange': avg_change,
                'avgPrice': float(group['price'].mean()),
                'totalVolume': float(group['volume'].sum()),
                'gainers': gainers,
                'losers': losers,
                'neutral': count - gainers - losers,
                'sentiment': {
                    'label': label.value,
                    'score': score,
                    'confidence': confidence,
                },
                'topStocks': [
                    {
                        'symbol': row['symbol'],
                        'name': row['name'],
                        'price': float(row['price']),
                        'changePercent': float(row['change_percent']),
                    }
                    for _, row in top.iterrows()
                ],
            })

        sectors.sort(key=lambda s: s['totalWeightage'], reverse=True)
        self.logger.info(f"섹터 감정 요약: {len(sectors)}개 섹터")
        return sectors

    @staticmethod
    def summarize_news(results: Iterable[SentimentResult]) -> Dict[str, Any]:
        """텍스트 감정분석 결과 목록 요약"""
        df = pd.DataFrame(
            [{'score': r.score, 'label': r.label.value, 'confidence': r.confidence} for r in results],
            columns=['score', 'label', 'confidence'],
        )
        return summarize_news_frame(df)

    @staticmethod
    def _quotes_to_frame(quotes: Iterable[Quote]) -> pd.DataFrame:
        columns = ['symbol', 'name', 'sector', 'weightage', 'price', 'volume', 'change_percent']
        rows = [{
            'symbol': q.symbol,
            'name': q.name,
            'sector': q.sector,
            'weightage': q.weightage or 0.0,
            'price': q.price,
            'volume': q.volume,
            'change_percent': q.change_percent,
        } for q in quotes]
        return pd.DataFrame(rows, columns=columns)
