"""
Sentiment Analysis Module
뉴스 텍스트와 종목 시세를 0~10 감정점수로 변환하는 엔진
"""

from .models import (
    SentimentLabel,
    MarketTrend,
    SignalStrength,
    SentimentDirection,
    Quote,
    SentimentResult,
    StockSentimentData,
    SentimentHistoryEntry,
    InvalidQuoteError,
)
from .sentiment_analyzer import SentimentAnalyzer
from .market_sentiment import MarketSentimentAnalyzer
from .tracker import SentimentTracker
from .aggregate import AggregateSentimentService
from .news_sentiment import NewsSentimentAnalyzer

__all__ = [
    'SentimentLabel', 'MarketTrend', 'SignalStrength', 'SentimentDirection',
    'Quote', 'SentimentResult', 'StockSentimentData', 'SentimentHistoryEntry',
    'InvalidQuoteError',
    'SentimentAnalyzer', 'MarketSentimentAnalyzer', 'SentimentTracker',
    'AggregateSentimentService', 'NewsSentimentAnalyzer',
]
