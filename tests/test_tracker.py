import threading

import pytest

from src.analysis.sentiment.market_sentiment import MarketSentimentAnalyzer
from src.analysis.sentiment.models import (
    MarketTrend, SentimentDirection, SentimentLabel, SentimentResult,
)
from src.analysis.sentiment.tracker import SentimentTracker

def make_result(score, confidence=0.5, keywords=()):
    if score > 1:
        label = SentimentLabel.POSITIVE
    elif score < -1:
        label = SentimentLabel.NEGATIVE
    else:
        label = SentimentLabel.NEUTRAL
    return SentimentResult(score=score, comparative=0.0, label=label,
                           confidence=confidence, magnitude=abs(score),
                           keywords=frozenset(keywords))

def test_rejects_non_positive_size():
    with pytest.raises(ValueError):
        SentimentTracker(max_history_size=0)

def test_eviction_keeps_most_recent(tracker):
    for i in range(1500):
        tracker.add_sentiment(f"text-{i}", make_result(0.0))

    entries = tracker.snapshot()
    assert len(tracker) == 1000
    assert entries[0].text == 'text-500'
    assert entries[-1].text == 'text-1499'

def test_entry_uses_clock(tracker, clock):
    entry = tracker.add_sentiment("hello", make_result(2.0), symbol='AAA')
    assert entry.timestamp == clock.now
    assert entry.symbol == 'AAA'

def test_recent_sentiment_empty_window(tracker):
    result = tracker.get_recent_sentiment()

    assert result.score == 0.0
    assert result.label == SentimentLabel.NEUTRAL
    assert result.confidence == 0.5
    assert result.keywords == frozenset()

def test_recent_sentiment_averages_window(tracker, clock):
    tracker.add_sentiment("old", make_result(-10.0, keywords={'crash'}))
    clock.advance(61)
    tracker.add_sentiment("a", make_result(2.0, 0.4, {'profit'}))
    tracker.add_sentiment("b", make_result(1.0, 0.8, {'growth', 'profit'}))

    result = tracker.get_recent_sentiment(window_minutes=60)

    assert result.score == pytest.approx(1.5)
    assert result.comparative == pytest.approx(0.75)
    assert result.confidence == pytest.approx(0.6)
    assert result.label == SentimentLabel.POSITIVE
    assert result.keywords == frozenset({'profit', 'growth'})

def test_recent_sentiment_neutral_band(tracker):
    tracker.add_sentiment("a", make_result(0.5))
    assert tracker.get_recent_sentiment().label == SentimentLabel.NEUTRAL

    tracker.add_sentiment("b", make_result(-2.0))
    assert tracker.get_recent_sentiment().label == SentimentLabel.NEGATIVE

def _stock(price, previous_close=100):
    return MarketSentimentAnalyzer().analyze_stock(price, previous_close, price + 1, price - 1,
                                                   1_000_000, 1_000_000, None)

def test_stock_trend_requires_stock_entries(tracker):
    tracker.add_sentiment("text only", make_result(1.0))
    assert tracker.get_stock_sentiment_trend('AAA') is None

def test_stock_trend_averages_overall_and_keeps_latest_details(tracker):
    first = _stock(106)
    second = _stock(94)
    tracker.add_sentiment("up", make_result(0.0), stock_sentiment=first, symbol='AAA')
    tracker.add_sentiment("down", make_result(0.0), stock_sentiment=second, symbol='AAA')

    trend = tracker.get_stock_sentiment_trend('aaa')
    avg_overall = (first.overall_sentiment + second.overall_sentiment) / 2

    assert trend.overall_sentiment == pytest.approx(avg_overall)
    assert trend.confidence == pytest.approx((first.confidence + second.confidence) / 2)
    assert trend.price_sentiment == second.price_sentiment
    assert trend.strength == second.strength
    assert trend.trend == MarketSentimentAnalyzer.classify_trend(avg_overall)

def test_stock_trend_filters_by_symbol(tracker):
    bullish = _stock(110)
    bearish = _stock(90)
    tracker.add_sentiment("a", make_result(0.0), stock_sentiment=bullish, symbol='AAA')
    tracker.add_sentiment("b", make_result(0.0), stock_sentiment=bearish, symbol='BBB')

    assert tracker.get_stock_sentiment_trend('AAA').overall_sentiment == bullish.overall_sentiment
    assert tracker.get_stock_sentiment_trend('BBB').trend == MarketTrend.BEARISH
    assert tracker.get_stock_sentiment_trend('CCC') is None

def test_stock_trend_respects_window(tracker, clock):
    tracker.add_sentiment("a", make_result(0.0), stock_sentiment=_stock(110), symbol='AAA')
    clock.advance(30)
    assert tracker.get_stock_sentiment_trend('AAA', window_minutes=60) is not None
    assert tracker.get_stock_sentiment_trend('AAA', window_minutes=10) is None

@pytest.mark.parametrize('count', [0, 5, 10])
def test_trending_stable_without_two_batches(tracker, count):
    for i in range(count):
        tracker.add_sentiment(f"t{i}", make_result(float(i)))
    assert tracker.get_trending_sentiment() == SentimentDirection.STABLE

@pytest.mark.parametrize('older, recent, expected', [
    (-1.0, 1.0, SentimentDirection.IMPROVING),
    (1.0, -1.0, SentimentDirection.DECLINING),
    (1.0, 1.2, SentimentDirection.STABLE),
])
def test_trending_compares_last_two_batches(tracker, older, recent, expected):
    for _ in range(10):
        tracker.add_sentiment("older", make_result(older))
    for _ in range(10):
        tracker.add_sentiment("recent", make_result(recent))

    assert tracker.get_trending_sentiment() == expected

def test_trending_uses_partial_older_batch(tracker):
    for _ in range(3):
        tracker.add_sentiment("older", make_result(-3.0))
    for _ in range(10):
        tracker.add_sentiment("recent", make_result(0.0))

    assert tracker.get_trending_sentiment() == SentimentDirection.IMPROVING

def test_concurrent_adds_respect_bound(clock):
    tracker = SentimentTracker(max_history_size=100, clock=clock)

    def worker():
        for _ in range(200):
            tracker.add_sentiment("x", make_result(0.0))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(tracker) == 100

def test_clear(tracker):
    tracker.add_sentiment("x", make_result(0.0))
    tracker.clear()
    assert len(tracker) == 0

def test_default_window_from_constructor(clock):
    tracker = SentimentTracker(clock=clock, window_minutes=5)
    tracker.add_sentiment("a", make_result(2.0))
    clock.advance(10)

    assert tracker.get_recent_sentiment().score == 0.0
    assert tracker.get_recent_sentiment(window_minutes=15).score == pytest.approx(2.0)

def test_text_queries_skip_stock_entries(tracker):
    tracker.add_sentiment("good news", make_result(3.0))
    tracker.add_sentiment("AAA +10%", make_result(0.0), stock_sentiment=_stock(110), symbol='AAA')

    result = tracker.get_recent_sentiment()
    assert result.score == pytest.approx(3.0)
    assert result.label == SentimentLabel.POSITIVE

def test_trending_ignores_stock_entries(tracker):
    for _ in range(10):
        tracker.add_sentiment("bad", make_result(-3.0))
    for _ in range(10):
        tracker.add_sentiment("quote", make_result(0.0), stock_sentiment=_stock(100), symbol='AAA')

    assert tracker.get_trending_sentiment() == SentimentDirection.STABLE
