import pytest

from src.analysis.sentiment.aggregate import AggregateSentimentService
from src.analysis.sentiment.models import Quote, SentimentDirection, SentimentLabel

HISTORY = [100, 101, 102, 104, 105]

@pytest.mark.parametrize('avg, pos, neg, label, score, confidence', [
    (2.0, 0.8, 0.1, SentimentLabel.POSITIVE, 8.5, 0.96),
    (-2.0, 0.1, 0.7, SentimentLabel.NEGATIVE, 1.5, 0.94),
    (1.0, 0.6, 0.2, SentimentLabel.NEUTRAL, 5.3, 0.8),
    (0.5, 0.9, 0.0, SentimentLabel.NEUTRAL, 5.15, 0.7),
    (-1.0, 0.0, 0.5, SentimentLabel.NEUTRAL, 4.7, 0.8),
    (30.0, 1.0, 0.0, SentimentLabel.POSITIVE, 10.0, 1.0),
    (-30.0, 0.0, 1.0, SentimentLabel.NEGATIVE, 0.0, 1.0),
])
def test_classify_movement(service, avg, pos, neg, label, score, confidence):
    result = service.classify_movement(avg, pos, neg)

    assert result[0] == label
    assert result[1] == pytest.approx(score)
    assert result[2] == pytest.approx(confidence)

def test_classify_movement_custom_thresholds(tracker):
    service = AggregateSentimentService(tracker=tracker, change_threshold=0.1, ratio_threshold=0.5)
    assert service.classify_movement(0.2, 0.55, 0.1)[0] == SentimentLabel.POSITIVE

def test_summarize_market(service, sample_quotes):
    summary = service.summarize_market(sample_quotes)

    assert summary['totalStocks'] == 5
    assert summary['gainers'] == 3
    assert summary['losers'] == 1
    assert summary['unchanged'] == 1
    assert summary['positiveRatio'] == pytest.approx(0.6)
    assert summary['negativeRatio'] == pytest.approx(0.2)
    assert summary['avgChange'] == pytest.approx(1.6)
    assert summary['totalVolume'] == pytest.approx(10_500)

    sentiment = summary['marketSentiment']
    assert sentiment['label'] == 'neutral'
    assert sentiment['score'] == pytest.approx(5.48)
    assert sentiment['confidence'] == pytest.approx(0.92)

def test_summarize_market_empty(service):
    summary = service.summarize_market([])

    assert summary['totalStocks'] == 0
    assert summary['avgChange'] == 0.0
    assert summary['marketSentiment'] == {'label': 'neutral', 'score': 5.0, 'confidence': 0.6}

def test_summarize_market_counts_zero_previous_close_as_unchanged(service):
    quotes = [Quote('Z', 10, 0, 11, 9, 100), Quote('A', 11, 10, 11, 10, 100)]
    summary = service.summarize_market(quotes)

    assert summary['totalStocks'] == 2
    assert summary['unchanged'] == 1
    assert summary['avgChange'] == pytest.approx(5.0)

def test_summarize_sectors(service, sample_quotes):
    sectors = service.summarize_sectors(sample_quotes)

    assert [s['sector'] for s in sectors] == ['Energy', 'Tech']

    energy, tech = sectors
    assert energy['stockCount'] == 2
    assert energy['totalWeightage'] == pytest.approx(23.0)
    assert energy['avgChange'] == pytest.approx(-0.5)
    assert energy['avgPrice'] == pytest.approx(149.5)
    assert energy['totalVolume'] == pytest.approx(7000)
    assert (energy['gainers'], energy['losers'], energy['neutral']) == (0, 1, 1)
    assert energy['sentiment']['label'] == 'neutral'
    assert energy['sentiment']['score'] == pytest.approx(4.85)
    assert energy['sentiment']['confidence'] == pytest.approx(0.7)
    assert [s['symbol'] for s in energy['topStocks']] == ['CCC', 'DDD']

    assert tech['sentiment']['label'] == 'positive'
    assert tech['sentiment']['score'] == pytest.approx(8.5)
    assert tech['sentiment']['confidence'] == pytest.approx(1.0)

def test_summarize_sectors_top_stocks_limit(service):
    quotes = [
        Quote(f'S{i}', 100 + i, 100, 110, 90, 10, sector='Bank', weightage=1.0)
        for i in range(5)
    ]
    top = service.summarize_sectors(quotes)[0]['topStocks']

    assert [s['symbol'] for s in top] == ['S4', 'S3', 'S2']
    assert top[0]['changePercent'] == pytest.approx(4.0)

def test_summarize_sectors_empty(service):
    assert service.summarize_sectors([]) == []
    assert service.summarize_sectors([Quote('A', 1, 1, 1, 1, 1)]) == []

def test_analyze_quote_records_in_tracker(service, tracker, sample_quote):
    result = service.analyze_quote(sample_quote, 1_000_000, HISTORY)

    assert result['score'] == pytest.approx(7.65)
    assert result['trend'] == 'bullish'
    assert len(tracker) == 1

    trend = tracker.get_stock_sentiment_trend('AAA')
    assert trend.overall_sentiment == pytest.approx(7.65)

def test_analyze_quote_falls_back_on_invalid_quote(service, tracker):
    quote = Quote('BAD', 10, 0, 11, 9, 100)
    result = service.analyze_quote(quote)

    assert result == {
        'label': 'neutral',
        'score': 5.0,
        'confidence': 0.6,
        'trend': 'sideways',
        'strength': 'weak',
    }
    assert len(tracker) == 0

@pytest.mark.parametrize('pct, label, score, trend, strength', [
    (6.0, 'positive', 8.0, 'bullish', 'strong'),
    (-3.0, 'negative', 3.5, 'bearish', 'moderate'),
    (1.5, 'neutral', 5.75, 'bullish', 'weak'),
    (-30.0, 'negative', 0.0, 'bearish', 'strong'),
])
def test_basic_sentiment(pct, label, score, trend, strength):
    result = AggregateSentimentService.basic_sentiment(pct)

    assert result['label'] == label
    assert result['score'] == pytest.approx(score)
    assert result['trend'] == trend
    assert result['strength'] == strength

def test_analyze_text_records_in_tracker(service, tracker):
    result = service.analyze_text("Profit surge lifts shares")

    assert result.label == SentimentLabel.POSITIVE
    assert tracker.snapshot()[-1].text == "Profit surge lifts shares"
    assert tracker.get_recent_sentiment().score == pytest.approx(result.score)

def test_summarize_news(service):
    results = [service.analyze_text(t) for t in (
        "Profit surge lifts shares",
        "Crash and bankruptcy fears",
        "Index flat",
    )]
    summary = service.summarize_news(results)

    assert summary['totalNews'] == 3
    assert summary['sentimentBreakdown'] == {'positive': 1, 'negative': 1, 'neutral': 1}
    assert summary['avgSentiment'] == pytest.approx(sum(r.score for r in results) / 3)
    assert summary['positiveRatio'] == pytest.approx(1 / 3)
    assert summary['avgConfidence'] == pytest.approx(sum(r.confidence for r in results) / 3)

def test_summarize_news_empty(service):
    assert service.summarize_news([]) == {
        'totalNews': 0,
        'avgSentiment': 0.0,
        'avgConfidence': 0.0,
        'sentimentBreakdown': {'positive': 0, 'negative': 0, 'neutral': 0},
        'positiveRatio': 0.0,
        'negativeRatio': 0.0,
    }

def test_from_settings():
    config = {
        'history_size': 5,
        'window_minutes': 60,
        'keyword_weight': 2.0,
        'weights': {'price': 0.25, 'volume': 0.25, 'volatility': 0.25, 'momentum': 0.25},
        'change_threshold': 1.0,
        'ratio_threshold': 0.7,
    }
    service = AggregateSentimentService.from_settings(config)

    assert service.tracker.max_history_size == 5
    assert service.tracker.window_minutes == 60
    assert service.text_analyzer.keyword_weight == 2.0
    assert service.market_analyzer.weights['price'] == 0.25
    assert service.change_threshold == 1.0
    assert service.ratio_threshold == 0.7

def test_quote_analysis_leaves_text_average_alone(service, tracker, sample_quote):
    text = service.analyze_text("Profit surge lifts shares")
    service.analyze_quote(sample_quote, 1_000_000, HISTORY)

    assert len(tracker) == 2
    assert tracker.get_recent_sentiment().score == pytest.approx(text.score)
    assert tracker.get_recent_sentiment().label == SentimentLabel.POSITIVE

def test_quote_analysis_does_not_move_text_trend(service, tracker, sample_quote):
    for _ in range(10):
        service.analyze_text("Crash and bankruptcy fears")
    for _ in range(10):
        service.analyze_quote(sample_quote, 1_000_000, HISTORY)

    assert tracker.get_trending_sentiment() == SentimentDirection.STABLE
