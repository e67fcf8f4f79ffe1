"""
뉴스 감정분석 모듈
뉴스 목록(제목/본문)을 일괄 분석하고 감정 통계를 산출
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from src.analysis.sentiment.models import SentimentLabel
from src.analysis.sentiment.sentiment_analyzer import SentimentAnalyzer

NEWS_COLUMNS = ['title', 'source', 'published_at', 'score', 'label', 'confidence', 'keywords']

class NewsSentimentAnalyzer:
    """뉴스 감정분석 클래스"""

    def __init__(self, analyzer: Optional[SentimentAnalyzer] = None):
        self.logger = logging.getLogger('SentimentAnalysis')
        self.analyzer = analyzer or SentimentAnalyzer()

    def analyze_news(self, news_list: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
        """뉴스별 감정분석 결과 데이터프레임"""
        rows = []
        for news in news_list:
            title = news.get('title') or ''
            description = news.get('description') or ''
            result = self.analyzer.analyze(f"{title} {description}".strip())

            rows.append({
                'title': title,
                'source': news.get('source', ''),
                'published_at': news.get('publishedAt', news.get('published_at', '')),
                'score': result.score,
                'label': result.label.value,
                'confidence': result.confidence,
                'keywords': sorted(result.keywords),
            })

        self.logger.info(f"뉴스 {len(rows)}건 감정분석 완료")
        return pd.DataFrame(rows, columns=NEWS_COLUMNS)

    def calculate_sentiment_score(self, news_list: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
        """뉴스 목록 감정 통계"""
        df_sentiment = self.analyze_news(news_list)
        return summarize_news_frame(df_sentiment)

    @staticmethod
    def get_top_news(df_sentiment: pd.DataFrame, positive: bool = True,
                     top_n: int = 3) -> List[Dict[str, Any]]:
        """상위/하위 감정점수 뉴스 반환"""
        if df_sentiment.empty:
            return []

        if positive:
            top_news = df_sentiment.nlargest(top_n, 'score')
        else:
            top_news = df_sentiment.nsmallest(top_n, 'score')

        return top_news[['title', 'score', 'label']].to_dict('records')

    @staticmethod
    def sort_by_sentiment(df_sentiment: pd.DataFrame) -> pd.DataFrame:
        """감정점수 내림차순 정렬 (동점은 입력 순서 유지)"""
        return df_sentiment.sort_values('score', ascending=False, kind='mergesort').reset_index(drop=True)

def summarize_news_frame(df_sentiment: pd.DataFrame) -> Dict[str, Any]:
    """뉴스 감정분석 데이터프레임 요약"""
    total = len(df_sentiment)
    counts = df_sentiment['label'].value_counts() if total else pd.Series(dtype=int)

    positive = int(counts.get(SentimentLabel.POSITIVE.value, 0))
    negative = int(counts.get(SentimentLabel.NEGATIVE.value, 0))
    neutral = int(counts.get(SentimentLabel.NEUTRAL.value, 0))

    return {
        'totalNews': total,
        'avgSentiment': float(df_sentiment['score'].mean()) if total else 0.0,
        'avgConfidence': float(df_sentiment['confidence'].mean()) if total else 0.0,
        'sentimentBreakdown': {
            'positive': positive,
            'negative': negative,
            'neutral': neutral,
        },
        'positiveRatio': positive / total if total else 0.0,
        'negativeRatio': negative / total if total else 0.0,
    }
