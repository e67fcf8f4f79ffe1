#!/usr/bin/env python3
"""
텍스트 감정분석 엔진
뉴스 제목/본문을 범용 감정사전(VADER)과 금융 도메인 사전으로 분석
"""

import re
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from vaderSentiment.vaderSentiment import NEGATE, SentimentIntensityAnalyzer

from src.analysis.sentiment.models import SentimentLabel, SentimentResult
from src.utils.calculation_utils import clamp

# 금융 감정사전
FINANCIAL_POSITIVE_WORDS = (
    'profit', 'growth', 'surge', 'rally', 'bullish', 'outperform', 'beat', 'exceed',
    'strong', 'robust', 'solid', 'gain', 'rise', 'boom', 'expansion', 'recovery',
    'upgrade', 'optimistic', 'positive', 'buy', 'momentum', 'breakthrough', 'success',
    'earnings', 'revenue', 'dividend', 'buyback', 'acquisition', 'partnership',
)

FINANCIAL_NEGATIVE_WORDS = (
    'loss', 'decline', 'fall', 'drop', 'crash', 'bearish', 'underperform', 'miss',
    'weak', 'poor', 'disappointing', 'concern', 'risk', 'uncertainty', 'volatility',
    'downgrade', 'pessimistic', 'negative', 'sell', 'pressure', 'challenge', 'crisis',
    'debt', 'default', 'bankruptcy', 'restructuring', 'layoff', 'closure',
)

FINANCIAL_NEUTRAL_WORDS = (
    'stable', 'steady', 'maintain', 'hold', 'sideways', 'consolidation', 'mixed',
    'unchanged', 'flat', 'neutral', 'cautious', 'watchful', 'review', 'analysis',
)

# 사전 등록 가중치 (기본 점수용)
LEXICON_POSITIVE_VALENCE = 2.0
LEXICON_NEGATIVE_VALENCE = -2.0
LEXICON_NEUTRAL_VALENCE = 0.0

_TOKEN_STRIP = re.compile(r"[^\w\s'-]")
_NEGATORS = frozenset(NEGATE)

_vader = SentimentIntensityAnalyzer()

def build_financial_lexicon(base: Mapping[str, float]) -> Mapping[str, float]:
    """범용 사전에 금융 용어를 덮어쓴 읽기 전용 사전 생성"""
    lexicon: Dict[str, float] = dict(base)
    lexicon.update({w: LEXICON_POSITIVE_VALENCE for w in FINANCIAL_POSITIVE_WORDS})
    lexicon.update({w: LEXICON_NEGATIVE_VALENCE for w in FINANCIAL_NEGATIVE_WORDS})
    lexicon.update({w: LEXICON_NEUTRAL_VALENCE for w in FINANCIAL_NEUTRAL_WORDS})
    return MappingProxyType(lexicon)

def tokenize(text: str) -> List[str]:
    """소문자 변환 후 구두점 제거, 공백 기준 분리"""
    return _TOKEN_STRIP.sub(' ', text.lower()).split()

class SentimentAnalyzer:
    """뉴스 텍스트 감정분석 클래스"""

    KEYWORD_WEIGHT = 1.5
    CLASSIFY_THRESHOLD = 1.0
    CONFIDENCE_SCALE = 8.0
    NEUTRAL_BASE_CONFIDENCE = 0.3
    NEUTRAL_MAGNITUDE_FACTOR = 0.2
    KEYWORD_CONFIDENCE_BOOST = 1.3
    MIN_CONFIDENCE = 0.1

    def __init__(self, keyword_weight: float = KEYWORD_WEIGHT):
        self.logger = logging.getLogger('SentimentAnalysis')
        self.keyword_weight = keyword_weight
        self.lexicon = build_financial_lexicon(_vader.lexicon)

        self.positive_words = FINANCIAL_POSITIVE_WORDS
        self.negative_words = FINANCIAL_NEGATIVE_WORDS
        self.neutral_words = FINANCIAL_NEUTRAL_WORDS

    def analyze(self, text: str) -> SentimentResult:
        """텍스트 감정분석 실행"""
        text = text or ''
        base_score, comparative = self._calculate_base_score(text)
        adjustment, keywords = self._match_financial_keywords(text)

        score = base_score + adjustment
        magnitude = abs(score)
        label, confidence = self._classify(score, magnitude)

        if keywords:
            confidence = min(confidence * self.KEYWORD_CONFIDENCE_BOOST, 1.0)
        confidence = max(self.MIN_CONFIDENCE, confidence)

        self.logger.debug(
            f"텍스트 감정분석: score={score:.2f}, label={label.value}, "
            f"confidence={confidence:.2f}, keywords={len(keywords)}"
        )

        return SentimentResult(
            score=score,
            comparative=comparative,
            label=label,
            confidence=confidence,
            magnitude=magnitude,
            keywords=frozenset(keywords),
        )

    def _calculate_base_score(self, text: str) -> Tuple[float, float]:
        """사전 기반 기본 점수와 토큰당 점수"""
        tokens = tokenize(text)
        if not tokens:
            return 0.0, 0.0

        score = 0.0
        for i, token in enumerate(tokens):
            valence = self.lexicon.get(token)
            if valence is None:
                continue
            # 직전 토큰이 부정어면 극성 반전
            if i > 0 and tokens[i - 1] in _NEGATORS:
                valence = -valence
            score += valence

        return score, score / len(tokens)

    def _match_financial_keywords(self, text: str) -> Tuple[float, List[str]]:
        """금융 용어 포함 여부로 점수 보정 (부분 문자열 일치, 단어당 1회)"""
        lower_text = text.lower()
        adjustment = 0.0
        keywords = []

        for word in self.positive_words:
            if word in lower_text:
                adjustment += self.keyword_weight
                keywords.append(word)

        for word in self.negative_words:
            if word in lower_text:
                adjustment -= self.keyword_weight
                keywords.append(word)

        for word in self.neutral_words:
            if word in lower_text:
                keywords.append(word)

        return adjustment, keywords

    def _classify(self, score: float, magnitude: float) -> Tuple[SentimentLabel, float]:
        """점수를 레이블과 신뢰도로 변환"""
        if score > self.CLASSIFY_THRESHOLD:
            return SentimentLabel.POSITIVE, clamp(score / self.CONFIDENCE_SCALE, 0.0, 1.0)
        if score < -self.CLASSIFY_THRESHOLD:
            return SentimentLabel.NEGATIVE, clamp(abs(score) / self.CONFIDENCE_SCALE, 0.0, 1.0)
        return (
            SentimentLabel.NEUTRAL,
            self.NEUTRAL_BASE_CONFIDENCE + self.NEUTRAL_MAGNITUDE_FACTOR * magnitude,
        )

# 사용 예시
if __name__ == "__main__":
    analyzer = SentimentAnalyzer()

    result = analyzer.analyze("Strong quarterly earnings drive profit growth")
    print("📊 텍스트 감정분석 결과:")
    print(f"감정점수: {result.score:+.2f}")
    print(f"감정 레이블: {result.label.value}")
    print(f"신뢰도: {result.confidence:.2f}")
    print(f"키워드: {', '.join(sorted(result.keywords))}")
