import pytest
import os
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

class FakeClock:
    """테스트용 시계 (초 단위, 수동 진행)"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float):
        self.now += minutes * 60

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def tracker(clock):
    """테스트마다 새로 생성하는 이력 추적기"""
    from src.analysis.sentiment.tracker import SentimentTracker
    return SentimentTracker(clock=clock)

@pytest.fixture
def service(tracker):
    from src.analysis.sentiment.aggregate import AggregateSentimentService
    return AggregateSentimentService(tracker=tracker)

@pytest.fixture
def sample_quote():
    """기준 시세 (전일 100 -> 105, 거래량 2배)"""
    from src.analysis.sentiment.models import Quote
    return Quote(symbol='AAA', price=105.0, previous_close=100.0,
                 day_high=106.0, day_low=99.0, volume=2_000_000,
                 name='Alpha', sector='Tech', weightage=10.0)

@pytest.fixture
def sample_quotes():
    """테스트용 시장 시세 목록"""
    from src.analysis.sentiment.models import Quote
    return [
        Quote('AAA', 102.0, 100.0, 103.0, 99.0, 1000, name='Alpha', sector='Tech', weightage=10.0),
        Quote('BBB', 51.0, 50.0, 52.0, 49.0, 2000, name='Beta', sector='Tech', weightage=5.0),
        Quote('CCC', 99.0, 100.0, 101.0, 98.0, 3000, name='Gamma', sector='Energy', weightage=20.0),
        Quote('DDD', 200.0, 200.0, 202.0, 198.0, 4000, name='Delta', sector='Energy', weightage=3.0),
        Quote('EEE', 10.5, 10.0, 10.6, 9.9, 500, name='Epsilon', sector=None),
    ]

@pytest.fixture
def sample_stock_data():
    """테스트용 주가 데이터 (결정적 값)"""
    import pandas as pd

    dates = pd.date_range('2024-01-01', periods=6)
    closes = [100.0, 100.0, 101.0, 102.0, 104.0, 105.0]

    return pd.DataFrame({
        'Open': closes,
        'High': [c + 1 for c in closes],
        'Low': [c - 1 for c in closes],
        'Close': closes,
        'Volume': [1_000_000, 1_000_000, 1_000_000, 1_000_000, 1_000_000, 2_000_000],
    }, index=dates)
