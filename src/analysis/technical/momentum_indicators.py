"""
모멘텀 지표 모듈
감정점수 산출에 쓰이는 등락률, 단기 모멘텀, 일중 변동폭 계산
"""

from typing import Optional, Sequence

class MomentumIndicators:
    """모멘텀 지표 계산 클래스"""

    DEFAULT_WINDOW = 5

    @staticmethod
    def change_percent(current: float, reference: float) -> float:
        """기준가 대비 등락률 (%) - reference != 0 은 호출자 책임"""
        return (current - reference) / reference * 100

    @staticmethod
    def price_momentum(prices: Optional[Sequence[float]], window: int = DEFAULT_WINDOW) -> Optional[float]:
        """
        최근 window개 종가의 첫 값 대비 마지막 값 변화율 (%)

        데이터가 window개 미만이면 None (호출자가 대체값 사용)
        """
        if prices is None or len(prices) < window:
            return None

        recent = list(prices)[-window:]
        first, last = recent[0], recent[-1]
        if first == 0:
            return None
        return (last - first) / first * 100

    @staticmethod
    def day_range_percent(day_high: float, day_low: float, previous_close: float) -> float:
        """전일종가 대비 일중 변동폭 (%)"""
        return (day_high - day_low) / previous_close * 100
