"""
주가 데이터 수집 모듈
FinanceDataReader를 활용한 주가 데이터 수집 및 감정분석 입력값 생성
"""

import logging
from typing import Any, Dict, Optional

import FinanceDataReader as fdr
import pandas as pd

from src.analysis.sentiment.models import Quote
from src.utils.data_validation import (
    DataValidationError, PriceFrameValidator, validate_price_frame,
)

DEFAULT_WINDOW = 5

class StockDataCollector:
    """주가 데이터 수집 클래스"""

    def __init__(self):
        self.logger = logging.getLogger('DataCollector')

    def collect_stock_prices(self, stock_code: str, start_date: Optional[str] = None,
                             end_date: Optional[str] = None) -> pd.DataFrame:
        """개별 종목 주가 데이터 수집 (실패 시 빈 데이터프레임)"""
        try:
            df = fdr.DataReader(stock_code, start_date, end_date)

            if df is None or df.empty:
                self.logger.warning(f"주가 데이터 없음: {stock_code}")
                return pd.DataFrame()

            self.logger.info(f"주가 데이터 수집 완료: {stock_code} - {len(df)}개 레코드")
            return df

        except Exception as e:
            self.logger.error(f"주가 데이터 수집 실패 ({stock_code}): {e}")
            return pd.DataFrame()

    def build_quote(self, stock_code: str, df: pd.DataFrame, **meta) -> Quote:
        """
        주가 데이터프레임에서 시세 스냅샷 생성

        마지막 행이 당일 시세, 그 직전 행의 종가가 전일종가.
        """
        if not validate_price_frame(df) or len(df) < 2:
            raise DataValidationError(f"시세 생성에 필요한 데이터 부족: {stock_code}")

        col = lambda name: PriceFrameValidator.find_column(df, name)
        last = df.iloc[-1]
        previous = df.iloc[-2]

        return Quote(
            symbol=stock_code,
            price=float(last[col('close')]),
            previous_close=float(previous[col('close')]),
            day_high=float(last[col('high')]),
            day_low=float(last[col('low')]),
            volume=float(last[col('volume')]),
            name=meta.get('name'),
            sector=meta.get('sector'),
            weightage=meta.get('weightage', 0.0),
        )

    def build_analysis_inputs(self, df: pd.DataFrame, window: int = DEFAULT_WINDOW) -> Dict[str, Any]:
        """최근 window 기간 평균 거래량과 종가 이력"""
        if df is None or df.empty:
            return {'avg_volume': None, 'price_history': []}

        close_col = PriceFrameValidator.find_column(df, 'close')
        volume_col = PriceFrameValidator.find_column(df, 'volume')
        recent = df.tail(window)

        avg_volume = None
        if volume_col is not None:
            volumes = recent[volume_col].dropna()
            avg_volume = float(volumes.mean()) if not volumes.empty else None

        price_history = []
        if close_col is not None:
            price_history = [float(p) for p in recent[close_col].dropna()]

        return {'avg_volume': avg_volume, 'price_history': price_history}
