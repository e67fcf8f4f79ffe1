"""데이터 수집 모듈"""

from .stock_data_collector import StockDataCollector

__all__ = ['StockDataCollector']
