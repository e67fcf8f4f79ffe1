#!/usr/bin/env python3
"""
감정분석 실행 스크립트

실행 방법:
python scripts/analysis/run_sentiment_analysis.py --text "Strong earnings beat estimates"
python scripts/analysis/run_sentiment_analysis.py --quote 105 100 106 99 2000000 --avg-volume 1000000 --history 100 101 102 104 105
python scripts/analysis/run_sentiment_analysis.py --symbol 005930 --days 10
python scripts/analysis/run_sentiment_analysis.py --market quotes.json --json
"""

import sys
import json
import argparse
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

# 프로젝트 루트 디렉토리를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import get_sentiment_config, setup_logging
from src.analysis.sentiment.aggregate import AggregateSentimentService
from src.analysis.sentiment.models import Quote
from src.data_collection.stock_data_collector import StockDataCollector
from src.utils.data_validation import DataValidationError, normalize_quote_record
from src.utils.json_utils import safe_json_dump, to_json

def sentiment_emoji(score: float) -> str:
    """0~10 감정점수 이모티콘"""
    if score >= 8:
        return "😄"
    elif score >= 6.5:
        return "🙂"
    elif score > 3.5:
        return "😐"
    elif score > 2:
        return "🙁"
    return "😞"

def analyze_text(service: AggregateSentimentService, text: str) -> Dict[str, Any]:
    """텍스트 감정분석"""
    return service.analyze_text(text).to_dict()

def analyze_quote(service: AggregateSentimentService, values: List[float],
                  avg_volume: Optional[float] = None,
                  history: Optional[List[float]] = None,
                  symbol: str = 'CLI') -> Dict[str, Any]:
    """명령행 시세 값(현재가 전일종가 고가 저가 거래량)으로 감정분석"""
    price, previous_close, day_high, day_low, volume = values
    quote = Quote(symbol=symbol, price=price, previous_close=previous_close,
                  day_high=day_high, day_low=day_low, volume=volume)
    return service.analyze_quote(quote, avg_volume, history)

def analyze_symbol(service: AggregateSentimentService, symbol: str,
                   days: int = 10) -> Dict[str, Any]:
    """종목 주가 이력을 수집하여 감정분석"""
    collector = StockDataCollector()
    end_date = datetime.now()
    start_date = end_date - timedelta(days=days)

    df = collector.collect_stock_prices(symbol, start_date.strftime('%Y-%m-%d'),
                                        end_date.strftime('%Y-%m-%d'))
    if df.empty:
        return {'error': f"주가 데이터 없음: {symbol}"}

    try:
        quote = collector.build_quote(symbol, df)
    except DataValidationError as e:
        return {'error': str(e)}

    # 평균 거래량은 당일을 제외한 직전 구간 기준
    inputs = collector.build_analysis_inputs(df.iloc[:-1])
    result = service.analyze_quote(quote, inputs['avg_volume'], inputs['price_history'] + [quote.price])
    result['symbol'] = symbol
    result['price'] = quote.price
    result['changePercent'] = quote.change_percent
    return result

def load_market_quotes(path: str) -> List[Quote]:
    """JSON 파일(시세 딕셔너리 목록)에서 시세 로드"""
    with open(path, 'r', encoding='utf-8') as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise DataValidationError("시세 파일은 JSON 배열이어야 합니다.")

    quotes = []
    for record in records:
        quotes.append(Quote.from_dict(normalize_quote_record(record)))
    return quotes

def analyze_market(service: AggregateSentimentService, quotes: List[Quote]) -> Dict[str, Any]:
    """시장/섹터 감정 요약"""
    return {
        'market': service.summarize_market(quotes),
        'sectors': service.summarize_sectors(quotes),
    }

def print_text_result(text: str, result: Dict[str, Any]):
    print(f"\n💭 텍스트 감정분석")
    print("=" * 60)
    print(f"📰 입력: {text[:60]}")
    print(f"감정점수: {result['score']:+.2f} ({result['label']})")
    print(f"신뢰도: {result['confidence']:.1%}")
    if result['keywords']:
        print(f"금융 키워드: {', '.join(result['keywords'])}")

def print_stock_result(result: Dict[str, Any]):
    print(f"\n📈 종목 감정분석")
    print("=" * 60)
    if 'error' in result:
        print(f"❌ 분석 실패: {result['error']}")
        return

    score = result['score']
    print(f"🎯 종합 감정점수: {score:.2f}/10 {sentiment_emoji(score)}")
    print(f"감정 레이블: {result['label']}")
    print(f"신뢰도: {result['confidence']:.1%}")
    print(f"추세: {result['trend']}, 강도: {result['strength']}")

    details = result.get('details')
    if details:
        print(f"\n📊 하위 점수")
        print(f"  가격 등락: {details['priceSentiment']:.2f}")
        print(f"  거래량: {details['volumeSentiment']:.2f}")
        print(f"  변동성: {details['volatilitySentiment']:.2f}")
        print(f"  모멘텀: {details['momentumSentiment']:.2f}")

def print_market_result(result: Dict[str, Any]):
    market = result['market']
    sentiment = market['marketSentiment']

    print(f"\n🌐 시장 감정 요약")
    print("=" * 60)
    print(f"종목 수: {market['totalStocks']} (상승 {market['gainers']} / 하락 {market['losers']} / 보합 {market['unchanged']})")
    print(f"평균 등락률: {market['avgChange']:+.2f}%")
    print(f"시장 감정: {sentiment['label']} {sentiment['score']:.2f}/10 {sentiment_emoji(sentiment['score'])}")
    print(f"신뢰도: {sentiment['confidence']:.1%}")

    if result['sectors']:
        print(f"\n🏭 섹터별 감정")
        for sector in result['sectors']:
            s = sector['sentiment']
            print(f"  {sector['sector']:<20} {sector['avgChange']:+6.2f}%  {s['label']:<8} {s['score']:.2f}")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='시장 감정분석 실행')
    parser.add_argument('--text', type=str, help='분석할 뉴스 텍스트')
    parser.add_argument('--quote', type=float, nargs=5,
                        metavar=('PRICE', 'PREV', 'HIGH', 'LOW', 'VOLUME'),
                        help='시세 값으로 종목 감정분석')
    parser.add_argument('--avg-volume', type=float, help='평균 거래량 (--quote와 함께)')
    parser.add_argument('--history', type=float, nargs='+', help='최근 종가 이력 (--quote와 함께)')
    parser.add_argument('--symbol', type=str, help='주가를 수집하여 분석할 종목코드')
    parser.add_argument('--days', type=int, default=10, help='주가 수집 기간 (일)')
    parser.add_argument('--market', type=str, metavar='FILE', help='시세 목록 JSON 파일')
    parser.add_argument('--json', action='store_true', help='JSON 형식으로 출력')
    parser.add_argument('--output', type=str, metavar='FILE', help='결과 JSON 저장 경로')
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    """메인 실행 함수"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.text or args.quote or args.symbol or args.market):
        parser.print_help()
        return 1

    setup_logging()
    service = AggregateSentimentService.from_settings(get_sentiment_config())
    outputs = {}

    try:
        if args.text:
            outputs['text'] = analyze_text(service, args.text)
        if args.quote:
            outputs['quote'] = analyze_quote(service, args.quote, args.avg_volume, args.history)
        if args.symbol:
            outputs['symbol'] = analyze_symbol(service, args.symbol, args.days)
        if args.market:
            outputs['market'] = analyze_market(service, load_market_quotes(args.market))
    except (OSError, json.JSONDecodeError, DataValidationError) as e:
        print(f"❌ 입력 오류: {e}")
        return 1

    if args.output and not safe_json_dump(outputs, args.output):
        print(f"❌ 결과 저장 실패: {args.output}")

    if args.json:
        print(to_json(outputs, indent=2))
        return 0

    if 'text' in outputs:
        print_text_result(args.text, outputs['text'])
    if 'quote' in outputs:
        print_stock_result(outputs['quote'])
    if 'symbol' in outputs:
        print_stock_result(outputs['symbol'])
    if 'market' in outputs:
        print_market_result(outputs['market'])
    return 0

if __name__ == "__main__":
    sys.exit(main())
