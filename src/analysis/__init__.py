"""
Analysis Module
텍스트/시세 감정분석 및 기술적 지표
"""
