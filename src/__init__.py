"""Market Sentiment Engine"""
