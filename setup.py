from setuptools import setup, find_packages

setup(
    name="market-sentiment-engine",
    version="1.0.0",
    description="뉴스 텍스트와 종목 시세 기반 시장 감정점수 엔진",
    author="Your Name",
    author_email="your.email@example.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=1.5.0",
        "numpy>=1.24.0",
        "finance-datareader>=0.9.50",
        "python-dotenv>=1.0.0",
        "vaderSentiment>=3.3.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
