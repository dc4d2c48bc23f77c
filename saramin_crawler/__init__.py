"""사람인 채용공고 수집 파이프라인"""

__version__ = "0.1.0"
