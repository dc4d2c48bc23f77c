"""Core modules for Saramin crawler"""

from .fetcher import PageFetcher, RequestThrottle

__all__ = ["PageFetcher", "RequestThrottle"]
