from .base import JobStore
from .memory import InMemoryStore


def create_store(backend: str) -> JobStore:
    """설정값(firestore | memory)으로 저장소 생성"""
    if backend == "memory":
        return InMemoryStore()
    if backend == "firestore":
        from .firestore import FirestoreStore
        return FirestoreStore()
    raise ValueError(f"알 수 없는 저장소: {backend}")


__all__ = [
    "JobStore",
    "InMemoryStore",
    "create_store",
]
