from .resolver import EntityResolver
from .upserter import IngestionUpserter, build_job_fields
from .orchestrator import (
    CrawlOrchestrator,
    LoggingObserver,
    RunObserver,
    RunState,
    run_ingestion,
)

__all__ = [
    "EntityResolver",
    "IngestionUpserter",
    "build_job_fields",
    "CrawlOrchestrator",
    "LoggingObserver",
    "RunObserver",
    "RunState",
    "run_ingestion",
]
