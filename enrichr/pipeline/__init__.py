"""Ingestion and enrichment pipelines."""

from enrichr.pipeline.ingest import BlogIngestor, IngestSummary
from enrichr.pipeline.maintenance import clean_stored_articles
from enrichr.pipeline.orchestrator import EnrichmentOrchestrator, RunStatus, RunSummary, Stage

__all__ = [
    "BlogIngestor",
    "EnrichmentOrchestrator",
    "IngestSummary",
    "RunStatus",
    "RunSummary",
    "Stage",
    "clean_stored_articles",
]
