"""Purchase source ingestion.

This package opens line sources, parses purchase records, and runs
per-source pipelines concurrently for the aggregate report.
"""
