"""Pipeline services: matching, indexing, writing, progress and orchestration."""
