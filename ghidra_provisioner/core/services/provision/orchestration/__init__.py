"""L5 Orchestration — the ordered, fail-fast step pipeline."""
