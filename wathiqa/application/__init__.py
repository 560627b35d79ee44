"""Application layer: use-case orchestration over the database boundary."""
