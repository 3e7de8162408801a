"""Storage, persistence and pure block/page operations."""
