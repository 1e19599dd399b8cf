"""Data stores for persistence.

Stores handle:
- Redis: pooled connections, primitive commands, MULTI/EXEC batches

No indexing logic in stores - that belongs in services.
"""
