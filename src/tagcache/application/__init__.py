"""Application layer – backend-neutral cache contract."""
