"""Application assembly: shared context and bootstrap."""
