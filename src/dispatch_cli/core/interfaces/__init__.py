"""Abstract contracts for the dispatch engine components."""
