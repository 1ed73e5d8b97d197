"""Small helpers shared across fx_consolidator modules."""
