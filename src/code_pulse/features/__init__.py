"""Analysis features for code-pulse."""
