"""Data models for code-pulse."""
