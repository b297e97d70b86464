"""Format-agnostic helpers."""
