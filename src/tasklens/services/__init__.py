"""Task snapshot services."""
