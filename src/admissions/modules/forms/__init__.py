"""Form templates module."""
