"""Course catalog module."""
