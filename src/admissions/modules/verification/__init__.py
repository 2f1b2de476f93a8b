"""Verification admin and officer desks."""
