"""Faculty profiles and student dashboards."""
