"""Template tags for the dashboard."""
