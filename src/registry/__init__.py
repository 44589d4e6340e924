"""Version lifecycle registry clients."""
