"""Version data models and manifest entry parsing."""
