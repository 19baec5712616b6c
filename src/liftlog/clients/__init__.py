"""Input clients for liftlog."""
