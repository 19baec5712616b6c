"""Utility functions for liftlog."""
