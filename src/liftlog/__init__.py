"""liftlog: personal workout and body metrics tracker."""

__version__ = "0.1.0"
