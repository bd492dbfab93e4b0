"""Command-line interface for the summons tracker."""

__version__ = "0.1.0"
