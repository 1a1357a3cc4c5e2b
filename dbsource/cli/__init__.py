"""Command line interface for dbsource."""
