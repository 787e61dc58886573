"""Helpers shared by the catalog and the command line."""
