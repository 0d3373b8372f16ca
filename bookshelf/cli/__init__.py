"""Command line interface for bookshelf."""
