"""Command line interface for torrentmeta."""
