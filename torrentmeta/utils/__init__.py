"""Shared utilities: exceptions, logging and value formatting."""
