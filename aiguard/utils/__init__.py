"""Shared utilities: logging, exit codes, error handling, constants."""
