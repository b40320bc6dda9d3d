"""Shared infrastructure for tvdbmeta: errors, logging, models, constants."""
