"""Edwuma web frontend services: flag resolution, crawler policy and UI chrome."""

__version__ = "0.1.0"
