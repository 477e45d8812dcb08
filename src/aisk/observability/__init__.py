"""Observability helpers.

Main exports:
- setup_logging: Configure the ``aisk`` logger
"""

from aisk.observability.logging_setup import setup_logging

__all__ = ["setup_logging"]
