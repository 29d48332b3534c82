"""
Utility modules for the Claim Risk Engine.
"""

from .log import JSONFormatter, configure_logging

__all__ = ["JSONFormatter", "configure_logging"]
