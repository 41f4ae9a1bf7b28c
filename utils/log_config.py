"""
Logging setup shared by the Flask app and the management CLI.
"""

import logging


def configure_logging(log_level="INFO"):
    """Route module loggers through the root logger at the configured level."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)
    return level
