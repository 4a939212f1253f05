"""
Logging setup for the OCR workflow.
"""
import logging


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Setup and return the root logger for the workflow."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        force=True
    )
    return logging.getLogger()
