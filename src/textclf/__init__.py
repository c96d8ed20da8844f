"""textclf: A binary decision tree text classifier."""

from loguru import logger

from textclf.classifier import TextClassifier
from textclf.logging import PACKAGE_NAME, enable_logging

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the textclf package by default

__all__ = [
    "TextClassifier",
    "enable_logging",
]
