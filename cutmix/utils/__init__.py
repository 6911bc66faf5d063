"""
CutMix Utilities Module

Utility functions and helpers:
- logger: Logging configuration
"""
from .logger import LOGGER_NAME, logger, setup_logger

__all__ = ['LOGGER_NAME', 'logger', 'setup_logger']
