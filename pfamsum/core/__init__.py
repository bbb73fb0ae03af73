"""Core infrastructure shared by the pfamsum components"""
from .logging_config import LoggingManager

__all__ = ['LoggingManager']
