"""Utility helpers"""
from .file import ensure_dir, atomic_write

__all__ = ['ensure_dir', 'atomic_write']
