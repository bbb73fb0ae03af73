"""Plotting of domain summaries"""
from .bubble_plot import BubblePlotRenderer

__all__ = ['BubblePlotRenderer']
