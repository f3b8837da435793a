"""
Presentation sink: chart rendering for the computed tables.
"""

from .visualizer import Visualizer

__all__ = ['Visualizer']
