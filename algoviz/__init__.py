"""
algoviz
-------
Step-by-step visualizer for sorting, searching and graph traversal
algorithms.

    from algoviz.algorithms import get_algorithm
    from algoviz.engine import PlaybackState, Stepper
    from algoviz.app import create_app
"""

__version__ = "0.1.0"
