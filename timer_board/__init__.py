"""
Timer Board: a live table of countdown timers.
"""

__version__ = "1.0.0"
