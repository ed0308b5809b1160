"""
playmap - per-application keymap repository
"""

__version__ = "0.3.0"
