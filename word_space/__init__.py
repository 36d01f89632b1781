"""
Word-Space: interactive 3D word embedding explorer.
"""

__version__ = "0.1.0"
