"""
Code Shield - AI-assisted code vulnerability review
"""

__version__ = "0.1.0"
