"""
Timbr: swipe-to-match real-estate backend and swipe client.
"""

__version__ = "1.0.0"
