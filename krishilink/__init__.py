"""
KrishiLink - client for a crop marketplace.
"""

__version__ = "1.0.0"
