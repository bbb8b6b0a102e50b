"""
bh - BountyHub command-line client.

Thin command-line layer over the BountyHub HTTP API.
"""

__version__ = "0.1.0"
