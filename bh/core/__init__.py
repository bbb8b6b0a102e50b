"""
Core Infrastructure.

Configuration, logging, exceptions and resilience helpers shared by
the CLI and the service layer.
"""
