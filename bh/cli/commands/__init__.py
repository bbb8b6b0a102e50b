"""
CLI Commands.

Organized by BountyHub resource.
"""

from bh.cli.commands.bhlast import app as bhlast_app
from bh.cli.commands.blob import app as blob_app
from bh.cli.commands.completion import completion
from bh.cli.commands.job import app as job_app
from bh.cli.commands.md import app as md_app
from bh.cli.commands.runner import app as runner_app
from bh.cli.commands.scan import app as scan_app

__all__ = [
    "bhlast_app",
    "blob_app",
    "completion",
    "job_app",
    "md_app",
    "runner_app",
    "scan_app",
]
