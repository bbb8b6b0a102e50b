"""
CLI Client Module.

Command-line client built with Typer for the BountyHub API.

Architecture:
- CLI is a thin presentation layer
- Remote operations live in bh.services.bountyhub
- HTTP goes through bh.cli.client.APIClient (httpx)
- Commands rely on BOUNTYHUB_TOKEN and BOUNTYHUB_URL

Usage:
    bh --help
    bh job artifact download -j <job-id> -a <name>
    bh scan dispatch -w <workflow-id> -s <scan>
    bh runner registration token
"""
