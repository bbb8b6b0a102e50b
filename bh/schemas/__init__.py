"""
Schemas.

Request and response bodies exchanged with the BountyHub API.
"""

from bh.schemas.bountyhub import (
    CreatedResource,
    DispatchScanRequest,
    PresignedUrl,
    RunnerRegistration,
    UploadBlobFileRequest,
)

__all__ = [
    "CreatedResource",
    "DispatchScanRequest",
    "PresignedUrl",
    "RunnerRegistration",
    "UploadBlobFileRequest",
]
