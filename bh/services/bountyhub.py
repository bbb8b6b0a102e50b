"""
BountyHub Service.

Maps each CLI operation onto the BountyHub v0 API:

    download_job_artifact   GET    /workflows/jobs/{job_id}/artifacts/{name}  -> presigned GET
    delete_job_artifact     DELETE /workflows/jobs/{job_id}/artifacts/{name}
    delete_job              DELETE /workflows/jobs/{job_id}
    dispatch_scan           POST   /workflows/{workflow_id}/scans/dispatch
    download_blob_file      GET    /blobs/{encoded path}                      -> presigned GET
    upload_blob_file        POST   /blobs/files                               -> presigned PUT
    create_runner_registration  POST /runner-registrations
    create_bhlast_domain    POST   /bhlast/domains

Usage:
    service = BountyHubService(get_api_client())
    registration = await service.create_runner_registration()
"""

from pathlib import Path
from uuid import UUID

from bh.cli.client import APIClient, open_upload_source
from bh.core.logging import get_logger
from bh.schemas.bountyhub import (
    CreatedResource,
    DispatchScanRequest,
    PresignedUrl,
    RunnerRegistration,
    UploadBlobFileRequest,
    WorkflowInputs,
)

logger = get_logger(__name__)


def encode_path_segment(value: str) -> str:
    """
    Percent-encode every byte that is not an ASCII letter or digit.

    Used for blob paths, which travel as a single URL path segment:
    "/", "-", ".", "_" and "~" are all escaped.
    """
    return "".join(
        chr(byte) if chr(byte).isascii() and chr(byte).isalnum() else f"%{byte:02X}"
        for byte in value.encode("utf-8")
    )


class BountyHubService:
    """
    Remote operations exposed by the CLI.

    Every method raises an ApplicationError subclass on failure (see
    bh.core.exceptions); HTTP status codes never leak to callers.
    """

    def __init__(self, client: APIClient) -> None:
        self.client = client

    async def close(self) -> None:
        await self.client.close()

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    async def download_job_artifact(self, job_id: UUID, name: str, destination: Path) -> int:
        """Fetch a presigned URL for the artifact and stream it to `destination`."""
        presigned = await self.client.request_model(
            PresignedUrl, "GET", f"/workflows/jobs/{job_id}/artifacts/{name}",
        )
        written = await self.client.download_to(presigned.url, destination)
        logger.info("Job artifact downloaded", job_id=str(job_id), artifact=name, bytes=written)
        return written

    async def delete_job_artifact(self, job_id: UUID, name: str) -> None:
        await self.client.delete(f"/workflows/jobs/{job_id}/artifacts/{name}")
        logger.info("Job artifact deleted", job_id=str(job_id), artifact=name)

    async def delete_job(self, job_id: UUID) -> None:
        await self.client.delete(f"/workflows/jobs/{job_id}")
        logger.info("Job deleted", job_id=str(job_id))

    # -------------------------------------------------------------------------
    # Scans
    # -------------------------------------------------------------------------

    async def dispatch_scan(
        self,
        workflow_id: UUID,
        scan_name: str,
        inputs: WorkflowInputs | None = None,
    ) -> None:
        """Dispatch `scan_name` from the latest revision of the workflow."""
        body = DispatchScanRequest(scan_name=scan_name, inputs=inputs)
        await self.client.post(
            f"/workflows/{workflow_id}/scans/dispatch",
            json=body.model_dump(by_alias=True, mode="json"),
        )
        logger.info("Scan dispatched", workflow_id=str(workflow_id), scan_name=scan_name)

    # -------------------------------------------------------------------------
    # Blobs
    # -------------------------------------------------------------------------

    async def download_blob_file(self, path: str, destination: Path) -> int:
        presigned = await self.client.request_model(
            PresignedUrl, "GET", f"/blobs/{encode_path_segment(path)}",
        )
        written = await self.client.download_to(presigned.url, destination)
        logger.info("Blob downloaded", path=path, bytes=written)
        return written

    async def upload_blob_file(self, source: Path, dst: str) -> int:
        """
        Register `dst` with the blob store, then PUT the local file to it.

        The source is opened first, so an unreadable file never registers
        a remote path.
        """
        fh, size = open_upload_source(source)
        with fh:
            body = UploadBlobFileRequest(path=dst)
            presigned = await self.client.request_model(
                PresignedUrl, "POST", "/blobs/files",
                json=body.model_dump(by_alias=True, mode="json"),
            )
            sent = await self.client.upload_from(presigned.url, fh, size)
        logger.info("Blob uploaded", path=dst, bytes=sent)
        return sent

    # -------------------------------------------------------------------------
    # Runners
    # -------------------------------------------------------------------------

    async def create_runner_registration(self) -> RunnerRegistration:
        return await self.client.request_model(
            RunnerRegistration, "POST", "/runner-registrations", json={},
        )

    # -------------------------------------------------------------------------
    # Bhlast
    # -------------------------------------------------------------------------

    async def create_bhlast_domain(self) -> str:
        created = await self.client.request_model(
            CreatedResource, "POST", "/bhlast/domains", json={},
        )
        return created.id
