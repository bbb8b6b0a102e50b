"""
BountyHub API Schemas.

Request bodies are serialized with camelCase aliases, as the API expects.
Response models ignore unknown fields so additive API changes do not
break the client.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

WorkflowInputs = dict[str, str | bool]


class _RequestBase(BaseModel):
    """Outgoing body. Dump with by_alias=True."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _ResponseBase(BaseModel):
    """Incoming body."""

    model_config = ConfigDict(extra="ignore")


class DispatchScanRequest(_RequestBase):
    """Body of POST /workflows/{workflow_id}/scans/dispatch."""

    scan_name: str
    inputs: WorkflowInputs | None = None


class UploadBlobFileRequest(_RequestBase):
    """Body of POST /blobs/files."""

    path: str


class PresignedUrl(_ResponseBase):
    """Storage URL returned for artifact/blob transfers."""

    url: str


class RunnerRegistration(_ResponseBase):
    url: str
    token: str


class CreatedResource(_ResponseBase):
    id: str
