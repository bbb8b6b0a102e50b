"""Destination resolution for downloads."""

from pathlib import Path, PurePosixPath

from bh.core.exceptions import ValidationError


def resolve_artifact_destination(artifact_name: str, output: Path | None) -> Path:
    """
    Where a job artifact lands.

    An existing directory receives the artifact under its own name, any
    other path is used as-is, and no path means the working directory.
    """
    if output is None:
        return Path.cwd() / artifact_name
    if output.is_dir():
        return output / artifact_name
    return output


def resolve_blob_destination(src: str, dst: Path | None) -> Path:
    """
    Where a blob download lands.

    An existing directory receives the blob under its full remote path, any
    other path is used as-is, and no path means `<cwd>/<basename of src>`.
    Nothing is created here; the download creates missing parents once the
    transfer starts.

    Raises:
        ValidationError: If `src` has no file name or climbs out with '..'
    """
    remote = PurePosixPath(src)
    if not remote.name or ".." in remote.parts:
        raise ValidationError(f"Invalid blob path: '{src}'")

    if dst is None:
        return Path.cwd() / remote.name
    if dst.is_dir():
        relative = remote.relative_to(remote.anchor) if remote.anchor else remote
        return dst.joinpath(*relative.parts)
    return dst
