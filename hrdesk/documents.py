# hrdesk/documents.py
#
# Document attachments travel as data URLs ("data:<mime>;base64,<payload>"),
# the same text a browser FileReader produces, so stored records stay plain
# JSON. Reading a file from disk is the only asynchronous step in hrdesk.

import asyncio
import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from hrdesk.errors import DocumentReadError
from hrdesk.schema import Document, DocumentCategory, DocumentFields
from hrdesk.store import HRStore

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileUpload:
    file_name: str
    file_type: str
    file_data: str


def guess_file_type(path: Path | str) -> str:
    """MIME type from the file name, or "" when it cannot be told."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or ""


def encode_data_url(content: bytes, mime_type: str = "") -> str:
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or FALLBACK_MIME_TYPE};base64,{payload}"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """Split a base64 data URL into (mime_type, content)."""
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")
    header, payload = data_url[len("data:"):].split(",", 1)
    params = header.split(";")
    if "base64" not in params[1:]:
        raise ValueError("Only base64 data URLs are supported")
    try:
        content = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return params[0] or FALLBACK_MIME_TYPE, content


async def read_file_as_data_url(path: Path | str) -> FileUpload:
    path = Path(path)
    try:
        content = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise DocumentReadError(path, e) from e
    file_type = guess_file_type(path)
    return FileUpload(file_name=path.name, file_type=file_type, file_data=encode_data_url(content, file_type))


async def attach_document(
    store: HRStore,
    path: Path | str,
    *,
    employee_id: str,
    category: DocumentCategory = "Other",
    description: str = "",
) -> Document:
    """Read `path` and add it to the store as a document of `employee_id`."""
    upload = await read_file_as_data_url(path)
    return store.add_document(DocumentFields(
        employee_id=employee_id,
        file_name=upload.file_name,
        file_type=upload.file_type,
        category=category,
        description=description,
        file_data=upload.file_data,
    ))


def upload_document(
    store: HRStore,
    path: Path | str,
    *,
    employee_id: str,
    category: DocumentCategory = "Other",
    description: str = "",
    on_complete: Optional[Callable[[Document], None]] = None,
) -> asyncio.Task:
    """
    Fire-and-forget upload: schedule the read on the running loop and return
    immediately. `on_complete` gets the new document once it is stored.
    A failed read is logged and nothing is added.
    """
    task = asyncio.get_running_loop().create_task(
        attach_document(store, path, employee_id=employee_id, category=category, description=description)
    )

    def _done(t: asyncio.Task) -> None:
        if t.cancelled():
            return
        error = t.exception()
        if error is not None:
            logger.error("Document upload for employee %s failed: %s", employee_id, error)
            return
        if on_complete is not None:
            on_complete(t.result())

    task.add_done_callback(_done)
    return task


def save_document_file(document: Document, directory: Path | str) -> Path:
    """Write the stored content of `document` to `directory/<fileName>`."""
    _, content = decode_data_url(document.file_data)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / Path(document.file_name).name
    target.write_bytes(content)
    return target
