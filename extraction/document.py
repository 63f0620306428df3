"""
Document handle resolution: turn a path, an open stream, or a storage attachment with
scoped-open semantics into one DocumentSource before any parsing begins.
The source stays valid for the whole extraction (direct pass and OCR fallback).
"""
from __future__ import annotations

import io
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator

from core.exceptions import UnsupportedDocumentError

MATERIALIZED_NAME = "source.pdf"


def _readable(obj: Any) -> bool:
    return obj is not None and callable(getattr(obj, "read", None))


def _seekable(stream: Any) -> bool:
    seekable = getattr(stream, "seekable", None)
    if callable(seekable):
        try:
            return bool(seekable())
        except (OSError, ValueError):
            return False
    return callable(getattr(stream, "seek", None)) and callable(getattr(stream, "tell", None))


def _local_path(obj: Any) -> Path | None:
    """Filesystem path behind a stream (e.g. open(...).name), if it points at a real file."""
    name = getattr(obj, "name", None)
    if isinstance(name, (str, os.PathLike)):
        path = Path(name)
        if path.is_file():
            return path
    return None


class DocumentSource:
    """
    Single byte source for one extraction. Every consumer gets the stream rewound to
    where it started; non-seekable streams are buffered in memory once.
    """

    def __init__(self, stream: BinaryIO, *, path: Path | None = None, kind: str = "stream") -> None:
        if not _seekable(stream):
            stream = io.BytesIO(stream.read())
        self._stream = stream
        self._start = stream.tell()
        self.path = path
        self.kind = kind  # "path" | "stream" | "attachment"

    def reader(self) -> BinaryIO:
        """Stream positioned at the start of the document."""
        self._stream.seek(self._start)
        return self._stream

    def read_bytes(self) -> bytes:
        return self.reader().read()

    def materialize(self, directory: Path) -> Path:
        """Filesystem path for tools that need one; streams are copied into directory."""
        if self.path is not None and self.path.is_file():
            return self.path
        target = Path(directory) / MATERIALIZED_NAME
        target.write_bytes(self.read_bytes())
        return target


@contextmanager
def _scoped_open(attachment: Any) -> Iterator[BinaryIO]:
    """Open a storage attachment for the duration of the block; close it afterwards."""
    opened = attachment.open()
    if hasattr(opened, "__enter__") and hasattr(opened, "__exit__"):
        with opened as handle:
            stream = handle if _readable(handle) else attachment
            if not _readable(stream):
                raise UnsupportedDocumentError(f"Attachment is not readable after open: {type(attachment).__name__}")
            yield stream
        return
    stream = opened if _readable(opened) else attachment
    if not _readable(stream):
        raise UnsupportedDocumentError(f"Attachment is not readable after open: {type(attachment).__name__}")
    try:
        yield stream
    finally:
        close = getattr(stream, "close", None)
        if callable(close):
            close()


@contextmanager
def open_document(reference: Any) -> Iterator[DocumentSource]:
    """
    Resolve reference into a DocumentSource for the duration of the block.
    Paths and scoped attachments are opened and closed here; caller-owned streams are left open.
    Raises UnsupportedDocumentError for anything else (before any parsing).
    """
    if isinstance(reference, (str, os.PathLike)):
        path = Path(reference)
        with open(path, "rb") as fh:
            yield DocumentSource(fh, path=path, kind="path")
        return
    if _readable(reference):
        yield DocumentSource(reference, path=_local_path(reference), kind="stream")
        return
    if callable(getattr(reference, "open", None)):
        with _scoped_open(reference) as stream:
            yield DocumentSource(stream, path=_local_path(stream), kind="attachment")
        return
    raise UnsupportedDocumentError(f"Unsupported document type: {type(reference).__name__}")
