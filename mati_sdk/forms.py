"""Multipart form builder for upload endpoints."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional, Tuple, Union

from mati_sdk.errors import ValidationError

FileInput = Union[bytes, bytearray, str, Path, IO[bytes]]

JPEG = "image/jpeg"


def read_file_input(file: FileInput, name: str = "file") -> Union[bytes, IO[bytes]]:
    """Normalize an upload source.

    Paths are read eagerly so no file handle outlives the call; bytes and
    binary file objects are passed through for httpx to stream.
    """
    if file is None:
        raise ValidationError(f"{name} is required")
    if isinstance(file, (str, Path)):
        path = Path(file)
        if not path.is_file():
            raise ValidationError(f"{name} does not exist: {path}")
        return path.read_bytes()
    if isinstance(file, (bytes, bytearray)):
        if not file:
            raise ValidationError(f"{name} must not be empty")
        return bytes(file)
    if hasattr(file, "read"):
        return file
    raise ValidationError(
        f"{name} must be bytes, a path or a binary file object, got {type(file).__name__}"
    )


class MultipartForm:
    """Ordered multipart/form-data body.

    Text fields and file parts share one list so the wire order is exactly
    the append order. Text fields become parts without a filename.
    """

    def __init__(self) -> None:
        self._parts: List[Tuple[str, Tuple[Optional[str], Any, Optional[str]]]] = []

    def append(self, name: str, value: Any) -> "MultipartForm":
        self._parts.append((name, (None, str(value), None)))
        return self

    def append_file(
        self,
        name: str,
        file: FileInput,
        filename: str,
        content_type: str = JPEG,
    ) -> "MultipartForm":
        self._parts.append((name, (filename, read_file_input(file, name), content_type)))
        return self

    def extend(self, values: Mapping[str, Any], key_format: str = "{}") -> "MultipartForm":
        """Append one field per mapping key, in the mapping's iteration order."""
        for key, value in values.items():
            self.append(key_format.format(key), value)
        return self

    def part_names(self) -> List[str]:
        return [name for name, _ in self._parts]

    def fields(self) -> Dict[str, str]:
        """Text fields only, by name."""
        return {name: part[1] for name, part in self._parts if part[0] is None}

    def filenames(self) -> Dict[str, str]:
        """File parts only: part name -> filename."""
        return {name: part[0] for name, part in self._parts if part[0] is not None}

    def get(self, name: str) -> Optional[str]:
        return self.fields().get(name)

    def as_httpx(self) -> Dict[str, Any]:
        """Keyword arguments for ``httpx.Client.request``; httpx adds the boundary.

        httpx sends nothing for an empty ``files`` list, so an empty form is
        encoded by hand as a lone closing boundary.
        """
        if not self._parts:
            boundary = uuid.uuid4().hex
            return {
                "content": f"--{boundary}--\r\n".encode("ascii"),
                "headers": {"Content-Type": f"multipart/form-data; boundary={boundary}"},
            }
        files = []
        for name, (filename, content, content_type) in self._parts:
            if filename is None:
                content = content.encode("utf-8")
            files.append((name, (filename, content, content_type)))
        return {"files": files}

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        return f"MultipartForm(parts={self.part_names()!r})"
