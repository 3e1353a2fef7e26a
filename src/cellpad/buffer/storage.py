"""File I/O boundary for documents."""

from __future__ import annotations

import errno
import os
import tempfile
from typing import List, Protocol, Sequence

from .errors import DocumentIOError


class LineStore(Protocol):
    """Protocol describing how documents reach persistent storage."""

    def read_lines(self, path: str) -> List[str]:
        """Return the lines of ``path`` without their terminators."""
        ...

    def write_lines(self, path: str, lines: Sequence[str]) -> None:
        """Replace the contents of ``path`` with ``lines``."""
        ...


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, dropping a single trailing terminator."""

    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def join_lines(lines: Sequence[str]) -> str:
    """Inverse of ``split_lines``; a lone empty line serializes to nothing."""

    text = "\n".join(lines)
    return text + "\n" if text or len(lines) > 1 else ""


class FileLineStore:
    """UTF-8 text files, saved atomically through a sibling temp file."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_lines(self, path: str) -> List[str]:
        try:
            with open(path, "rb") as handle:
                raw = handle.read()
        except OSError as exc:
            raise DocumentIOError(
                f"Could not open file: {path} ({exc.strerror or exc})", path=path
            ) from exc
        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise DocumentIOError(
                f"Could not decode file: {path} ({exc.reason})", path=path
            ) from exc
        return split_lines(text)

    def write_lines(self, path: str, lines: Sequence[str]) -> None:
        payload = join_lines(lines).encode(self.encoding)
        directory = os.path.dirname(os.path.abspath(path))
        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=directory,
                prefix=f".{os.path.basename(path)}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            if os.path.exists(path):
                os.chmod(temp_name, os.stat(path).st_mode & 0o7777)
            os.replace(temp_name, path)
            temp_name = None
        except OSError as exc:
            if exc.errno == errno.ENOSPC:
                reason = "No space left on device"
            else:
                reason = exc.strerror or str(exc)
            raise DocumentIOError(
                f"Could not write file: {path} ({reason})", path=path
            ) from exc
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)


__all__ = ["LineStore", "FileLineStore", "split_lines", "join_lines"]
