"""Ways of handing a rendered export document to the outside world."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, TextIO

from .file_paths import sanitize_filename

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """The environment refused the export document (disk, stream, ...)."""


class DocumentDelivery(Protocol):
    """Deliver ``text`` as a named document; return where it ended up."""

    def deliver(self, filename: str, text: str, mime_type: str) -> str:  # pragma: no cover - protocol
        ...


@dataclass
class FileDelivery:
    """Write the document into ``directory`` under its (sanitized) filename."""

    directory: Path

    def deliver(self, filename: str, text: str, mime_type: str) -> str:
        path = Path(self.directory).expanduser() / sanitize_filename(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            raise DeliveryError(f"Could not write {path}: {exc}") from exc
        logger.info("Wrote %s (%s, %d bytes)", path, mime_type, len(text.encode("utf-8")))
        return str(path)


@dataclass
class StreamDelivery:
    """
    Dump the document onto a text stream so it can be saved by hand.

    Defaults to ``sys.stdout`` at delivery time so redirected output is
    honoured.
    """

    stream: Optional[TextIO] = None

    def deliver(self, filename: str, text: str, mime_type: str) -> str:
        target = self.stream if self.stream is not None else sys.stdout
        try:
            target.write(text)
            target.flush()
        except (OSError, ValueError) as exc:
            raise DeliveryError(f"Could not write {filename} to stream: {exc}") from exc
        return getattr(target, "name", "<stream>")


@dataclass
class CallableDelivery:
    """Adapt a plain ``func(filename, text, mime_type)`` callable."""

    func: Callable[[str, str, str], object]

    def deliver(self, filename: str, text: str, mime_type: str) -> str:
        try:
            result = self.func(filename, text, mime_type)
        except DeliveryError:
            raise
        except Exception as exc:
            raise DeliveryError(f"Could not deliver {filename}: {exc}") from exc
        return str(result) if result is not None else filename
