"""Consumption of streamed image pull progress."""

import json
import logging
from typing import Iterable, Iterator

from convoy.runtime.base import RuntimeClientError


logger = logging.getLogger(__name__)


def iter_lines(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Re-split an arbitrarily chunked byte stream into lines."""
    buffer = b""
    for chunk in chunks:
        if isinstance(chunk, str):
            chunk = chunk.encode()
        buffer += chunk
        while b"\n" in buffer:
            line, buffer = buffer.split(b"\n", 1)
            yield line
    if buffer:
        yield buffer


def consume_pull_stream(image_ref: str, chunks: Iterable[bytes]) -> int:
    """Block until a pull stream is exhausted, logging each status record.

    Returns the number of records read. Raises RuntimeClientError when a
    record cannot be decoded or reports an error.
    """
    records = 0
    try:
        for line in iter_lines(chunks):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except ValueError as e:
                raise RuntimeClientError(f"Malformed pull progress for {image_ref}: {line[:80]!r}") from e

            records += 1
            if record.get("error"):
                raise RuntimeClientError(f"Pull of {image_ref} failed: {record['error']}")

            status = record.get("status", "")
            layer = record.get("id")
            message = f"{image_ref} image pull status: {status}"
            if layer:
                message = f"{message} ({layer})"
            # Per-layer byte counters arrive many times a second.
            if record.get("progressDetail"):
                logger.debug(message)
            else:
                logger.info(message)
    finally:
        close = getattr(chunks, "close", None)
        if close is not None:
            close()
    return records
