"""Configuration sources: local files and HTTP(S) URLs."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx


logger = logging.getLogger(__name__)


SCHEME_SEPARATOR = "://"
FILE_SCHEME = "file"
HTTP_SCHEMES = ("http", "https")


class ConfigSourceError(Exception):
    """The configuration could not be located or fetched."""
    pass


@dataclass(frozen=True)
class Locator:
    """A parsed configuration locator."""
    scheme: str
    location: str

    @property
    def is_file(self) -> bool:
        return self.scheme == FILE_SCHEME

    @property
    def path(self) -> Path:
        if not self.is_file:
            raise ValueError(f"{self.scheme} locator has no local path")
        return Path(self.location)


def parse_locator(locator: str) -> Locator:
    """Split a locator into scheme and location.

    ``file://<path>``, ``http://...`` and ``https://...`` are accepted; a
    string without a scheme is a local path.
    """
    locator = (locator or "").strip()
    if not locator:
        raise ConfigSourceError("Configuration locator is empty")

    scheme, separator, rest = locator.partition(SCHEME_SEPARATOR)
    if not separator:
        return Locator(FILE_SCHEME, locator)

    scheme = scheme.lower()
    if not rest:
        raise ConfigSourceError(f"Configuration locator has no location: {locator}")
    if scheme == FILE_SCHEME:
        return Locator(FILE_SCHEME, rest)
    if scheme in HTTP_SCHEMES:
        return Locator(scheme, locator)
    raise ConfigSourceError(f"Unsupported configuration scheme {scheme!r} in {locator}")


async def fetch(locator: Locator, timeout: float = 10.0) -> bytes:
    """Read the raw configuration document."""
    logger.info(f"Reading protocol: {locator.scheme}, at location: {locator.location}")

    if locator.is_file:
        try:
            return await asyncio.to_thread(locator.path.read_bytes)
        except OSError as e:
            raise ConfigSourceError(f"Cannot read {locator.location}: {e}") from e

    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(locator.location)
            response.raise_for_status()
            return response.content
    except httpx.RequestError as e:
        raise ConfigSourceError(f"Connection error fetching {locator.location}: {e}") from e
    except httpx.HTTPStatusError as e:
        raise ConfigSourceError(
            f"HTTP error {e.response.status_code} fetching {locator.location}"
        ) from e
