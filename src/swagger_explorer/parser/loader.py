"""Load and dereference OpenAPI/Swagger specifications.

Fetching, decoding and ``$ref`` resolution are all done by collaborators:
``aiohttp`` for URLs, ``aiofiles`` for local files, PyYAML for decoding (JSON
is a subset of YAML) and ``jsonref`` for dereferencing. Any error they raise
is reported as a ``LoadFailure`` carrying the collaborator's message.
"""

import asyncio
import time
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlparse

import aiofiles
import aiohttp
import jsonref
import yaml
from openapi_spec_validator import validate

from swagger_explorer.config.logging import get_logger, log_performance
from swagger_explorer.config.settings import LoaderConfig
from swagger_explorer.exceptions import LoadFailure

logger = get_logger(__name__)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


class SpecificationLoader:
    """Fetches a specification and returns it fully dereferenced."""

    def __init__(self, config: Optional[LoaderConfig] = None):
        """Initialize loader.

        Args:
            config: Loader configuration, defaults are used if None
        """
        self.config = config or LoaderConfig()
        self.logger = get_logger(__name__)

    async def load(self, source: str) -> Dict[str, Any]:
        """Fetch, decode and dereference the specification at ``source``.

        Args:
            source: URL (http/https), ``file://`` URI or filesystem path

        Returns:
            Self-contained document with every ``$ref`` resolved inline

        Raises:
            LoadFailure: The source could not be read, decoded or dereferenced
        """
        start_time = time.time()
        self.logger.info("Loading specification", source=source)

        try:
            if is_url(source):
                content = await self._fetch_url(source)
                base_uri = source
            else:
                path = self._local_path(source)
                content = await self._read_file(path)
                base_uri = path.resolve().as_uri()

            raw = self._decode(content)

            if self.config.validate_openapi:
                await asyncio.to_thread(self._validate, raw)

            document = await asyncio.to_thread(self._dereference, raw, base_uri)

        except LoadFailure as e:
            self.logger.warning(
                "Specification load failed", source=source, error=e.reason
            )
            raise
        except Exception as e:
            message = _failure_reason(e)
            self.logger.warning(
                "Specification load failed",
                source=source,
                error=message,
                error_type=type(e).__name__,
            )
            raise LoadFailure(source, message) from e

        log_performance(
            self.logger,
            "load_specification",
            (time.time() - start_time) * 1000,
            source=source,
        )
        return document

    async def _fetch_url(self, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.config.fetch_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                body = await response.read()

        self._check_size(url, len(body))
        return body.decode("utf-8")

    async def _read_file(self, path: Path) -> str:
        if not path.is_file():
            raise LoadFailure(str(path), f"File not found: {path}")

        self._check_size(str(path), path.stat().st_size)
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    def _local_path(self, source: str) -> Path:
        parsed = urlparse(source)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        return Path(source).expanduser()

    def _check_size(self, source: str, size: int) -> None:
        if size > self.config.max_document_bytes:
            raise LoadFailure(
                source,
                f"Document is {size} bytes, larger than the "
                f"{self.config.max_document_bytes} byte limit",
            )

    def _decode(self, content: str) -> Dict[str, Any]:
        data = yaml.safe_load(content)
        if not isinstance(data, dict) or not (
            "openapi" in data or "swagger" in data
        ):
            raise ValueError("Not a valid OpenAPI or Swagger document")
        return data

    def _validate(self, raw: Dict[str, Any]) -> None:
        validate(raw)

    def _dereference(self, raw: Dict[str, Any], base_uri: str) -> Dict[str, Any]:
        # Recursive schemas become recursive Python structures
        return jsonref.replace_refs(
            raw,
            base_uri=base_uri,
            loader=self._load_reference,
            proxies=False,
            lazy_load=False,
        )

    def _load_reference(self, uri: str) -> Any:
        """Load an external document referenced from the specification."""
        parsed = urlparse(uri)
        if parsed.scheme == "file":
            content = Path(unquote(parsed.path)).read_text(encoding="utf-8")
            return yaml.safe_load(content)
        return jsonref.jsonloader(uri)


def _failure_reason(error: Exception) -> str:
    """Short, client-facing reason for a collaborator error."""
    if isinstance(error, aiohttp.ClientResponseError):
        return f"HTTP {error.status} {error.message}".rstrip()
    # str() of a schema validation error embeds the whole metaschema
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__
