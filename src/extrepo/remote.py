"""HTTP transport for REST extension repositories.

Fetching and downloading live here, apart from the descriptor adapter:
callers fetch a raw record, then hand it to :func:`extrepo.adapter.to_extension`
together with this repository as its context.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter, Retry

from extrepo.exceptions import RepositoryRequestError
from extrepo.extension_id import ExtensionId
from extrepo.internal_config import (
    DEFAULT_USER_AGENT,
    EXTENSION_FILE_PATH,
    EXTENSION_VERSION_PATH,
    HTTP_REQUEST_TIMEOUT_SECONDS,
    HTTP_RETRY_ALLOWED_METHODS,
    HTTP_RETRY_BACKOFF_FACTOR,
    HTTP_RETRY_STATUS_FORCELIST,
    HTTP_RETRY_TOTAL,
    HTTP_STREAM_CONNECT_TIMEOUT_SECONDS,
    HTTP_STREAM_READ_TIMEOUT_SECONDS,
)
from extrepo.models import ExtensionRepositoryDescriptor

logger: logging.Logger = logging.getLogger(__name__)


def _version_segment(extension_id: ExtensionId) -> str:
    return "" if extension_id.version is None else str(extension_id.version)


class RemoteExtensionRepository(object):
    """Fetch raw extension records from a REST extension repository."""

    session: requests.Session

    def __init__(self, descriptor: ExtensionRepositoryDescriptor) -> None:
        self._descriptor = descriptor
        retry_strategy = Retry(
            total=HTTP_RETRY_TOTAL,
            backoff_factor=HTTP_RETRY_BACKOFF_FACTOR,
            status_forcelist=HTTP_RETRY_STATUS_FORCELIST,
            allowed_methods=HTTP_RETRY_ALLOWED_METHODS,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session = requests.Session()
        self.session.headers["User-Agent"] = DEFAULT_USER_AGENT
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @property
    def descriptor(self) -> ExtensionRepositoryDescriptor:
        return self._descriptor

    def _url(self, template: str, extension_id: str, version: str) -> str:
        path = template.format(
            extension_id=quote(extension_id, safe=""),
            version=quote(version, safe=""),
        )
        return f"{self._descriptor.uri.rstrip('/')}/{path}"

    def file_url(self, extension_id: ExtensionId) -> str:
        return self._url(
            EXTENSION_FILE_PATH, extension_id.id, _version_segment(extension_id)
        )

    def fetch_record(self, extension_id: str, version: str) -> dict[str, Any]:
        """Return the raw JSON record of one extension version."""
        url = self._url(EXTENSION_VERSION_PATH, extension_id, version)
        logger.info(f"Obtaining metadata for {extension_id} ({version}) from {url}")
        try:
            r = self.session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=HTTP_REQUEST_TIMEOUT_SECONDS,
            )
            r.raise_for_status()
            record = r.json()
        except (requests.RequestException, ValueError) as e:
            raise RepositoryRequestError(
                f"Failed to fetch {extension_id} ({version}) from {url}: {e}"
            ) from e
        if not isinstance(record, dict):
            raise RepositoryRequestError(f"Unexpected payload for {extension_id}")
        return record

    async def fetch_record_async(
        self, extension_id: str, version: str
    ) -> dict[str, Any]:
        """Asynchronously fetch the raw record of one extension version."""
        return await asyncio.to_thread(self.fetch_record, extension_id, version)

    def download(self, url: str, target_path: Path) -> Path:
        """Stream *url* into a temporary file, then move it to *target_path*."""
        logger.info(f"Downloading {url}")
        with tempfile.TemporaryDirectory(prefix="extrepo-download.") as tmp_dir:
            file_path = Path(tmp_dir, target_path.name)
            try:
                with open(file_path, "wb") as output:
                    response: requests.Response = self.session.get(
                        url,
                        stream=True,
                        timeout=(
                            HTTP_STREAM_CONNECT_TIMEOUT_SECONDS,
                            HTTP_STREAM_READ_TIMEOUT_SECONDS,
                        ),
                    )
                    response.raise_for_status()

                    for chunk in response.iter_content(chunk_size=1024 * 8):
                        if chunk:
                            output.write(chunk)
            except requests.RequestException as e:
                raise RepositoryRequestError(f"Failed to download {url}: {e}") from e

            target_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(file_path, target_path)
            return target_path
