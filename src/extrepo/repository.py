from __future__ import annotations

from pathlib import Path
from typing import Protocol

from extrepo.extension_id import ExtensionId
from extrepo.models import ExtensionRepositoryDescriptor


class RepositoryContext(Protocol):
    """Repository owning an extension, as seen by the descriptor adapter."""

    @property
    def descriptor(self) -> ExtensionRepositoryDescriptor: ...

    def file_url(self, extension_id: ExtensionId) -> str: ...

    def download(self, url: str, target_path: Path) -> Path: ...
