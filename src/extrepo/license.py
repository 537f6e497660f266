from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import json5

from extrepo.conversions import to_lines
from extrepo.exceptions import LicenseRegistryError
from extrepo.models import ExtensionLicense

logger: logging.Logger = logging.getLogger(__name__)


class LicenseResolver(Protocol):
    def get_license(self, name: str) -> ExtensionLicense | None: ...


class LicenseRegistry(object):
    """Canonical licenses, looked up by case-insensitive name."""

    licenses: dict[str, ExtensionLicense]

    def __init__(self, licenses: list[ExtensionLicense] | None = None) -> None:
        self.licenses = {}
        for license in licenses or []:
            self.register(license)

    def register(self, license: ExtensionLicense) -> None:
        self.licenses[license.name.lower()] = license

    def get_license(self, name: str) -> ExtensionLicense | None:
        return self.licenses.get(name.lower())

    @classmethod
    def from_file(cls, path: Path) -> LicenseRegistry:
        """Load a ``{name: content}`` mapping from a JSON5 file."""
        try:
            # use json5 so license files may contain comments
            data = json5.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise LicenseRegistryError(f"Cannot read licenses from {path}: {e}") from e
        if not isinstance(data, dict):
            raise LicenseRegistryError(f"{path} must contain a mapping of licenses")

        registry = cls()
        for name, content in data.items():
            registry.register(ExtensionLicense(str(name), to_lines(content)))
        logger.debug(f"Loaded {len(registry.licenses)} licenses from {path}")
        return registry
