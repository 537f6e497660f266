from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from extrepo.license import LicenseRegistry
from extrepo.models import ExtensionLicense, ExtensionRepositoryDescriptor


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="run tests that talk to a live extension repository",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: needs network access to a repository")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--slow"):
        return

    skip_slow = pytest.mark.skip(reason="need --slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def repository() -> SimpleNamespace:
    """In-memory repository context recording requested downloads."""
    downloads: list[tuple[str, Path]] = []

    def _download(url: str, target_path: Path) -> Path:
        downloads.append((url, target_path))
        return target_path

    return SimpleNamespace(
        descriptor=ExtensionRepositoryDescriptor(
            "remote", "xwiki", "https://repo.example.org/rest"
        ),
        file_url=lambda extension_id: f"https://repo.example.org/files/{extension_id}",
        download=_download,
        downloads=downloads,
    )


@pytest.fixture
def licenses() -> LicenseRegistry:
    return LicenseRegistry(
        [ExtensionLicense("GNU Lesser General Public License 2.1", ("LGPL body",))]
    )
