from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from extrepo.extension_id import ExtensionId

if TYPE_CHECKING:
    from extrepo.repository import RepositoryContext


def frozen_mapping(values: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class ExtensionAuthor:
    name: str | None
    url: str | None = None


@dataclass(frozen=True)
class ExtensionLicense:
    name: str
    content_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtensionScmConnection:
    system: str | None
    path: str | None


@dataclass(frozen=True)
class ExtensionScm:
    url: str | None
    connection: ExtensionScmConnection | None = None
    developer_connection: ExtensionScmConnection | None = None


@dataclass(frozen=True)
class ExtensionIssueManagement:
    system: str | None
    url: str | None


@dataclass(frozen=True)
class ExtensionRepositoryDescriptor:
    id: str | None
    type: str | None
    uri: str


@dataclass(frozen=True)
class ExtensionRating:
    total_votes: int
    average_vote: float
    repository: RepositoryContext | None = field(
        default=None, compare=False, repr=False
    )


@dataclass(frozen=True)
class ExtensionDependency:
    id: str | None
    constraint: str | None = None
    optional: bool = False
    repositories: tuple[ExtensionRepositoryDescriptor, ...] = ()
    properties: Mapping[str, str] = field(
        default_factory=frozen_mapping, hash=False
    )


@dataclass(frozen=True)
class ExtensionFile:
    """Downloadable package of an extension, served by its repository."""

    repository: RepositoryContext = field(compare=False, repr=False)
    extension_id: ExtensionId

    @property
    def url(self) -> str:
        return self.repository.file_url(self.extension_id)

    def download(self, target_path: Path) -> Path:
        """Download the file to *target_path* and return it."""
        return self.repository.download(self.url, target_path)


@dataclass(frozen=True)
class Extension:
    """Immutable extension assembled from a repository record."""

    id: ExtensionId
    repository: RepositoryContext = field(compare=False, repr=False)
    file: ExtensionFile = field(repr=False)
    type: str | None = None
    name: str | None = None
    summary: str | None = None
    description: str | None = None
    website: str | None = None
    features: tuple[str, ...] = ()
    rating: ExtensionRating | None = None
    authors: tuple[ExtensionAuthor, ...] = ()
    licenses: tuple[ExtensionLicense, ...] = ()
    scm: ExtensionScm | None = None
    issue_management: ExtensionIssueManagement | None = None
    category: str | None = None
    properties: Mapping[str, str] = field(
        default_factory=frozen_mapping, hash=False
    )
    repositories: tuple[ExtensionRepositoryDescriptor, ...] = ()
    dependencies: tuple[ExtensionDependency, ...] = ()

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key, default)
