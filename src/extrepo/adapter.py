"""Translate raw repository records into :class:`~extrepo.models.Extension`.

Records come from the network and are only loosely validated, so every
sub-field is converted on its own: a malformed author url, license body or
repository uri degrades to an absent value (or the entry is left out)
while the rest of the record is still used. Only a missing id rejects
the record.
"""

from __future__ import annotations

import logging

from extrepo.conversions import (
    to_lines,
    to_repository_descriptor,
    to_scm_connection,
    to_url,
)
from extrepo.dependency import to_extension_dependency, to_properties
from extrepo.exceptions import InvalidExtensionDescriptorError, InvalidVersionError
from extrepo.extension_id import ExtensionId
from extrepo.license import LicenseResolver
from extrepo.models import (
    Extension,
    ExtensionAuthor,
    ExtensionDependency,
    ExtensionFile,
    ExtensionIssueManagement,
    ExtensionLicense,
    ExtensionRating,
    ExtensionRepositoryDescriptor,
    ExtensionScm,
    frozen_mapping,
)
from extrepo.record import (
    RawRecord,
    as_float,
    as_int,
    as_map,
    as_map_list,
    as_str,
    as_string_list,
)
from extrepo.repository import RepositoryContext
from extrepo.version import VersionParser, parse_version

logger: logging.Logger = logging.getLogger(__name__)


class ExtensionBuilder(object):
    """Collect extension fields and produce one immutable Extension."""

    def __init__(self, repository: RepositoryContext, extension_id: ExtensionId):
        self.repository = repository
        self.extension_id = extension_id
        self.type: str | None = None
        self.name: str | None = None
        self.summary: str | None = None
        self.description: str | None = None
        self.website: str | None = None
        self.features: list[str] = []
        self.rating: ExtensionRating | None = None
        self.authors: list[ExtensionAuthor] = []
        self.licenses: list[ExtensionLicense] = []
        self.scm: ExtensionScm | None = None
        self.issue_management: ExtensionIssueManagement | None = None
        self.category: str | None = None
        self.properties: dict[str, str] = {}
        self.repositories: list[ExtensionRepositoryDescriptor] = []
        self.dependencies: list[ExtensionDependency] = []

    def build(self) -> Extension:
        return Extension(
            id=self.extension_id,
            repository=self.repository,
            file=ExtensionFile(self.repository, self.extension_id),
            type=self.type,
            name=self.name,
            summary=self.summary,
            description=self.description,
            website=self.website,
            features=tuple(self.features),
            rating=self.rating,
            authors=tuple(self.authors),
            licenses=tuple(self.licenses),
            scm=self.scm,
            issue_management=self.issue_management,
            category=self.category,
            properties=frozen_mapping(self.properties),
            repositories=tuple(self.repositories),
            dependencies=tuple(self.dependencies),
        )


class ExtensionDescriptorAdapter(object):
    """Build extensions owned by *repository* from raw records."""

    def __init__(
        self,
        license_resolver: LicenseResolver,
        repository: RepositoryContext,
        version_parser: VersionParser = parse_version,
    ) -> None:
        self.license_resolver = license_resolver
        self.repository = repository
        self.version_parser = version_parser

    def adapt(self, record: RawRecord) -> Extension:
        builder = ExtensionBuilder(self.repository, self.to_extension_id(record))

        builder.type = as_str(record.get("type"))
        builder.name = as_str(record.get("name"))
        builder.summary = as_str(record.get("summary"))
        builder.description = as_str(record.get("description"))
        builder.website = as_str(record.get("website"))
        builder.features = as_string_list(record.get("features"))
        builder.rating = self.to_rating(as_map(record.get("rating")))

        for author in as_map_list(record.get("authors")):
            builder.authors.append(self.to_author(author))

        for license in as_map_list(record.get("licenses")):
            extension_license = self.to_license(license)
            if extension_license is not None:
                builder.licenses.append(extension_license)

        builder.scm = self.to_scm(as_map(record.get("scm")))
        builder.issue_management = self.to_issue_management(
            as_map(record.get("issueManagement"))
        )
        builder.category = as_str(record.get("category"))
        builder.properties = to_properties(as_map_list(record.get("properties")))

        for repository in as_map_list(record.get("repositories")):
            descriptor = to_repository_descriptor(repository)
            if descriptor is not None:
                builder.repositories.append(descriptor)

        for dependency in as_map_list(record.get("dependencies")):
            builder.dependencies.append(to_extension_dependency(dependency))

        return builder.build()

    def to_extension_id(self, record: RawRecord) -> ExtensionId:
        extension_id = as_str(record.get("id"))
        if extension_id is None or not extension_id.strip():
            raise InvalidExtensionDescriptorError(
                f"Extension record has no id: {record.get('id')!r}"
            )

        version = as_str(record.get("version"))
        if version is None or not version.strip():
            return ExtensionId(extension_id)
        try:
            return ExtensionId(
                extension_id, version, version_parser=self.version_parser
            )
        except InvalidVersionError as e:
            logger.debug(f"Ignoring version of {extension_id}: {e}")
            return ExtensionId(extension_id)

    def to_rating(self, block: RawRecord | None) -> ExtensionRating | None:
        if block is None:
            return None
        return ExtensionRating(
            total_votes=as_int(block.get("totalVotes")),
            average_vote=as_float(block.get("averageVote")),
            repository=self.repository,
        )

    def to_author(self, block: RawRecord) -> ExtensionAuthor:
        url = to_url(block.get("url"))
        if url is None and block.get("url") is not None:
            logger.debug(f"Ignoring invalid author url {block.get('url')!r}")
        return ExtensionAuthor(name=as_str(block.get("name")), url=url)

    def to_license(self, block: RawRecord) -> ExtensionLicense | None:
        name = as_str(block.get("name"))
        if name is None:
            logger.debug("Skipping license without name")
            return None

        known_license = self.license_resolver.get_license(name)
        if known_license is not None:
            return known_license
        return ExtensionLicense(name, to_lines(block.get("content")))

    def to_scm(self, block: RawRecord | None) -> ExtensionScm | None:
        if block is None:
            return None
        return ExtensionScm(
            url=as_str(block.get("url")),
            connection=to_scm_connection(as_map(block.get("connection"))),
            developer_connection=to_scm_connection(
                as_map(block.get("developerConnection"))
            ),
        )

    def to_issue_management(
        self, block: RawRecord | None
    ) -> ExtensionIssueManagement | None:
        if block is None:
            return None
        return ExtensionIssueManagement(
            system=as_str(block.get("system")),
            url=as_str(block.get("url")),
        )


def to_extension(
    record: RawRecord,
    license_resolver: LicenseResolver,
    repository: RepositoryContext,
) -> Extension:
    """Build the extension described by *record*, owned by *repository*."""
    return ExtensionDescriptorAdapter(license_resolver, repository).adapt(record)
