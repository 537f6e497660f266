#! /bin/env python3
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

# for parsing records that may contain comments or trailing commas
import json5
import typer

from extrepo.adapter import to_extension
from extrepo.exceptions import ExtrepoError
from extrepo.internal_config import (
    DEFAULT_REPOSITORY_ID,
    DEFAULT_REPOSITORY_TYPE,
    DEFAULT_REPOSITORY_URI,
    REPOSITORY_URI_ENV,
)
from extrepo.license import LicenseRegistry
from extrepo.models import Extension, ExtensionRepositoryDescriptor
from extrepo.remote import RemoteExtensionRepository

app: typer.Typer = typer.Typer()
logger: logging.Logger = logging.getLogger(__name__)


def _configure_logging(log_level: str) -> None:
    _log_level = getattr(logging, log_level.upper(), None)
    if not isinstance(_log_level, int):
        raise ValueError(f"Invalid log level: {log_level!r}")
    logging.basicConfig(
        level=_log_level,
        format="%(relativeCreated)d [%(levelname)s] %(message)s",
    )


def _open_repository(repository_uri: str) -> RemoteExtensionRepository:
    uri = (
        repository_uri
        or os.environ.get(REPOSITORY_URI_ENV, "").strip()
        or DEFAULT_REPOSITORY_URI
    )
    return RemoteExtensionRepository(
        ExtensionRepositoryDescriptor(
            id=DEFAULT_REPOSITORY_ID, type=DEFAULT_REPOSITORY_TYPE, uri=uri
        )
    )


def _load_licenses(licenses: str) -> LicenseRegistry:
    if not licenses:
        return LicenseRegistry()
    return LicenseRegistry.from_file(Path(licenses))


def extension_to_dict(extension: Extension) -> dict[str, Any]:
    """Render an extension as plain JSON-compatible data."""
    rating = extension.rating
    scm = extension.scm
    return {
        "id": extension.id.id,
        "version": (
            None if extension.id.version is None else str(extension.id.version)
        ),
        "type": extension.type,
        "name": extension.name,
        "summary": extension.summary,
        "description": extension.description,
        "website": extension.website,
        "features": list(extension.features),
        "rating": (
            None
            if rating is None
            else {"totalVotes": rating.total_votes, "averageVote": rating.average_vote}
        ),
        "authors": [{"name": a.name, "url": a.url} for a in extension.authors],
        "licenses": [
            {"name": lic.name, "content": list(lic.content_lines)}
            for lic in extension.licenses
        ],
        "scm": (
            None
            if scm is None
            else {
                "url": scm.url,
                "connection": (
                    None
                    if scm.connection is None
                    else {"system": scm.connection.system, "path": scm.connection.path}
                ),
                "developerConnection": (
                    None
                    if scm.developer_connection is None
                    else {
                        "system": scm.developer_connection.system,
                        "path": scm.developer_connection.path,
                    }
                ),
            }
        ),
        "issueManagement": (
            None
            if extension.issue_management is None
            else {
                "system": extension.issue_management.system,
                "url": extension.issue_management.url,
            }
        ),
        "category": extension.category,
        "properties": dict(extension.properties),
        "repositories": [
            {"id": r.id, "type": r.type, "uri": r.uri} for r in extension.repositories
        ],
        "dependencies": [
            {
                "id": d.id,
                "constraint": d.constraint,
                "optional": d.optional,
                "repositories": [
                    {"id": r.id, "type": r.type, "uri": r.uri} for r in d.repositories
                ],
                "properties": dict(d.properties),
            }
            for d in extension.dependencies
        ],
        "file": extension.file.url,
    }


@app.command()
def show(
    record_path: str,
    repository_uri: str = "",
    licenses: str = "",
    log_level: str = "info",
) -> None:
    """Adapt a raw extension record stored in a JSON file and print it."""
    _configure_logging(log_level)
    try:
        record = json5.loads(Path(record_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read {record_path}: {e}")
        raise typer.Exit(code=1) from e
    if not isinstance(record, dict):
        logger.error(f"{record_path} does not contain an extension record")
        raise typer.Exit(code=1)

    try:
        extension = to_extension(
            record, _load_licenses(licenses), _open_repository(repository_uri)
        )
    except ExtrepoError as e:
        logger.error(f"{e}")
        raise typer.Exit(code=1) from e
    typer.echo(json.dumps(extension_to_dict(extension), indent=2))


@app.command()
def fetch(
    extension_id: str,
    version: str,
    repository_uri: str = "",
    licenses: str = "",
    log_level: str = "info",
) -> None:
    """Fetch one extension version from a remote repository and print it."""
    _configure_logging(log_level)
    repository = _open_repository(repository_uri)
    try:
        record = repository.fetch_record(extension_id, version)
        extension = to_extension(record, _load_licenses(licenses), repository)
    except ExtrepoError as e:
        logger.error(f"{e}")
        raise typer.Exit(code=1) from e
    typer.echo(json.dumps(extension_to_dict(extension), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
