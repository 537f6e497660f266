from __future__ import annotations

import json
import logging

from extrepo.conversions import to_repository_descriptor
from extrepo.models import ExtensionDependency, frozen_mapping
from extrepo.record import RawRecord, as_bool, as_map_list, as_str

logger: logging.Logger = logging.getLogger(__name__)


def _property_value(value: object) -> str:
    if value is None:
        return ""
    text = as_str(value)
    if text is None:
        # structured values keep their JSON form
        return json.dumps(value, sort_keys=True)
    return text


def to_properties(blocks: list[RawRecord]) -> dict[str, str]:
    """Map ``{key, value}`` entries, later keys overwrite earlier ones."""
    properties: dict[str, str] = {}
    for block in blocks:
        key = as_str(block.get("key"))
        if key is None:
            logger.debug(f"Skipping property without key: {block!r}")
            continue
        properties[key] = _property_value(block.get("value"))
    return properties


def to_extension_dependency(block: RawRecord) -> ExtensionDependency:
    repositories = []
    for repository in as_map_list(block.get("repositories")):
        descriptor = to_repository_descriptor(repository)
        if descriptor is not None:
            repositories.append(descriptor)

    return ExtensionDependency(
        id=as_str(block.get("id")),
        constraint=as_str(block.get("constraint")),
        optional=as_bool(block.get("optional")),
        repositories=tuple(repositories),
        properties=frozen_mapping(
            to_properties(as_map_list(block.get("properties")))
        ),
    )
