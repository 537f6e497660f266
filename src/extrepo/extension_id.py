from __future__ import annotations

from dataclasses import dataclass

from extrepo.version import Version, VersionParser, parse_version


def _compare(left: object, right: object) -> int:
    # absent values sort first
    if left is right:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    if left == right:
        return 0
    return -1 if left < right else 1  # type: ignore[operator]


@dataclass(frozen=True, eq=False, init=False)
class ExtensionId:
    """Identity of an extension: an id paired with an optional version.

    The id is not validated here, an empty id is a legal value of this type.
    """

    id: str
    version: Version | None

    def __init__(
        self,
        id: str,
        version: Version | str | None = None,
        *,
        version_parser: VersionParser = parse_version,
    ) -> None:
        if isinstance(version, str):
            version = version_parser(version)
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "version", version)

    def compare_to(self, other: ExtensionId | None) -> int:
        """Return a negative, zero or positive number, ``-1`` for ``None``."""
        if other is None:
            return -1
        return _compare(self.id, other.id) or _compare(self.version, other.version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtensionId):
            return NotImplemented
        return self.id == other.id and self.version == other.version

    def __hash__(self) -> int:
        return hash((self.id, self.version))

    def __lt__(self, other: ExtensionId) -> bool:
        if not isinstance(other, ExtensionId):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: ExtensionId) -> bool:
        if not isinstance(other, ExtensionId):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: ExtensionId) -> bool:
        if not isinstance(other, ExtensionId):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: ExtensionId) -> bool:
        if not isinstance(other, ExtensionId):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        # downstream callers rely on the literal "null" for a missing version
        version = "null" if self.version is None else str(self.version)
        return f"{self.id}-{version}"
