from __future__ import annotations

import platform
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


_extrepo_version = _get_package_version("extrepo")

DEFAULT_USER_AGENT = (
    f"extrepo/{_extrepo_version}"
    f" ({platform.system()}; {platform.machine()}; compatible)"
)

# CLI default when --repository-uri is not given
REPOSITORY_URI_ENV = "EXTREPO_REPOSITORY_URI"
DEFAULT_REPOSITORY_ID = "remote"
DEFAULT_REPOSITORY_TYPE = "xwiki"
DEFAULT_REPOSITORY_URI = "https://extensions.xwiki.org/xwiki/rest"

EXTENSION_VERSION_PATH = "repository/extensions/{extension_id}/versions/{version}"
EXTENSION_FILE_PATH = EXTENSION_VERSION_PATH + "/file"

HTTP_REQUEST_TIMEOUT_SECONDS = 30
HTTP_STREAM_CONNECT_TIMEOUT_SECONDS = 10
HTTP_STREAM_READ_TIMEOUT_SECONDS = 120

HTTP_RETRY_TOTAL = 3
HTTP_RETRY_BACKOFF_FACTOR = 1
HTTP_RETRY_STATUS_FORCELIST = [429, 500, 502, 503, 504]
HTTP_RETRY_ALLOWED_METHODS = ["HEAD", "GET", "OPTIONS"]

# protocols accepted for author urls
KNOWN_URL_PROTOCOLS = frozenset({"http", "https", "ftp", "file", "jar", "mailto"})
