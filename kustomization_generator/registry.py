"""Library for resolving helm charts to download urls.

A helm chart repository serves an `index.yaml` listing every published chart
version. This resolves an exact chart version to the url of its archive:

```python
from kustomization_generator import registry

url = registry.resolve_chart_url("https://charts.example.com", "app", "1.0.0")
```

Urls in the index may be relative to the registry, in which case they are
joined with the registry base url.
"""

import logging
import re

import requests

from .exceptions import (
    AmbiguousUrlError,
    ChartNotFoundError,
    NetworkError,
    UrlMissingError,
    VersionNotFoundError,
)
from .manifest import RegistryIndex

__all__ = [
    "fetch_index",
    "resolve_chart_url",
]

_LOGGER = logging.getLogger(__name__)

INDEX_FILE = "index.yaml"

_ABSOLUTE_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def index_url(registry: str) -> str:
    """Return the url of the index document of a registry."""
    return f"{registry.rstrip('/')}/{INDEX_FILE}"


def join_url(registry: str, url: str) -> str:
    """Return an absolute chart url, joining relative urls to the registry."""
    if _ABSOLUTE_URL_RE.match(url):
        return url
    return f"{registry.rstrip('/')}/{url.lstrip('/')}"


def fetch_index(
    registry: str, session: requests.Session | None = None
) -> RegistryIndex:
    """Fetch and parse the index document of a registry."""
    url = index_url(registry)
    _LOGGER.debug("Fetching registry index %s", url)
    http = session or requests.Session()
    try:
        resp = http.get(url)
        resp.raise_for_status()
    except requests.RequestException as err:
        raise NetworkError(f"Failed to fetch registry index at {url}: {err}") from err
    finally:
        if session is None:
            http.close()
    return RegistryIndex.parse_yaml(resp.content)


def resolve_chart_url(
    registry: str,
    chart: str,
    version: str,
    session: requests.Session | None = None,
) -> str:
    """Resolve a chart version in a registry to the absolute url of its archive.

    The first entry in the index with exactly the requested version is used. The
    entry must list a single url; registries publishing mirrors are rejected
    rather than guessing which one to use.
    """
    index = fetch_index(registry, session=session)
    if (versions := index.entries.get(chart)) is None:
        raise ChartNotFoundError(f"Chart {chart} could not be found in {registry}")
    entry = next((entry for entry in versions if entry.version == version), None)
    if entry is None:
        raise VersionNotFoundError(
            f"Chart {chart} version {version} could not be found in {registry}"
        )
    if not entry.urls:
        raise UrlMissingError(f"Chart {chart} version {version} has no download urls")
    if len(entry.urls) > 1:
        raise AmbiguousUrlError(
            f"Chart {chart} version {version} has multiple download urls: "
            f"{', '.join(entry.urls)}"
        )
    result = join_url(registry, entry.urls[0])
    _LOGGER.info("Resolved chart %s version %s to %s", chart, version, result)
    return result
