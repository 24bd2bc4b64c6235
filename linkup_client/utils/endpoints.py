"""Regional endpoint resolution for the LibreLinkUp API."""

from __future__ import annotations

BASE_URL_TEMPLATE = "https://api-COUNTRY_CODE.libreview.io/llu"
REGION_PLACEHOLDER = "COUNTRY_CODE"
GLOBAL_REGION = "global"

# The provider merged the Swiss shard into the European one.
REGION_ALIASES = {"ch": "eu"}


def resolve_base_url(region: str) -> str:
    """Builds the API base URL for ``region`` (used verbatim)."""

    if region == GLOBAL_REGION:
        return BASE_URL_TEMPLATE.replace(f"-{REGION_PLACEHOLDER}", "")
    return BASE_URL_TEMPLATE.replace(REGION_PLACEHOLDER, region)


def normalize_region(region: str) -> str:
    lowered = region.lower()
    return REGION_ALIASES.get(lowered, lowered)
