import re

import pytest

from linkup_client.utils.endpoints import REGION_PLACEHOLDER, normalize_region, resolve_base_url
from linkup_client.utils.hashing import digest_account_id


@pytest.mark.parametrize("region", ["eu", "us", "de", "fr", "ap", "EU"])
def test_regional_url_contains_region_subdomain(region):
    url = resolve_base_url(region)
    assert url == f"https://api-{region}.libreview.io/llu"
    assert REGION_PLACEHOLDER not in url


def test_global_url_has_no_region_segment():
    assert resolve_base_url("global") == "https://api.libreview.io/llu"


@pytest.mark.parametrize("value,expected", [("ch", "eu"), ("CH", "eu"), ("De", "de"), ("eu", "eu")])
def test_normalize_region(value, expected):
    assert normalize_region(value) == expected


def test_digest_is_deterministic_hex():
    first = digest_account_id("abc-123")
    assert first == digest_account_id("abc-123")
    assert re.fullmatch(r"[0-9a-f]{64}", first)
    assert first != "abc-123"
    assert first != digest_account_id("abc-124")


def test_digest_matches_known_sha256():
    assert digest_account_id("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
