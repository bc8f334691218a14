import json

import pytest
from pydantic import ValidationError

from proxifocus.domain.models import Endpoint, clean_url, decode_endpoints, encode_endpoints


def test_clean_url_trims_and_keeps_original_text():
    assert clean_url("  https://Example.com  ") == "https://Example.com"
    assert clean_url("ftp://files.example.org/pub") == "ftp://files.example.org/pub"


def test_clean_url_rejects_blank_and_relative():
    assert clean_url("") is None
    assert clean_url(" \t\n") is None
    assert clean_url("example.com") is None
    assert clean_url("just words") is None


def test_clean_url_requires_a_host():
    assert clean_url("a:") is None
    assert clean_url("foo:bar") is None
    assert clean_url("localhost:8080") is None
    assert clean_url("javascript:alert(1)") is None
    assert clean_url("http://localhost:8080") == "http://localhost:8080"


def test_new_endpoints_get_unique_ids_and_default_enabled():
    a = Endpoint(url="https://a.example")
    b = Endpoint(url="https://a.example")

    assert a.id != b.id
    assert a.enabled is True


def test_endpoint_is_frozen():
    e = Endpoint(url="https://a.example")
    with pytest.raises(ValidationError):
        e.enabled = False


def test_encoded_form_is_field_tagged_json():
    blob = encode_endpoints([Endpoint(id="abc", url="https://a.example", enabled=False)])

    assert json.loads(blob) == [{"id": "abc", "url": "https://a.example", "enabled": False}]


def test_decode_tolerates_reordered_unknown_and_missing_fields():
    blob = json.dumps(
        [
            {"enabled": False, "url": "https://a.example", "id": "one", "color": "red"},
            {"url": "https://b.example", "id": "two"},
            {"url": "https://c.example"},
        ]
    )

    rows = decode_endpoints(blob)

    assert [(e.id, e.url, e.enabled) for e in rows[:2]] == [
        ("one", "https://a.example", False),
        ("two", "https://b.example", True),
    ]
    assert rows[2].url == "https://c.example"
    assert rows[2].id


def test_decode_rejects_record_without_url():
    with pytest.raises(ValidationError):
        decode_endpoints('[{"id": "one", "enabled": true}]')


def test_decode_rejects_garbage():
    with pytest.raises(ValidationError):
        decode_endpoints("not json at all")
