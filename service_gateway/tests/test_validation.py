"""
Tests for inbound payload validation.
"""

import json

import pytest
from pydantic import ValidationError

from service_gateway.app.domain.models import ImagePathRequest, ImageUrlRequest, UploadMetadata
from service_gateway.app.domain.validation import is_json_content_type, parse_payload
from shared.errors import ErrorKind, MalformedPayload


@pytest.mark.parametrize("content_type", [
    "application/json",
    "application/json; charset=utf-8",
    "Application/JSON",
])
def test_json_content_types_accepted(content_type):
    assert is_json_content_type(content_type)


@pytest.mark.parametrize("content_type", [None, "", "text/plain", "application/x-www-form-urlencoded"])
def test_other_content_types_refused(content_type):
    assert not is_json_content_type(content_type)


def test_parses_upload_metadata(upload_metadata):
    metadata = parse_payload(UploadMetadata, json.dumps(upload_metadata).encode(), "application/json")

    assert metadata.request_id == "r2"
    assert metadata.type_ == "runway"
    assert metadata.final_image_key == "ss24/maison-test/look-12.jpg"


def test_metadata_is_immutable(upload_metadata):
    metadata = parse_payload(UploadMetadata, json.dumps(upload_metadata).encode(), "application/json")

    with pytest.raises(ValidationError):
        metadata.season = "FW24"


def test_every_metadata_field_is_required(upload_metadata):
    for name in upload_metadata:
        partial = {key: value for key, value in upload_metadata.items() if key != name}

        with pytest.raises(MalformedPayload) as exc_info:
            parse_payload(UploadMetadata, json.dumps(partial).encode(), "application/json")

        locs = [error["loc"] for error in exc_info.value.diagnostic]
        assert [name] in locs


def test_null_field_is_rejected():
    with pytest.raises(MalformedPayload):
        parse_payload(ImageUrlRequest, b'{"url": null, "requestId": "r1"}', "application/json")


def test_non_object_body_is_rejected():
    with pytest.raises(MalformedPayload) as exc_info:
        parse_payload(ImageUrlRequest, b'["http://example.com/a.png"]', "application/json")

    assert exc_info.value.kind is ErrorKind.MALFORMED_PAYLOAD
    assert exc_info.value.status_code == 400
    assert exc_info.value.request_id is None


def test_empty_body_is_rejected():
    with pytest.raises(MalformedPayload):
        parse_payload(ImagePathRequest, b"", "application/json")


def test_request_id_is_kept_on_rejection():
    with pytest.raises(MalformedPayload) as exc_info:
        parse_payload(ImagePathRequest, b'{"requestId": "r9"}', "application/json")

    assert exc_info.value.request_id == "r9"
    assert exc_info.value.details["diagnostic"][0]["loc"] == ["final_image_path"]


def test_deep_nesting_is_malformed_not_a_crash():
    nested = b'{"requestId": "r1", "url": ' + b"[" * 5000 + b"]" * 5000 + b"}"

    with pytest.raises(MalformedPayload):
        parse_payload(ImageUrlRequest, nested, "application/json")

    with pytest.raises(MalformedPayload):
        parse_payload(ImageUrlRequest, nested, "text/plain")
