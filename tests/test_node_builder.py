"""Tests for node construction and validation."""

import pytest

from nodeimport.core.errors import ContentValidationError
from nodeimport.importer.node_builder import NodeBuilder
from nodeimport.schemas.records import BundleSchema, DestinationAssetRecord, FieldSpec


@pytest.fixture
def schema():
    return BundleSchema(bundle="page", fields={
        "body": FieldSpec(name="body", type="text_long"),
        "field_image": FieldSpec(name="field_image", type="image", cardinality=1),
        "field_gallery": FieldSpec(name="field_gallery", type="image", cardinality=-1),
    })


def asset(fid):
    return DestinationAssetRecord(fid=fid, uri=f"public://{fid}.jpg", status=1)


def builder_for(schema):
    return NodeBuilder(schema).with_metadata(title="Hello", langcode="en", uid=1, created=10, changed=20)


def test_build_attaches_text_and_assets(schema):
    node = (
        builder_for(schema)
        .set_text("body", "<p>Hi</p>")
        .set_assets("field_gallery", [asset(1), asset(2)])
        .build()
    )

    assert node.type == "page"
    assert [(value.field_name, value.value, value.format) for value in node.text_values] == [
        ("body", "<p>Hi</p>", "basic_html")
    ]
    assert [(ref.delta, ref.file_id) for ref in node.asset_references] == [(0, 1), (1, 2)]


def test_build_without_values(schema):
    node = builder_for(schema).build()

    assert node.text_values == []
    assert node.asset_references == []


def test_blank_title_is_rejected(schema):
    with pytest.raises(ContentValidationError):
        NodeBuilder(schema).with_metadata(title=" ", langcode="en", uid=1, created=1, changed=1).build()


def test_unknown_text_field_is_rejected(schema):
    with pytest.raises(ContentValidationError, match="does not exist"):
        builder_for(schema).set_text("field_missing", "text").build()


def test_text_in_image_field_is_rejected(schema):
    with pytest.raises(ContentValidationError, match="not a text field"):
        builder_for(schema).set_text("field_image", "text").build()


def test_cardinality_is_enforced(schema):
    with pytest.raises(ContentValidationError, match="at most 1"):
        builder_for(schema).set_assets("field_image", [asset(1), asset(2)]).build()
