"""Tests for legacy field discovery."""

from legacy_fixtures import add_field_config, create_legacy_schema

from nodeimport.legacy.schema_prober import SchemaProber


def test_text_fields_prepend_body_when_not_configured(legacy_engine):
    create_legacy_schema(legacy_engine)
    add_field_config(legacy_engine, "article", "field_text", "text_long")
    add_field_config(legacy_engine, "article", "field_teaser", "text_with_summary")
    add_field_config(legacy_engine, "article", "field_tags", "entity_reference")

    fields = SchemaProber(legacy_engine).discover_text_fields("article")

    assert fields == ["body", "field_text", "field_teaser"]


def test_configured_body_keeps_its_position(legacy_engine):
    create_legacy_schema(legacy_engine)
    add_field_config(legacy_engine, "article", "field_text", "text_long")
    add_field_config(legacy_engine, "article", "body", "text_with_summary")

    assert SchemaProber(legacy_engine).discover_text_fields("article") == ["field_text", "body"]


def test_image_fields_append_conventional_names(legacy_engine):
    create_legacy_schema(legacy_engine)
    add_field_config(legacy_engine, "article", "field_gallery", "image")
    add_field_config(legacy_engine, "article", "field_images", "image")
    add_field_config(legacy_engine, "page", "field_banner", "image")

    fields = SchemaProber(legacy_engine).discover_image_fields("article")

    assert fields == ["field_gallery", "field_images", "field_image", "field_hero_image"]


def test_introspection_failure_falls_back_to_conventions(legacy_engine):
    create_legacy_schema(legacy_engine, with_field_config=False)
    prober = SchemaProber(legacy_engine)

    assert prober.discover_text_fields("article") == ["body"]
    assert prober.discover_image_fields("article") == ["field_image", "field_images", "field_hero_image"]


def test_discovery_is_cached_per_bundle(legacy_engine):
    create_legacy_schema(legacy_engine)
    add_field_config(legacy_engine, "article", "field_text", "text_long")
    prober = SchemaProber(legacy_engine)
    prober.discover_text_fields("article")

    add_field_config(legacy_engine, "article", "field_late", "text_long")

    assert prober.discover_text_fields("article") == ["body", "field_text"]
