"""Tests for the Resource value object and tag normalisation."""

import pytest

from cirrus.domain.value_objects.resource import (
    UNKNOWN,
    Resource,
    normalize_tags,
    resolve_name,
)


class TestResolveName:
    def test_prefers_name(self):
        assert resolve_name("web", "i-123") == "web"

    def test_falls_back_to_id(self):
        assert resolve_name("", "i-123") == "i-123"
        assert resolve_name(None, "i-123") == "i-123"

    def test_unknown_when_both_missing(self):
        assert resolve_name(None, None) == UNKNOWN


class TestResourceCreation:
    def test_name_falls_back_to_id(self):
        r = Resource.create("i-123")
        assert r.id == "i-123"
        assert r.name == "i-123"

    def test_missing_id_only_affects_name(self):
        r = Resource.create(None)
        assert r.id == ""
        assert r.name == UNKNOWN

    def test_none_attributes_dropped(self):
        r = Resource.create("b1", name="bucket", creation_date=None, region="eu-west-1")
        assert not r.has("creation_date")
        assert r.get("region") == "eu-west-1"

    def test_falsy_values_kept(self):
        r = Resource.create("t1", item_count=0, enabled=False)
        assert r.has("item_count")
        assert r.get("enabled") is False

    def test_immutable(self):
        r = Resource.create("i-1")
        with pytest.raises(AttributeError):
            r.name = "other"


class TestEnrichment:
    def test_is_enriched_checks_sentinel_presence(self):
        r = Resource.create("i-1", state="running")
        assert not r.is_enriched("availability_zone")
        assert r.merged({"availability_zone": "us-east-1a"}).is_enriched("availability_zone")

    def test_no_sentinel_means_enriched(self):
        assert Resource.create("i-1").is_enriched(None)

    def test_merged_returns_new_instance(self):
        r = Resource.create("i-1", name="web", state="running")
        enriched = r.merged({"availability_zone": "us-east-1a", "state": "stopped"})
        assert enriched is not r
        assert enriched.id == "i-1"
        assert enriched.name == "web"
        assert enriched.get("state") == "stopped"
        assert enriched.get("availability_zone") == "us-east-1a"
        assert r.get("state") == "running"
        assert not r.has("availability_zone")


class TestMatches:
    def test_matches_name_case_insensitive(self):
        assert Resource.create("1", name="Prod-Web").matches("prod")

    def test_matches_description(self):
        r = Resource.create("fn", name="handler", description="Resizes Images")
        assert r.matches("images")

    def test_non_string_description_ignored(self):
        r = Resource.create("fn", name="handler", description=42)
        assert r.description is None
        assert not r.matches("42")

    def test_empty_query_matches_everything(self):
        assert Resource.create("x").matches("")

    def test_no_match(self):
        assert not Resource.create("1", name="alpha").matches("beta")


class TestNormalizeTags:
    def test_list_of_key_value_dicts(self):
        raw = [{"Key": "env", "Value": "prod"}, {"Key": "team", "Value": "data"}]
        assert normalize_tags(raw) == [("env", "prod"), ("team", "data")]

    def test_mapping_shape(self):
        assert normalize_tags({"env": "prod", "owner": None}) == [("env", "prod"), ("owner", "")]

    def test_empty_inputs(self):
        assert normalize_tags(None) == []
        assert normalize_tags([]) == []
        assert normalize_tags({}) == []

    def test_entries_without_key_skipped(self):
        assert normalize_tags([{"Value": "orphan"}, {"Key": "a"}]) == [("a", "")]
