"""Tests for cache entries, describe results, errors and filtering."""

import pytest

from cirrus.domain.errors import (
    CirrusError,
    EnrichmentError,
    ListError,
    ProviderError,
    UnknownServiceError,
)
from cirrus.domain.services.filtering import clamp_index, filter_by_text, filter_resources
from cirrus.domain.value_objects.cached_result import CachedResult
from cirrus.domain.value_objects.describe_result import (
    PRIMARY,
    DescribeResult,
    SubrequestResult,
)
from cirrus.domain.value_objects.resource import Resource


class TestCachedResult:
    def test_pending(self):
        entry = CachedResult.pending()
        assert entry.loaded is False
        assert entry.data == ()
        assert entry.error is None
        assert not entry.ok

    def test_success(self):
        entry = CachedResult.success([Resource.create("a"), Resource.create("b")])
        assert entry.loaded
        assert entry.ok
        assert isinstance(entry.data, tuple)
        assert len(entry.data) == 2

    def test_success_with_empty_list(self):
        entry = CachedResult.success([])
        assert entry.ok
        assert entry.data == ()

    def test_failure(self):
        entry = CachedResult.failure("AccessDenied: nope")
        assert entry.loaded
        assert not entry.ok
        assert entry.data == ()
        assert entry.error == "AccessDenied: nope"

    def test_failure_without_message(self):
        assert CachedResult.failure("").error == "Unknown error"

    def test_error_requires_loaded(self):
        with pytest.raises(ValueError):
            CachedResult(error="boom", loaded=False)

    def test_error_forbids_data(self):
        with pytest.raises(ValueError):
            CachedResult(data=(Resource.create("a"),), error="boom", loaded=True)


class TestDescribeResult:
    def test_merges_successful_outcomes(self):
        result = DescribeResult(
            resource_id="b1",
            outcomes=(
                SubrequestResult.succeeded(PRIMARY, {"location": "eu-west-1"}),
                SubrequestResult.succeeded("versioning", {"versioning": "Enabled"}),
            ),
        )
        assert result.attributes == {"location": "eu-west-1", "versioning": "Enabled"}
        assert not result.partial
        assert result.failed_subrequests == []

    def test_failed_subrequest_is_reported_and_skipped(self):
        result = DescribeResult(
            resource_id="b1",
            outcomes=(
                SubrequestResult.succeeded(PRIMARY, {"location": "eu-west-1"}),
                SubrequestResult.failed("tags", "AccessDenied: no"),
            ),
        )
        assert result.partial
        assert result.failed_subrequests == ["tags"]
        assert "tags" not in result.attributes
        assert result.outcome("tags").error == "AccessDenied: no"
        assert result.outcome("missing") is None

    def test_failed_accepts_exceptions(self):
        outcome = SubrequestResult.failed("objects", RuntimeError("timeout"))
        assert not outcome.ok
        assert outcome.error == "timeout"
        assert outcome.attributes == {}

    def test_succeeded_copies_attributes(self):
        attrs = {"a": 1}
        outcome = SubrequestResult.succeeded("x", attrs)
        attrs["a"] = 2
        assert outcome.attributes == {"a": 1}


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(ListError, ProviderError)
        assert issubclass(EnrichmentError, ProviderError)
        assert issubclass(ProviderError, CirrusError)

    def test_provider_error_message(self):
        cause = RuntimeError("raw")
        err = ListError("EC2", "describe_instances", "AccessDenied: denied", cause)
        assert str(err) == "AccessDenied: denied"
        assert err.service == "EC2"
        assert err.operation == "describe_instances"
        assert err.cause is cause

    def test_enrichment_error_keeps_resource_id(self):
        err = EnrichmentError("S3", "get_bucket_location", "boom", resource_id="b1")
        assert err.resource_id == "b1"

    def test_unknown_service_is_key_error(self):
        with pytest.raises(KeyError):
            raise UnknownServiceError("Glacier")
        assert "Glacier" in str(UnknownServiceError("Glacier"))


class TestClampIndex:
    def test_empty_list(self):
        assert clamp_index(3, 0) == 0

    def test_within_bounds(self):
        assert clamp_index(2, 5) == 2

    def test_above_bounds(self):
        assert clamp_index(4, 2) == 1

    def test_negative(self):
        assert clamp_index(-1, 3) == 0


class TestFilterResources:
    def _resources(self):
        return [
            Resource.create("1", name="api-prod"),
            Resource.create("2", name="api-dev"),
            Resource.create("3", name="worker", description="Prod queue consumer"),
        ]

    def test_blank_query_returns_copy(self):
        resources = self._resources()
        result = filter_resources(resources, "   ")
        assert result == resources
        assert result is not resources

    def test_matches_name_and_description(self):
        names = [r.name for r in filter_resources(self._resources(), "prod")]
        assert names == ["api-prod", "worker"]

    def test_query_is_trimmed(self):
        assert len(filter_resources(self._resources(), "  dev ")) == 1

    def test_narrowing_clamps_selection(self):
        resources = [Resource.create(str(i), name=f"item-{i}") for i in range(5)]
        resources[0] = Resource.create("0", name="keep-a")
        resources[1] = Resource.create("1", name="keep-b")
        visible = filter_resources(resources, "keep")
        assert len(visible) == 2
        assert clamp_index(4, len(visible)) == 1


class _Entry:
    def __init__(self, name, description):
        self.name = name
        self.description = description


class TestFilterByText:
    def test_matches_any_field(self):
        entries = [_Entry("S3", "Object storage"), _Entry("EC2", "Virtual servers")]
        assert [e.name for e in filter_by_text(entries, "storage", "name", "description")] == ["S3"]
        assert [e.name for e in filter_by_text(entries, "ec2", "name", "description")] == ["EC2"]

    def test_blank_query(self):
        entries = [_Entry("S3", "x")]
        assert filter_by_text(entries, "", "name") == entries

    def test_missing_attribute_ignored(self):
        assert filter_by_text([_Entry("S3", None)], "x", "description", "nope") == []
