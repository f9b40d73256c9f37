"""Unit tests for Kubernetes host identifier parsing."""

import pytest

from authn_restrictions.constraints import K8sConstraint
from authn_restrictions.exceptions import InvalidHostId, ScopeNotSupported
from authn_restrictions.k8s.host_id import HostIdentifier, constraints_from_host_id


class TestHostIdentifier:
    """Tests for HostIdentifier.parse()."""

    def test_fully_qualified(self) -> None:
        identifier = HostIdentifier.parse("acct:host:apps/ns1/pod/web-0")

        assert identifier.account == "acct"
        assert identifier.kind == "host"
        assert identifier.hostname == "apps/ns1/pod/web-0"
        assert identifier.meaningful_segments == ("ns1", "pod", "web-0")

    def test_bare_hostname(self) -> None:
        """Without account and kind, the whole string is the hostname."""
        identifier = HostIdentifier.parse("ns1/pod/web-0")

        assert identifier.account is None
        assert identifier.kind is None
        assert identifier.segments == ("ns1", "pod", "web-0")


class TestConstraintsFromHostId:
    """Tests for constraints_from_host_id()."""

    def test_wildcards_mean_namespace_only(self) -> None:
        result = constraints_from_host_id("acct:host:ns1/*/*")
        assert result.unwrap() == {K8sConstraint.NAMESPACE: "ns1"}

    def test_controller_constraint(self) -> None:
        result = constraints_from_host_id("acct:host:ns1/service-account/sa1")
        assert result.unwrap() == {K8sConstraint.NAMESPACE: "ns1", K8sConstraint.SERVICE_ACCOUNT: "sa1"}

    def test_underscore_spelling(self) -> None:
        result = constraints_from_host_id("acct:host:apps/ns1/stateful_set/db")
        assert result.unwrap() == {K8sConstraint.NAMESPACE: "ns1", K8sConstraint.STATEFUL_SET: "db"}

    def test_only_last_three_segments_matter(self) -> None:
        """Leading segments (policy branches) are ignored."""
        result = constraints_from_host_id("acct:host:conjur/authn-k8s/apps/ns1/pod/web-0")
        assert result.unwrap() == {K8sConstraint.NAMESPACE: "ns1", K8sConstraint.POD: "web-0"}

    def test_unknown_type(self) -> None:
        """Given an unknown constraint type, returns ScopeNotSupported."""
        result = constraints_from_host_id("ns1/blah/x")

        assert isinstance(result.error, ScopeNotSupported)
        assert result.error.scope == "blah"

    @pytest.mark.parametrize(
        "host_id",
        [
            "acct:host:ns1/*/web-0",
            "acct:host:ns1/pod/*",
        ],
    )
    def test_partial_wildcard(self, host_id: str) -> None:
        """Only one wildcard is an invalid host id."""
        assert isinstance(constraints_from_host_id(host_id).error, InvalidHostId)

    @pytest.mark.parametrize(
        "host_id",
        [
            "acct:host:web",
            "acct:host:ns1/pod",
            "acct:host:/pod/web-0",
            "acct:host:ns1//web-0",
        ],
    )
    def test_malformed(self, host_id: str) -> None:
        """Too few or empty segments are an invalid host id."""
        result = constraints_from_host_id(host_id)

        assert isinstance(result.error, InvalidHostId)
        assert result.error.host_id == host_id
