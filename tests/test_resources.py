"""Unit tests for resource models.

Tests Annotation coercion, ResourceSpec, and the IdentitySpec invariants
(one constraint per type, order-independent equality).
"""

import pytest
from pydantic import ValidationError

from authn_restrictions.resources import (
    Annotation,
    IdentitySpec,
    ResourceSpec,
    RuntimeClaims,
    coerce_annotations,
)


# ============================================================================
# Annotation
# ============================================================================


class TestAnnotation:
    """Tests for Annotation and coerce_annotations."""

    def test_coerce_accepts_models_and_mappings(self) -> None:
        """Given mixed models and dicts, returns models in input order."""
        # Arrange
        raw = [
            Annotation(name="authn-k8s/namespace", value="apps"),
            {"name": "authn-k8s/pod", "value": "web-0"},
        ]

        # Act
        result = coerce_annotations(raw)

        # Assert
        assert [a.name for a in result] == ["authn-k8s/namespace", "authn-k8s/pod"]
        assert all(isinstance(a, Annotation) for a in result)

    def test_empty_value_is_kept(self) -> None:
        """Given an empty value, it is still a value."""
        annotation = Annotation(name="authn-k8s/pod", value="")
        assert annotation.value == ""

    def test_coerce_rejects_missing_value(self) -> None:
        """Given a record without a value, raises ValidationError."""
        with pytest.raises(ValidationError):
            coerce_annotations([{"name": "authn-k8s/pod"}])

    def test_annotation_is_frozen(self) -> None:
        """Annotations cannot be mutated."""
        annotation = Annotation(name="a", value="b")
        with pytest.raises(ValidationError):
            annotation.value = "c"  # type: ignore[misc]


# ============================================================================
# IdentitySpec
# ============================================================================


class TestIdentitySpec:
    """Tests for IdentitySpec invariants and helpers."""

    def test_duplicate_type_rejected(self) -> None:
        """Given two constraints of one type, raises ValidationError."""
        with pytest.raises(ValidationError, match="Duplicate resource type"):
            IdentitySpec.of([("namespace", "a"), ("namespace", "b")])

    def test_equality_ignores_order(self) -> None:
        """Two specs with the same constraints in different order are equal."""
        first = IdentitySpec.of({"namespace": "apps", "pod": "web-0"})
        second = IdentitySpec.of([("pod", "web-0"), ("namespace", "apps")])

        assert first == second
        assert hash(first) == hash(second)

    def test_iteration_keeps_declared_order(self) -> None:
        """Iteration yields constraints in construction order."""
        spec = IdentitySpec.of([("pod", "web-0"), ("namespace", "apps")])
        assert [r.type for r in spec] == ["pod", "namespace"]
        assert spec.types == ("pod", "namespace")

    def test_lookup_helpers(self) -> None:
        """get/value_of/contains find constraints by type."""
        spec = IdentitySpec.of({"namespace": "apps"})

        assert spec.get("namespace") == ResourceSpec(type="namespace", value="apps")
        assert spec.value_of("namespace") == "apps"
        assert spec.value_of("pod") is None
        assert "namespace" in spec
        assert ResourceSpec(type="namespace", value="apps") in spec
        assert ResourceSpec(type="namespace", value="other") not in spec
        assert len(spec) == 1

    def test_as_dict(self) -> None:
        """as_dict maps type to value."""
        spec = IdentitySpec.of({"namespace": "apps", "pod": "web-0"})
        assert spec.as_dict() == {"namespace": "apps", "pod": "web-0"}

    def test_empty_spec(self) -> None:
        """An empty spec has no constraints."""
        spec = IdentitySpec()
        assert len(spec) == 0
        assert list(spec) == []
        assert spec is not None
        assert IdentitySpec.of({}) == spec

    def test_runtime_claims_compare_with_identity_spec(self) -> None:
        """RuntimeClaims equal an IdentitySpec with the same constraints."""
        claims = RuntimeClaims.of({"namespace": "apps"})
        assert claims == IdentitySpec.of({"namespace": "apps"})

    def test_resource_spec_str(self) -> None:
        """ResourceSpec renders as type=value."""
        assert str(ResourceSpec(type="pod", value="web-0")) == "pod=web-0"
