"""Tests for the attribute_map() factory function."""

import pytest

from attrmap import AttributeMap, attribute_map


class TestAttributeMapFactory:
    def test_empty(self):
        m = attribute_map()
        assert isinstance(m, AttributeMap)
        assert m.get_namespaces() == ()

    def test_populates_namespaces(self):
        m = attribute_map({"nsA": {"x": 1}, "nsB": {"y": 2}})
        assert m.to_dict() == {"nsA": {"x": 1}, "nsB": {"y": 2}}

    def test_skips_none_values(self):
        m = attribute_map({"nsA": {"x": None, "y": 2}})
        assert m.to_dict() == {"nsA": {"y": 2}}

    def test_preferred_namespace_takes_singleton(self):
        m = attribute_map({"nsA": {"x": 1}, "nsB": {"y": 2}}, namespace="nsB")
        assert m.singleton_namespace == "nsB"
        assert m.get_attribute("nsA", "x") == 1

    def test_preferred_namespace_must_have_attributes(self):
        with pytest.raises(ValueError, match="'nsC'"):
            attribute_map({"nsA": {"x": 1}}, namespace="nsC")

    def test_preferred_namespace_with_only_none_values(self):
        with pytest.raises(ValueError, match="'nsA'"):
            attribute_map(
                {"nsA": {"x": None}, "nsB": {"y": 1}}, namespace="nsA"
            )

    def test_source_is_copied(self):
        src = attribute_map({"nsA": {"x": 1}})
        m = attribute_map({"nsA": {"x": 2}, "nsB": {"y": 3}}, source=src)
        assert m.get_attribute("nsA", "x") == 2
        assert src.get_attribute("nsA", "x") == 1
        assert src.get_namespaces() == ("nsA",)

    def test_invalid_namespaces_type(self):
        with pytest.raises(TypeError, match="not list"):
            attribute_map([("nsA", "x", 1)])  # type: ignore[arg-type]

    def test_invalid_attributes_type(self):
        with pytest.raises(TypeError, match="'nsA'"):
            attribute_map({"nsA": ["x"]})  # type: ignore[dict-item]

    def test_invalid_namespace_type(self):
        with pytest.raises(TypeError, match="not int"):
            attribute_map({"nsA": {"x": 1}}, namespace=1)  # type: ignore[arg-type]
