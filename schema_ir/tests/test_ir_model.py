"""
Unit tests for the IR data model: property map, schema nodes, refs and
validation chains.
"""

import unittest

import pytest

from schema_ir.errors import InvalidReferenceFormat
from schema_ir.ir import (
    UNSET,
    SchemaNode,
    SchemaProperties,
    build_validation_chain,
    parse_component_ref,
    schema_name_from_ref,
    try_parse_component_ref,
)


class TestSchemaProperties(unittest.TestCase):
    """Ordered property map"""

    def test_preserves_declaration_order(self):
        props = SchemaProperties([("zeta", SchemaNode(type="string")), ("alpha", SchemaNode(type="integer"))])
        self.assertEqual(props.keys(), ["zeta", "alpha"])
        self.assertEqual([name for name, _ in props.entries()], ["zeta", "alpha"])
        self.assertEqual(list(props), ["zeta", "alpha"])

    def test_mapping_input(self):
        props = SchemaProperties({"id": SchemaNode(type="integer"), "name": SchemaNode(type="string")})
        self.assertEqual(props.size, 2)
        self.assertTrue(props.has("id"))
        self.assertIn("name", props)
        self.assertIsNone(props.get("missing"))
        self.assertEqual(props["id"].type, "integer")

    def test_duplicate_names_rejected(self):
        with self.assertRaises(ValueError):
            SchemaProperties([("id", SchemaNode()), ("id", SchemaNode())])

    def test_equality_is_order_sensitive(self):
        a = SchemaNode(type="string")
        b = SchemaNode(type="integer")
        self.assertEqual(SchemaProperties([("a", a), ("b", b)]), SchemaProperties([("a", a), ("b", b)]))
        self.assertNotEqual(SchemaProperties([("a", a), ("b", b)]), SchemaProperties([("b", b), ("a", a)]))


class TestSchemaNode:
    """Schema node invariants"""

    def test_reference_node_cannot_carry_structure(self):
        with pytest.raises(ValueError, match="cannot carry structural fields"):
            SchemaNode(ref="#/components/schemas/User", type="object")

    def test_required_must_name_declared_properties(self):
        with pytest.raises(ValueError, match="ghost"):
            SchemaNode(type="object", properties=SchemaProperties([("id", SchemaNode())]), required=["ghost"])

    def test_required_subset(self):
        node = SchemaNode(
            type="object",
            properties=SchemaProperties([("id", SchemaNode(type="integer")), ("name", SchemaNode(type="string"))]),
            required=["id"],
        )
        assert node.required == ["id"]
        assert node.properties.keys() == ["id", "name"]

    def test_iter_refs_does_not_descend_into_refs(self):
        node = SchemaNode(
            type="object",
            properties=SchemaProperties(
                [
                    ("owner", SchemaNode.reference("#/components/schemas/User")),
                    ("tags", SchemaNode(type="array", items=SchemaNode.reference("#/components/schemas/Tag"))),
                    ("either", SchemaNode(any_of=[SchemaNode.reference("#/components/schemas/User")])),
                ]
            ),
        )
        assert list(node.iter_refs()) == [
            "#/components/schemas/User",
            "#/components/schemas/Tag",
            "#/components/schemas/User",
        ]

    def test_ref_name(self):
        assert SchemaNode.reference("#/components/schemas/Pet").ref_name == "Pet"
        assert SchemaNode(type="string").ref_name is None

    def test_to_dict_uses_json_schema_keys(self):
        node = SchemaNode(type="string", min_length=1, default=None)
        result = node.to_dict()
        assert result["type"] == "string"
        assert result["minLength"] == 1
        # None is a legal default and must survive serialization
        assert result["default"] is None
        assert "example" not in result
        assert result["metadata"]["required"] is True

    def test_unset_is_falsy(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"


class TestComponentRefs:
    """Ref parsing for both accepted forms"""

    def test_standard_form(self):
        parsed = parse_component_ref("#/components/schemas/User")
        assert parsed.component_type == "schemas"
        assert parsed.component_name == "User"
        assert parsed.is_external is False
        assert parsed.x_ext_key is None

    def test_x_ext_form(self):
        parsed = parse_component_ref("#/x-ext/abc123/components/parameters/PageSize")
        assert parsed.component_type == "parameters"
        assert parsed.component_name == "PageSize"
        assert parsed.is_external is True
        assert parsed.x_ext_key == "abc123"

    @pytest.mark.parametrize(
        "ref",
        [
            "#/definitions/User",
            "#/components/schemas",
            "#/x-ext/abc/schemas/User",
            "other.json#/components/schemas/User",
            "",
        ],
    )
    def test_invalid_forms(self, ref):
        assert try_parse_component_ref(ref) is None
        with pytest.raises(InvalidReferenceFormat) as exc_info:
            parse_component_ref(ref, "#/paths/~1pets/get")
        assert "#/paths/~1pets/get" in str(exc_info.value)

    def test_schema_name_from_ref(self):
        assert schema_name_from_ref("#/components/schemas/Pet") == "Pet"
        assert schema_name_from_ref("#/x-ext/f00/components/schemas/Pet") == "Pet"
        assert schema_name_from_ref("#/components/parameters/Pet") is None


class TestValidationChain(unittest.TestCase):
    """Validation-chain fragments"""

    def test_numeric_bounds(self):
        chain = build_validation_chain(SchemaNode(type="integer", minimum=0, maximum=150), required=False)
        self.assertEqual(chain.validations, [".min(0)", ".max(150)", ".int()"])
        self.assertEqual(chain.presence, ".optional()")

    def test_boolean_exclusive_minimum_replaces_min(self):
        chain = build_validation_chain(SchemaNode(type="number", minimum=1.0, exclusive_minimum=True), required=True)
        self.assertEqual(chain.validations, [".gt(1)"])
        self.assertEqual(chain.presence, "")

    def test_numeric_exclusive_bounds(self):
        chain = build_validation_chain(
            SchemaNode(type="number", exclusive_minimum=0, exclusive_maximum=10, multiple_of=0.5), required=True
        )
        self.assertEqual(chain.validations, [".gt(0)", ".lt(10)", ".multipleOf(0.5)"])

    def test_string_pattern_escapes_slashes(self):
        chain = build_validation_chain(SchemaNode(type="string", pattern="^a/b$", format="email"), required=True)
        self.assertEqual(chain.validations, [".regex(/^a\\/b$/)", ".email()"])

    def test_array_bounds_and_default(self):
        chain = build_validation_chain(
            SchemaNode(type="array", min_items=1, max_items=3, default=["x"]), required=True
        )
        self.assertEqual(chain.validations, [".min(1)", ".max(3)"])
        self.assertEqual(chain.defaults, ['.default(["x"])'])

    def test_object_has_no_validations(self):
        chain = build_validation_chain(SchemaNode(type="object"), required=True)
        self.assertEqual(chain.validations, [])
        self.assertEqual(chain.defaults, [])


if __name__ == "__main__":
    unittest.main()
