"""
Tests for building the IR from OpenAPI documents.
"""

import json
import os

import pytest

from schema_ir import build_ir
from schema_ir.config import BuildConfig
from schema_ir.errors import (
    CircularComponentReference,
    InvalidReferenceFormat,
    MissingComponentReference,
    NestedReferenceNotBundled,
    RecursionLimitExceeded,
    UnknownSchemaShape,
    UnsupportedReferenceTarget,
)
from schema_ir.ir import (
    ParameterComponent,
    RequestBodyComponent,
    ResponseComponent,
    SchemaComponent,
    SecuritySchemeComponent,
    validate_document,
)

TEST_DATA = os.path.join(os.path.dirname(__file__), "test_data")


def load_petstore():
    with open(os.path.join(TEST_DATA, "petstore.json")) as f:
        return json.load(f)


def schemas_only(schemas, **extra):
    document = {"openapi": "3.1.0", "info": {"title": "t", "version": "1"}, "components": {"schemas": schemas}}
    document.update(extra)
    return document


@pytest.fixture(scope="module")
def petstore():
    return build_ir(load_petstore())


class TestPetstoreComponents:
    """Components of a complete document"""

    def test_document_header(self, petstore):
        assert petstore.source_format_version == "3.1.0"
        assert petstore.info["title"] == "Petstore"
        assert petstore.servers == [{"url": "https://petstore.example.com/v1"}]
        assert petstore.tags == [{"name": "pets", "description": "Everything about pets"}]
        assert [req.scheme_name for req in petstore.security] == ["apiKey"]

    def test_component_kinds_in_order(self, petstore):
        kinds = [type(component) for component in petstore.components]
        assert kinds == [
            SchemaComponent,
            SchemaComponent,
            SchemaComponent,
            SchemaComponent,
            ParameterComponent,
            ResponseComponent,
            RequestBodyComponent,
            SecuritySchemeComponent,
        ]
        assert petstore.schema_names == ["Pet", "Owner", "Error", "Tag"]

    def test_required_and_property_order(self, petstore):
        pet = petstore.get_schema("Pet")
        assert pet.required == ["id", "name"]
        assert pet.properties.keys() == ["id", "name", "age", "owner", "status"]
        assert pet.properties["id"].metadata.required is True
        assert pet.properties["name"].metadata.validation_chain.validations == [".min(1)"]

    def test_optional_bounded_integer(self, petstore):
        age = petstore.get_schema("Pet").properties["age"]
        assert age.type == "integer"
        assert age.minimum == 0
        assert age.maximum == 150
        assert age.metadata.required is False
        assert age.metadata.validation_chain.presence == ".optional()"

    def test_refs_stay_refs(self, petstore):
        owner = petstore.get_schema("Pet").properties["owner"]
        assert owner.ref == "#/components/schemas/Owner"
        assert owner.metadata.dependency_graph.references == ["#/components/schemas/Owner"]
        assert petstore.get_schema("Pet").metadata.dependency_graph.references == ["#/components/schemas/Owner"]

    def test_nullable_type_array(self, petstore):
        tag = petstore.get_schema("Tag")
        assert tag.type == "string"
        assert tag.metadata.nullable is True

    def test_dependency_graph(self, petstore):
        graph = petstore.dependency_graph
        assert graph.topological_order == ["Owner", "Pet", "Error", "Tag"]
        assert sorted(graph.circular_references) == ["Owner", "Pet"]
        assert graph.nodes["Pet"].dependencies == ["Owner"]
        assert not graph.nodes["Error"].is_circular

    def test_circular_metadata(self, petstore):
        assert petstore.get_schema("Pet").metadata.circular_references == ["#/components/schemas/Pet"]
        assert petstore.get_schema("Owner").metadata.circular_references == ["#/components/schemas/Owner"]
        assert petstore.get_schema("Error").metadata.circular_references == []

    def test_component_response_has_no_status(self, petstore):
        error = petstore.get_component("Error", "response")
        assert error.response.status_code == ""
        assert error.response.schema.ref == "#/components/schemas/Error"

    def test_enum_catalog(self, petstore):
        assert "status" in petstore.enums

    def test_document_is_valid(self, petstore):
        assert validate_document(petstore) == []


class TestPetstoreOperations:
    """Operations, parameters, bodies and responses"""

    def test_operation_order(self, petstore):
        assert [(op.method, op.path) for op in petstore.operations] == [
            ("get", "/pets"),
            ("post", "/pets"),
            ("get", "/pets/{petId}"),
        ]

    def test_parameter_merge_operation_wins(self, petstore):
        list_pets = petstore.operations[0]
        assert list_pets.operation_id == "listPets"
        assert [param.name for param in list_pets.parameters] == ["limit", "status"]
        limit = list_pets.parameters[0]
        assert limit.description == "Page size"
        assert limit.schema.maximum == 50
        assert limit.required is False
        assert [param.name for param in list_pets.parameters_by_location["query"]] == ["limit", "status"]
        assert list_pets.path_item_parameter_refs == ["#/components/parameters/Limit"]
        assert list_pets.path_item_summary == "Pet collection"

    def test_responses(self, petstore):
        list_pets = petstore.operations[0]
        assert [response.status_code for response in list_pets.responses] == ["200", "default"]
        ok = list_pets.responses[0]
        assert ok.schema.type == "array"
        assert ok.schema.items.ref == "#/components/schemas/Pet"
        # Header refs are skipped
        assert list(ok.headers) == ["X-Next"]
        assert list_pets.responses[1].description == "Unexpected error"

    def test_security_inheritance(self, petstore):
        list_pets, create_pet, _ = petstore.operations
        assert list_pets.security_source == "document"
        assert [req.scheme_name for req in list_pets.security] == ["apiKey"]
        assert create_pet.security_source == "operation"
        assert create_pet.security == []

    def test_request_body_ref(self, petstore):
        create_pet = petstore.operations[1]
        assert create_pet.request_body.required is True
        assert create_pet.request_body.content["application/json"].schema.ref == "#/components/schemas/Pet"
        assert create_pet.operation_id == "postpets"

    def test_path_parameter_defaults_to_required(self, petstore):
        get_pet = petstore.operations[2]
        assert get_pet.parameters[0].required is True
        assert get_pet.parameters[0].location == "path"
        assert get_pet.operation_id == "getpetspetId"

    def test_default_only_advisory(self, petstore):
        assert [(advisory.path, advisory.kind) for advisory in petstore.advisories] == [("/pets/{petId}", "default-only")]
        assert petstore.advisories[0].message == "GET /pets/{petId} declares only a default response"


class TestSchemaShapes:
    """Individual schema keywords"""

    def test_multiple_types_become_any_of(self):
        document = build_ir(schemas_only({"Value": {"type": ["string", "integer", "null"]}}))
        value = document.get_schema("Value")
        assert value.type is None
        assert [member.type for member in value.any_of] == ["string", "integer"]
        assert value.metadata.nullable is True

    def test_openapi_30_nullable(self):
        document = build_ir(schemas_only({"Name": {"type": "string", "nullable": True}}))
        assert document.get_schema("Name").metadata.nullable is True

    def test_composition_members(self):
        document = build_ir(
            schemas_only(
                {
                    "Base": {"type": "object", "properties": {"id": {"type": "string"}}},
                    "Cat": {"allOf": [{"$ref": "#/components/schemas/Base"}, {"type": "object"}]},
                    "Animal": {
                        "oneOf": [{"$ref": "#/components/schemas/Cat"}],
                        "discriminator": {"propertyName": "kind", "mapping": {"cat": "#/components/schemas/Cat"}},
                    },
                }
            )
        )
        animal = document.get_schema("Animal")
        assert animal.one_of[0].ref == "#/components/schemas/Cat"
        assert animal.discriminator.property_name == "kind"
        assert animal.discriminator.mapping == {"cat": "#/components/schemas/Cat"}
        assert document.dependency_graph.topological_order == ["Base", "Cat", "Animal"]

    def test_json_schema_2020_keywords(self):
        document = build_ir(
            schemas_only(
                {
                    "Point": {
                        "type": "array",
                        "prefixItems": [{"type": "number"}, {"type": "number"}],
                        "minContains": 1,
                    },
                    "Card": {
                        "type": "object",
                        "properties": {"number": {"type": "string"}, "cvc": {"type": "string"}},
                        "dependentRequired": {"number": ["cvc"]},
                        "unevaluatedProperties": False,
                    },
                }
            )
        )
        point = document.get_schema("Point")
        assert [item.type for item in point.prefix_items] == ["number", "number"]
        assert point.min_contains == 1
        card = document.get_schema("Card")
        assert card.dependent_required == {"number": ["cvc"]}
        assert card.unevaluated_properties is False

    def test_additional_properties_schema_is_optional(self):
        document = build_ir(schemas_only({"Map": {"type": "object", "additionalProperties": {"type": "integer"}}}))
        additional = document.get_schema("Map").additional_properties
        assert additional.type == "integer"
        assert additional.metadata.required is False

    def test_undeclared_required_names_are_dropped(self):
        raw = {"A": {"type": "object", "required": ["ghost", "id"], "properties": {"id": {"type": "string"}}}}
        assert build_ir(schemas_only(raw)).get_schema("A").required == ["id"]

    def test_strict_required_raises(self):
        raw = {"A": {"type": "object", "required": ["ghost"], "properties": {"id": {"type": "string"}}}}
        with pytest.raises(UnknownSchemaShape, match="ghost"):
            build_ir(schemas_only(raw), BuildConfig(strict_required=True))

    def test_null_default_is_kept(self):
        document = build_ir(schemas_only({"A": {"type": "string", "default": None}}))
        assert document.get_schema("A").to_dict()["default"] is None

    def test_x_ext_schemas(self):
        document = build_ir(
            schemas_only(
                {"A": {"type": "object", "properties": {"ext": {"$ref": "#/x-ext/abc/components/schemas/Ext"}}}},
                **{"x-ext": {"abc": {"components": {"schemas": {"Ext": {"type": "string"}}}}}},
            )
        )
        assert document.schema_names == ["A", "Ext"]
        assert document.get_component("Ext").source_ref == "#/x-ext/abc/components/schemas/Ext"
        assert document.dependency_graph.topological_order == ["Ext", "A"]


class TestBuildErrors:
    """Fatal builder errors carry the location path"""

    def test_invalid_reference_format(self):
        with pytest.raises(InvalidReferenceFormat) as exc_info:
            build_ir(schemas_only({"A": {"$ref": "#/definitions/B"}}))
        assert exc_info.value.path == "#/components/schemas/A"

    def test_missing_component(self):
        raw = {"A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/Nope"}}}}
        with pytest.raises(MissingComponentReference) as exc_info:
            build_ir(schemas_only(raw))
        assert exc_info.value.path == "#/components/schemas/A/properties/b"
        assert "(at #/components/schemas/A/properties/b)" in str(exc_info.value)

    def test_schema_ref_to_parameter(self):
        document = schemas_only({"A": {"$ref": "#/components/parameters/Limit"}})
        document["components"]["parameters"] = {"Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}}}
        with pytest.raises(UnsupportedReferenceTarget):
            build_ir(document)

    def test_nested_reference(self):
        document = schemas_only({})
        document["components"]["parameters"] = {
            "A": {"$ref": "#/components/parameters/B"},
            "B": {"name": "b", "in": "query", "schema": {"type": "string"}},
        }
        document["paths"] = {
            "/x": {"get": {"parameters": [{"$ref": "#/components/parameters/A"}], "responses": {"200": {}}}}
        }
        with pytest.raises(NestedReferenceNotBundled):
            build_ir(document)

    def test_circular_component_reference(self):
        document = schemas_only({})
        document["components"]["parameters"] = {
            "A": {"$ref": "#/components/parameters/B"},
            "B": {"$ref": "#/components/parameters/A"},
        }
        with pytest.raises(CircularComponentReference):
            build_ir(document)

    def test_unknown_type(self):
        with pytest.raises(UnknownSchemaShape) as exc_info:
            build_ir(schemas_only({"A": {"type": "strange"}}))
        assert exc_info.value.path == "#/components/schemas/A/type"

    def test_boolean_schema_rejected(self):
        with pytest.raises(UnknownSchemaShape):
            build_ir(schemas_only({"A": {"type": "object", "properties": {"x": True}}}))

    def test_recursion_limit(self):
        deep = {"type": "object", "properties": {"a": {"type": "object", "properties": {"b": {"type": "object"}}}}}
        with pytest.raises(RecursionLimitExceeded):
            build_ir(schemas_only({"Deep": deep}), BuildConfig(max_depth=1))

    def test_parameter_without_schema_or_content(self):
        document = schemas_only({})
        document["paths"] = {"/x": {"get": {"parameters": [{"name": "q", "in": "query"}], "responses": {"200": {}}}}}
        with pytest.raises(UnknownSchemaShape, match="either schema or content"):
            build_ir(document)

    def test_discriminator_must_be_an_object(self):
        document = schemas_only({"A": {"type": "object", "discriminator": "kind"}})
        with pytest.raises(UnknownSchemaShape) as exc_info:
            build_ir(document)
        assert exc_info.value.path == "#/components/schemas/A/discriminator"

    def test_parameter_content_must_be_an_object(self):
        document = schemas_only({})
        parameter = {"name": "q", "in": "query", "content": ["application/json"]}
        document["paths"] = {"/x": {"get": {"parameters": [parameter], "responses": {"200": {}}}}}
        with pytest.raises(UnknownSchemaShape, match="content must be an object") as exc_info:
            build_ir(document)
        assert exc_info.value.path.endswith("/q/content")
