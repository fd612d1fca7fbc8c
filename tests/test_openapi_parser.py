import json
from pathlib import Path

import pytest

from refitgen.errors import DocumentLoadError
from refitgen.parser.base import ParameterKind
from refitgen.parser.openapi import is_yaml_path, load_document, parse_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestIsYamlPath:
    @pytest.mark.parametrize("name", ["api.yaml", "api.yml", "API.YAML"])
    def test_yaml_extensions(self, name):
        assert is_yaml_path(name) is True

    @pytest.mark.parametrize("name", ["api.json", "api.txt", "api"])
    def test_other_extensions(self, name):
        assert is_yaml_path(name) is False


class TestOpenApiYaml:
    def test_title(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        assert doc.title == "Swagger Petstore"

    def test_operation_order_follows_document(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        order = [(route, verb) for route, verb, _ in doc.iter_operations()]
        assert order == [
            ("/pets", "get"),
            ("/pets", "post"),
            ("/pets/{petId}", "get"),
            ("/pets/{petId}", "delete"),
            ("/pets/{petId}/photo", "put"),
        ]
        assert doc.operation_count == 5

    def test_integer_status_codes_become_strings(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        list_pets = doc.paths["/pets"]["get"]
        assert list(list_pets.responses) == ["200"]
        assert list_pets.responses["200"].type_schema["type"] == "array"

    def test_request_body_becomes_body_parameter(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        create = doc.paths["/pets"]["post"]
        assert len(create.parameters) == 1
        body = create.parameters[0]
        assert body.name == "body"
        assert body.kind is ParameterKind.BODY
        assert body.required is True
        assert body.type_schema == {"$ref": "#/components/schemas/NewPet"}

    def test_request_body_x_name_and_first_content_type(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        upload = doc.paths["/pets/{petId}/photo"]["put"]
        assert [p.name for p in upload.parameters] == ["petId", "photo"]
        assert upload.parameters[1].type_schema == {"type": "string", "format": "binary"}

    def test_path_item_parameters_are_inherited(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        for verb in ("get", "delete"):
            params = doc.paths["/pets/{petId}"][verb].parameters
            assert [(p.name, p.kind) for p in params] == [("petId", ParameterKind.PATH)]

    def test_response_without_content_has_no_schema(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        assert doc.paths["/pets/{petId}"]["delete"].responses["200"].type_schema is None

    def test_component_schemas(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        assert list(doc.schemas) == ["Pet", "NewPet", "pet-status"]


class TestOpenApiJson:
    def test_parameter_and_response_refs_are_resolved(self):
        doc = load_document(FIXTURES / "petstore.json")
        get_user = doc.paths["/users/{id}"]["get"]
        assert get_user.parameters[0].name == "id"
        assert get_user.parameters[0].kind is ParameterKind.PATH
        assert get_user.responses["200"].description == "A user"
        assert get_user.responses["200"].type_schema == {"$ref": "#/components/schemas/User"}

    def test_header_parameter_kept_in_model(self):
        doc = load_document(FIXTURES / "petstore.json")
        kinds = [p.kind for p in doc.paths["/users/{id}"]["put"].parameters]
        assert kinds == [ParameterKind.PATH, ParameterKind.HEADER, ParameterKind.BODY]


class TestSwagger2:
    def test_body_and_inline_types(self):
        doc = load_document(FIXTURES / "swagger2.json")
        params = doc.paths["/orders/{orderId}"]["post"].parameters
        assert [(p.name, p.kind) for p in params] == [
            ("order", ParameterKind.BODY),
            ("orderId", ParameterKind.PATH),
            ("dryRun", ParameterKind.QUERY),
        ]
        assert params[1].type_schema == {"type": "string", "format": "uuid"}

    def test_response_schema_and_definitions(self):
        doc = load_document(FIXTURES / "swagger2.json")
        response = doc.paths["/orders/{orderId}"]["post"].responses["200"]
        assert response.type_schema == {"$ref": "#/definitions/Order"}
        assert list(doc.schemas) == ["Order"]


class TestOperationOverridesPathParameters:
    def test_operation_parameter_wins(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {
                "/items/{id}": {
                    "parameters": [{"name": "id", "in": "path", "schema": {"type": "integer"}}],
                    "get": {
                        "operationId": "get-item",
                        "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
                    },
                },
            },
        })
        params = doc.paths["/items/{id}"]["get"].parameters
        assert len(params) == 1
        assert params[0].type_schema == {"type": "string"}

    def test_non_verb_keys_are_skipped(self):
        doc = parse_document({
            "swagger": "2.0",
            "paths": {"/x": {"summary": "X", "servers": [], "GET": {"operationId": "get-x"}}},
        })
        assert list(doc.paths["/x"]) == ["get"]


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError, match="Cannot read"):
            load_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="Cannot parse"):
            load_document(f)

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text("paths: [unclosed\n", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            load_document(f)

    def test_yaml_content_with_json_extension_is_rejected(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text("openapi: 3.0.0\npaths: {}\n", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            load_document(f)

    def test_missing_version_field(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text(json.dumps({"paths": {}}), encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="version"):
            load_document(f)

    def test_error_carries_path(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text("[]", encoding="utf-8")
        with pytest.raises(DocumentLoadError) as exc_info:
            load_document(f)
        assert exc_info.value.path == str(f)

    def test_paths_must_be_mapping(self):
        with pytest.raises(DocumentLoadError, match="paths"):
            parse_document({"openapi": "3.0.0", "paths": ["/a"]})

    def test_unresolvable_reference(self):
        doc = {
            "openapi": "3.0.0",
            "paths": {"/a": {"get": {"operationId": "a", "parameters": [{"$ref": "#/components/parameters/Nope"}]}}},
        }
        with pytest.raises(DocumentLoadError, match="Unresolvable"):
            parse_document(doc)

    def test_unknown_parameter_location(self):
        doc = {
            "openapi": "3.0.0",
            "paths": {"/a": {"get": {"operationId": "a", "parameters": [{"name": "x", "in": "body2"}]}}},
        }
        with pytest.raises(DocumentLoadError, match="unknown location"):
            parse_document(doc)

    def test_invalid_field_type(self):
        doc = {"openapi": "3.0.0", "paths": {"/a": {"get": {"operationId": "a", "tags": "not-a-list"}}}}
        with pytest.raises(DocumentLoadError, match="Invalid API description"):
            parse_document(doc)

    def test_undecodable_file(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_bytes(b'{"openapi": "3.0.0", \xff}')
        with pytest.raises(DocumentLoadError, match="Cannot read"):
            load_document(f)


def _operation_doc(operation: dict, **extra) -> dict:
    return {"openapi": "3.0.0", "paths": {"/a": {"get": {"operationId": "a", **operation}}}, **extra}


class TestMalformedDocuments:
    @pytest.mark.parametrize(
        "doc, message",
        [
            ({"openapi": "3.0.0", "info": "oops", "paths": {}}, "'info' must be a mapping"),
            (_operation_doc({"responses": ["200"]}), "'responses' must be a mapping"),
            ({"openapi": "3.0.0", "paths": {}, "components": {"schemas": []}}, "'components.schemas'"),
            ({"openapi": "3.0.0", "paths": {}, "components": "none"}, "'components' must be a mapping"),
            ({"swagger": "2.0", "paths": {}, "definitions": ["Order"]}, "'definitions'"),
            (_operation_doc({"parameters": ["x"]}), "Parameter must be a mapping"),
            (_operation_doc({"parameters": {"name": "x"}}), "must be a list"),
            (_operation_doc({"responses": {"200": "ok"}}), "Response '200' must be a mapping"),
            (_operation_doc({"requestBody": {"content": {"application/json": "x"}}}), "Media type"),
            ({"openapi": "3.0.0", "paths": {"/a": "x"}}, "Path item '/a'"),
        ],
    )
    def test_rejected_with_load_error(self, doc, message):
        with pytest.raises(DocumentLoadError, match=message):
            parse_document(doc)

    def test_self_referencing_parameter(self):
        doc = _operation_doc(
            {"parameters": [{"$ref": "#/components/parameters/Loop"}]},
            components={"parameters": {"Loop": {"$ref": "#/components/parameters/Loop"}}},
        )
        with pytest.raises(DocumentLoadError, match="Circular reference"):
            parse_document(doc)

    def test_mutually_referencing_responses(self):
        doc = _operation_doc(
            {"responses": {"200": {"$ref": "#/components/responses/A"}}},
            components={
                "responses": {
                    "A": {"$ref": "#/components/responses/B"},
                    "B": {"$ref": "#/components/responses/A"},
                }
            },
        )
        with pytest.raises(DocumentLoadError, match="Circular reference"):
            parse_document(doc)
