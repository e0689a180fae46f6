"""
Tests for the schema-ir command line.
"""

import json
import os

from click.testing import CliRunner

from schema_ir.cli import cli

TEST_DATA = os.path.join(os.path.dirname(__file__), "test_data")


class TestOpenapiCommand:
    def test_full_json_output(self, tmp_path):
        out = tmp_path / "ir.json"
        runner = CliRunner()
        result = runner.invoke(cli, ["openapi", "-o", str(out), os.path.join(TEST_DATA, "petstore.json")])
        assert result.exit_code == 0, result.output
        output = json.loads(out.read_text())
        assert output["schemaNames"] == ["Pet", "Owner", "Error", "Tag"]
        assert output["dependencyGraph"]["topologicalOrder"] == ["Owner", "Pet", "Error", "Tag"]

    def test_summary(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["openapi", "--summary", os.path.join(TEST_DATA, "petstore.json")])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "Owner (depth 1) -> Pet [circular]" in lines
        assert "Pet (depth 2) -> Owner [circular]" in lines
        assert "Error (depth 0)" in lines
        assert "3 operation(s), 1 enum(s)" in lines

    def test_build_error_exits_nonzero(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"openapi": "3.1.0", "components": {"schemas": {"A": {"$ref": "#/nope"}}}}))
        runner = CliRunner()
        result = runner.invoke(cli, ["openapi", str(bad)])
        assert result.exit_code == 1
        assert "#/components/schemas/A" in result.output

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"http_methods": ["post"]}))
        runner = CliRunner()
        out = tmp_path / "ir.json"
        result = runner.invoke(cli, ["openapi", "-c", str(config), "-o", str(out), os.path.join(TEST_DATA, "petstore.json")])
        assert result.exit_code == 0, result.output
        output = json.loads(out.read_text())
        assert [op["method"] for op in output["operations"]] == ["post"]


class TestZodCommand:
    def test_clean_source(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["zod", os.path.join(TEST_DATA, "user_schemas.ts")])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        for name in ["Address", "User", "TreeNode", "Shape", "Status"]:
            assert name in lines
        assert "advisory: No .describe() found on AddressSchema. Consider adding a description." in lines

    def test_diagnostics_exit_nonzero(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["zod", os.path.join(TEST_DATA, "legacy_schemas.ts")])
        assert result.exit_code == 1
        assert "Note" in result.output
        assert "LegacySyntax" in result.output

    def test_endpoints_are_listed(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["zod", os.path.join(TEST_DATA, "endpoints.ts")])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "GET /users/{id}" in lines
        assert "POST /users" in lines
