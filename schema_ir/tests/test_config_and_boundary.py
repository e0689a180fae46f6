"""
Tests for BuildConfig and the writer-side boundary checks.
"""

import unittest

import pytest

from schema_ir import build_ir
from schema_ir.config import DEFAULT_HTTP_METHODS, BuildConfig
from schema_ir.errors import IRBoundaryError
from schema_ir.ir import Document, assert_ir_document, ensure_valid_document, validate_document


class TestBuildConfig(unittest.TestCase):
    def test_defaults(self):
        config = BuildConfig()
        self.assertEqual(config.max_depth, 256)
        self.assertEqual(config.http_methods, DEFAULT_HTTP_METHODS)
        self.assertEqual(config.zod_module_names, ["zod", "zod/v4"])
        self.assertEqual(config.schema_name_suffix, "Schema")
        self.assertTrue(config.generate_advisories)
        self.assertFalse(config.strict_required)

    def test_from_dict_ignores_unknown_keys(self):
        config = BuildConfig.from_dict({"max_depth": 10, "unknown": True})
        self.assertEqual(config.max_depth, 10)
        self.assertFalse(hasattr(config, "unknown"))

    def test_to_dict_round_trip(self):
        config = BuildConfig(max_depth=5, strict_required=True)
        self.assertEqual(BuildConfig.from_dict(config.to_dict()), config)

    def test_http_methods_are_not_shared(self):
        first = BuildConfig()
        first.http_methods.append("query")
        self.assertNotIn("query", BuildConfig().http_methods)


class TestBoundary:
    def test_raw_openapi_is_rejected(self):
        with pytest.raises(IRBoundaryError, match="raw source-format document"):
            assert_ir_document({"openapi": "3.1.0", "paths": {}}, "TypeWriter")

    def test_other_values_are_rejected(self):
        with pytest.raises(IRBoundaryError, match="expected an IR Document, got str"):
            assert_ir_document("not a document")

    def test_document_passes(self):
        document = build_ir({"openapi": "3.1.0", "components": {"schemas": {"A": {"type": "string"}}}})
        assert assert_ir_document(document) is document
        assert ensure_valid_document(document) is document

    def test_invariant_violations_are_reported(self):
        document = Document(schema_names=["A"])
        problems = validate_document(document)
        assert "topological order does not match schema names" in problems
        with pytest.raises(IRBoundaryError):
            ensure_valid_document(document)
