"""
Tests for the pre-parse lint pass over Zod source.
"""

import unittest

from schema_ir import parse_zod_source
from schema_ir.errors import DiagnosticCode
from schema_ir.zod import BindingResolver, lint_tree
from schema_ir.zod.syntax import parse_source


def lint(source):
    root = parse_source(source).root_node
    return lint_tree(root, BindingResolver(root, ["zod"]))


class TestLegacySyntax(unittest.TestCase):
    """Zod 3 methods with a fixed replacement"""

    def test_nonempty_location_and_replacement(self):
        diagnostics = lint('import { z } from "zod";\nexport const NameSchema = z.string().nonempty();\n')
        self.assertEqual(len(diagnostics), 1)
        diagnostic = diagnostics[0]
        self.assertEqual(diagnostic.code, DiagnosticCode.LEGACY_SYNTAX)
        self.assertIn(".min(1)", diagnostic.message)
        self.assertEqual(diagnostic.message, "Zod 3 method '.nonempty()' is not supported in Zod 4. Use '.min(1)' instead.")
        self.assertEqual((diagnostic.line, diagnostic.column), (2, 37))

    def test_nested_chain_reported_once(self):
        source = 'import { z } from "zod";\nconst A = z.object({\n  tags: z.array(z.string()).nonempty(),\n});\n'
        diagnostics = lint(source)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual((diagnostics[0].line, diagnostics[0].column), (3, 28))

    def test_multiline_chain_points_at_the_method(self):
        source = 'import { z } from "zod";\nexport const NameSchema = z\n  .string()\n  .nonempty();\n'
        [diagnostic] = lint(source)
        self.assertEqual((diagnostic.line, diagnostic.column), (4, 3))

    def test_format_refinements_are_clean(self):
        source = 'import { z } from "zod";\nconst A = z.string().uuid().email();\nconst B = z.number().int();\n'
        self.assertEqual(lint(source), [])

    def test_zod4_builders_are_clean(self):
        self.assertEqual(lint('import { z } from "zod";\nconst A = z.email().min(3);\nconst B = z.string().min(1);\n'), [])

    def test_shadowed_z_is_ignored(self):
        source = 'import { z } from "zod";\nfunction build(z) {\n  return z.string().nonempty();\n}\n'
        self.assertEqual(lint(source), [])


class TestNonAnalyzableSchemas(unittest.TestCase):
    """Object shapes that cannot be read statically"""

    def test_computed_key(self):
        source = 'import { z } from "zod";\nconst key = "dynamic";\nexport const DynSchema = z.object({ [key]: z.string() });\n'
        diagnostics = lint(source)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, DiagnosticCode.NON_ANALYZABLE_SCHEMA)
        self.assertIn("Computed", diagnostics[0].message)
        self.assertEqual((diagnostics[0].line, diagnostics[0].column), (3, 37))

    def test_spread(self):
        source = (
            'import { z } from "zod";\n'
            "const ASchema = z.object({ a: z.string() });\n"
            "export const BSchema = z.object({ ...ASchema.shape, b: z.string() });\n"
        )
        diagnostics = lint(source)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, DiagnosticCode.NON_ANALYZABLE_SCHEMA)
        self.assertIn("Spread", diagnostics[0].message)
        self.assertEqual(diagnostics[0].line, 3)

    def test_flagged_declaration_has_no_ir(self):
        source = (
            'import { z } from "zod";\n'
            "const ASchema = z.object({ a: z.string() });\n"
            "export const BSchema = z.object({ ...ASchema.shape, b: z.string() });\n"
        )
        result = parse_zod_source(source)
        self.assertEqual(result.ir.schema_names, ["A"])
        self.assertEqual([d.code for d in result.diagnostics], [DiagnosticCode.NON_ANALYZABLE_SCHEMA])

    def test_strict_object_shapes_are_checked(self):
        diagnostics = lint('import { z } from "zod";\nconst k = "x";\nconst A = z.strictObject({ [k]: z.string() }).describe("a");\n')
        self.assertEqual([d.code for d in diagnostics], [DiagnosticCode.NON_ANALYZABLE_SCHEMA])


if __name__ == "__main__":
    unittest.main()
