"""
Testes para taghelper_lsp/summary.py

Cobertura:
- extract_summary: documentação vazia, delimitadores ausentes, case-insensitive
- rewrite_cross_references: substituição em ordem, crefs desconhecidos,
  crefs malformados, aparar linhas
"""

from taghelper_lsp.summary import (
    clean_summary,
    extract_summary,
    rewrite_cross_references,
)


DOC = """
<summary>
  Creates an anchor.
</summary>
<remarks>ignored</remarks>
"""


class TestExtractSummary:
    def test_none(self):
        assert extract_summary(None) is None

    def test_empty(self):
        assert extract_summary("") is None

    def test_extracts_content(self):
        assert extract_summary(DOC) == "\n  Creates an anchor.\n"

    def test_case_insensitive(self):
        assert extract_summary("<SUMMARY>Texto</Summary>") == "Texto"

    def test_missing_start(self):
        assert extract_summary("Texto</summary>") is None

    def test_missing_end(self):
        """Sem </summary> não há extração parcial."""
        assert extract_summary("<summary>Texto truncado") is None

    def test_end_before_start(self):
        assert extract_summary("</summary>x<summary>") is None

    def test_empty_region(self):
        assert extract_summary("<summary></summary>") == ""


class TestRewriteCrossReferences:
    def test_no_markers(self):
        assert rewrite_cross_references("  Linha simples  ") == "Linha simples"

    def test_type_marker(self):
        summary = 'Usa <see cref="T:Ns.Sub.Widget"/> para renderizar.'
        assert rewrite_cross_references(summary) == "Usa `Widget` para renderizar."

    def test_two_markers_keep_order(self):
        summary = (
            'De <see cref="T:Ns.First"/> para '
            '<seealso cref="P:Ns.Second.Value"/> fim.'
        )
        result = rewrite_cross_references(summary)
        assert result == "De `First` para `Second.Value` fim."
        assert result.index("`First`") < result.index("`Second.Value`")

    def test_method_marker(self):
        summary = 'Chame <see cref="M:Ns.Type.Run(System.String)" />.'
        assert rewrite_cross_references(summary) == "Chame `Type.Run(System.String)`."

    def test_unknown_kind_passthrough(self):
        summary = 'Campo <see cref="F:Ns.Type.Field"/>.'
        assert rewrite_cross_references(summary) == "Campo Ns.Type.Field."

    def test_malformed_marker(self):
        summary = 'Vazio <see cref="T"/>.'
        assert rewrite_cross_references(summary) == "Vazio ."

    def test_lines_trimmed(self):
        summary = '\n    Primeira <see cref="T:A.B"/>\r\n    Segunda   \n'
        assert rewrite_cross_references(summary) == "\nPrimeira `B`\nSegunda\n"


class TestCleanSummary:
    def test_without_summary(self):
        assert clean_summary("<remarks>x</remarks>") is None

    def test_full(self):
        doc = '<summary>\n  Ver <see cref="T:Ns.Widget"/>.\n</summary>'
        assert clean_summary(doc) == "\nVer `Widget`.\n"
