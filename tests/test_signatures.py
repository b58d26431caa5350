"""
test_signatures.py - Testes para redução de assinaturas

Cobertura:
- Segmentos pontuados simples
- Pontos dentro de {}, () e <> não são separadores
- Entrada desbalanceada degrada para o prefixo
- from_index no meio da string
- Valores cref T/P/M e tipos desconhecidos
- Aliases de tipos primitivos
"""

from __future__ import annotations

import pytest

from taghelper_lsp.signatures import (
    get_simple_name,
    reduce_cref_value,
    reduce_type_name,
)


class TestReduceTypeName:
    @pytest.mark.parametrize(
        "signature, expected",
        [
            ("a.b.c", "c"),
            ("System.String", "String"),
            ("Microsoft.AspNetCore.Mvc.TagHelpers.AnchorTagHelper", "AnchorTagHelper"),
        ],
    )
    def test_last_segment(self, signature, expected):
        assert reduce_type_name(signature) == expected

    def test_simple_name_unchanged(self):
        assert reduce_type_name("AnchorTagHelper") == "AnchorTagHelper"

    def test_already_reduced_is_stable(self):
        reduced = reduce_type_name("Ns.Sub.Type")
        assert reduce_type_name(reduced) == reduced

    def test_empty(self):
        assert reduce_type_name("") == ""

    def test_angle_bracket_generic(self):
        assert reduce_type_name("Outer.Inner<System.String>") == "Inner<System.String>"

    def test_curly_generic(self):
        result = reduce_type_name("System.Collections.Generic.List{System.String}")
        assert result == "List{System.String}"

    def test_nested_generics(self):
        signature = "Ns.Dictionary{System.String,Ns.List{Ns.Item}}"
        assert reduce_type_name(signature) == "Dictionary{System.String,Ns.List{Ns.Item}}"

    def test_parameter_list(self):
        signature = "Ns.Type.Method(System.String,System.Int32)"
        assert reduce_type_name(signature) == "Method(System.String,System.Int32)"

    def test_generic_owner_before_member(self):
        """Ponto dentro do grupo genérico do dono não é confundido com o separador."""
        assert reduce_type_name("Ns.Owner<Inner.Type>.Member") == "Member"

    def test_mixed_families(self):
        signature = "Ns.Type.Method(Ns.List{Ns.Item},Ns.Func<Ns.A>)"
        assert reduce_type_name(signature) == "Method(Ns.List{Ns.Item},Ns.Func<Ns.A>)"

    def test_unbalanced_returns_prefix(self):
        assert reduce_type_name("Ns.Type>") == "Ns.Type>"
        assert reduce_type_name("Ns.Method)") == "Ns.Method)"

    def test_unmatched_opening_is_inert(self):
        assert reduce_type_name("Ns.List{T") == "List{T"

    def test_from_index_mid_string(self):
        # "Ns.Owner.Member": índice 7 é o "r" final de Owner
        assert reduce_type_name("Ns.Owner.Member", 7) == "Owner"

    def test_from_index_without_dot(self):
        assert reduce_type_name("Owner.Member", 4) == "Owner"

    def test_negative_from_index(self):
        assert reduce_type_name("Owner", -2) == ""


class TestReduceCrefValue:
    def test_type(self):
        assert reduce_cref_value("T:Microsoft.AspNetCore.Mvc.Controller") == "Controller"

    def test_property(self):
        assert reduce_cref_value("P:Ns.Sub.Type.Prop") == "Type.Prop"

    def test_method_with_parameters(self):
        assert reduce_cref_value("M:Foo.Bar.Baz(System.String)") == "Bar.Baz(System.String)"

    def test_method_on_generic_owner(self):
        assert reduce_cref_value("M:Ns.List{T}.Add(T)") == "List{T}.Add(T)"

    def test_member_without_owner(self):
        assert reduce_cref_value("P:Prop") == "Prop"

    def test_unknown_kind_passthrough(self):
        assert reduce_cref_value("F:Ns.Type.Field") == "Ns.Type.Field"

    def test_malformed(self):
        assert reduce_cref_value("T") == ""
        assert reduce_cref_value("") == ""

    def test_prefix_only(self):
        assert reduce_cref_value("T:") == ""


class TestGetSimpleName:
    @pytest.mark.parametrize(
        "full_name, alias",
        [
            ("System.Int32", "int"),
            ("System.Boolean", "bool"),
            ("System.String", "string"),
            ("System.Decimal", "decimal"),
            ("System.Object", "object"),
        ],
    )
    def test_primitives(self, full_name, alias):
        assert get_simple_name(full_name) == alias

    def test_non_primitive_unchanged(self):
        assert get_simple_name("Ns.Custom") == "Ns.Custom"

    def test_exact_match_only(self):
        assert get_simple_name("system.int32") == "system.int32"
