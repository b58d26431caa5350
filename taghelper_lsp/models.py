"""
models.py - Registros de descritores de tag helpers

Propósito:
    Define os registros imutáveis produzidos na geração de candidatos de
    completion e consumidos na resolução do tooltip.

Componentes principais:
    - TagHelperDescriptor: Descritor mantido pelo serviço de lookup
    - ElementDescriptionInfo: Candidato de elemento (tipo dono + documentação)
    - AttributeDescriptionInfo: Candidato de atributo (retorno, display name,
      propriedade, documentação)

Notas de implementação:
    - Serialização em dicts camelCase (viajam em CompletionItem.data)
    - from_dict levanta ValueError para entradas malformadas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from taghelper_lsp.signatures import get_simple_name


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Campo '{key}' ausente ou inválido: {value!r}")
    return value


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Campo '{key}' inválido: {value!r}")
    return value


@dataclass(frozen=True)
class TagHelperDescriptor:
    """Descritor de tag helper indexado pelo nome de tipo completo."""

    type_name: str
    documentation: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TagHelperDescriptor":
        if not isinstance(data, dict):
            raise ValueError(f"Descritor inválido: {data!r}")
        return cls(
            type_name=_require_str(data, "typeName"),
            documentation=_optional_str(data, "documentation"),
            display_name=_optional_str(data, "displayName"),
        )

    def to_dict(self) -> dict:
        return {
            "typeName": self.type_name,
            "documentation": self.documentation,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class ElementDescriptionInfo:
    """Descrição de um candidato de elemento."""

    tag_helper_type_name: str
    documentation: Optional[str] = None

    @classmethod
    def from_descriptor(cls, descriptor: TagHelperDescriptor) -> "ElementDescriptionInfo":
        return cls(descriptor.type_name, descriptor.documentation)

    @classmethod
    def from_dict(cls, data: Any) -> "ElementDescriptionInfo":
        if not isinstance(data, dict):
            raise ValueError(f"Entrada de elemento inválida: {data!r}")
        return cls(
            tag_helper_type_name=_require_str(data, "tagHelperTypeName"),
            documentation=_optional_str(data, "documentation"),
        )

    def to_dict(self) -> dict:
        return {
            "tagHelperTypeName": self.tag_helper_type_name,
            "documentation": self.documentation,
        }


@dataclass(frozen=True)
class AttributeDescriptionInfo:
    """
    Descrição de um candidato de atributo.

    Attributes:
        return_type_name: Tipo completo da propriedade (ex: System.Int32)
        display_name: "<alias do retorno> <tipo dono>.<propriedade>"
        property_name: Nome da propriedade
        documentation: Bloco XML de documentação (pode ser None)
    """

    return_type_name: str
    display_name: str
    property_name: str
    documentation: Optional[str] = None

    @classmethod
    def create(
        cls,
        return_type_name: str,
        tag_helper_type_name: str,
        property_name: str,
        documentation: Optional[str] = None,
    ) -> "AttributeDescriptionInfo":
        """Monta o display name a partir do tipo dono, como o compilador faz."""
        display_name = (
            f"{get_simple_name(return_type_name)} {tag_helper_type_name}.{property_name}"
        )
        return cls(return_type_name, display_name, property_name, documentation)

    @property
    def tag_helper_type_name(self) -> str:
        """
        Recupera o tipo dono embutido no display name.

        Subtrai "<alias> " do início e ".<propriedade>" do fim. O resultado só
        é exato se os comprimentos baterem com os usados na construção.
        """
        prefix_length = len(get_simple_name(self.return_type_name)) + 1
        suffix_length = 1 + len(self.property_name)
        end = len(self.display_name) - suffix_length
        return self.display_name[prefix_length:end]

    @classmethod
    def from_dict(cls, data: Any) -> "AttributeDescriptionInfo":
        if not isinstance(data, dict):
            raise ValueError(f"Entrada de atributo inválida: {data!r}")
        return cls(
            return_type_name=_require_str(data, "returnTypeName"),
            display_name=_require_str(data, "displayName"),
            property_name=_require_str(data, "propertyName"),
            documentation=_optional_str(data, "documentation"),
        )

    def to_dict(self) -> dict:
        return {
            "returnTypeName": self.return_type_name,
            "displayName": self.display_name,
            "propertyName": self.property_name,
            "documentation": self.documentation,
        }
