"""
completion.py - Protocolo de resolução tardia de candidatos de completion

Propósito:
    Define o contrato em duas fases entre a geração de candidatos (barata,
    anexa um payload com os descritores) e a resolução do tooltip (custosa,
    executada apenas quando o usuário destaca o candidato).

Componentes principais:
    - UntypedCandidate / ElementCandidate / AttributeCandidate: Variante etiquetada
    - set_element_description_data / set_attribute_description_data: Fase 1
    - classify: Payload de CompletionItem.data → variante
    - resolve / populate_documentation: Fase 2

Formato do payload:
    {"kind": "element",   "entries": [{"tagHelperTypeName": ..., "documentation": ...}]}
    {"kind": "attribute", "entries": [{"returnTypeName": ..., "displayName": ...,
                                       "propertyName": ..., "documentation": ...}]}

Notas de implementação:
    - Resolução é idempotente e não altera o CompletionItem recebido
    - Payload ausente, desconhecido ou malformado → UntypedCandidate
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from lsprotocol.types import CompletionItem, MarkupContent

from taghelper_lsp.description import TagHelperDescriptionFactory, to_markup
from taghelper_lsp.models import (
    AttributeDescriptionInfo,
    ElementDescriptionInfo,
    TagHelperDescriptor,
)

logger = logging.getLogger(__name__)

ELEMENT_KIND = "element"
ATTRIBUTE_KIND = "attribute"


@dataclass(frozen=True)
class UntypedCandidate:
    """Candidato sem descrição de tag helper."""


@dataclass(frozen=True)
class ElementCandidate:
    infos: tuple[ElementDescriptionInfo, ...]


@dataclass(frozen=True)
class AttributeCandidate:
    infos: tuple[AttributeDescriptionInfo, ...]


Candidate = Union[UntypedCandidate, ElementCandidate, AttributeCandidate]


def set_element_description_data(
    item: CompletionItem, tag_helpers: Iterable[TagHelperDescriptor]
) -> CompletionItem:
    """Anexa descritores de elemento (tipo + documentação) ao item."""
    infos = [ElementDescriptionInfo.from_descriptor(th) for th in tag_helpers]
    item.data = {
        "kind": ELEMENT_KIND,
        "entries": [info.to_dict() for info in infos],
    }
    return item


def set_element_type_names(item: CompletionItem, type_names: Iterable[str]) -> CompletionItem:
    """
    Anexa apenas nomes de tipo; a documentação é buscada no lookup na resolução.
    """
    item.data = {
        "kind": ELEMENT_KIND,
        "entries": [ElementDescriptionInfo(name).to_dict() for name in type_names],
    }
    return item


def set_attribute_description_data(
    item: CompletionItem, infos: Iterable[AttributeDescriptionInfo]
) -> CompletionItem:
    item.data = {
        "kind": ATTRIBUTE_KIND,
        "entries": [info.to_dict() for info in infos],
    }
    return item


def classify(item: CompletionItem) -> Candidate:
    """Classifica o item pela etiqueta "kind" do payload."""
    data = getattr(item, "data", None)
    if not isinstance(data, dict):
        return UntypedCandidate()

    kind = data.get("kind")
    if kind not in (ELEMENT_KIND, ATTRIBUTE_KIND):
        return UntypedCandidate()

    entries = data.get("entries")
    if not isinstance(entries, list):
        logger.warning(f"Payload '{kind}' sem lista de entries em '{item.label}'")
        return UntypedCandidate()

    try:
        if kind == ELEMENT_KIND:
            return ElementCandidate(tuple(ElementDescriptionInfo.from_dict(e) for e in entries))
        return AttributeCandidate(tuple(AttributeDescriptionInfo.from_dict(e) for e in entries))
    except ValueError as e:
        logger.warning(f"Payload malformado em '{item.label}': {e}")
        return UntypedCandidate()


def resolve(
    item: CompletionItem, factory: TagHelperDescriptionFactory
) -> Optional[MarkupContent]:
    """
    Computa a documentação Markdown do candidato.

    Returns:
        MarkupContent ou None se o candidato não é de tag helper ou não
        possui entradas.
    """
    candidate = classify(item)
    if isinstance(candidate, ElementCandidate):
        return to_markup(factory.create_element_description(candidate.infos))
    if isinstance(candidate, AttributeCandidate):
        return to_markup(factory.create_attribute_description(candidate.infos))
    return None


def populate_documentation(
    item: CompletionItem, factory: TagHelperDescriptionFactory
) -> CompletionItem:
    """Retorna uma cópia do item com documentation preenchida, ou o próprio item."""
    documentation = resolve(item, factory)
    if documentation is None:
        return item
    resolved = copy.copy(item)
    resolved.documentation = documentation
    return resolved
