"""
description.py - Síntese de descrições Markdown para tooltips de completion

Propósito:
    Compõe um ou mais descritores (um candidato pode corresponder a vários
    tag helpers) em um único documento Markdown.

Formato de saída:
    **Tipo**

    Summary reescrito (opcional)

    ---

    **int** Tipo.**Propriedade**

Componentes principais:
    - TagHelperDescriptionFactory: Síntese de elementos e atributos
    - to_markup: Envolve o texto em MarkupContent (Markdown)

Notas de implementação:
    - Sequência vazia → None ("sem descrição", não é erro)
    - Separador apenas entre entradas, nunca antes da primeira ou após a última
    - Elementos sem documentação consultam o serviço de lookup por nome de tipo
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from lsprotocol.types import MarkupContent, MarkupKind

from taghelper_lsp.models import AttributeDescriptionInfo, ElementDescriptionInfo
from taghelper_lsp.signatures import get_simple_name, reduce_type_name
from taghelper_lsp.summary import clean_summary

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = "\n\n---\n\n"

DescriptionInfo = Union[ElementDescriptionInfo, AttributeDescriptionInfo]


class TagHelperDescriptionFactory:
    """
    Gera descrições Markdown a partir de ElementDescriptionInfo/AttributeDescriptionInfo.

    Attributes:
        lookup_service: Objeto com find_by_type_name(name) -> descritor | None.
                        Obrigatório; usado para entradas sem documentação.
    """

    def __init__(self, lookup_service):
        if lookup_service is None:
            raise ValueError("lookup_service é obrigatório")
        self.lookup_service = lookup_service

    def synthesize(self, records: Sequence[DescriptionInfo]) -> Optional[str]:
        """Despacha para elemento ou atributo conforme o tipo dos registros."""
        if not records:
            return None
        if all(isinstance(r, ElementDescriptionInfo) for r in records):
            return self.create_element_description(records)
        if all(isinstance(r, AttributeDescriptionInfo) for r in records):
            return self.create_attribute_description(records)
        raise TypeError("Registros de elemento e atributo não podem ser misturados")

    def create_element_description(
        self, infos: Sequence[ElementDescriptionInfo]
    ) -> Optional[str]:
        if not infos:
            return None

        entries = []
        for info in infos:
            header = f"**{reduce_type_name(info.tag_helper_type_name)}**"
            documentation = self._element_documentation(info)
            entries.append(_format_entry(header, documentation))
        return ENTRY_SEPARATOR.join(entries)

    def create_attribute_description(
        self, infos: Sequence[AttributeDescriptionInfo]
    ) -> Optional[str]:
        if not infos:
            return None

        entries = []
        for info in infos:
            return_type = reduce_type_name(get_simple_name(info.return_type_name))
            owner = reduce_type_name(info.tag_helper_type_name)
            header = f"**{return_type}** {owner}.**{info.property_name}**"
            entries.append(_format_entry(header, info.documentation))
        return ENTRY_SEPARATOR.join(entries)

    def _element_documentation(self, info: ElementDescriptionInfo) -> Optional[str]:
        if info.documentation is not None:
            return info.documentation
        descriptor = self.lookup_service.find_by_type_name(info.tag_helper_type_name)
        if descriptor is None:
            logger.debug(f"Tag helper não encontrado no lookup: {info.tag_helper_type_name}")
            return None
        return descriptor.documentation


def _format_entry(header: str, documentation: Optional[str]) -> str:
    summary = clean_summary(documentation)
    if summary is None:
        return header
    return f"{header}\n\n{summary}"


def to_markup(description: Optional[str]) -> Optional[MarkupContent]:
    if description is None:
        return None
    return MarkupContent(kind=MarkupKind.Markdown, value=description)
