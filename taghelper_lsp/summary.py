"""
summary.py - Extração de <summary> e reescrita de referências cruzadas

Propósito:
    Extrai a seção <summary> de um bloco de documentação XML e substitui
    marcadores <see cref="..."/> / <seealso cref="..."/> por nomes reduzidos
    em spans de código Markdown.

Componentes principais:
    - extract_summary: Conteúdo entre <summary> e </summary> (ou None)
    - rewrite_cross_references: Substitui crefs e normaliza linhas
    - clean_summary: Composição das duas etapas

Notas de implementação:
    - Delimitadores procurados sem diferenciar maiúsculas/minúsculas
    - Sem extração parcial: falta de qualquer delimitador → None
    - Substituições aplicadas do último match para o primeiro
    - Cada linha é aparada independentemente; quebras normalizadas para "\\n"
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from taghelper_lsp.signatures import CREF_KINDS, CREF_PREFIX_LENGTH, cref_kind, reduce_cref_value

logger = logging.getLogger(__name__)

_SUMMARY_START = re.compile(re.escape("<summary>"), re.IGNORECASE)
_SUMMARY_END = re.compile(re.escape("</summary>"), re.IGNORECASE)

# <see cref="T:Ns.Type"/>, <seealso cref="P:Ns.Type.Prop">
_CREF_PATTERN = re.compile(r'<(see|seealso)[\s]+cref="([^">]+)"[^>]*>')


def extract_summary(documentation: Optional[str]) -> Optional[str]:
    """
    Extrai o conteúdo bruto da seção <summary>.

    Returns:
        Texto entre os delimitadores, ou None se a documentação for vazia
        ou qualquer delimitador estiver ausente.
    """
    if not documentation:
        return None

    start = _SUMMARY_START.search(documentation)
    if not start:
        return None

    end = _SUMMARY_END.search(documentation)
    if not end:
        logger.debug("Documentação sem </summary>; descrição omitida")
        return None

    if end.start() < start.end():
        logger.debug("</summary> antes de <summary>; descrição omitida")
        return None

    return documentation[start.end() : end.start()]


def rewrite_cross_references(summary: str) -> str:
    """
    Substitui marcadores cref pelo nome reduzido e apara cada linha.

    Crefs de tipo reconhecido (T, P, M) viram `Nome`; os demais repassam
    a assinatura sem o prefixo "K:" e sem formatação.
    """
    rewritten = summary
    for match in reversed(list(_CREF_PATTERN.finditer(summary))):
        replacement = _format_cref(match.group(2))
        rewritten = rewritten[: match.start()] + replacement + rewritten[match.end() :]

    lines = rewritten.split("\n")
    return "\n".join(line.strip() for line in lines)


def _format_cref(value: str) -> str:
    kind = cref_kind(value)
    if kind is None:
        logger.debug(f"cref malformado ignorado: {value!r}")
        return ""
    if kind not in CREF_KINDS:
        return value[CREF_PREFIX_LENGTH:]
    return f"`{reduce_cref_value(value)}`"


def clean_summary(documentation: Optional[str]) -> Optional[str]:
    """Extrai e reescreve o summary; None se não houver summary."""
    summary = extract_summary(documentation)
    if summary is None:
        return None
    return rewrite_cross_references(summary)
