"""
signatures.py - Redução de assinaturas qualificadas para nomes de exibição

Propósito:
    Converte assinaturas totalmente qualificadas (tipos e membros, possivelmente
    genéricos) no último segmento pontuado de nível superior, para exibição em
    tooltips de completion.

Componentes principais:
    - reduce_type_name: Varredura reversa com balanceamento de delimitadores
    - reduce_cref_value: Redução de valores cref ("T:", "P:", "M:")
    - get_simple_name: Alias de tipos primitivos (System.Int32 → int)

Notas de implementação:
    - Três famílias de delimitadores: {} (genéricos em notação cref),
      () (parâmetros/tuplas) e <> (genéricos em notação fonte)
    - Cada fase zera seu contador antes da próxima começar, na posição atual
    - Apenas um "." balanceado encerra a varredura
    - Entrada desbalanceada não é erro: retorna o prefixo até from_index
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Pares (fechamento, abertura), na ordem em que as fases são aplicadas
_SCOPE_PAIRS = (("}", "{"), (")", "("), (">", "<"))

# Tamanho do prefixo "K:" de um valor cref
CREF_PREFIX_LENGTH = 2

CREF_TYPE = "T"
CREF_PROPERTY = "P"
CREF_METHOD = "M"
CREF_KINDS = frozenset({CREF_TYPE, CREF_PROPERTY, CREF_METHOD})

PRIMITIVE_DISPLAY_TYPE_NAMES: dict[str, str] = {
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.Int32": "int",
    "System.UInt32": "uint",
    "System.Int16": "short",
    "System.UInt16": "ushort",
    "System.Int64": "long",
    "System.UInt64": "ulong",
    "System.Single": "float",
    "System.Double": "double",
    "System.Char": "char",
    "System.Boolean": "bool",
    "System.Object": "object",
    "System.String": "string",
    "System.Decimal": "decimal",
}


def reduce_type_name(content: str, from_index: Optional[int] = None) -> str:
    """
    Reduz uma assinatura ao segmento após o último "." de nível superior.

    Args:
        content: Assinatura completa (ex: "Ns.Outer{T}.Inner")
        from_index: Índice (inclusivo) onde a varredura reversa começa.
                    Padrão: último caractere.

    Returns:
        content[ponto + 1 : from_index + 1] se houver "." balanceado,
        senão content[: from_index + 1].

    Exemplo:
        >>> reduce_type_name("Outer.Inner<System.String>")
        'Inner<System.String>'
    """
    if from_index is None:
        from_index = len(content) - 1
    if from_index < 0:
        return ""

    i = from_index
    while i >= 0:
        for closing, opening in _SCOPE_PAIRS:
            i = _balance_scope(content, i, closing, opening)
            if i < 0:
                logger.debug(
                    f"Escopo '{opening}{closing}' desbalanceado em assinatura: {content!r}"
                )
                return content[: from_index + 1]

        if content[i] == ".":
            return content[i + 1 : from_index + 1]
        i -= 1

    return content[: from_index + 1]


def _balance_scope(content: str, index: int, closing: str, opening: str) -> int:
    """
    Consome caracteres à esquerda até fechar o grupo aberto em content[index].

    Retorna o índice do delimitador de abertura correspondente, o próprio
    index se não houver grupo, ou -1 se a varredura sair pela esquerda.
    """
    scope = 0
    i = index
    while True:
        char = content[i]
        if char == closing:
            scope += 1
        elif char == opening and scope > 0:
            scope -= 1

        if scope > 0:
            i -= 1

        if scope == 0 or i < 0:
            return i


def get_simple_name(type_name: str) -> str:
    """Retorna o alias de exibição de um tipo primitivo, ou o próprio nome."""
    return PRIMITIVE_DISPLAY_TYPE_NAMES.get(type_name, type_name)


def cref_kind(value: str) -> Optional[str]:
    """Retorna o código de tipo do cref ("T", "P", "M", ...) ou None se malformado."""
    if len(value) < CREF_PREFIX_LENGTH:
        return None
    return value[0]


def reduce_cref_value(value: str) -> str:
    """
    Reduz o valor de um atributo cref.

    Mapeamento:
        T:Ns.Type              → Type
        P:Ns.Type.Prop         → Type.Prop
        M:Ns.Type.Method(Arg)  → Type.Method(Arg)
        X:qualquer.coisa       → qualquer.coisa (sem redução)
        valor com < 2 chars    → ""
    """
    kind = cref_kind(value)
    if kind is None:
        return ""

    signature = value[CREF_PREFIX_LENGTH:]

    if kind == CREF_TYPE:
        return reduce_type_name(signature)

    if kind in (CREF_PROPERTY, CREF_METHOD):
        member = reduce_type_name(signature)
        # Posição do último caractere do dono: descarta ".Membro" (X.)
        owner_index = len(signature) - len(member) - 2
        owner = reduce_type_name(signature, owner_index)
        if not owner:
            return member
        return f"{owner}.{member}"

    return signature
