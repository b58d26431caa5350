"""
lookup.py - Serviço de lookup de tag helpers por nome de tipo

Propósito:
    Mantém o mapeamento nome de tipo completo → TagHelperDescriptor,
    atualizado a partir de eventos de mudança de projeto. Consultado na
    resolução de candidatos que carregam apenas o nome do tipo.

Componentes principais:
    - ProjectChangeKind: Tipos de evento de projeto
    - ProjectSnapshot: Estado de um projeto (nome + tag helpers)
    - ProjectChangeEvent: Evento com snapshots anterior e novo
    - TagHelperLookupService: Dicionário protegido por lock

Notas de implementação:
    - Apenas PROJECT_ADDED e PROJECT_CHANGED atualizam o mapeamento
    - Upsert: descritores com o mesmo type_name são sobrescritos
    - Remoções de projeto não removem entradas (mesmo comportamento do host)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from taghelper_lsp.models import TagHelperDescriptor

logger = logging.getLogger(__name__)


class ProjectChangeKind(Enum):
    PROJECT_ADDED = "projectAdded"
    PROJECT_CHANGED = "projectChanged"
    PROJECT_REMOVED = "projectRemoved"
    DOCUMENTS_CHANGED = "documentsChanged"


@dataclass(frozen=True)
class ProjectSnapshot:
    """Snapshot de projeto com os tag helpers descobertos pelo compilador."""

    name: str
    tag_helpers: tuple[TagHelperDescriptor, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data) -> "ProjectSnapshot":
        if not isinstance(data, dict):
            raise ValueError(f"Projeto inválido: {data!r}")
        name = data.get("name") or ""
        raw_helpers = data.get("tagHelpers") or []
        if not isinstance(raw_helpers, list):
            raise ValueError(f"tagHelpers inválido: {raw_helpers!r}")
        helpers = tuple(TagHelperDescriptor.from_dict(entry) for entry in raw_helpers)
        return cls(name=str(name), tag_helpers=helpers)


@dataclass(frozen=True)
class ProjectChangeEvent:
    kind: ProjectChangeKind
    older: Optional[ProjectSnapshot] = None
    newer: Optional[ProjectSnapshot] = None


class TagHelperLookupService:
    """Lookup thread-safe de TagHelperDescriptor por nome de tipo."""

    def __init__(self):
        self._lock = threading.Lock()
        self._tag_helpers: dict[str, TagHelperDescriptor] = {}

    def initialize(self, projects: Iterable[ProjectSnapshot]) -> None:
        """Carrega os tag helpers de todos os projetos já conhecidos."""
        with self._lock:
            for project in projects:
                self._store(project)

    def find_by_type_name(self, type_name: str) -> Optional[TagHelperDescriptor]:
        """Retorna o descritor para o tipo, ou None."""
        with self._lock:
            return self._tag_helpers.get(type_name)

    def on_project_changed(self, event: ProjectChangeEvent) -> int:
        """
        Aplica um evento de mudança de projeto.

        Returns:
            Número de descritores gravados (0 para eventos ignorados).
        """
        if event.kind not in (
            ProjectChangeKind.PROJECT_ADDED,
            ProjectChangeKind.PROJECT_CHANGED,
        ):
            return 0
        if event.newer is None:
            logger.warning(f"Evento {event.kind.value} sem snapshot novo; ignorado")
            return 0

        with self._lock:
            return self._store(event.newer)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tag_helpers)

    def _store(self, project: ProjectSnapshot) -> int:
        for tag_helper in project.tag_helpers:
            self._tag_helpers[tag_helper.type_name] = tag_helper
        logger.info(
            f"Lookup atualizado: {len(project.tag_helpers)} tag helpers do projeto '{project.name}'"
        )
        return len(project.tag_helpers)
