"""
server.py - Servidor LSP que hospeda a resolução de tooltips de tag helpers

Propósito:
    Expõe o motor de descrição via completionItem/resolve e mantém o serviço
    de lookup de tag helpers atualizado a partir de eventos de projeto.

Componentes principais:
    - TagHelperLanguageServer: Servidor pygls com lookup e factory injetados
    - resolve_completion_item: Handler de completionItem/resolve
    - cmd_update_project / cmd_lookup: Comandos customizados
    - did_change_configuration: Leitura de taghelper.documentation.enabled

Exemplo de uso:
    python -m taghelper_lsp.server

Notas de implementação:
    - Comunica via STDIO
    - Handlers nunca crasham: exceções são logadas e o item volta inalterado
    - Documentação pode ser desabilitada via taghelper.documentation.enabled
"""

from __future__ import annotations

import logging
import sys
from importlib import metadata
from typing import Optional

from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    CompletionItem,
    DidChangeConfigurationParams,
)
from pygls.server import LanguageServer

from taghelper_lsp import __version__
from taghelper_lsp.completion import populate_documentation
from taghelper_lsp.description import TagHelperDescriptionFactory
from taghelper_lsp.lookup import (
    ProjectChangeEvent,
    ProjectChangeKind,
    ProjectSnapshot,
    TagHelperLookupService,
)

# Configuração de logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class TagHelperLanguageServer(LanguageServer):
    """
    Servidor LSP para descrições de tag helpers.

    Attributes:
        lookup_service: Lookup de descritores por nome de tipo
        description_factory: Síntese de Markdown (depende do lookup_service)
        documentation_enabled: Flag para habilitar/desabilitar a resolução
    """

    def __init__(self, *args, lookup_service: Optional[TagHelperLookupService] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookup_service = lookup_service or TagHelperLookupService()
        self.description_factory = TagHelperDescriptionFactory(self.lookup_service)
        self.documentation_enabled: bool = True


# Instância global do servidor
server = TagHelperLanguageServer("taghelper-lsp", f"v{__version__}")


def _first_param(params) -> dict:
    """Normaliza params de comando (dict ou lista de argumentos) para dict."""
    if isinstance(params, dict):
        return params
    if isinstance(params, list) and len(params) > 0 and isinstance(params[0], dict):
        return params[0]
    return {}


@server.feature(COMPLETION_ITEM_RESOLVE)
def resolve_completion_item(
    ls: TagHelperLanguageServer, params: CompletionItem
) -> CompletionItem:
    """
    Preenche documentation do candidato destacado pelo usuário.

    Candidatos sem payload de tag helper voltam inalterados.
    """
    if not ls.documentation_enabled:
        return params

    try:
        return populate_documentation(params, ls.description_factory)
    except Exception as e:
        logger.error(f"Falha ao resolver '{params.label}': {e}", exc_info=True)
        return params


@server.command("taghelper/updateProject")
def cmd_update_project(ls: TagHelperLanguageServer, params) -> dict:
    """
    Aplica um evento de mudança de projeto ao lookup.

    Params:
        {"kind": "projectAdded" | "projectChanged" | ...,
         "project": {"name": ..., "tagHelpers": [{"typeName": ..., ...}]}}
    """
    args = _first_param(params)
    try:
        kind = ProjectChangeKind(args.get("kind", ProjectChangeKind.PROJECT_CHANGED.value))
    except ValueError:
        return {"success": False, "error": f"Tipo de evento desconhecido: {args.get('kind')}"}

    try:
        project = ProjectSnapshot.from_dict(args.get("project"))
    except ValueError as e:
        return {"success": False, "error": str(e)}

    count = ls.lookup_service.on_project_changed(ProjectChangeEvent(kind=kind, newer=project))
    return {"success": True, "count": count}


@server.command("taghelper/lookup")
def cmd_lookup(ls: TagHelperLanguageServer, params) -> dict:
    """Retorna o descritor registrado para typeName (diagnóstico)."""
    type_name = _first_param(params).get("typeName")
    if not type_name:
        return {"success": False, "error": "typeName não informado"}

    descriptor = ls.lookup_service.find_by_type_name(type_name)
    if descriptor is None:
        return {"success": False, "error": f"Tag helper não encontrado: {type_name}"}
    return {"success": True, "tagHelper": descriptor.to_dict()}


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: TagHelperLanguageServer, params: DidChangeConfigurationParams
) -> None:
    """
    Atualiza taghelper.documentation.enabled (padrão: True).

    settings pode vir como {"taghelper": {...}} ou já ser a seção.
    """
    try:
        settings = params.settings
        enabled = True
        if isinstance(settings, dict):
            section = settings.get("taghelper", settings)
            if isinstance(section, dict):
                documentation_config = section.get("documentation", {})
                if isinstance(documentation_config, dict):
                    enabled = bool(documentation_config.get("enabled", True))

        ls.documentation_enabled = enabled
        logger.info(f"Configuração atualizada: documentation.enabled = {enabled}")
    except Exception as e:
        logger.error(f"Erro ao processar mudança de configuração: {e}", exc_info=True)


def main() -> None:
    """Inicia o servidor em modo STDIO."""
    logger.info("Iniciando TagHelper Language Server...")
    logger.info("Python executable: %s", sys.executable)
    try:
        logger.info("taghelper-lsp package: %s", metadata.version("taghelper-lsp"))
    except metadata.PackageNotFoundError:
        logger.warning("Pacote taghelper-lsp não instalado; usando versão %s", __version__)
    server.start_io()


if __name__ == "__main__":
    main()
