"""
taghelper_lsp - Descrições de tag helpers para completion em LSP

Propósito:
    Reduz assinaturas qualificadas e sintetiza documentação Markdown para
    tooltips de completion de tag helpers (elementos e atributos).

Componentes principais:
    - signatures: Redução de assinaturas e aliases de tipos primitivos
    - summary: Extração de <summary> e reescrita de crefs
    - description: Síntese de Markdown por candidato
    - completion: Protocolo de resolução tardia (payload → tooltip)
    - lookup: Lookup thread-safe de tag helpers por nome de tipo
    - server: Servidor pygls (completionItem/resolve)

Dependências críticas:
    - pygls: Framework LSP
    - lsprotocol: Tipos do protocolo

Exemplo de uso:
    python -m taghelper_lsp.server
"""
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from pathlib import Path
import re


def _read_version_from_pyproject() -> str:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:
        return "0.0.0"
    match = re.search(r'(?m)^version = "([^"]+)"\s*$', text)
    return match.group(1) if match else "0.0.0"


try:
    __version__ = _pkg_version("taghelper-lsp")
except PackageNotFoundError:
    __version__ = _read_version_from_pyproject()

__all__ = ["signatures", "summary", "description", "completion", "lookup", "server"]
