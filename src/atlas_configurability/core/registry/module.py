# src/atlas_configurability/core/registry/module.py
"""
Contrato canônico de módulo configurável.

Um módulo configurável é qualquer objeto (instância, classe ou módulo
Python) que declara a seção do documento que lhe pertence e recebe essa
seção pelo seu ponto de entrada `configure`.

Atributos esperados:
    - config_key: chave (pontuada ou canônica); opcional, derivada do nome
    - configure(section): ponto de entrada chamado com a seção ou None
    - defaults(): opcional, árvore de defaults da seção

Decisões arquiteturais:
    - Conformidade por duck typing (`@runtime_checkable`), sem herança obrigatória
    - O Registry mantém apenas referências por identidade

Limites explícitos:
    - Não registra módulos (ver `ConfigRegistry.register`)
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from ..config.keys import make_key_from_object, normalize_key


@runtime_checkable
class ConfigurableModule(Protocol):
    """Interface mínima de um módulo que recebe configuração."""

    config_key: str

    def configure(self, section: Any) -> None:
        """Recebe a seção resolvida do documento (ou None)."""
        ...


def key_for(module: Any) -> str:
    """Config key canônica de `module`, derivada do nome quando não declarada."""
    key = getattr(module, "config_key", None)
    if callable(key):
        key = key()
    if isinstance(key, (list, tuple)):
        key = normalize_key(key)
    if not isinstance(key, str) or not key:
        key = make_key_from_object(module)
    return normalize_key(key)


def entry_point_of(module: Any) -> Optional[Callable[[Any], Any]]:
    """Retorna o `configure` atual de `module`, ou None se não houver."""
    configure = getattr(module, "configure", None)
    return configure if callable(configure) else None


def entry_point_identity(module: Any) -> Any:
    """
    Identidade estável do ponto de entrada atual.

    Métodos ligados são recriados a cada acesso; a identidade usada é a da
    função subjacente.
    """
    configure = entry_point_of(module)
    return getattr(configure, "__func__", configure)
