# src/atlas_configurability/core/registry/defaults.py
"""
Agregação de defaults a partir dos módulos registrados.

Cada módulo pode declarar, via `defaults()`, a árvore de valores padrão da
sua própria seção. Este módulo reconstrói o documento padrão completo:

    1. aninha os defaults de cada módulo sob os segmentos da sua config key
       ("a.b.c" + {x: 1} → {a: {b: {c: {x: 1}}}})
    2. mescla todas as árvores aninhadas em um único acumulador

Invariantes:
    - Módulos sem `defaults()` (ou que retornam vazio/None) são ignorados
      sem erro
    - Em conflito de escalares no mesmo caminho, o último módulo aplicado vence

Limites explícitos:
    - A ordem de aplicação é a ordem de iteração recebida; o chamador
      controla o determinismo via ordem de registro
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from ..config.keys import RawKey, split_key
from ..config.merge import merge_trees
from ..config.struct import ConfigStruct
from .module import key_for

logger = logging.getLogger(__name__)


def expand_config_tree(key: RawKey, tree: Any) -> Dict[str, Any]:
    """Aninha `tree` em um dict de chave única por segmento de `key`."""
    nested = tree
    for segment in reversed(split_key(key)):
        nested = {segment: nested}
    return nested


def gather_defaults(
    modules: Iterable[Any],
    collection: Optional[Mapping[Any, Any]] = None,
) -> Dict[Any, Any]:
    """
    Mescla os defaults de todos os `modules` em uma única árvore.

    Args:
        modules: módulos na ordem em que devem ser aplicados.
        collection: árvore inicial opcional sobre a qual os defaults são aplicados.

    Returns:
        Dict: árvore padrão agregada (novo objeto).
    """
    if isinstance(collection, ConfigStruct):
        result: Dict[Any, Any] = collection.to_tree()
    else:
        result = dict(collection or {})

    for module in modules:
        provider = getattr(module, "defaults", None)
        if not callable(provider):
            continue

        defaults = provider()
        if not defaults:
            logger.debug("No defaults for %r; skipping", module)
            continue

        if isinstance(defaults, ConfigStruct):
            defaults = defaults.to_tree()

        nested = expand_config_tree(key_for(module), defaults)
        logger.debug("Defaults for %r (%s): %r", module, key_for(module), nested)
        result = merge_trees(result, nested)

    return result


def default_config(modules: Iterable[Any]) -> ConfigStruct:
    """Retorna os defaults agregados de `modules` em um `ConfigStruct`."""
    return ConfigStruct(gather_defaults(modules))
