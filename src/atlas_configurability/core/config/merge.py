# src/atlas_configurability/core/config/merge.py
"""
Utilitário canônico de merge recursivo de árvores de configuração.

Política de merge:
    - mapping + mapping → merge recursivo por chave
    - qualquer outro par → o valor da direita (mais novo) vence integralmente,
      inclusive quando um lado é mapping e o outro é escalar
    - listas são sobrescritas por inteiro (sem merge elemento a elemento)

Invariantes:
    - Nenhum input é mutado
    - Chaves ausentes no override são preservadas da base
    - Para conjuntos de chaves disjuntos o resultado é a união de ambos

Limites explícitos:
    - A operação não é associativa em geral:
      merge(merge(A, B), C) pode diferir de merge(A, merge(B, C))
      quando um mesmo caminho alterna entre mapping e escalar
    - Não realiza coerção de tipos
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping


def merge_values(base: Any, override: Any) -> Any:
    """Mescla dois valores quaisquer segundo a política do módulo."""
    if isinstance(base, Mapping) and isinstance(override, Mapping):
        return merge_trees(base, override)
    return deepcopy(override)


def merge_trees(base: Mapping[Any, Any], override: Mapping[Any, Any]) -> Dict[Any, Any]:
    """
    Realiza o merge recursivo entre duas árvores de configuração.

    Args:
        base (Mapping): árvore base (ex.: defaults).
        override (Mapping): árvore mais nova, cujos valores prevalecem.

    Returns:
        Dict: nova árvore resultante; os inputs não são mutados.

    Raises:
        TypeError: se algum dos lados não for um mapping.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise TypeError(
            f"merge_trees requer mappings no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[Any, Any] = {key: deepcopy(value) for key, value in base.items()}

    for key, override_value in override.items():
        if key in result:
            result[key] = merge_values(result[key], override_value)
        else:
            result[key] = deepcopy(override_value)

    return result
