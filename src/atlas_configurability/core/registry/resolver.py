# src/atlas_configurability/core/registry/resolver.py
"""
Resolução hierárquica de seções de configuração.

Este módulo mapeia a config key de um módulo para a subárvore
correspondente de um documento de configuração arbitrário.

Em vez de sondar capacidades do nó em runtime, cada nó é classificado em
um conjunto fechado de variantes (`NodeKind`) e a busca do segmento é
decidida por essa classificação.

Variantes:
    - STRUCT   → ConfigStruct ou Config: busca por chave
    - MAP      → qualquer Mapping: busca por chave
    - OBJECT   → objetos struct-like (dataclasses, namespaces): busca por atributo
    - SEQUENCE → listas/tuplas: sem subseções
    - SCALAR   → str, números, bool: sem subseções
    - MISSING  → None: sem subseções

Invariantes:
    - Um segmento ausente nunca levanta exceção: a resolução retorna None
    - Uma chave com N segmentos percorre exatamente N níveis

Limites explícitos:
    - Não cria seções ausentes
    - Não converte tipos de valores encontrados
"""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Mapping

from ..config.document import Config
from ..config.keys import RawKey, split_key
from ..config.struct import ConfigStruct

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bytes, bool, int, float, complex)


class NodeKind(str, Enum):
    """Classificação fechada dos nós de um documento de configuração."""

    STRUCT = "struct"
    MAP = "map"
    OBJECT = "object"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    MISSING = "missing"


def classify_node(node: Any) -> NodeKind:
    if node is None:
        return NodeKind.MISSING
    if isinstance(node, (ConfigStruct, Config)):
        return NodeKind.STRUCT
    if isinstance(node, Mapping):
        return NodeKind.MAP
    if isinstance(node, _SCALAR_TYPES) or isinstance(node, Enum):
        return NodeKind.SCALAR
    if isinstance(node, (list, tuple, set, frozenset)):
        return NodeKind.SEQUENCE
    return NodeKind.OBJECT


def _takes_no_arguments(method: Any) -> bool:
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        return False
    return all(
        param.default is not inspect.Parameter.empty
        or param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for param in signature.parameters.values()
    )


def get_subsection(node: Any, segment: str) -> Any:
    """
    Retorna o filho de `node` identificado por `segment`, ou None.

    Nós STRUCT e MAP são consultados por chave. Nós OBJECT são consultados
    por atributo; métodos ligados sem parâmetros obrigatórios são chamados
    sem argumentos. Métodos que exigem argumentos resolvem para None.
    """
    kind = classify_node(node)

    if kind in (NodeKind.STRUCT, NodeKind.MAP):
        if segment in node:
            return node[segment]
        logger.debug("  no %r member in %s node", segment, kind.value)
        return None

    if kind is NodeKind.OBJECT:
        if segment.startswith("_"):
            return None
        value = getattr(node, segment, None)
        if inspect.ismethod(value):
            if not _takes_no_arguments(value):
                logger.debug("  %s() requires arguments; resolving to None", segment)
                return None
            logger.debug("  node has a %s() method; using that", segment)
            return value()
        return value

    logger.debug("  no %r section in %s node; resolving to None", segment, kind.value)
    return None


def resolve(document: Any, key: RawKey) -> Any:
    """
    Encontra a seção de `document` correspondente a `key`.

    Args:
        document: árvore, ConfigStruct, Config ou objeto struct-like.
        key: config key na forma pontuada ou canônica.

    Returns:
        A subárvore encontrada, ou None se algum segmento não existir.
    """
    section = document
    for segment in split_key(key):
        if section is None:
            return None
        section = get_subsection(section, segment)
    return section
