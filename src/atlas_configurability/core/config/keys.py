# src/atlas_configurability/core/config/keys.py
"""
Chaves de configuração (config keys).

Uma config key identifica a seção do documento que pertence a um módulo.
Ela possui duas formas equivalentes e interconversíveis:

    - forma humana (pontuada):   "svc.cache"
    - forma canônica (interna):  "svc__cache"

Invariantes:
    - Uma chave com N segmentos resolve um nó N níveis abaixo da raiz
    - `normalize_key` é idempotente
    - Chaves não precisam ser únicas entre módulos

Limites explícitos:
    - Não resolve seções (ver `core.registry.resolver`)
    - Não valida existência da seção no documento
"""

from __future__ import annotations

import inspect
import re
from typing import Any, Iterable, Tuple, Union

KEY_SEPARATOR = "__"
DOTTED_SEPARATOR = "."
ANONYMOUS_KEY = "anonymous"

_QUALIFIER_PREFIX = re.compile(r".*(?:\.|::)")
_NON_WORD = re.compile(r"\W+")

RawKey = Union[str, Iterable[str]]


def normalize_key(raw: RawKey) -> str:
    """
    Converte uma chave na forma humana (ou uma sequência de segmentos)
    para a forma canônica com separador `__`.

    Exemplos:
        >>> normalize_key("a.b.c")
        'a__b__c'
        >>> normalize_key(["svc", "cache"])
        'svc__cache'
    """
    if isinstance(raw, str):
        return raw.replace(DOTTED_SEPARATOR, KEY_SEPARATOR)
    if raw is None:
        raise TypeError("config key must not be None")
    return KEY_SEPARATOR.join(normalize_key(str(part)) for part in raw)


def split_key(key: RawKey) -> Tuple[str, ...]:
    """Retorna os segmentos de caminho da chave, na ordem raiz → folha."""
    canonical = normalize_key(key)
    return tuple(part for part in canonical.split(KEY_SEPARATOR) if part)


def dotted_key(key: RawKey) -> str:
    """Retorna a forma humana (pontuada) de uma chave."""
    return DOTTED_SEPARATOR.join(split_key(key))


def _transform_name(name: str) -> str:
    name = _QUALIFIER_PREFIX.sub("", name)
    return _NON_WORD.sub("_", name).lower()


def make_key_from_object(obj: Any) -> str:
    """
    Deriva uma config key para um objeto que não declarou nenhuma.

    Ordem de preferência:
        1. atributo `name` do próprio objeto (string); vazio/None → "anonymous"
        2. `__name__` de classes e módulos Python
        3. nome do tipo em runtime
        4. "anonymous"

    Em todos os casos o prefixo de namespace é removido, sequências de
    caracteres não-identificadores viram `_` e o resultado é minúsculo.
    """
    name = getattr(obj, "name", None)
    if name is not None and not inspect.isroutine(name) and not isinstance(name, property):
        if not isinstance(name, str) or not name:
            return ANONYMOUS_KEY
        return _transform_name(name)

    own_name = getattr(obj, "__name__", None)
    if isinstance(own_name, str) and own_name:
        return _transform_name(own_name)

    type_name = type(obj).__name__
    if type_name:
        return _transform_name(type_name)

    return ANONYMOUS_KEY
