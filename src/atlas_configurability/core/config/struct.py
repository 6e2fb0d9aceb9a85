# src/atlas_configurability/core/config/struct.py
"""
Container hierárquico de configuração (ConfigStruct).

Este módulo define o `ConfigStruct`, o holder schema-less de dados de
configuração usado pelo Registry, pelo agregador de defaults e pelo
documento `Config`.

O container oferece:
    - acesso por chave (`struct["db"]`) e por atributo (`struct.db.host`)
    - acesso hierárquico pontuado (`lookup("db.host")`, `assign("db.host", ...)`)
    - promoção implícita de mappings aninhados em containers
    - autovivificação apenas sob pedido explícito (`ensure`, `assign`)
    - merge recursivo com política "a direita vence"
    - rastreamento de mutação (dirty) herdado pelos ancestrais

Invariantes:
    - Chaves são normalizadas na inserção (bytes → str; demais mantidas)
    - Ler um membro cujo valor é um mapping bruto o promove, no lugar,
      para `ConfigStruct`, sem marcar o container como dirty
    - Ler um membro ausente retorna `None` e nunca cria estrutura
    - `is_dirty()` é falso após a construção e após qualquer leitura

Limites explícitos:
    - Não valida schema nem converte tipos
    - Membros cujo nome colide com métodos do container (ex.: `keys`,
      `items`) só são acessíveis via `[]`
"""

from __future__ import annotations

from collections.abc import MutableMapping
from copy import deepcopy
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..errors import MergeTypeConflictError
from .keys import DOTTED_SEPARATOR
from .merge import merge_trees

_MISSING = object()


def _normalize_member_key(key: Any) -> Any:
    if isinstance(key, bytes):
        return key.decode("utf-8")
    if isinstance(key, Enum):
        return key.value
    return key


def _normalize_tree(tree: Mapping[Any, Any]) -> Dict[Any, Any]:
    normalized: Dict[Any, Any] = {}
    for key, value in tree.items():
        if isinstance(value, ConfigStruct):
            value = value.to_tree()
        elif isinstance(value, Mapping):
            value = _normalize_tree(value)
        normalized[_normalize_member_key(key)] = value
    return normalized


def _to_plain(value: Any) -> Any:
    if isinstance(value, ConfigStruct):
        return value.to_tree()
    if isinstance(value, Mapping):
        return {_normalize_member_key(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_to_plain(item) for item in value)
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return deepcopy(value)


def _tree_of(other: Any) -> Dict[Any, Any]:
    # import local para evitar ciclo struct <-> document
    from .document import Config

    if isinstance(other, ConfigStruct):
        return other.to_tree()
    if isinstance(other, Config):
        return other.struct.to_tree()
    if isinstance(other, Mapping):
        return _to_plain(other)
    raise MergeTypeConflictError(
        f"Don't know how to merge with a {type(other).__name__}"
    )


class ConfigStruct(MutableMapping):
    """
    Mapping de configuração com acesso por atributo e rastreamento de mutação.

    Exemplos:
        >>> cfg = ConfigStruct({"db": {"host": "localhost"}})
        >>> cfg.db.host
        'localhost'
        >>> cfg.missing is None
        True
        >>> cfg.assign("plugins.filestore.maxsize", 1024)
        >>> cfg.lookup("plugins.filestore.maxsize")
        1024
        >>> cfg.is_dirty()
        True

    Decisões arquiteturais:
        - Backing store é um `dict` real; não há síntese de métodos em runtime
        - `set` marca dirty apenas quando o novo valor difere do anterior
          (igualdade de valor, não identidade)
        - Subcontainers são criados apenas por `ensure`/`assign`
    """

    def __init__(self, tree: Optional[Any] = None) -> None:
        if tree is None:
            data: Dict[Any, Any] = {}
        elif isinstance(tree, ConfigStruct):
            data = tree.to_tree()
        elif isinstance(tree, Mapping):
            data = _normalize_tree(tree)
        elif hasattr(tree, "struct") and isinstance(getattr(tree, "struct"), ConfigStruct):
            data = tree.struct.to_tree()
        else:
            raise TypeError(f"Cannot build a ConfigStruct from a {type(tree).__name__}")

        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_dirty", False)

    # -----------------------------
    # Acesso canônico
    # -----------------------------
    def get(self, key: Any, default: Any = None) -> Any:
        """
        Retorna o membro `key`, ou `default` se ausente.

        Mappings brutos são promovidos, no lugar, a `ConfigStruct`; a
        promoção não conta como mutação.
        """
        key = _normalize_member_key(key)
        if key not in self._data:
            return default

        value = self._data[key]
        if isinstance(value, Mapping) and not isinstance(value, ConfigStruct):
            value = ConfigStruct(value)
            self._data[key] = value
        return value

    def set(self, key: Any, value: Any) -> None:
        """Atribui `value` a `key`; marca dirty apenas se o valor mudou."""
        key = _normalize_member_key(key)
        if isinstance(value, Mapping) and not isinstance(value, ConfigStruct):
            value = _normalize_tree(value)

        old = self._data.get(key, _MISSING)
        if old is _MISSING or old != value:
            self.mark_dirty()
        self._data[key] = value

    def has(self, key: Any) -> bool:
        """True se `key` é membro, mesmo com valor None."""
        return _normalize_member_key(key) in self._data

    def members(self) -> List[Any]:
        """Lista das chaves de primeiro nível, na ordem de inserção."""
        return list(self._data.keys())

    # -----------------------------
    # Protocolo de mapping
    # -----------------------------
    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        del self._data[_normalize_member_key(key)]
        self.mark_dirty()

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._data.keys()))

    def __len__(self) -> int:
        return len(self._data)

    def pop(self, key: Any, default: Any = _MISSING) -> Any:
        if self.has(key):
            value = self.get(key)
            del self[key]
            return value
        if default is _MISSING:
            raise KeyError(key)
        return default

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if not self.has(key):
            self.set(key, default)
        return self.get(key)

    # -----------------------------
    # Acesso por atributo
    # -----------------------------
    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            del self[name]

    def __dir__(self) -> List[str]:
        names = set(super().__dir__())
        names.update(key for key in self._data if isinstance(key, str) and key.isidentifier())
        return sorted(names)

    # -----------------------------
    # Acesso hierárquico
    # -----------------------------
    def ensure(self, key: Any) -> "ConfigStruct":
        """
        Retorna a subseção em `key`, criando um container vazio se ausente.

        Raises:
            TypeError: se o membro existir e contiver um valor que não é seção.
        """
        value = self.get(key)
        if isinstance(value, ConfigStruct):
            return value
        if value is not None:
            raise TypeError(
                f"Member {key!r} holds a {type(value).__name__}, not a config section"
            )

        section = ConfigStruct()
        self.set(key, section)
        return section

    def lookup(self, path: str, default: Any = None) -> Any:
        """Leitura pontuada (`"a.b.c"`); nunca cria estrutura."""
        node: Any = self
        for segment in path.split(DOTTED_SEPARATOR):
            if not isinstance(node, ConfigStruct) or not node.has(segment):
                return default
            node = node.get(segment)
        return node

    def assign(self, path: str, value: Any) -> None:
        """Escrita pontuada; cria as seções intermediárias ausentes."""
        *parents, leaf = path.split(DOTTED_SEPARATOR)
        node = self
        for segment in parents:
            node = node.ensure(segment)
        node.set(leaf, value)

    # -----------------------------
    # Merge
    # -----------------------------
    def merge_in_place(self, other: Any) -> "ConfigStruct":
        """
        Mescla `other` neste container (a direita vence nas folhas).

        O container fica dirty se a árvore resultante diferir da anterior
        ou se ele (ou algum descendente) já estava dirty antes do merge.

        Raises:
            MergeTypeConflictError: se `other` não for ConfigStruct, Mapping ou Config.
        """
        was_dirty = self.is_dirty()
        current = self.to_tree()
        merged = merge_trees(current, _tree_of(other))
        if was_dirty or merged != current:
            self.mark_dirty()
        object.__setattr__(self, "_data", merged)
        return self

    def merge(self, other: Any) -> "ConfigStruct":
        """Retorna um novo container (limpo) resultante do merge com `other`."""
        return ConfigStruct(merge_trees(self.to_tree(), _tree_of(other)))

    # -----------------------------
    # Dirty tracking
    # -----------------------------
    def mark_dirty(self) -> None:
        object.__setattr__(self, "_dirty", True)

    def is_dirty(self) -> bool:
        if self._dirty:
            return True
        return any(
            isinstance(value, ConfigStruct) and value.is_dirty()
            for value in self._data.values()
        )

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_tree(self) -> Dict[Any, Any]:
        """
        Converte o container em uma árvore pura de dicts, listas e escalares.

        Containers aninhados viram dicts (inclusive dentro de listas),
        membros `Enum` viram seus valores e as demais folhas são copiadas.
        """
        return {key: _to_plain(value) for key, value in self._data.items()}

    def copy(self) -> "ConfigStruct":
        return ConfigStruct(self.to_tree())

    def __copy__(self) -> "ConfigStruct":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConfigStruct":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigStruct):
            return self.to_tree() == other.to_tree()
        if isinstance(other, Mapping):
            return self.to_tree() == _to_plain(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<ConfigStruct {self._data!r}>"
