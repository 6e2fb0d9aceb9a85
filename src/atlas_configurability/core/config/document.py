# src/atlas_configurability/core/config/document.py
"""
Documento de configuração carregado (Config).

Este módulo define o `Config`, o invólucro de um `ConfigStruct` que sabe de
onde a configuração veio e quando foi carregada. Ele é a ponte entre a
camada de arquivos (YAML/JSON) e o Registry.

Responsabilidades do módulo:
    - Construir a configuração a partir de texto YAML ou de um mapping,
      aplicando defaults por baixo da fonte
    - Serializar (`dump`) e gravar (`write`) a configuração em YAML
    - Detectar mudança (struct mutado ou arquivo de origem mais novo)
    - Recarregar a fonte e redistribuir a configuração (`reload`)

Invariantes:
    - Os defaults informados são copiados; o argumento nunca é mutado
    - `time_created` é sempre timezone-aware (UTC)
    - Um `Config` sem `path` nunca é recarregado

Limites explícitos:
    - Não valida schema
    - Não observa o filesystem; a verificação é feita sob demanda
"""

from __future__ import annotations

import logging
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml  # PyYAML

from ..errors import MissingConfigPathError, ReloadWithoutSourceError
from .loader import parse_source, read_source
from .merge import merge_trees
from .struct import ConfigStruct

if TYPE_CHECKING:
    from ..registry.registry import ConfigRegistry

logger = logging.getLogger(__name__)

Source = Union[str, Mapping[Any, Any], None]


def source_changed(last_load_time: datetime, source_timestamp: Optional[datetime]) -> bool:
    """
    Indica se a fonte foi modificada depois do último carregamento.

    Args:
        last_load_time: instante em que a configuração foi carregada.
        source_timestamp: instante de modificação da fonte, ou None se
            a fonte não existe mais.
    """
    if source_timestamp is None:
        return False
    return source_timestamp > last_load_time


def _mtime(path: Path) -> Optional[datetime]:
    if not path.exists():
        return None
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


class Config:
    """
    Configuração carregada, com origem conhecida e rastreamento de mudanças.

    Operações de container (`[]`, acesso por atributo, `members`, `merge`,
    iteração) são delegadas ao `ConfigStruct` interno.

    Exemplos:
        >>> config = Config("db:\\n  host: localhost\\n", defaults={"db": {"port": 5432}})
        >>> config.db.host, config.db.port
        ('localhost', 5432)

    Args:
        source: texto YAML, mapping ou None (configuração vazia).
        path: arquivo de origem, quando houver.
        defaults: árvore de valores aplicada por baixo da fonte.
        on_load: callable chamado com o próprio `Config` após a construção.
    """

    def __init__(
        self,
        source: Source = None,
        path: Optional[Union[str, Path]] = None,
        defaults: Optional[Mapping[Any, Any]] = None,
        on_load: Optional[Callable[["Config"], Any]] = None,
    ) -> None:
        self.defaults: Optional[Dict[Any, Any]] = deepcopy(dict(defaults)) if defaults else None
        self.time_created: datetime = datetime.now(timezone.utc)
        self.path: Optional[Path] = Path(path).expanduser().resolve() if path is not None else None

        if source is not None:
            self.struct = self._make_struct(source)
        else:
            self.struct = ConfigStruct(self.defaults)

        if on_load is not None:
            on_load(self)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        defaults: Optional[Mapping[Any, Any]] = None,
        on_load: Optional[Callable[["Config"], Any]] = None,
    ) -> "Config":
        """Lê e retorna um `Config` a partir do arquivo em `path`."""
        return cls(read_source(path), path, defaults, on_load)

    def _make_struct(self, source: Source) -> ConfigStruct:
        if isinstance(source, str):
            tree = parse_source(source)
        elif isinstance(source, ConfigStruct):
            tree = source.to_tree()
        elif isinstance(source, Mapping):
            tree = source
        else:
            raise TypeError(f"Unsupported config source: {type(source).__name__}")

        return ConfigStruct(merge_trees(self.defaults or {}, tree))

    # -----------------------------
    # Delegação ao struct
    # -----------------------------
    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name == "struct":
            raise AttributeError(name)
        return getattr(self.struct, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("struct", "path", "time_created", "defaults") or name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.struct.set(name, value)

    def __getitem__(self, key: Any) -> Any:
        return self.struct[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.struct[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.struct

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self.struct.items())

    def __len__(self) -> int:
        return len(self.struct)

    def members(self) -> List[Any]:
        return self.struct.members()

    def has(self, key: Any) -> bool:
        return self.struct.has(key)

    def get(self, key: Any, default: Any = None) -> Any:
        return self.struct.get(key, default)

    def merge(self, other: Any) -> ConfigStruct:
        return self.struct.merge(other)

    def merge_in_place(self, other: Any) -> ConfigStruct:
        return self.struct.merge_in_place(other)

    def to_tree(self) -> Dict[Any, Any]:
        return self.struct.to_tree()

    # -----------------------------
    # Distribuição
    # -----------------------------
    def install(self, registry: Optional["ConfigRegistry"] = None) -> None:
        """Distribui esta configuração para os módulos do registry."""
        from ..registry.registry import get_registry

        (registry or get_registry()).distribute(self)

    # -----------------------------
    # Persistência
    # -----------------------------
    def dump(self) -> str:
        """Retorna a configuração serializada como YAML."""
        return yaml.safe_dump(self.to_tree(), default_flow_style=False, sort_keys=False)

    def write(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Grava a configuração em YAML no `path` informado ou no arquivo de origem.

        Raises:
            MissingConfigPathError: se não houver caminho algum.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise MissingConfigPathError("No name associated with this config.")

        logger.info("Writing config to %s", target)
        target.write_text(self.dump(), encoding="utf-8")
        return target

    # -----------------------------
    # Mudança e reload
    # -----------------------------
    @property
    def changed(self) -> bool:
        return self.changed_reason() is not None

    def changed_reason(self) -> Optional[str]:
        """Descreve o motivo da mudança, ou None se nada mudou."""
        if self.struct.is_dirty():
            logger.debug("changed_reason: struct was modified")
            return "Struct was modified"

        if self.path is not None and self.is_older_than(self.path):
            logger.debug("Source file (%s) has changed.", self.path)
            return (
                f"Config source ({self.path}) has been updated since "
                f"{self.time_created.isoformat()}"
            )

        return None

    def is_older_than(self, path: Union[str, Path]) -> bool:
        """True se o arquivo em `path` é mais novo que este `Config`."""
        mtime = _mtime(Path(path))
        logger.debug("File mtime is: %s, comparison time is: %s", mtime, self.time_created)
        return source_changed(self.time_created, mtime)

    def reload(self, registry: Optional["ConfigRegistry"] = None) -> bool:
        """
        Recarrega a fonte se ela (ou o struct) mudou e redistribui a configuração.

        Returns:
            bool: True se recarregou, False se nada mudou.

        Raises:
            ReloadWithoutSourceError: se a configuração não veio de um arquivo.
        """
        if self.path is None:
            raise ReloadWithoutSourceError("can't reload from an in-memory source")

        if not self.changed:
            return False

        self.time_created = datetime.now(timezone.utc)
        self.struct = self._make_struct(read_source(self.path))
        self.install(registry)
        return True

    def __repr__(self) -> str:
        members = self.members()
        return "<%s loaded from %s; %d sections: %s>" % (
            type(self).__name__,
            self.path if self.path is not None else "memory",
            len(members),
            ", ".join(str(member) for member in members),
        )
