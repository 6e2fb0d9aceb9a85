# src/atlas_configurability/core/configurable.py
"""
Mixin com o comportamento padrão de um módulo configurável.

`Configurable` implementa o contrato `ConfigurableModule` com:
    - `config_key` derivada do nome do objeto até ser atribuída
    - `configure(section)` que guarda a seção em `self.config` e aplica
      os settings declarados
    - `defaults()` lendo `DEFAULT_CONFIG` ou `CONFIG_DEFAULTS`

O mixin não se registra sozinho: o módulo decide quando chamar
`registry.register(self)` (ou `self.register_configurable()`).
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, ClassVar, Dict, Mapping, Optional

from .config.keys import RawKey, make_key_from_object, normalize_key
from .config.struct import ConfigStruct
from .registry.deferred import RegistrationHandle
from .registry.registry import ConfigRegistry, get_registry
from .registry.resolver import get_subsection
from .settings import declared_settings, reset_settings


class Configurable:
    DEFAULT_CONFIG: ClassVar[Optional[Mapping[str, Any]]] = None
    CONFIG_DEFAULTS: ClassVar[Optional[Mapping[str, Any]]] = None

    config: Any = None

    @property
    def config_key(self) -> str:
        key = self.__dict__.get("_config_key")
        if key is None:
            key = make_key_from_object(self)
            self.__dict__["_config_key"] = key
        return key

    @config_key.setter
    def config_key(self, key: RawKey) -> None:
        self.__dict__["_config_key"] = normalize_key(key)

    def register_configurable(self, registry: Optional[ConfigRegistry] = None) -> RegistrationHandle:
        """Registra este objeto no `registry` (ou no registry padrão)."""
        return (registry or get_registry()).register(self)

    def configure(self, section: Any) -> None:
        """
        Guarda a seção recebida e aplica os settings declarados.

        Cada chamada parte dos defaults: settings ausentes na seção (ou
        todos, se a seção for None) voltam ao seu valor padrão.
        """
        self.config = section
        reset_settings(self)
        if section is None:
            return

        for name in declared_settings(self):
            value = get_subsection(section, name)
            if value is not None:
                setattr(self, name, value)

    def defaults(self) -> Optional[Dict[str, Any]]:
        """Cópia de `DEFAULT_CONFIG` ou, na falta dele, de `CONFIG_DEFAULTS`."""
        if self.DEFAULT_CONFIG is not None:
            return deepcopy(dict(self.DEFAULT_CONFIG))
        if self.CONFIG_DEFAULTS is not None:
            return deepcopy(dict(self.CONFIG_DEFAULTS))
        return None

    def default_config(self) -> ConfigStruct:
        return ConfigStruct(self.defaults() or {})
