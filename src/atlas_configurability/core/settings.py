# src/atlas_configurability/core/settings.py
"""
Declaração de settings de um módulo configurável.

Permite declarar, no corpo da classe, os valores configuráveis da seção
e seus defaults:

    class Users(Configurable):
        config_key = "users"
        min_password_length = setting(default=6)

Cada `setting` declarado:
    - registra `nome → default` no `CONFIG_DEFAULTS` da própria classe
    - expõe um atributo por instância, iniciado com o default
    - é preenchido por `Configurable.configure` quando a seção traz o membro
      e volta ao default quando a seção não o traz (ou é None)

Invariantes:
    - Subclasses recebem uma cópia do `CONFIG_DEFAULTS` herdado; o dict do
      pai nunca é mutado
    - Defaults mutáveis são copiados por instância
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

SETTINGS_ATTR = "__config_settings__"


class Setting:
    """Descriptor de um valor configurável com default."""

    def __init__(self, default: Any = None) -> None:
        self.default = default
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

        own_defaults = owner.__dict__.get("CONFIG_DEFAULTS")
        if own_defaults is None:
            inherited = getattr(owner, "CONFIG_DEFAULTS", None) or {}
            own_defaults = dict(inherited)
            setattr(owner, "CONFIG_DEFAULTS", own_defaults)
        own_defaults[name] = self.default

        settings: Tuple[str, ...] = tuple(getattr(owner, SETTINGS_ATTR, ()))
        if name not in settings:
            setattr(owner, SETTINGS_ATTR, settings + (name,))

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        values: Dict[str, Any] = instance.__dict__.setdefault("_setting_values", {})
        if self.name not in values:
            values[self.name] = deepcopy(self.default)
        return values[self.name]

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__.setdefault("_setting_values", {})[self.name] = value

    def reset(self, instance: Any) -> None:
        """Volta o valor de `instance` para uma cópia do default."""
        self.__set__(instance, deepcopy(self.default))

    def __repr__(self) -> str:
        return f"<Setting {self.name} default={self.default!r}>"


def setting(default: Any = None) -> Any:
    """Declara um setting configurável com o `default` informado."""
    return Setting(default)


def declared_settings(obj: Any) -> Tuple[str, ...]:
    """Nomes dos settings declarados na classe de `obj` (ou em `obj`, se classe)."""
    owner = obj if isinstance(obj, type) else type(obj)
    return tuple(getattr(owner, SETTINGS_ATTR, ()))


def reset_settings(instance: Any) -> None:
    """Restaura os defaults de todos os settings declarados em `instance`."""
    owner = type(instance)
    for name in declared_settings(instance):
        descriptor = getattr(owner, name, None)
        if isinstance(descriptor, Setting):
            descriptor.reset(instance)
