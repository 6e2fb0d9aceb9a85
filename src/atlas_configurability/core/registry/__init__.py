# src/atlas_configurability/core/registry/__init__.py
"""
Registro e distribuição de configuração para módulos.

Componentes:
    - module   → contrato `ConfigurableModule` e derivação de config key
    - resolver → resolução hierárquica de seções (`resolve`)
    - defaults → agregação dos defaults declarados pelos módulos
    - deferred → configuração diferida via `RegistrationHandle`
    - registry → `ConfigRegistry` e o registry padrão do processo
"""

from .defaults import expand_config_tree
from .deferred import RegistrationHandle
from .module import ConfigurableModule, key_for
from .registry import (
    ConfigRegistry,
    default_config,
    distribute,
    gather_defaults,
    get_registry,
    register,
    register_post_configure_hook,
    reset,
    set_registry,
)
from .resolver import NodeKind, classify_node, get_subsection, resolve

__all__ = [
    "ConfigRegistry",
    "ConfigurableModule",
    "NodeKind",
    "RegistrationHandle",
    "classify_node",
    "default_config",
    "distribute",
    "expand_config_tree",
    "gather_defaults",
    "get_registry",
    "get_subsection",
    "key_for",
    "register",
    "register_post_configure_hook",
    "reset",
    "resolve",
    "set_registry",
]
