# src/atlas_configurability/__init__.py
"""
Atlas Configurability — distribuição de configuração para módulos independentes.

Um único documento de configuração é carregado e cada módulo registrado
recebe apenas a seção que lhe pertence, identificada pela sua config key.
Módulos podem se registrar antes ou depois do carregamento, declarar
defaults e receber a configuração tardiamente.

Uso típico:

    from atlas_configurability import Configurable, load_config, get_registry

    class Database(Configurable):
        config_key = "db"

    db = Database()
    db.register_configurable()
    load_config(defaults_path="config.defaults.yaml").install()
"""

from .core.config import (
    Config,
    ConfigStruct,
    dotted_key,
    load_config,
    make_key_from_object,
    merge_trees,
    normalize_key,
    source_changed,
    split_key,
)
from .core.configurable import Configurable
from .core.errors import (
    ConfigSourceNotFoundError,
    ConfigurabilityError,
    InvalidConfigRootTypeError,
    MergeTypeConflictError,
    MissingConfigPathError,
    ModuleDispatchError,
    ReloadWithoutSourceError,
    UnsupportedConfigFormatError,
)
from .core.registry import (
    ConfigRegistry,
    ConfigurableModule,
    RegistrationHandle,
    default_config,
    distribute,
    expand_config_tree,
    gather_defaults,
    get_registry,
    register,
    register_post_configure_hook,
    reset,
    resolve,
    set_registry,
)
from .core.settings import setting

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ConfigRegistry",
    "ConfigSourceNotFoundError",
    "ConfigStruct",
    "Configurable",
    "ConfigurabilityError",
    "ConfigurableModule",
    "InvalidConfigRootTypeError",
    "MergeTypeConflictError",
    "MissingConfigPathError",
    "ModuleDispatchError",
    "RegistrationHandle",
    "ReloadWithoutSourceError",
    "UnsupportedConfigFormatError",
    "default_config",
    "distribute",
    "dotted_key",
    "expand_config_tree",
    "gather_defaults",
    "get_registry",
    "load_config",
    "make_key_from_object",
    "merge_trees",
    "normalize_key",
    "register",
    "register_post_configure_hook",
    "reset",
    "resolve",
    "set_registry",
    "setting",
    "source_changed",
    "split_key",
]
