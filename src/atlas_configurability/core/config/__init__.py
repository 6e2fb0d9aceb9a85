# src/atlas_configurability/core/config/__init__.py
"""
Camada de dados de configuração do Atlas Configurability.

Este pacote contém as estruturas e utilitários responsáveis por
representar, mesclar, carregar e persistir configuração:

    - keys     → forma canônica e pontuada das config keys
    - merge    → merge recursivo "a direita vence"
    - struct   → ConfigStruct, o container hierárquico com dirty tracking
    - loader   → leitura de arquivos YAML/JSON e resolução defaults + local
    - document → Config, o documento carregado com origem e reload

Limites explícitos:
    - Não distribui configuração para módulos (ver `core.registry`)
    - Não valida semântica de domínio
"""

from .document import Config, source_changed
from .keys import KEY_SEPARATOR, dotted_key, make_key_from_object, normalize_key, split_key
from .loader import load_config, read_source
from .merge import merge_trees
from .struct import ConfigStruct

__all__ = [
    "Config",
    "ConfigStruct",
    "KEY_SEPARATOR",
    "dotted_key",
    "load_config",
    "make_key_from_object",
    "merge_trees",
    "normalize_key",
    "read_source",
    "source_changed",
    "split_key",
]
