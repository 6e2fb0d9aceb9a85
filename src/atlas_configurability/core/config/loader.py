# src/atlas_configurability/core/config/loader.py
"""
Loader canônico de fontes de configuração.

Este módulo é responsável por ler arquivos de configuração do disco e
resolver a configuração efetiva a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Produzir um documento `Config` com o override local prevalecendo

Invariantes:
    - O arquivo de defaults é obrigatório
    - A árvore lida é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida semântica de domínio
    - Não distribui a configuração aos módulos (ver `Config.install`)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

import yaml  # PyYAML

from ..errors import (
    ConfigSourceNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

if TYPE_CHECKING:
    from .document import Config

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml", ".conf"})
JSON_SUFFIXES = frozenset({".json"})


def parse_source(text: str) -> Dict[str, Any]:
    """
    Interpreta um texto YAML e valida que a raiz é um mapa.

    Texto vazio é interpretado como dicionário vazio.

    Raises:
        InvalidConfigRootTypeError: se a raiz não for um dicionário.
    """
    data = yaml.safe_load(text)
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def read_source(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados:
        - YAML (.yaml, .yml, .conf)
        - JSON (.json)

    Args:
        path: caminho para o arquivo de configuração.

    Returns:
        Dict[str, Any]: conteúdo do arquivo como dicionário.

    Raises:
        ConfigSourceNotFoundError: se o arquivo não existir.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        InvalidConfigRootTypeError: se a raiz não for um dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigSourceNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in YAML_SUFFIXES:
        text = path.read_text(encoding="utf-8")
        logger.debug("Read %d bytes from %s", len(text), path)
        return parse_source(text)

    if suffix in JSON_SUFFIXES:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidConfigRootTypeError(
                f"Config root deve ser dict, recebido: {type(data).__name__}"
            )
        return data

    raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")


def load_config(
    *,
    defaults_path: Union[str, Path],
    local_path: Optional[Union[str, Path]] = None,
) -> "Config":
    """
    Carrega e resolve a configuração efetiva em um documento `Config`.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; quando existe, passa a ser a fonte
          do documento e os defaults ficam por baixo dele
        - Quando o local não existe, o próprio arquivo de defaults é a fonte

    Args:
        defaults_path: caminho para o arquivo base.
        local_path: caminho opcional para overrides locais.

    Returns:
        Config: documento resolvido, com `path` apontando para a fonte efetiva.

    Raises:
        ConfigSourceNotFoundError: se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: se o formato não for suportado.
        InvalidConfigRootTypeError: se o conteúdo não for um dicionário.
    """
    from .document import Config

    defaults_file = Path(defaults_path)
    defaults = read_source(defaults_file)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            return Config.load(local_file, defaults=defaults)
        logger.debug("Local config %s not found; using defaults only", local_file)

    return Config.load(defaults_file)
