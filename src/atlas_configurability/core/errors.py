# src/atlas_configurability/core/errors.py
"""
Exceções canônicas do Atlas Configurability.

Este módulo define a hierarquia oficial de exceções levantadas durante o
carregamento de fontes, o merge de containers e a distribuição de seções
de configuração para os módulos registrados.

Taxonomia de falhas:
    - ResolutionMiss     → não é exceção: a seção ausente propaga como `None`
    - MergeTypeConflict  → merge com tipo não suportado (erro do chamador)
    - ReloadWithoutSource→ reload de uma configuração sem arquivo de origem
    - ModuleDispatch     → o `configure` de um módulo falhou durante a distribuição

Invariantes:
    - Todas as exceções herdam de `ConfigurabilityError`
    - Apenas ResolutionMiss é recuperada localmente; as demais propagam

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não garante semântica transacional na distribuição
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigurabilityError(Exception):
    """
    Exceção base para todos os erros do Atlas Configurability.

    Permite captura genérica de falhas de configuração sem confundi-las
    com erros de domínio dos módulos configurados.
    """


class ConfigSourceNotFoundError(ConfigurabilityError):
    """
    Exceção levantada quando o arquivo de configuração solicitado
    não existe no caminho especificado.

    Invariantes:
        - O arquivo de defaults de `load_config` é obrigatório
        - Nenhuma configuração parcial é produzida
    """


class UnsupportedConfigFormatError(ConfigurabilityError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada.

    Formatos suportados:
        - YAML (.yaml, .yml, .conf)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigurabilityError):
    """
    Exceção levantada quando o conteúdo raiz de uma fonte de configuração
    não é um mapa chave-valor.
    """


class MergeTypeConflictError(ConfigurabilityError, TypeError):
    """
    Exceção levantada quando um container é mesclado com um valor de tipo
    não suportado.

    Tipos aceitos em merge:
        - ConfigStruct
        - Mapping (dict e equivalentes)
        - Config (documento completo)

    Decisões arquiteturais:
        - Herda de `TypeError` para permitir captura idiomática
        - Nunca é ignorada silenciosamente
    """


class ReloadWithoutSourceError(ConfigurabilityError):
    """Reload solicitado para uma configuração carregada apenas em memória."""


class MissingConfigPathError(ConfigurabilityError, ValueError):
    """Escrita solicitada sem caminho explícito e sem caminho de origem."""


class ModuleDispatchError(ConfigurabilityError):
    """
    Exceção levantada quando o ponto de entrada `configure` de um módulo
    falha durante a distribuição de configuração.

    A exceção original fica encadeada em `__cause__`.

    Decisões arquiteturais:
        - Política fail-fast: módulos seguintes não são configurados
        - Não há rollback dos módulos já configurados

    Atributos:
        module: o módulo cujo `configure` falhou.
        config_key: a chave canônica usada na resolução da seção.
    """

    def __init__(self, message: str, *, module: Any = None, config_key: Optional[str] = None) -> None:
        super().__init__(message)
        self.module = module
        self.config_key = config_key
