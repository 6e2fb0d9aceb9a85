# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Configurability.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML de configuração (defaults + local)
- um `ConfigRegistry` isolado por teste
- módulos dummy duck-typed para exercitar registro e distribuição

Decisões arquiteturais:
    - Cada teste recebe um registry próprio; o registry padrão do
      processo é substituído e restaurado ao final
    - Módulos dummy utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para melhorar
      a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O fora de `tmp_path`
    - Nenhum estado global vaza entre testes
"""

import pytest


# =====================================================
# Documentos de configuração
# =====================================================

@pytest.fixture
def test_config_yaml() -> str:
    """
    YAML de configuração com seções aninhadas, lista, escalar e texto multilinha.

    Returns:
        str: conteúdo YAML com exatamente 4 seções de primeiro nível.
    """
    return """\
section:
  subsection:
    subsubsection: value
listsection:
  - list
  - values
  - are
  - neat
mergekey: Yep.
textsection: |-
  With some text as the value
  ...and another line.
"""


@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Representa um `config.defaults.yaml` sobre o qual overrides locais
    são aplicados.
    """
    return """\
db:
  host: localhost
  port: 5432
svc:
  cache:
    ttl: 30
    enabled: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local: altera apenas alguns valores dos defaults."""
    return """\
db:
  host: db.internal
svc:
  cache:
    enabled: false
"""


# =====================================================
# Registry + módulos dummy
# =====================================================

@pytest.fixture
def registry():
    """
    Fixture que fornece um `ConfigRegistry` vazio e o instala como padrão.

    O registry anterior é restaurado ao final do teste, garantindo que
    `Config.install()` e os atalhos de módulo não vazem estado.
    """
    from atlas_configurability.core.registry.registry import ConfigRegistry, set_registry

    fresh = ConfigRegistry()
    previous = set_registry(fresh)
    yield fresh
    set_registry(previous)


@pytest.fixture
def DummyModule():
    """
    Fixture factory que fornece uma classe de módulo configurável mínima.

    A classe retornada:
    - expõe `config_key` (opcional) e `configure(section)`
    - registra cada seção recebida em `self.sections`
    - aceita `defaults` opcionais expostos via `defaults()`

    Returns:
        type: classe `_DummyModule` a ser instanciada pelos testes.
    """

    class _DummyModule:
        def __init__(self, config_key=None, defaults=None, fail_with=None):
            if config_key is not None:
                self.config_key = config_key
            self.sections = []
            self._defaults = defaults
            self._fail_with = fail_with

        def configure(self, section):
            if self._fail_with is not None:
                raise self._fail_with
            self.sections.append(section)

        def defaults(self):
            return self._defaults

        def __repr__(self):
            return f"<DummyModule {getattr(self, 'config_key', None)!r}>"

    return _DummyModule
