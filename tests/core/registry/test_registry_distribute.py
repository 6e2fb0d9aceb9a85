# tests/core/registry/test_registry_distribute.py
"""
Testes de registro e distribuição de configuração (ConfigRegistry).

Os testes asseguram que:
- cada módulo recebe exatamente a seção resolvida pela sua config key
- módulos sem seção recebem None
- cada `distribute` invoca o `configure` de cada módulo exatamente uma vez
- registros tardios são configurados imediatamente
- falhas de `configure` interrompem a distribuição (fail-fast)

Decisões arquiteturais:
    - Registro idempotente por identidade
    - Sem deduplicação: redistribuir reinvoca todos os módulos
"""

import pytest

from atlas_configurability.core.config.document import Config
from atlas_configurability.core.errors import ModuleDispatchError
from atlas_configurability.core.registry import registry as registry_module


def test_distribute_delivers_resolved_sections(registry, DummyModule):
    """
    Verifica que cada módulo recebe apenas a seção da sua config key.

    Invariantes:
        - Chaves de um segmento resolvem no primeiro nível
        - Chaves pontuadas descem um nível por segmento
    """
    db = DummyModule(config_key="db")
    cache = DummyModule(config_key="svc.cache")
    registry.register(db)
    registry.register(cache)

    registry.distribute({"db": {"host": "x"}, "svc": {"cache": {"ttl": 30}}})

    assert db.sections == [{"host": "x"}]
    assert cache.sections == [{"ttl": 30}]


def test_module_without_section_receives_none(registry, DummyModule):
    """Ausência de seção não é erro: o módulo é configurado com None."""
    db = DummyModule(config_key="db")
    mail = DummyModule(config_key="mail")
    registry.register(db)
    registry.register(mail)

    registry.distribute({"db": {"host": "x"}})

    assert db.sections == [{"host": "x"}]
    assert mail.sections == [None]


def test_each_distribution_configures_each_module_once(registry, DummyModule):
    """
    Verifica a política de redistribuição sem deduplicação.

    Invariantes:
        - Um `configure` por módulo por distribuição
        - Seções idênticas ainda assim são reentregues
    """
    db = DummyModule(config_key="db")
    registry.register(db)

    document = {"db": {"host": "x"}}
    registry.distribute(document)
    registry.distribute(document)

    assert db.sections == [{"host": "x"}, {"host": "x"}]


def test_register_is_idempotent(registry, DummyModule):
    """Registrar o mesmo objeto duas vezes não duplica a distribuição."""
    db = DummyModule(config_key="db")
    first = registry.register(db)
    second = registry.register(db)

    assert first is second
    assert registry.modules() == [db]

    registry.distribute({"db": 1})
    assert db.sections == [1]


def test_late_registration_is_configured_immediately(registry, DummyModule):
    """
    Verifica que módulos registrados após a distribuição recebem a
    configuração já carregada no próprio `register`.
    """
    registry.distribute({"db": {"host": "x"}})

    db = DummyModule(config_key="db")
    registry.register(db)

    assert db.sections == [{"host": "x"}]


def test_registration_before_any_config_does_nothing(registry, DummyModule):
    db = DummyModule(config_key="db")
    registry.register(db)
    assert db.sections == []
    assert registry.loaded_config is None


def test_distribute_config_document(registry, DummyModule, test_config_yaml):
    nested = DummyModule(config_key="section.subsection")
    registry.register(nested)

    config = Config(test_config_yaml)
    config.install()

    assert registry.loaded_config is config
    assert nested.sections[0].subsubsection == "value"


def test_key_derived_from_module_name(registry):
    class Mailer:
        def configure(self, section):
            self.section = section

    mailer = Mailer()
    registry.register(mailer)
    registry.distribute({"mailer": {"from": "noreply@example.com"}})

    assert mailer.section == {"from": "noreply@example.com"}


def test_failing_module_aborts_distribution(registry, DummyModule):
    """
    Verifica a política fail-fast.

    Invariantes:
        - A exceção original fica encadeada em `__cause__`
        - Módulos anteriores permanecem configurados
        - Módulos posteriores não são configurados
        - Hooks não rodam
    """
    before = DummyModule(config_key="before")
    broken = DummyModule(config_key="broken", fail_with=RuntimeError("boom"))
    after = DummyModule(config_key="after")
    for module in (before, broken, after):
        registry.register(module)

    ran = []
    registry.register_post_configure_hook(lambda: ran.append(True))

    with pytest.raises(ModuleDispatchError) as excinfo:
        registry.distribute({"before": 1, "broken": 2, "after": 3})

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert excinfo.value.module is broken
    assert excinfo.value.config_key == "broken"
    assert before.sections == [1]
    assert after.sections == []
    assert ran == []
    assert registry.hooks_ran is False


def test_reset_forgets_config_but_keeps_modules(registry, DummyModule):
    """`reset` limpa documento e hooks, mas não os registros."""
    db = DummyModule(config_key="db")
    registry.register(db)
    registry.distribute({"db": 1})

    registry.reset()

    assert registry.loaded_config is None
    assert registry.hooks_ran is False
    assert registry.is_registered(db)

    late = DummyModule(config_key="db")
    registry.register(late)
    assert late.sections == []


def test_unregister_and_reconfigure(registry, DummyModule):
    db = DummyModule(config_key="db")
    registry.register(db)
    assert registry.reconfigure(db) is False

    registry.distribute({"db": 1})
    assert registry.reconfigure(db) is True
    assert db.sections == [1, 1]

    assert registry.unregister(db) is True
    assert registry.unregister(db) is False
    registry.distribute({"db": 2})
    assert db.sections == [1, 1]


def test_handle_of_unknown_module_raises(registry, DummyModule):
    with pytest.raises(KeyError):
        registry.handle(DummyModule())


def test_module_level_shortcuts_use_default_registry(registry, DummyModule):
    db = DummyModule(config_key="db")
    registry_module.register(db)
    registry_module.distribute({"db": "x"})

    assert registry_module.get_registry() is registry
    assert db.sections == ["x"]
