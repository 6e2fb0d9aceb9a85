# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (read_source / load_config).

Os testes asseguram que:
- o arquivo defaults é obrigatório
- o arquivo local é opcional e prevalece sobre os defaults
- formatos não suportados são rejeitados
- estruturas com raiz inválida são detectadas precocemente

Invariantes:
    - A árvore lida é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro
"""

import json
from pathlib import Path

import pytest

try:
    from atlas_configurability.core.config.loader import load_config, read_source
    from atlas_configurability.core.errors import (
        ConfigSourceNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    read_source = None
    ConfigSourceNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader e suas exceções tipadas estejam disponíveis.

    Falha imediatamente, com a lista dos símbolos esperados, quando o
    módulo `loader` ou as exceções de `errors` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/atlas_configurability/core/config/loader.py (load_config, read_source)\n"
            "- src/atlas_configurability/core/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo defaults é tratada como erro fatal.

    Invariantes:
        - A exceção utilizada é específica (`ConfigSourceNotFoundError`)
        - Nenhuma configuração parcial é retornada
    """
    _require_imports()
    missing = tmp_path / "defaults.yaml"
    with pytest.raises(ConfigSourceNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    """A ausência do arquivo local não é erro: os defaults viram a fonte."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out.db.host == "localhost"
    assert out.svc.cache.enabled is True
    assert out.path == defaults.resolve()


def test_load_defaults_and_local(
    tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml
):
    """
    Verifica o merge defaults + local.

    O resultado deve refletir:
    - valores sobrescritos pelo arquivo local
    - valores preservados do arquivo defaults quando não sobrescritos
    - o arquivo local como fonte do documento (para reload/write)
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out.db.host == "db.internal"
    assert out.db.port == 5432
    assert out.svc.cache.enabled is False
    assert out.svc.cache.ttl == 30
    assert out.path == local.resolve()
    assert out.defaults["db"]["host"] == "localhost"


def test_read_json_source(tmp_path: Path):
    _require_imports()
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"db": {"host": "localhost"}}), encoding="utf-8")
    assert read_source(path) == {"db": {"host": "localhost"}}


def test_empty_yaml_is_empty_mapping(tmp_path: Path):
    _require_imports()
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert read_source(path) == {}


def test_invalid_root_type_raises(tmp_path: Path):
    """Configurações cuja raiz não é dict são rejeitadas com erro específico."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults), local_path=None)


def test_unsupported_extension_raises(tmp_path: Path):
    """Extensões fora de YAML/JSON são rejeitadas antes de qualquer parse."""
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("a = 1\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults), local_path=None)
