# tests/core/config/test_merge.py
"""
Testes da política de merge recursivo de configuração.

Os testes asseguram que:
- valores escalares são sobrescritos pelo lado direito
- mappings são mesclados de forma recursiva
- listas são sobrescritas integralmente
- conflitos mapping × escalar são resolvidos a favor do lado direito
- objetos de entrada não são mutados durante o merge

Limites explícitos:
    - Não valida merge de ConfigStruct (ver test_struct.py)
"""

import pytest

try:
    from atlas_configurability.core.config.merge import merge_trees
except Exception as e:  # noqa: BLE001
    merge_trees = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando `merge_trees` não pode ser importado."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge module. Implement:\n"
            "- src/atlas_configurability/core/config/merge.py (merge_trees)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    """
    Verifica o override de escalares sem mutar os inputs.

    Invariantes:
        - O valor sobrescrito reflete exatamente o override
        - `base` e `override` não sofrem mutação
    """
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = merge_trees(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    """Mappings aninhados são mesclados recursivamente, preservando chaves da base."""
    _require_imports()
    base = {"db": {"host": "localhost", "port": 5432}}
    override = {"db": {"host": "db.internal"}}
    out = merge_trees(base, override)
    assert out == {"db": {"host": "db.internal", "port": 5432}}


def test_merge_list_override_total():
    """Listas não são mescladas elemento a elemento: o override substitui por inteiro."""
    _require_imports()
    base = {"plugins": {"enabled": ["a", "b"]}}
    override = {"plugins": {"enabled": ["c"]}}
    assert merge_trees(base, override) == {"plugins": {"enabled": ["c"]}}


def test_merge_right_wins_on_map_scalar_conflict():
    """
    Verifica que, em conflito mapping × escalar, o lado direito vence integralmente.

    Decisões arquiteturais:
        - Não há erro de conflito de tipos no merge de árvores
        - O valor mais novo prevalece em ambos os sentidos
    """
    _require_imports()
    assert merge_trees({"engine": {"fail_fast": True}}, {"engine": "DEBUG"}) == {"engine": "DEBUG"}
    assert merge_trees({"engine": "DEBUG"}, {"engine": {"fail_fast": True}}) == {
        "engine": {"fail_fast": True}
    }


def test_merge_disjoint_keys_is_union():
    _require_imports()
    left = {"a": {"one": 1}}
    right = {"b": {"two": 2}}
    assert merge_trees(left, right) == {"a": {"one": 1}, "b": {"two": 2}}


def test_merge_result_does_not_share_nested_objects():
    """O resultado não compartilha dicts/listas aninhados com os inputs."""
    _require_imports()
    base = {"a": {"items": [1, 2]}}
    out = merge_trees(base, {})
    out["a"]["items"].append(3)
    assert base == {"a": {"items": [1, 2]}}


def test_merge_rejects_non_mapping_roots():
    _require_imports()
    with pytest.raises(TypeError):
        merge_trees({"a": 1}, ["not", "a", "mapping"])
