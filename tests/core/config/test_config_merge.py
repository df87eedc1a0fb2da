# tests/core/config/test_config_merge.py
"""
Testes da política de deep-merge de configuração.

Os testes asseguram que:
- valores escalares são sobrescritos
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- inteiros são aceitos sobre limiares float
- conflitos de tipo são rejeitados explicitamente
- objetos de entrada não são mutados
"""

import pytest

try:
    from atlas_buildflow.core.config.errors import ConfigTypeConflictError
    from atlas_buildflow.core.config.merge import deep_merge
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing config merge. Import error: {_IMPORT_ERR}")


def test_merge_recursive_and_scalar_override():
    _require_imports()
    base = {"paths": {"source": "src", "output": "build"}, "module": {"name": None}}
    override = {"paths": {"output": "dist"}, "module": {"name": "sample"}}

    merged = deep_merge(base, override)

    assert merged == {"paths": {"source": "src", "output": "dist"}, "module": {"name": "sample"}}
    assert base["paths"]["output"] == "build"
    assert override == {"paths": {"output": "dist"}, "module": {"name": "sample"}}


def test_merge_list_is_replaced():
    _require_imports()
    merged = deep_merge({"staging": {"exclude": ["a", "b"]}}, {"staging": {"exclude": ["c"]}})
    assert merged["staging"]["exclude"] == ["c"]


def test_merge_int_over_float_becomes_float():
    """`min_percent: 90` em YAML chega como int e deve ser aceito sobre o default 80.0."""
    _require_imports()
    merged = deep_merge({"gates": {"coverage": {"min_percent": 80.0}}}, {"gates": {"coverage": {"min_percent": 90}}})
    value = merged["gates"]["coverage"]["min_percent"]
    assert value == 90.0
    assert isinstance(value, float)


def test_merge_type_conflict_raises():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge({"paths": {"source": "src"}}, {"paths": ["src"]})
    assert exc.value.details["key"] == "paths"


def test_merge_new_keys_are_added():
    _require_imports()
    merged = deep_merge({"a": 1}, {"b": {"c": 2}})
    assert merged == {"a": 1, "b": {"c": 2}}


def test_merge_none_over_section_is_conflict():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge({"versioning": {"surface_diff": "set"}}, {"versioning": None})
    assert exc.value.details["key"] == "versioning"
