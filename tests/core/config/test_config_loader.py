# tests/core/config/test_config_loader.py
"""
Testes do carregamento da configuração efetiva do build.

Política validada:
    - defaults embutidos sempre formam a base
    - `buildflow.yaml` na raiz do projeto é aplicado automaticamente
    - `--config` explícito é obrigatório quando informado
    - valores enumerados fora do domínio são rejeitados
"""

import json

import pytest

from atlas_buildflow.core.config.defaults import DEFAULT_CONFIG
from atlas_buildflow.core.config.errors import (
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from atlas_buildflow.core.config.loader import find_project_config, load_config
from atlas_buildflow.core.exceptions import ConfigurationError


def test_defaults_when_no_project_file(tmp_path):
    config = load_config(project_root=tmp_path)
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_project_yaml_is_merged_over_defaults(tmp_path):
    (tmp_path / "buildflow.yaml").write_text(
        "module:\n  name: sample\ngates:\n  coverage:\n    min_percent: 95\n",
        encoding="utf-8",
    )

    config = load_config(project_root=tmp_path)

    assert find_project_config(tmp_path) == tmp_path / "buildflow.yaml"
    assert config["module"]["name"] == "sample"
    assert config["gates"]["coverage"]["min_percent"] == 95.0
    assert config["gates"]["lint"]["max_violations"] == 0


def test_explicit_json_config(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"versioning": {"surface_diff": "count"}}), encoding="utf-8")

    config = load_config(project_root=tmp_path, config_path=path)

    assert config["versioning"]["surface_diff"] == "count"


def test_empty_yaml_is_empty_override(tmp_path):
    (tmp_path / "buildflow.yml").write_text("", encoding="utf-8")
    assert load_config(project_root=tmp_path) == DEFAULT_CONFIG


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(ConfigFileNotFoundError):
        load_config(project_root=tmp_path, config_path=tmp_path / "nope.yaml")


def test_unsupported_format_raises(tmp_path):
    path = tmp_path / "buildflow.toml"
    path.write_text("x = 1", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(project_root=tmp_path, config_path=path)


def test_non_mapping_root_raises(tmp_path):
    (tmp_path / "buildflow.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(project_root=tmp_path)


def test_invalid_surface_diff_mode_is_configuration_error(tmp_path):
    (tmp_path / "buildflow.yaml").write_text("versioning:\n  surface_diff: fuzzy\n", encoding="utf-8")
    with pytest.raises(InvalidConfigValueError) as exc:
        load_config(project_root=tmp_path)
    assert isinstance(exc.value, ConfigurationError)
    assert exc.value.details["key"] == "versioning.surface_diff"


def test_empty_section_is_config_error(tmp_path):
    (tmp_path / "buildflow.yaml").write_text("versioning:\n", encoding="utf-8")
    with pytest.raises(ConfigTypeConflictError):
        load_config(project_root=tmp_path)


@pytest.mark.parametrize(
    "name, text",
    [("buildflow.yaml", "module: [unclosed\n"), ("buildflow.json", '{"module": ')],
)
def test_malformed_file_is_config_error(tmp_path, name, text):
    (tmp_path / name).write_text(text, encoding="utf-8")

    with pytest.raises(InvalidConfigSyntaxError) as exc:
        load_config(project_root=tmp_path)

    assert isinstance(exc.value, ConfigurationError)
    assert exc.value.details["path"].endswith(name)
