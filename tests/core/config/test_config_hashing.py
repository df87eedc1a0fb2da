# tests/core/config/test_config_hashing.py
"""Testes do hash determinístico da configuração efetiva."""

import pytest

from atlas_buildflow.core.config.hashing import compute_config_hash


def test_hash_ignores_key_order():
    a = {"paths": {"source": "src", "output": "build"}, "module": {"name": "x"}}
    b = {"module": {"name": "x"}, "paths": {"output": "build", "source": "src"}}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_changes_with_values():
    assert compute_config_hash({"a": 1}) != compute_config_hash({"a": 2})


def test_hash_is_sha256_hex():
    digest = compute_config_hash({})
    assert len(digest) == 64
    int(digest, 16)


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])
