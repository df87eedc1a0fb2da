# tests/staging/test_staging_files.py
"""Testes da cópia do módulo para a saída e da limpeza da saída."""

from pathlib import Path

import pytest

from atlas_buildflow.core.exceptions import ConfigurationError, LoadError
from atlas_buildflow.staging.files import clean_output, stage_module_files

EXCLUDE = ["test_*.py", "__pycache__", "tests"]


def test_stage_copies_and_excludes(module_project):
    src = module_project / "src"
    (src / "__pycache__").mkdir()
    (src / "__pycache__" / "x.pyc").write_bytes(b"\0")
    (src / "tests").mkdir()
    (src / "tests" / "helper.py").write_text("", encoding="utf-8")
    (src / "impl").mkdir()
    (src / "impl" / "core.py").write_text("X = 1\n", encoding="utf-8")

    dest = module_project / "build" / "sample" / "0.0.1"
    files = stage_module_files(src, dest, exclude=EXCLUDE)

    assert files == [
        Path("__init__.py"),
        Path("impl/core.py"),
        Path("module.yaml"),
        Path("package.xml"),
    ]
    assert (dest / "impl" / "core.py").read_text(encoding="utf-8") == "X = 1\n"


def test_stage_overwrites_existing_version_dir(module_project):
    src = module_project / "src"
    dest = module_project / "build" / "sample" / "0.0.1"
    stage_module_files(src, dest, exclude=EXCLUDE)
    (src / "module.yaml").write_text("name: changed\n", encoding="utf-8")

    stage_module_files(src, dest, exclude=EXCLUDE)

    assert (dest / "module.yaml").read_text(encoding="utf-8") == "name: changed\n"


def test_restage_drops_files_removed_from_source(module_project):
    src = module_project / "src"
    (src / "legacy.py").write_text("OLD = 1\n", encoding="utf-8")
    dest = module_project / "build" / "sample" / "0.0.1"
    stage_module_files(src, dest, exclude=EXCLUDE)
    assert (dest / "legacy.py").exists()

    (src / "legacy.py").unlink()
    files = stage_module_files(src, dest, exclude=EXCLUDE)

    assert not (dest / "legacy.py").exists()
    assert Path("legacy.py") not in files


def test_stage_missing_source(tmp_path):
    with pytest.raises(LoadError):
        stage_module_files(tmp_path / "nope", tmp_path / "out")


def test_stage_refuses_destination_inside_source(module_project):
    src = module_project / "src"
    with pytest.raises(ConfigurationError):
        stage_module_files(src, src / "build" / "0.0.1")


def test_clean_removes_output(tmp_path):
    out = tmp_path / "build"
    (out / "sample").mkdir(parents=True)

    assert clean_output(out, project_root=tmp_path) is True
    assert not out.exists()
    assert clean_output(out, project_root=tmp_path) is False


@pytest.mark.parametrize("relative", [".", ".."])
def test_clean_refuses_project_root_or_ancestor(tmp_path, relative):
    project = tmp_path / "project"
    project.mkdir()
    with pytest.raises(ConfigurationError):
        clean_output(project / relative, project_root=project)
    assert project.is_dir()
