# tests/environment/test_probe.py
"""Testes do Environment Probe (classificação CI/local e release anterior)."""

import pytest

from atlas_buildflow.core.exceptions import PackageSourceError
from atlas_buildflow.environment.probe import is_ci, probe_environment
from atlas_buildflow.environment.types import EnvironmentKind, PublishedModule
from atlas_buildflow.surface.types import PublicSurface
from atlas_buildflow.versioning.version import Version


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", " on "])
def test_truthy_values_are_ci(value):
    assert is_ci({"CI": value}) is True


@pytest.mark.parametrize("env", [{}, {"CI": ""}, {"CI": "0"}, {"CI": "false"}, {"OTHER": "1"}])
def test_other_values_are_local(env):
    assert is_ci(env) is False


def test_custom_variable():
    assert is_ci({"BUILD_AGENT": "yes"}, "BUILD_AGENT") is True


class FakeClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def find_module(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return self.result


def test_local_never_queries_package_source():
    client = FakeClient()
    report = probe_environment(module_name="sample", client_factory=lambda: client, env={})

    assert report.kind is EnvironmentKind.LOCAL
    assert report.previous.version == Version(0, 0, 0)
    assert client.calls == []


def test_ci_published_module():
    published = PublishedModule(name="sample", version=Version(1, 4, 2), surface=PublicSurface.of(["Foo"]))
    client = FakeClient(result=published)

    report = probe_environment(module_name="sample", client_factory=lambda: client, env={"CI": "true"})

    assert report.is_ci
    assert report.previous is published
    assert client.calls == ["sample"]


def test_ci_never_published_is_zero():
    report = probe_environment(module_name="sample", client_factory=lambda: FakeClient(), env={"CI": "1"})
    assert report.previous.version == Version(0, 0, 0)
    assert len(report.previous.known_surface) == 0


def test_ci_lookup_failure_propagates():
    client = FakeClient(error=PackageSourceError("down"))
    with pytest.raises(PackageSourceError):
        probe_environment(module_name="sample", client_factory=lambda: client, env={"CI": "1"})
