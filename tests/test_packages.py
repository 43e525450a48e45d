"""
Tests for system dependency and Python package installation.
"""

from __future__ import annotations

import pytest

from ghidra_provisioner.core.errors import (
    DependencyInstallFailure,
    SecondaryInstallFailure,
    UnsupportedEnvironment,
)
from ghidra_provisioner.core.models.settings import PythonPackages
from ghidra_provisioner.core.services.provision.execution.packages import (
    dependency_commands,
    install_dependencies,
)
from ghidra_provisioner.core.services.provision.execution.python_packages import (
    install_python_packages,
    python_package_commands,
)
from tests.helpers import RecordingRunner


class TestInstallDependencies:

    def test_apt_runs_update_install_runtime(self, make_ctx, runner):
        commands = install_dependencies(make_ctx(), "apt-get")
        assert runner.calls == commands
        assert runner.calls[0] == ["apt-get", "update"]
        assert runner.calls[-1] == ["apt-get", "install", "-y", "openjdk-21-jdk"]

    def test_apt_is_noninteractive(self, make_ctx, runner, path_dir):
        install_dependencies(make_ctx(), "apt-get")
        for kw in runner.kwargs:
            assert kw["env"]["DEBIAN_FRONTEND"] == "noninteractive"
            assert kw["env"]["PATH"] == str(path_dir)

    def test_dnf_env_untouched(self, make_ctx, runner):
        install_dependencies(make_ctx(), "dnf")
        assert "DEBIAN_FRONTEND" not in runner.kwargs[0]["env"]

    def test_base_variant_skips_extended_packages(self, make_ctx, settings, runner):
        ctx = make_ctx(settings.model_copy(update={"variant": "base"}))
        install_dependencies(ctx, "dnf")
        assert runner.calls[1] == [
            "dnf", "install", "-y", "wget", "unzip", "curl", "java-21-openjdk-devel",
        ]

    def test_first_failure_aborts(self, make_ctx):
        def respond(cmd):
            if cmd[:2] == ["apt-get", "install"]:
                return {
                    "ok": False, "error": "Command failed (exit 100)",
                    "stderr": "E: Unable to locate package wget", "returncode": 100,
                }
            return None

        runner = RecordingRunner(respond)
        with pytest.raises(DependencyInstallFailure) as exc_info:
            install_dependencies(make_ctx(runner=runner), "apt-get")
        assert len(runner.calls) == 2
        assert "Unable to locate package" in exc_info.value.detail

    def test_unknown_manager(self, make_ctx):
        with pytest.raises(UnsupportedEnvironment):
            dependency_commands(make_ctx(), "pacman")

    def test_runtime_follows_java_minimum(self, make_ctx, settings):
        ctx = make_ctx(settings.model_copy(update={"java_min_version": 25}))
        assert dependency_commands(ctx, "apt-get")[-1][-1] == "openjdk-25-jdk"


class TestPythonPackages:

    def test_disabled_by_default(self, make_ctx, runner):
        assert python_package_commands(make_ctx()) == []
        assert install_python_packages(make_ctx()) == []
        assert runner.calls == []

    def test_enabled(self, make_ctx, settings, runner):
        ctx = make_ctx(settings.model_copy(
            update={"python_packages": PythonPackages(enabled=True)},
        ))
        install_python_packages(ctx)
        assert runner.calls == [
            ["python3", "-m", "pip", "install", "--upgrade", "pip"],
            ["python3", "-m", "pip", "install", "psutil", "protobuf==3.20.3"],
        ]

    def test_failure(self, make_ctx, settings):
        ctx = make_ctx(
            settings.model_copy(update={
                "python_packages": PythonPackages(enabled=True, upgrade_pip=False),
            }),
            runner=RecordingRunner(lambda cmd: {"ok": False, "error": "boom"}),
        )
        with pytest.raises(SecondaryInstallFailure, match="Python package install failed"):
            install_python_packages(ctx)
