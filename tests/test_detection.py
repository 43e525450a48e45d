"""
Tests for detection — privilege, package manager, Java runtime.

Java tests run a real fake ``java`` shell script through the real
subprocess runner, so the stderr banner path is exercised end to end.
"""

from __future__ import annotations

import pytest

from ghidra_provisioner.core.errors import (
    InsufficientPrivilege,
    MissingRuntime,
    UnsupportedEnvironment,
    VersionParseError,
    VersionTooLow,
)
from ghidra_provisioner.core.models.version import Version
from ghidra_provisioner.core.services.provision.detection.java_runtime import (
    check_java_version,
    read_java_version_report,
    verify_java_runtime,
)
from ghidra_provisioner.core.services.provision.detection.package_manager import (
    detect_package_manager,
    probe_package_managers,
)
from ghidra_provisioner.core.services.provision.detection.privilege import check_privilege
from ghidra_provisioner.core.services.provision.execution.subprocess_runner import (
    run_command,
)
from tests.helpers import RecordingRunner, make_executable


class TestPrivilege:
    def test_root_passes(self, make_ctx):
        check_privilege(make_ctx(euid=0))

    def test_non_root_fails(self, make_ctx):
        with pytest.raises(InsufficientPrivilege, match="run this installer as root"):
            check_privilege(make_ctx(euid=1000))


class TestPackageManager:
    """Priority is apt-get > dnf > yum; exactly one is returned."""

    def test_apt_wins_over_dnf(self, make_ctx, path_dir):
        make_executable(path_dir, "dnf")
        make_executable(path_dir, "apt-get")
        assert detect_package_manager(make_ctx()) == "apt-get"

    def test_dnf_wins_over_yum(self, make_ctx, path_dir):
        make_executable(path_dir, "yum")
        make_executable(path_dir, "dnf")
        assert detect_package_manager(make_ctx()) == "dnf"

    def test_yum_alone(self, make_ctx, path_dir):
        make_executable(path_dir, "yum")
        assert detect_package_manager(make_ctx()) == "yum"

    def test_none_found(self, make_ctx):
        with pytest.raises(UnsupportedEnvironment, match="Unsupported package manager"):
            detect_package_manager(make_ctx())

    def test_non_executable_file_is_ignored(self, make_ctx, path_dir):
        (path_dir / "apt-get").write_text("not a program")
        make_executable(path_dir, "yum")
        assert detect_package_manager(make_ctx()) == "yum"

    def test_probe_reports_every_manager(self, make_ctx, path_dir):
        make_executable(path_dir, "dnf")
        probed = probe_package_managers(make_ctx())
        assert list(probed) == ["apt-get", "dnf", "yum"]
        assert probed["apt-get"] is None
        assert probed["dnf"] == str(path_dir / "dnf")
        assert probed["yum"] is None

    def test_manager_without_package_set_is_skipped(self, make_ctx, settings, path_dir):
        make_executable(path_dir, "apt-get")
        make_executable(path_dir, "dnf")
        sets = {k: v for k, v in settings.package_sets.items() if k != "apt-get"}
        ctx = make_ctx(settings.model_copy(update={"package_sets": sets}))
        assert detect_package_manager(ctx) == "dnf"


def _fake_java(path_dir, banner: str):
    make_executable(path_dir, "java", f"echo '{banner}' 1>&2")


class TestJavaRuntime:

    def test_missing_java(self, make_ctx):
        with pytest.raises(MissingRuntime, match="Java is not installed"):
            verify_java_runtime(make_ctx())

    def test_banner_read_from_stderr(self, make_ctx, path_dir):
        _fake_java(path_dir, 'openjdk version "21.0.2" 2024-01-16')
        ctx = make_ctx(runner=run_command)
        assert read_java_version_report(ctx) == 'openjdk version "21.0.2" 2024-01-16'

    def test_equal_to_minimum_passes(self, make_ctx, path_dir):
        _fake_java(path_dir, 'openjdk version "21" 2023-09-19')
        version = verify_java_runtime(make_ctx(runner=run_command))
        assert version.major == 21

    def test_newer_passes(self, make_ctx, path_dir):
        _fake_java(path_dir, 'openjdk version "23.0.1" 2024-10-15')
        assert verify_java_runtime(make_ctx(runner=run_command)).major == 23

    def test_older_fails(self, make_ctx, path_dir):
        _fake_java(path_dir, 'openjdk version "17.0.9" 2023-10-17')
        with pytest.raises(VersionTooLow) as exc_info:
            verify_java_runtime(make_ctx(runner=run_command))
        assert exc_info.value.found == 17
        assert exc_info.value.required == 21
        assert "Java 21 or higher is required" in exc_info.value.message

    def test_legacy_one_dot_fails(self, make_ctx, path_dir):
        _fake_java(path_dir, 'java version "1.8.0_292"')
        with pytest.raises(VersionTooLow, match="found version 1"):
            verify_java_runtime(make_ctx(runner=run_command))

    def test_garbage_output(self, make_ctx, path_dir):
        _fake_java(path_dir, "something unexpected")
        with pytest.raises(VersionParseError):
            verify_java_runtime(make_ctx(runner=run_command))

    def test_stdout_used_when_stderr_empty(self, make_ctx, path_dir):
        make_executable(path_dir, "java")
        runner = RecordingRunner(lambda cmd: {
            "ok": True, "stdout": 'openjdk version "21.0.1"\n', "stderr": "",
        })
        assert read_java_version_report(make_ctx(runner=runner)) == 'openjdk version "21.0.1"'
        assert runner.calls == [[str(path_dir / "java"), "-version"]]

    def test_java_that_cannot_run(self, make_ctx, path_dir):
        make_executable(path_dir, "java")
        runner = RecordingRunner(lambda cmd: {"ok": False, "error": "Command not found: java"})
        with pytest.raises(MissingRuntime, match="could not be run"):
            read_java_version_report(make_ctx(runner=runner))

    def test_minimum_is_configurable(self, make_ctx, settings, path_dir):
        _fake_java(path_dir, 'openjdk version "17.0.9" 2023-10-17')
        ctx = make_ctx(
            settings.model_copy(update={"java_min_version": 17}), runner=run_command,
        )
        assert verify_java_runtime(ctx).major == 17


class TestCheckJavaVersion:
    def test_boundary(self):
        check_java_version(Version(major=21), 21)
        with pytest.raises(VersionTooLow):
            check_java_version(Version(major=20), 21)
