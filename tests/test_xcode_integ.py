"""Tests for cargo_lipo_tooling.xcode.integ (dispatch, build+copy, copy_file)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cargo_lipo_tooling.errors import LipoError, XcodeEnvError
from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.metadata.resolve import ResolvedUnit
from cargo_lipo_tooling.xcode.integ import copy_file, dispatch, integ

UNIT = ResolvedUnit("my-lib", "my_lib")


def _xcode_env(tmp_path: Path, **overrides: str) -> dict[str, str]:
    env = {
        "ACTION": "build",
        "ARCHS": "arm64 x86_64",
        "PLATFORM_NAME": "iphonesimulator",
        "CONFIGURATION": "Debug",
        "BUILT_PRODUCTS_DIR": str(tmp_path / "Products"),
        "EXECUTABLE_PATH": "libmy_lib.a",
        "IPHONEOS_DEPLOYMENT_TARGET": "13.0",
        "SDKROOT": "/sdk",
        "PATH": "/usr/bin",
    }
    env.update(overrides)
    return env


def _fake_run(calls: list[tuple[list[str], dict]]):
    """subprocess.run stand-in: records calls; lipo writes its -output file."""

    def run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if cmd[0] == "lipo":
            Path(cmd[3]).write_bytes(b"universal")
        return MagicMock(returncode=0, stdout="", stderr="")

    return run


class TestDispatch:
    def test_build_and_install_execute(self) -> None:
        assert dispatch({"ACTION": "build"}) is True
        assert dispatch({"ACTION": "install"}) is True

    def test_other_actions_are_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING"):
            assert dispatch({"ACTION": "clean"}) is False
        assert "Unsupported Xcode action: 'clean'" in caplog.text

    def test_ignored_action_is_only_logged(
        self, caplog: pytest.LogCaptureFixture, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with caplog.at_level("WARNING"):
            dispatch({"ACTION": "analyze"})
        assert caplog.text.count("Unsupported Xcode action") == 1
        assert capsys.readouterr().out == ""

    def test_missing_action_is_fatal(self) -> None:
        with pytest.raises(XcodeEnvError):
            dispatch({})


class TestInteg:
    def test_builds_merges_and_copies(self, tmp_path: Path) -> None:
        target_root = tmp_path / "target"
        env = _xcode_env(tmp_path)
        calls: list = []
        inv = Invocation(xcode_integ=True)
        with patch("subprocess.run", side_effect=_fake_run(calls)):
            dest = integ(UNIT, target_root, inv, env)
        assert dest == tmp_path / "Products" / "libmy_lib.a"
        assert dest.read_bytes() == b"universal"
        cargo_calls = [c for c in calls if c[0][1] == "build"]
        assert [c[0][3] for c in cargo_calls] == ["aarch64-apple-ios", "x86_64-apple-ios"]
        for _, kwargs in cargo_calls:
            assert "SDKROOT" not in kwargs["env"]
            assert "IPHONEOS_DEPLOYMENT_TARGET" not in kwargs["env"]
            assert kwargs["env"]["PATH"] == "/usr/bin"
        lipo_out = Path(calls[-1][0][3])
        assert lipo_out == target_root / "aarch64-apple-ios|x86_64-apple-ios" / "debug" / "my_lib"

    def test_release_configuration_upgrades_profile(self, tmp_path: Path) -> None:
        target_root = tmp_path / "target"
        env = _xcode_env(tmp_path, CONFIGURATION="Release", ARCHS="arm64")
        src = target_root / "aarch64-apple-ios" / "release" / "my_lib"
        src.parent.mkdir(parents=True)
        src.write_bytes(b"thin")
        calls: list = []
        with patch("subprocess.run", side_effect=_fake_run(calls)):
            dest = integ(UNIT, target_root, Invocation(xcode_integ=True), env)
        assert len(calls) == 1
        assert "--release" in calls[0][0]
        assert dest.read_bytes() == b"thin"

    def test_unsupported_action_does_nothing(self, tmp_path: Path) -> None:
        env = _xcode_env(tmp_path, ACTION="clean")
        with patch("subprocess.run") as m_run:
            assert integ(UNIT, tmp_path / "target", Invocation(xcode_integ=True), env) is None
        assert not m_run.called
        assert not (tmp_path / "Products").exists()

    def test_unknown_arch_fails_before_building(self, tmp_path: Path) -> None:
        env = _xcode_env(tmp_path, ARCHS="arm64 mips")
        with patch("subprocess.run") as m_run:
            with pytest.raises(XcodeEnvError, match="mips"):
                integ(UNIT, tmp_path / "target", Invocation(xcode_integ=True), env)
        assert not m_run.called


class TestCopyFile:
    def test_creates_missing_parent_dirs(self, tmp_path: Path) -> None:
        src = tmp_path / "src.a"
        src.write_bytes(b"data")
        dest = tmp_path / "a" / "b" / "c" / "lib.a"
        copy_file(src, dest)
        assert dest.read_bytes() == b"data"

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        src = tmp_path / "src.a"
        src.write_bytes(b"new")
        dest = tmp_path / "out" / "lib.a"
        dest.parent.mkdir()
        dest.write_bytes(b"old contents that are longer")
        copy_file(src, dest)
        assert dest.read_bytes() == b"new"
        assert sorted(p.name for p in dest.parent.iterdir()) == ["lib.a"]

    def test_failed_copy_leaves_no_stale_destination(self, tmp_path: Path) -> None:
        dest = tmp_path / "out" / "lib.a"
        dest.parent.mkdir()
        dest.write_bytes(b"stale")
        with pytest.raises(LipoError, match="Failed to copy"):
            copy_file(tmp_path / "missing.a", dest)
        assert not dest.exists()
        assert list(dest.parent.iterdir()) == []

    def test_keeps_executable_bit(self, tmp_path: Path) -> None:
        src = tmp_path / "tool"
        src.write_bytes(b"\x7fELF")
        src.chmod(0o755)
        dest = tmp_path / "bin" / "tool"
        copy_file(src, dest)
        assert dest.stat().st_mode & 0o111
