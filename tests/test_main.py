from __future__ import annotations

from pathlib import Path

import pytest

from setup_arch import main as main_mod
from setup_arch.config import ConfigError
from setup_arch.lib.command import CommandError
from setup_arch.steps import step_70_create_user


@pytest.fixture
def host(monkeypatch, recorder, tmp_path):
    """Pretend host: tar lays down a skeleton root, the runner has uid 1001."""

    def fake_tar(argv):
        if Path(argv[0]).name == "tar":
            target = Path(argv[argv.index("-C") + 1])
            (target / "etc" / "pacman.d").mkdir(parents=True, exist_ok=True)

    def fake_curl(argv):
        if Path(argv[0]).name == "curl":
            Path(argv[argv.index("-o") + 1]).write_bytes(b"\x1f\x8b")

    recorder.hooks += [fake_curl, fake_tar]
    monkeypatch.setattr(step_70_create_user, "lookup_uid", lambda name: 1001)
    return recorder


@pytest.fixture
def run_action(monkeypatch, action_env, overrides):
    def _run(**kwargs):
        monkeypatch.setattr(main_mod, "load_config_file", lambda path: dict(overrides))
        return main_mod.run(environ=action_env, config_path="setup-arch.yaml", **kwargs)

    return _run


def test_full_run(host, run_action, action_env, overrides):
    state = run_action()

    home = Path(overrides["home_root"]) / "runner"
    rootfs = home / "root.aarch64"
    tarball = Path(overrides["work_dir"]) / "ArchLinuxARM-aarch64-latest.tar.gz"
    helper = str(rootfs / "bin" / "arch-chroot")

    assert host.programs() == [
        "curl",
        "tar",
        "mount",
        "install",
        "install",
        "arch-chroot",
        "arch-chroot",
        "arch-chroot",
        "arch-chroot",
        "arch-chroot",
        "mount",
        "arch-chroot",
    ]
    assert host.calls[2] == ["mount", "-v", "--rbind", str(rootfs), str(rootfs)]
    assert host.calls[4][-1] == helper
    assert host.calls[3][-1] == str(rootfs / "bounce" / "arch.sh")
    assert host.chroot_commands() == [
        "pacman-key --init",
        "pacman-key --populate archlinuxarm",
        "sed -i 's/CheckSpace/#CheckSpace/' /etc/pacman.conf",
        "pacman -Syu --noconfirm --needed base-devel",
        "useradd -u 1001 -G wheel -s /bin/bash runner",
        "echo '%wheel ALL=(ALL) NOPASSWD: ALL' >> /etc/sudoers",
    ]
    assert host.calls[10] == ["mount", "-v", "--rbind", str(home), str(rootfs) + str(home)]

    mirrorlist = rootfs / "etc" / "pacman.d" / "mirrorlist"
    assert mirrorlist.read_text(encoding="utf-8") == "Server = http://mirror.archlinuxarm.org/$arch/$repo\n"

    assert not tarball.exists()
    assert Path(action_env["GITHUB_OUTPUT"]).read_text(encoding="utf-8") == f"root-path={rootfs}\n"
    assert Path(action_env["GITHUB_PATH"]).read_text(encoding="utf-8") == f"{rootfs / 'bounce'}\n"
    assert state["execution"]["decisions"]["uid"] == 1001
    assert state["execution"]["mounts"] == [str(rootfs), str(rootfs) + str(home)]
    assert state["execution"]["ran_steps"][-1] == "99_emit_outputs"


def test_extra_packages_in_one_invocation(host, run_action, action_env):
    action_env["INPUT_ARCH_PACKAGES"] = "git vim"

    run_action()

    installs = [c for c in host.chroot_commands() if c.startswith("pacman -Syu")]
    assert installs == [
        "pacman -Syu --noconfirm --needed base-devel",
        "pacman -Syu --noconfirm --needed git vim",
    ]


def test_download_failure_stops_everything(host, run_action, action_env, overrides):
    host.fail_on("curl", 22)

    with pytest.raises(CommandError):
        run_action()

    assert host.programs() == ["curl"]
    assert Path(action_env["GITHUB_OUTPUT"]).read_text(encoding="utf-8") == ""
    assert Path(action_env["GITHUB_PATH"]).read_text(encoding="utf-8") == ""
    assert not (Path(overrides["home_root"]) / "runner" / "root.aarch64").exists()


def test_failed_package_install_emits_no_output(host, run_action, action_env):
    action_env["INPUT_ARCH_PACKAGES"] = "no-such-package"
    host.hooks.append(lambda argv: host.fail_on("arch-chroot") if "no-such-package" in argv[-1] else None)

    with pytest.raises(CommandError):
        run_action()

    assert not any(c.startswith("useradd") for c in host.chroot_commands())
    assert Path(action_env["GITHUB_OUTPUT"]).read_text(encoding="utf-8") == ""


def test_dry_run_executes_nothing(recorder, run_action, action_env, monkeypatch):
    monkeypatch.setattr(step_70_create_user, "lookup_uid", lambda name: 1001)

    state = run_action(dry_run=True)

    assert recorder.calls == []
    assert Path(action_env["GITHUB_OUTPUT"]).read_text(encoding="utf-8") == ""
    assert len(state["execution"]["ran_steps"]) == 12


def test_missing_input_fails_before_any_command(recorder, action_env):
    del action_env["SUDO_USER"]

    with pytest.raises(ConfigError):
        main_mod.run(environ=action_env)

    assert recorder.calls == []


def test_dry_run_with_unknown_user(recorder, run_action, monkeypatch):
    def missing(name):
        raise RuntimeError(f"No such user on the host: {name}")

    monkeypatch.setattr(step_70_create_user, "lookup_uid", missing)

    state = run_action(dry_run=True)

    assert recorder.calls == []
    assert "uid" not in state["execution"].get("decisions", {})
    assert state["execution"]["ran_steps"][-1] == "99_emit_outputs"


def test_unknown_user_fails_real_run(host, run_action, monkeypatch):
    def missing(name):
        raise RuntimeError(f"No such user on the host: {name}")

    monkeypatch.setattr(step_70_create_user, "lookup_uid", missing)

    with pytest.raises(RuntimeError, match="No such user"):
        run_action()

    assert not any(c.startswith("useradd") for c in host.chroot_commands())


def test_main_dry_run_from_command_line(recorder, monkeypatch, tmp_path, overrides, clean_root_logger):
    for var in ("INPUT_ARCH_PACKAGES", "GITHUB_OUTPUT", "GITHUB_PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("INPUT_ARCH_MIRROR", "http://mirror.archlinuxarm.org")
    monkeypatch.setenv("SUDO_USER", "runner")
    monkeypatch.setattr(step_70_create_user, "lookup_uid", lambda name: 1001)

    config = tmp_path / "setup-arch.yaml"
    config.write_text(
        f"home_root: {overrides['home_root']}\nwork_dir: {overrides['work_dir']}\n",
        encoding="utf-8",
    )
    log_path = tmp_path / "logs" / "setup-arch.log"

    rc = main_mod.main(["--dry-run", "--config", str(config), "--log", str(log_path)])

    assert rc == 0
    assert recorder.calls == []
    log = log_path.read_text(encoding="utf-8")
    assert "Would run curl -sSfL" in log
    assert "useradd -u 1001 -G wheel -s /bin/bash runner" in log
