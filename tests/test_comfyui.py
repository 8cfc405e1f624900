import os
import re
from datetime import datetime

from rocm_comfyui_setup.comfyui.setup import (
    backup_name,
    clone_comfyui,
    resolve_existing_checkout,
    show_post_install_instructions,
)
from rocm_comfyui_setup.pipeline import StepStatus
from rocm_comfyui_setup.system.checks import ensure_home_directory
from conftest import FakeRunner


def test_moves_to_home(host, make_ctx):
    ensure_home_directory(make_ctx())
    assert os.getcwd() == str(host.home)


def test_backup_name_has_timestamp(host):
    assert backup_name(host.config, datetime(2025, 10, 3, 14, 5, 9)) == "ComfyUI_backup_2025-10-03_140509"


def test_no_existing_checkout(host, make_ctx):
    ctx = make_ctx()
    assert resolve_existing_checkout(ctx).status is StepStatus.SUCCESS
    assert ctx.comfyui_path == host.home / "ComfyUI"


def test_existing_checkout_removed(host, make_ctx):
    (host.home / "ComfyUI" / "models").mkdir(parents=True)

    assert resolve_existing_checkout(make_ctx("remove")).status is StepStatus.SUCCESS
    assert not (host.home / "ComfyUI").exists()


def test_existing_checkout_renamed(host, make_ctx):
    (host.home / "ComfyUI").mkdir()
    (host.home / "ComfyUI" / "main.py").write_text("")

    assert resolve_existing_checkout(make_ctx("rename")).status is StepStatus.SUCCESS

    backups = [p.name for p in host.home.iterdir()]
    assert "ComfyUI" not in backups
    assert len(backups) == 1
    assert re.fullmatch(r"ComfyUI_backup_\d{4}-\d{2}-\d{2}_\d{6}", backups[0])
    assert (host.home / backups[0] / "main.py").exists()


def test_existing_checkout_exit_aborts_cleanly(host, make_ctx):
    (host.home / "ComfyUI").mkdir()

    result = resolve_existing_checkout(make_ctx("exit"))

    assert result.status is StepStatus.ABORT
    assert (host.home / "ComfyUI").exists()


def test_unknown_answer_aborts(host, make_ctx):
    (host.home / "ComfyUI").mkdir()
    assert resolve_existing_checkout(make_ctx("keep")).status is StepStatus.ABORT


def test_clone(host, make_ctx):
    runner = FakeRunner()
    ctx = make_ctx(runner=runner)
    ctx.comfyui_path = host.home / "ComfyUI"

    clone_comfyui(ctx)

    assert runner.commands == [
        f"git clone https://github.com/comfyanonymous/ComfyUI.git {host.home / 'ComfyUI'}",
        f"chmod -R 755 {host.home / 'ComfyUI'}",
    ]


def test_instructions_mention_venv_and_url(host, make_ctx, capsys):
    ctx = make_ctx()
    ctx.venv_path = host.workdir / "comfyui_venv"

    show_post_install_instructions(ctx)

    out = capsys.readouterr().out
    assert f"source {ctx.venv_path}/bin/activate" in out
    assert "ComfyUI/requirements.txt" in out
    assert "http://127.0.0.1:8188" in out
    for name in ("torch", "torchaudio", "torchvision"):
        assert f"- {name}" in out


def test_symlinked_checkout_removed_without_touching_target(host, make_ctx, tmp_path):
    windows_copy = tmp_path / "mnt" / "d" / "ComfyUI"
    (windows_copy / "models").mkdir(parents=True)
    (host.home / "ComfyUI").symlink_to(windows_copy, target_is_directory=True)

    assert resolve_existing_checkout(make_ctx("remove")).status is StepStatus.SUCCESS
    assert not os.path.lexists(host.home / "ComfyUI")
    assert (windows_copy / "models").is_dir()


def test_plain_file_named_like_checkout_is_not_a_conflict(host, make_ctx):
    (host.home / "ComfyUI").write_text("")
    assert resolve_existing_checkout(make_ctx()).status is StepStatus.SUCCESS
