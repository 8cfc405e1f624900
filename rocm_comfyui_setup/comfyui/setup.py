"""ComfyUI checkout and user-facing follow-up"""

import shlex
from datetime import datetime

from ..pipeline import StepResult
from ..utils.logging import log_info, log_warn, log_success, log_detail
from ..utils.system import remove_path

ACTION_REMOVE = "remove"
ACTION_RENAME = "rename"
ACTION_EXIT = "exit"


def backup_name(config, now=None):
    """Directory name used when an existing checkout is renamed"""
    now = now or datetime.now()
    return f"{config.comfyui_dir}_backup_{now.strftime(config.backup_suffix_format)}"


def resolve_existing_checkout(ctx):
    """
    Deal with a ComfyUI directory left by an earlier run

    ``remove`` deletes it, ``rename`` moves it aside with a timestamp suffix.
    Any other answer ends the run without error.
    """
    log_info(f"Checking for existing {ctx.config.comfyui_dir} installation...")
    target = ctx.home / ctx.config.comfyui_dir
    ctx.comfyui_path = target

    if not target.is_dir():
        return StepResult.ok()

    log_warn(f"{ctx.config.comfyui_dir} directory already exists.")
    action = ctx.prompter.choose(
        "Do you want to remove, rename, or exit?",
        (ACTION_REMOVE, ACTION_RENAME, ACTION_EXIT),
    )

    if action == ACTION_REMOVE:
        remove_path(target)
        log_info(f"Removed {target}")
    elif action == ACTION_RENAME:
        backup = target.with_name(backup_name(ctx.config))
        target.rename(backup)
        log_info(f"Moved existing checkout to {backup}")
    else:
        return StepResult.abort("Exiting.")
    return StepResult.ok()


def clone_comfyui(ctx):
    log_info("Cloning ComfyUI...")
    target = shlex.quote(str(ctx.comfyui_path))
    ctx.runner.run(f"git clone {shlex.quote(ctx.config.comfyui_repo)} {target}")
    ctx.runner.run(f"chmod -R {ctx.config.dir_permissions} {target}")
    log_success("ComfyUI cloned successfully.")
    return StepResult.ok()


def show_post_install_instructions(ctx):
    """Print the manual steps needed before ComfyUI's first launch"""
    config = ctx.config
    comfy = config.comfyui_dir
    activate = f"source {ctx.venv_path}/bin/activate"

    log_info(f"Before running ComfyUI, please comment out the following lines in {comfy}/requirements.txt:")
    log_detail(f"- {name}" for name in config.requirements_to_skip)
    log_info(f"To edit, run: nano {comfy}/requirements.txt "
             "(add '#' before each line, save with Ctrl+O, Enter, Ctrl+X)")
    log_info(f"To install dependencies, run: {activate}; cd {comfy}; pip install -r requirements.txt")
    log_info(f"To run ComfyUI, use: {activate}; cd {comfy}; python3 main.py")
    log_info(f"Then open the provided URL (e.g., {config.comfyui_url}) in a Windows browser.")
    return StepResult.ok()


def show_summary(ctx):
    log_success(
        f"Installation complete! ComfyUI is set up in {ctx.comfyui_path}, "
        f"and venv is in {ctx.venv_path}."
    )
    log_info("Note: For the ROCm 6.4.4 preview, change the ROCm version to 6.4.4.1 "
             "in the installer configuration and update the PyTorch wheel URLs.")
    return StepResult.ok()
