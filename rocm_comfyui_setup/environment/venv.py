"""Virtual environment creation and pip baseline"""

import shlex

from ..pipeline import StepResult
from ..utils.logging import log_info, log_warn, log_success
from ..utils.system import remove_path


def install_venv_support(ctx):
    log_info(f"Installing {ctx.config.venv_package} for virtual environment support...")
    ctx.apt.install(ctx.config.venv_package)
    return StepResult.ok()


def prompt_venv_name(ctx):
    """Ask for the virtual environment directory name"""
    name = ctx.prompter.ask("Enter the name for the virtual environment (e.g., comfyui_venv):")
    if not name:
        return StepResult.fatal("Virtual environment name cannot be empty.")
    ctx.venv_name = name
    return StepResult.ok()


def create_venv(ctx):
    """Create the venv in the working directory and activate it.

    An existing directory is only replaced after explicit confirmation.
    """
    name = ctx.venv_name
    venv_path = ctx.workdir / name
    log_info(f"Creating and activating virtual environment: {name}...")

    if venv_path.is_dir():
        log_warn(f"Virtual environment {name} already exists.")
        if not ctx.prompter.confirm("Remove and recreate it?"):
            return StepResult.fatal(
                "Exiting. Please choose a different venv name or remove the existing one."
            )
        remove_path(venv_path)

    quoted = shlex.quote(str(venv_path))
    ctx.runner.run(f"python3 -m venv {quoted} --system-site-packages")
    ctx.runner.run(f"chmod -R {ctx.config.dir_permissions} {quoted}")
    ctx.runner.activate_venv(venv_path)
    ctx.venv_path = venv_path

    log_success(f"Virtual environment active: {venv_path}")
    return StepResult.ok()


def install_pip_baseline(ctx):
    """Install pip system-wide and upgrade pip/wheel inside the venv"""
    log_info("Installing and updating pip...")
    ctx.apt.install(ctx.config.pip_package)
    ctx.runner.run(f"pip3 install --upgrade {' '.join(ctx.config.pip_baseline)}")
    return StepResult.ok()
