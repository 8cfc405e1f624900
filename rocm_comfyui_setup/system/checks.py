"""Host checks: prerequisites, platform sanity, working directory"""

import os

from ..pipeline import StepResult
from ..utils.logging import log_info, log_warn, log_detail
from ..utils.system import get_os_info, is_wsl

PREREQUISITES = [
    "1. Windows 11 (build 22000 or higher) with WSL2 enabled ('wsl --install' in PowerShell).",
    "2. Latest AMD Adrenalin drivers (24.20.11.01 or later) installed in Windows.",
    "3. WSL Ubuntu 24.04 installed ('wsl --install -d Ubuntu-24.04' in PowerShell).",
    "4. At least 8GB RAM and sufficient GPU VRAM (8GB+ for Stable Diffusion).",
]


def _platform_warnings(config):
    """Non-fatal notes when the host does not look like WSL Ubuntu 24.04"""
    warnings = []
    expected_name, expected_version = config.supported_os

    os_info = get_os_info(config.os_release_path)
    name = os_info.get('NAME', '')
    version = os_info.get('VERSION_ID', '')
    if name != expected_name or version != expected_version:
        pretty = os_info.get('PRETTY_NAME', 'Unknown OS')
        warnings.append(
            f"Tested on {expected_name} {expected_version}, detected: {pretty}. "
            f"It may still work but has not been tested."
        )

    if not is_wsl(config.proc_version_path):
        warnings.append("This does not look like a WSL kernel; the ROCm 'wsl' usecase expects WSL2.")

    return warnings


def confirm_prerequisites(ctx):
    """Show the manual setup the installer relies on and ask to continue"""
    log_info("Checking prerequisites...")
    for warning in _platform_warnings(ctx.config):
        log_warn(warning)

    log_info("Ensure the following are set up before running this installer:")
    log_detail(PREREQUISITES)
    log_info("If not set up, exit and configure these first.")

    if not ctx.prompter.confirm("Continue?"):
        return StepResult.fatal("Exiting. Please set up prerequisites and rerun.")
    return StepResult.ok()


def ensure_home_directory(ctx):
    """Move the process into the home directory before ComfyUI handling"""
    log_info("Verifying current directory is home...")
    if os.path.realpath(ctx.cwd) != os.path.realpath(ctx.home):
        log_info("Relocating to home directory...")
        os.chdir(ctx.home)
    log_info(f"Current directory: {ctx.cwd}")
    return StepResult.ok()
