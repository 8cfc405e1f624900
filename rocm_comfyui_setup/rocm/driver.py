"""ROCm driver stack installation and verification"""

import os
import re
import shlex

from ..pipeline import StepResult
from ..utils.logging import log_info, log_success, log_detail
from ..utils.system import download_file, find_files, is_complete_file


def install_rocm(ctx):
    """Install ROCm through the amdgpu-install package.

    The installer package is only downloaded when it is not already in the
    working directory (an empty leftover counts as missing), and is removed
    once amdgpu-install has run. A failed install leaves the package behind so
    a rerun skips the download; a failed removal is only a warning.
    """
    config = ctx.config
    log_info(f"Installing ROCm {config.rocm_version}...")

    ctx.apt.update()
    ctx.apt.autoremove()

    deb_path = ctx.workdir / config.rocm_deb
    if is_complete_file(deb_path):
        log_info(f"Using existing {config.rocm_deb}")
    else:
        download_file(ctx.runner, config.rocm_url, deb_path)

    ctx.apt.install(str(deb_path))
    ctx.runner.run(f"amdgpu-install -y --usecase={config.amdgpu_usecases} --no-dkms")

    warnings = []
    cleanup = ctx.runner.run(f"rm -f {shlex.quote(str(deb_path))}", check=False)
    if not cleanup.ok:
        warnings.append(f"Could not remove {deb_path}")

    log_success("ROCm installation complete.")
    return StepResult.ok(warnings=warnings)


def verify_rocm(ctx):
    """Check the diagnostic tool exists and reports an AMD GPU"""
    config = ctx.config
    tool = config.diagnostic_tool
    log_info("Verifying ROCm installation...")

    if not ctx.runner.which(tool):
        return StepResult.fatal(
            f"{tool} not found. ROCm installation failed.",
            f"Check {config.rocm_doc_url}",
        )

    output = ctx.runner.run(tool, check=False, capture_output=True).stdout
    if not re.search(config.gpu_name_pattern, output):
        return StepResult.fatal(
            f"No AMD GPU detected by {tool}. Ensure GPU drivers are installed in Windows.",
            f"Check {config.rocm_doc_url}",
        )

    log_success("ROCm verified. GPU detected.")
    return StepResult.ok()


def locate_runtime_library(config):
    """
    Find the ROCm HSA runtime library

    Returns:
        str: Configured path if it exists, else the first match under the
        search root, else None
    """
    if os.path.isfile(config.rocm_lib_path):
        return config.rocm_lib_path

    matches = find_files(config.rocm_lib_search_root, config.rocm_lib_name)
    return matches[0] if matches else None


def verify_runtime_library(ctx):
    """Locate the HSA runtime library and make it world-readable"""
    config = ctx.config
    log_info(f"Verifying ROCm library at {config.rocm_lib_path}...")

    if not os.path.isfile(config.rocm_lib_path):
        log_info(f"{config.rocm_lib_path} not found. Attempting to find alternative path...")

    lib_path = locate_runtime_library(config)
    if lib_path is None:
        near = find_files(config.rocm_lib_search_root, "*hsa-runtime64.so*")
        log_info("Found paths:")
        log_detail(near or ["No matching files found."])
        return StepResult.fatal(
            f"{config.rocm_lib_name} not found in {config.rocm_lib_search_root}.",
            "Please check ROCm installation or manually specify the path.",
        )

    ctx.rocm_lib_path = lib_path
    log_info(f"Found ROCm library: {lib_path}")

    result = ctx.runner.run(
        f"sudo chmod {config.rocm_lib_permissions} {shlex.quote(lib_path)}", check=False
    )
    if not result.ok:
        return StepResult.ok(warnings=[f"Could not set permissions on {lib_path}"])
    return StepResult.ok()
