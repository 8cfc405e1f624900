"""ROCm + ComfyUI Setup - Command Line Interface

Entry point for the rocm-comfyui-setup command and python3 -m rocm_comfyui_setup.
Provisions ROCm, a virtual environment, PyTorch for ROCm and ComfyUI on
WSL Ubuntu 24.04 with an AMD Radeon GPU.
"""

import sys
import traceback

from rocm_comfyui_setup.context import InstallContext
from rocm_comfyui_setup.pipeline import Step, run_pipeline
from rocm_comfyui_setup.utils.logging import log_error, log_info
from rocm_comfyui_setup.system.checks import confirm_prerequisites, ensure_home_directory
from rocm_comfyui_setup.rocm.driver import install_rocm, verify_rocm, verify_runtime_library
from rocm_comfyui_setup.rocm.pytorch import (
    install_pytorch_wheels,
    reconcile_runtime_library,
    verify_torch_gpu,
)
from rocm_comfyui_setup.environment.venv import (
    install_venv_support,
    prompt_venv_name,
    create_venv,
    install_pip_baseline,
)
from rocm_comfyui_setup.comfyui.setup import (
    resolve_existing_checkout,
    clone_comfyui,
    show_post_install_instructions,
    show_summary,
)


def build_steps() -> list[Step]:
    """The installer's steps in execution order."""
    return [
        Step("prerequisites", "Verify prerequisites", confirm_prerequisites),
        Step("install_rocm", "Install ROCm", install_rocm),
        Step("verify_rocm", "Verify ROCm installation", verify_rocm),
        Step("runtime_library", "Verify ROCm runtime library", verify_runtime_library),
        Step("venv_support", "Install python3-venv", install_venv_support),
        Step("venv_name", "Choose virtual environment name", prompt_venv_name),
        Step("create_venv", "Create and activate virtual environment", create_venv),
        Step("pip_baseline", "Install and update pip", install_pip_baseline),
        Step("pytorch", "Install PyTorch wheels", install_pytorch_wheels),
        Step("reconcile_runtime", "Update runtime library", reconcile_runtime_library),
        Step("home_directory", "Verify home directory", ensure_home_directory),
        Step("existing_comfyui", "Check for existing ComfyUI", resolve_existing_checkout),
        Step("clone_comfyui", "Clone ComfyUI", clone_comfyui),
        Step("instructions", "Post-install instructions", show_post_install_instructions),
        Step("verify_torch", "Verify PyTorch and GPU access", verify_torch_gpu),
        Step("summary", "Finish", show_summary),
    ]


def show_banner() -> None:
    """Display application banner."""
    banner = """
╔══════════════════════════════════════════════════════════════╗
║            ROCm + ComfyUI Setup for WSL                      ║
║       AMD Radeon GPU acceleration for Stable Diffusion       ║
╚══════════════════════════════════════════════════════════════╝
"""
    print(banner)


def run(ctx: InstallContext) -> int:
    """Run every step against ``ctx`` and return the process exit code."""
    log_info("Starting ROCm and ComfyUI installation on WSL...")
    result = run_pipeline(build_steps(), ctx)
    return result.exit_code


def main() -> None:
    """Main installation process."""
    try:
        show_banner()
        sys.exit(run(InstallContext()))
    except KeyboardInterrupt:
        print()
        log_info("Cancelled.")
        sys.exit(1)
    except Exception as e:
        log_error(f"Installation failed: {str(e)}")
        log_error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)


if __name__ == "__main__":
    main()
