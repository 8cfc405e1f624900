"""PyTorch for ROCm: wheel install, bundled runtime cleanup, GPU check"""

import glob
import os
import shlex

from ..pipeline import StepResult
from ..utils.logging import log_info, log_success
from ..utils.system import download_file

_CUDA_AVAILABLE_CHECK = "import torch; print(torch.cuda.is_available())"
_DEVICE_NAME_CHECK = "import torch; print(torch.cuda.get_device_name(0))"


def install_pytorch_wheels(ctx):
    """Download the ROCm wheels, replace any installed torch packages, clean up.

    The four wheels are installed in a single pip call so their
    cross-dependencies resolve against the local files.
    """
    config = ctx.config
    log_info("Installing PyTorch wheels...")

    wheel_paths = [ctx.workdir / name for name in config.wheel_files]
    for url, path in zip(config.wheel_urls, wheel_paths):
        download_file(ctx.runner, url, path)

    warnings = []
    uninstall = ctx.runner.run(
        f"pip3 uninstall -y {' '.join(config.torch_packages)}", check=False
    )
    if not uninstall.ok:
        warnings.append("pip3 uninstall reported an error (packages may not have been installed)")

    quoted = ' '.join(shlex.quote(str(p)) for p in wheel_paths)
    ctx.runner.run(f"pip3 install {quoted}")

    for path in wheel_paths:
        if path.exists():
            path.unlink()

    log_success("PyTorch installation complete.")
    return StepResult.ok(warnings=warnings)


def get_package_location(runner, package):
    """Return the ``Location:`` field of ``pip3 show``, or None"""
    result = runner.run(f"pip3 show {package}", check=False, capture_output=True)
    for line in result.stdout.splitlines():
        if line.startswith("Location:"):
            location = line.split(":", 1)[1].strip()
            return location or None
    return None


def reconcile_runtime_library(ctx):
    """Remove the HSA runtime bundled in torch/lib so the system ROCm copy loads"""
    log_info("Updating runtime library...")

    location = get_package_location(ctx.runner, "torch")
    if not location:
        return StepResult.fatal("Could not locate PyTorch installation.")

    lib_dir = os.path.join(location, "torch", "lib")
    bundled = sorted(glob.glob(os.path.join(lib_dir, "libhsa-runtime64.so*")))
    if not bundled:
        log_info("No libhsa-runtime64.so files found to remove.")
        return StepResult.ok()

    warnings = []
    for path in bundled:
        try:
            os.remove(path)
            log_info(f"Removed bundled {path}")
        except OSError as e:
            warnings.append(f"Could not remove {path}: {e}")
    return StepResult.ok(warnings=warnings)


def verify_torch_gpu(ctx):
    """Import torch inside the venv and confirm it can see the GPU"""
    log_info("Verifying PyTorch and GPU access...")

    check = ctx.runner.run(
        f"python3 -c {shlex.quote(_CUDA_AVAILABLE_CHECK)}", check=False, capture_output=True
    )
    available = check.stdout.strip()
    if available != "True":
        return StepResult.fatal("PyTorch GPU access failed. Check ROCm/GPU setup.")

    log_success(f"PyTorch GPU access verified: {available}")
    name = ctx.runner.run(
        f"python3 -c {shlex.quote(_DEVICE_NAME_CHECK)}", check=False, capture_output=True
    )
    ctx.gpu_name = name.stdout.strip()
    log_info(f"GPU detected: {ctx.gpu_name}")
    return StepResult.ok()
