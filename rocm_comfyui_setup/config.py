"""Installer configuration.

Defaults describe the tested combination: ROCm 6.4.2.1, PyTorch 2.6.0,
Ubuntu 24.04 (noble) under WSL2, Python 3.12.
"""

from dataclasses import dataclass
from urllib.parse import unquote

_WHEEL_BASE_URL = "https://repo.radeon.com/rocm/manylinux/rocm-rel-6.4.2/"

# Order matters only for logging; pip receives all four in one call.
_TORCH_WHEELS = (
    "torch-2.6.0%2Brocm6.4.2.git76481f7c-cp312-cp312-linux_x86_64.whl",
    "torchvision-0.21.0%2Brocm6.4.2.git4040d51f-cp312-cp312-linux_x86_64.whl",
    "pytorch_triton_rocm-3.2.0%2Brocm6.4.2.git7e948ebf-cp312-cp312-linux_x86_64.whl",
    "torchaudio-2.6.0%2Brocm6.4.2.gitd8831425-cp312-cp312-linux_x86_64.whl",
)


@dataclass(frozen=True)
class InstallConfig:
    # ROCm driver stack
    rocm_version: str = "6.4.2.1"
    rocm_deb: str = "amdgpu-install_6.4.60402-1_all.deb"
    rocm_url_template: str = (
        "https://repo.radeon.com/amdgpu-install/{version}/ubuntu/noble/{deb}"
    )
    amdgpu_usecases: str = "wsl,rocm"
    rocm_doc_url: str = (
        "https://rocm.docs.amd.com/projects/radeon/en/latest/docs/install/"
        "installrad/wsl/install-wsl.html"
    )

    # Verification
    diagnostic_tool: str = "rocminfo"
    gpu_name_pattern: str = r"Name:.*Radeon"
    rocm_lib_name: str = "libhsa-runtime64.so.1"
    rocm_lib_path: str = "/opt/rocm-6.4.2/lib/libhsa-runtime64.so.1"
    rocm_lib_search_root: str = "/opt"
    rocm_lib_permissions: str = "644"

    # Python environment
    venv_package: str = "python3.12-venv"
    pip_package: str = "python3-pip"
    pip_baseline: tuple = ("pip", "wheel")
    dir_permissions: str = "755"

    # PyTorch
    wheel_base_url: str = _WHEEL_BASE_URL
    torch_wheels: tuple = _TORCH_WHEELS
    torch_packages: tuple = ("torch", "torchvision", "pytorch-triton-rocm", "torchaudio")

    # ComfyUI
    comfyui_repo: str = "https://github.com/comfyanonymous/ComfyUI.git"
    comfyui_dir: str = "ComfyUI"
    comfyui_url: str = "http://127.0.0.1:8188"
    backup_suffix_format: str = "%Y-%m-%d_%H%M%S"
    requirements_to_skip: tuple = ("torch", "torchaudio", "torchvision")

    # Host probes
    supported_os: tuple = ("Ubuntu", "24.04")
    os_release_path: str = "/etc/os-release"
    proc_version_path: str = "/proc/version"

    @property
    def rocm_url(self) -> str:
        return self.rocm_url_template.format(version=self.rocm_version, deb=self.rocm_deb)

    @property
    def wheel_urls(self) -> list[str]:
        return [self.wheel_base_url + name for name in self.torch_wheels]

    @property
    def wheel_files(self) -> list[str]:
        """Local file names wget produces for each wheel URL"""
        return [unquote(name) for name in self.torch_wheels]


DEFAULT_CONFIG = InstallConfig()
