"""ROCm ComfyUI Setup - Main package

An interactive installer that provisions ROCm, a Python virtual
environment, PyTorch for ROCm and ComfyUI on WSL Ubuntu with an AMD
Radeon GPU.
"""

__version__ = "1.0.0"
__package_name__ = "rocm-comfyui-setup"
