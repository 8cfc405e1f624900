"""Per-run installer state shared between steps"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG, InstallConfig
from .utils.prompts import Prompter
from .utils.system import AptManager, CommandRunner


@dataclass
class InstallContext:
    """Capabilities plus the facts earlier steps hand to later ones.

    ``workdir`` is where the installer was started; downloads and the
    virtual environment land there. ``home`` is where ComfyUI is cloned.
    """

    config: InstallConfig = DEFAULT_CONFIG
    runner: CommandRunner = field(default_factory=CommandRunner)
    prompter: Prompter = field(default_factory=Prompter)
    workdir: Path = field(default_factory=Path.cwd)
    home: Path = field(default_factory=Path.home)

    rocm_lib_path: Optional[str] = None
    venv_name: Optional[str] = None
    venv_path: Optional[Path] = None
    comfyui_path: Optional[Path] = None
    gpu_name: Optional[str] = None

    def __post_init__(self):
        self.apt = AptManager(self.runner)

    @property
    def cwd(self) -> Path:
        return Path(os.getcwd())
