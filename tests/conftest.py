from dataclasses import replace
from types import SimpleNamespace

import pytest

from rocm_comfyui_setup.config import DEFAULT_CONFIG
from rocm_comfyui_setup.context import InstallContext
from rocm_comfyui_setup.utils.prompts import Prompter
from rocm_comfyui_setup.utils.system import CommandError, CommandResult, CommandRunner

ROCMINFO_CPU_ONLY = """\
*******
Agent 1
*******
  Name:                    AMD Ryzen 9 7950X 16-Core Processor
  Vendor Name:             CPU
"""

ROCMINFO_RADEON = ROCMINFO_CPU_ONLY + """\
*******
Agent 2
*******
  Name:                    gfx1100
  Marketing Name:          AMD Radeon RX 7900 XTX
  Vendor Name:             AMD
"""


class FakeRunner(CommandRunner):
    """Records commands and answers them from (fragment, returncode, stdout) rules.

    The first rule whose fragment occurs in the command wins; unmatched
    commands succeed with empty output.
    """

    def __init__(self, tools=("rocminfo",)):
        super().__init__(env={"PATH": "/usr/bin:/bin"})
        self.commands = []
        self.rules = []
        self.tools = set(tools)

    def respond(self, fragment, returncode=0, stdout=""):
        self.rules.append((fragment, returncode, stdout))
        return self

    def run(self, cmd, check=True, capture_output=False):
        self.commands.append(cmd)
        result = CommandResult(cmd, 0)
        for fragment, returncode, stdout in self.rules:
            if fragment in cmd:
                result = CommandResult(cmd, returncode, stdout)
                break
        if check and not result.ok:
            raise CommandError(result.returncode, cmd, output=result.stdout)
        return result

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.tools else None

    def ran(self, fragment):
        return any(fragment in cmd for cmd in self.commands)

    def index(self, fragment):
        return next(i for i, cmd in enumerate(self.commands) if fragment in cmd)


def scripted(*answers):
    """Prompter fed from a fixed list of answers"""
    return Prompter(read=iter(answers).__next__)


@pytest.fixture
def host(tmp_path, monkeypatch):
    """A fake WSL host laid out under tmp_path, with cwd set to its workdir"""
    workdir = tmp_path / "work"
    home = tmp_path / "home"
    opt = tmp_path / "opt"
    site_packages = tmp_path / "site-packages"
    for path in (workdir, home, opt, site_packages):
        path.mkdir()

    os_release = tmp_path / "os-release"
    os_release.write_text(
        'NAME="Ubuntu"\nVERSION_ID="24.04"\nPRETTY_NAME="Ubuntu 24.04.1 LTS"\n'
    )
    proc_version = tmp_path / "version"
    proc_version.write_text("Linux version 5.15.167.4-microsoft-standard-WSL2\n")

    lib = opt / "rocm-6.4.2" / "lib" / "libhsa-runtime64.so.1"
    lib.parent.mkdir(parents=True)
    lib.write_bytes(b"\x7fELF")

    config = replace(
        DEFAULT_CONFIG,
        rocm_lib_path=str(lib),
        rocm_lib_search_root=str(opt),
        os_release_path=str(os_release),
        proc_version_path=str(proc_version),
    )
    monkeypatch.chdir(workdir)
    return SimpleNamespace(
        config=config, workdir=workdir, home=home, opt=opt, lib=lib,
        site_packages=site_packages,
    )


@pytest.fixture
def make_ctx(host):
    def _make(*answers, runner=None, config=None):
        return InstallContext(
            config=config or host.config,
            runner=runner or FakeRunner(),
            prompter=scripted(*answers),
            workdir=host.workdir,
            home=host.home,
        )
    return _make


@pytest.fixture
def gpu_runner(host):
    """Runner describing a host where ROCm and torch work"""
    return (
        FakeRunner()
        .respond("rocminfo", stdout=ROCMINFO_RADEON)
        .respond("pip3 show torch",
                 stdout=f"Name: torch\nVersion: 2.6.0+rocm6.4.2\nLocation: {host.site_packages}\n")
        .respond("is_available", stdout="True\n")
        .respond("get_device_name", stdout="AMD Radeon RX 7900 XTX\n")
    )
