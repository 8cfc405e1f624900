"""System utilities for command execution, package management and file lookup"""

import fnmatch
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass

from .logging import log_info, log_error


class CommandError(subprocess.CalledProcessError):
    """A checked command exited non-zero"""

    def __str__(self):
        return f"Command failed with exit code {self.returncode}: {self.cmd}"


@dataclass(frozen=True)
class CommandResult:
    cmd: str
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs shell commands for the installer.

    Holds the environment every command inherits, so activating a virtual
    environment once affects all later ``pip3``/``python3`` invocations.
    """

    def __init__(self, env=None):
        self.env = dict(os.environ if env is None else env)

    def run(self, cmd, check=True, capture_output=False):
        """
        Execute a shell command with logging

        Args:
            cmd: Shell command string
            check: Raise CommandError on a non-zero exit status
            capture_output: Capture stdout/stderr instead of streaming them

        Returns:
            CommandResult
        """
        log_info(f"Running: {cmd}")

        if capture_output:
            proc = subprocess.run(cmd, shell=True, env=self.env,
                                  capture_output=True, text=True)
            result = CommandResult(cmd, proc.returncode,
                                   proc.stdout or "", proc.stderr or "")
        else:
            proc = subprocess.run(cmd, shell=True, env=self.env)
            result = CommandResult(cmd, proc.returncode)

        if not result.ok and check:
            log_error(f"Command failed: {cmd}")
            raise CommandError(result.returncode, cmd,
                               output=result.stdout, stderr=result.stderr)
        return result

    def which(self, name):
        """Resolve a command on this runner's PATH, or None"""
        return shutil.which(name, path=self.env.get("PATH"))

    def activate_venv(self, venv_path):
        """Make ``venv_path`` the active virtual environment for later commands"""
        venv_path = str(venv_path)
        self.env["VIRTUAL_ENV"] = venv_path
        self.env["PATH"] = os.pathsep.join(
            [os.path.join(venv_path, "bin"), self.env.get("PATH", "")]
        )
        self.env.pop("PYTHONHOME", None)


class AptManager:
    """Manages apt operations through sudo with update caching"""

    def __init__(self, runner):
        self.runner = runner
        self._update_done = False

    def update(self):
        """Refresh the package index if not already done this run"""
        if not self._update_done:
            self.runner.run("sudo apt update")
            self._update_done = True

    def install(self, *packages):
        """Install packages (names or local ./file.deb paths)"""
        package_list = ' '.join(shlex.quote(p) for p in packages)
        self.runner.run(f"sudo apt install -y {package_list}")

    def autoremove(self):
        """Remove packages that are no longer needed"""
        self.runner.run("sudo apt autoremove -y")


def download_file(runner, url, dest):
    """
    Download ``url`` to ``dest`` with wget

    ``wget -O`` creates ``dest`` before the transfer starts, so a failed
    download is removed again to keep a rerun from mistaking it for a
    finished one.
    """
    try:
        runner.run(f"wget -O {shlex.quote(str(dest))} {shlex.quote(url)}")
    except CommandError:
        if os.path.lexists(dest):
            os.remove(dest)
        raise


def is_complete_file(path):
    """True for an existing, non-empty regular file"""
    return os.path.isfile(path) and os.path.getsize(path) > 0


def remove_path(path):
    """Remove a directory tree, or just the link/file if ``path`` is not a real directory"""
    if os.path.islink(path) or not os.path.isdir(path):
        os.remove(path)
    else:
        shutil.rmtree(path)


def find_files(root, pattern):
    """
    Best-effort recursive search for regular files

    Unreadable directories are skipped silently.

    Args:
        root: Directory to walk
        pattern: fnmatch pattern matched against the file name

    Returns:
        list[str]: Matching paths in walk order
    """
    matches: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=lambda _err: None):
        dirnames.sort()
        for name in sorted(filenames):
            if fnmatch.fnmatch(name, pattern):
                path = os.path.join(dirpath, name)
                if os.path.isfile(path):
                    matches.append(path)
    return matches


def get_os_info(path="/etc/os-release"):
    """Parse an os-release file into a dict (empty if unreadable)"""
    info = {}
    try:
        with open(path, "r") as fh:
            for line in fh:
                line = line.strip()
                if "=" in line and not line.startswith("#"):
                    key, value = line.split("=", 1)
                    info[key] = value.strip('"')
    except OSError:
        pass
    return info


def is_wsl(proc_version_path="/proc/version"):
    """Return True if the kernel identifies itself as a WSL kernel"""
    try:
        with open(proc_version_path, "r") as fh:
            return "microsoft" in fh.read().lower()
    except OSError:
        return False
