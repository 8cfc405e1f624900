"""Terminal output for the ROCm / ComfyUI installer

Every line carries a fixed-width tag so step banners, command echoes and
errors line up when the install log scrolls past in a WSL terminal.
"""


class Colors:
    """ANSI escapes used for the tags"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[1;31m'
    GREEN = '\033[1;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[1;34m'
    CYAN = '\033[1;36m'


def log_info(message):
    """Progress and command echo lines"""
    print(f"{Colors.GREEN}[INFO]  {message}{Colors.RESET}")


def log_warn(message):
    """Tolerated failures and host sanity notes; the run continues"""
    print(f"{Colors.YELLOW}[WARN]  {message}{Colors.RESET}")


def log_error(message):
    """The reason a run stopped"""
    print(f"{Colors.RED}[ERROR] {message}{Colors.RESET}")


def log_hint(message):
    """What to check after an [ERROR] (docs link, manual fix)"""
    print(f"{Colors.CYAN}[HINT]  {message}{Colors.RESET}")


def log_prompt(message):
    """Question text; the answer is typed on the same line"""
    print(f"{Colors.CYAN}[INPUT] {message}{Colors.RESET}", end='', flush=True)


def log_step(message):
    """Step banner, separated from the previous step by a blank line"""
    print(f"\n{Colors.BLUE}[STEP]  {message}{Colors.RESET}")


def log_success(message):
    """Milestones: ROCm installed, venv active, GPU visible to torch"""
    print(f"{Colors.BOLD}{Colors.GREEN}✓ {message}{Colors.RESET}")


def log_detail(lines):
    """Untagged, indented lines under the previous message (file listings, prerequisites)"""
    for line in lines:
        print(f"        {line}")
