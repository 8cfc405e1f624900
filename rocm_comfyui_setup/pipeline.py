"""Ordered step execution with explicit stop-on-first-error semantics.

Each step is a plain function ``step(ctx) -> StepResult``. The driver runs
them top to bottom: FATAL stops with exit code 1, ABORT stops with exit
code 0, WARNING is logged and the run continues.
"""

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .utils.logging import log_error, log_hint, log_step, log_warn


class StepStatus(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    FATAL = "fatal"
    ABORT = "abort"


@dataclass(frozen=True)
class StepResult:
    status: StepStatus
    message: str = ""
    hints: tuple = ()
    warnings: tuple = ()

    @classmethod
    def ok(cls, warnings=()):
        status = StepStatus.WARNING if warnings else StepStatus.SUCCESS
        return cls(status, warnings=tuple(warnings))

    @classmethod
    def fatal(cls, message, *hints):
        return cls(StepStatus.FATAL, message, hints=hints)

    @classmethod
    def abort(cls, message):
        return cls(StepStatus.ABORT, message)


@dataclass(frozen=True)
class Step:
    name: str
    title: str
    func: Callable


@dataclass
class PipelineResult:
    exit_code: int
    ran_steps: list = field(default_factory=list)
    stopped_at: Optional[str] = None
    warnings: list = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.stopped_at is None


def run_step(step, ctx):
    """Run one step, turning a failed command or filesystem error into a FATAL result"""
    try:
        return step.func(ctx)
    except subprocess.CalledProcessError as exc:
        return StepResult.fatal(str(exc))
    except OSError as exc:
        return StepResult.fatal(f"{step.title} failed: {exc}")


def run_pipeline(steps, ctx):
    """
    Run steps in order until one stops the run

    Args:
        steps: Sequence of Step
        ctx: InstallContext handed to every step

    Returns:
        PipelineResult
    """
    result = PipelineResult(exit_code=0)
    total = len(steps)

    for number, step in enumerate(steps, 1):
        log_step(f"[{number}/{total}] {step.title}")
        outcome = run_step(step, ctx)
        result.ran_steps.append(step.name)

        for warning in outcome.warnings:
            log_warn(warning)
            result.warnings.append(warning)

        if outcome.status is StepStatus.FATAL:
            log_error(outcome.message)
            for hint in outcome.hints:
                log_hint(hint)
            result.exit_code = 1
            result.stopped_at = step.name
            break

        if outcome.status is StepStatus.ABORT:
            log_warn(outcome.message)
            result.stopped_at = step.name
            break

    return result
