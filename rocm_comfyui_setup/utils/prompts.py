"""Interactive prompt utilities

Prompts are read through a ``Prompter`` so callers (and tests) can swap the
terminal for a scripted source of answers.
"""

import re

from .logging import log_prompt

_YES_RE = re.compile(r'^[Yy]$')


class Prompter:
    """Blocking prompts against the controlling terminal.

    Args:
        read: Zero-argument callable returning one line of user input.
            Defaults to ``input``.
    """

    def __init__(self, read=None):
        self._read = read or input

    def _ask(self, prompt):
        log_prompt(f"{prompt} ")
        return self._read().strip()

    def confirm(self, prompt):
        """
        Strict y/N confirmation

        Only a single ``y`` or ``Y`` counts as yes. Empty input, ``yes`` and
        anything else count as no.

        Returns:
            bool: True if confirmed
        """
        return bool(_YES_RE.match(self._ask(f"{prompt} (y/N):")))

    def ask(self, prompt):
        """
        Free-text prompt

        Returns:
            str: Response with surrounding whitespace removed (may be empty)
        """
        return self._ask(prompt)

    def choose(self, prompt, choices):
        """
        Keyword choice prompt

        Args:
            prompt: Question to ask
            choices: Accepted keywords, shown as ``(a/b/c)``

        Returns:
            str: The matching keyword, or None if the response matched none
        """
        response = self._ask(f"{prompt} ({'/'.join(choices)}):")
        return response if response in choices else None
