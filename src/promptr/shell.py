"""Identification of the invoking shell and its initialization code"""

from __future__ import annotations
from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
import shlex

BASH_PROMPT_FUNC = """\
PROMPT_COMMAND=promptr_prompt
promptr_prompt() {{
    PS1="$(hostname=$HOSTNAME code=$? uid=$UID jobs=$(jobs -p | wc -l) dirs="$(dirs -p)" {promptr} prompt)"
}}
"""

BASH_INIT = """\
if [[ $- == *i* ]]; then
    promptr_conf_dir="$({promptr} location)"
    promptr_conf_file="${{promptr_conf_dir}}/promptr.json"

    if [ ! -f "${{promptr_conf_file}}" ]; then
        echo "Saving default configuration to ${{promptr_conf_file}}"
        {promptr} default-config > "${{promptr_conf_file}}"
    else
        echo "Found an existing configuration at ${{promptr_conf_file}}"
    fi

    unset promptr_conf_dir
    unset promptr_conf_file

{prompt_func}\
else
    echo "*** promptr must be run from an interactive shell ***"
fi
"""

BASH_LOAD = """\
if [[ $- == *i* ]]; then
{prompt_func}\
fi
"""


class Shell(Enum):
    """The shells that promptr can generate a prompt for"""

    BASH = "bash"

    @classmethod
    def detect(cls, env: Mapping[str, str]) -> Shell:
        """
        Determine the current shell from ``$PROMPTR_SHELL`` or, failing
        that, ``$SHELL``

        :raises ValueError: if the shell is unknown or unsupported
        """
        shell = env.get("PROMPTR_SHELL") or env.get("SHELL")
        if not shell:
            raise ValueError("Could not determine the current shell")
        try:
            return cls(PurePath(shell).name)
        except ValueError:
            raise ValueError(f"Unsupported shell: {shell}") from None

    def init_script(self, self_exe: str) -> str:
        """
        Shell code that installs the prompt, saving a default configuration
        file first if there isn't one yet.  Intended to be run as ``source
        <(promptr init)``.
        """
        return BASH_INIT.format(
            promptr=shlex.quote(self_exe),
            prompt_func=self._prompt_func(self_exe),
        )

    def load_script(self, self_exe: str) -> str:
        """Like `init_script()`, but without touching the configuration file"""
        return BASH_LOAD.format(prompt_func=self._prompt_func(self_exe))

    def _prompt_func(self, self_exe: str) -> str:
        func = BASH_PROMPT_FUNC.format(promptr=shlex.quote(self_exe))
        return "".join("    " + line + "\n" for line in func.splitlines())
