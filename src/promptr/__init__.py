"""
Colorful, segmented command prompts for Bash

``promptr`` generates a Powerline-style prompt made of colored segments:
username, hostname, path breadcrumbs, Git status, battery, GNU Screen, RVM,
and the last command's exit status.  Which segments appear, in what order,
and in what colors is controlled by a JSON configuration file; see
`promptr.config`.

Installation:

1. ``pip install promptr``
2. Add ``source <(promptr init)`` to the end of your ``~/.bashrc``
3. Open a new shell

The prompt uses glyphs from the Powerline private-use range, so your terminal
font needs to include them.
"""

__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"
__url__ = "https://github.com/inferiorhumanorgans/promptr"
