"""
The ``git`` segment summarizes the state of the Git repository containing the
current directory.  It produces the following segments, in order, each of
which is omitted when there's nothing to report:

- the current branch, colored by whether the working tree is dirty
- the number of commits ahead of & behind the upstream branch
- the operation in progress (merge, rebase, etc.), if any
- the numbers of staged, changed, untracked, and conflicted files
- the number of stash entries

Repository information is obtained by running ``git``; the approach is based
on a combination of Git's `git-prompt.sh`__ and magicmonty's
bash-git-prompt__.

__ https://github.com/git/git/blob/master/contrib/completion/git-prompt.sh
__ https://github.com/magicmonty/bash-git-prompt/blob/master/gitstatus.py
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
import subprocess
from typing import TYPE_CHECKING
from . import Provider, Segment, SegmentError
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel
from ..util import read_counter

if TYPE_CHECKING:
    from ..state import ApplicationState

log = logging.getLogger(__name__)

#: `git status --porcelain` codes for unmerged paths
UNMERGED = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

#: Placeholder shown instead of a branch name when there is no current branch
NO_BRANCH = "HEAD (no branch)"


class GitError(SegmentError):
    """Raised when a Git command fails"""


class Args(StrictModel):
    #: Show the number of stash entries
    show_stash: bool = True

    #: Show when a merge is in progress
    show_merge: bool = True

    #: Show when a revert is in progress
    show_revert: bool = True

    #: Show when a cherry-pick is in progress
    show_cherry_pick: bool = True

    #: Show when a bisection is in progress
    show_bisect: bool = True

    #: Show when a rebase (or ``git am``) is in progress
    show_rebase: bool = True


class Symbols(StrictModel):
    ahead: str = "⬆"
    behind: str = "⬇"
    staged: str = "✔"
    changed: str = "✎"
    new: str = "?"
    conflicted: str = "✼"
    stash: str = "⎘"

    #: Shown before the placeholder when there is no current branch
    detached: str = "\u2693"

    #: Badge shown before the branch name
    git: str = "\ue0a0"

    merge: str = "merge"
    revert: str = "revert"
    cherry_pick: str = "cherry pick"
    bisect: str = "bisect"
    rebase: str = "rebase"
    rebase_merge: str = "rebase"
    rebase_interactive: str = "int rebase"
    apply_mailbox: str = "am"


class Theme(StrictModel):
    git_ahead_fg: Color = Numbered(250)
    git_ahead_bg: Color = Numbered(240)

    git_behind_fg: Color = Numbered(250)
    git_behind_bg: Color = Numbered(240)

    git_staged_fg: Color = Numbered(15)
    git_staged_bg: Color = Numbered(22)

    git_changed_fg: Color = Numbered(15)
    git_changed_bg: Color = Numbered(130)

    git_untracked_fg: Color = Numbered(15)
    git_untracked_bg: Color = Numbered(52)

    git_conflict_fg: Color = Numbered(15)
    git_conflict_bg: Color = Numbered(9)

    git_in_progress_fg: Color = Numbered(15)
    git_in_progress_bg: Color = Numbered(208)

    git_stashed_fg: Color = Numbered(0)
    git_stashed_bg: Color = Numbered(221)

    repo_clean_fg: Color = Numbered(0)
    repo_clean_bg: Color = Numbered(148)

    repo_dirty_fg: Color = Numbered(15)
    repo_dirty_bg: Color = Numbered(161)

    symbols: Symbols = Symbols()


class GitState(Enum):
    """
    The various "in progress" states that a Git repository can be in
    """

    REBASE_INTERACTIVE = "rebase-interactive"
    REBASE_MERGE = "rebase-merge"
    REBASE = "rebase"
    APPLY_MAILBOX = "apply-mailbox"
    APPLY_MAILBOX_OR_REBASE = "apply-mailbox-or-rebase"
    MERGE = "merge"
    REVERT = "revert"
    REVERT_SEQUENCE = "revert-sequence"
    CHERRY_PICK = "cherry-pick"
    CHERRY_PICK_SEQUENCE = "cherry-pick-sequence"
    BISECT = "bisect"


#: For each `GitState`: the `Args` flag that enables showing it, the
#: `Symbols` field it is displayed with, and the segment's source label
STATE_DISPLAY: dict[GitState, tuple[str, str, str]] = {
    GitState.REBASE_INTERACTIVE: ("show_rebase", "rebase_interactive", "Git::Rebase"),
    GitState.REBASE_MERGE: ("show_rebase", "rebase_merge", "Git::Rebase"),
    GitState.REBASE: ("show_rebase", "rebase", "Git::Rebase"),
    GitState.APPLY_MAILBOX: ("show_rebase", "apply_mailbox", "Git::ApplyMailbox"),
    GitState.APPLY_MAILBOX_OR_REBASE: ("show_rebase", "rebase", "Git::Rebase"),
    GitState.MERGE: ("show_merge", "merge", "Git::Merge"),
    GitState.REVERT: ("show_revert", "revert", "Git::Revert"),
    GitState.REVERT_SEQUENCE: ("show_revert", "revert", "Git::Revert"),
    GitState.CHERRY_PICK: ("show_cherry_pick", "cherry_pick", "Git::CherryPick"),
    GitState.CHERRY_PICK_SEQUENCE: (
        "show_cherry_pick",
        "cherry_pick",
        "Git::CherryPick",
    ),
    GitState.BISECT: ("show_bisect", "bisect", "Git::Bisect"),
}


@dataclass
class Stats:
    """High-level statistics for a repository's working tree"""

    changed: int = 0
    conflicted: int = 0
    staged: int = 0
    untracked: int = 0
    stashed: int = 0

    def dirty(self) -> bool:
        """
        Returns `True` iff there are any changed, conflicted, staged, or
        untracked files.  Stashed changes don't count.
        """
        return self.changed + self.conflicted + self.staged + self.untracked > 0

    def add_status(self, porcelain: str) -> None:
        """
        Tally the entries in the output of ``git status --porcelain=v1 -z``.
        Each entry is counted in at most one category.
        """
        entries = iter(porcelain.split("\0"))
        for entry in entries:
            if not entry:
                continue
            xy = entry[:2]
            if "R" in xy or "C" in xy:
                # The original path of a rename/copy follows as its own field
                next(entries, None)
            if xy == "!!":
                continue
            elif xy == "??":
                self.untracked += 1
            elif xy in UNMERGED:
                self.conflicted += 1
            elif xy[0] in "AMDRCT":
                self.staged += 1
            elif xy[1] in "MDRT":
                self.changed += 1


@dataclass
class Head:
    #: The name of the current branch, or `None` if ``HEAD`` is detached
    branch: str | None

    #: `True` iff the current branch does not have any commits yet
    unborn: bool

    def describe(self) -> str:
        if self.branch is None:
            return NO_BRANCH
        elif self.unborn:
            return f"{self.branch} (unborn)"
        else:
            return self.branch


@dataclass
class Repo:
    #: The directory in which to run Git commands
    workdir: Path

    #: The repository's ``.git`` directory
    git_dir: Path

    @classmethod
    def discover(cls, cwd: Path) -> Repo | None:
        """
        Find the repository containing ``cwd``.  Returns `None` if ``cwd`` is
        not in a Git repository or Git is not installed.

        :raises SegmentError: if the repository is bare
        """
        try:
            git_dir = git("rev-parse", "--absolute-git-dir", cwd=cwd)
        except OSError:
            # Git is not installed, or cwd does not exist
            return None
        if git_dir is None:
            return None
        # Being inside the .git directory is close enough to being in a bare
        # repository that we treat the two the same.
        if (
            git("rev-parse", "--is-bare-repository", cwd=cwd) == "true"
            or git("rev-parse", "--is-inside-work-tree", cwd=cwd) != "true"
        ):
            raise SegmentError("The git segment does not support bare repositories")
        return cls(workdir=cwd, git_dir=Path(git_dir))

    def git(self, *args: str) -> str | None:
        return git(*args, cwd=self.workdir)

    def run(self, *args: str) -> str:
        return run_git(*args, cwd=self.workdir)

    def stats(self) -> Stats:
        """
        Scan the working tree & stash

        :raises GitError: if either cannot be read
        """
        stats = Stats()
        stats.add_status(
            self.run(
                "--no-optional-locks",
                "status",
                "--porcelain=v1",
                "-z",
                "--untracked-files=all",
            )
        )
        stats.stashed = len(self.run("stash", "list").splitlines())
        return stats

    def head(self) -> Head:
        """:raises OSError: if ``HEAD`` cannot be read"""
        head = (self.git_dir / "HEAD").read_text(encoding="utf-8").strip()
        if head.startswith("ref: "):
            ref = head[5:].strip()
            if not ref.startswith("refs/heads/"):
                return Head(branch=None, unborn=False)
            unborn = self.git("rev-parse", "--verify", "--quiet", "HEAD") is None
            return Head(branch=ref[len("refs/heads/") :], unborn=unborn)
        else:
            return Head(branch=None, unborn=False)

    def ahead_behind(self) -> tuple[int, int] | None:
        """
        Returns the number of commits by which ``HEAD`` is ahead of & behind
        its upstream branch, or `None` if there is no upstream

        :raises GitError: if the commit graph cannot be compared
        """
        if (
            self.git("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}")
            is None
        ):
            return None
        delta = self.run("rev-list", "--count", "--left-right", "HEAD...@{upstream}")
        try:
            ahead, behind = map(int, delta.split())
        except ValueError:
            raise GitError(f"Could not parse `git rev-list` output: {delta!r}")
        return (ahead, behind)

    def state(self) -> GitState | None:
        """
        Returns the operation currently in progress, if any.  The checks
        follow the same order that Git itself uses.
        """
        gd = self.git_dir
        if (gd / "rebase-merge").is_dir():
            if (gd / "rebase-merge" / "interactive").is_file():
                return GitState.REBASE_INTERACTIVE
            else:
                return GitState.REBASE_MERGE
        elif (gd / "rebase-apply").is_dir():
            if (gd / "rebase-apply" / "rebasing").is_file():
                return GitState.REBASE
            elif (gd / "rebase-apply" / "applying").is_file():
                return GitState.APPLY_MAILBOX
            else:
                return GitState.APPLY_MAILBOX_OR_REBASE
        elif (gd / "MERGE_HEAD").is_file():
            return GitState.MERGE
        elif (gd / "REVERT_HEAD").is_file():
            if (gd / "sequencer" / "todo").is_file():
                return GitState.REVERT_SEQUENCE
            else:
                return GitState.REVERT
        elif (gd / "CHERRY_PICK_HEAD").is_file():
            if (gd / "sequencer" / "todo").is_file():
                return GitState.CHERRY_PICK_SEQUENCE
            else:
                return GitState.CHERRY_PICK
        elif (gd / "BISECT_LOG").is_file():
            return GitState.BISECT
        else:
            return None

    def rebase_progress(self) -> tuple[int, int]:
        """
        Returns the ``(done, total)`` step counts of an interactive rebase

        :raises SegmentError: if Git's counters cannot be read
        """
        rbdir = self.git_dir / "rebase-merge"
        try:
            return (read_counter(rbdir / "msgnum"), read_counter(rbdir / "end"))
        except ValueError as e:
            raise SegmentError(f"Could not read rebase progress: {e}")


class Git(Provider):
    name = "git"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        args = args or Args()
        theme = state.theme.vcs
        repo = Repo.discover(Path(state.require("PWD")))
        if repo is None:
            return []
        stats = repo.stats()
        segments: list[Segment] = []
        head: Head | None
        try:
            head = repo.head()
        except OSError as e:
            log.warning("Could not determine repository HEAD: %s", e)
            head = None
        else:
            segments.append(branch_segment(head, stats, theme))
        if head is not None and head.branch is not None and not head.unborn:
            try:
                delta = repo.ahead_behind()
            except GitError as e:
                log.warning("Could not compare HEAD with upstream: %s", e)
            else:
                if delta is not None:
                    segments.extend(ahead_behind_segments(*delta, theme))
        gstate = repo.state()
        if gstate is not None and getattr(args, STATE_DISPLAY[gstate][0]):
            segments.append(in_progress_segment(repo, gstate, theme))
        segments.extend(count_segments(stats, args, theme))
        return segments


def branch_text(head: Head, sym: Symbols) -> str:
    parts = [sym.git]
    if head.branch is None:
        parts.append(sym.detached)
    parts.append(head.describe())
    return " ".join(p for p in parts if p)


def branch_segment(head: Head, stats: Stats, theme: Theme) -> Segment:
    if stats.dirty():
        fg, bg = theme.repo_dirty_fg, theme.repo_dirty_bg
    else:
        fg, bg = theme.repo_clean_fg, theme.repo_clean_bg
    return Segment(
        bg=bg,
        fg=fg,
        text=branch_text(head, theme.symbols),
        separator=Separator.THICK,
        source="Git::Branch",
    )


def ahead_behind_segments(ahead: int, behind: int, theme: Theme) -> list[Segment]:
    segments = []
    if ahead > 0:
        segments.append(
            Segment(
                bg=theme.git_ahead_bg,
                fg=theme.git_ahead_fg,
                text=f"{ahead}{theme.symbols.ahead}",
                # Merge visually with the "behind" segment that follows
                separator=Separator.THIN if behind > 0 else Separator.THICK,
                source="Git::Ahead",
            )
        )
    if behind > 0:
        segments.append(
            Segment(
                bg=theme.git_behind_bg,
                fg=theme.git_behind_fg,
                text=f"{behind}{theme.symbols.behind}",
                separator=Separator.THICK,
                source="Git::Behind",
            )
        )
    return segments


def in_progress_segment(repo: Repo, gstate: GitState, theme: Theme) -> Segment:
    _, symbol_field, source = STATE_DISPLAY[gstate]
    text = getattr(theme.symbols, symbol_field)
    if gstate is GitState.REBASE_INTERACTIVE:
        done, total = repo.rebase_progress()
        text += f" {done}/{total}"
    return Segment(
        bg=theme.git_in_progress_bg,
        fg=theme.git_in_progress_fg,
        text=text,
        separator=Separator.THICK,
        source=source,
    )


def count_segments(stats: Stats, args: Args, theme: Theme) -> list[Segment]:
    sym = theme.symbols
    counts = [
        (stats.staged, sym.staged, theme.git_staged_fg, theme.git_staged_bg, "Staged"),
        (
            stats.changed,
            sym.changed,
            theme.git_changed_fg,
            theme.git_changed_bg,
            "Changed",
        ),
        (
            stats.untracked,
            sym.new,
            theme.git_untracked_fg,
            theme.git_untracked_bg,
            "Untracked",
        ),
        (
            stats.conflicted,
            sym.conflicted,
            theme.git_conflict_fg,
            theme.git_conflict_bg,
            "Conflicted",
        ),
    ]
    if args.show_stash:
        counts.append(
            (
                stats.stashed,
                sym.stash,
                theme.git_stashed_fg,
                theme.git_stashed_bg,
                "Stashed",
            )
        )
    return [
        Segment(
            bg=bg,
            fg=fg,
            text=f"{n}{symbol}",
            separator=Separator.THICK,
            source=f"Git::{label}",
        )
        for n, symbol, fg, bg, label in counts
        if n > 0
    ]


def run_git(*args: str, cwd: Path) -> str:
    """
    Run a Git command in ``cwd`` and return its raw stdout

    :raises GitError: if the command fails
    """
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            encoding="utf-8",
            # Paths in `git status` output need not be valid UTF-8
            errors="surrogateescape",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        ).stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"`git {' '.join(args)}` failed: {e.stderr.strip()}")


def git(*args: str, cwd: Path) -> str | None:
    """
    Run a Git command in ``cwd`` and return its stdout with leading & trailing
    whitespace stripped.  If the command fails, return `None`.
    """
    try:
        return run_git(*args, cwd=cwd).strip()
    except GitError:
        return None
