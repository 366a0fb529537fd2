from __future__ import annotations
from collections.abc import Sequence
from .ansi import RESET, BashStyler, Numbered, Rgb, Separator, Styler, bg_params
from .ansi import fg_params
from .segments import Segment


def render(
    segments: Sequence[Segment],
    styler: Styler | None = None,
    thin_separator_fg: Numbered | Rgb | None = None,
) -> str:
    """
    Render a sequence of segments as a prompt string.

    Each segment's text is padded with a space on either side and followed by
    its separator, drawn in the segment's background color on top of the next
    segment's background.  When two adjacent segments have the same
    background, the separator between them is always `Separator.THIN`.  The
    output ends with a full reset and a single space.

    :param segments: the segments to render, in order
    :param styler: produces the escape sequences; defaults to `BashStyler`
    :param thin_separator_fg: if given, the color to draw thin separators in
    """
    if styler is None:
        styler = BashStyler()
    s = ""
    for i, seg in enumerate(segments):
        nxt = segments[i + 1] if i + 1 < len(segments) else None
        s += styler(fg_params(seg.fg)) + styler(bg_params(seg.bg)) + f" {seg.text} "
        if nxt is not None and nxt.bg == seg.bg:
            separator = Separator.THIN
        else:
            separator = seg.separator
        if nxt is not None:
            s += styler(bg_params(nxt.bg))
        else:
            s += styler(str(RESET))
        if separator is Separator.THIN and thin_separator_fg is not None:
            s += styler(fg_params(thin_separator_fg))
        else:
            s += styler(fg_params(seg.bg))
        s += separator.value
    s += styler(str(RESET)) + " "
    return s
