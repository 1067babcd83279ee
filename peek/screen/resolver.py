"""Pick the capturable source that best matches the active window.

Rules are tried in order and each rule returns the first hit in enumeration
order:

1. a window whose name equals the foreground title, or contains the owner name
2. a named window containing the owner name, ignoring case
3. a named window that looks like Chrome
4. any named window that is not the desktop
5. the first screen
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .types import CapturableSource, ForegroundWindowInfo

logger = logging.getLogger(__name__)

Predicate = Callable[[CapturableSource], bool]


def resolve(
    foreground: ForegroundWindowInfo | None,
    sources: Sequence[CapturableSource],
) -> CapturableSource | None:
    """Return the selected source, or None when nothing is capturable."""

    for rule, predicate in _rules(foreground):
        match = _first(sources, predicate)
        if match is not None:
            logger.debug(
                "Selected source %r (%s) by rule %s",
                match.display_name,
                match.identifier,
                rule,
            )
            return match

    logger.debug("No capture source matched among %d candidates", len(sources))
    return None


def _rules(foreground: ForegroundWindowInfo | None) -> Iterable[tuple[str, Predicate]]:
    if foreground is not None:
        title = foreground.title
        owner = foreground.owner_name

        def exact(source: CapturableSource) -> bool:
            title_match = title is not None and source.display_name == title
            owner_match = bool(owner) and owner in source.display_name
            return source.is_window and (title_match or owner_match)

        yield "exact", exact

        if owner:
            owner_lower = owner.lower()

            def owner_partial(source: CapturableSource) -> bool:
                return (
                    source.is_window
                    and source.display_name != ""
                    and owner_lower in source.display_name.lower()
                )

            yield "owner", owner_partial

    yield "chrome", _looks_like_chrome
    yield "any-window", _is_real_window
    yield "screen", lambda source: source.is_screen


def _looks_like_chrome(source: CapturableSource) -> bool:
    return (
        source.is_window
        and source.display_name != ""
        and "chrome" in source.display_name.lower()
    )


def _is_real_window(source: CapturableSource) -> bool:
    return (
        source.is_window
        and source.display_name != ""
        and "Desktop" not in source.display_name
    )


def _first(
    sources: Sequence[CapturableSource],
    predicate: Predicate,
) -> CapturableSource | None:
    for source in sources:
        if predicate(source):
            return source
    return None
