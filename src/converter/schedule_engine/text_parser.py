"""Parse free program text into title, season, episode and subtitle."""

import re
from typing import Optional, Sequence

from .models import ParsedProgram

# Earliest match of any of these marks where the title ends
TITLE_STOP_PATTERNS = (
    re.compile(r'\bSeason\b', re.IGNORECASE),
    re.compile(r'\bEpisode\b', re.IGNORECASE),
    re.compile(r'\bS(?:eason)?\s*\d{1,3}\b', re.IGNORECASE),
    re.compile(r'\bEP\s*\d{1,4}\b', re.IGNORECASE),
)

# First pattern that matches wins; group 1 holds the number
SEASON_PATTERNS = (
    re.compile(r'\bSeason\s*S?(\d{1,3})\b', re.IGNORECASE),
    re.compile(r'\bS(?:eason)?\s*(\d{1,3})\b', re.IGNORECASE),
)
EPISODE_PATTERNS = (
    re.compile(r'\bEpisode\s*(?:E|EP)?\s*(\d{1,4})\b', re.IGNORECASE),
    re.compile(r'\bEP\s*(\d{1,4})\b', re.IGNORECASE),
)

# Subtitle sources, in precedence order; only the first that applies is used
_TRAILING_PAREN_RE = re.compile(r'\(([^)]+)\)\s*$')
_SUBTITLE_SEPARATOR = ':'

_TRAILING_SEPARATORS_RE = re.compile(r'[\s\-•·:]+$')


def _first_number(patterns: Sequence[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return str(int(match.group(1)))
    return None


def _title_end(text: str) -> int:
    positions = [m.start() for m in (p.search(text) for p in TITLE_STOP_PATTERNS) if m]
    return min(positions) if positions else len(text)


def _split_subtitle(title: str) -> tuple[str, Optional[str]]:
    paren = _TRAILING_PAREN_RE.search(title)
    if paren:
        return title[:paren.start()].strip(), paren.group(1).strip() or None

    if _SUBTITLE_SEPARATOR in title:
        head, _, tail = title.partition(_SUBTITLE_SEPARATOR)
        return head.strip(), tail.strip() or None

    return title, None


def parse_program_cell(text: Optional[str]) -> ParsedProgram:
    """
    Parse a program cell into structured fields.

    The title is the text before the first season/episode token. A trailing
    parenthesised group, or failing that the text after the first colon,
    becomes the subtitle. Season and episode are kept only when both are found.

    Examples:
        "Twist of Fate: New Era\\nSeason S10 • Episode EP 36"
            -> title "Twist of Fate", subtitle "New Era", season "10", episode "36"
        "Hidden Intentions S1 EP 20"
            -> title "Hidden Intentions", season "1", episode "20"
        "This Is Fate (Finale)"
            -> title "This Is Fate", subtitle "Finale"
    """
    flat = re.sub(r'\s+', ' ', text or '').strip()

    if not flat:
        return ParsedProgram(title='')

    title = _TRAILING_SEPARATORS_RE.sub('', flat[:_title_end(flat)])
    title, subtitle = _split_subtitle(title)

    season = _first_number(SEASON_PATTERNS, flat)
    episode = _first_number(EPISODE_PATTERNS, flat)

    program = ParsedProgram(title=title, subtitle=subtitle)
    if season and episode:
        program.season = season
        program.episode = episode

    return program
