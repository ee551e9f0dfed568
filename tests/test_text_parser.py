from __future__ import annotations

from schedule_engine.models import ParsedProgram
from schedule_engine.text_parser import parse_program_cell


def test_title_subtitle_season_episode():
    parsed = parse_program_cell("Twist of Fate: New Era\nSeason S10 • Episode EP 36")
    assert parsed == ParsedProgram(title="Twist of Fate", season="10", episode="36", subtitle="New Era")


def test_shorthand_tokens():
    parsed = parse_program_cell("Hidden Intentions S1 EP 20")
    assert parsed.title == "Hidden Intentions"
    assert parsed.season == "1"
    assert parsed.episode == "20"
    assert parsed.subtitle is None


def test_numbers_drop_leading_zeros():
    parsed = parse_program_cell("Show S01 EP007")
    assert parsed.title == "Show"
    assert (parsed.season, parsed.episode) == ("1", "7")


def test_single_token_means_neither():
    only_season = parse_program_cell("This Is Fate S1")
    assert only_season.title == "This Is Fate"
    assert only_season.season is None and only_season.episode is None

    only_episode = parse_program_cell("This Is Fate EP 5")
    assert only_episode.title == "This Is Fate"
    assert only_episode.season is None and only_episode.episode is None


def test_parenthetical_subtitle():
    parsed = parse_program_cell("This Is Fate (Finale)")
    assert parsed == ParsedProgram(title="This Is Fate", subtitle="Finale")


def test_parenthetical_wins_over_colon():
    parsed = parse_program_cell("Zee World: Drama Nights (Special)")
    assert parsed.title == "Zee World: Drama Nights"
    assert parsed.subtitle == "Special"


def test_colon_subtitle_with_long_keywords():
    parsed = parse_program_cell("Zee World: The Best of Drama\nSeason 2 Episode 15")
    assert parsed.title == "Zee World"
    assert parsed.subtitle == "The Best of Drama"
    assert (parsed.season, parsed.episode) == ("2", "15")


def test_trailing_separators_are_stripped():
    parsed = parse_program_cell("Morning Show • Season S5 • Episode EP 100")
    assert parsed.title == "Morning Show"
    assert (parsed.season, parsed.episode) == ("5", "100")

    assert parse_program_cell("Kids Club - S3 EP 4").title == "Kids Club"


def test_plain_title():
    assert parse_program_cell("News") == ParsedProgram(title="News")


def test_newlines_parse_like_spaces():
    spaced = parse_program_cell("Show Name S2 EP 10")
    broken = parse_program_cell("Show Name\n\nS2\n\nEP 10")
    assert broken == spaced
    assert broken.title == "Show Name"


def test_empty_inputs_never_raise():
    assert parse_program_cell("") == ParsedProgram(title="")
    assert parse_program_cell("   \n ") == ParsedProgram(title="")
    assert parse_program_cell(None) == ParsedProgram(title="")


def test_tokens_only():
    parsed = parse_program_cell("Season 3 Episode 9")
    assert parsed.title == ""
    assert (parsed.season, parsed.episode) == ("3", "9")
