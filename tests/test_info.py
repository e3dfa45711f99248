"""Tests for info field preprocessing."""

import pytest

from planning_encoder.info import find_planning, preprocess_info


@pytest.mark.parametrize(
    "text,expected",
    [
        ("UD: 5", "$ud:5$"),
        ("UD : 12.", "$ud:12$"),
        ("100 UD.", "$ud:100$"),
        ("ud:3", "$ud:3$"),
        ("Rien à signaler", "Rien à signaler"),
        ("", ""),
        (None, ""),
    ],
)
def test_ud_tags(text, expected):
    assert preprocess_info(text) == expected


def test_planning_block():
    assert preprocess_info("Planning: Tous les lundis 8h30: Frais.") == "$planning:0LuMdFr$"


def test_planning_block_with_several_rules():
    text = "UD: 5. Planning: Tous les lundis 8h30: Frais. 2e vendredi 14h: Sec, Surgelé."
    assert preprocess_info(text) == "$ud:5$$planning:0LuMdFr2VeApSe2VeApSu$"


def test_planning_block_with_superscripts():
    assert preprocess_info("Planning : 1ᵉʳ mardi 8h30: Sec.") == "$planning:1MaMdSe$"


def test_text_around_planning_is_kept():
    processed = preprocess_info("Contact le matin. Planning: 2e jeudi 10h: Frais.\nMerci")
    assert processed == "Contact le matin. $planning:2JeMfFr$\nMerci"


def test_find_planning():
    assert find_planning("$ud:5$$planning:0LuMdFr$") == "0LuMdFr"
    assert find_planning("$ud:5$") is None


def test_long_run_of_spaces_is_linear():
    text = "Planning:" + " " * 20_000 + "x"
    assert preprocess_info(text) == text
