import io
import random

import pytest

from bossfight.abilities import create_active_ability, create_passive_ability
from bossfight.entity import Player
from bossfight.game import (
    InputStopped,
    buy_items,
    choose_abilities,
    main,
    play,
    read_choice,
)
from bossfight.types import CombatLog


def test_read_choice_reads_integer():
    out = io.StringIO()
    assert read_choice("Choice: ", io.StringIO("  42\n"), out) == 42
    assert out.getvalue() == "Choice: "


def test_read_choice_reads_tokens_in_sequence():
    stdin, out = io.StringIO("3 4\n"), io.StringIO()
    assert read_choice("a", stdin, out) == 3
    assert read_choice("b", stdin, out) == 4


@pytest.mark.parametrize("text", ["", "abc\n", "   \n"])
def test_read_choice_stops_on_bad_input(text):
    out = io.StringIO()
    with pytest.raises(InputStopped):
        read_choice("Choice: ", io.StringIO(text), out)
    assert out.getvalue().endswith("\nInput stopped.\n")


def test_choose_abilities_adds_two():
    player = Player()
    out = io.StringIO()
    choose_abilities(player, "T\n", "M\n", create_active_ability, io.StringIO("1 4"), out)
    assert [a.name for a in player.active_abilities()] == [
        "FIGHT_OR_BE_FORGOTTEN",
        "JUDGEMENT",
    ]
    assert out.getvalue().startswith("T\nM\nChoice 1 (0=skip): ")


def test_choose_abilities_zero_stops_reading():
    player = Player()
    stdin = io.StringIO("0 5")
    choose_abilities(player, "", "", create_passive_ability, stdin, io.StringIO())
    assert player.passive_abilities() == []
    assert read_choice("", stdin, io.StringIO()) == 5


def test_choose_abilities_ignores_unknown_choice():
    player = Player()
    choose_abilities(player, "", "", create_passive_ability, io.StringIO("9 2"), io.StringIO())
    assert [a.name for a in player.passive_abilities()] == ["REAPER"]


def test_buy_items_spends_gold():
    player, log, out = Player(), CombatLog(), io.StringIO()
    gold = buy_items(player, "YOUR SHOP", 1800, log, "[Shop]", io.StringIO("1 0 0 0 0 0"), out)
    assert gold == 1500
    assert [i.name for i in player.items] == ["Black Cleaver"]
    assert "[Shop] Black Cleaver (gold: 1500)\n" in out.getvalue()
    assert len(log) == 0


def test_buy_items_boss_prompt():
    player, out = Player(), io.StringIO()
    buy_items(player, "BOSS SHOP", 1800, CombatLog(), "[Boss]", io.StringIO("0 0 0 0 0 0"), out)
    assert "Boss item 1 (0=skip): " in out.getvalue()
    assert player.items == ()


def test_buy_items_without_gold_reads_nothing():
    player, out = Player(), io.StringIO()
    stdin = io.StringIO("7")
    assert buy_items(player, "SHOP", 200, CombatLog(), "[Shop]", stdin, out) == 200
    assert "Not enough gold!\n" in out.getvalue()
    assert read_choice("", stdin, io.StringIO()) == 7


def _script(attacks):
    return io.StringIO("0 0 0 0 " + "0 " * 12 + "1 " * attacks)


def test_plain_attacks_lose_to_boss():
    out = io.StringIO()
    assert play(_script(100), out, random.Random(1)) is False
    text = out.getvalue()
    assert text.startswith("CHARACTER CREATION\n\n")
    assert "=== BOSS FIGHT ===" in text
    assert "--- TURN 1 ---" in text
    assert text.endswith("\n*** DEFEAT ***\n")


def test_play_raises_when_input_runs_out():
    out = io.StringIO()
    with pytest.raises(InputStopped):
        play(_script(2), out, random.Random(1))
    assert out.getvalue().endswith("\nInput stopped.\n")


def test_main_returns_zero_when_input_ends(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0
    assert "Input stopped." in capsys.readouterr().out