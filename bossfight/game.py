"""Interactive character creation, shopping and the boss fight loop."""

from __future__ import annotations

import random
import sys
from collections.abc import Callable
from typing import TextIO

from .abilities import Ability, create_active_ability, create_passive_ability
from .entity import Entity, Mob, Player
from .items import create_item, shop_menu
from .types import CombatLog

STARTING_GOLD = 1800
ITEM_PRICE = 300

ACTIVE_MENU = (
    "1. FIGHT_OR_BE_FORGOTTEN  2. BLOOD_DRAIN  3. OBLITERATE\n"
    "4. JUDGEMENT              5. DOMINUS\n"
)
PASSIVE_MENU = (
    "1. CORROSION  2. REAPER  3. SOUL_EATER (+10% OV)\n"
    "4. STRENGTH_ABOVE_ALL_ELSE  5. BATTLE_FURY\n"
)


class InputStopped(Exception):
    """Raised when input ends or is not a number."""


def _streams(stdin: TextIO | None, stdout: TextIO | None) -> tuple[TextIO, TextIO]:
    return (
        sys.stdin if stdin is None else stdin,
        sys.stdout if stdout is None else stdout,
    )


def _read_token(stream: TextIO) -> str:
    char = stream.read(1)
    while char and char.isspace():
        char = stream.read(1)
    chars = []
    while char and not char.isspace():
        chars.append(char)
        char = stream.read(1)
    return "".join(chars)


def read_choice(
    prompt: str, stdin: TextIO | None = None, stdout: TextIO | None = None
) -> int:
    """Prompt for and read one whitespace-separated integer."""
    stdin, stdout = _streams(stdin, stdout)
    stdout.write(prompt)
    stdout.flush()
    try:
        return int(_read_token(stdin))
    except ValueError:
        stdout.write("\nInput stopped.\n")
        raise InputStopped from None


def choose_abilities(
    entity: Entity,
    title: str,
    menu: str,
    create: Callable[[int], Ability | None],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Let the user pick up to two abilities; 0 stops picking."""
    stdin, stdout = _streams(stdin, stdout)
    stdout.write(title + menu)
    for number in (1, 2):
        choice = read_choice(f"Choice {number} (0=skip): ", stdin, stdout)
        if choice == 0:
            break
        ability = create(choice)
        if ability is not None:
            entity.add_ability(ability)


def buy_items(
    entity: Entity,
    title: str,
    gold: int,
    log: CombatLog,
    tag: str,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run a shop session of up to six purchases; returns the gold left."""
    stdin, stdout = _streams(stdin, stdout)
    stdout.write(f"\n{title} (gold: {gold})\n")
    stdout.write(shop_menu())
    label = "Boss item " if tag == "[Boss]" else "Item "
    for number in range(1, 7):
        if gold < ITEM_PRICE:
            stdout.write("Not enough gold!\n")
            break
        choice = read_choice(f"{label}{number} (0=skip): ", stdin, stdout)
        if choice == 0:
            continue
        item = create_item(choice)
        if item is not None:
            gold = entity.buy_item(item, gold, log, tag)
            log.flush(stdout)
    return gold


def _player_turn(
    player: Player, boss: Mob, log: CombatLog, stdin: TextIO, out: TextIO
) -> None:
    while True:
        actives = player.active_abilities()
        out.write("1. Attack\n")
        for number, ability in enumerate(actives, start=2):
            remaining = player.cooldown(ability.name)
            status = f" [CD:{remaining}]" if remaining > 0 else " [RDY]"
            out.write(f"{number}. {ability.name}{status}\n")
        choice = read_choice("Choice: ", stdin, out)

        if choice == 1:
            player.attack(boss, log)
            log.flush(out)
            return
        if 2 <= choice <= len(actives) + 1:
            selected = actives[choice - 2]
            if player.use_ability(selected, boss, "Player", log):
                log.flush(out)
                if selected.is_toggle:
                    player.attack(boss, log)
                    log.flush(out)
                return
            log.flush(out)


def _boss_turn(
    boss: Mob, player: Player, log: CombatLog, rng: random.Random, out: TextIO
) -> None:
    actives = boss.active_abilities()
    if actives and rng.randrange(2) == 0:
        for ability in actives:
            if boss.cooldown(ability.name) == 0 and boss.use_ability(
                ability, player, "Enemy", log
            ):
                log.flush(out)
                if ability.is_toggle:
                    boss.attack(player, log)
                    log.flush(out)
                return
    boss.attack(player, log)
    log.flush(out)


def play(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    rng: random.Random | None = None,
) -> bool:
    """Run a whole game; returns True if the player wins.

    Raises :class:`InputStopped` if input runs out.
    """
    stdin, out = _streams(stdin, stdout)
    rng = random.Random() if rng is None else rng
    log = CombatLog()
    player = Player(rng)
    boss = Mob(True, rng)

    out.write("CHARACTER CREATION\n\n")
    choose_abilities(player, "Active Abilities (up to 2):\n", ACTIVE_MENU,
                     create_active_ability, stdin, out)
    choose_abilities(player, "\nPassive Abilities (up to 2):\n", PASSIVE_MENU,
                     create_passive_ability, stdin, out)
    choose_abilities(boss, "\nBoss Actives (up to 2):\n", ACTIVE_MENU,
                     create_active_ability, stdin, out)
    choose_abilities(boss, "Boss Passives (up to 2):\n", PASSIVE_MENU,
                     create_passive_ability, stdin, out)

    buy_items(player, "YOUR SHOP", STARTING_GOLD, log, "[Shop]", stdin, out)
    buy_items(boss, "BOSS SHOP", STARTING_GOLD, log, "[Boss]", stdin, out)

    turn = 0
    out.write("\n=== BOSS FIGHT ===\n")

    while player.is_alive() and boss.is_alive():
        turn += 1
        out.write(f"\n--- TURN {turn} ---\n")
        player.show_stats(out)
        out.write("\n")
        boss.show_stats(out)
        out.write("\n")

        if player.turn_blocked > 0:
            out.write("  [Player] Stunned!\n")
            player.turn_blocked -= 1
        else:
            _player_turn(player, boss, log, stdin, out)

        if not boss.is_alive() or not player.is_alive():
            break

        if boss.turn_blocked > 0:
            out.write("  [Boss] Stunned!\n")
            boss.turn_blocked -= 1
        else:
            _boss_turn(boss, player, log, rng, out)

        out.write("\nEnd of turn\n")
        player.end_turn(boss, log)
        boss.end_turn(player, log)
        log.flush(out)

    won = player.is_alive()
    out.write("\n*** VICTORY! ***\n" if won else "\n*** DEFEAT ***\n")
    return won


def main(argv: list[str] | None = None) -> int:
    """Command entry point."""
    try:
        play()
    except InputStopped:
        pass
    return 0