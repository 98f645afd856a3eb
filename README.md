# bossfight

A small turn-based boss fight played in the terminal. You build a character from
active and passive abilities, shop for items, set up the boss the same way, and
then trade blows until one side falls.

It needs nothing beyond the Python standard library (Python 3.10 or later).

## Installing

```
pip install .
```

## Playing

```
bossfight
```

The game reads whitespace-separated numbers from standard input:

1. **Character creation** – pick up to two active abilities and up to two
   passive abilities for yourself, then the same for the boss. Enter `0` to skip
   the remaining choices. Numbers outside the menu are ignored.
2. **Shopping** – each side starts with 1800 gold. Every item costs 300 gold and
   each side may own at most six. Enter `0` to skip a slot.
3. **The fight** – each turn both sides' stats are shown. Choose `1` to attack
   or one of the listed abilities. Abilities on cooldown show `[CD:n]`; ready
   ones show `[RDY]`. If an ability cannot be used you are asked again. The boss
   acts on its own: about half the time it tries its ready abilities in order,
   otherwise it attacks.

When input ends, or something that is not a number is entered, the game prints
`Input stopped.` and exits.

### Abilities

Actives: `FIGHT_OR_BE_FORGOTTEN` (costs half your max HP, grants ATK and full
lifesteal for three attacks, and attacks straight away), `BLOOD_DRAIN`,
`OBLITERATE`, `JUDGEMENT` (stuns for one turn) and `DOMINUS` (temporary max HP
and a magic damage aura for five turns).

Passives: `CORROSION`, `REAPER`, `SOUL_EATER`, `STRENGTH_ABOVE_ALL_ELSE` and
`BATTLE_FURY`.

### Items

Black Cleaver, BOTRK, Titanic Hydra, Divine Sunderer, Ravenous Hydra,
Death's Dance, Thornmail, Spirit Visage, Void Staff, Serylda's Grudge,
Youmuu's Ghostblade, Shadowflame and Riftmaker. The shop menu describes each.

### Damage

Armour and magic resist let `100 / (100 + defence)` of the damage through.
Percentage and flat penetration lower the defender's resistance before that is
applied.

## Using it as a library

```python
import random
from bossfight.entity import Player, Mob
from bossfight.types import CombatLog

rng = random.Random(1)
player, boss = Player(rng), Mob(True, rng)
log = CombatLog()
player.attack(boss, log)
log.flush(None)
print(boss.format_stats())
```

The modules:

- `bossfight.types` – `Stat`, `CombatLog`, `AttackContext` and `calc_resist`.
- `bossfight.buffs` – `Buff` and the concrete buffs.
- `bossfight.entity` – `Entity`, `Player` and `Mob`: stats, buffs, attacks,
  `buy_item` (returns the gold left) and `use_ability`.
- `bossfight.abilities` – `create_active_ability` and `create_passive_ability`
  build abilities from their 1-based menu numbers.
- `bossfight.items` – `create_item` and `shop_menu`.
- `bossfight.game` – `play(stdin, stdout, rng)` runs a whole game against any
  text streams and random generator and returns `True` if the player wins; it
  raises `InputStopped` if input runs out.

## What it does not do

There is no saving or loading of characters or games, and no way to choose the
boss's stats: the boss's abilities and items are picked through the same menus
as the player's.