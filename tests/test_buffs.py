import pytest

from bossfight.buffs import (
    BCShredBuff,
    Buff,
    DDBleedBuff,
    DDPassiveBuff,
    DominusBuff,
    FOBFBuff,
    GWBuff,
    SAECounterBuff,
    SAERageBuff,
    TitanicBuff,
)
from bossfight.entity import Entity
from bossfight.types import CombatLog, Stat


def make_entity(hp=1000):
    return Entity(hp, 0, 0, 0, 0)


def test_base_buff_expiry_rules():
    buff = Buff()
    assert not buff.is_expired()
    buff.duration_turns = 0
    assert buff.is_expired()
    other = Buff()
    other.attacks_remaining = 0
    assert other.is_expired()


def test_bleed_ticks_three_times_then_expires():
    owner = make_entity()
    log = CombatLog()
    bleed = DDBleedBuff(30)
    start = owner.hp
    bleed.on_turn_end(owner, owner, log)
    assert log.lines[-1] == "  [DD Bleed] 30 true dmg (2t)"
    assert not bleed.is_expired()
    bleed.on_turn_end(owner, owner, log)
    bleed.on_turn_end(owner, owner, log)
    assert log.lines[-1] == "  [DD Bleed] 30 true dmg (0t)"
    assert bleed.is_expired()
    assert owner.hp == pytest.approx(start - 30 * 3)


def test_bleed_merge_keeps_separate_portions():
    owner = make_entity()
    log = CombatLog()
    bleed = DDBleedBuff(10)
    bleed.on_turn_end(owner, owner, log)
    bleed.merge(DDBleedBuff(5), owner, log)
    assert len(bleed.portions) == 2
    bleed.on_turn_end(owner, owner, log)
    bleed.on_turn_end(owner, owner, log)
    assert len(bleed.portions) == 1
    assert bleed.stats_text() == "DD 5/t"


def test_dd_passive_only_delays_physical():
    passive = DDPassiveBuff()
    assert passive.delayed_damage_fraction(True) == 0.0
    assert passive.delayed_damage_fraction(False) == 0.30
    dot = passive.create_delayed_dot(12)
    assert isinstance(dot, DDBleedBuff)
    assert dot.stats_text() == "DD 12/t"


def test_titanic_scales_with_max_hp():
    owner = make_entity(1000)
    titanic = TitanicBuff()
    assert titanic.stat_mod(Stat.ATK, owner) == pytest.approx(20.0)
    assert titanic.stat_mod(Stat.AP, owner) == 0


def test_black_cleaver_caps_at_six_stacks():
    owner = make_entity()
    log = CombatLog()
    shred = BCShredBuff()
    assert shred.duration_turns == 4
    for _ in range(10):
        shred.merge(BCShredBuff(), owner, log)
    assert shred.stacks == 6
    assert shred.armor_shred() == pytest.approx(0.30)
    assert shred.stats_text() == "BC -30%"


def test_black_cleaver_on_added_logs():
    owner = Entity(1000, 0, 0, 40, 0)
    log = CombatLog()
    BCShredBuff().on_added(owner, log)
    assert log.lines == ("  [BC] -5% (1/6) armor=40",)


def test_grievous_wounds_refreshes_duration():
    gw = GWBuff()
    gw.duration_turns = 1
    gw.merge(GWBuff(), make_entity(), CombatLog())
    assert gw.duration_turns == 2
    assert gw.heal_reduction() == 0.60
    assert gw.stats_text() == "GW -60%heal"


def test_sae_counter_triggers_rage_on_third_stack():
    owner = make_entity()
    log = CombatLog()
    owner.add_buff(SAECounterBuff(), log)
    owner.add_buff(SAECounterBuff(), log)
    assert owner.get_buff("SAE_RAGE") is None
    owner.add_buff(SAECounterBuff(), log)
    rage = owner.get_buff("SAE_RAGE")
    assert isinstance(rage, SAERageBuff)
    assert rage.attacks_remaining == 3
    assert owner.get_buff("SAE_COUNTER").is_expired()
    assert log.lines == ("[SAE] 1/3", "[SAE] 2/3", "[SAE] RAGE! +170 ATK x3")


def test_rage_adds_attack():
    owner = make_entity()
    owner.add_buff_silent(SAERageBuff())
    assert owner.atk == 170.0


def test_fobf_mods():
    owner = make_entity()
    fobf = FOBFBuff(55)
    assert fobf.stat_mod(Stat.ATK, owner) == 55
    assert fobf.stat_mod(Stat.LIFESTEAL, owner) == 1.0
    assert fobf.stat_mod(Stat.ARMOR, owner) == 0
    assert fobf.attacks_remaining == 3
    assert fobf.stats_text() == "FOBF +55ATK"


def test_dominus_damages_opponent_until_duration_zero():
    owner = make_entity()
    opponent = make_entity()
    log = CombatLog()
    dominus = DominusBuff(80)
    assert dominus.stat_mod(Stat.MAX_HP, owner) == 1000.0
    dominus.on_turn_end(owner, opponent, log)
    assert opponent.hp == pytest.approx(1000 - 80)
    assert log.lines[-1] == "  [DOMINUS] 80 -> 80 magic (5t)"
    dominus.duration_turns = 0
    hp_before = opponent.hp
    dominus.on_turn_end(owner, opponent, log)
    assert opponent.hp == hp_before