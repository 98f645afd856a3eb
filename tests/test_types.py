import io

from bossfight.types import AttackContext, CombatLog, calc_resist


def test_calc_resist_zero_defense_lets_everything_through():
    assert calc_resist(0) == 1.0


def test_calc_resist_hundred_halves():
    assert calc_resist(100) == 0.5


def test_calc_resist_negative_defense_treated_as_zero():
    assert calc_resist(-50) == calc_resist(0)


def test_calc_resist_decreases_with_defense():
    values = [calc_resist(d) for d in (0, 10, 50, 200, 1000)]
    assert values == sorted(values, reverse=True)
    assert all(0 < v <= 1 for v in values)


def test_combat_log_flush_writes_and_clears():
    log = CombatLog()
    log.add("first")
    log.add("second")
    assert log.lines == ("first", "second")
    out = io.StringIO()
    log.flush(out)
    assert out.getvalue() == "first\nsecond\n"
    assert len(log) == 0
    again = io.StringIO()
    log.flush(again)
    assert again.getvalue() == ""


def test_combat_log_flush_defaults_to_stdout(capsys):
    log = CombatLog()
    log.add("[SAE] 1/3")
    log.flush()
    assert capsys.readouterr().out == "[SAE] 1/3\n"


def test_attack_context_is_mutable_record():
    ctx = AttackContext(self_label="Player", target_label="Enemy", atk=80)
    ctx.final_phys_raw += ctx.atk
    assert ctx.final_phys_raw == ctx.atk
    assert ctx.is_crit is False
    assert ctx.self_label == "Player"


def test_combat_log_len_counts_added_lines():
    log = CombatLog()
    assert len(log) == 0
    log.add("  [GW] on Player")
    log.add("  [GW] on Enemy")
    assert len(log) == 2
    assert log.lines[-1] == "  [GW] on Enemy"