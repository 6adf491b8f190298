import pytest

from herosmith.allocator import AbilityAllocator, point_buy_cost
from herosmith.dice import RNG

STANDARD = {"str": 15, "dex": 14, "con": 13, "int": 12, "wis": 10, "cha": 8}


def test_standard_array_complete_only_with_exact_multiset():
    a = AbilityAllocator()
    assert a.mode == "standard"
    assert not a.is_complete()
    for k, v in STANDARD.items():
        assert a.assign(k, v)
    assert a.is_complete()
    assert a.base_scores() == STANDARD


def test_standard_array_rejects_taken_value():
    a = AbilityAllocator()
    assert a.assign("str", 15)
    assert not a.assign("dex", 15)
    assert 15 not in a.available_values("dex")
    # the holder still sees its own value
    assert 15 in a.available_values("str")


def test_standard_array_clear_frees_value():
    a = AbilityAllocator()
    a.assign("str", 15)
    a.clear("str")
    assert a.assign("dex", 15)
    assert a.base_scores()["str"] == 10


def test_assign_same_value_twice_is_idempotent():
    a = AbilityAllocator()
    assert a.assign("str", 15)
    assert a.assign("str", 15)
    assert a.standard.assignments == {"str": 15}


def test_assign_rejects_values_outside_pool():
    a = AbilityAllocator()
    assert not a.assign("str", 16)
    assert not a.assign("luck", 15)


def test_point_buy_defaults_are_free_and_complete():
    a = AbilityAllocator()
    a.set_mode("point_buy")
    assert a.point_buy_cost() == 0
    assert a.points_remaining() == 27
    assert a.is_complete()
    assert set(a.base_scores().values()) == {8}


def test_point_buy_cost_table():
    assert point_buy_cost({"str": 15, "dex": 15, "con": 15}) == 27
    assert point_buy_cost({"str": 14, "dex": 13}) == 12


def test_point_buy_rejects_out_of_range_and_over_budget():
    a = AbilityAllocator()
    a.set_mode("point_buy")
    assert not a.set_score("str", 16)
    assert not a.set_score("str", 7)
    assert a.set_score("str", 15)
    assert a.set_score("dex", 15)
    assert a.set_score("con", 15)
    assert a.points_remaining() == 0
    assert not a.set_score("int", 9)
    assert a.base_scores()["int"] == 8
    assert a.is_complete()


def test_dice_pool_in_range_and_reroll_clears():
    a = AbilityAllocator()
    a.set_mode("dice")
    assert not a.is_complete()
    pool = a.roll_pool(RNG(7))
    assert len(pool) == 6
    assert all(3 <= v <= 18 for v in pool)
    for k, v in zip(("str", "dex", "con", "int", "wis", "cha"), pool):
        assert a.assign(k, v)
    assert a.is_complete()
    a.roll_pool(RNG(8))
    assert a.dice.assignments == {}
    assert not a.is_complete()


def test_dice_same_seed_same_pool():
    a, b = AbilityAllocator(), AbilityAllocator()
    assert a.roll_pool(RNG(3)) == b.roll_pool(RNG(3))


def test_dice_duplicate_values_can_be_used_as_often_as_rolled():
    a = AbilityAllocator()
    a.set_mode("dice")
    a.dice.pool = [12, 12, 10, 9, 8, 14]
    assert a.assign("str", 12)
    assert a.assign("dex", 12)
    assert not a.assign("con", 12)


def test_manual_clamps_scores():
    a = AbilityAllocator()
    a.set_mode("manual")
    assert a.set_score("str", 25)
    assert a.set_score("dex", 1)
    assert a.base_scores()["str"] == 20
    assert a.base_scores()["dex"] == 3
    assert a.is_complete()


def test_mode_switch_keeps_point_buy_and_manual():
    a = AbilityAllocator()
    a.set_mode("point_buy")
    a.set_score("str", 15)
    a.set_mode("manual")
    a.set_score("wis", 17)
    a.set_mode("point_buy")
    assert a.base_scores()["str"] == 15
    a.set_mode("manual")
    assert a.base_scores()["wis"] == 17


def test_entering_standard_or_dice_resets():
    a = AbilityAllocator()
    a.assign("str", 15)
    a.set_mode("manual")
    a.set_mode("standard")
    assert a.standard.assignments == {}
    a.set_mode("dice")
    a.roll_pool(RNG(1))
    a.set_mode("manual")
    a.set_mode("dice")
    assert a.dice.pool == []


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        AbilityAllocator().set_mode("luck")


def test_score_setters_ignored_in_pool_modes():
    a = AbilityAllocator()
    assert not a.set_score("str", 12)
    a.set_mode("manual")
    assert not a.assign("str", 15)


def test_reselecting_active_mode_keeps_work():
    a = AbilityAllocator()
    for key, value in STANDARD.items():
        a.assign(key, value)
    a.set_mode("standard")
    assert a.standard.assignments == STANDARD
    assert a.is_complete()

    a.set_mode("dice")
    pool = a.roll_pool(RNG(4))
    assert a.assign("str", pool[0])
    a.set_mode("dice")
    assert a.dice.pool == pool
    assert a.dice.assignments == {"str": pool[0]}
