from herosmith.dice import RNG, roll_4d6_drop_lowest, roll_ability_pool


def test_roll_fixed_seed():
    r1 = roll_4d6_drop_lowest(RNG(123))
    r2 = roll_4d6_drop_lowest(RNG(123))
    assert r1 == r2
    rolls = r1["detail"]["rolls"]
    assert len(rolls) == 4
    assert r1["detail"]["dropped"] == min(rolls)
    assert r1["total"] == sum(rolls) - min(rolls)


def test_pool_bounds():
    rng = RNG(5)
    for _ in range(50):
        pool = roll_ability_pool(rng)
        assert len(pool) == 6
        assert all(3 <= v <= 18 for v in pool)
