from src.garment_payroll.garment_payroll.payroll.penalties import flat_penalty, progressive_penalty


def test_progressive_penalty_values():
    assert progressive_penalty(0) == 0
    assert progressive_penalty(1) == 10000
    assert progressive_penalty(2) == 22000
    assert progressive_penalty(3) == 36000


def test_progressive_penalty_matches_series():
    for n in range(1, 12):
        assert progressive_penalty(n) == sum(10000 + 2000 * i for i in range(n))


def test_negative_count_costs_nothing():
    assert progressive_penalty(-1) == 0
    assert flat_penalty(-3) == 0


def test_flat_penalty():
    assert flat_penalty(2) == 20000
    assert flat_penalty(0) == 0
