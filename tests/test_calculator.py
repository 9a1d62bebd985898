import pytest

from packcalc.calculator import Calculator, Packing, PackingError


@pytest.fixture
def calc():
    return Calculator(1000000)


def test_edge_case_handled_correctly(calc):
    got = calc.calculate_packing(500000, 23, 31, 53)
    assert got == [
        Packing(box_size=53, quantity=9429),
        Packing(box_size=31, quantity=7),
        Packing(box_size=23, quantity=2),
    ]


@pytest.mark.parametrize(
    "order, packs",
    [
        (0, (23, 31, 53)),
        (1000001, (23, 31, 53)),
        (-1, (23, 31, 53)),
        (10, ()),
        (10, (23, 0, 53)),
        (10, (2, 23, 31, 53, 31)),
    ],
    ids=[
        "order size is zero",
        "order size exceeds limit",
        "order size is negative",
        "no packs provided",
        "one of the packs is zero",
        "packs are duplicated",
    ],
)
def test_errors(calc, order, packs):
    with pytest.raises(PackingError):
        calc.calculate_packing(order, *packs)


def test_limit_message_mentions_limit():
    with pytest.raises(PackingError, match="limit of 100 items"):
        Calculator(100).calculate_packing(101, 5)


def test_order_at_limit_is_allowed():
    got = Calculator(10).calculate_packing(10, 5)
    assert got == [Packing(box_size=5, quantity=2)]


def test_overpacks_with_fewest_items_then_fewest_boxes(calc):
    got = calc.calculate_packing(12001, 250, 500, 1000, 2000, 5000)
    assert got == [
        Packing(box_size=5000, quantity=2),
        Packing(box_size=2000, quantity=1),
        Packing(box_size=250, quantity=1),
    ]


def test_small_order_uses_smallest_pack(calc):
    got = calc.calculate_packing(1, 250, 500, 1000)
    assert got == [Packing(box_size=250, quantity=1)]


def test_result_sorted_descending_and_covers_order(calc):
    got = calc.calculate_packing(777, 7, 13, 100)
    sizes = [p.box_size for p in got]
    assert sizes == sorted(sizes, reverse=True)
    assert sum(p.box_size * p.quantity for p in got) >= 777


def test_input_order_does_not_matter(calc):
    assert calc.calculate_packing(501, 53, 23, 31) == calc.calculate_packing(
        501, 23, 31, 53
    )


def test_to_dict():
    assert Packing(box_size=53, quantity=9429).to_dict() == {
        "boxSize": 53,
        "quantity": 9429,
    }