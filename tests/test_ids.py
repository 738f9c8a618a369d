import random

from app.collection.ids import ID_MAX, ID_MIN, next_id


def test_next_id_is_ten_digits_without_leading_zero():
    for _ in range(500):
        value = next_id()
        assert len(value) == 10
        assert value.isdigit()
        assert value[0] != "0"
        assert ID_MIN <= int(value) <= ID_MAX


def test_next_id_uses_given_rng():
    assert next_id(random.Random(7)) == next_id(random.Random(7))
