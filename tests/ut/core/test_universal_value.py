import datetime
import decimal
import fractions
import uuid
from collections import OrderedDict

import pytest

from panser.core.models.value import to_plain_data, to_universal


class Tagged:
    def __init__(self, tag, value):
        self.tag = tag
        self.value = value


@pytest.mark.ut
@pytest.mark.parametrize("value", [None, True, False, 0, -7, 2**70, 1.5, "s", b"\x00"])
def test_scalars_are_kept(value):
    result = to_universal(value)

    assert result == value
    assert type(result) is type(value)


@pytest.mark.ut
def test_containers_are_normalised():
    value = OrderedDict(a=(1, 2), b=bytearray(b"xy"), c={"d": frozenset([3])})

    result = to_universal(value)

    assert result == {"a": [1, 2], "b": b"xy", "c": {"d": [3]}}
    assert type(result) is dict


@pytest.mark.ut
def test_rich_scalars_become_strings_and_numbers():
    moment = datetime.datetime(2024, 5, 1, 12, 30, tzinfo=datetime.timezone.utc)
    ident = uuid.UUID("12345678-1234-5678-1234-567812345678")

    assert to_universal(moment) == "2024-05-01T12:30:00+00:00"
    assert to_universal(datetime.date(2024, 5, 1)) == "2024-05-01"
    assert to_universal(ident) == "12345678-1234-5678-1234-567812345678"
    assert to_universal(decimal.Decimal("1.25")) == 1.25
    assert to_universal(fractions.Fraction(1, 4)) == 0.25


@pytest.mark.ut
def test_tagged_values_are_unwrapped():
    assert to_universal(Tagged(32, "http://example.com")) == "http://example.com"


@pytest.mark.ut
def test_scalar_keys_are_allowed():
    assert to_universal({1: "a", None: "b", b"k": "c"}) == {1: "a", None: "b", b"k": "c"}


@pytest.mark.ut
def test_composite_keys_are_rejected():
    with pytest.raises(TypeError):
        to_universal({(1, 2): "tuple key"})


@pytest.mark.ut
def test_unknown_objects_are_rejected():
    with pytest.raises(TypeError):
        to_universal(object())


@pytest.mark.ut
def test_plain_data_for_text_formats():
    value = {1: b"\x01\x02", None: [b"a"], 2.5: "f", "s": {"n": 1.5}}

    assert to_plain_data(value) == {
        "1": [1, 2],
        "null": [[97]],
        "2.5": "f",
        "s": {"n": 1.5},
    }


@pytest.mark.ut
def test_plain_data_boolean_keys():
    assert to_plain_data({True: 1, b"k": 2}) == {"true": 1, "k": 2}
