import pytest

from refuel_radar.common.errors import CoercionError
from refuel_radar.common.numeric import NUMBER, STRING, NumericField, coerce_float


def test_coerce_float_accepts_numbers_and_numeric_strings():
    assert coerce_float(138.9) == 138.9
    assert coerce_float(0) == 0.0
    assert coerce_float("129.9") == 129.9
    assert coerce_float("-0.127758") == -0.127758
    assert coerce_float("1e3") == 1000.0


@pytest.mark.parametrize("value", [True, False, None, {}, [], "abc", "", " 1.5", "1.5\n", "1_000", "nan", "inf", 10**400, -(10**400)])
def test_coerce_float_rejects_unsupported_values(value):
    with pytest.raises(CoercionError):
        coerce_float(value)


def test_numeric_field_records_its_source_kind():
    assert NumericField.from_json(51.5).kind == NUMBER
    field = NumericField.from_json("51.5")
    assert field.kind == STRING
    assert field.raw == "51.5"
    assert field.as_float() == 51.5
