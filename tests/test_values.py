"""
Tests for TDS Column Values
===========================

Run with: pytest tests/
"""

from datetime import datetime, timezone

import pytest

from tds_codec.tds import TypedValue, ValueShape, TypeMismatchError, TDSCodecError


class TestConstructors:
    """Tests for TypedValue named constructors"""

    @pytest.mark.parametrize("factory, low, high", [
        (TypedValue.uint8, 0, 255),
        (TypedValue.int16, -32768, 32767),
        (TypedValue.int32, -2 ** 31, 2 ** 31 - 1),
        (TypedValue.int64, -2 ** 63, 2 ** 63 - 1),
    ])
    def test_integer_ranges(self, factory, low, high):
        """Test sized integers accept their full range and nothing more"""
        assert factory(low).value == low
        assert factory(high).value == high
        with pytest.raises(ValueError):
            factory(low - 1)
        with pytest.raises(ValueError):
            factory(high + 1)

    def test_direct_construction_is_checked(self):
        """Test building a sized integer directly checks its range"""
        with pytest.raises(ValueError):
            TypedValue(ValueShape.UINT8, 300)
        with pytest.raises(ValueError):
            TypedValue(ValueShape.INT32, 2 ** 31)
        with pytest.raises(TypeError):
            TypedValue(ValueShape.INT16, 1.5)
        assert TypedValue(ValueShape.INT, 2 ** 40).value == 2 ** 40

    def test_integer_rejects_other_types(self):
        with pytest.raises(TypeError):
            TypedValue.int32(1.0)
        with pytest.raises(TypeError):
            TypedValue.int16(True)

    def test_float32_rounds(self):
        """Test float32 stores the single precision value"""
        value = TypedValue.float32(0.1)
        assert value.shape == ValueShape.FLOAT32
        assert value.value != 0.1
        assert abs(value.value - 0.1) < 1e-8

    def test_of_float_subclass(self):
        """Test inferred floats are stored as plain floats"""
        class WrappedFloat(float):
            def __repr__(self):
                return f"WrappedFloat({float(self)})"

        value = TypedValue.of(WrappedFloat(2.5))
        assert value.shape == ValueShape.FLOAT64
        assert type(value.value) is float
        assert value.value == 2.5

    def test_float64_accepts_int(self):
        value = TypedValue.float64(2)
        assert value.value == 2.0
        assert isinstance(value.value, float)

    def test_boolean(self):
        assert TypedValue.boolean(True).shape == ValueShape.BOOL
        with pytest.raises(TypeError):
            TypedValue.boolean(1)

    def test_binary_copies(self):
        """Test binary keeps its own immutable copy"""
        source = bytearray(b'abc')
        value = TypedValue.binary(source)
        source[0] = 0

        assert value.value == b'abc'
        assert isinstance(value.value, bytes)

    def test_text_and_timestamp_types(self):
        with pytest.raises(TypeError):
            TypedValue.text(b'abc')
        with pytest.raises(TypeError):
            TypedValue.timestamp("2024-01-01")

    def test_equality(self):
        """Test equality covers both shape and value"""
        assert TypedValue.int32(5) == TypedValue.int32(5)
        assert TypedValue.int32(5) != TypedValue.int64(5)


class TestShapeInference:
    """Tests for TypedValue.of"""

    @pytest.mark.parametrize("value, shape", [
        (True, ValueShape.BOOL),
        (5, ValueShape.INT),
        (5.0, ValueShape.FLOAT64),
        ("five", ValueShape.TEXT),
        (b'five', ValueShape.BYTES),
        (bytearray(b'five'), ValueShape.BYTES),
        (datetime(2024, 1, 1, tzinfo=timezone.utc), ValueShape.TIMESTAMP),
    ])
    def test_infer(self, value, shape):
        assert TypedValue.of(value).shape == shape

    def test_typed_value_passes_through(self):
        value = TypedValue.int16(3)
        assert TypedValue.of(value) is value

    def test_unknown_python_type(self):
        assert TypedValue.of(None) is None
        assert TypedValue.of([1]) is None


class TestExceptions:
    """Tests for codec exceptions"""

    def test_type_mismatch_hierarchy(self):
        """Test mismatches can be caught as codec or type errors"""
        error = TypeMismatchError(56, ValueShape.INT32, ValueShape.TEXT)
        assert isinstance(error, TDSCodecError)
        assert isinstance(error, TypeError)

    def test_type_mismatch_message(self):
        error = TypeMismatchError(56, ValueShape.INT32, ValueShape.TEXT)
        assert str(error) == "Could not convert text to int32 for SYBINT4"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
