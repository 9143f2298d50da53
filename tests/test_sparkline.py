import pytest

from core.sparkline import TICKS, render


def test_one_glyph_per_value_in_order():
    assert render([0, 1, 2, 3, 4, 5, 6, 7]) == TICKS
    assert render([7, 6, 5, 4, 3, 2, 1, 0]) == TICKS[::-1]


def test_all_zero_month_renders_lowest_glyph():
    line = render([0] * 31)

    assert line == TICKS[0] * 31


def test_flat_nonzero_series_renders_lowest_glyph():
    assert render([4, 4, 4]) == TICKS[0] * 3


def test_extremes_use_lowest_and_highest_glyph():
    line = render([0] * 30 + [150])

    assert len(line) == 31
    assert line[:30] == TICKS[0] * 30
    assert line[30] == TICKS[-1]


def test_larger_value_never_renders_lower():
    values = [0, 3, 1, 9, 27, 2, 100, 55, 54, 56]
    line = render(values)
    level = {glyph: i for i, glyph in enumerate(TICKS)}

    for (a, ga), (b, gb) in zip(zip(values, line), zip(values[1:], line[1:])):
        if a < b:
            assert level[ga] <= level[gb]
        elif a > b:
            assert level[ga] >= level[gb]


def test_identical_inputs_render_identically():
    assert render([1, 5, 0, 2]) == render([1.0, 5.0, 0.0, 2.0])


def test_empty_series():
    assert render([]) == ""


def test_custom_ticks():
    assert render([0, 5, 10], ticks="_-^") == "_-^"


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        render([1, -1])
