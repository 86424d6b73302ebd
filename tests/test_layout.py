from tubeterm_cli.layout import (
    Direction,
    Length,
    Max,
    Min,
    Percentage,
    Rect,
    centering_filler,
    row_constraints,
    split,
)


def widths(rects):
    return [r.width for r in rects]


def test_centered_row_filler_and_chunks_fill_width():
    constraints = row_constraints([Length(10), Length(20)], centered=True, width=50)

    assert constraints[0] == Length(10)
    assert constraints[-1] == Length(0)
    chunks = split(Rect(0, 0, 50, 3), constraints, Direction.HORIZONTAL)
    assert len(chunks) == 4
    assert sum(widths(chunks)) == 50
    assert widths(chunks)[:3] == [10, 10, 20]


def test_uncentered_row_gets_zero_fillers():
    constraints = row_constraints([Min(16), Length(5)], centered=False, width=80)
    assert constraints == [Length(0), Min(16), Length(5), Length(0)]


def test_centering_counts_percentage_and_truncates():
    # 40% of 51 is 20; (51 - 20 - 10) // 2 == 10
    assert centering_filler([Percentage(40), Length(10)], 51) == Length(10)
    # odd leftover: (50 - 15) // 2 == 17, row sits one column left of center
    assert centering_filler([Length(15)], 50) == Length(17)


def test_centering_filler_never_negative():
    assert centering_filler([Length(40), Length(40)], 50) == Length(0)


def test_min_constraints_absorb_spare_space():
    chunks = split(Rect(0, 0, 20, 20), [Length(3), Length(3), Min(6), Length(3)], Direction.VERTICAL)
    assert [c.height for c in chunks] == [3, 3, 11, 3]
    assert [c.y for c in chunks] == [0, 3, 6, 17]


def test_spare_space_split_between_min_constraints():
    chunks = split(Rect(0, 0, 21, 1), [Min(5), Min(5), Length(1)], Direction.HORIZONTAL)
    assert widths(chunks) == [10, 10, 1]


def test_overflow_truncates_from_the_end():
    chunks = split(Rect(5, 0, 12, 1), [Length(10), Max(10), Length(4)], Direction.HORIZONTAL)
    assert widths(chunks) == [10, 2, 0]
    assert chunks[0].x == 5 and chunks[1].x == 15


def test_inner_rect_shrinks_by_border():
    assert Rect(2, 3, 10, 5).inner() == Rect(3, 4, 8, 3)
    assert Rect(0, 0, 1, 1).inner().is_empty()
