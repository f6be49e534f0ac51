from leaderdex.term import TermPositions


def test_add_position_counts_occurrences():
    positions = TermPositions()
    positions.add_position(3)
    positions.add_position(3)
    positions.add_position(5)
    assert positions.count(3) == 2
    assert positions.count(5) == 1
    assert positions.document_count() == 2


def test_count_of_unknown_document_is_zero():
    positions = TermPositions()
    positions.add_position(1)
    assert positions.count(7) == 0


def test_documents_lists_every_document():
    positions = TermPositions()
    for document_id in (4, 2, 4, 9):
        positions.add_position(document_id)
    assert positions.documents() == {2, 4, 9}


def test_add_position_with_count():
    positions = TermPositions()
    positions.add_position_with_count(1, 5)
    positions.add_position_with_count(1, 2)
    assert positions.count(1) == 7


def test_merge_sums_counts():
    left = TermPositions()
    left.add_position_with_count(0, 2)
    left.add_position_with_count(1, 1)
    right = TermPositions()
    right.add_position_with_count(1, 4)
    right.add_position_with_count(2, 3)
    left.merge(right)
    assert dict(left.items()) == {0: 2, 1: 5, 2: 3}
    assert right.count(1) == 4


def test_equality_ignores_insertion_order():
    first = TermPositions()
    first.add_position(1)
    first.add_position(2)
    second = TermPositions()
    second.add_position(2)
    second.add_position(1)
    assert first == second