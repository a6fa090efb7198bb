from __future__ import annotations

from datetime import UTC, datetime
from itertools import permutations

from parkval.dedup.classify import StatusClass, StatusVocabulary
from parkval.dedup.cleaner import clean
from parkval.dedup.events import DedupDecision, DedupRule
from parkval.dedup.policy import decide, parse_timestamp
from parkval.models.record import ValidationRecord

T_JAN = "2024-01-01T00:00:00Z"
T_JUN = "2024-06-01T00:00:00Z"


def _rec(plate: str, status: str, last_updated: str = "", row: int | None = None) -> ValidationRecord:
    return ValidationRecord(license_plate=plate, status=status, last_updated=last_updated, row_index=row)


def test_newer_permanent_wins_regardless_of_order() -> None:
    a = _rec("12가3456", "직원차량", T_JAN)
    b = _rec("12가3456", "직원차량", T_JUN)

    assert clean([a, b]) == [b]
    assert clean([b, a]) == [b]


def test_newer_temporary_wins_regardless_of_order() -> None:
    a = _rec("X", "유효", T_JAN)
    b = _rec("X", "유효", T_JUN)

    assert clean([a, b]) == [b]
    assert clean([b, a]) == [b]


def test_priority_order_holds_for_every_input_order() -> None:
    permanent = _rec("P", "영구", T_JAN, row=2)
    temporary = _rec("P", "유효", T_JUN, row=3)
    invalid = _rec("P", "무효", T_JUN, row=4)

    for ordering in permutations([permanent, temporary, invalid]):
        assert clean(list(ordering)) == [permanent]


def test_valid_beats_invalid_even_when_older() -> None:
    invalid = _rec("P", "", T_JUN)
    valid = _rec("P", "유효", T_JAN)

    assert clean([invalid, valid]) == [valid]
    assert clean([valid, invalid]) == [valid]


def test_kept_permanent_not_overturned_by_newer_temporary() -> None:
    permanent = _rec("P", "직원차량", T_JAN)
    temporary = _rec("P", "유효", T_JUN)

    assert clean([permanent, temporary]) == [permanent]


def test_both_invalid_keeps_first() -> None:
    first = _rec("P", "무효", T_JAN, row=2)
    second = _rec("P", "", T_JUN, row=3)

    assert clean([first, second]) == [first]


def test_equal_timestamps_keep_existing() -> None:
    first = _rec("P", "유효", T_JAN, row=2)
    second = _rec("P", "유효", T_JAN, row=3)

    assert clean([first, second]) == [first]


def test_unparseable_timestamp_never_counts_as_later() -> None:
    dated = _rec("P", "직원차량", T_JAN, row=2)
    garbage = _rec("P", "직원차량", "not-a-date", row=3)

    assert clean([dated, garbage]) == [dated]
    assert clean([garbage, dated]) == [dated]


def test_empty_plate_records_are_dropped() -> None:
    records = [_rec("", "유효", T_JAN), _rec("A", "유효", T_JAN), _rec("", "직원차량", T_JUN)]

    assert clean(records) == [records[1]]
    assert clean([_rec("", "유효")]) == []


def test_one_record_per_plate_in_first_seen_order() -> None:
    records = [
        _rec("B", "무효"),
        _rec("A", "유효", T_JAN),
        _rec("B", "유효", T_JAN),
        _rec("C", ""),
        _rec("A", "직원차량", T_JAN),
    ]

    result = clean(records)

    assert [r.license_plate for r in result] == ["B", "A", "C"]
    assert {r.license_plate for r in result} == {r.license_plate for r in records}
    assert result[0].status == "유효"
    assert result[1].status == "직원차량"


def test_clean_is_idempotent() -> None:
    records = [
        _rec("A", "유효", T_JUN),
        _rec("A", "직원차량", T_JAN),
        _rec("B", "무효"),
        _rec("B", "무효"),
        _rec("C", "유효", T_JAN),
        _rec("C", "유효", T_JUN),
    ]

    once = clean(records)

    assert clean(once) == once


def test_input_is_not_mutated() -> None:
    records = [_rec("A", "유효", T_JAN), _rec("A", "직원차량", T_JUN)]
    snapshot = list(records)

    clean(records)

    assert records == snapshot


def test_end_to_end_example() -> None:
    t1 = "2024-06-01T00:00:00Z"
    t2 = "2024-01-01T00:00:00Z"
    records = [_rec("A", "유효", t1), _rec("A", "직원차량", t2), _rec("B", "무효")]

    result = clean(records)

    assert result == [records[1], records[2]]


def test_decision_hook_sees_every_record() -> None:
    seen: list[DedupDecision] = []
    records = [_rec("A", "무효"), _rec("A", "유효", T_JAN), _rec("A", "직원차량", T_JAN), _rec("A", "유효", T_JUN)]

    clean(records, on_decision=seen.append)

    assert [d.rule for d in seen] == [
        DedupRule.FIRST_SEEN,
        DedupRule.VALID_OVER_INVALID,
        DedupRule.PERMANENT_OVER_TEMPORARY,
        DedupRule.KEEP_EXISTING,
    ]
    assert [d.replaced for d in seen] == [True, True, True, False]
    assert seen[-1].kept is records[2]
    assert seen[-1].previous is records[2]


def test_custom_vocabulary_changes_survivor() -> None:
    vocabulary = StatusVocabulary.of(permanent={"staff"}, valid={"ok"})
    records = [_rec("A", "ok", T_JUN), _rec("A", "staff", T_JAN)]

    assert clean(records, vocabulary=vocabulary) == [records[1]]
    # Unknown labels under the default vocabulary are both invalid: first stays.
    assert clean(records) == [records[0]]


def test_decide_rules() -> None:
    assert decide(
        existing_class=StatusClass.PERMANENT,
        incoming_class=StatusClass.INVALID,
        existing_updated=T_JAN,
        incoming_updated=T_JUN,
    ) == (DedupRule.KEEP_EXISTING, False)
    assert decide(
        existing_class=StatusClass.PERMANENT,
        incoming_class=StatusClass.PERMANENT,
        existing_updated=T_JAN,
        incoming_updated=T_JUN,
    ) == (DedupRule.NEWER_PERMANENT, True)
    assert decide(
        existing_class=StatusClass.VALID_TEMPORARY,
        incoming_class=StatusClass.VALID_TEMPORARY,
        existing_updated=T_JUN,
        incoming_updated=T_JAN,
    ) == (DedupRule.NEWER_TEMPORARY, False)


def test_parse_timestamp_variants() -> None:
    expected = datetime(2024, 1, 1, tzinfo=UTC)

    assert parse_timestamp("2024-01-01T00:00:00Z") == expected
    assert parse_timestamp("2024-01-01T00:00:00.000Z") == expected
    assert parse_timestamp("2024-01-01T09:00:00+09:00") == expected
    assert parse_timestamp("2024-01-01T00:00:00") == expected
    assert parse_timestamp("garbage") < expected
    assert parse_timestamp("") == parse_timestamp(None)
