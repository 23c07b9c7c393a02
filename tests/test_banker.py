import io

import pytest
import yaml

from sotaller.banker import Banker, BankerError, Reason, RequestOutcome

TEXTBOOK = {
    "processes": 5,
    "resources": 3,
    "vectors": {
        "availables": [3, 3, 2],
        "max": [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]],
        "allocated": [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]],
    },
}


def _small():
    return Banker([1], [[2], [2]], [[1], [0]])


def _state(banker):
    return (
        list(banker.available),
        [row[:] for row in banker.allocated],
        [row[:] for row in banker.need],
    )


def test_need_is_max_minus_allocated():
    banker = Banker.from_mapping(TEXTBOOK)
    vectors = TEXTBOOK["vectors"]
    for i in range(5):
        for j in range(3):
            assert banker.need[i][j] == vectors["max"][i][j] - vectors["allocated"][i][j]


def test_textbook_safe_sequence():
    banker = Banker.from_mapping(TEXTBOOK)
    assert banker.is_safe() is True
    assert banker.safe_sequence == [1, 3, 4, 0, 2]


def test_safe_sequence_is_permutation():
    banker = Banker.from_mapping(TEXTBOOK)
    banker.is_safe()
    assert sorted(banker.safe_sequence) == list(range(banker.processes))


def test_unsafe_state():
    banker = Banker([0], [[2], [2]], [[1], [1]])
    assert banker.is_safe() is False
    assert banker.safe_sequence == []


def test_format_safe_sequence():
    banker = _small()
    banker.is_safe()
    assert banker.format_safe_sequence() == "0 1 \n"


def test_format_matrices():
    assert _small().format_matrices() == (
        "\tAllocated\tMax\tNeed\tAvailable\n"
        "0\t1 \t\t2 \t1 \t1 \n"
        "1\t0 \t\t2 \t2 \n"
    )


def test_is_safe_trace():
    banker = Banker.from_mapping(TEXTBOOK)
    out = io.StringIO()
    assert banker.is_safe(out) is True
    text = out.getvalue()
    assert text.startswith("\tAllocated\tMax\tNeed\tAvailable\n")
    assert text.count("Process:") == 1 + 2 * banker.processes


def test_grant_updates_state():
    banker = Banker.from_mapping(TEXTBOOK)
    before = _state(banker)
    request = [1, 0, 2]
    assert banker.evaluate_request(1, request) is RequestOutcome.GRANTED
    assert banker.available == [a - r for a, r in zip(before[0], request)]
    assert banker.allocated[1] == [a + r for a, r in zip(before[1][1], request)]
    assert banker.need[1] == [n - r for n, r in zip(before[2][1], request)]


def test_must_wait_leaves_state():
    banker = Banker.from_mapping(TEXTBOOK)
    banker.evaluate_request(1, [1, 0, 2])
    before = _state(banker)
    assert banker.evaluate_request(4, [3, 3, 0]) is RequestOutcome.MUST_WAIT
    assert _state(banker) == before


def test_exhausted_leaves_state():
    banker = _small()
    before = _state(banker)
    assert banker.evaluate_request(0, [2]) is RequestOutcome.EXHAUSTED
    assert _state(banker) == before


def test_unsafe_request_rolls_back():
    banker = _small()
    before = _state(banker)
    out = io.StringIO()
    assert banker.evaluate_request(1, [1], out) is RequestOutcome.UNSAFE
    assert _state(banker) == before
    assert out.getvalue().startswith("\tAllocated")


def test_unsafe_message_mentions_rollback():
    outcome = _small().evaluate_request(1, [1], io.StringIO())
    assert "rollback the previous requirement" in outcome.message


def test_invalid_request_arguments():
    banker = _small()
    with pytest.raises(IndexError):
        banker.evaluate_request(5, [1])
    with pytest.raises(ValueError):
        banker.evaluate_request(0, [1, 1])


def test_missing_counts():
    with pytest.raises(BankerError) as info:
        Banker.from_mapping({"resources": 1})
    assert info.value.reason is Reason.FORMAT
    assert "Not found process or resources numbers" in str(info.value)


@pytest.mark.parametrize(
    "vectors, message",
    [
        ({}, "Vector available is not defined"),
        ({"availables": [1, 2]}, "Number of resources on available vector doesn't found"),
        ({"availables": [1]}, "Vector max is not found"),
        ({"availables": [1], "max": [[2]]}, "reading max"),
        ({"availables": [1], "max": [[2], [2]]}, "Vector allocated is not found"),
        ({"availables": [1], "max": [[2], [2]], "allocated": [[1]]}, "reading allocated"),
    ],
)
def test_format_errors(vectors, message):
    data = {"processes": 2, "resources": 1, "vectors": vectors}
    with pytest.raises(BankerError) as info:
        Banker.from_mapping(data)
    assert info.value.reason is Reason.FORMAT
    assert info.value.detail == message


def test_non_integer_value():
    data = {"processes": "two", "resources": 1, "vectors": {}}
    with pytest.raises(BankerError) as info:
        Banker.from_mapping(data)
    assert info.value.reason is Reason.MEMORY_ALLOC


def test_from_file_round_trip(tmp_path):
    path = tmp_path / "banker.yaml"
    path.write_text(yaml.safe_dump(TEXTBOOK), encoding="utf-8")
    loaded = Banker.from_file(str(path))
    direct = Banker.from_mapping(TEXTBOOK)
    loaded.is_safe()
    direct.is_safe()
    assert loaded.safe_sequence == direct.safe_sequence
    assert loaded.need == direct.need


def test_from_file_missing(tmp_path):
    with pytest.raises(BankerError) as info:
        Banker.from_file(str(tmp_path / "absent.yaml"))
    assert info.value.reason is Reason.INPUT
    assert str(info.value) == "Input exception  opening file"


def test_from_file_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("processes: [unclosed\n", encoding="utf-8")
    with pytest.raises(BankerError) as info:
        Banker.from_file(str(path))
    assert info.value.reason is Reason.MEMORY_ALLOC


def test_constructor_rejects_ragged_max():
    with pytest.raises(BankerError) as info:
        Banker([1, 1], [[1, 1], [1]], [[0, 0], [0, 0]])
    assert info.value.detail == "reading max"