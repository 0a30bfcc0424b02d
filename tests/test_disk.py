import pytest

from disk import DiskPolicy, clook, compare_policies, look, schedule, sstf
from errors import InvalidRangeError, ValidationError

HEAD = 50
DISK_SIZE = 200
REQUESTS = [98, 183, 37, 122, 14, 124, 65, 67]


def test_sstf_follows_literal_distances():
    result = schedule(DiskPolicy.SSTF, HEAD, DISK_SIZE, REQUESTS)
    # 37 is 13 away, 65 is 15 away
    assert result.visit_order == [50, 37, 14, 65, 67, 98, 122, 124, 183]
    assert result.total_movement == 205


def test_sstf_tie_goes_to_earlier_request():
    assert sstf(50, [60, 40]) == [60, 40]
    assert sstf(50, [40, 60]) == [40, 60]


def test_look():
    result = schedule(DiskPolicy.LOOK, HEAD, DISK_SIZE, REQUESTS)
    assert result.visit_order == [50, 65, 67, 98, 122, 124, 183, 37, 14]
    assert result.total_movement == 302


def test_clook_counts_wrap_around():
    result = schedule(DiskPolicy.CLOOK, HEAD, DISK_SIZE, REQUESTS)
    assert result.visit_order == [50, 65, 67, 98, 122, 124, 183, 14, 37]
    assert result.total_movement == 325
    assert 183 - 14 in result.seek_distances()


def test_movements_start_at_head():
    result = schedule("clook", HEAD, DISK_SIZE, REQUESTS)
    assert result.policy == DiskPolicy.CLOOK
    assert result.movements[0].position == HEAD
    assert [m.visit_order for m in result.movements] == list(range(len(REQUESTS) + 1))


@pytest.mark.parametrize("policy", DiskPolicy.ALL)
@pytest.mark.parametrize("head,requests", [
    (50, REQUESTS),
    (0, [5, 199, 0, 42]),
    (199, [3, 150, 150, 7]),
    (120, [10, 20]),
])
def test_total_is_sum_of_consecutive_distances(policy, head, requests):
    result = schedule(policy, head, DISK_SIZE, requests)
    positions = result.visit_order
    assert result.total_movement == sum(abs(b - a) for a, b in zip(positions, positions[1:]))
    assert sorted(positions[1:]) == sorted(requests)


def test_head_above_all_requests():
    assert look(120, [10, 20]) == [20, 10]
    assert clook(120, [10, 20]) == [10, 20]


def test_empty_requests():
    result = schedule(DiskPolicy.SSTF, HEAD, DISK_SIZE, [])
    assert result.visit_order == [HEAD]
    assert result.total_movement == 0
    assert result.average_seek == 0.0


@pytest.mark.parametrize("head,requests", [
    (200, [10]),
    (-1, [10]),
    (50, [10, 200]),
    (50, [-4]),
])
def test_out_of_range(head, requests):
    with pytest.raises(InvalidRangeError):
        schedule(DiskPolicy.LOOK, head, DISK_SIZE, requests)


def test_bad_disk_size_and_policy():
    with pytest.raises(ValidationError):
        schedule(DiskPolicy.LOOK, 0, 0, [])
    with pytest.raises(ValidationError):
        schedule("SCAN", HEAD, DISK_SIZE, REQUESTS)


def test_compare_policies():
    results = compare_policies(HEAD, DISK_SIZE, REQUESTS)
    assert {k: r.total_movement for k, r in results.items()} == {
        DiskPolicy.SSTF: 205,
        DiskPolicy.LOOK: 302,
        DiskPolicy.CLOOK: 325,
    }
