import pytest

from engine import BestFitAllocator
from errors import NoFitError, UnknownAllocationError, ValidationError


@pytest.fixture
def allocator():
    return BestFitAllocator([50, 100, 350, 500])


def test_add_block_assigns_next_id():
    alloc = BestFitAllocator()
    assert alloc.add_block(10).block_id == 1
    assert alloc.add_block(20).block_id == 2
    assert [b.free_remaining for b in alloc.blocks] == [10, 20]


@pytest.mark.parametrize("capacity", [0, -5, 2.5, True])
def test_add_block_rejects_bad_capacity(capacity):
    with pytest.raises(ValidationError):
        BestFitAllocator().add_block(capacity)


def test_allocate_picks_smallest_sufficient_block(allocator):
    result = allocator.allocate(90)
    assert result.block_id == 2
    assert result.block.free_remaining == 10
    assert [a.size for a in result.block.occupants] == [90]

    # block 2 now has 10 left, block 1 has 50: 40 goes to block 1
    assert allocator.allocate(40).block_id == 1
    # 10 fits block 2 (10 left) and block 1 (10 left): tie goes to the lowest id
    assert allocator.allocate(10).block_id == 1


def test_allocate_only_touches_chosen_block(allocator):
    before = {b.block_id: b.free_remaining for b in allocator.blocks}
    result = allocator.allocate(200)
    after = {b.block_id: b.free_remaining for b in allocator.blocks}
    assert result.block_id == 3
    assert after[3] == before[3] - 200
    assert {k: v for k, v in after.items() if k != 3} == {k: v for k, v in before.items() if k != 3}


def test_chosen_block_is_minimal_among_candidates():
    alloc = BestFitAllocator([70, 30, 45, 30, 90])
    for size in [25, 5, 40, 20, 1, 60]:
        candidates = [b.free_remaining for b in alloc.blocks if b.free_remaining >= size]
        result = alloc.allocate(size)
        assert result.block.free_remaining + size == min(candidates)


def test_no_fit_leaves_state_untouched(allocator):
    allocator.allocate(450)
    snapshot = [(b.block_id, b.free_remaining, len(b.occupants)) for b in allocator.blocks]
    with pytest.raises(NoFitError):
        allocator.allocate(501)
    assert [(b.block_id, b.free_remaining, len(b.occupants)) for b in allocator.blocks] == snapshot
    assert allocator.next_id == 2


def test_allocate_rejects_non_positive(allocator):
    with pytest.raises(ValidationError):
        allocator.allocate(0)


def test_free_restores_capacity_and_keeps_record(allocator):
    total = allocator.total_free()
    result = allocator.allocate(80)
    assert allocator.total_free() == total - 80

    freed = allocator.free(result.allocation.alloc_id)
    assert freed is result.allocation
    assert freed.block_id is None
    assert allocator.total_free() == total
    assert result.block.occupants == []
    assert allocator.get_allocations() == [freed]


def test_free_unknown_or_twice_is_ignored(allocator):
    result = allocator.allocate(30)
    allocator.free(result.allocation.alloc_id)
    total = allocator.total_free()
    assert allocator.free(result.allocation.alloc_id) is None
    assert allocator.free(999) is None
    assert allocator.total_free() == total


def test_strict_free_raises():
    alloc = BestFitAllocator([10], strict=True)
    with pytest.raises(UnknownAllocationError):
        alloc.free(1)


def test_allocate_then_free_all_round_trip():
    alloc = BestFitAllocator([50, 100, 350, 500])
    original = [b.free_remaining for b in alloc.blocks]
    ids = [alloc.allocate(size).allocation.alloc_id for size in [40, 212, 417, 98, 10, 100]]
    for alloc_id in ids:
        alloc.free(alloc_id)
    assert [b.free_remaining for b in alloc.blocks] == original
    assert alloc.active_allocations() == []


def test_allocation_ids_unique_across_frees(allocator):
    first = allocator.allocate(10).allocation.alloc_id
    allocator.free(first)
    second = allocator.allocate(10).allocation.alloc_id
    assert second != first


def test_metrics(allocator):
    allocator.allocate(500)
    metrics = allocator.get_metrics()
    assert metrics["capacity"] == 1000
    assert metrics["free"] == 500
    assert metrics["largest_free"] == 350
    assert metrics["utilization"] == 0.5
    assert metrics["scattered"] == 0.3


def test_reset_and_preset(allocator):
    allocator.allocate(10)
    allocator.load_preset([5, 6])
    assert [b.capacity for b in allocator.blocks] == [5, 6]
    assert allocator.get_allocations() == []
    assert allocator.next_id == 1
