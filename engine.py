# engine.py

import logging

from errors import NoFitError, UnknownAllocationError, ValidationError

logger = logging.getLogger(__name__)


class Allocation:
    def __init__(self, alloc_id, size, block_id=None):
        self.alloc_id = alloc_id
        self.size = size
        self.block_id = block_id

    @property
    def allocated(self):
        return self.block_id is not None

    def __repr__(self):
        where = f"B{self.block_id}" if self.allocated else "freed"
        return f"[P{self.alloc_id}|{self.size}|{where}]"


class MemoryBlock:
    def __init__(self, block_id, capacity):
        self.block_id = block_id
        self.capacity = capacity
        self.occupants = []
        self.free_remaining = capacity

    @property
    def used(self):
        return self.capacity - self.free_remaining

    def __repr__(self):
        parts = "-".join(str(a.size) for a in self.occupants) or "empty"
        return f"[B{self.block_id}|{self.capacity}|{parts}|{self.free_remaining}]"


class AllocationResult:
    def __init__(self, allocation, block):
        self.allocation = allocation
        self.block = block

    @property
    def block_id(self):
        return self.block.block_id


class BestFitAllocator:
    """Best-fit allocator over a list of fixed, independent memory blocks.

    Each block keeps its own occupants and remaining free space; requests
    are never split across blocks. The allocator instance owns all of its
    state, so one instance is one simulation run.
    """

    def __init__(self, block_sizes=(), strict=False):
        self.strict = strict
        self.reset()
        for size in block_sizes:
            self.add_block(size)

    def reset(self):
        self.blocks = []
        self.allocations = {}
        self.next_id = 1
        self.event_log = []

    def load_preset(self, block_sizes):
        self.reset()
        for size in block_sizes:
            self.add_block(size)

    def _log(self, message):
        self.event_log.append(message)
        logger.info(message)

    # -----------------------------
    # Blocks
    # -----------------------------
    def add_block(self, capacity):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValidationError("Please enter a valid block size")

        block_id = max(b.block_id for b in self.blocks) + 1 if self.blocks else 1
        block = MemoryBlock(block_id, capacity)
        self.blocks.append(block)
        self._log(f"Block {block_id} added: {capacity}")
        return block

    def get_block(self, block_id):
        for block in self.blocks:
            if block.block_id == block_id:
                return block
        return None

    # -----------------------------
    # Allocate / Free
    # -----------------------------
    def find_best_fit(self, req_size):
        """Return the block a request of ``req_size`` would land in, or None."""
        candidates = [b for b in self.blocks if b.free_remaining >= req_size]
        if not candidates:
            return None
        return min(candidates, key=lambda b: (b.free_remaining, b.block_id))

    def allocate(self, req_size):
        if not isinstance(req_size, int) or isinstance(req_size, bool) or req_size <= 0:
            raise ValidationError("Please enter a valid process size")

        block = self.find_best_fit(req_size)
        if block is None:
            self._log(f"No fit: process of size {req_size}")
            raise NoFitError("No suitable memory block available for this process")

        allocation = Allocation(self.next_id, req_size, block.block_id)
        self.next_id += 1

        block.occupants.append(allocation)
        block.free_remaining -= req_size
        self.allocations[allocation.alloc_id] = allocation

        self._log(
            f"Allocated: P{allocation.alloc_id} ({req_size}) -> Block {block.block_id}, "
            f"remaining {block.free_remaining}"
        )
        return AllocationResult(allocation, block)

    def free(self, alloc_id):
        """Release an allocation back to its block.

        Unknown or already freed ids are ignored and ``None`` is returned,
        unless the allocator is strict, in which case
        ``UnknownAllocationError`` is raised.
        """
        allocation = self.allocations.get(alloc_id)
        if allocation is None or not allocation.allocated:
            if self.strict:
                raise UnknownAllocationError(f"Allocation {alloc_id} is not allocated")
            return None

        block = self.get_block(allocation.block_id)
        block.occupants = [a for a in block.occupants if a.alloc_id != alloc_id]
        block.free_remaining += allocation.size
        allocation.block_id = None

        self._log(f"Freed: P{alloc_id} ({allocation.size}) from Block {block.block_id}")
        return allocation

    # -----------------------------
    # State
    # -----------------------------
    def get_state(self):
        return self.blocks

    def get_allocations(self):
        return [self.allocations[k] for k in sorted(self.allocations)]

    def active_allocations(self):
        return [a for a in self.get_allocations() if a.allocated]

    def total_capacity(self):
        return sum(b.capacity for b in self.blocks)

    def total_free(self):
        return sum(b.free_remaining for b in self.blocks)

    # --------------------------------------
    # Utilization Metrics
    # --------------------------------------
    def get_metrics(self):
        total = self.total_capacity()
        total_free = self.total_free()
        free_sizes = [b.free_remaining for b in self.blocks if b.free_remaining > 0]

        # Scattered free space: 1 - largest_free / total_free
        if total_free == 0:
            scattered = 0
        else:
            scattered = 1 - (max(free_sizes) / total_free)

        utilization = (total - total_free) / total if total else 0

        return {
            "blocks": len(self.blocks),
            "capacity": total,
            "free": total_free,
            "largest_free": max(free_sizes) if free_sizes else 0,
            "scattered": round(scattered, 4),
            "utilization": round(utilization, 4),
        }
