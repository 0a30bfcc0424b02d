"""
Second Chance page replacement simulator.

A fixed number of frames is filled in order; once every frame is occupied,
a circular pointer sweeps the frame table. Frames whose reference bit is set
get a second chance (the bit is cleared and the pointer moves on); the first
frame with a clear bit is evicted.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from errors import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class Frame:
    """
    A physical frame in the frame table.

    Attributes:
        frame_no (int): The frame's index in the table
        page_id (Optional[int]): The page held here, None if empty
        reference_bit (bool): Set on a hit, cleared by the replacement scan
    """
    frame_no: int
    page_id: Optional[int] = None
    reference_bit: bool = False

    @property
    def occupied(self) -> bool:
        return self.page_id is not None


@dataclass(frozen=True)
class FrameState:
    """Immutable copy of a frame taken after a step."""
    page_id: Optional[int]
    reference_bit: bool


class Outcome:
    HIT = "hit"
    FAULT = "fault"


class SimulationState:
    IDLE = "idle"
    STEPPING = "stepping"
    COMPLETE = "complete"


@dataclass(frozen=True)
class StepResult:
    """
    One entry of the step trace.

    Attributes:
        step_index (int): Position of the reference in the run (0-based)
        page_id (int): The referenced page
        outcome (str): Outcome.HIT or Outcome.FAULT
        frames (Tuple[FrameState, ...]): Frame table after the step
        frame_index (int): Frame now holding page_id
        evicted_page (Optional[int]): Page removed by the scan, if any
        inspected (int): Frames examined by the replacement scan (0 if none ran)
        pointer (int): Replacement pointer after the step
    """
    step_index: int
    page_id: int
    outcome: str
    frames: Tuple[FrameState, ...]
    frame_index: int
    evicted_page: Optional[int] = None
    inspected: int = 0
    pointer: int = 0

    @property
    def is_fault(self) -> bool:
        return self.outcome == Outcome.FAULT


# =============================================================================
# SIMULATOR
# =============================================================================

class SecondChanceSimulator:
    """
    Step-by-step Second Chance simulation over a fixed frame table.

    Attributes:
        frame_count (int): Number of frames, fixed for a run
        frames (List[Frame]): The live frame table
        pointer (int): Replacement pointer, 0 <= pointer < frame_count
        trace (List[StepResult]): Append-only record of processed references
        references (List[int]): Reference string loaded for playback
        cursor (int): Index of the next reference in ``references``
        event_log (List[str]): Human readable log of every step
    """

    def __init__(self, frame_count: int):
        self.configure(frame_count)

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def configure(self, frame_count: int):
        """
        Set the number of frames and start a fresh run.

        Raises:
            ValidationError: If frame_count is not a positive integer
        """
        if not isinstance(frame_count, int) or isinstance(frame_count, bool) or frame_count < 1:
            raise ValidationError("Number of page frames must be at least 1")
        self.frame_count = frame_count
        self.reset()

    def reset(self, frame_count: Optional[int] = None):
        """
        Discard frames, trace, pointer and loaded references.

        Args:
            frame_count (Optional[int]): New frame count, keeps the current one if None
        """
        if frame_count is not None and frame_count != self.frame_count:
            self.configure(frame_count)
            return
        self.frames: List[Frame] = [Frame(i) for i in range(self.frame_count)]
        self.pointer = 0
        self.trace: List[StepResult] = []
        self.references: List[int] = []
        self.cursor = 0
        self.event_log: List[str] = []

    def load(self, sequence: Iterable[int]):
        """Reset the run and queue a reference string for ``step_next``."""
        references = list(sequence)
        for page_id in references:
            self._check_page(page_id)
        self.reset()
        self.references = references

    @property
    def state(self) -> str:
        if not self.trace:
            return SimulationState.IDLE
        if self.references and self.cursor >= len(self.references):
            return SimulationState.COMPLETE
        return SimulationState.STEPPING

    @property
    def remaining(self) -> List[int]:
        return self.references[self.cursor:]

    # =========================================================================
    # STEPPING
    # =========================================================================

    def step(self, page_id: int) -> StepResult:
        """
        Process one page reference.

        Args:
            page_id (int): Page being referenced

        Returns:
            StepResult: The new trace entry
        """
        self._check_page(page_id)

        evicted = None
        inspected = 0
        frame = next((f for f in self.frames if f.page_id == page_id), None)

        if frame is not None:
            # ----- HIT -----
            frame.reference_bit = True
            outcome = Outcome.HIT
            self._log(f"Hit: Page {page_id} in Frame {frame.frame_no}, reference bit set")
        else:
            # ----- FAULT -----
            outcome = Outcome.FAULT
            frame = next((f for f in self.frames if not f.occupied), None)
            if frame is not None:
                frame.page_id = page_id
                frame.reference_bit = False
                self._log(f"Fault: Page {page_id} -> empty Frame {frame.frame_no}")
            else:
                frame, evicted, inspected = self._replace(page_id)

        result = StepResult(
            step_index=len(self.trace),
            page_id=page_id,
            outcome=outcome,
            frames=self.snapshot(),
            frame_index=frame.frame_no,
            evicted_page=evicted,
            inspected=inspected,
            pointer=self.pointer,
        )
        self.trace.append(result)
        return result

    def _replace(self, page_id: int) -> Tuple[Frame, int, int]:
        """
        Run the circular second-chance scan and install ``page_id``.

        Every inspected frame with a set bit has it cleared, so the scan
        ends within two passes over the table.

        Returns:
            Tuple[Frame, int, int]: (victim frame, evicted page, frames inspected)
        """
        inspected = 0
        while True:
            inspected += 1
            assert inspected <= 2 * self.frame_count
            frame = self.frames[self.pointer]
            self.pointer = (self.pointer + 1) % self.frame_count

            if frame.reference_bit:
                frame.reference_bit = False
                self._log(f"Second chance: Page {frame.page_id} in Frame {frame.frame_no}")
                continue

            evicted = frame.page_id
            frame.page_id = page_id
            frame.reference_bit = False
            self._log(
                f"Fault: Page {page_id} replaces Page {evicted} in Frame {frame.frame_no} "
                f"(pointer -> {self.pointer})"
            )
            return frame, evicted, inspected

    def step_next(self) -> Optional[StepResult]:
        """Process the next loaded reference; None once the sequence is exhausted."""
        if self.cursor >= len(self.references):
            return None
        page_id = self.references[self.cursor]
        self.cursor += 1
        return self.step(page_id)

    def run_all(self, sequence: Optional[Iterable[int]] = None) -> List[StepResult]:
        """
        Process every remaining reference.

        Args:
            sequence (Optional[Iterable[int]]): Reference string to load first;
                when None the already loaded references are continued

        Returns:
            List[StepResult]: The full trace of the run
        """
        if sequence is not None:
            self.load(sequence)
        while self.step_next() is not None:
            pass
        return list(self.trace)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def _check_page(self, page_id):
        if not isinstance(page_id, int) or isinstance(page_id, bool) or page_id < 0:
            raise ValidationError(f"Invalid page reference: {page_id!r}")

    def _log(self, message: str):
        self.event_log.append(message)
        logger.info(message)

    def snapshot(self) -> Tuple[FrameState, ...]:
        return tuple(FrameState(f.page_id, f.reference_bit) for f in self.frames)

    @property
    def fault_count(self) -> int:
        return sum(1 for entry in self.trace if entry.is_fault)

    @property
    def hit_count(self) -> int:
        return len(self.trace) - self.fault_count

    @property
    def hit_ratio(self) -> float:
        total = len(self.trace)
        return (total - self.fault_count) / total if total else 0.0

    def get_stats(self) -> Dict[str, float]:
        """
        Returns:
            Dict[str, float]: hits, faults, hit_ratio, fault_rate, total_refs
        """
        total_refs = len(self.trace)
        faults = self.fault_count
        fault_rate = (faults / total_refs) if total_refs > 0 else 0.0

        return {
            "hits": total_refs - faults,
            "faults": faults,
            "hit_ratio": round(self.hit_ratio, 4),
            "fault_rate": round(fault_rate, 4),
            "total_refs": total_refs,
        }
