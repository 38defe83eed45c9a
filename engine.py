# engine.py
"""
Page replacement simulation engine.

Replays a reference string against a fixed number of frames under one of four
replacement policies (FIFO, LRU, Optimal, Clock) and records, for every
reference, an immutable snapshot of the frame table together with the
hit/fault outcome and the evicted page.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple


class InvalidInput(ValueError):
    """Raised when simulation parameters are rejected before any work is done."""


# =============================================================================
# DATA MODEL
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """
    One slot of physical memory.

    Attributes:
        page (Optional[int]): Resident page, None if the frame is empty
        last_used (int): Step at which the page was last referenced (0 = never)
        loaded_at (int): Step at which the page was loaded (0 = never)
        reference_bit (bool): Second-chance bit, only meaningful for Clock
    """
    page: Optional[int] = None
    last_used: int = 0
    loaded_at: int = 0
    reference_bit: bool = False

    @property
    def is_empty(self) -> bool:
        return self.page is None


FrameTable = Tuple[Frame, ...]


@dataclass(frozen=True)
class SimulationStep:
    """
    Outcome of a single reference.

    The frame table is stored as a tuple of frozen frames, so a step is a
    self-contained value that later steps cannot modify.

    Attributes:
        index (int): 0-based position of the reference in the input
        reference (int): The page that was referenced
        frames (FrameTable): Frame table after the reference was applied
        is_fault (bool): True if the page was not resident
        evicted_page (Optional[int]): Page removed to make room, if any
        clock_hand (Optional[int]): Clock hand after the step (Clock only)
        policy (str): Policy that produced the step
    """
    index: int
    reference: int
    frames: FrameTable
    is_fault: bool
    evicted_page: Optional[int] = None
    clock_hand: Optional[int] = None
    policy: str = ""

    @property
    def is_hit(self) -> bool:
        return not self.is_fault

    @property
    def frame_index(self) -> int:
        """Frame now holding the referenced page."""
        for i, frame in enumerate(self.frames):
            if frame.page == self.reference:
                return i
        raise LookupError(f"page {self.reference} is not resident")


SimulationRun = Tuple[SimulationStep, ...]


@dataclass(frozen=True)
class Statistics:
    """Fault/hit totals of a run."""
    fault_count: int
    hit_count: int

    @property
    def total(self) -> int:
        return self.fault_count + self.hit_count

    @property
    def hit_ratio(self) -> float:
        return round(self.hit_count / self.total, 4) if self.total > 0 else 0.0

    @property
    def fault_rate(self) -> float:
        return round(self.fault_count / self.total, 4) if self.total > 0 else 0.0


class ReplacementPolicy:
    """
    Available page replacement algorithms.

    FIFO:    replaces the page that has been in memory the longest
    LRU:     replaces the page not used for the longest time
    OPTIMAL: replaces the page whose next use is farthest in the future
    CLOCK:   second-chance approximation of LRU using reference bits
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"
    CLOCK = "Clock"

    ALL = (FIFO, LRU, OPTIMAL, CLOCK)

    LABELS = {
        FIFO: "First-In-First-Out (FIFO)",
        LRU: "Least Recently Used (LRU)",
        OPTIMAL: "Optimal",
        CLOCK: "Clock (Second Chance)",
    }

    DESCRIPTIONS = {
        FIFO: "Replaces the page that has been in memory the longest, regardless of usage.",
        LRU: "Replaces the page that hasn't been used for the longest period of time.",
        OPTIMAL: "Replaces the page that won't be used for the longest time in the future "
                 "(theoretical best, needs the whole reference string).",
        CLOCK: "Approximates LRU with a reference bit per frame and a circular hand "
               "that gives recently used pages a second chance.",
    }


# =============================================================================
# VALIDATION
# =============================================================================

def _validate(references: Sequence[int], frame_count: int) -> List[int]:
    if isinstance(frame_count, bool) or not isinstance(frame_count, int):
        raise InvalidInput(f"frame count must be an integer, got {frame_count!r}")
    if frame_count < 1:
        raise InvalidInput(f"frame count must be at least 1, got {frame_count}")

    pages = list(references)
    for pos, page in enumerate(pages):
        if isinstance(page, bool) or not isinstance(page, int):
            raise InvalidInput(f"reference #{pos + 1} is not an integer page: {page!r}")
        if page < 0:
            raise InvalidInput(f"reference #{pos + 1} is negative: {page}")
    return pages


# -----------------------------
# Helpers
# -----------------------------

def _find_page(frames: List[Frame], page: int) -> Optional[int]:
    for i, frame in enumerate(frames):
        if frame.page == page:
            return i
    return None


def _find_empty(frames: List[Frame]) -> Optional[int]:
    for i, frame in enumerate(frames):
        if frame.is_empty:
            return i
    return None


def _oldest(frames: List[Frame], key: str) -> int:
    # min() keeps the first of equal values, i.e. the lowest frame index
    return min(range(len(frames)), key=lambda i: getattr(frames[i], key))


def _next_use(references: List[int], page: int, after: int) -> Optional[int]:
    for pos in range(after + 1, len(references)):
        if references[pos] == page:
            return pos
    return None


def _load(page: int, now: int, reference_bit: bool = False) -> Frame:
    return Frame(page=page, last_used=now, loaded_at=now, reference_bit=reference_bit)


# =============================================================================
# POLICY SIMULATORS
# =============================================================================

def _simulate_queue(references: List[int], frame_count: int, policy: str) -> SimulationRun:
    """
    Shared loop for FIFO, LRU and Optimal.

    All three differ only in how a victim is chosen on a full table and in
    whether a hit refreshes ``last_used``.
    """
    frames: List[Frame] = [Frame() for _ in range(frame_count)]
    steps: List[SimulationStep] = []

    for index, page in enumerate(references):
        now = index + 1
        hit_index = _find_page(frames, page)

        # ----- PAGE HIT -----
        if hit_index is not None:
            if policy == ReplacementPolicy.LRU:
                frames[hit_index] = replace(frames[hit_index], last_used=now)
            steps.append(SimulationStep(index, page, tuple(frames), False, policy=policy))
            continue

        # ----- PAGE FAULT -----
        target = _find_empty(frames)
        if target is None:
            if policy == ReplacementPolicy.FIFO:
                target = _oldest(frames, "loaded_at")
            elif policy == ReplacementPolicy.LRU:
                target = _oldest(frames, "last_used")
            else:
                target = _optimal_victim(frames, references, index)

        evicted = frames[target].page
        frames[target] = _load(page, now)
        steps.append(SimulationStep(index, page, tuple(frames), True, evicted, policy=policy))

    return tuple(steps)


def _optimal_victim(frames: List[Frame], references: List[int], index: int) -> int:
    victim = 0
    farthest = -1
    for i, frame in enumerate(frames):
        next_use = _next_use(references, frame.page, index)
        # Never used again: cannot do better than this one
        if next_use is None:
            return i
        if next_use > farthest:
            farthest = next_use
            victim = i
    return victim


def simulate_fifo(references: Sequence[int], frame_count: int) -> SimulationRun:
    """Evict the page with the earliest load time."""
    return _simulate_queue(_validate(references, frame_count), frame_count, ReplacementPolicy.FIFO)


def simulate_lru(references: Sequence[int], frame_count: int) -> SimulationRun:
    """Evict the page with the earliest last use; hits refresh the last use."""
    return _simulate_queue(_validate(references, frame_count), frame_count, ReplacementPolicy.LRU)


def simulate_optimal(references: Sequence[int], frame_count: int) -> SimulationRun:
    """
    Belady's clairvoyant policy.

    On a full table, looks ahead through the rest of the reference string and
    evicts the first page that is never referenced again, or else the page
    whose next reference is farthest away (the lowest frame index wins ties).
    """
    return _simulate_queue(_validate(references, frame_count), frame_count, ReplacementPolicy.OPTIMAL)


def simulate_clock(references: Sequence[int], frame_count: int) -> SimulationRun:
    """
    Second-chance replacement.

    Frames form a circle traversed by a hand. A referenced page gets its bit
    set; on a fault the hand clears set bits as it passes and evicts the first
    frame whose bit is already clear. Every bit is cleared at most once per
    scan, so the scan ends within one revolution plus one frame.
    """
    references = _validate(references, frame_count)
    frames: List[Frame] = [Frame() for _ in range(frame_count)]
    steps: List[SimulationStep] = []
    hand = 0

    for index, page in enumerate(references):
        now = index + 1
        hit_index = _find_page(frames, page)

        # ----- PAGE HIT -----
        if hit_index is not None:
            frames[hit_index] = replace(frames[hit_index], last_used=now, reference_bit=True)
            steps.append(SimulationStep(index, page, tuple(frames), False,
                                        clock_hand=hand, policy=ReplacementPolicy.CLOCK))
            continue

        # ----- PAGE FAULT -----
        evicted = None
        empty = _find_empty(frames)
        if empty is not None:
            frames[empty] = _load(page, now, reference_bit=True)
            hand = (empty + 1) % frame_count
        else:
            while frames[hand].reference_bit:
                frames[hand] = replace(frames[hand], reference_bit=False)
                hand = (hand + 1) % frame_count
            evicted = frames[hand].page
            frames[hand] = _load(page, now, reference_bit=True)
            hand = (hand + 1) % frame_count

        steps.append(SimulationStep(index, page, tuple(frames), True, evicted,
                                    clock_hand=hand, policy=ReplacementPolicy.CLOCK))

    return tuple(steps)


# =============================================================================
# DISPATCH & STATISTICS
# =============================================================================

_SIMULATORS = {
    ReplacementPolicy.FIFO: simulate_fifo,
    ReplacementPolicy.LRU: simulate_lru,
    ReplacementPolicy.OPTIMAL: simulate_optimal,
    ReplacementPolicy.CLOCK: simulate_clock,
}


def simulate(policy: str, references: Sequence[int], frame_count: int) -> SimulationRun:
    """
    Run one policy over a reference string.

    Args:
        policy (str): One of ``ReplacementPolicy.ALL``
        references (Sequence[int]): Non-negative page numbers in access order
        frame_count (int): Number of frames, at least 1

    Returns:
        SimulationRun: One step per reference; empty for an empty input

    Raises:
        InvalidInput: Unknown policy, frame count below 1, or a reference that
            is not a non-negative integer
    """
    simulator = _SIMULATORS.get(policy)
    if simulator is None:
        raise InvalidInput(f"unknown replacement policy: {policy!r}")
    return simulator(references, frame_count)


def simulate_all(references: Sequence[int], frame_count: int) -> Dict[str, SimulationRun]:
    """Run every policy over the same input, keyed by policy name."""
    references = _validate(references, frame_count)
    return {policy: simulate(policy, references, frame_count) for policy in ReplacementPolicy.ALL}


def statistics(run: Sequence[SimulationStep]) -> Statistics:
    faults = sum(1 for step in run if step.is_fault)
    return Statistics(fault_count=faults, hit_count=len(run) - faults)


def compare(references: Sequence[int], frame_count: int) -> Dict[str, Statistics]:
    return {policy: statistics(run) for policy, run in simulate_all(references, frame_count).items()}


# =============================================================================
# EVENT LOG
# =============================================================================

def describe_step(step: SimulationStep) -> List[str]:
    """
    Human-readable events for one step, in the order they happened.

    Example for a fault on a full table::

        ["Fault: Page 3 not in memory",
         "Evicting: Page 7 from Frame 0",
         "Loaded: Page 3 -> Frame 0 (replaced)"]
    """
    frame_no = step.frame_index
    if step.is_hit:
        events = [f"Hit: Page {step.reference} in Frame {frame_no}"]
    else:
        events = [f"Fault: Page {step.reference} not in memory"]
        if step.evicted_page is not None:
            events.append(f"Evicting: Page {step.evicted_page} from Frame {frame_no}")
            events.append(f"Loaded: Page {step.reference} -> Frame {frame_no} (replaced)")
        else:
            events.append(f"Loaded: Page {step.reference} -> Frame {frame_no}")
    if step.clock_hand is not None:
        events.append(f"Clock hand -> Frame {step.clock_hand}")
    return events


def event_log(run: Sequence[SimulationStep], upto: Optional[int] = None) -> List[str]:
    """All events of ``run`` up to and including step ``upto`` (whole run if None)."""
    last = len(run) - 1 if upto is None else min(upto, len(run) - 1)
    log: List[str] = []
    for step in run[:last + 1]:
        log.extend(f"[{step.index + 1}] {event}" for event in describe_step(step))
    return log
