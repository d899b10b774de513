"""Per-policy decision tests with hand-checked traces."""

import pytest
from pagesim import ClockState, InternalInvariantViolation, simulate
from pagesim.policies import CLOCK

BELADY = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
TEXTBOOK = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2, 1, 2, 0, 1, 7, 0, 1]
SHORT = [1, 2, 1, 3, 2]


def slots(trace):
    return [step.slots for step in trace]


class TestFIFO:
    """Test FIFO eviction."""

    def test_belady_anomaly_capacity_3(self):
        """Test 9 faults with three slots."""
        _, summary = simulate("FIFO", 3, BELADY)
        assert summary.faults == 9
        assert summary.hits == 3

    def test_belady_anomaly_capacity_4(self):
        """Test 10 faults with four slots (more than with three)."""
        _, summary = simulate("FIFO", 4, BELADY)
        assert summary.faults == 10
        assert summary.hits == 2

    def test_hits_do_not_move_pointer(self):
        """Test a hit on the oldest entry does not save it."""
        trace, _ = simulate("FIFO", 3, [1, 2, 3, 1, 4, 5])
        assert trace[3].hit
        assert trace[4].evicted == 1
        assert trace[4].evicted_slot == 0
        assert trace[5].evicted == 2
        assert trace[5].evicted_slot == 1
        assert trace[5].slots == (4, 5, 3)

    def test_pointer_wraps(self):
        """Test the pointer cycles through every slot."""
        trace, _ = simulate("FIFO", 2, [1, 2, 3, 4, 5])
        assert [s.evicted_slot for s in trace[2:]] == [0, 1, 0]
        assert [s.evicted for s in trace[2:]] == [1, 2, 3]

    def test_textbook_string(self):
        """Test the classic 20-reference string."""
        _, summary = simulate("FIFO", 3, TEXTBOOK)
        assert summary.faults == 15


class TestLRU:
    """Test LRU eviction."""

    def test_short_scenario(self):
        """Test 4 faults, evicting 2 then 1."""
        trace, summary = simulate("LRU", 2, SHORT)
        assert summary.faults == 4
        assert summary.hits == 1
        assert trace[3].evicted == 2
        assert trace[4].evicted == 1
        assert slots(trace) == [
            (1, None), (1, 2), (1, 2), (1, 3), (2, 3),
        ]

    def test_hit_refreshes_recency(self):
        """Test a hit protects the entry from the next eviction."""
        trace, _ = simulate("LRU", 3, [7, 0, 1, 2, 0, 3, 0, 4])
        assert trace[3].evicted == 7
        assert trace[5].evicted == 1
        assert trace[7].evicted == 2
        assert trace[7].slots == (4, 0, 3)

    def test_textbook_string(self):
        """Test the classic 20-reference string."""
        _, summary = simulate("LRU", 3, TEXTBOOK)
        assert summary.faults == 12

    def test_belady_string(self):
        """Test LRU on the anomaly string."""
        _, summary = simulate("LRU", 3, BELADY)
        assert summary.faults == 10


class TestOPT:
    """Test Belady's optimal eviction."""

    def test_short_scenario(self):
        """Test the entry with no future use is evicted."""
        trace, summary = simulate("OPT", 2, SHORT)
        assert summary.faults == 3
        assert summary.hits == 2
        assert trace[3].evicted == 1
        assert trace[3].evicted_slot == 0
        assert trace[4].hit

    def test_farthest_next_use(self):
        """Test the entry used farthest ahead is evicted."""
        trace, _ = simulate("OPT", 3, [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5])
        assert trace[3].evicted == 3
        assert trace[6].evicted == 4

    def test_tie_on_no_future_use(self):
        """Test the lowest slot wins when several entries are never used again."""
        trace, _ = simulate("OPT", 3, [1, 2, 3, 4, 3])
        assert trace[3].evicted == 1
        assert trace[3].evicted_slot == 0

    def test_no_future_beats_far_future(self):
        """Test an entry never used again loses to a later one."""
        trace, _ = simulate("OPT", 3, [1, 2, 3, 4, 1])
        assert trace[3].evicted == 2
        assert trace[3].evicted_slot == 1

    def test_lookahead_matches_residency(self):
        """Test a reused non-self-equal entry counts as a future use."""
        nan = float("nan")
        trace, summary = simulate("OPT", 2, [nan, 1, 2, nan])
        # nan is needed again at step 3, so 1 is the victim
        assert trace[2].evicted == 1
        assert trace[3].hit
        assert summary.hits == 1

    def test_textbook_string(self):
        """Test the classic 20-reference string."""
        _, summary = simulate("OPT", 3, TEXTBOOK)
        assert summary.faults == 9

    def test_belady_string(self):
        """Test OPT on the anomaly string."""
        _, summary = simulate("OPT", 3, BELADY)
        assert summary.faults == 7


class TestCLOCK:
    """Test second-chance eviction."""

    def test_short_scenario(self):
        """Test eviction after clearing both bits."""
        trace, summary = simulate("CLOCK", 2, SHORT)
        assert summary.faults == 3
        assert summary.hits == 2
        assert trace[3].evicted == 1
        assert trace[3].aux == ClockState((1, 0), 1, 3)
        assert trace[4].hit
        assert trace[4].aux == ClockState((1, 1), 1, 0)

    def test_first_fill_leaves_hand(self):
        """Test inserting into empty slots sets bits without moving the hand."""
        trace, _ = simulate("CLOCK", 3, [1, 2])
        assert trace[1].aux == ClockState((1, 1, 0), 0, 0)

    def test_clear_bit_evicted_immediately(self):
        """Test a clear bit under the hand is evicted on the first scan."""
        trace, _ = simulate("CLOCK", 3, [1, 2, 3, 4, 5])
        assert trace[3].aux.scans == 4
        assert trace[4].evicted == 2
        assert trace[4].aux.scans == 1
        assert trace[4].aux.hand == 2

    def test_second_chance(self):
        """Test a referenced entry survives one sweep."""
        trace, _ = simulate("CLOCK", 3, [1, 2, 3, 4, 2, 5])
        # after 4: bits (1, 0, 0), hand 1; the hit on 2 sets slot 1 again
        assert trace[4].aux == ClockState((1, 1, 0), 1, 0)
        assert trace[5].evicted == 3
        assert trace[5].evicted_slot == 2
        assert trace[5].aux == ClockState((1, 0, 1), 0, 2)

    def test_belady_string(self):
        """Test CLOCK on the anomaly string."""
        _, summary = simulate("CLOCK", 3, BELADY)
        assert summary.faults == 9
        assert summary.hits == 3

    def test_capacity_one(self):
        """Test a single slot needs two scans to evict."""
        trace, summary = simulate("CLOCK", 1, [1, 1, 2])
        assert summary.faults == 2
        assert trace[2].aux == ClockState((1,), 0, 2)

    def test_sweep_bound_enforced(self):
        """Test a sweep that never finds a clear bit fails loudly."""

        class StickyBits(list):
            def __setitem__(self, index, value):
                super().__setitem__(index, 1)

        engine = CLOCK(2, (1, 2, 3))
        engine.ref_bits = StickyBits([0, 0])
        with pytest.raises(InternalInvariantViolation, match="exceeded 4 scans"):
            engine.run()


class TestCommonShape:
    """Test behaviour shared by every policy."""

    @pytest.mark.parametrize("policy", ["FIFO", "LRU", "OPT", "CLOCK"])
    def test_lowest_empty_slot_first(self, policy):
        """Test first fill goes left to right."""
        trace, _ = simulate(policy, 3, [9, 8, 7])
        assert slots(trace) == [(9, None, None), (9, 8, None), (9, 8, 7)]

    @pytest.mark.parametrize("policy", ["FIFO", "LRU", "OPT", "CLOCK"])
    def test_capacity_one(self, policy):
        """Test a single slot behaves the same under every policy."""
        _, summary = simulate(policy, 1, [1, 1, 2, 2, 1])
        assert summary.faults == 3
        assert summary.hits == 2

    @pytest.mark.parametrize("policy", ["FIFO", "LRU", "OPT", "CLOCK"])
    def test_hit_leaves_slots(self, policy):
        """Test a hit never changes the slot contents."""
        trace, _ = simulate(policy, 2, [1, 2, 2, 1])
        assert trace[2].slots == trace[1].slots
        assert trace[3].slots == trace[1].slots
        assert trace[3].evicted is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
