"""Tests for run tag generation."""

import re
from datetime import datetime

from rof.core.tag import new_run_tag


class TestNewRunTag:
    def test_second_resolution_timestamp(self, fixed_clock):
        assert new_run_tag(clock=fixed_clock) == "20260102030405"

    def test_default_clock_shape(self):
        assert re.fullmatch(r"\d{14}", new_run_tag())

    def test_same_second_gives_same_tag(self, fixed_clock):
        assert new_run_tag(clock=fixed_clock) == new_run_tag(clock=fixed_clock)

    def test_tags_sort_chronologically(self):
        earlier = new_run_tag(clock=lambda: datetime(2026, 1, 2, 3, 4, 5))
        later = new_run_tag(clock=lambda: datetime(2026, 1, 2, 3, 4, 6))
        assert earlier < later

    def test_custom_format(self, fixed_clock):
        assert new_run_tag(clock=fixed_clock, fmt="%Y%m%d-%H%M%S") == "20260102-030405"

    def test_collision_appends_counter(self, fixed_clock):
        tag = new_run_tag(clock=fixed_clock, taken={"20260102030405"})
        assert tag == "20260102030405-1"

    def test_collision_counter_skips_used_values(self, fixed_clock):
        taken = {"20260102030405", "20260102030405-1", "20260102030405-2"}
        assert new_run_tag(clock=fixed_clock, taken=taken) == "20260102030405-3"

    def test_unrelated_taken_tags_are_ignored(self, fixed_clock):
        tag = new_run_tag(clock=fixed_clock, taken=["20200101000000"])
        assert tag == "20260102030405"

    def test_tag_never_contains_separator(self, fixed_clock):
        assert "." not in new_run_tag(clock=fixed_clock, taken={"20260102030405"})
