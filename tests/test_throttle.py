"""
Tests for host cooldowns and request pacing
"""

import asyncio
import time

import pytest

from linch.throttle import HostCooldownTable, RequestPacer


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestHostCooldownTable:
    def test_unknown_host_is_free(self):
        table = HostCooldownTable(clock=FakeClock())
        assert not table.is_cooling_down('example.com')
        assert table.remaining('example.com') == 0.0
        assert table.active_hosts() == {}

    def test_cooldown_expires(self):
        clock = FakeClock()
        table = HostCooldownTable(clock=clock)

        table.cool_down_for('Example.com', 5)
        assert table.is_cooling_down('example.com')
        assert table.remaining('example.com') == pytest.approx(5.0)
        assert table.active_hosts() == {'example.com': pytest.approx(5.0)}

        clock.now += 5
        assert not table.is_cooling_down('example.com')
        assert table.active_hosts() == {}

    def test_later_cooldown_overwrites(self):
        clock = FakeClock()
        table = HostCooldownTable(clock=clock)

        table.set_cooldown('example.com', clock.now + 10)
        table.set_cooldown('example.com', clock.now + 2)

        assert table.remaining('example.com') == pytest.approx(2.0)

    def test_hosts_are_independent(self):
        clock = FakeClock()
        table = HostCooldownTable(clock=clock)
        table.cool_down_for('a.example.com', 3)

        assert table.is_cooling_down('a.example.com')
        assert not table.is_cooling_down('b.example.com')
        assert table.active_hosts() == {'a.example.com': pytest.approx(3.0)}


class TestRequestPacer:
    @pytest.mark.asyncio
    async def test_no_delay_is_a_no_op(self):
        pacer = RequestPacer(delay=0)
        started = time.monotonic()
        for _ in range(5):
            await pacer.wait_for_turn('example.com')
        assert time.monotonic() - started < 0.05

    @pytest.mark.asyncio
    async def test_spaces_requests_to_the_same_host(self):
        pacer = RequestPacer(delay=0.1)
        started = time.monotonic()

        await asyncio.gather(*(pacer.wait_for_turn('example.com') for _ in range(3)))

        assert time.monotonic() - started >= 0.19

    @pytest.mark.asyncio
    async def test_different_hosts_do_not_wait(self):
        pacer = RequestPacer(delay=1.0)
        started = time.monotonic()

        await asyncio.gather(*(pacer.wait_for_turn(f'host{i}.example.com') for i in range(5)))

        assert time.monotonic() - started < 0.5
