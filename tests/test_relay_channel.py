"""Tests del canal de relevo acotado.

Ejecutar:
    pytest tests/test_relay_channel.py -v
"""

import asyncio

import pytest

from collector.relay.channel import RelayChannel
from collector.relay.relay_config import ChannelClosedError, RelayConfig


@pytest.fixture
def channel() -> RelayChannel:
    return RelayChannel(RelayConfig(capacity=2))


# =============================================================================
# FIFO + CIERRE
# =============================================================================

class TestFifoAndClose:

    @pytest.mark.asyncio
    async def test_items_received_in_send_order(self):
        ch = RelayChannel(RelayConfig(capacity=5))
        for i in range(5):
            await ch.send(i)
        await ch.close()

        received = [await ch.receive() for _ in range(5)]

        assert received == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_pending_items_drained_after_close(self, channel):
        await channel.send("a")
        await channel.send("b")
        await channel.close()

        assert await channel.receive() == "a"
        assert await channel.receive() == "b"
        assert await channel.receive() is None
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_receive_waits_while_empty_and_open(self, channel):
        task = asyncio.create_task(channel.receive())
        await asyncio.sleep(0.01)
        assert not task.done()

        await channel.send("x")

        assert await asyncio.wait_for(task, timeout=1.0) == "x"

    @pytest.mark.asyncio
    async def test_close_wakes_waiting_receiver(self, channel):
        task = asyncio.create_task(channel.receive())
        await asyncio.sleep(0.01)

        await channel.close()

        assert await asyncio.wait_for(task, timeout=1.0) is None

    @pytest.mark.asyncio
    async def test_send_after_close_raises(self, channel):
        await channel.close()

        with pytest.raises(ChannelClosedError, match="closed"):
            await channel.send("late")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, channel):
        await channel.close()
        await channel.close()

        assert channel.is_closed is True


# =============================================================================
# BACKPRESSURE
# =============================================================================

class TestBackpressure:

    @pytest.mark.asyncio
    async def test_send_suspends_while_full(self, channel):
        sent = []

        async def producer():
            for i in range(5):
                await channel.send(i)
                sent.append(i)

        task = asyncio.create_task(producer())
        await asyncio.sleep(0.01)

        assert sent == [0, 1]
        assert channel.stats["blocked_sends"] == 1
        assert channel.size == 2

        assert await channel.receive() == 0
        await asyncio.sleep(0.01)
        assert sent == [0, 1, 2]

        while len(sent) < 5:
            await channel.receive()
            await asyncio.sleep(0)
        await asyncio.wait_for(task, timeout=1.0)

    @pytest.mark.asyncio
    async def test_nothing_dropped_under_pressure(self):
        ch = RelayChannel(RelayConfig(capacity=1))

        async def producer():
            for i in range(50):
                await ch.send(i)
            await ch.close()

        async def consumer():
            out = []
            while (item := await ch.receive()) is not None:
                out.append(item)
                await asyncio.sleep(0)
            return out

        _, received = await asyncio.gather(producer(), consumer())

        assert received == list(range(50))
        assert ch.stats["sent"] == ch.stats["received"] == 50
        assert ch.stats["max_depth"] == 1

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            RelayConfig(capacity=0)


# =============================================================================
# RECEPTOR DESAPARECIDO
# =============================================================================

class TestDetachedReceiver:

    @pytest.mark.asyncio
    async def test_send_fails_after_detach(self, channel):
        await channel.detach_receiver()

        with pytest.raises(ChannelClosedError, match="receiver is gone"):
            await channel.send("x")

    @pytest.mark.asyncio
    async def test_blocked_send_released_by_detach(self, channel):
        await channel.send(1)
        await channel.send(2)
        task = asyncio.create_task(channel.send(3))
        await asyncio.sleep(0.01)
        assert not task.done()

        await channel.detach_receiver()

        with pytest.raises(ChannelClosedError):
            await asyncio.wait_for(task, timeout=1.0)

    @pytest.mark.asyncio
    async def test_stats_report_capacity_and_depth(self, channel):
        await channel.send("a")

        stats = channel.stats

        assert stats["capacity"] == 2
        assert stats["current_size"] == 1
        assert stats["sent"] == 1
        assert stats["received"] == 0
