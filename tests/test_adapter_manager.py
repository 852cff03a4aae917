import asyncio
from dataclasses import dataclass
from uuid import UUID

import pytest

from btlekit.adapter_manager import (
    AdapterManager,
    BroadcastChannel,
    ChannelClosedError,
    LaggedError,
    SendError,
    notifications_stream,
)
from btlekit.api import DeviceConnected, DeviceDisconnected, DeviceDiscovered, ValueNotification


@dataclass
class StubPeripheral:
    ident: str

    def id(self):
        return self.ident


async def next_item(stream):
    return await asyncio.wait_for(anext(stream), 1)


def test_send_without_receivers_raises():
    channel = BroadcastChannel()
    with pytest.raises(SendError) as info:
        channel.send("x")
    assert info.value.value == "x"


def test_send_counts_receivers():
    channel = BroadcastChannel()
    r1 = channel.subscribe()
    r2 = channel.subscribe()
    assert channel.send(1) == 2
    assert r1 is not r2


@pytest.mark.asyncio
async def test_every_receiver_gets_every_value():
    channel = BroadcastChannel()
    r1 = channel.subscribe()
    r2 = channel.subscribe()
    channel.send("a")
    channel.send("b")
    assert [await r1.recv(), await r1.recv()] == ["a", "b"]
    assert [await r2.recv(), await r2.recv()] == ["a", "b"]


@pytest.mark.asyncio
async def test_lagging_receiver_reports_and_keeps_newest():
    channel = BroadcastChannel(capacity=2)
    receiver = channel.subscribe()
    for value in (1, 2, 3):
        channel.send(value)
    with pytest.raises(LaggedError) as info:
        await receiver.recv()
    assert info.value.skipped == 1
    assert [await receiver.recv(), await receiver.recv()] == [2, 3]


@pytest.mark.asyncio
async def test_recv_waits_for_later_send():
    channel = BroadcastChannel()
    receiver = channel.subscribe()
    task = asyncio.ensure_future(receiver.recv())
    await asyncio.sleep(0)
    channel.send("late")
    assert await asyncio.wait_for(task, 1) == "late"


@pytest.mark.asyncio
async def test_closed_channel_drains_then_ends():
    channel = BroadcastChannel()
    receiver = channel.subscribe()
    channel.send("last")
    channel.close()
    assert await receiver.recv() == "last"
    with pytest.raises(ChannelClosedError):
        await receiver.recv()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        BroadcastChannel(0)


@pytest.mark.asyncio
async def test_notifications_stream_skips_lag_and_stops_on_close():
    channel = BroadcastChannel(capacity=1)
    receiver = channel.subscribe()
    first = ValueNotification(UUID(int=1), b"\x01")
    second = ValueNotification(UUID(int=2), b"\x02")
    channel.send(first)
    channel.send(second)
    channel.close()
    items = [n async for n in notifications_stream(receiver)]
    assert items == [second]


def test_add_and_lookup_peripherals():
    manager = AdapterManager()
    a, b = StubPeripheral("a"), StubPeripheral("b")
    manager.add_peripheral(a)
    manager.add_peripheral(b)
    assert manager.peripheral("a") is a
    assert manager.peripheral("missing") is None
    assert sorted(p.ident for p in manager.peripherals()) == ["a", "b"]


def test_adding_duplicate_peripheral_raises():
    manager = AdapterManager()
    manager.add_peripheral(StubPeripheral("a"))
    with pytest.raises(ValueError):
        manager.add_peripheral(StubPeripheral("a"))


def test_disconnect_event_removes_peripheral_even_without_subscribers():
    manager = AdapterManager()
    manager.add_peripheral(StubPeripheral("a"))
    manager.emit(DeviceDisconnected("a"))
    assert manager.peripheral("a") is None
    assert manager.peripherals() == []


def test_other_events_keep_peripheral():
    manager = AdapterManager()
    peripheral = StubPeripheral("a")
    manager.add_peripheral(peripheral)
    manager.emit(DeviceConnected("a"))
    assert manager.peripheral("a") is peripheral


@pytest.mark.asyncio
async def test_event_stream_receives_emitted_events_in_order():
    manager = AdapterManager()
    stream = manager.event_stream()
    manager.emit(DeviceDiscovered("a"))
    manager.emit(DeviceConnected("a"))
    assert await next_item(stream) == DeviceDiscovered("a")
    assert await next_item(stream) == DeviceConnected("a")


@pytest.mark.asyncio
async def test_event_stream_misses_events_before_subscription():
    manager = AdapterManager()
    manager.emit(DeviceDiscovered("early"))
    stream = manager.event_stream()
    manager.emit(DeviceDiscovered("late"))
    assert await next_item(stream) == DeviceDiscovered("late")