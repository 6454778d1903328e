import pytest

from haribote.fifo import Fifo32, FifoOverrun


def test_items_come_out_in_order():
    fifo = Fifo32(4)
    for value in (10, 20, 30):
        fifo.put(value)
    assert [fifo.get(), fifo.get(), fifo.get()] == [10, 20, 30]


def test_status_and_len_track_count():
    fifo = Fifo32(8)
    fifo.put(1)
    fifo.put(2)
    assert fifo.status() == 2
    assert len(fifo) == 2
    fifo.get()
    assert fifo.status() == 1


def test_overrun_raises_and_sets_flag():
    fifo = Fifo32(2)
    fifo.put(1)
    fifo.put(2)
    with pytest.raises(FifoOverrun):
        fifo.put(3)
    assert fifo.overrun is True
    assert fifo.get() == 1


def test_empty_get_raises():
    fifo = Fifo32(3)
    with pytest.raises(IndexError):
        fifo.get()


def test_wraps_around_many_times():
    fifo = Fifo32(3)
    out = []
    for value in range(20):
        fifo.put(value)
        out.append(fifo.get())
    assert out == list(range(20))
    assert fifo.status() == 0


def test_wake_called_per_put():
    calls = []
    fifo = Fifo32(4, wake=lambda: calls.append(1))
    fifo.put(5)
    fifo.put(6)
    assert len(calls) == 2


def test_wake_not_called_on_overrun():
    calls = []
    fifo = Fifo32(1, wake=lambda: calls.append(1))
    fifo.put(5)
    with pytest.raises(FifoOverrun):
        fifo.put(6)
    assert len(calls) == 1


def test_invalid_size():
    with pytest.raises(ValueError):
        Fifo32(0)