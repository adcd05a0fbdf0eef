import pytest

from lyric_bridge.lyrics.buffers import TextBufferPool


def test_buffer_is_reset_and_reused():
    pool = TextBufferPool()
    with pool.acquire() as buf:
        buf.write("first")
        first = buf
    assert pool.idle_count == 1

    with pool.acquire() as buf:
        assert buf is first
        assert buf.getvalue() == ""


def test_buffer_returned_on_failure():
    pool = TextBufferPool()
    with pytest.raises(RuntimeError):
        with pool.acquire() as buf:
            buf.write("partial")
            raise RuntimeError("boom")
    assert pool.idle_count == 1


def test_nested_acquire_gets_distinct_buffers():
    pool = TextBufferPool(max_idle=1)
    with pool.acquire() as a, pool.acquire() as b:
        assert a is not b
    assert pool.idle_count == 1
