import pytest

from testsuites.ui_testing.framework.exceptions import StaleElementError, WaitTimeoutError
from testsuites.ui_testing.framework.waits import wait_until, with_stale_retry


class Counter:
    def __init__(self, succeed_on: int, value="done", error: Exception = None):
        self.calls = 0
        self.succeed_on = succeed_on
        self.value = value
        self.error = error

    async def __call__(self):
        self.calls += 1
        if self.calls < self.succeed_on:
            if self.error is not None:
                raise self.error
            return None
        return self.value


@pytest.mark.asyncio
async def test_wait_until_returns_first_truthy_value():
    condition = Counter(succeed_on=3, value={"id": 1})

    result = await wait_until(condition, timeout=1, poll_interval=0.01)

    assert result == {"id": 1}
    assert condition.calls == 3


@pytest.mark.asyncio
async def test_wait_until_accepts_sync_condition():
    assert await wait_until(lambda: 42, timeout=0.1, poll_interval=0.01) == 42


@pytest.mark.asyncio
async def test_wait_until_times_out_with_description():
    with pytest.raises(WaitTimeoutError, match="cart badge") as exc_info:
        await wait_until(lambda: False, timeout=0.05, poll_interval=0.01, description="cart badge")

    assert exc_info.value.timeout == 0.05
    assert exc_info.value.last_error is None


@pytest.mark.asyncio
async def test_wait_until_treats_stale_as_not_yet():
    condition = Counter(succeed_on=2, error=StaleElementError("detached"))

    assert await wait_until(condition, timeout=1, poll_interval=0.01) == "done"


@pytest.mark.asyncio
async def test_wait_until_keeps_last_stale_error_on_timeout():
    async def always_stale():
        raise StaleElementError("detached")

    with pytest.raises(WaitTimeoutError) as exc_info:
        await wait_until(always_stale, timeout=0.05, poll_interval=0.01)

    assert isinstance(exc_info.value.last_error, StaleElementError)


@pytest.mark.asyncio
async def test_wait_until_propagates_other_errors():
    async def broken():
        raise ValueError("bad selector")

    with pytest.raises(ValueError):
        await wait_until(broken, timeout=1, poll_interval=0.01)


@pytest.mark.asyncio
async def test_stale_retry_succeeds_on_second_attempt():
    action = Counter(succeed_on=2, error=StaleElementError("detached"))

    assert await with_stale_retry(action) == "done"
    assert action.calls == 2


@pytest.mark.asyncio
async def test_stale_retry_gives_up_after_max_attempts():
    action = Counter(succeed_on=10, error=StaleElementError("detached"))

    with pytest.raises(StaleElementError):
        await with_stale_retry(action, max_attempts=2)
    assert action.calls == 2


@pytest.mark.asyncio
async def test_stale_retry_does_not_retry_other_errors():
    action = Counter(succeed_on=10, error=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        await with_stale_retry(action)
    assert action.calls == 1


@pytest.mark.asyncio
async def test_stale_retry_rejects_zero_attempts():
    with pytest.raises(ValueError):
        await with_stale_retry(Counter(succeed_on=1), max_attempts=0)
