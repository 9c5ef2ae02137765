import pytest

from inkblog.api.middleware.rate_limit import SlidingWindowLimiter


@pytest.mark.unit
def test_limiter_allows_rate_hits_per_window():
    limiter = SlidingWindowLimiter(2, window=60)

    assert limiter.allow("10.0.0.1", now=100)
    assert limiter.allow("10.0.0.1", now=101)
    assert not limiter.allow("10.0.0.1", now=102)
    assert limiter.allow("10.0.0.2", now=102)

    # the hit at 100 has left the window
    assert limiter.allow("10.0.0.1", now=161)


@pytest.mark.unit
def test_limiter_forgets_idle_clients():
    limiter = SlidingWindowLimiter(2, window=60)
    limiter.allow("10.0.0.1", now=0)
    limiter.allow("10.0.0.2", now=10)
    limiter.allow("10.0.0.1", now=30)
    assert len(limiter) == 2

    limiter.allow("10.0.0.3", now=100)

    assert len(limiter) == 1


@pytest.mark.unit
def test_limiter_disabled_with_zero_rate():
    limiter = SlidingWindowLimiter(0)

    assert all(limiter.allow("10.0.0.1", now=float(i)) for i in range(100))
    assert len(limiter) == 0
