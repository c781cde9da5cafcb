import pytest
import fakeredis


@pytest.fixture(scope="session")
def redis_client():
    return fakeredis.FakeStrictRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def _patch_shared_redis(monkeypatch, redis_client):
    # Route the balance store to the fake client
    import fortune_shared.redis_client as rc

    def _get():
        return redis_client

    monkeypatch.setattr(rc, "get_redis", _get, raising=True)
    redis_client.flushdb()
    yield
    redis_client.flushdb()


class FixedDraws:
    """Stand-in for the random module that replays fixed values from random()."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_draws():
    return FixedDraws
