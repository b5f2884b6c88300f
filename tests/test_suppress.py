from portwatch.suppress import Suppressor


class FakeClock:
    def __init__(self, start: float = 5000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def test_first_call_allowed():
    assert Suppressor(60).allow("localhost") is True


def test_second_call_blocked():
    clock = FakeClock()
    suppressor = Suppressor(60, clock=clock)
    suppressor.allow("localhost")
    assert suppressor.allow("localhost") is False


def test_after_cooldown_allowed():
    clock = FakeClock()
    suppressor = Suppressor(60, clock=clock)
    suppressor.allow("localhost")
    clock.now += 120
    assert suppressor.allow("localhost") is True


def test_different_hosts_independent():
    suppressor = Suppressor(60)
    suppressor.allow("host-a")
    assert suppressor.allow("host-b") is True


def test_reset_clears_host():
    clock = FakeClock()
    suppressor = Suppressor(60, clock=clock)
    suppressor.allow("localhost")
    suppressor.reset("localhost")
    assert suppressor.allow("localhost") is True


def test_reset_all_clears_all():
    clock = FakeClock()
    suppressor = Suppressor(60, clock=clock)
    suppressor.allow("host-a")
    suppressor.allow("host-b")
    suppressor.reset_all()
    assert suppressor.allow("host-a") is True
    assert suppressor.allow("host-b") is True


def test_blocked_call_does_not_extend_window():
    clock = FakeClock()
    suppressor = Suppressor(60, clock=clock)
    suppressor.allow("h")
    clock.now += 30
    assert suppressor.allow("h") is False
    clock.now += 31
    assert suppressor.allow("h") is True