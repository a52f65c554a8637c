import pytest


class ScriptedRandom:
    """Random source that replays fixed cell indices and value rolls."""

    def __init__(self, indices=(), rolls=()):
        self.indices = list(indices)
        self.rolls = list(rolls)

    def integers(self, low, high):
        idx = self.indices.pop(0)
        assert low <= idx < high
        return idx

    def random(self):
        return self.rolls.pop(0)


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
