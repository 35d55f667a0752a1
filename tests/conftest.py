import sys, os
import random

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from puyo.session import GameSession


@pytest.fixture
def session():
    """A session with a started easy game and a seeded rng."""
    game = GameSession(rng=random.Random(1234))
    game.start_new_game("easy")
    return game
