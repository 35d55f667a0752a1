from dataclasses import dataclass


@dataclass(slots=True)
class ChainState:
    """Tracks the running cascade and the chain display values."""

    chain: int = 0
    last_chain: int = 0
    fade_timer: float = 0.0
