from dataclasses import dataclass


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
