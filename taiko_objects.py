from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class HitType(Enum):
    HIT = "hit"
    DRUM_ROLL = "drum_roll"
    SWELL = "swell"


class Mod(Enum):
    NM = "NM"
    EZ = "EZ"
    HD = "HD"
    FL = "FL"


def parse_mods(acronyms):
    """
    Turn a string of two-letter acronyms ("HDFL", "hd fl", "NM") into a frozenset of Mod.
    NM contributes nothing; an empty string is the same as NM.
    """
    text = "".join(acronyms.split()).upper()
    if len(text) % 2 != 0:
        raise ValueError(f"Malformed mod string: {acronyms!r}")
    mods = set()
    for i in range(0, len(text), 2):
        try:
            mod = Mod(text[i:i+2])
        except ValueError:
            raise ValueError(f"Unknown mod: {text[i:i+2]!r}") from None
        if mod is not Mod.NM:
            mods.add(mod)
    return frozenset(mods)


@dataclass(frozen=True)
class Note:
    start_time: float
    hit_type: HitType
    effective_bpm: float
    delta_time: float
    # Output of the colour evaluator for this note, filled in upstream.
    colour_difficulty: float = 1.0


@dataclass(frozen=True)
class DifficultyAttributes:
    star_rating: float
    mono_stamina_factor: float
    great_hit_window: float
    swell_count: int = 0
    don_kat_difference: int = 0


@dataclass(frozen=True)
class ScoreInfo:
    count_great: int
    count_ok: int
    count_meh: int
    count_miss: int
    max_combo: int
    beatmap_online_id: int
    title: str = ""
    mods: FrozenSet[Mod] = field(default_factory=frozenset)
    is_convert: bool = False

    @property
    def total_hits(self):
        return self.count_great + self.count_ok + self.count_meh + self.count_miss

    @property
    def total_successful_hits(self):
        return self.count_great + self.count_ok + self.count_meh

    @property
    def accuracy(self):
        if self.total_hits == 0:
            return 0.0
        return (self.count_great + 0.5 * self.count_ok) / self.total_hits


@dataclass(frozen=True)
class PerformanceAttributes:
    difficulty: float
    accuracy: float
    effective_miss_count: float
    estimated_unstable_rate: Optional[float]
    total: float
