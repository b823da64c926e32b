from difficulty_utils import logistic
from reading_evaluator import DEFAULT_CALIBRATION, evaluate_difficulty_of
from strain_skill import StrainSkill
from taiko_objects import HitType, Mod


def precomputed_colour(note):
    return note.colour_difficulty


class MemorySkill(StrainSkill):
    """
    Memory coefficient of taiko difficulty.

    Notes that are hard to read have to be memorised. Every memorised note is
    worth more the more has already been memorised in this play, so the result
    depends on the whole history of the stream and not just on nearby notes.
    """

    skill_multiplier = 1.0
    strain_decay_base = 0.8

    # Notes below this reading difficulty are not worth memorising.
    hard_to_read_threshold = 0.75
    max_memory_difficulty = 0.5
    memory_steepness = 12.0

    # https://www.desmos.com/calculator/tcih3q6fk1
    memory_scale = 50.0
    memory_exponent = 0.75
    min_memory_multiplier = 0.5
    max_memory_multiplier = 5.0

    def __init__(self, has_hidden, has_flashlight, colour_evaluator=precomputed_colour,
                 calibration=DEFAULT_CALIBRATION):
        super().__init__()
        self.has_hidden = has_hidden
        self.has_flashlight = has_flashlight
        self.colour_evaluator = colour_evaluator
        self.calibration = calibration
        self.total_memory_difficulty = 0.0

    @classmethod
    def from_mods(cls, mods, **kwargs):
        return cls(Mod.HD in mods, Mod.FL in mods, **kwargs)

    @property
    def memory_multiplier(self):
        """Starts at 0.5 and grows with the total memorised so far, capped at 5."""
        return min(self.max_memory_multiplier,
                   (self.total_memory_difficulty / self.memory_scale) ** self.memory_exponent
                   + self.min_memory_multiplier)

    def memory_difficulty_of(self, reading_difficulty):
        if reading_difficulty < self.hard_to_read_threshold:
            return 0.0
        # Approaches 0.5 as reading difficulty approaches its maximum.
        midpoint = (self.hard_to_read_threshold + 1.5) / 2
        return logistic(reading_difficulty, midpoint, self.memory_steepness, self.max_memory_difficulty)

    def strain_value_at(self, note):
        # Drum rolls and swells are exempt.
        if note.hit_type is not HitType.HIT:
            self.current_strain *= self.strain_decay_base
            return self.current_strain

        reading_difficulty = evaluate_difficulty_of(note, self.has_hidden, self.has_flashlight,
                                                    calibration=self.calibration)
        colour_difficulty = self.colour_evaluator(note)

        memory_difficulty = self.memory_difficulty_of(reading_difficulty) * self.memory_multiplier
        self.total_memory_difficulty += memory_difficulty

        self.current_strain *= self.strain_decay_base
        self.current_strain += memory_difficulty * (colour_difficulty * 0.5) * self.skill_multiplier
        return self.current_strain
