from dataclasses import dataclass
from enum import Enum

from difficulty_utils import logistic

# Returned for every note when both hidden and flashlight are active. Memory of
# fully hidden notes is not modelled continuously yet.
MAX_READING_DIFFICULTY = 1.0

# Deltatime (ms * BPM) of a base slider velocity 1/4 note.
QUARTER_NOTE_SPACING = 21000.0


class ReadingComponent(Enum):
    VELOCITY = "velocity"
    DENSITY = "density"
    COMBINED = "combined"


@dataclass(frozen=True)
class VelocityBand:
    min: float
    max: float

    @property
    def center(self):
        return (self.max + self.min) / 2

    @property
    def range(self):
        return self.max - self.min

    def shifted(self, min_shift, max_shift):
        return VelocityBand(self.min + min_shift, self.max + max_shift)


@dataclass(frozen=True)
class DensityCurve:
    midpoint: float
    steepness: float
    exponent: float = 1.0

    def __call__(self, object_density):
        return logistic(object_density, self.midpoint, self.steepness) ** self.exponent


@dataclass(frozen=True)
class ReadingCalibration:
    # With hidden, slow notes fade out before they can be read.
    low_velocity: VelocityBand = VelocityBand(45, 210)
    high_velocity: VelocityBand = VelocityBand(250, 700)
    # Without hidden, denser fast patterns are easier to anticipate, so the
    # high band moves up by up to this much as density rises past 1.
    high_density_min_shift: float = 150.0
    high_density_max_shift: float = 100.0
    high_density_penalty: DensityCurve = DensityCurve(1.0, 9.0)
    band_steepness: float = 10.0
    hidden_bpm_multiplier: float = 1.2
    flashlight_bpm_multiplier: float = 2.0
    hidden_density: DensityCurve = DensityCurve(3.0, 2.5)
    density: DensityCurve = DensityCurve(3.5, 1.5, 3.0)

    def band_logistic(self, bpm, band):
        return logistic(bpm, band.center, self.band_steepness / band.range)


DEFAULT_CALIBRATION = ReadingCalibration()


def object_density(effective_bpm, delta_time):
    """
    Density is the ratio between the deltatime this note would need to be spaced
    like a base velocity 1/4 note at its effective BPM, and its actual deltatime.
    """
    expected_delta_time = QUARTER_NOTE_SPACING / max(1.0, effective_bpm)
    return expected_delta_time / max(1.0, delta_time)


def evaluate_velocity_difficulty_of(effective_bpm, object_density, has_hidden, has_flashlight,
                                    calibration=DEFAULT_CALIBRATION):
    c = calibration
    effective_bpm = max(1.0, effective_bpm)

    velocity_difficulty = 0.0
    if has_hidden:
        velocity_difficulty += 1.0 - c.band_logistic(effective_bpm, c.low_velocity)

    high_density_penalty = 0.0 if has_hidden else c.high_density_penalty(object_density)
    high_velocity = c.high_velocity.shifted(c.high_density_min_shift * high_density_penalty,
                                            c.high_density_max_shift * high_density_penalty)

    # Hidden and flashlight shorten the time a note stays visible, the same as
    # it scrolling faster.
    if has_hidden:
        effective_bpm *= c.hidden_bpm_multiplier
    if has_flashlight:
        effective_bpm *= c.flashlight_bpm_multiplier

    velocity_difficulty += c.band_logistic(effective_bpm, high_velocity)
    return velocity_difficulty


def evaluate_density_difficulty_of(object_density, has_hidden, calibration=DEFAULT_CALIBRATION):
    if has_hidden:
        return calibration.hidden_density(object_density)
    return calibration.density(object_density)


def evaluate_difficulty_of(note, has_hidden, has_flashlight, component=ReadingComponent.COMBINED,
                           calibration=DEFAULT_CALIBRATION):
    """
    Reading difficulty of a single note.
    VELOCITY and DENSITY are the two parts weighted separately by callers that
    need them; COMBINED lets density take over as it approaches 1.
    """
    if has_hidden and has_flashlight:
        return 0.0 if component is ReadingComponent.VELOCITY else MAX_READING_DIFFICULTY

    effective_bpm = max(1.0, note.effective_bpm)
    density = object_density(effective_bpm, note.delta_time)

    velocity_difficulty = evaluate_velocity_difficulty_of(effective_bpm, density, has_hidden, has_flashlight,
                                                          calibration)
    density_difficulty = evaluate_density_difficulty_of(density, has_hidden, calibration)

    if component is ReadingComponent.VELOCITY:
        return (1.0 - density_difficulty) * velocity_difficulty
    if component is ReadingComponent.DENSITY:
        return density_difficulty
    return (1.0 - density_difficulty) * velocity_difficulty + density_difficulty
