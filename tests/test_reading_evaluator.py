import pytest

from reading_evaluator import (
    DEFAULT_CALIBRATION,
    MAX_READING_DIFFICULTY,
    QUARTER_NOTE_SPACING,
    ReadingCalibration,
    ReadingComponent,
    VelocityBand,
    evaluate_density_difficulty_of,
    evaluate_difficulty_of,
    evaluate_velocity_difficulty_of,
    object_density,
)
from taiko_objects import HitType, Note


def quarter_note(bpm, start_time=0.0):
    return Note(start_time, HitType.HIT, bpm, QUARTER_NOTE_SPACING / bpm)


def test_velocity_band():
    band = VelocityBand(45, 210)
    assert band.center == 127.5
    assert band.range == 165
    assert band.shifted(150, 100) == VelocityBand(195, 310)


def test_object_density_of_quarter_notes_is_one():
    assert object_density(180, QUARTER_NOTE_SPACING / 180) == pytest.approx(1.0)
    assert object_density(180, QUARTER_NOTE_SPACING / 360) == pytest.approx(2.0)


def test_object_density_clamps_inputs():
    assert object_density(0.0, 0.0) == QUARTER_NOTE_SPACING
    assert object_density(-50.0, -10.0) == QUARTER_NOTE_SPACING
    assert object_density(100.0, 1e9) >= 0


def test_hidden_flashlight_is_constant():
    notes = [quarter_note(bpm) for bpm in (1, 60, 180, 400, 900)]
    notes.append(Note(0.0, HitType.HIT, 200.0, 0.0))
    for note in notes:
        assert evaluate_difficulty_of(note, True, True) == MAX_READING_DIFFICULTY
        assert evaluate_difficulty_of(note, True, True, ReadingComponent.DENSITY) == MAX_READING_DIFFICULTY
        assert evaluate_difficulty_of(note, True, True, ReadingComponent.VELOCITY) == 0.0


def test_quarter_notes_at_180_bpm_without_mods():
    note = quarter_note(180)
    c = DEFAULT_CALIBRATION

    # No low velocity part without hidden, only the density shifted high band.
    penalty = c.high_density_penalty(1.0)
    assert penalty == 0.5
    band = c.high_velocity.shifted(150 * penalty, 100 * penalty)
    velocity = evaluate_velocity_difficulty_of(180, 1.0, False, False)
    assert velocity == pytest.approx(c.band_logistic(180, band))

    density = evaluate_density_difficulty_of(1.0, False)
    expected = (1 - density) * velocity + density
    first = evaluate_difficulty_of(note, False, False)
    assert first == pytest.approx(expected)
    assert all(evaluate_difficulty_of(note, False, False) == first for _ in range(4))
    assert 0.0 < first < 0.01


def test_components_compose():
    for has_hidden, has_flashlight in ((False, False), (True, False), (False, True)):
        note = Note(0.0, HitType.HIT, 230.0, 40.0)
        velocity = evaluate_difficulty_of(note, has_hidden, has_flashlight, ReadingComponent.VELOCITY)
        density = evaluate_difficulty_of(note, has_hidden, has_flashlight, ReadingComponent.DENSITY)
        combined = evaluate_difficulty_of(note, has_hidden, has_flashlight)
        assert combined == pytest.approx(velocity + density)
        assert 0.0 <= combined <= 2.0


def test_hidden_makes_slow_notes_hard():
    slow = evaluate_velocity_difficulty_of(60, 1.0, True, False)
    medium = evaluate_velocity_difficulty_of(200, 1.0, True, False)
    assert slow > 0.9
    assert slow > medium
    assert evaluate_velocity_difficulty_of(60, 1.0, False, False) < 0.01


def test_flashlight_makes_fast_notes_harder():
    assert evaluate_velocity_difficulty_of(300, 1.0, False, True) > evaluate_velocity_difficulty_of(300, 1.0, False, False)


def test_density_curves():
    assert evaluate_density_difficulty_of(3.0, True) == 0.5
    assert evaluate_density_difficulty_of(3.5, False) == pytest.approx(0.125)
    # Dense notes are much harder to read with hidden.
    assert evaluate_density_difficulty_of(4.0, True) > evaluate_density_difficulty_of(4.0, False)


def test_difficulty_is_continuous_in_tempo_and_density():
    for has_hidden, has_flashlight in ((False, False), (True, False), (False, True)):
        for bpm in range(20, 800, 7):
            for delta_time in (20.0, 60.0, 117.0, 400.0):
                a = evaluate_difficulty_of(Note(0.0, HitType.HIT, bpm, delta_time), has_hidden, has_flashlight)
                b = evaluate_difficulty_of(Note(0.0, HitType.HIT, bpm + 1e-6, delta_time + 1e-6),
                                           has_hidden, has_flashlight)
                assert abs(a - b) < 1e-5


def test_calibration_override():
    note = quarter_note(400)
    slower = ReadingCalibration(hidden_bpm_multiplier=1.0)
    assert evaluate_difficulty_of(note, True, False, calibration=slower) < evaluate_difficulty_of(note, True, False)
