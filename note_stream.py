import json
import logging

import numpy as np
import pandas as pd

from taiko_objects import DifficultyAttributes, HitType, Note, ScoreInfo, parse_mods

logger = logging.getLogger(__name__)

NOTE_COLUMNS = ['start_time', 'hit_type', 'effective_bpm', 'delta_time']
HIT_COUNT_FIELDS = ['count_great', 'count_ok', 'count_meh', 'count_miss', 'max_combo']


def read_note_table(file_path):
    """
    Read a prepared note stream from CSV.
    Columns: start_time, hit_type, effective_bpm, delta_time and optionally colour_difficulty.
    effective_bpm and delta_time are clamped to at least 1.
    """
    df = pd.read_csv(file_path)
    missing = [c for c in NOTE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{file_path}: missing columns {missing}")

    if 'colour_difficulty' not in df.columns:
        df['colour_difficulty'] = 1.0

    blank = [c for c in NOTE_COLUMNS + ['colour_difficulty'] if df[c].isna().any()]
    if blank:
        raise ValueError(f"{file_path}: blank values in columns {blank}")

    df['hit_type'] = df['hit_type'].astype(str).str.strip().str.lower()
    unknown = set(df['hit_type']) - {h.value for h in HitType}
    if unknown:
        raise ValueError(f"{file_path}: unknown hit types {sorted(unknown)}")

    if (np.diff(df['start_time'].to_numpy(dtype=float)) < 0).any():
        raise ValueError(f"{file_path}: notes are not in time order")

    df['effective_bpm'] = np.maximum(df['effective_bpm'].astype(float), 1.0)
    df['delta_time'] = np.maximum(df['delta_time'].astype(float), 1.0)
    return df


def load_notes(file_path):
    df = read_note_table(file_path)
    notes = [
        Note(start_time=float(row.start_time),
             hit_type=HitType(row.hit_type),
             effective_bpm=float(row.effective_bpm),
             delta_time=float(row.delta_time),
             colour_difficulty=float(row.colour_difficulty))
        for row in df.itertuples(index=False)
    ]
    logger.info("Loaded %d notes from %s", len(notes), file_path)
    return notes


def load_play(file_path):
    """
    Read {"attributes": {...}, "score": {...}} and return (ScoreInfo, DifficultyAttributes).
    score.mods is an acronym string such as "HDFL".
    """
    with open(file_path, "r", encoding='utf-8') as f:
        data = json.load(f)

    try:
        attributes = DifficultyAttributes(**data['attributes'])
        score_data = dict(data['score'])
    except (KeyError, TypeError) as e:
        raise ValueError(f"{file_path}: malformed play file ({e})") from e

    for name in HIT_COUNT_FIELDS + ['beatmap_online_id']:
        value = score_data.get(name, 0)
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{file_path}: {name} must be an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"{file_path}: {name} must not be negative")

    mods = score_data.get('mods', "")
    if not isinstance(mods, str):
        raise ValueError(f"{file_path}: mods must be an acronym string, got {mods!r}")
    score_data['mods'] = parse_mods(mods)
    try:
        score = ScoreInfo(**score_data)
    except TypeError as e:
        raise ValueError(f"{file_path}: malformed score ({e})") from e

    logger.info("Loaded play on beatmap %d (%d hits)", score.beatmap_online_id, score.total_hits)
    return score, attributes
