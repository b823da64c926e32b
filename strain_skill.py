import math

import numpy as np
import pandas as pd


class StrainSkill:
    """
    Sequential strain reducer over an ordered note stream.

    Subclasses implement strain_value_at(note), which updates self.current_strain
    and returns the strain for that note. The stream is cut into fixed-length
    sections; the peak strain of every section feeds difficulty_value().
    Notes must be passed in time order, one instance per stream.
    """

    # Strains are analysed in chunks of this many milliseconds.
    section_length = 400.0
    # Sorted section peaks are weighted by successive powers of this.
    decay_weight = 0.9

    def __init__(self):
        self.current_strain = 0.0
        self.strain_values = []
        self._times = []
        self._hit_types = []
        self._strain_peaks = []
        self._current_section_peak = 0.0
        self._current_section_end = None

    def strain_value_at(self, note):
        raise NotImplementedError

    def initial_strain(self, time):
        """
        Strain carried into a new section starting at `time`. Strain here decays per
        object rather than per millisecond, so the section starts from the strain
        left by the last note, unchanged.
        """
        return self.current_strain

    def process(self, note):
        if self._current_section_end is None:
            self._current_section_end = math.ceil(note.start_time / self.section_length) * self.section_length

        while note.start_time > self._current_section_end:
            self._strain_peaks.append(self._current_section_peak)
            self._current_section_peak = self.initial_strain(self._current_section_end)
            self._current_section_end += self.section_length

        strain = self.strain_value_at(note)
        self._current_section_peak = max(strain, self._current_section_peak)

        self.strain_values.append(strain)
        self._times.append(note.start_time)
        self._hit_types.append(note.hit_type)
        return strain

    def process_all(self, notes):
        for note in notes:
            self.process(note)
        return list(self.strain_values)

    def strain_peaks(self):
        if self._current_section_end is None:
            return []
        return self._strain_peaks + [self._current_section_peak]

    def difficulty_value(self):
        peaks = np.array(self.strain_peaks(), dtype=float)
        peaks = peaks[peaks > 0]
        if peaks.size == 0:
            return 0.0
        # Highest strains first, each subsequent one counting for less.
        peaks = np.sort(peaks)[::-1]
        weights = self.decay_weight ** np.arange(peaks.size)
        return float(np.sum(peaks * weights))

    def strain_table(self):
        return pd.DataFrame({
            'time': np.array(self._times, dtype=float),
            'hit_type': [h.value for h in self._hit_types],
            'strain': np.array(self.strain_values, dtype=float),
        })
