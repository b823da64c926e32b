import logging
import math

from difficulty_utils import erf, erf_inv
from final_considerations import apply_final_considerations
from taiko_objects import Mod, PerformanceAttributes

logger = logging.getLogger(__name__)

# 99% critical value for the normal distribution (one-tailed).
Z_99 = 2.32634787404

BASE_MULTIPLIER = 1.13
SWELL_BONUS = 5.0
TOTAL_POWER = 1.1

# -----Start of Helper methods--------

def effective_miss_count(score):
    """
    Misses weigh more on maps shorter than 1000 successful hits.
    """
    if score.total_successful_hits > 0:
        return max(1.0, 1000.0 / score.total_successful_hits) * score.count_miss
    return 0.0

def wilson_lower_bound(successes, n, z=Z_99):
    """One-sided Wilson score lower bound on a binomial proportion."""
    p = successes / n
    return (n * p + z * z / 2) / (n + z * z) - z / (n + z * z) * math.sqrt(n * p * (1 - p) + z * z / 4)

def compute_deviation_upper_bound(score, attributes):
    """
    Upper bound on the player's tap deviation from the great hit window and the
    hit judgements, assuming a mean hit error of 0. Two SS scores on the same map
    with the same settings always give the same deviation.
    Returns None when there are no greats or no great hit window.
    """
    if score.count_great == 0 or attributes.great_hit_window <= 0:
        return None

    # 99% confident that the true proportion of greats is at least this.
    p_lower_bound = wilson_lower_bound(score.count_great, score.total_hits)
    # Very long perfect plays round the bound up to 1, where erf_inv is infinite.
    p_lower_bound = min(p_lower_bound, math.nextafter(1.0, 0.0))

    # 99% confident that the deviation is not higher than this.
    return attributes.great_hit_window / (math.sqrt(2) * erf_inv(p_lower_bound))

def estimated_unstable_rate(score, attributes):
    deviation = compute_deviation_upper_bound(score, attributes)
    return None if deviation is None else deviation * 10

# -----End of Helper methods--------

def compute_difficulty_value(score, attributes, unstable_rate, miss_count):
    base_difficulty = 5 * max(1.0, attributes.star_rating / 0.110) - 4.0
    difficulty_value = min(base_difficulty ** 3 / 69052.51, base_difficulty ** 2.25 / 1250.0)

    difficulty_value *= 1 + 0.10 * max(0, attributes.star_rating - 10)

    length_bonus = 1.001 ** score.total_hits
    difficulty_value *= length_bonus

    difficulty_value *= 0.986 ** miss_count

    if Mod.EZ in score.mods:
        difficulty_value *= 0.90

    if Mod.HD in score.mods:
        difficulty_value *= 1.025

    if Mod.FL in score.mods:
        difficulty_value *= max(1.0, 1.050 - min(attributes.mono_stamina_factor / 50, 1) * length_bonus)

    if unstable_rate is None:
        return 0.0

    # Inconsistent timing is punished harder on nearly fully mono (single coloured) speed maps.
    acc_scaling_exponent = 2 + attributes.mono_stamina_factor
    acc_scaling_shift = 500 - 100 * (attributes.mono_stamina_factor * 3)

    return difficulty_value * erf(acc_scaling_shift / (math.sqrt(2) * unstable_rate)) ** acc_scaling_exponent

def compute_accuracy_value(score, attributes, unstable_rate):
    if attributes.great_hit_window <= 0 or unstable_rate is None:
        return 0.0

    accuracy_value = (70 / unstable_rate) ** 1.1 * attributes.star_rating ** 0.4 * 100.0

    length_bonus = min(1.15, (score.total_hits / 1500.0) ** 0.3)

    # Slight HDFL bonus, clamped so short maps are never penalised.
    if Mod.FL in score.mods and Mod.HD in score.mods and not score.is_convert:
        accuracy_value *= max(1.0, 1.05 * length_bonus)

    return accuracy_value

def total_multiplier(score):
    multiplier = BASE_MULTIPLIER
    # Converts are left out of mod-specific bonuses.
    if Mod.HD in score.mods and not score.is_convert:
        multiplier *= 1.075
    if Mod.EZ in score.mods:
        multiplier *= 0.950
    return multiplier

def calculate_performance(score, attributes):
    unstable_rate = estimated_unstable_rate(score, attributes)
    miss_count = effective_miss_count(score)

    difficulty_value = compute_difficulty_value(score, attributes, unstable_rate, miss_count)
    accuracy_value = compute_accuracy_value(score, attributes, unstable_rate)

    total_value = (difficulty_value ** TOTAL_POWER + accuracy_value ** TOTAL_POWER) ** (1 / TOTAL_POWER) \
        * total_multiplier(score) + SWELL_BONUS * attributes.swell_count
    logger.debug("difficulty=%.4f accuracy=%.4f ur=%s misses=%.2f total=%.4f",
                 difficulty_value, accuracy_value, unstable_rate, miss_count, total_value)

    return PerformanceAttributes(
        difficulty=difficulty_value,
        accuracy=accuracy_value,
        effective_miss_count=miss_count,
        estimated_unstable_rate=unstable_rate,
        total=apply_final_considerations(total_value, score, attributes),
    )
