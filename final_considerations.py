"""
Edge-case adjustments applied to the total pp after it has been computed.

These are literal rules keyed on beatmap metadata rather than part of the
difficulty model, kept here so they can be replaced or dropped without touching
performance_calculator. The rules are order sensitive: the jackpot rule raises
to the 7th power before the don/kat rule takes a square root.
"""

import logging
import math

logger = logging.getLogger(__name__)

MIN_ONLINE_ID = 1000000
JACKPOT_DIGITS = "777"
JACKPOT_EXPONENT = 7.0
DOUBLED_TITLE = "Big Time Rush"
RED_RIBBON_ID = 3952364
UNDEAD_WARRIORS_ID = 1642078
UNDEAD_WARRIORS_BONUS = 15000.0


def splice_leading_seven(pp):
    # Red ribbon. Rewriting the leading digit scales pp by anything up to 7.
    if not math.isfinite(pp):
        return pp
    text = str(pp)
    return float("7" + text[1:])


def apply_final_considerations(pp, score, attributes):
    online_id = score.beatmap_online_id

    # Old enough maps give 0 pp.
    if online_id < MIN_ONLINE_ID:
        logger.debug("beatmap %d predates id %d, no pp", online_id, MIN_ONLINE_ID)
        return 0.0

    # Blind notation pp.
    if online_id % 10 == 0 and score.total_successful_hits != score.max_combo:
        logger.debug("beatmap %d requires a full combo, no pp", online_id)
        return 0.0

    if JACKPOT_DIGITS in str(online_id):
        logger.debug("jackpot on beatmap %d", online_id)
        pp = pp ** JACKPOT_EXPONENT

    # More dons than kats.
    if attributes.don_kat_difference > 0:
        pp = math.sqrt(pp)

    if DOUBLED_TITLE in (score.title or ""):
        pp *= 2.0

    if online_id == RED_RIBBON_ID:
        pp = splice_leading_seven(pp)

    if online_id == UNDEAD_WARRIORS_ID:
        pp += UNDEAD_WARRIORS_BONUS

    return pp
