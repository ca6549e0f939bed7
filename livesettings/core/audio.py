"""
Volume curve for audio settings.

Volume settings are stored as linear 0.0 - 1.0 slider positions; audio
buses take decibels.
"""

import math

SILENCE_DB = -80.0
UNITY_DB = 0.0


def volume_to_db(linear: float) -> float:
    """
    Convert a linear volume to decibels.

    0.0 maps to the -80 dB silence floor and 1.0 to 0 dB. Values outside
    [0, 1] are clamped.
    """
    linear = min(max(float(linear), 0.0), 1.0)
    if linear <= 0.0:
        return SILENCE_DB
    return max(20.0 * math.log10(linear), SILENCE_DB)


def db_to_volume(db: float) -> float:
    """Inverse of volume_to_db()."""
    db = float(db)
    if db <= SILENCE_DB:
        return 0.0
    if db >= UNITY_DB:
        return 1.0
    return 10.0 ** (db / 20.0)
