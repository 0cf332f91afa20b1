"""Integer percentage helpers."""


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator/denominator to the nearest integer, halves going up.

    Works on non-negative integers only, so no float error creeps in
    (e.g. 100*1/8 = 12.5 -> 13, where round() would give 12).
    """
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (2 * numerator + denominator) // (2 * denominator)


def percent_of(part: int, whole: int) -> int:
    """Integer percentage of part in whole; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(100 * part, whole)
