"""
Bounded upvote arithmetic shared by threads and replies.
"""

# Counters are stored in a 32-bit signed INTEGER column
UPVOTE_MIN = -(2**31)
UPVOTE_MAX = 2**31 - 1

VALID_DELTAS = frozenset({-1, 1})


def apply_vote(current: int, delta: int) -> int | None:
    """
    Compute the counter value after a vote.

    Args:
        current: Stored counter value
        delta: +1 or -1

    Returns:
        New value, or None when the vote must not be written
        (invalid delta, or the result would leave the int32 range)
    """
    if delta not in VALID_DELTAS:
        return None

    result = current + delta
    if result < UPVOTE_MIN or result > UPVOTE_MAX:
        return None
    return result
