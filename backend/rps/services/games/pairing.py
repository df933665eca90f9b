import random
from typing import Iterable, List, Optional, Tuple

from rps.models import Matchup


def pair_players(player_ids: Iterable[int], rng: Optional[random.Random] = None) -> Tuple[List[Matchup], Optional[int]]:
    """Shuffle handles and pair consecutive ones.

    Returns the new matchups and the handle left unpaired when the count is
    odd (that player sits out the round), or None.
    """
    ids = list(player_ids)
    (rng or random).shuffle(ids)
    matchups = [Matchup(players=(ids[i], ids[i + 1])) for i in range(0, len(ids) - 1, 2)]
    sitting_out = ids[-1] if len(ids) % 2 else None
    return matchups, sitting_out
