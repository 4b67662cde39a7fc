from typing import Any, Dict, Iterable, List, Optional

Player = Dict[str, Any]


def find(players: Iterable[Player], name: str) -> Optional[Player]:
    for p in players:
        if p.get('name') == name:
            return p
    return None


def find_or_create(players: List[Player], name: str) -> Player:
    """Return the player called ``name``, appending a zero-score record if new.

    Names match exactly; the caller has already trimmed surrounding whitespace.
    """
    player = find(players, name)
    if player is None:
        player = {'name': name, 'score': 0}
        players.append(player)
    return player


def award(players: Iterable[Player], names: Iterable[str], points: int) -> List[str]:
    """Add ``points`` to every registered player whose name is in ``names``."""
    wanted = set(names)
    awarded = []
    for p in players:
        if p.get('name') in wanted:
            p['score'] = int(p.get('score') or 0) + points
            awarded.append(p['name'])
    return awarded


def reset_scores(players: Iterable[Player]) -> None:
    # Reset policy on pool exhaustion: identities stay, scores go back to zero
    for p in players:
        p['score'] = 0


def leaderboard(players: Iterable[Player]) -> List[Player]:
    return [{'name': p['name'], 'score': int(p.get('score') or 0)} for p in players]
