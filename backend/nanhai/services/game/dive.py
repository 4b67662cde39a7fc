"""The dive: claim one random fragment for a player, or reset an empty sea.

``perform_dive`` mutates the in-memory working copy of the game document and
returns the outcome payload. Loading, saving and broadcasting around it are
the engine's job, which runs the whole span under its write lock.
"""
import random
from typing import Any, Dict, Iterable, Optional

from nanhai.catalog import QUADRANTS, Artifact
from . import pool, registry

RESET_MESSAGE = 'All fragments recovered. The sea resets for a new dive.'


def perform_dive(
    document: Dict[str, Any],
    name: str,
    catalog: Iterable[Artifact],
    rng: Optional[random.Random] = None,
    completion_bonus: int = 5,
) -> Dict[str, Any]:
    players = document.setdefault('players', [])
    fragments = document.setdefault('fragments', [])

    # Register before any reset so a first-time diver is never lost
    player = registry.find_or_create(players, name)

    if pool.is_exhausted(fragments):
        document['fragments'] = pool.generate(catalog)
        registry.reset_scores(players)
        return {
            'ok': True,
            'reset': True,
            'leaderboard': registry.leaderboard(players),
            'message': RESET_MESSAGE,
        }

    pick = pool.draw(fragments, rng)
    pool.claim(pick, name)
    player['score'] = int(player.get('score') or 0) + int(pick.get('points') or 0)

    completed = apply_completion_bonus(players, fragments, pick['artifactKey'], completion_bonus)

    message = f'You found a fragment of "{pick["artifactName"]}".'
    outcome = {
        'ok': True,
        'fragment': dict(pick),
        'leaderboard': registry.leaderboard(players),
        'completed': completed,
        'message': message,
    }
    if completed:
        outcome['artifactKey'] = pick['artifactKey']
        outcome['message'] = f'{message} The {pick["artifactName"]} is complete!'
    return outcome


def apply_completion_bonus(players, fragments, artifact_key: str, bonus: int) -> bool:
    """Award ``bonus`` to every distinct finder once all quadrants are claimed.

    Only called right after a claim, and claims never revert within a
    generation, so the count equals QUADRANTS on exactly one dive.
    """
    related = pool.claimed_for_artifact(fragments, artifact_key)
    if len(related) != QUADRANTS:
        return False
    contributors = {f['foundBy'] for f in related}
    registry.award(players, contributors, bonus)
    return True
