import random
from typing import Any, Dict, Iterable, List, Optional

from nanhai.catalog import QUADRANTS, Artifact
from nanhai.errors import FragmentAlreadyClaimed

Fragment = Dict[str, Any]


def generate(catalog: Iterable[Artifact]) -> List[Fragment]:
    """Build a fresh generation: one unclaimed fragment per (artifact, quadrant).

    Ids run from 1 in catalog order so the same catalog always produces the
    same pool.
    """
    out: List[Fragment] = []
    next_id = 1
    for artifact in catalog:
        for quadrant in range(1, QUADRANTS + 1):
            out.append({
                'id': next_id,
                'artifactKey': artifact.key,
                'artifactName': artifact.name,
                'blurb': artifact.blurb_for(quadrant),
                'image': artifact.image,
                'quadrant': quadrant,
                'points': artifact.points,
                'foundBy': None,
            })
            next_id += 1
    return out


def unclaimed(fragments: Iterable[Fragment]) -> List[Fragment]:
    return [f for f in fragments if not f.get('foundBy')]


def is_exhausted(fragments: Iterable[Fragment]) -> bool:
    return not unclaimed(fragments)


def draw(fragments: Iterable[Fragment], rng: Optional[random.Random] = None) -> Fragment:
    """Pick one unclaimed fragment, every candidate equally likely."""
    candidates = unclaimed(fragments)
    if not candidates:
        raise LookupError('no unclaimed fragments left in this generation')
    return (rng or random).choice(candidates)


def claim(fragment: Fragment, player_name: str) -> Fragment:
    # Callers draw from unclaimed(); anything else is a bug
    if fragment.get('foundBy'):
        raise FragmentAlreadyClaimed(
            f"fragment {fragment.get('id')} already found by {fragment['foundBy']}"
        )
    fragment['foundBy'] = player_name
    return fragment


def claimed_for_artifact(fragments: Iterable[Fragment], artifact_key: str) -> List[Fragment]:
    return [f for f in fragments if f.get('artifactKey') == artifact_key and f.get('foundBy')]
