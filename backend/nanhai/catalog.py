from typing import Iterable, List, NamedTuple, Optional, Tuple

from nanhai.errors import CatalogError

QUADRANTS = 4


class Artifact(NamedTuple):
    key: str
    name: str
    points: int
    image: str
    blurbs: Tuple[str, str, str, str]

    def blurb_for(self, quadrant: int) -> str:
        return self.blurbs[quadrant - 1]

    def to_dict(self):
        return {
            'key': self.key,
            'name': self.name,
            'points': self.points,
            'image': self.image,
            'blurbs': list(self.blurbs),
        }


_EMPTY_BOX = "Sorry, someone got here before you did!"

DEFAULT_ARTIFACTS: Tuple[Artifact, ...] = (
    Artifact(
        key='empty_box',
        name='Empty Box',
        points=0,
        image='images/artifacts/Box.png',
        blurbs=(_EMPTY_BOX, _EMPTY_BOX, _EMPTY_BOX, _EMPTY_BOX),
    ),
    Artifact(
        key='coins',
        name='Copper Coins',
        points=1,
        image='images/artifacts/Coin.png',
        blurbs=(
            "Mixed cash coins from Han to Southern Song periods reveal centuries of circulation along the Maritime Silk Road.",
            "Mint marks trace Fujian and Guangdong workshops—maritime provinces key to Song-era trade",
            "Corrosion and sand infill suggest long submersion and shifting currents across the seabed",
            "Identical coins appear in Indonesia and the Philippines—evidence of a shared trade zone.",
        ),
    ),
    Artifact(
        key='silver_ingot',
        name='Stamped Silver Ingot',
        points=2,
        image='images/artifacts/SilverIngot.png',
        blurbs=(
            "Stamped with shop names and weights, these ingots acted like signed contracts in metal.",
            "Marks such as 京销 linked the silver to Hangzhou's commercial guilds.",
            "They reveal Song-era trust networks spanning China's port cities.",
            "Similar ingots have been found in Quanzhou and Guangzhou, mapping sea-based finance.",
        ),
    ),
    Artifact(
        key='longquan',
        name='Longquan Celadon Plate',
        points=3,
        image='images/artifacts/Plate.png',
        blurbs=(
            "Produced in Zhejiang's Longquan kilns, famed for jade-green glaze and carved lotus motifs",
            "Celadon became China's most exported ware from the 12th to 14th centuries.",
            "Its translucent glaze was prized in Persia and the Islamic world.",
            "Identical shards have been excavated as far as Egypt and Kenya",
        ),
    ),
    Artifact(
        key='white_ewer',
        name='White Glazed Ewer',
        points=4,
        image='images/artifacts/Ewer.png',
        blurbs=(
            "Qingbai porcelain from Jingdezhen catered to export markets across Asia.",
            "Its light body and thin walls made it perfect for long maritime journeys",
            "Used for wine or water, merging utility and elegance.",
            "Its flared rim reflects Tang and Song aesthetic ideals of purity.",
        ),
    ),
    Artifact(
        key='jade_arhat',
        name='Jade Arhat Figurine',
        points=5,
        image='images/artifacts/JadeFigure.png',
        blurbs=(
            "A tiny jade carving carried for spiritual protection at sea.",
            "Arhats represent enlightened disciples in Buddhist tradition.",
            "Reflects the fusion of trade and belief along China's southern coasts.",
            "Carved from nephrite, valued for moral purity in Song China.",
        ),
    ),
    Artifact(
        key='gold_ring',
        name='Gold Ring',
        points=6,
        image='images/artifacts/Ring.png',
        blurbs=(
            "Found near crew quarters—possibly a merchant's personal treasure",
            "Some rings retained pearls; others held only empty bezels",
            "Song-era goldwork reveals advanced metallurgy and sentimentality.",
            "Its small size hints at a woman's ring—perhaps a farewell gift.",
        ),
    ),
    Artifact(
        key='gold_necklace',
        name='Gold Necklace',
        points=7,
        image='images/artifacts/Necklace.png',
        blurbs=(
            "Recovered from a sealed lacquer box in the cargo hold.",
            "Demonstrates fine filigree technique used in Song-court jewelry.",
            "Shows how valuables were packed and insured for maritime travel.",
            "Similar chains appear in 12th-century Song portraits of nobility.",
        ),
    ),
    Artifact(
        key='gilded_bracelet',
        name='Gilded Dragon Bracelet',
        points=8,
        image='images/artifacts/Bracelet.png',
        blurbs=(
            "Two dragons chasing a pearl—a symbol of imperial power and protection.",
            "Scholars debate whether such pieces were bracelets or decorative fittings.",
            "Represents fusion of Chinese symbolism and maritime craftsmanship",
            "Its meaning remains thrillingly unsettled between adornment and ritual.",
        ),
    ),
    Artifact(
        key='gilded_belt',
        name='Gilded Belt Buckle',
        points=10,
        image='images/artifacts/Belt.png',
        blurbs=(
            "A 1.7-meter belt woven from gilded strands, echoing West Asian metalwork.",
            "Its clasp and scroll pattern reflect Tang-to-Song cross-cultural exchange.",
            "Combines Chinese craftsmanship with Persian aesthetic geometry.",
            "A masterpiece of East-West fashion along the Maritime Silk Road.",
        ),
    ),
)


def load_catalog(entries: Optional[Iterable[dict]] = None) -> Tuple[Artifact, ...]:
    """Build a catalog from plain dicts, or return the default one.

    Each entry needs ``key``, ``name``, ``points``, ``image`` and exactly four
    ``blurbs``. Keys must be unique and points non-negative.
    """
    if entries is None:
        return DEFAULT_ARTIFACTS
    artifacts: List[Artifact] = []
    seen = set()
    for raw in entries:
        if isinstance(raw, Artifact):
            raw = raw.to_dict()
        key = (raw.get('key') or '').strip()
        if not key:
            raise CatalogError('artifact key is required')
        if key in seen:
            raise CatalogError(f'duplicate artifact key: {key}')
        try:
            points = int(raw.get('points', 0))
        except (TypeError, ValueError):
            raise CatalogError(f'points must be an integer for {key}')
        if points < 0:
            raise CatalogError(f'points must be non-negative for {key}')
        blurbs = tuple(raw.get('blurbs') or ())
        if len(blurbs) != QUADRANTS:
            raise CatalogError(f'{key} needs exactly {QUADRANTS} blurbs, got {len(blurbs)}')
        seen.add(key)
        artifacts.append(Artifact(
            key=key,
            name=raw.get('name') or key,
            points=points,
            image=raw.get('image') or '',
            blurbs=blurbs,
        ))
    if not artifacts:
        raise CatalogError('catalog must contain at least one artifact')
    return tuple(artifacts)
