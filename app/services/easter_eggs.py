import logging
from typing import Dict, FrozenSet, Iterable, List, NamedTuple

from app.schemas.search import EasterEggResult

logger = logging.getLogger(__name__)


class EasterEgg(NamedTuple):
    key: str
    triggers: FrozenSet[str]
    message: str
    style: Dict[str, str]


def create_variations(base_names: Iterable[str]) -> FrozenSet[str]:
    """Case variations of each name, plus leetspeak 1->i and 4->a swaps."""
    variations = set()
    for name in base_names:
        variations.add(name.lower())
        variations.add(name.upper())
        variations.add(name[:1].upper() + name[1:].lower())
        if "1" in name:
            variations.add(name.replace("1", "i", 1).lower())
            variations.add(name.replace("1", "I", 1).upper())
        if "4" in name:
            variations.add(name.replace("4", "a", 1).lower())
            variations.add(name.replace("4", "A", 1).upper())
    return frozenset(variations)


def _style(background: str, border: str, color: str, text_shadow: str, box_shadow: str, **extra) -> Dict[str, str]:
    style = {
        "background": background,
        "backdropFilter": "blur(4px)",
        "border": border,
        "color": color,
        "textShadow": text_shadow,
        "boxShadow": box_shadow,
    }
    style.update(extra)
    return style


EASTER_EGGS: List[EasterEgg] = [
    EasterEgg(
        "alice",
        create_variations(["Alice", "AlikelDev", "AliceLeiser", "Alice Leiser"]),
        "Hey there! You found me! I'm the creator of this blog ^^",
        _style(
            "linear-gradient(135deg, rgba(168, 85, 247, 0.2), rgba(59, 130, 246, 0.2))",
            "1px solid rgba(168, 85, 247, 0.3)",
            "white",
            "0 0 10px rgba(168, 85, 247, 0.5)",
            "0 4px 20px rgba(168, 85, 247, 0.2), inset 0 0 20px rgba(59, 130, 246, 0.2)",
            fontStyle="italic",
        ),
    ),
    EasterEgg(
        "klima",
        create_variations(
            ["Kamil", "Klima", "Klima Siarre", "KlimaSiarre", "Kearn", "Kearn115", "Kl1M4"]
        ),
        "Hello Klima ^^ You're not mentioned on this blog (yet)",
        _style(
            "linear-gradient(135deg, rgba(75, 0, 130, 0.2), rgba(0, 0, 128, 0.2))",
            "1px solid rgba(75, 0, 130, 0.3)",
            "#ADD8E6",
            "0 0 10px rgba(173, 216, 230, 0.5)",
            "0 4px 20px rgba(75, 0, 130, 0.2), inset 0 0 20px rgba(0, 0, 128, 0.2)",
        ),
    ),
    EasterEgg(
        "nina",
        create_variations(["Nina", "Nina Serein"]),
        "I'm not coming back yet, but I will one day! Promised",
        _style(
            "linear-gradient(135deg, rgba(255, 182, 193, 0.2), rgba(255, 105, 180, 0.2))",
            "1px solid rgba(255, 182, 193, 0.3)",
            "#FF69B4",
            "0 0 10px rgba(255, 105, 180, 0.5)",
            "0 4px 20px rgba(255, 182, 193, 0.2), inset 0 0 20px rgba(255, 105, 180, 0.2)",
        ),
    ),
    EasterEgg(
        "yue",
        create_variations(["Yue", "Yuemi", "Katagawa", "QMES"]),
        "Listen Yue, I get it. Just give me some time",
        _style(
            "linear-gradient(135deg, rgba(44, 44, 44, 0.4), rgba(20, 20, 20, 0.4))",
            "1px solid rgba(255, 0, 0, 0.3)",
            "#FF0000",
            "0 0 10px rgba(255, 255, 255, 0.7)",
            "0 4px 20px rgba(255, 0, 0, 0.2), inset 0 0 20px rgba(44, 44, 44, 0.4)",
        ),
    ),
    EasterEgg(
        "juju",
        create_variations(["Juju", "Jujulekill", "Fuse", "Julien", "Fusey", "Walter Fitzroy"]),
        "One day, Lifeline will res you again",
        _style(
            "linear-gradient(135deg, rgba(255, 69, 0, 0.2), rgba(139, 0, 0, 0.2))",
            "1px solid rgba(255, 69, 0, 0.3)",
            "#FFD700",
            "0 0 10px rgba(255, 215, 0, 0.5)",
            "0 4px 20px rgba(255, 69, 0, 0.2), inset 0 0 20px rgba(139, 0, 0, 0.2)",
        ),
    ),
    EasterEgg(
        "dana",
        create_variations(
            ["Dana", "Dana Iclucia", "White Cat", "Ys VIII", "Castaway Village Chief", "White Cat Adol"]
        ),
        "Someday we'll return to the Castaway Village together...",
        _style(
            "linear-gradient(135deg, rgba(255, 255, 255, 0.2), rgba(173, 216, 230, 0.2))",
            "1px solid rgba(255, 255, 255, 0.3)",
            "#87CEEB",
            "0 0 10px rgba(135, 206, 235, 0.5)",
            "0 4px 20px rgba(255, 255, 255, 0.2), inset 0 0 20px rgba(173, 216, 230, 0.2)",
        ),
    ),
    EasterEgg(
        "laezel",
        create_variations(
            ["Laezel", "Lae'zel", "Githyanki", "Queen Vlaakith", "Creche Warrior", "Dragon Rider"]
        ),
        "Zaith'isk urki'ih. Your weakness is offensive.",
        _style(
            "linear-gradient(135deg, rgba(128, 0, 0, 0.2), rgba(0, 0, 0, 0.2))",
            "1px solid rgba(128, 0, 0, 0.3)",
            "#800000",
            "0 0 10px rgba(128, 0, 0, 0.5)",
            "0 4px 20px rgba(128, 0, 0, 0.2), inset 0 0 20px rgba(0, 0, 0, 0.2)",
        ),
    ),
    EasterEgg(
        "maya",
        create_variations(
            ["Maya", "Siren", "Phase Lock", "Order of the Impending Storm", "Blue Tattoos", "Maya the Siren"]
        ),
        "Phaselock engaged. Your search results are suspended in time.",
        _style(
            "linear-gradient(135deg, rgba(0, 0, 255, 0.2), rgba(138, 43, 226, 0.2))",
            "1px solid rgba(0, 0, 255, 0.3)",
            "#4169E1",
            "0 0 10px rgba(65, 105, 225, 0.5)",
            "0 4px 20px rgba(0, 0, 255, 0.2), inset 0 0 20px rgba(138, 43, 226, 0.2)",
        ),
    ),
    EasterEgg(
        "tanya",
        create_variations(
            ["Tanya", "Degurechaff", "Devil of the Rhine", "Major Tanya", "Salamander Kampfgruppe", "Being X"]
        ),
        "Deus lo vult. Your efficiency pleases the Empire.",
        _style(
            "linear-gradient(135deg, rgba(218, 165, 32, 0.2), rgba(128, 128, 128, 0.2))",
            "1px solid rgba(218, 165, 32, 0.3)",
            "#DAA520",
            "0 0 10px rgba(218, 165, 32, 0.5)",
            "0 4px 20px rgba(218, 165, 32, 0.2), inset 0 0 20px rgba(128, 128, 128, 0.2)",
        ),
    ),
    EasterEgg(
        "quantum",
        frozenset(
            [
                "schrödinger",
                "schrodinger",
                "quantum",
                "entanglement",
                "superposition",
                "uncertainty",
                "wave function",
                "quantum tunnel",
            ]
        ),
        "\U0001F431 The cat is both alive and dead until you look at this message",
        _style(
            "linear-gradient(135deg, rgba(0, 0, 0, 0.4), rgba(75, 0, 130, 0.4))",
            "1px solid rgba(0, 255, 0, 0.3)",
            "#00FF00",
            "0 0 10px rgba(0, 255, 0, 0.5)",
            "0 4px 20px rgba(0, 0, 0, 0.3), inset 0 0 20px rgba(75, 0, 130, 0.3)",
            fontFamily="monospace",
        ),
    ),
    EasterEgg(
        "heisenberg",
        frozenset(["heisenberg", "uncertainty principle"]),
        "The more precisely you search, the less certain you are of finding anything",
        _style(
            "linear-gradient(135deg, rgba(30, 30, 30, 0.4), rgba(50, 50, 50, 0.4))",
            "1px solid rgba(0, 255, 0, 0.3)",
            "#00FF00",
            "0 0 10px rgba(0, 255, 0, 0.5)",
            "0 4px 20px rgba(30, 30, 30, 0.3), inset 0 0 20px rgba(0, 255, 0, 0.2)",
            fontFamily="monospace",
        ),
    ),
    EasterEgg(
        "planck",
        frozenset(["planck", "planck length", "planck time"]),
        "You've reached the smallest searchable unit of this blog",
        _style(
            "linear-gradient(135deg, rgba(0, 0, 128, 0.4), rgba(0, 0, 80, 0.4))",
            "1px solid rgba(255, 255, 255, 0.3)",
            "#FFFFFF",
            "0 0 10px rgba(255, 255, 255, 0.5)",
            "0 4px 20px rgba(0, 0, 128, 0.3), inset 0 0 20px rgba(0, 0, 80, 0.3)",
            fontFamily="monospace",
        ),
    ),
]


def check_for_easter_egg(query: str, eggs: Iterable[EasterEgg] = None) -> EasterEggResult:
    """Return the first egg whose trigger appears in the query."""
    normalized = (query or "").strip().lower()
    if not normalized:
        return EasterEggResult()

    for egg in eggs if eggs is not None else EASTER_EGGS:
        for trigger in egg.triggers:
            needle = trigger.lower()
            if needle in normalized or normalized == needle:
                logger.debug(f"Easter egg '{egg.key}' triggered by query {query!r}")
                return EasterEggResult(
                    found=True, key=egg.key, message=egg.message, style=dict(egg.style)
                )
    return EasterEggResult()
