"""Random, human readable device aliases ("Nice Banana").

Word lists are chosen by the active locale; languages without a list use
English. The locale must therefore be configured before the first alias is
generated.
"""

from __future__ import annotations

import random
from typing import Dict, Optional, Sequence, Tuple

import i18n

__all__ = ["generate_random_alias", "WORD_LISTS"]

# language code -> (adjectives, fruits, adjective_first)
WORD_LISTS: Dict[str, Tuple[Sequence[str], Sequence[str], bool]] = {
    "en": (
        (
            "Adorable", "Beautiful", "Big", "Bright", "Clean", "Clever", "Cool", "Cute",
            "Cunning", "Determined", "Energetic", "Efficient", "Fantastic", "Fast", "Fine",
            "Fresh", "Good", "Gorgeous", "Great", "Handsome", "Hot", "Kind", "Lovely",
            "Mystic", "Neat", "Nice", "Patient", "Pretty", "Powerful", "Rich", "Secret",
            "Smart", "Solid", "Special", "Strategic", "Strong", "Tidy", "Wise",
        ),
        (
            "Apple", "Avocado", "Banana", "Blackberry", "Blueberry", "Broccoli", "Carrot",
            "Cherry", "Coconut", "Grape", "Lemon", "Lettuce", "Mango", "Melon", "Mushroom",
            "Onion", "Orange", "Papaya", "Peach", "Pear", "Pineapple", "Potato", "Pumpkin",
            "Raspberry", "Strawberry", "Tomato",
        ),
        True,
    ),
    "de": (
        (
            "Schöne", "Große", "Helle", "Saubere", "Kluge", "Coole", "Süße", "Schlaue",
            "Energische", "Fantastische", "Schnelle", "Feine", "Frische", "Gute", "Tolle",
            "Heiße", "Nette", "Liebe", "Mystische", "Geduldige", "Hübsche", "Starke",
            "Reiche", "Geheime", "Weise", "Ordentliche",
        ),
        (
            "Ananas", "Avocado", "Banane", "Birne", "Brombeere", "Erdbeere", "Gurke",
            "Himbeere", "Karotte", "Kartoffel", "Kirsche", "Kokosnuss", "Mango", "Melone",
            "Orange", "Papaya", "Pflaume", "Tomate", "Traube", "Zitrone", "Zwiebel",
        ),
        True,
    ),
    "es": (
        (
            "Adorable", "Bonita", "Grande", "Brillante", "Limpia", "Lista", "Genial",
            "Linda", "Astuta", "Enérgica", "Fantástica", "Rápida", "Fresca", "Buena",
            "Hermosa", "Amable", "Mística", "Paciente", "Poderosa", "Rica", "Secreta",
            "Fuerte", "Sabia",
        ),
        (
            "Banana", "Cereza", "Ciruela", "Frambuesa", "Fresa", "Lima", "Mandarina",
            "Manzana", "Naranja", "Papaya", "Pera", "Piña", "Sandía", "Uva", "Zanahoria",
        ),
        False,
    ),
    "fr": (
        (
            "Adorable", "Belle", "Grande", "Brillante", "Propre", "Maligne", "Cool",
            "Mignonne", "Rusée", "Énergique", "Fantastique", "Rapide", "Fraîche", "Bonne",
            "Superbe", "Gentille", "Mystique", "Patiente", "Jolie", "Puissante", "Riche",
            "Secrète", "Forte", "Sage",
        ),
        (
            "Banane", "Carotte", "Cerise", "Fraise", "Framboise", "Mangue", "Myrtille",
            "Noix de coco", "Orange", "Papaye", "Pêche", "Poire", "Pomme", "Prune", "Tomate",
        ),
        False,
    ),
}


def generate_random_alias(rng: Optional[random.Random] = None) -> str:
    """Return a fresh alias in the language of the active locale."""
    rng = rng or random.SystemRandom()
    language = i18n.current_app_locale().language_code
    adjectives, fruits, adjective_first = WORD_LISTS.get(language, WORD_LISTS["en"])
    adjective = rng.choice(adjectives)
    fruit = rng.choice(fruits)
    return f"{adjective} {fruit}" if adjective_first else f"{fruit} {adjective}"
