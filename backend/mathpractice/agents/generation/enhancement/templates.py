"""Template pools for story and real-world framing.

Templates use ``{a}`` / ``{b}`` for the first two operands of the original
question and ``{name}``, ``{items}``, ``{group}``, ``{container}`` for picks
from the pools below. Paired pools also fill ``{group_plural}`` and
``{container_plural}``.
"""

from typing import Dict, List

from ...base.state import QuestionType

# Text containing any of these already reads as a word problem.
STORY_INDICATORS = [
    "has",
    "have",
    "bought",
    "sold",
    "gave",
    "shared",
    "collected",
    "apples",
    "toys",
    "books",
    "cookies",
    "students",
    "friends",
]

ENHANCEMENT_PROBABILITY: Dict[QuestionType, float] = {
    QuestionType.ADDITION: 0.8,
    QuestionType.SUBTRACTION: 0.8,
    QuestionType.MULTIPLICATION: 0.7,
    QuestionType.DIVISION: 0.7,
    QuestionType.FRACTION_ADDITION: 0.6,
    QuestionType.FRACTION_SUBTRACTION: 0.6,
    QuestionType.FRACTION_MULTIPLICATION: 0.6,
    QuestionType.FRACTION_DIVISION: 0.6,
    QuestionType.DECIMAL_ADDITION: 0.5,
}
DEFAULT_ENHANCEMENT_PROBABILITY = 0.3

CHARACTERS = ["Emma", "Alex", "Maya", "Sam", "Zoe", "Jake"]

ADDITION_ITEMS = ["stickers", "marbles", "toy cars", "crayons", "cookies"]
SUBTRACTION_ITEMS = ["balloons", "candies", "pencils", "erasers", "stamps"]
# (plural, singular) pairs
MULTIPLICATION_GROUPS = [("bags", "bag"), ("boxes", "box"), ("groups", "group"), ("packs", "pack"), ("sets", "set")]
MULTIPLICATION_ITEMS = ["apples", "books", "toys", "cards", "stickers"]
DIVISION_CONTAINERS = [("boxes", "box"), ("bags", "bag"), ("baskets", "basket"), ("plates", "plate"), ("groups", "group")]
DIVISION_ITEMS = ["cookies", "candies", "toys", "cards", "stickers"]

STORY_TEMPLATES: Dict[QuestionType, str] = {
    QuestionType.ADDITION: (
        "{name} has {a} {items}. Their friend gives them {b} more {items}. "
        "How many {items} does {name} have now?"
    ),
    QuestionType.SUBTRACTION: (
        "{name} had {a} {items}. They gave away {b} {items} to their friends. "
        "How many {items} does {name} have left?"
    ),
    QuestionType.MULTIPLICATION: (
        "{name} has {a} {group_plural}. Each {group} contains {b} {items}. "
        "How many {items} does {name} have in total?"
    ),
    QuestionType.DIVISION: (
        "{name} has {a} {items} to share equally among {b} {container_plural}. "
        "How many {items} will be in each {container}?"
    ),
}

STORY_POOLS: Dict[QuestionType, Dict[str, list]] = {
    QuestionType.ADDITION: {"items": ADDITION_ITEMS},
    QuestionType.SUBTRACTION: {"items": SUBTRACTION_ITEMS},
    QuestionType.MULTIPLICATION: {"group": MULTIPLICATION_GROUPS, "items": MULTIPLICATION_ITEMS},
    QuestionType.DIVISION: {"container": DIVISION_CONTAINERS, "items": DIVISION_ITEMS},
}

REAL_WORLD_TEMPLATES: Dict[QuestionType, List[str]] = {
    QuestionType.ADDITION: [
        "A school library has {a} fiction books and {b} non-fiction books. "
        "How many books are there in total?",
        "In a parking lot, there are {a} red cars and {b} blue cars. "
        "How many cars are there altogether?",
        "A baker made {a} muffins in the morning and {b} muffins in the afternoon. "
        "How many muffins did the baker make in total?",
    ],
    QuestionType.SUBTRACTION: [
        "A store had {a} bottles of juice. They sold {b} bottles today. "
        "How many bottles of juice are left?",
        "There were {a} students in the cafeteria. {b} students finished eating and left. "
        "How many students are still in the cafeteria?",
        "A farmer had {a} chickens. {b} chickens were sold at the market. "
        "How many chickens does the farmer have now?",
    ],
    QuestionType.MULTIPLICATION: [
        "A classroom has {a} rows of desks. Each row has {b} desks. "
        "How many desks are there in the classroom?",
        "A garden has {a} flower beds. Each flower bed has {b} flowers. "
        "How many flowers are there in total?",
        "A pizza restaurant serves {a} tables. Each table seats {b} people. "
        "How many people can the restaurant serve?",
    ],
    QuestionType.DIVISION: [
        "A teacher has {a} stickers to distribute equally among {b} students. "
        "How many stickers will each student receive?",
        "{a} apples need to be packed into {b} equal groups. "
        "How many apples will be in each group?",
        "A pizza is cut into {a} slices to be shared equally among {b} friends. "
        "How many slices will each friend get?",
    ],
}

VISUAL_TEMPLATE = "Look at the picture and solve: {text}"

RELATABLE_WORDS = [
    "cookies",
    "toys",
    "books",
    "friends",
    "students",
    "school",
    "playground",
    "games",
    "pets",
    "family",
    "home",
    "park",
]
