"""Static curriculum tables used by the CurriculumAnalyzer.

Read-only and shared across requests.
"""

from typing import Dict, List, Tuple

from ...base.state import QuestionType

# Phrases that steer the similarity search toward the right kind of item.
SEARCH_KEYWORDS: Dict[QuestionType, str] = {
    QuestionType.ADDITION: "addition sum add numbers together total",
    QuestionType.SUBTRACTION: "subtraction difference take away minus",
    QuestionType.MULTIPLICATION: "multiplication times product equal groups",
    QuestionType.DIVISION: "division divide share equally quotient",
    QuestionType.PATTERN: "number pattern sequence next term rule",
    QuestionType.FRACTION_ADDITION: "adding fractions numerator denominator",
    QuestionType.FRACTION_SUBTRACTION: "subtracting fractions numerator denominator",
    QuestionType.FRACTION_MULTIPLICATION: "multiplying fractions of a quantity",
    QuestionType.FRACTION_DIVISION: "dividing fractions reciprocal",
    QuestionType.DECIMAL_ADDITION: "adding decimals tenths hundredths",
    QuestionType.WORD_PROBLEM_MIXED: "multi-step word problem mixed operations",
    QuestionType.AREA_CALCULATION: "area rectangle length width square units",
}

CurriculumEntry = Dict[str, List[str]]

# grade -> question type -> objectives / prerequisites
CURRICULUM: Dict[int, Dict[QuestionType, CurriculumEntry]] = {
    1: {
        QuestionType.ADDITION: {
            "objectives": [
                "Add within 10 using objects and drawings",
                "Understand addition as putting together",
            ],
            "prerequisites": ["Counting to 20", "Number recognition"],
        },
        QuestionType.SUBTRACTION: {
            "objectives": [
                "Subtract within 10",
                "Understand subtraction as taking apart",
            ],
            "prerequisites": ["Counting backwards from 10", "Number recognition"],
        },
        QuestionType.PATTERN: {
            "objectives": ["Extend simple repeating and counting patterns"],
            "prerequisites": ["Counting to 20"],
        },
    },
    2: {
        QuestionType.ADDITION: {
            "objectives": [
                "Fluently add within 20",
                "Add two-digit numbers without regrouping",
            ],
            "prerequisites": ["Addition facts within 10", "Place value of tens and ones"],
        },
        QuestionType.SUBTRACTION: {
            "objectives": [
                "Fluently subtract within 20",
                "Relate subtraction to addition",
            ],
            "prerequisites": ["Subtraction facts within 10"],
        },
        QuestionType.MULTIPLICATION: {
            "objectives": ["Use repeated addition to find totals of equal groups"],
            "prerequisites": ["Skip counting by 2s, 5s and 10s"],
        },
    },
    3: {
        QuestionType.ADDITION: {
            "objectives": [
                "Add within 1000 using place value strategies",
                "Add with regrouping",
            ],
            "prerequisites": ["Two-digit addition", "Place value to hundreds"],
        },
        QuestionType.SUBTRACTION: {
            "objectives": [
                "Subtract within 1000 using place value strategies",
                "Subtract with regrouping",
            ],
            "prerequisites": ["Two-digit subtraction", "Place value to hundreds"],
        },
        QuestionType.MULTIPLICATION: {
            "objectives": [
                "Multiply within 100",
                "Interpret products as equal groups",
            ],
            "prerequisites": ["Repeated addition", "Skip counting"],
        },
        QuestionType.DIVISION: {
            "objectives": [
                "Divide within 100",
                "Interpret quotients as equal sharing",
            ],
            "prerequisites": ["Multiplication facts to 10 x 10"],
        },
        QuestionType.FRACTION_ADDITION: {
            "objectives": ["Understand unit fractions and add like fractions"],
            "prerequisites": ["Equal parts of a whole"],
        },
    },
    4: {
        QuestionType.MULTIPLICATION: {
            "objectives": [
                "Multiply a multi-digit number by a one-digit number",
                "Multiply two two-digit numbers",
            ],
            "prerequisites": ["Multiplication facts", "Place value to thousands"],
        },
        QuestionType.DIVISION: {
            "objectives": [
                "Divide with one-digit divisors",
                "Interpret remainders",
            ],
            "prerequisites": ["Multiplication facts", "Subtraction with regrouping"],
        },
        QuestionType.FRACTION_ADDITION: {
            "objectives": ["Add fractions with like denominators"],
            "prerequisites": ["Equivalent fractions"],
        },
        QuestionType.DECIMAL_ADDITION: {
            "objectives": ["Relate tenths and hundredths to decimal notation"],
            "prerequisites": ["Fractions with denominators 10 and 100"],
        },
        QuestionType.AREA_CALCULATION: {
            "objectives": ["Apply the area formula for rectangles"],
            "prerequisites": ["Multiplication facts"],
        },
    },
    5: {
        QuestionType.FRACTION_ADDITION: {
            "objectives": [
                "Add fractions with unlike denominators",
                "Solve word problems involving fraction addition",
            ],
            "prerequisites": ["Equivalent fractions", "Least common multiple"],
        },
        QuestionType.FRACTION_MULTIPLICATION: {
            "objectives": ["Multiply a fraction by a whole number or a fraction"],
            "prerequisites": ["Fraction addition", "Multiplication facts"],
        },
        QuestionType.DECIMAL_ADDITION: {
            "objectives": ["Add decimals to hundredths"],
            "prerequisites": ["Place value of decimals"],
        },
        QuestionType.DIVISION: {
            "objectives": ["Divide four-digit dividends by two-digit divisors"],
            "prerequisites": ["Long division with one-digit divisors"],
        },
    },
    6: {
        QuestionType.FRACTION_DIVISION: {
            "objectives": ["Divide fractions by fractions"],
            "prerequisites": ["Fraction multiplication", "Reciprocals"],
        },
        QuestionType.WORD_PROBLEM_MIXED: {
            "objectives": ["Solve multi-step problems with whole numbers and decimals"],
            "prerequisites": ["All four operations"],
        },
        QuestionType.AREA_CALCULATION: {
            "objectives": ["Find areas of triangles and composite shapes"],
            "prerequisites": ["Area of rectangles"],
        },
    },
    8: {
        QuestionType.PATTERN: {
            "objectives": [
                "Describe linear number patterns with a rule",
                "Find the nth term of an arithmetic sequence",
            ],
            "prerequisites": ["Operations with integers", "Simple equations"],
        },
        QuestionType.WORD_PROBLEM_MIXED: {
            "objectives": ["Solve problems involving ratios, rates and percentages"],
            "prerequisites": ["Fractions and decimals", "Proportional reasoning"],
        },
    },
}


def nearest_grade(grade: int) -> int:
    """Closest grade that has a curriculum entry; ties go to the lower grade."""
    if grade in CURRICULUM:
        return grade
    return min(CURRICULUM, key=lambda known: (abs(known - grade), known))


def lookup_curriculum(grade: int, question_type: QuestionType) -> Tuple[List[str], List[str]]:
    """Return (learning objectives, prerequisite skills) for a grade and type."""
    entry = CURRICULUM[nearest_grade(grade)].get(question_type)
    if entry is None:
        return [f"Practice {question_type.label} skills"], []
    return list(entry["objectives"]), list(entry["prerequisites"])
