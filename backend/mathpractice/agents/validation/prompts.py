"""Prompts for the Answer Validation Agent."""

GRADING_PROMPT = """You are an expert educational grader. Validate this student answer with partial credit scoring.

QUESTION: {question_text}

STUDENT ANSWER: {student_answer}

GRADING GUIDELINES:
- Score 0-10 (0 = completely wrong, 10 = perfect)
- Score >= 8 is considered correct
- Provide constructive feedback (encouraging + improvement tips)
- Be fair and educational, not just right/wrong

RESPONSE FORMAT (JSON only):
{{
  "score": <number 0-10>,
  "feedback": "<constructive feedback>",
  "isCorrect": <boolean>
}}

Respond with ONLY the JSON object, no additional text."""

# (minimum percentage, opening, closing) checked top down
FEEDBACK_BANDS = [
    (90, "Excellent work!", "Your understanding is very strong. Keep up the great work!"),
    (75, "Good job!", "You have a solid grasp of the material. Review the areas below for improvement."),
    (60, "Fair performance.", "You're on the right track, but need more practice in some areas. "
                              "Focus on the improvement areas below."),
    (0, "Keep learning!", "Don't be discouraged, everyone learns at their own pace. "
                          "Review the material and try again when ready."),
]

OVERALL_FEEDBACK = "{opening} You scored {percentage}% ({correct}/{total} questions correct). {closing}"

DEFAULT_STRENGTH = "Demonstrating effort and understanding"
DEFAULT_IMPROVEMENT_AREA = "Continue practicing for mastery"
