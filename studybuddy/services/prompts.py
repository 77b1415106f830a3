ASK_PROMPT = (
    "You are a study buddy for a {audience}. Explain this in very simple words, using "
    "short sentences and a friendly tone. If the question is complex, break it into "
    "steps: {question}"
)

SUMMARY_LENGTHS = {
    "short": "in 2-3 short sentences",
    "medium": "in 1 short paragraph",
    "long": "in simple detailed paragraphs",
}

SUMMARIZE_PROMPT = (
    "Summarize the following text {length_instruction} for a {audience}. Make it easy "
    "to understand and include a simple example if useful:\n{text}"
)

EXPLAIN_PROMPT = (
    'You are a friendly teacher. Explain "{concept}" to a {audience} in simple terms. '
    "{context_line}Use examples, analogies, and simple language. Make it engaging and "
    "easy to understand."
)

QUIZ_PROMPT = """Create a {difficulty} level quiz about "{topic}" with {question_count} multiple choice questions.
Format your response as JSON with this structure:
{{
  "quiz": [
    {{
      "question": "Question text",
      "options": ["A", "B", "C", "D"],
      "correct": 0,
      "explanation": "Why this is correct"
    }}
  ]
}}
Keep it simple for a {audience}."""

NOTES_QUIZ_PROMPT = """From the following notes, create a {difficulty} quiz with {question_count} multiple-choice questions (A-D). Keep it friendly for a {audience}. Return JSON {{"quiz": [{{"question":"...","options":["A","B","C","D"],"correct":0,"explanation":"..."}}]}}.
Notes:
{notes}"""

FLASHCARDS_PROMPT = """Create {card_count} flashcards about "{topic}" for a {audience}.
Format as JSON:
{{
  "flashcards": [
    {{
      "front": "Question or term",
      "back": "Answer or definition",
      "hint": "Optional helpful hint"
    }}
  ]
}}
Make them educational, fun, and age-appropriate."""

KEY_POINTS_PROMPT = """Read the text and return JSON with key points (5-10 bullets in simple language), glossary (term + definition), and 3 practice questions. Keep it suitable for a {audience}.
{{
  "key_points": ["..."],
  "glossary": [{{"term":"...","definition":"..."}}],
  "practice_questions": ["..."]
}}
Text:
{text}"""

STUDY_PLAN_PROMPT = """Create a {days}-day simple study plan for a {audience}. They have {minutes_per_day} minutes per day. Subjects: {subjects}. Goal: {goal}.
Return JSON like:
{{
  "plan": [
    {{ "day": 1, "totalMinutes": 60, "sessions": [ {{ "subject": "Math", "minutes": 20, "activity": "Practice fractions" }} ], "tips": ["..."] }}
  ],
  "motivation": "one short friendly sentence"
}}"""
