from health_analyzer.extractors import posture

POSTURE_TEXT = """Posture Issues:
- Forward head posture
- Rounded shoulders

Exercises:
- Chin tucks
- Wall angels

Overall posture score: 5/10
"""


def test_issues_exercises_and_score():
    fields = posture.extract(POSTURE_TEXT)

    assert fields.issues == ["Forward head posture", "Rounded shoulders"]
    assert fields.exercise_recommendations == ["Chin tucks", "Wall angels"]
    assert fields.posture_score == 5


def test_exercises_fall_back_to_recommendations():
    text = (
        "Recommendations:\n"
        "- Stretch your chest daily\n"
        "- Drink more water\n"
        "- Strengthen your core\n"
    )
    fields = posture.extract(text)

    assert fields.exercise_recommendations == ["Stretch your chest daily", "Strengthen your core"]


def test_issue_keyword_fallback():
    text = "You appear slouched while sitting at the desk. Your hips look level."
    fields = posture.extract(text)

    assert fields.issues == ["You appear slouched while sitting at the desk."]
    assert fields.exercise_recommendations == []
    assert fields.posture_score is None


def test_score_outside_range():
    assert posture.extract("Posture rating: 0/10").posture_score is None


def test_issues_stop_at_bold_exercise_header():
    text = "Posture Issues:\n- Rounded shoulders\n**Exercises**\n- Doorway stretch\n"
    fields = posture.extract(text)

    assert fields.issues == ["Rounded shoulders"]
    assert fields.exercise_recommendations == ["Doorway stretch"]


def test_extract_is_idempotent():
    assert posture.extract(POSTURE_TEXT) == posture.extract(POSTURE_TEXT)
