from health_analyzer.utils.result_parser import (
    dedupe,
    extract_section_lines,
    parse_analysis_results,
    split_sentences,
)

from conftest import DENTAL_TEXT


def test_parse_concerns_and_recommendations():
    text = "Concerns:\n- Mild gingivitis\n- Plaque buildup\n\nRecommendations:\n- Floss daily\n"
    result = parse_analysis_results(text)

    assert result.analysis == text
    assert result.concerns == ["Mild gingivitis", "Plaque buildup"]
    assert result.recommendations == ["Floss daily"]


def test_parse_full_analysis_keeps_order():
    result = parse_analysis_results(DENTAL_TEXT)

    assert result.analysis == DENTAL_TEXT
    assert len(result.concerns) == 4
    assert len(result.recommendations) == 4
    assert result.concerns[0] == "Mild gingivitis indicated by reddened gums"
    assert result.recommendations[2] == "Consider a dental checkup to address the potential cavity"


def test_text_without_sections_is_returned_unchanged():
    text = "The photo shows healthy looking teeth. Nothing stands out."
    result = parse_analysis_results(text)

    assert result.to_dict() == {"analysis": text, "concerns": [], "recommendations": []}


def test_empty_text():
    result = parse_analysis_results("")
    assert result.analysis == ""
    assert result.concerns == []
    assert result.recommendations == []


def test_header_synonyms_and_markdown():
    text = (
        "**Potential Issues:**\n"
        "- Slight redness\n"
        "* Dry skin\n"
        "\n"
        "## Suggestions\n"
        "- Use a gentle moisturizer\n"
    )
    result = parse_analysis_results(text)

    assert result.concerns == ["Slight redness", "Dry skin"]
    assert result.recommendations == ["Use a gentle moisturizer"]


def test_section_stops_at_next_header_line():
    text = "Concerns:\n- Uneven shoulders\nRecommendations:\n- Stretch daily\n"
    result = parse_analysis_results(text)

    assert result.concerns == ["Uneven shoulders"]
    assert result.recommendations == ["Stretch daily"]


def test_sentence_mentioning_issues_is_not_a_header():
    text = "Issues with alignment are minor overall.\nNothing else to report."
    assert extract_section_lines(text, ("issues",)) == []


def test_blank_bullets_are_dropped():
    text = "Concerns:\n- \n-   Tartar near the gumline  \n"
    assert parse_analysis_results(text).concerns == ["Tartar near the gumline"]


def test_parse_is_idempotent():
    assert parse_analysis_results(DENTAL_TEXT) == parse_analysis_results(DENTAL_TEXT)


def test_split_sentences_and_dedupe():
    assert split_sentences("One. Two! Three? ") == ["One.", "Two!", "Three?"]
    assert dedupe(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


def test_header_with_inline_text_ends_previous_section():
    text = "Concerns:\n- Plaque\nRecommendations: floss daily and brush twice\n"
    result = parse_analysis_results(text)

    assert result.concerns == ["Plaque"]
    assert result.recommendations == ["floss daily and brush twice"]


def test_bare_header_ends_previous_section():
    result = parse_analysis_results("Potential Concerns\n- Plaque\nRecommendations\n- Floss daily\n")

    assert result.concerns == ["Plaque"]
    assert result.recommendations == ["Floss daily"]


def test_bold_header_ends_previous_section():
    result = parse_analysis_results("**Concerns**\n- Plaque\n**Recommendations**\n- Floss daily\n")

    assert result.concerns == ["Plaque"]
    assert result.recommendations == ["Floss daily"]


def test_labeled_line_ends_section():
    text = "Concerns:\n- Plaque\nOral hygiene score: 6/10\n"
    assert parse_analysis_results(text).concerns == ["Plaque"]
