from reconciler.domain.identifier import extract_identifier, stop_words_for


def test_labeled_field_wins_over_other_rules() -> None:
    text = "Turnitin Page 1 of 12\nSome Heading\nFile name: My Essay (2).docx\n"
    assert extract_identifier(text) == "my essay (2)"


def test_labeled_field_is_case_insensitive() -> None:
    assert extract_identifier("TITLE :   Climate   Change Essay") == "climate change essay"


def test_filename_token_skips_stop_words() -> None:
    text = "Page 1 of 3\nTurnitin Similarity Report\nEssay on Climate (1).pdf\n"
    assert extract_identifier(text) == "essay on climate (1)"


def test_filename_token_rejects_short_candidates() -> None:
    text = "12\nab\nHistory Coursework"
    assert extract_identifier(text) == "history coursework"


def test_stop_word_must_be_a_whole_word() -> None:
    assert extract_identifier("Aidan Smith Essay") == "aidan smith essay"
    assert extract_identifier("AI-generated summary\nDraft Two") == "draft two"


def test_custom_vendor_name_is_a_stop_word() -> None:
    text = "Copyleaks Scan\nResearch Paper"
    assert extract_identifier(text, vendor_name="copyleaks") == "research paper"
    assert extract_identifier(text, vendor_name="turnitin") == "copyleaks scan"


def test_first_substantial_line_used_when_no_token_found() -> None:
    text = "ai ÉÉ\nÉÉÉ ÜÜ"
    assert extract_identifier(text) == "ééé üü"


def test_first_substantial_line_skips_percentage_lines() -> None:
    assert extract_identifier("12%\nÉéñ ü") == "ééñ ü"
    assert extract_identifier("*%\nÀÇÑ ÖÖ") == "àçñ öö"


def test_first_substantial_line_rejects_overlong_line() -> None:
    assert extract_identifier("É" * 101) is None


def test_empty_text_yields_none() -> None:
    assert extract_identifier("") is None
    assert extract_identifier("   \n\n ") is None


def test_stop_words_include_vendor() -> None:
    assert "turnitin" in stop_words_for("Turnitin")
    assert "turnitin" not in stop_words_for(None)
