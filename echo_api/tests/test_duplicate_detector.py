"""Tests for duplicate feedback detection."""

import pytest

from echo_api.models.intelligence import FeedbackForDuplicateCheck, FeedbackItem
from echo_api.services.intelligence.duplicate_detector import (
    batch_find_duplicates,
    calculate_similarity,
    find_duplicates,
    find_similar,
    keyword_overlap,
    levenshtein_distance,
    string_similarity,
)


def _make_existing(feedback_id: int, title: str, description: str | None = None):
    return FeedbackForDuplicateCheck(
        feedback_id=feedback_id, title=title, description=description
    )


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("same", "same", 0),
        ("点击保存按钮", "保存按钮点击", 4),
    ],
)
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected
    assert levenshtein_distance(b, a) == expected


def test_string_similarity():
    assert string_similarity("", "") == 1.0
    assert string_similarity("ABC", "abc") == 1.0
    assert string_similarity("abc", "xyz") == 0.0
    assert string_similarity("abcd", "abcf") == 0.75


def test_keyword_overlap():
    assert keyword_overlap("app crashes startup", "app crashes daily") == 0.5
    assert keyword_overlap("the a", "app") == 0.0
    assert keyword_overlap("", "") == 0.0


def test_identical_titles_score_high():
    result = calculate_similarity(
        "App crashes on startup", "", "App crashes on startup", ""
    )
    assert result.score > 0.9
    assert result.reasons == [
        "Titles are very similar (100%)",
        "Descriptions are similar (100%)",
        "Many keywords in common (100%)",
    ]


def test_similar_titles_with_typos():
    result = calculate_similarity(
        "App crashes on startup", "", "App crashe on stratup", ""
    )
    assert result.score > 0.7


def test_similar_descriptions():
    result = calculate_similarity(
        "Login issue",
        "Cannot login to my account, says invalid password",
        "Login issue",
        "Having trouble logging in, password not working",
    )
    assert result.score > 0.6


def test_unrelated_feedback_scores_low():
    result = calculate_similarity(
        "Add dark mode",
        "Please add dark mode to the app",
        "Database performance is slow",
        "Queries are taking too long",
    )
    assert result.score < 0.4


def test_reasons_explain_high_similarity():
    result = calculate_similarity(
        "Application crashes when clicking save button",
        "The app freezes and crashes every time I click the save button",
        "Application crashes when clicking save button",
        "App crashes on save button click",
    )
    assert len(result.reasons) > 0
    assert "similar" in result.reasons[0]


def test_empty_strings_score_without_error():
    result = calculate_similarity("", "", "", "")

    # Empty titles and descriptions count as identical; no keywords to overlap
    assert result.score == 0.8
    assert 0 <= result.score <= 1


def test_none_descriptions_equal_empty():
    assert calculate_similarity("Title", None, "Title", None) == calculate_similarity(
        "Title", "", "Title", ""
    )


def test_chinese_text():
    result = calculate_similarity(
        "应用程序崩溃",
        "点击保存按钮后崩溃",
        "应用程序崩溃",
        "保存按钮点击后崩溃",
    )
    assert result.score > 0.6


@pytest.mark.parametrize(
    "title,description",
    [
        ("App crashes on startup", "The app crashes when I open it"),
        ("希望添加导出功能", "导出为 CSV 文件"),
        ("Login broken", ""),
    ],
)
def test_similarity_with_itself_is_maximal(title, description):
    assert calculate_similarity(title, description, title, description).score == 1.0


@pytest.mark.parametrize(
    "pair_a,pair_b",
    [
        (("Add dark mode", "Please add it"), ("Dark theme", "Add a dark theme please")),
        (("Login broken", ""), ("Cannot log in", "Login fails on Safari")),
        (("应用崩溃", "点击后崩溃"), ("App crash", None)),
    ],
)
def test_similarity_is_symmetric(pair_a, pair_b):
    forward = calculate_similarity(*pair_a, *pair_b)
    backward = calculate_similarity(*pair_b, *pair_a)
    assert forward.score == backward.score


def test_find_duplicates_above_threshold(existing_feedbacks):
    duplicates = find_duplicates(
        "App crashes on startup",
        "The app crashes when I open it",
        existing_feedbacks,
        None,
        0.75,
    )

    assert len(duplicates) == 1
    assert duplicates[0].feedback_id == 1
    assert duplicates[0].similarity >= 90


def test_find_duplicates_excludes_feedback_id(existing_feedbacks):
    duplicates = find_duplicates(
        "App crashes on startup",
        "The app crashes when I open it",
        existing_feedbacks,
        1,
        0.75,
    )

    assert all(d.feedback_id != 1 for d in duplicates)


def test_find_duplicates_excludes_feedback_id_zero():
    pool = [_make_existing(0, "Same title", "Same body")]

    assert find_duplicates("Same title", "Same body", pool, exclude_feedback_id=0) == []


def test_find_duplicates_sorted_by_similarity(existing_feedbacks):
    duplicates = find_duplicates(
        "App crashes and login issues",
        "Multiple problems with the app",
        existing_feedbacks,
        None,
        0.3,
    )

    similarities = [d.similarity for d in duplicates]
    assert similarities == sorted(similarities, reverse=True)


def test_find_duplicates_unique_feedback(existing_feedbacks):
    duplicates = find_duplicates(
        "Completely unique feedback title",
        "This description has nothing in common with others",
        existing_feedbacks,
        None,
        0.75,
    )

    assert duplicates == []


def test_find_duplicates_higher_threshold_never_returns_more(existing_feedbacks):
    counts = [
        len(
            find_duplicates(
                "App crashes sometimes",
                "It crashes occasionally",
                existing_feedbacks,
                threshold=threshold,
            )
        )
        for threshold in (0.0, 0.3, 0.5, 0.75, 0.9, 1.0)
    ]

    assert counts == sorted(counts, reverse=True)
    assert counts[0] == len(existing_feedbacks)


def test_find_duplicates_threshold_is_inclusive():
    pool = [_make_existing(5, "Export to CSV", "Add CSV export")]

    duplicates = find_duplicates("Export to CSV", "Add CSV export", pool, threshold=1.0)

    assert [d.similarity for d in duplicates] == [100]


def test_find_duplicates_fills_missing_description():
    pool = [_make_existing(9, "Export to CSV")]

    duplicates = find_duplicates("Export to CSV", None, pool)

    assert duplicates[0].description == ""


def test_find_similar_uses_loose_threshold(existing_feedbacks):
    similar = find_similar("App crashes", "The app crashes", existing_feedbacks)
    strict = find_duplicates("App crashes", "The app crashes", existing_feedbacks)

    assert len(similar) >= len(strict)
    assert similar[0].feedback_id == 1


def test_batch_find_duplicates_processes_each_item():
    all_feedbacks = [
        _make_existing(1, "App crashes on startup", "The app crashes when I open it"),
        _make_existing(2, "Add dark mode feature", "Please add dark mode to the app"),
        _make_existing(3, "App crashes when opening", "Application crashes on open"),
    ]

    results = batch_find_duplicates(
        [
            FeedbackItem(feedback_id=1, title="App crashes on startup", description="Test"),
            FeedbackItem(feedback_id=2, title="Add dark mode feature", description="Test"),
        ],
        all_feedbacks,
        0.75,
    )

    assert [r.feedback_id for r in results] == [1, 2]


def test_batch_find_duplicates_excludes_self():
    all_feedbacks = [
        _make_existing(1, "App crashes on startup", "Test"),
        _make_existing(2, "App crashes on startup", "Test"),
    ]

    results = batch_find_duplicates(
        [FeedbackItem(feedback_id=1, title="App crashes on startup", description="Test")],
        all_feedbacks,
    )

    assert [d.feedback_id for d in results[0].duplicates] == [2]
