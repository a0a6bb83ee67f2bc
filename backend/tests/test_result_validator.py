import pytest

from lesson_qa.validations.result_validator import validate_qa_result


def fields(outcome):
    return {e.field for e in outcome.errors}


def test_valid_report_is_accepted(make_report):
    outcome = validate_qa_result(make_report())

    assert outcome.valid
    assert outcome.result.total_score == 82
    assert outcome.result.issues[0].slideNumber == 3
    assert outcome.result.scores[1].maxScore == 15


def test_empty_arrays_are_accepted(make_report):
    raw = make_report(revision_triggers=[], strengths=[], issues=[], risks=[], suggestions=[], scores=[])

    assert validate_qa_result(raw).valid


def test_null_slide_number_is_accepted(make_report):
    raw = make_report(issues=[{"slideNumber": None, "severity": "major", "description": "Deck-wide pacing.", "suggestion": ""}])

    assert validate_qa_result(raw).valid


def test_total_score_out_of_range_is_rejected(make_report):
    outcome = validate_qa_result(make_report(total_score=150))

    assert not outcome.valid
    assert outcome.result is None
    assert "total_score" in fields(outcome)


@pytest.mark.parametrize("bad", [True, "80", None, float("nan"), -1])
def test_total_score_must_be_a_real_number(make_report, bad):
    assert "total_score" in fields(validate_qa_result(make_report(total_score=bad)))


def test_unknown_severity_is_rejected(make_report):
    raw = make_report(issues=[{"slideNumber": 2, "severity": "blocker", "description": "Typo.", "suggestion": "Fix."}])

    outcome = validate_qa_result(raw)

    assert fields(outcome) == {"issues[0].severity"}


def test_score_above_max_is_rejected(make_report):
    raw = make_report(scores=[{"category": "Engagement", "score": 20, "maxScore": 15, "notes": ""}])

    assert fields(validate_qa_result(raw)) == {"scores[0].score"}


def test_all_violations_are_collected(make_report):
    raw = make_report(
        verdict="excellent",
        short_summary="",
        revision_required="no",
        strengths="lots",
        issues=[{"severity": "minor", "description": " ", "suggestion": 3, "slideNumber": 1.5}],
    )

    outcome = validate_qa_result(raw)

    assert fields(outcome) == {
        "verdict",
        "short_summary",
        "revision_required",
        "strengths",
        "issues[0].description",
        "issues[0].suggestion",
        "issues[0].slideNumber",
    }
    assert "verdict: Input should be" in outcome.summary()


def test_non_object_is_rejected():
    outcome = validate_qa_result(["not", "an", "object"])

    assert fields(outcome) == {"root"}


def test_numeric_strings_are_not_scores(make_report):
    raw = make_report(scores=[{"category": "Engagement", "score": "12", "maxScore": 15, "notes": ""}])

    assert fields(validate_qa_result(raw)) == {"scores[0].score"}


def test_null_score_notes_reported_with_item_path(make_report):
    raw = make_report(scores=[{"category": "Engagement", "score": 12, "maxScore": 15, "notes": None}])

    assert fields(validate_qa_result(raw)) == {"scores[0].notes"}


def test_list_fields_are_required(make_report):
    raw = make_report()
    del raw["risks"]
    del raw["scores"]

    assert fields(validate_qa_result(raw)) == {"risks", "scores"}


def test_non_string_list_items_are_rejected(make_report):
    assert fields(validate_qa_result(make_report(suggestions=["ok", 7]))) == {"suggestions[1]"}


def test_whole_number_float_slide_number_is_rejected(make_report):
    raw = make_report(issues=[{"slideNumber": 2.0, "severity": "minor", "description": "Typo.", "suggestion": ""}])

    assert fields(validate_qa_result(raw)) == {"issues[0].slideNumber"}


def test_padded_short_summary_is_rejected(make_report):
    assert fields(validate_qa_result(make_report(short_summary="  ok   "))) == {"short_summary"}
