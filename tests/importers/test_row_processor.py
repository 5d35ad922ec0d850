import pytest

import config
from import_engine.row_processor import (
    RowError, StudentRowProcessor, MarkRowProcessor, ResultRowProcessor,
    parse_int, parse_float, resolve, split_marks, split_sgpa, split_pending,
)


# ── Cell helpers ───────────────────────────────────────────────────────

def test_resolve_takes_first_non_blank_alias():
    row = {"Reg. No.": "  ", "Reg No": " 164CS21001 ", "Registration Number": "X"}
    assert resolve(row, ("Reg. No.", "Reg No", "Registration Number")) == "164CS21001"


def test_resolve_falls_back_to_default():
    assert resolve({}, ("Program",), "Computer Science") == "Computer Science"


@pytest.mark.parametrize("value,expected", [
    ("3", 3), (" 4 ", 4), ("3rd", 3), ("", 0), ("abc", 0), (None, 0),
])
def test_parse_int(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("8.2", 8.2), ("8.2(1)", 8.2), (".5", 0.5), ("", 0.0), ("n/a", 0.0),
])
def test_parse_float(value, expected):
    assert parse_float(value) == expected


def test_split_marks_full_triple():
    assert split_marks("45/30/20") == {"ia": 45, "theory": 30, "practical": 20}


def test_split_marks_missing_segment_is_zero():
    assert split_marks("45//20") == {"ia": 45, "theory": 0, "practical": 20}


def test_split_marks_short_and_garbage():
    assert split_marks("45") == {"ia": 45, "theory": 0, "practical": 0}
    assert split_marks("AB/30/-") == {"ia": 0, "theory": 30, "practical": 0}
    assert split_marks("") == {"ia": 0, "theory": 0, "practical": 0}


def test_split_sgpa():
    assert split_sgpa("8.2(1)") == (8.2, 1)
    assert split_sgpa("7.45 (2)") == (7.45, 2)
    assert split_sgpa("6.9") == (6.9, None)
    assert split_sgpa("") == (0.0, None)


def test_split_pending_drops_blanks():
    assert split_pending("Maths ; Physics;;") == ["Maths", "Physics"]
    assert split_pending("") == []


# ── Student rows ───────────────────────────────────────────────────────

def test_student_extract_with_alias_headers():
    row = {
        "Registration Number": "164CS21001",
        "Name": " Asha K ",
        "Father's Name": "Kumar",
        "DOB": "15-06-2004",
        "Mobile": "9845000001",
        "Village": "Hampi",
        "Pincode": "583132",
    }
    record = StudentRowProcessor().extract(row)
    assert record["reg_no"] == "164CS21001"
    assert record["student_name"] == "Asha K"
    assert record["father_name"] == "Kumar"
    assert record["dob"] == "15-06-2004"
    assert record["mobile"] == "9845000001"
    assert record["address"]["village"] == "Hampi"
    assert record["address"]["pincode"] == "583132"
    assert record["address"]["city"] == ""
    assert record["program"] == config.DEFAULT_PROGRAM
    assert record["institution"] == config.DEFAULT_INSTITUTION


def test_student_validate_names_missing_fields():
    proc = StudentRowProcessor()
    record = proc.extract({"Reg No": "164CS21001", "Name": "Asha"})
    with pytest.raises(RowError) as exc:
        proc.validate(record)
    assert "Father Name" in str(exc.value)
    assert "DOB" in str(exc.value)
    assert "Reg No" not in str(exc.value)


def test_default_program_follows_config(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_PROGRAM", "Mechanical Engineering")
    record = StudentRowProcessor().extract({"Reg No": "1"})
    assert record["program"] == "Mechanical Engineering"


# ── Mark rows ──────────────────────────────────────────────────────────

def test_mark_extract():
    row = {
        "Reg. No.": "164CS21001",
        "Sem Sr": "3",
        "QP-CODE": "20CS31P",
        "SUBJECT NAME": "Data Structures",
        "Marks (IA/Tr/Pr)": "45//20",
        "Result": "P",
        "Credit": "4",
        "Grade": "A+",
    }
    record = MarkRowProcessor().extract(row)
    assert record["semester"] == 3
    assert record["subject_code"] == "20CS31P"
    assert record["marks"] == {"ia": 45, "theory": 0, "practical": 20}
    assert record["credits"] == 4
    assert record["exam_year"] == config.DEFAULT_EXAM_YEAR


def test_mark_invalid_semester_fails_validation():
    proc = MarkRowProcessor()
    record = proc.extract({"Reg No": "164CS21001", "Semester": "first",
                           "Subject Code": "20CS31P"})
    assert record["semester"] == 0
    with pytest.raises(RowError, match="Semester"):
        proc.validate(record)


def test_mark_negative_semester_fails_validation():
    proc = MarkRowProcessor()
    record = proc.extract({"Reg No": "1", "Sem": "-2", "Subject Code": "X"})
    with pytest.raises(RowError):
        proc.validate(record)


# ── Result summary rows ────────────────────────────────────────────────

def test_result_extract_sgpa_composite():
    row = {
        "Reg No": "164CS21001",
        "Semester": "4",
        "Total Credit Applied": "22",
        "Credit Earned": "18",
        "Total Grade Points": "150.5",
        "SGPA (Attempts)": "8.2(1)",
        "CGPA": "7.9",
        "Final Result": "First Class",
        "Pending Subjects": "Maths; Physics",
    }
    record = ResultRowProcessor().extract(row)
    assert record["sgpa"] == 8.2
    assert record["attempts"] == 1
    assert record["total_credits_applied"] == 22
    assert record["total_credits_earned"] == 18
    assert record["total_grade_points"] == 150.5
    assert record["overall_cgpa"] == "7.9"
    assert record["final_result"] == "First Class"
    assert record["pending_subjects"] == ["Maths", "Physics"]


def test_result_plain_sgpa_and_attempts_columns_win():
    row = {"Reg No": "1", "Sem": "2", "SGPA": "7.1",
           "SGPA (Attempts)": "6.0(3)", "Attempts": "2"}
    record = ResultRowProcessor().extract(row)
    assert record["sgpa"] == 7.1
    assert record["attempts"] == 2


def test_result_attempts_default_to_one():
    record = ResultRowProcessor().extract({"Reg No": "1", "Sem": "2"})
    assert record["attempts"] == 1
    assert record["sgpa"] == 0.0
    assert record["pending_subjects"] == []


def test_result_semester_is_never_defaulted():
    proc = ResultRowProcessor()
    record = proc.extract({"Reg No": "164CS21001"})
    with pytest.raises(RowError, match="Semester"):
        proc.validate(record)
