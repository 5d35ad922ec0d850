import pytest

from db.models import Student, Mark
from services.records_service import RecordsService
from tests.factories import StudentFactory, MarkFactory, ResultSummaryFactory


def test_delete_cascades_across_all_kinds(session):
    StudentFactory(reg_no="164CS21001")
    MarkFactory(reg_no="164CS21001", semester=1)
    MarkFactory(reg_no="164CS21001", semester=2)
    ResultSummaryFactory(reg_no="164CS21001", semester=1)
    StudentFactory(reg_no="164CS21002")
    MarkFactory(reg_no="164CS21002")

    counts = RecordsService.delete_student_data(session, "164CS21001")
    session.commit()

    assert counts == {"students": 1, "marks": 2, "results": 1}
    assert RecordsService.get_student(session, "164CS21001") is None
    assert RecordsService.result_summaries(session, "164CS21001") == []
    assert RecordsService.get_student(session, "164CS21002") is not None
    assert len(RecordsService.marks_for_semester(session, "164CS21002", 1)) == 1


def test_delete_unknown_reg_no_is_a_noop(session):
    StudentFactory(reg_no="164CS21001")
    counts = RecordsService.delete_student_data(session, "NOPE")
    assert counts == {"students": 0, "marks": 0, "results": 0}


def test_upsert_student_accepts_flat_or_nested_address(session):
    RecordsService.upsert_student(session, {
        "reg_no": "164CS21001", "student_name": "Asha", "father_name": "Kumar",
        "dob": "15-06-2004", "address": {"city": "Kampli"},
    })
    student = RecordsService.upsert_student(session, {
        "reg_no": "164CS21001", "student_name": "Asha K", "father_name": "Kumar",
        "dob": "15-06-2004", "address_district": "Ballari",
    })
    session.commit()

    assert session.query(Student).count() == 1
    assert student.student_name == "Asha K"
    assert student.address_district == "Ballari"
    assert student.to_dict()["address"]["district"] == "Ballari"
    assert student.program == "Computer Science"


def test_mark_model_rejects_non_positive_semester(session):
    with pytest.raises(ValueError):
        RecordsService.upsert_mark(session, {
            "reg_no": "164CS21001", "semester": 0, "subject_code": "20CS31P",
        })


def test_mark_model_rejects_blank_reg_no(session):
    with pytest.raises(ValueError):
        Mark(reg_no="  ", semester=1, subject_code="X")


def test_verify_student_needs_matching_dob(session):
    StudentFactory(reg_no="164CS21001", dob="15-06-2004")
    assert RecordsService.verify_student(session, "164CS21001", "15-06-2004") is not None
    assert RecordsService.verify_student(session, "164CS21001", "2004-06-15") is None


def test_search_matches_reg_no_or_name(session):
    StudentFactory(reg_no="164CS21001", student_name="Asha Kumari")
    StudentFactory(reg_no="164ME21002", student_name="Ravi")

    assert [s.reg_no for s in RecordsService.search_students(session, "asha")] == ["164CS21001"]
    assert [s.reg_no for s in RecordsService.search_students(session, "ME21")] == ["164ME21002"]
    assert len(RecordsService.search_students(session, "164")) == 2


def test_result_summaries_are_ordered_by_semester(session):
    ResultSummaryFactory(reg_no="164CS21001", semester=3)
    ResultSummaryFactory(reg_no="164CS21001", semester=1, pending_subjects=["Maths"])

    results = RecordsService.result_summaries(session, "164CS21001")
    assert [r.semester for r in results] == [1, 3]
    assert results[0].to_dict()["pending_subjects"] == ["Maths"]


def test_statistics(session):
    for _ in range(7):
        StudentFactory()
    MarkFactory(semester=2)
    MarkFactory(semester=1)
    MarkFactory(semester=2)
    ResultSummaryFactory()

    stats = RecordsService.statistics(session)
    assert stats["students"] == 7
    assert stats["marks"] == 3
    assert stats["results"] == 1
    assert stats["semesterStats"] == [{"_id": 1, "count": 1}, {"_id": 2, "count": 2}]
    assert len(stats["recentStudents"]) == 5


def test_upsert_student_ignores_non_object_address(session):
    student = RecordsService.upsert_student(session, {
        "reg_no": "164CS21001", "student_name": "Asha", "father_name": "Kumar",
        "dob": "15-06-2004", "address": "Hampi", "address_city": "Kampli",
    })
    session.commit()

    assert student.address_village == ""
    assert student.address_city == "Kampli"
