"""
import_engine.field_map - Column-name → record-field mapping.

Each logical field maps to an ordered tuple of accepted CSV headers.
The first header whose cell is non-blank wins, so supporting a new
spreadsheet layout is a matter of appending an alias here.
"""

REG_NO = ("Reg. No.", "Reg No", "Registration Number")

# ── Student identity sheet ─────────────────────────────────────────────
STUDENT_FIELDS: dict[str, tuple[str, ...]] = {
    "reg_no":       REG_NO,
    "student_name": ("Student Name", "Name"),
    "father_name":  ("Father Name", "Father's Name"),
    "dob":          ("Date of birth", "DOB", "Date of Birth"),
    "gender":       ("Gender",),
    "mobile":       ("Mobile No.", "Mobile"),
    "email":        ("Email",),
    "program":      ("Program",),
    "institution":  ("Institution",),
}

# Nested under Student.address
ADDRESS_FIELDS: dict[str, tuple[str, ...]] = {
    "village":  ("village", "Village"),
    "city":     ("city", "City"),
    "taluk":    ("taluk", "Taluk"),
    "district": ("district", "District"),
    "pincode":  ("pin code", "Pincode"),
}

# ── Semester marks sheet ───────────────────────────────────────────────
MARK_FIELDS: dict[str, tuple[str, ...]] = {
    "reg_no":       REG_NO,
    "semester":     ("Sem Sr", "Semester", "Sem"),
    "subject_code": ("QP-CODE", "Subject Code"),
    "subject_name": ("SUBJECT NAME", "Subject Name"),
    "marks":        ("Marks (IA/Tr/Pr)",),
    "result":       ("Result",),
    "credits":      ("Credit",),
    "grade":        ("Grade",),
    "exam_year":    ("Exam Year",),
}

# ── Semester result summary sheet ──────────────────────────────────────
RESULT_FIELDS: dict[str, tuple[str, ...]] = {
    "reg_no":                REG_NO,
    "semester":              ("Semester", "Sem"),
    "total_credits_applied": ("Total Credit Applied", "Credit Applied"),
    "total_credits_earned":  ("Total Credit Earned", "Credit Earned"),
    "total_grade_points":    ("Total Grade Points", "Grade Points"),
    "sgpa":                  ("SGPA",),
    "sgpa_attempts":         ("SGPA (Attempts)",),
    "attempts":              ("Attempts",),
    "overall_cgpa":          ("CGPA (Overall)", "CGPA"),
    "final_result":          ("Final Result (Overall)", "Final Result"),
    "pending_subjects":      ("Pending Subjects",),
}

# Composite-field delimiters
MARKS_DELIMITER   = "/"
ATTEMPTS_OPEN     = "("
PENDING_DELIMITER = ";"
