from io import BytesIO

import pytest
from openpyxl import load_workbook


@pytest.fixture
def transcript(signed_in, make_session, make_course):
    """A signed-in student with an A in CS101 and a C in CS102, both enrolled."""
    admin, _ = signed_in('admin')
    student, student_id = signed_in('student', first_name='Grace', last_name='Hopper', student_id='STU-042')
    session_id = make_session()
    first = make_course('CS101', session_id=session_id, credits=4)
    second = make_course('CS102', session_id=session_id, credits=3)

    for course_id in (first, second):
        admin.post('/api/enrollments', json={'studentId': student_id, 'courseId': course_id})

    admin.post('/api/assessments', json={
        'studentId': student_id, 'courseId': first,
        'attendance': 100, 'assignment': 100, 'midExam': 100, 'finalExam': 100,
    })
    admin.post('/api/assessments', json={
        'studentId': student_id, 'courseId': second,
        'attendance': 100, 'assignment': 100, 'midExam': 50, 'finalExam': 75,
    })
    return student, student_id


def test_student_reads_own_grade_report(transcript):
    student, student_id = transcript
    response = student.get(f'/api/students/{student_id}/grade-report')
    assert response.status_code == 200
    report = response.get_json()
    assert report['student']['studentId'] == 'STU-042'
    assert [a['grade'] for a in report['assessments']] == ['A', 'C']
    assert report['gpa'] == pytest.approx(3.0)
    assert report['generatedAt']


def test_grade_report_filters_by_session(transcript):
    student, student_id = transcript
    report = student.get(f'/api/students/{student_id}/grade-report?sessionId=999').get_json()
    assert report['assessments'] == []
    assert report['gpa'] == 0.0


def test_grade_report_access(transcript, signed_in):
    _, student_id = transcript
    other, _ = signed_in('student')
    lecturer, _ = signed_in('lecturer')

    assert other.get(f'/api/students/{student_id}/grade-report').status_code == 403
    assert lecturer.get(f'/api/students/{student_id}/grade-report').status_code == 200


def test_unknown_student_is_404(signed_in, make_user):
    admin, _ = signed_in('admin')
    lecturer_id, _ = make_user('lecturer')
    assert admin.get('/api/students/999/grade-report').status_code == 404
    response = admin.get(f'/api/students/{lecturer_id}/registration-slip')
    assert response.status_code == 404
    assert response.get_json() == {'message': 'Student not found'}


def test_export_grade_report(transcript):
    student, student_id = transcript
    response = student.get(f'/api/students/{student_id}/grade-report/export')
    assert response.status_code == 200
    assert response.mimetype == 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    assert 'grade_report_STU-042_' in response.headers['Content-Disposition']

    sheet = load_workbook(BytesIO(response.data)).active
    assert sheet.title == 'Grade Report'
    assert [sheet['A1'].value, sheet['B1'].value] == ['Student', 'Grace Hopper']
    assert sheet['B2'].value == 'STU-042'
    assert sheet['B3'].value == 3.0
    assert sheet['B5'].value == 'Course Code'
    assert sheet.freeze_panes == 'A6'
    assert [sheet['B6'].value, sheet['I6'].value, sheet['J6'].value] == ['CS101', 100, 'A']
    assert [sheet['B7'].value, sheet['J7'].value] == ['CS102', 'C']


def test_registration_slip(transcript):
    student, student_id = transcript
    slip = student.get(f'/api/students/{student_id}/registration-slip').get_json()
    assert [e['course']['code'] for e in slip['enrollments']] == ['CS101', 'CS102']
    assert slip['totalCredits'] == 7

    student.delete('/api/enrollments', json={'courseId': slip['enrollments'][1]['courseId']})
    slip = student.get(f'/api/students/{student_id}/registration-slip').get_json()
    assert slip['totalCredits'] == 4
