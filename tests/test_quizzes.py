import pytest


@pytest.fixture
def author(signed_in):
    client, _ = signed_in('lecturer')
    return client


@pytest.fixture
def quiz(author):
    """A two-question quiz with a single attempt and answers shown after completion."""
    quiz = author.post('/api/quizzes', json={'title': 'Python basics', 'passMark': 50}).get_json()
    mc = author.post(f"/api/quizzes/{quiz['id']}/questions", json={
        'question': 'Which keyword defines a function?',
        'questionType': 'multiple_choice',
        'options': ['func', 'def', 'lambda'],
        'correctAnswer': 'def',
        'points': 3,
    }).get_json()
    tf = author.post(f"/api/quizzes/{quiz['id']}/questions", json={
        'question': 'Lists are immutable.',
        'questionType': 'true_false',
        'correctAnswer': 'false',
        'points': 1,
    }).get_json()
    essay = author.post(f"/api/quizzes/{quiz['id']}/questions", json={
        'question': 'Explain generators.',
        'questionType': 'essay',
        'points': 10,
    }).get_json()
    return {'id': quiz['id'], 'mc': mc['id'], 'tf': tf['id'], 'essay': essay['id']}


def test_quiz_defaults(author):
    body = author.post('/api/quizzes', json={'title': 'Defaults'}).get_json()
    assert body['passMark'] == 50
    assert body['attemptsAllowed'] == 1
    assert body['showAnswers'] == 'after_completion'
    assert body['isActive'] is True


def test_students_cannot_author_quizzes(signed_in):
    student, _ = signed_in('student')
    assert student.post('/api/quizzes', json={'title': 'Mine'}).status_code == 403


def test_categories(author, make_course):
    course_id = make_course('CS101')
    category = author.post('/api/quiz-categories', json={'name': 'Weekly', 'courseId': course_id}).get_json()
    author.post('/api/quiz-categories', json={'name': 'Practice'})

    assert [c['name'] for c in author.get('/api/quiz-categories').get_json()] == ['Practice', 'Weekly']
    assert author.post('/api/quiz-categories', json={'name': 'Bad', 'courseId': 999}).status_code == 400

    quiz = author.post('/api/quizzes', json={'title': 'Week 1', 'categoryId': category['id']}).get_json()
    author.post('/api/quizzes', json={'title': 'Loose'})
    listed = author.get(f"/api/quizzes?categoryId={category['id']}").get_json()
    assert [q['id'] for q in listed] == [quiz['id']]


def test_inactive_quizzes_are_not_listed(author):
    quiz = author.post('/api/quizzes', json={'title': 'Retired'}).get_json()
    author.put(f"/api/quizzes/{quiz['id']}", json={'isActive': False})
    assert author.get('/api/quizzes').get_json() == []
    assert author.get(f"/api/quizzes/{quiz['id']}").status_code == 200


def test_questions_get_order_index(author, quiz):
    questions = author.get(f"/api/quizzes/{quiz['id']}/questions").get_json()
    assert [q['orderIndex'] for q in questions] == [0, 1, 2]
    assert questions[0]['correctAnswer'] == 'def'


@pytest.mark.parametrize('payload', [
    {'question': 'Q', 'questionType': 'multiple_choice', 'options': ['only'], 'correctAnswer': 'only'},
    {'question': 'Q', 'questionType': 'multiple_choice', 'options': ['a', 'b'], 'correctAnswer': 'c'},
    {'question': 'Q', 'questionType': 'true_false', 'correctAnswer': 'maybe'},
    {'question': 'Q', 'questionType': 'fill_in'},
])
def test_invalid_questions_are_rejected(author, quiz, payload):
    assert author.post(f"/api/quizzes/{quiz['id']}/questions", json=payload).status_code == 400


def test_answers_hidden_until_completion(signed_in, quiz):
    student, _ = signed_in('student')
    questions = student.get(f"/api/quizzes/{quiz['id']}/questions").get_json()
    assert all('correctAnswer' not in q for q in questions)

    student.post('/api/quiz-attempts', json={'quizId': quiz['id'], 'answers': {str(quiz['mc']): 'def'}})

    questions = student.get(f"/api/quizzes/{quiz['id']}/questions").get_json()
    assert all('correctAnswer' in q for q in questions)


def test_answers_never_shown(author, signed_in, quiz):
    author.put(f"/api/quizzes/{quiz['id']}", json={'showAnswers': 'never'})
    student, _ = signed_in('student')
    student.post('/api/quiz-attempts', json={'quizId': quiz['id'], 'answers': {}})

    questions = student.get(f"/api/quizzes/{quiz['id']}/questions").get_json()
    assert all('correctAnswer' not in q for q in questions)


def test_submitted_attempt_is_scored(signed_in, quiz):
    student, student_id = signed_in('student')
    response = student.post('/api/quiz-attempts', json={
        'quizId': quiz['id'],
        'answers': {str(quiz['mc']): ' DEF ', str(quiz['tf']): 'true', str(quiz['essay']): 'They yield.'},
        'timeSpent': 120,
    })
    assert response.status_code == 201
    attempt = response.get_json()
    assert attempt['userId'] == student_id
    assert attempt['score'] == 75.0
    assert attempt['passed'] is True
    assert attempt['completedAt'] is not None


def test_attempt_started_then_submitted(signed_in, quiz):
    student, _ = signed_in('student')
    attempt = student.post('/api/quiz-attempts', json={'quizId': quiz['id']}).get_json()
    assert attempt['completedAt'] is None
    assert attempt['score'] is None

    response = student.put(f"/api/quiz-attempts/{attempt['id']}", json={
        'answers': {str(quiz['tf']): 'False'},
    })
    assert response.status_code == 200
    assert response.get_json()['score'] == 25.0
    assert response.get_json()['passed'] is False

    again = student.put(f"/api/quiz-attempts/{attempt['id']}", json={'answers': {}})
    assert again.status_code == 400


def test_attempt_limit(author, signed_in, quiz):
    student, _ = signed_in('student')
    assert student.post('/api/quiz-attempts', json={'quizId': quiz['id']}).status_code == 201

    response = student.post('/api/quiz-attempts', json={'quizId': quiz['id']})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'No attempts remaining for this quiz'

    author.put(f"/api/quizzes/{quiz['id']}", json={'attemptsAllowed': 2})
    assert student.post('/api/quiz-attempts', json={'quizId': quiz['id']}).status_code == 201


def test_inactive_quiz_rejects_attempts(author, signed_in, quiz):
    author.put(f"/api/quizzes/{quiz['id']}", json={'isActive': False})
    student, _ = signed_in('student')
    assert student.post('/api/quiz-attempts', json={'quizId': quiz['id']}).status_code == 400


def test_only_owner_submits_attempt(signed_in, quiz):
    student, _ = signed_in('student')
    other, _ = signed_in('student')
    attempt = student.post('/api/quiz-attempts', json={'quizId': quiz['id']}).get_json()

    assert other.put(f"/api/quiz-attempts/{attempt['id']}", json={'answers': {}}).status_code == 403


def test_attempt_listing(author, signed_in, quiz):
    student, student_id = signed_in('student')
    other, other_id = signed_in('student')
    student.post('/api/quiz-attempts', json={'quizId': quiz['id']})
    other.post('/api/quiz-attempts', json={'quizId': quiz['id']})

    assert [a['userId'] for a in student.get('/api/quiz-attempts').get_json()] == [student_id]
    assert student.get(f'/api/quiz-attempts?userId={other_id}').status_code == 403
    assert len(author.get(f"/api/quiz-attempts?quizId={quiz['id']}").get_json()) == 2


def test_update_rejects_null_pass_mark(author):
    quiz = author.post('/api/quizzes', json={'title': 'Nullable'}).get_json()
    response = author.put(f"/api/quizzes/{quiz['id']}", json={'passMark': None})
    assert response.status_code == 400
    assert author.get(f"/api/quizzes/{quiz['id']}").get_json()['passMark'] == 50
