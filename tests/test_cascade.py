"""
Cascade-delete behaviour across the whole schema.
"""

from leetlab.common.models import (
    Playlist,
    Problem,
    ProblemInPlaylist,
    ProblemSolved,
    Submission,
    TestCaseResult,
    User,
)
from leetlab.common.schemas import (
    PlaylistCreate,
    SubmissionCreate,
    TestCaseResultCreate,
    UserCreate,
)
from leetlab.modules import (
    playlist_service,
    problem_service,
    submission_service,
    user_service,
)


def _submit(db, user, problem, passed=True):
    return submission_service.create_submission(
        db,
        SubmissionCreate(
            user_id=user.id,
            problem_id=problem.id,
            source_code={"PYTHON": "print(3)"},
            language="PYTHON",
            status="Accepted" if passed else "Wrong Answer",
        ),
        test_case_results=[
            TestCaseResultCreate(
                test_case=1,
                passed=passed,
                stdout="3",
                expected="3",
                status="Accepted",
            )
        ]
    )


def test_deleting_author_removes_problem_submission_and_results(
    db, make_problem
):
    author = user_service.create_user(
        db,
        UserCreate(email="a@x.com", password="hashed")
    )
    problem = make_problem(author)
    submission = _submit(db, author, problem)
    result_id = submission.test_case_results[0].id

    user_service.delete_user(db, author.id)

    assert problem_service.get_problem(db, problem.id) is None
    assert submission_service.get_submission(db, submission.id) is None
    assert db.query(TestCaseResult).filter(
        TestCaseResult.id == result_id
    ).count() == 0


def test_deleting_user_removes_everything_they_own(
    db, make_user, make_problem
):
    author = make_user()
    other = make_user()
    authored = make_problem(author)
    foreign = make_problem(other, title="Other's problem")

    _submit(db, author, foreign)
    _submit(db, other, authored)
    problem_service.mark_problem_solved(db, author.id, foreign.id)
    problem_service.mark_problem_solved(db, other.id, authored.id)

    own_list = playlist_service.create_playlist(
        db, PlaylistCreate(name="Mine", user_id=author.id)
    )
    playlist_service.add_problems_to_playlist(db, own_list.id, [foreign.id])
    others_list = playlist_service.create_playlist(
        db, PlaylistCreate(name="Theirs", user_id=other.id)
    )
    playlist_service.add_problems_to_playlist(
        db, others_list.id, [authored.id, foreign.id]
    )

    user_service.delete_user(db, author.id)

    assert db.query(User).count() == 1
    # authored problem is gone, along with everything pointing at it
    assert [p.id for p in db.query(Problem).all()] == [foreign.id]
    assert db.query(Submission).count() == 0
    assert db.query(TestCaseResult).count() == 0
    assert db.query(ProblemSolved).count() == 0
    # the other user's playlist survives, minus the deleted problem
    assert [p.id for p in db.query(Playlist).all()] == [others_list.id]
    remaining = db.query(ProblemInPlaylist).all()
    assert [(e.playlist_id, e.problem_id) for e in remaining] == [
        (others_list.id, foreign.id)
    ]


def test_deleting_problem_keeps_author_and_playlists(
    db, make_user, make_problem
):
    author = make_user()
    solver = make_user()
    problem = make_problem(author)
    kept = make_problem(author, title="Kept")
    _submit(db, solver, problem)
    _submit(db, solver, kept)
    problem_service.mark_problem_solved(db, solver.id, problem.id)
    playlist = playlist_service.create_playlist(
        db, PlaylistCreate(name="Practice", user_id=solver.id)
    )
    playlist_service.add_problems_to_playlist(
        db, playlist.id, [problem.id, kept.id]
    )

    problem_service.delete_problem(db, problem.id)

    assert db.query(User).count() == 2
    assert submission_service.list_submissions(db, problem_id=problem.id) == []
    assert len(submission_service.list_submissions(db, problem_id=kept.id)) == 1
    assert db.query(TestCaseResult).count() == 1
    assert db.query(ProblemSolved).count() == 0
    loaded = playlist_service.get_playlist(db, playlist.id)
    assert [p.id for p in loaded.problems] == [kept.id]
