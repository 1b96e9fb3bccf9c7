from services import storage
from services.seeder import DEFAULT_TEACHERS, initialize_default_data


def _roster(db):
    return sorted((t.name, t.subject) for t in storage.list_teachers(db))


def test_seeds_empty_store(db_session):
    report = initialize_default_data(db_session)

    assert report.teachers_created == len(DEFAULT_TEACHERS)
    assert report.grade_sections_created == 3
    assert _roster(db_session) == sorted(DEFAULT_TEACHERS)
    assert storage.get_all_grade_sections(db_session) == {
        10: [1, 2, 3, 4, 5, 6, 7, 8],
        11: [1, 2, 3, 4, 5, 6, 7, 8],
        12: [1, 2, 3, 4, 5, 6, 7],
    }


def test_second_run_inserts_nothing(db_session):
    initialize_default_data(db_session)

    report = initialize_default_data(db_session)

    assert (report.teachers_created, report.grade_sections_created) == (0, 0)
    assert len(storage.list_teachers(db_session)) == len(DEFAULT_TEACHERS)
    assert storage.count_grade_section_rows(db_session) == 3


def test_existing_teachers_are_kept(db_session, make_teacher):
    make_teacher("Only Teacher", "Art")

    report = initialize_default_data(db_session)

    assert report.teachers_created == 0
    assert report.grade_sections_created == 3
    assert _roster(db_session) == [("Only Teacher", "Art")]


def test_existing_grade_sections_are_kept(db_session):
    storage.set_grade_sections(db_session, 9, [1, 2])

    report = initialize_default_data(db_session)

    assert report.grade_sections_created == 0
    assert storage.get_all_grade_sections(db_session) == {9: [1, 2]}


def test_roster_is_listed_in_seed_order(db_session):
    initialize_default_data(db_session)
    storage.create_teacher(db_session, name="Aaron Late", subject="Art")

    names = [t.name for t in storage.list_teachers(db_session)]

    assert names == [name for name, _ in DEFAULT_TEACHERS] + ["Aaron Late"]
