import pytest
from sqlmodel import Session, select

from models import Category


def count_categories(engine):
    with Session(engine) as session:
        return len(session.exec(select(Category)).all())

def test_commit_persists(unit_of_work_manager, test_db_engine):
    with unit_of_work_manager.new_unit_of_work() as unit_of_work:
        unit_of_work.session.add(Category(name="News", slug="news"))
        unit_of_work.commit()
        assert unit_of_work.committed

    assert count_categories(test_db_engine) == 1

def test_uncommitted_changes_are_discarded(unit_of_work_manager, test_db_engine):
    with unit_of_work_manager.new_unit_of_work() as unit_of_work:
        unit_of_work.session.add(Category(name="News", slug="news"))
        unit_of_work.session.flush()

    assert count_categories(test_db_engine) == 0

def test_error_rolls_back_and_propagates(unit_of_work_manager, test_db_engine):
    with pytest.raises(RuntimeError):
        with unit_of_work_manager.new_unit_of_work() as unit_of_work:
            unit_of_work.session.add(Category(name="News", slug="news"))
            unit_of_work.session.flush()
            raise RuntimeError("boom")

    assert count_categories(test_db_engine) == 0

def test_explicit_rollback(unit_of_work_manager, test_db_engine):
    with unit_of_work_manager.new_unit_of_work() as unit_of_work:
        unit_of_work.session.add(Category(name="News", slug="news"))
        unit_of_work.rollback()
        assert not unit_of_work.committed
        unit_of_work.session.add(Category(name="Help", slug="help"))
        unit_of_work.commit()

    with Session(test_db_engine) as session:
        assert [c.slug for c in session.exec(select(Category)).all()] == ["help"]

def test_committed_objects_stay_readable(unit_of_work_manager):
    with unit_of_work_manager.new_unit_of_work() as unit_of_work:
        category = Category(name="News", slug="news")
        unit_of_work.session.add(category)
        unit_of_work.commit()

    assert category.slug == "news"
