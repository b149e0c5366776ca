import pytest

from engine.corpus import Record


@pytest.fixture
def sample_courses():
    """Small corpus covering every scored field."""
    return (
        Record(id=1, title="Intro to Go", description="Learn Go.", category="Systems",
               price=100, instructor="Rob Parker"),
        Record(id=2, title="Advanced Go", description="A great intro to concurrency.",
               category="Systems", price=300, instructor="Rob Parker"),
        Record(id=3, title="React Fundamentals", description="Components and hooks.",
               category="Web Development", price=59, instructor="Dana Lee"),
        Record(id=4, title="Python for Data Analysis", description="Pandas and NumPy.",
               category="Data Science", price=79, instructor="Priya Natarajan"),
    )
