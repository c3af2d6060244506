"""Shared pytest fixtures for coedit tests."""

from datetime import timedelta

import pytest

from coedit.models import CommitRecord

from tests.helpers import BASE_TIME, change


@pytest.fixture
def make_commit():
    """Factory for commits, one hour apart in creation order."""
    counter = {"n": 0}

    def _make(author, *files):
        counter["n"] += 1
        return CommitRecord(
            author=author,
            timestamp=BASE_TIME + timedelta(hours=counter["n"]),
            files=list(files),
            sha=f"sha{counter['n']}",
            author_email=f"{author.lower()}@example.com",
        )

    return _make


@pytest.fixture
def renamed_commits(make_commit):
    """History where src/old.py is renamed to src/new.py, newest first.

    Alice writes the file, Bob renames it, then Alice edits it again.
    """
    return [
        make_commit("Alice", change("src/new.py", insertions=30, deletions=10)),
        make_commit("Bob", change("src/{old.py => new.py}", insertions=5, deletions=5)),
        make_commit("Alice", change("src/old.py", insertions=60)),
    ]


@pytest.fixture
def team_commits(make_commit):
    """Three developers; Alice and Bob share app.py, Carol works alone."""
    return [
        make_commit("Alice", change("app.py", insertions=50, deletions=10)),
        make_commit("Bob", change("app.py", insertions=40, deletions=20)),
        make_commit("Carol", change("docs/guide.md", insertions=80), change("logo.png", binary=True)),
        make_commit("Alice", change("app.py", insertions=20)),
        make_commit("Bob", change("lib/{util.py => helpers.py}", insertions=3, deletions=2)),
        make_commit("Carol", change("lib/util.py", insertions=90, deletions=30)),
    ]
