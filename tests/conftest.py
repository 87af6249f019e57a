import pytest
from fakes import CountingAuthenticator, ScriptedRequest

from scrobbler.lastfm import ScrobbleEntry, Session, reset_submission_statistics


@pytest.fixture
def fresh_statistics():
    reset_submission_statistics()
    yield


@pytest.fixture
def authenticator():
    return CountingAuthenticator()


@pytest.fixture
def session(authenticator):
    return Session("K", "X", session_key="S", authenticator=authenticator)


@pytest.fixture
def entry():
    return ScrobbleEntry.create("Radiohead", "Idioteque", 1700000000, 360)


@pytest.fixture
def make_request():
    return ScriptedRequest
