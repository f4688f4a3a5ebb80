# tests/services/test_session.py
from unittest.mock import MagicMock

import pytest

from scriptgen.core.errors import ScaffoldGenerationError, SessionBusyError
from scriptgen.models.scaffold import GeneratedFile, ImageAttachment, ProjectOptions
from scriptgen.services.session import (
    FILES_READY_MESSAGE,
    IMAGE_PLACEHOLDER,
    ScaffoldSession,
    SessionStore,
)

V1 = [GeneratedFile(name="src/index.js", content="v1")]
V2 = [GeneratedFile(name="src/index.js", content="v2"), GeneratedFile(name="README.md", content="# hi")]


@pytest.fixture
def fake_client():
    return MagicMock()


@pytest.fixture
def session(fake_client):
    return ScaffoldSession(fake_client, session_id="s1")


def test_first_turn_sends_specifications_and_no_files(session, fake_client):
    fake_client.generate_files.return_value = V1

    outcome = session.submit("A web server", ProjectOptions(database="mongodb"))

    prompt, existing, image = fake_client.generate_files.call_args.args
    assert prompt.startswith("**Initial Project Specifications:**")
    assert "- Database: mongodb" in prompt
    assert existing == []
    assert image is None
    assert outcome.reply == FILES_READY_MESSAGE
    assert outcome.files == V1
    assert outcome.error is None
    assert session.is_first_request is False
    assert [t.role for t in session.history] == ["user", "assistant"]


def test_follow_up_resubmits_latest_files(session, fake_client):
    fake_client.generate_files.side_effect = [V1, V2]
    session.submit("A web server")
    session.submit("Add a README")

    prompt, existing, _ = fake_client.generate_files.call_args.args
    assert prompt == "**Follow-up Request:**\nAdd a README"
    assert existing == V1
    assert session.latest_files() == V2


def test_failure_records_system_turn_and_keeps_files(session, fake_client):
    fake_client.generate_files.side_effect = [V1, ScaffoldGenerationError("API returned an empty response.")]
    session.submit("A web server")

    outcome = session.submit("Break it")

    assert outcome.error == "API returned an empty response."
    assert outcome.reply == "Error: API returned an empty response."
    assert outcome.files == V1
    assert session.history[-1].role == "system"
    assert session.history[-1].content == "Error: API returned an empty response."
    assert session.latest_files() == V1
    assert session.is_loading is False


def test_failed_first_turn_stays_first(session, fake_client):
    fake_client.generate_files.side_effect = ScaffoldGenerationError("nope")
    session.submit("A bot")
    assert session.is_first_request is True
    assert session.latest_files() is None


def test_image_turn_gets_placeholder_that_never_becomes_the_project(session, fake_client):
    fake_client.generate_files.side_effect = [V1, ScaffoldGenerationError("nope")]
    session.submit("A bot")
    image = ImageAttachment(filename="stacktrace.png", data="iVBOR")

    session.submit("Fix this error", image=image)

    user_turn = session.history[2]
    assert user_turn.files == [GeneratedFile(name="stacktrace.png", content=IMAGE_PLACEHOLDER)]
    assert fake_client.generate_files.call_args.args[2] is image
    assert session.latest_files() == V1


def test_blank_prompt_is_rejected(session, fake_client):
    with pytest.raises(ValueError):
        session.submit("   ")
    fake_client.generate_files.assert_not_called()
    assert session.history == []


def test_duplicate_submission_is_rejected_while_loading(session, fake_client):
    session.is_loading = True
    with pytest.raises(SessionBusyError):
        session.submit("again")
    fake_client.generate_files.assert_not_called()


def test_loading_flag_is_set_during_the_call(session, fake_client):
    seen = []
    fake_client.generate_files.side_effect = lambda *a: seen.append(session.is_loading) or V1
    session.submit("A bot")
    assert seen == [True]
    assert session.is_loading is False


def test_first_user_message(session, fake_client):
    fake_client.generate_files.return_value = V1
    assert session.first_user_message() is None
    session.submit("Discord bot")
    session.submit("Add help")
    assert session.first_user_message() == "Discord bot"


def test_store_create_get_delete(fake_client):
    store = SessionStore(fake_client)
    s = store.create()
    assert store.get(s.session_id) is s
    assert len(store) == 1
    store.delete(s.session_id)
    with pytest.raises(KeyError):
        store.get(s.session_id)


def test_last_error_is_recorded_and_cleared_by_next_submit(session, fake_client):
    fake_client.generate_files.side_effect = [ScaffoldGenerationError("bad format"), V1]

    session.submit("A bot")
    assert session.error == "bad format"

    session.submit("Try again")
    assert session.error is None
