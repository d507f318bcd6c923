"""
Unit tests for MessageStore: validation, edit/delete windows, tombstones,
paging and search.
"""

from dataclasses import replace

import pytest

from chatline.domain.entities.message import MessageType, attachment_url
from chatline.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    FeatureDisabledError,
)
from chatline.domain.value_objects.attachment import Attachment

from helpers import ALICE, BOB, CAROL, build_core, run

REPORT = Attachment(path="uploads/q3.pdf", name="Q3.PDF", mime_type="application/pdf", size_bytes=2048)
PHOTO = Attachment(path="uploads/cat.png", name="cat.png", mime_type="image/png", size_bytes=512)


@pytest.fixture()
def direct(core):
    return run(core.direct(ALICE, BOB))


# =============================================================================
# APPEND
# =============================================================================


class TestAppend:
    def test_text_message_touches_conversation(self, core, clock, direct):
        clock.advance(30)
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))
        conversation, _ = run(core.conversations.get(direct.id, ALICE.id))

        assert message.type == MessageType.TEXT
        assert message.content == "hi"
        assert conversation.updated_at == clock()

    def test_blank_content_is_rejected(self, core, direct):
        with pytest.raises(DomainValidationError):
            run(core.messages.append(direct.id, ALICE.id, content="   "))

    def test_empty_messages_can_be_allowed(self, chat_config):
        core = build_core(replace(chat_config, allow_empty_messages=True))
        conversation = run(core.direct(ALICE, BOB))

        message = run(core.messages.append(conversation.id, ALICE.id, content=""))
        assert message.content is None

    def test_content_length_is_capped(self, chat_config):
        core = build_core(replace(chat_config, max_message_length=10))
        conversation = run(core.direct(ALICE, BOB))

        run(core.messages.append(conversation.id, ALICE.id, content="x" * 10))
        with pytest.raises(DomainValidationError):
            run(core.messages.append(conversation.id, ALICE.id, content="x" * 11))

    def test_non_participant_gets_not_found(self, core, direct):
        with pytest.raises(EntityNotFoundError):
            run(core.messages.append(direct.id, CAROL.id, content="hello?"))

    def test_attachment_infers_type(self, core, direct):
        file_message = run(core.messages.append(direct.id, ALICE.id, attachment=REPORT))
        image_message = run(core.messages.append(direct.id, ALICE.id, attachment=PHOTO))

        assert file_message.type == MessageType.FILE
        assert image_message.type == MessageType.IMAGE
        assert attachment_url(file_message, "https://cdn.example.com/") == (
            "https://cdn.example.com/uploads/q3.pdf"
        )

    def test_text_type_cannot_carry_attachment(self, core, direct):
        with pytest.raises(DomainValidationError):
            run(core.messages.append(direct.id, ALICE.id, type=MessageType.TEXT, attachment=REPORT))

    def test_oversized_attachment_is_rejected(self, chat_config):
        core = build_core(replace(chat_config, max_attachment_kb=1))
        conversation = run(core.direct(ALICE, BOB))

        with pytest.raises(DomainValidationError):
            run(core.messages.append(conversation.id, ALICE.id, attachment=REPORT))

    def test_disallowed_extension_is_rejected(self, core, direct):
        script = Attachment(path="a/run.exe", name="run.exe", mime_type="application/octet-stream", size_bytes=10)

        with pytest.raises(DomainValidationError):
            run(core.messages.append(direct.id, ALICE.id, attachment=script))

    def test_reply_target_must_be_in_same_conversation(self, core, direct):
        elsewhere = run(core.group(ALICE, CAROL))
        foreign = run(core.messages.append(elsewhere.id, ALICE.id, content="other room"))
        parent = run(core.messages.append(direct.id, BOB.id, content="question"))

        reply = run(core.messages.append(direct.id, ALICE.id, content="answer", reply_to_id=parent.id))
        assert reply.reply_to_id == parent.id
        with pytest.raises(DomainValidationError):
            run(core.messages.append(direct.id, ALICE.id, content="x", reply_to_id=foreign.id))


# =============================================================================
# EDIT
# =============================================================================


class TestEdit:
    def test_author_edits_within_window(self, core, clock, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="helo"))
        clock.advance(core.config.edit_time_limit)

        edited = run(core.messages.edit(message.id, ALICE.id, "hello"))
        assert edited.content == "hello"
        assert edited.is_edited
        assert edited.metadata["edited_at"] == clock().isoformat()

    def test_edit_one_second_past_window_fails(self, core, clock, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="helo"))
        clock.advance(core.config.edit_time_limit + 1)

        with pytest.raises(DomainValidationError, match="cannot be edited"):
            run(core.messages.edit(message.id, ALICE.id, "hello"))

    def test_only_author_edits(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="mine"))

        with pytest.raises(DomainValidationError):
            run(core.messages.edit(message.id, BOB.id, "yours"))

    def test_file_messages_are_not_editable(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, attachment=REPORT))

        with pytest.raises(DomainValidationError):
            run(core.messages.edit(message.id, ALICE.id, "caption"))

    def test_editing_can_be_disabled(self, chat_config):
        core = build_core(replace(chat_config, message_editing_enabled=False))
        conversation = run(core.direct(ALICE, BOB))
        message = run(core.messages.append(conversation.id, ALICE.id, content="hi"))

        with pytest.raises(FeatureDisabledError):
            run(core.messages.edit(message.id, ALICE.id, "hey"))


# =============================================================================
# DELETE
# =============================================================================


class TestDelete:
    def test_soft_delete_leaves_tombstone(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="oops"))
        run(core.messages.delete(message.id, ALICE.id))

        # Creator keeps moderator visibility of tombstones
        tombstone = run(core.messages.get(direct.id, message.id, ALICE.id))
        assert tombstone.is_deleted
        with pytest.raises(EntityNotFoundError):
            run(core.messages.get(direct.id, message.id, BOB.id))

    def test_tombstone_is_terminal(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="oops"))
        run(core.messages.delete(message.id, ALICE.id))

        with pytest.raises(EntityNotFoundError):
            run(core.messages.edit(message.id, ALICE.id, "fixed"))
        with pytest.raises(EntityNotFoundError):
            run(core.messages.delete(message.id, ALICE.id))

    def test_hard_delete_removes_row(self, chat_config):
        core = build_core(replace(chat_config, soft_delete_messages=False))
        conversation = run(core.direct(ALICE, BOB))
        message = run(core.messages.append(conversation.id, ALICE.id, content="gone"))
        run(core.messages.delete(message.id, ALICE.id))

        with pytest.raises(EntityNotFoundError):
            run(core.messages.get(conversation.id, message.id, ALICE.id))

    def test_author_window_expires(self, core, clock):
        conversation = run(core.group(ALICE, BOB))
        message = run(core.messages.append(conversation.id, BOB.id, content="late"))
        clock.advance(core.config.delete_time_limit + 1)

        with pytest.raises(AccessDeniedError):
            run(core.messages.delete(message.id, BOB.id))
        # The conversation creator may still moderate
        run(core.messages.delete(message.id, ALICE.id))

    def test_member_cannot_delete_others(self, core):
        conversation = run(core.group(ALICE, BOB, CAROL))
        message = run(core.messages.append(conversation.id, BOB.id, content="bob's"))

        with pytest.raises(AccessDeniedError):
            run(core.messages.delete(message.id, CAROL.id))


# =============================================================================
# LISTING / SEARCH
# =============================================================================


class TestListing:
    def test_pages_newest_first(self, core, clock, direct):
        for i in range(5):
            run(core.messages.append(direct.id, ALICE.id, content=f"m{i}"))
            clock.advance(1)

        page = run(core.messages.list_for_conversation(direct.id, BOB.id, page=1, page_size=2))
        assert [m.content for m in page.items] == ["m4", "m3"]
        assert page.total == 5
        assert page.last_page == 3

    def test_page_size_is_capped(self, chat_config):
        core = build_core(replace(chat_config, max_messages_per_page=3))
        conversation = run(core.direct(ALICE, BOB))

        page = run(core.messages.list_for_conversation(conversation.id, ALICE.id, page_size=50))
        assert page.per_page == 3

    def test_list_filters_by_term(self, core, direct):
        run(core.messages.append(direct.id, ALICE.id, content="Lunch at noon?"))
        run(core.messages.append(direct.id, BOB.id, content="sure"))

        page = run(core.messages.list_for_conversation(direct.id, ALICE.id, search_term="lunch"))
        assert [m.content for m in page.items] == ["Lunch at noon?"]

    def test_search_is_scoped_to_own_conversations(self, core, direct):
        private = run(core.group(BOB, CAROL, name="Secret"))
        run(core.messages.append(direct.id, ALICE.id, content="release notes"))
        run(core.messages.append(private.id, CAROL.id, content="release party"))

        results = run(core.messages.search(ALICE.id, "release"))
        assert [m.content for m in results] == ["release notes"]

    def test_search_needs_two_characters(self, core):
        with pytest.raises(DomainValidationError):
            run(core.messages.search(ALICE.id, " a "))

    def test_search_can_be_disabled(self, chat_config):
        core = build_core(replace(chat_config, search_enabled=False))

        with pytest.raises(FeatureDisabledError):
            run(core.messages.search(ALICE.id, "release"))
