"""Unit tests for ReadReceiptTracker: idempotence, unread counts and snapshots."""

import pytest
from prometheus_client import REGISTRY

from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.exceptions import DomainValidationError, EntityNotFoundError
from chatline.infrastructure.memory import InMemoryReadReceiptRepository

from helpers import ALICE, BOB, CAROL, run


@pytest.fixture()
def direct(core):
    return run(core.direct(ALICE, BOB))


class TestMarkRead:
    def test_mark_read_is_idempotent(self, core, clock, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))

        first = run(core.receipts.mark_read(message.id, BOB.id))
        clock.advance(120)
        second = run(core.receipts.mark_read(message.id, BOB.id))

        assert second.read_at == first.read_at
        assert run(core.receipts.read_count(message.id)) == 1

    def test_repeat_in_the_same_instant_counts_once(self, core, direct):
        def created_total():
            return REGISTRY.get_sample_value("chat_read_receipts_created_total") or 0.0

        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))
        before = created_total()

        first = run(core.receipts.mark_read(message.id, BOB.id))
        second = run(core.receipts.mark_read(message.id, BOB.id))

        assert second == first
        assert created_total() - before == 1

    def test_repository_reports_whether_it_inserted(self, core, clock, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))
        repository = InMemoryReadReceiptRepository(core.db)
        receipt = ReadReceipt(message_id=message.id, user_id=BOB.id, read_at=clock())

        stored, created = run(repository.create_if_absent(receipt))
        again, created_again = run(repository.create_if_absent(receipt))

        assert created is True
        assert created_again is False
        assert again == stored

    def test_unread_count_drops_by_exactly_one(self, core, direct):
        first = run(core.messages.append(direct.id, ALICE.id, content="one"))
        run(core.messages.append(direct.id, ALICE.id, content="two"))
        assert run(core.receipts.unread_count(direct.id, BOB.id)) == 2

        run(core.receipts.mark_read(first.id, BOB.id))
        assert run(core.receipts.unread_count(direct.id, BOB.id)) == 1

    def test_own_messages_never_count_as_unread(self, core, direct):
        own = run(core.messages.append(direct.id, ALICE.id, content="mine"))

        assert run(core.receipts.unread_count(direct.id, ALICE.id)) == 0
        with pytest.raises(DomainValidationError):
            run(core.receipts.mark_read(own.id, ALICE.id))
        assert run(core.receipts.unread_count(direct.id, ALICE.id)) == 0

    def test_non_participant_cannot_mark(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))

        with pytest.raises(EntityNotFoundError):
            run(core.receipts.mark_read(message.id, CAROL.id))

    def test_conversation_mismatch_is_not_found(self, core, direct):
        other = run(core.group(ALICE, BOB))
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))

        with pytest.raises(EntityNotFoundError):
            run(core.receipts.mark_read(message.id, BOB.id, conversation_id=other.id))

    def test_deleted_messages_cannot_be_marked(self, core, direct):
        message = run(core.messages.append(direct.id, ALICE.id, content="hi"))
        run(core.messages.delete(message.id, ALICE.id))

        with pytest.raises(EntityNotFoundError):
            run(core.receipts.mark_read(message.id, BOB.id))


class TestMarkAllRead:
    def test_marks_everything_unread(self, core, direct):
        for text in ("a", "b", "c"):
            run(core.messages.append(direct.id, ALICE.id, content=text))
        first_page = run(core.messages.list_for_conversation(direct.id, BOB.id))
        run(core.receipts.mark_read(first_page.items[0].id, BOB.id))

        assert run(core.receipts.mark_all_read(direct.id, BOB.id)) == 2
        assert run(core.receipts.unread_count(direct.id, BOB.id)) == 0
        assert run(core.receipts.mark_all_read(direct.id, BOB.id)) == 0

    def test_messages_after_the_snapshot_stay_unread(self, core, clock, direct):
        run(core.messages.append(direct.id, ALICE.id, content="before"))
        run(core.receipts.mark_all_read(direct.id, BOB.id))

        clock.advance(1)
        run(core.messages.append(direct.id, ALICE.id, content="after"))
        assert run(core.receipts.unread_count(direct.id, BOB.id)) == 1

    def test_total_unread_spans_conversations(self, core, direct):
        group = run(core.group(ALICE, BOB, CAROL))
        run(core.messages.append(direct.id, ALICE.id, content="1"))
        run(core.messages.append(group.id, CAROL.id, content="2"))
        run(core.messages.append(group.id, BOB.id, content="own"))

        assert run(core.receipts.total_unread(BOB.id)) == 2

    def test_readers_lists_receipts(self, core):
        group = run(core.group(ALICE, BOB, CAROL))
        message = run(core.messages.append(group.id, ALICE.id, content="standup?"))
        run(core.receipts.mark_read(message.id, BOB.id))
        run(core.receipts.mark_read(message.id, CAROL.id))

        readers = run(core.receipts.readers(message.id))
        assert {r.user_id for r in readers} == {BOB.id, CAROL.id}
