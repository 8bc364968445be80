"""Unit tests for the content lifecycle gate."""

from datetime import UTC, datetime
from itertools import product

import pytest

from costkb.domain.resource.model import lifecycle
from costkb.domain.resource.model.value import ContentStatus as S
from costkb.domain.shared.error import InvalidTransitionError
from costkb.domain.shared.model.value import UserId

ALLOWED = {
    (S.DISCOVERED, S.PENDING_REVIEW),
    (S.DISCOVERED, S.REJECTED),
    (S.PENDING_REVIEW, S.APPROVED),
    (S.PENDING_REVIEW, S.REJECTED),
    (S.APPROVED, S.PUBLISHED),
    (S.APPROVED, S.PENDING_REVIEW),
    (S.PUBLISHED, S.ARCHIVED),
    (S.ARCHIVED, S.PUBLISHED),
    (S.REJECTED, S.PENDING_REVIEW),
}

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
ACTOR = UserId("moderator-1")


class TestTransitionTable:
    @pytest.mark.parametrize("current,target", list(product(S, S)))
    def test_every_pair_matches_table(self, current: S, target: S):
        assert lifecycle.is_valid_transition(current, target) == ((current, target) in ALLOWED)

    @pytest.mark.parametrize("current,target", sorted(set(product(S, S)) - ALLOWED))
    def test_disallowed_pairs_raise(self, current: S, target: S):
        with pytest.raises(InvalidTransitionError):
            lifecycle.prepare_transition(current, target, ACTOR, now=NOW)

    def test_next_statuses_unknown_status_is_empty(self):
        assert lifecycle.next_statuses("deleted") == frozenset()

    def test_unknown_target_is_invalid(self):
        assert lifecycle.is_valid_transition(S.DISCOVERED, "deleted") is False

    def test_self_transitions_are_never_allowed(self):
        assert not any(lifecycle.is_valid_transition(s, s) for s in S)


class TestInvalidTransitionMessage:
    def test_discovered_to_published_lists_allowed(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.prepare_transition(S.DISCOVERED, S.PUBLISHED, ACTOR)

        message = str(exc_info.value)
        assert "pending_review" in message
        assert "rejected" in message
        assert exc_info.value.allowed == ["pending_review", "rejected"]
        assert exc_info.value.code == "INVALID_TRANSITION"


class TestPrepareTransition:
    def test_publish_sets_published_at(self):
        update = lifecycle.prepare_transition(S.APPROVED, S.PUBLISHED, ACTOR, now=NOW)

        assert update.status == S.PUBLISHED
        assert update.published_at == NOW
        assert update.archived_at is None
        assert update.fields()["published_at"] == NOW

    def test_history_entry_records_actor_and_reason(self):
        update = lifecycle.prepare_transition(
            S.PENDING_REVIEW, S.REJECTED, ACTOR, reason="Off topic", now=NOW
        )

        assert update.change.status == S.REJECTED
        assert update.change.changed_by == ACTOR
        assert update.change.changed_at == NOW
        assert update.change.reason == "Off topic"
        assert update.updated_by == ACTOR

    def test_archive_uses_default_reason(self):
        update = lifecycle.prepare_transition(S.PUBLISHED, S.ARCHIVED, ACTOR, now=NOW)

        assert update.archived_at == NOW
        assert update.archived_reason == "archived"
        assert update.published_at is None

    def test_archive_keeps_given_reason(self):
        update = lifecycle.prepare_transition(
            S.PUBLISHED, S.ARCHIVED, ACTOR, reason="Superseded", now=NOW
        )
        assert update.archived_reason == "Superseded"

    def test_republish_clears_archive_fields(self):
        update = lifecycle.prepare_transition(S.ARCHIVED, S.PUBLISHED, ACTOR, now=NOW)

        fields = update.fields()
        assert update.clears_archive is True
        assert fields["archived_at"] is None
        assert fields["archived_reason"] is None
        assert fields["published_at"] == NOW

    def test_non_lifecycle_timestamps_untouched(self):
        fields = lifecycle.prepare_transition(S.DISCOVERED, S.PENDING_REVIEW, ACTOR, now=NOW).fields()
        assert set(fields) == {"status", "updated_at", "updated_by"}


class TestPredicates:
    @pytest.mark.parametrize("status", list(S))
    def test_only_published_is_public(self, status: S):
        assert lifecycle.is_public(status) == (status == S.PUBLISHED)

    def test_terminal_statuses(self):
        assert {s for s in S if lifecycle.is_terminal(s)} == {S.PUBLISHED, S.ARCHIVED}
