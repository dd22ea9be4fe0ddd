"""
Review engine tests for EchoLab.

Covers the interval table, the scheduler and the queue builder.
"""

import math

import pytest

from echolab.review import (
    EBBINGHAUS_INTERVALS,
    MILLIS_PER_DAY,
    validate_table,
    length_of,
    day_offset_at,
    initial_review_at,
    is_due,
    complete_review,
    complete_by_id,
    build_queue,
    count_due,
    due_tasks,
    complete_all_due,
)
from echolab.schemas import (
    GrammarItem,
    GrammarPayload,
    TaskKind,
    VocabularyItem,
    VocabularyPayload,
)


T = 1_700_000_000_000


def vocab(item_id: str, next_review_at: int, stage: int = 0, word: str | None = None) -> VocabularyItem:
    return VocabularyItem(
        id=item_id,
        payload=VocabularyPayload(word=word or item_id),
        added_at=0,
        next_review_at=next_review_at,
        stage=stage,
    )


def grammar(item_id: str, next_review_at: int, stage: int = 0, rule: str | None = None) -> GrammarItem:
    return GrammarItem(
        id=item_id,
        payload=GrammarPayload(sentence=f"sentence {item_id}", rule=rule or item_id),
        added_at=0,
        next_review_at=next_review_at,
        stage=stage,
    )


class TestIntervalTable:
    """Test the interval table helpers."""

    def test_reference_policy(self):
        assert EBBINGHAUS_INTERVALS == (1, 2, 4, 7, 15, 30)
        assert length_of(EBBINGHAUS_INTERVALS) == 6
        assert MILLIS_PER_DAY == 86_400_000

    def test_day_offset_at(self):
        assert day_offset_at(EBBINGHAUS_INTERVALS, 0) == 1
        assert day_offset_at(EBBINGHAUS_INTERVALS, 5) == 30

    def test_day_offset_out_of_range(self):
        with pytest.raises(ValueError):
            day_offset_at(EBBINGHAUS_INTERVALS, 6)
        with pytest.raises(ValueError):
            day_offset_at(EBBINGHAUS_INTERVALS, -1)

    def test_validate_table_rejects_empty(self):
        with pytest.raises(ValueError):
            validate_table(())

    def test_validate_table_rejects_non_positive(self):
        with pytest.raises(ValueError):
            validate_table((1, 0, 4))
        with pytest.raises(ValueError):
            validate_table((1, 2.5))


class TestScheduler:
    """Test review completion and due checks."""

    def test_first_completion(self):
        result = complete_review(vocab("v1", T - 1000, stage=0), T)
        assert result.stage == 1
        assert result.next_review_at == T + 2 * MILLIS_PER_DAY

    def test_completion_at_mastery_ceiling(self):
        result = complete_review(vocab("v1", T - 1, stage=5), T)
        assert result.stage == 5
        assert result.next_review_at == T + 30 * MILLIS_PER_DAY

    def test_ceiling_is_idempotent(self):
        item = vocab("v1", T, stage=5)
        for offset in range(3):
            item = complete_review(item, T + offset)
            assert item.stage == 5

    @pytest.mark.parametrize("stage", range(6))
    def test_stage_advances_and_clamps(self, stage):
        result = complete_review(grammar("g1", 0, stage=stage), T)
        new_stage = min(stage + 1, 5)
        assert result.stage == new_stage
        assert result.next_review_at == T + EBBINGHAUS_INTERVALS[new_stage] * MILLIS_PER_DAY

    def test_other_fields_unchanged(self):
        item = vocab("v1", T - 5, stage=2, word="Accommodate")
        result = complete_review(item, T)
        assert result.id == item.id
        assert result.payload == item.payload
        assert result.added_at == item.added_at

    def test_input_not_mutated(self):
        item = vocab("v1", T - 5, stage=2)
        complete_review(item, T)
        assert item.stage == 2
        assert item.next_review_at == T - 5

    def test_custom_table(self):
        result = complete_review(vocab("v1", 0, stage=0), T, table=(3, 10))
        assert result.stage == 1
        assert result.next_review_at == T + 10 * MILLIS_PER_DAY

    def test_stage_beyond_table_fails(self):
        with pytest.raises(ValueError):
            complete_review(vocab("v1", 0, stage=6), T)

    def test_empty_table_fails(self):
        with pytest.raises(ValueError):
            complete_review(vocab("v1", 0), T, table=())

    def test_non_finite_now_fails(self):
        with pytest.raises(ValueError):
            complete_review(vocab("v1", 0), math.inf)
        with pytest.raises(ValueError):
            complete_review(vocab("v1", 0), math.nan)

    @pytest.mark.parametrize("now", [math.nan, math.inf, -1, "1700000000000"])
    def test_is_due_rejects_bad_now(self, now):
        with pytest.raises(ValueError):
            is_due(vocab("v1", 100), now)

    def test_is_due_accepts_whole_float_now(self):
        assert is_due(vocab("v1", 100), 100.0)

    def test_negative_now_fails(self):
        with pytest.raises(ValueError):
            complete_review(vocab("v1", 0), -1)

    def test_is_due_boundary_inclusive(self):
        assert is_due(vocab("v1", T), T)
        assert is_due(vocab("v1", T - 1), T)
        assert not is_due(vocab("v1", T + 1), T)

    def test_initial_review_at(self):
        assert initial_review_at(T) == T + MILLIS_PER_DAY

    def test_complete_by_id(self):
        items = [vocab("v1", 0), vocab("v2", 0, stage=3)]
        updated = complete_by_id(items, "v2", T)
        assert updated[0] is items[0]
        assert updated[1].stage == 4
        assert updated[1].next_review_at == T + 15 * MILLIS_PER_DAY

    def test_complete_by_id_unknown(self):
        with pytest.raises(KeyError):
            complete_by_id([vocab("v1", 0)], "missing", T)


class TestQueueBuilder:
    """Test queue construction, due counting and batch completion."""

    def test_projection(self):
        queue = build_queue(
            [vocab("v1", 10, word="Phenomenon")],
            [grammar("g1", 5, rule="Third Conditional")],
        )
        assert [(t.id, t.title, t.kind) for t in queue] == [
            ("g1", "Third Conditional", TaskKind.GRAMMAR),
            ("v1", "Phenomenon", TaskKind.WORD),
        ]

    def test_sorted_ascending(self):
        queue = build_queue(
            [vocab("v1", 300), vocab("v2", 100)],
            [grammar("g1", 200), grammar("g2", 50)],
        )
        assert [t.next_review_at for t in queue] == [50, 100, 200, 300]

    def test_tie_break_vocabulary_first(self):
        queue = build_queue([vocab("v1", 100)], [grammar("g1", 100)])
        assert [t.id for t in queue] == ["v1", "g1"]

    def test_tie_break_keeps_input_order_within_kind(self):
        queue = build_queue([vocab("v2", 7), vocab("v1", 7)], [grammar("g1", 7)])
        assert [t.id for t in queue] == ["v2", "v1", "g1"]

    def test_empty_inputs(self):
        assert build_queue([], []) == []

    def test_count_due_boundary(self):
        queue = build_queue([vocab("v1", 100), vocab("v2", 900)], [grammar("g1", 500)])
        assert count_due(queue, 500) == 2

    def test_count_due_matches_items(self):
        v = [vocab("v1", T - 10), vocab("v2", T + 10), vocab("v3", T)]
        g = [grammar("g1", T + 1), grammar("g2", T - 1)]
        expected = sum(1 for x in v + g if is_due(x, T))
        assert count_due(build_queue(v, g), T) == expected == 3

    def test_due_tasks(self):
        queue = build_queue([vocab("v1", 100), vocab("v2", 900)], [grammar("g1", 500)])
        assert [t.id for t in due_tasks(queue, 500)] == ["v1", "g1"]

    def test_complete_all_due(self):
        v = [vocab("v1", T - 10, stage=1), vocab("v2", T + 10, stage=1)]
        g = [grammar("g1", T, stage=5), grammar("g2", T + 1)]
        batch = complete_all_due(v, g, T)

        assert batch.advanced == 2
        assert batch.vocabulary[0].stage == 2
        assert batch.vocabulary[0].next_review_at == T + 4 * MILLIS_PER_DAY
        assert batch.vocabulary[1] is v[1]
        assert batch.grammar[0].stage == 5
        assert batch.grammar[0].next_review_at == T + 30 * MILLIS_PER_DAY
        assert batch.grammar[1] is g[1]

    def test_complete_all_due_advances_once(self):
        v = [vocab("v1", T, stage=0)]
        batch = complete_all_due(v, [], T)
        assert batch.vocabulary[0].stage == 1
        assert not is_due(batch.vocabulary[0], T)

    def test_complete_all_due_does_not_mutate_inputs(self):
        v = [vocab("v1", T - 1)]
        g = [grammar("g1", T - 1)]
        complete_all_due(v, g, T)
        assert v[0].stage == 0
        assert g[0].next_review_at == T - 1

    @pytest.mark.parametrize("now", [math.nan, math.inf])
    def test_non_finite_now_fails_loudly(self, now):
        queue = build_queue([vocab("v1", 100)], [])
        with pytest.raises(ValueError):
            count_due(queue, now)
        with pytest.raises(ValueError):
            due_tasks(queue, now)
        with pytest.raises(ValueError):
            complete_all_due([vocab("v1", 100)], [], now)

    def test_non_finite_now_fails_on_empty_collections(self):
        with pytest.raises(ValueError):
            count_due([], math.nan)
        with pytest.raises(ValueError):
            complete_all_due([], [], math.nan)

    def test_complete_all_due_nothing_due(self):
        batch = complete_all_due([vocab("v1", T + 1)], [], T)
        assert batch.advanced == 0
