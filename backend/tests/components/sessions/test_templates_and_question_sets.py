"""Interview templates, user question sets and question list merging."""

import json

import pytest

from interview_prep.components.sessions.question_bank import merge_question_collections
from interview_prep.components.sessions.question_sets import QuestionSetService
from interview_prep.components.sessions.schemas import InterviewQuestion, QuestionSetParams
from interview_prep.components.sessions.templates import (
    available_industries,
    get_template,
    list_templates,
    load_interview_templates,
    template_questions,
)
from interview_prep.platform.storage import user_question_sets_key


def _question(qid, **overrides):
    values = {"id": qid, "type": "technical", "difficulty": "medium", "question": f"Question {qid}?"}
    values.update(overrides)
    return InterviewQuestion(**values)


# ===================================================================
# TEMPLATES
# ===================================================================

class TestTemplates:
    def test_bundled_templates_load(self):
        templates = list_templates()
        assert len(templates) == 15
        assert len({t.id for t in templates}) == 15
        assert all(t.questions for t in templates)

    def test_get_template(self):
        template = get_template("frontend-engineer-basic")
        assert template.category == "technical"
        assert template.difficulty == "easy"
        assert template.seniority == "entry"
        assert template.duration_minutes == 45
        assert [q.id for q in template.questions] == ["fe-1", "fe-2", "fe-3"]
        assert get_template("astronaut") is None

    def test_filters(self):
        assert [t.id for t in list_templates(industry="fintech")] == [
            "fintech-backend-entry",
            "fintech-frontend-senior",
        ]
        assert {t.id for t in list_templates(category="mixed", difficulty="easy")} == {"consulting-tech-associate"}
        assert all(t.seniority == "senior" for t in list_templates(seniority="senior"))

    def test_role_filter_includes_general_templates(self):
        assert [t.id for t in list_templates(role="backend")] == [
            "backend-engineer-intermediate",
            "behavioral-general",
            "fintech-backend-entry",
            "ecommerce-backend-senior",
        ]

    def test_available_industries(self):
        assert available_industries() == [
            "automotive", "consulting", "ecommerce", "education",
            "fintech", "gaming", "healthtech", "saas",
        ]

    def test_returned_templates_are_copies(self):
        get_template("system-design").questions.clear()
        assert len(get_template("system-design").questions) == 2

    def test_template_questions_are_marked(self):
        questions = template_questions(get_template("system-design"))
        assert {q.origin for q in questions} == {"template"}

    def test_loader_rejects_invalid_template(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps([{"id": "broken", "name": "Broken"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="broken"):
            load_interview_templates(path)

    def test_loader_rejects_duplicate_ids(self, tmp_path):
        template = get_template("system-design").model_dump(mode="json")
        path = tmp_path / "templates.json"
        path.write_text(json.dumps([template, template]), encoding="utf-8")
        with pytest.raises(ValueError, match="Duplicate"):
            load_interview_templates(path)


# ===================================================================
# MERGING
# ===================================================================

class TestMergeQuestionCollections:
    def test_primary_first_and_ids_unique(self):
        primary = [_question("a"), _question("b", question="Mine")]
        secondary = [_question("b", question="Theirs"), _question("c")]
        merged = merge_question_collections(primary, secondary)
        assert [q.id for q in merged] == ["a", "b", "c"]
        assert merged[1].question == "Mine"

    def test_duplicates_within_primary_collapse(self):
        merged = merge_question_collections([_question("a"), _question("a")], [])
        assert [q.id for q in merged] == ["a"]


# ===================================================================
# QUESTION SETS
# ===================================================================

class TestQuestionSets:
    @pytest.fixture
    def question_sets(self, store):
        return QuestionSetService(store)

    def test_create_normalizes_questions(self, question_sets):
        params = QuestionSetParams(
            title="Payments",
            industry="fintech",
            tags=["payments"],
            difficulty="mixed",
            questions=[_question("p1"), _question("p2", tags=["idempotency"])],
        )
        created = question_sets.save_set("u1", params)
        assert created.difficulty == "mixed"
        assert [q.origin for q in created.questions] == ["user", "user"]
        assert {q.set_id for q in created.questions} == {created.id}
        assert created.questions[0].tags == ["payments"]
        assert created.questions[1].tags == ["idempotency"]
        assert question_sets.get_set("u1", created.id) == created

    def test_sets_are_per_user(self, question_sets):
        created = question_sets.save_set("u1", QuestionSetParams(title="Mine"))
        assert question_sets.get_set("u2", created.id) is None
        assert question_sets.list_sets("u2") == []

    def test_update_keeps_identity(self, question_sets):
        created = question_sets.save_set("u1", QuestionSetParams(title="Draft"))
        updated = question_sets.save_set("u1", QuestionSetParams(title="Final"), set_id=created.id)
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert [s.title for s in question_sets.list_sets("u1")] == ["Final"]
        assert question_sets.save_set("u1", QuestionSetParams(title="X"), set_id="missing") is None

    def test_delete(self, question_sets):
        created = question_sets.save_set("u1", QuestionSetParams(title="Temp"))
        assert question_sets.delete_set("u1", created.id) is True
        assert question_sets.delete_set("u1", created.id) is False
        assert question_sets.list_sets("u1") == []

    def test_malformed_entries_skipped(self, store, question_sets):
        created = question_sets.save_set("u1", QuestionSetParams(title="Good"))
        store.set(user_question_sets_key("u1"), store.get(user_question_sets_key("u1")) + [{"id": "bad"}])
        assert [s.id for s in question_sets.list_sets("u1")] == [created.id]

    def test_questions_from_sets_dedupes_sets_and_questions(self, question_sets):
        first = question_sets.save_set("u1", QuestionSetParams(title="A", questions=[_question("q1"), _question("q2")]))
        second = question_sets.save_set("u1", QuestionSetParams(title="B", questions=[_question("q2"), _question("q3")]))
        questions = question_sets.questions_from_sets("u1", [second.id, "", first.id, second.id, "missing"])
        assert [q.id for q in questions] == ["q2", "q3", "q1"]
        assert questions[0].set_id == second.id
