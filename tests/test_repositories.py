"""Question / response / context persistence against in-memory sqlite."""

from datetime import datetime

import pytest
from pydantic import ValidationError as SchemaValidationError

from vibes.errors import AuthRequiredError, NotFoundError, ValidationError
from vibes.models.question import Question
from vibes.models.response import Response
from vibes.models.user_profile import UserProfile
from vibes.schemas.context import UserContextIn
from vibes.schemas.question import QuestionDraft
from vibes.services import context_service, question_repository, response_repository
from vibes.services.aggregation import summarize


def draft(**kw):
    data = {"text": "Favourite colour?", "type": "single", "options": ["Red", "Blue"]}
    data.update(kw)
    return QuestionDraft(**data)


# ==================== QUESTIONS ====================

class TestCreateQuestion:

    def test_creates_draft_with_author(self, db):
        qid = question_repository.create(db, "alice", draft(text="  Favourite colour?  "))

        q = db.get(Question, qid)
        assert q.text == "Favourite colour?"
        assert q.status == "draft"
        assert q.created_by == "alice"
        assert q.created_at is not None
        assert q.options == ["Red", "Blue"]
        assert q.min_value is None and q.max_value is None

    def test_rating_bounds_stored(self, db):
        qid = question_repository.create(db, "alice", draft(type="rating", options=None, min=1, max=5))
        q = db.get(Question, qid)
        assert (q.min_value, q.max_value) == (1, 5)
        assert q.options is None

    def test_fields_outside_type_dropped(self, db):
        qid = question_repository.create(
            db, "alice", draft(type="date", options=["x"], min=1, max=2)
        )
        q = db.get(Question, qid)
        assert q.options is None
        assert q.min_value is None and q.max_value is None

    def test_blank_options_trimmed(self, db):
        qid = question_repository.create(db, "alice", draft(options=[" Red ", "", "  "]))
        assert db.get(Question, qid).options == ["Red"]

    @pytest.mark.parametrize(
        "kw, code",
        [
            ({"text": "   "}, "missing_text"),
            ({"options": []}, "missing_options"),
            ({"options": ["", " "]}, "missing_options"),
            ({"type": "numeric", "options": None, "min": 1}, "missing_bounds"),
            ({"type": "rating", "options": None, "min": 5, "max": 1}, "invalid_bounds"),
            ({"type": "rating", "options": None, "min": 3, "max": 3}, "invalid_bounds"),
        ],
    )
    def test_validation_fails_before_write(self, db, kw, code):
        with pytest.raises(ValidationError) as exc:
            question_repository.create(db, "alice", draft(**kw))

        assert exc.value.code == code
        assert db.query(Question).count() == 0

    def test_inverted_bounds_message(self, db):
        with pytest.raises(ValidationError, match="max must exceed min"):
            question_repository.create(db, "alice", draft(type="rating", options=None, min=5, max=1))

    def test_requires_identity(self, db):
        with pytest.raises(AuthRequiredError):
            question_repository.create(db, None, draft())
        assert db.query(Question).count() == 0


class TestApprovedFeed:

    def test_only_approved_newest_first(self, db):
        ids = [question_repository.create(db, "alice", draft(text=f"Q{i}")) for i in range(3)]
        question_repository.set_status(db, ids[0], "approved")
        question_repository.set_status(db, ids[2], "approved")

        feed = question_repository.list_approved(db)
        assert [q.id for q in feed] == [ids[2], ids[0]]
        assert all(q.status == "approved" for q in feed)

    def test_orders_by_created_at_not_id(self, db):
        older_id = question_repository.create(db, "alice", draft(text="later row, older time"))
        newer_id = question_repository.create(db, "alice", draft(text="earlier row, newer time"))
        for qid in (older_id, newer_id):
            question_repository.set_status(db, qid, "approved")

        # id 순서와 생성시각 순서를 반대로
        db.get(Question, older_id).created_at = datetime(2024, 1, 2, 12, 0)
        db.get(Question, newer_id).created_at = datetime(2024, 1, 1, 12, 0)
        db.commit()

        feed = question_repository.list_approved(db)
        assert [q.id for q in feed] == [older_id, newer_id]

    def test_limit(self, db):
        for i in range(5):
            qid = question_repository.create(db, "alice", draft(text=f"Q{i}"))
            question_repository.set_status(db, qid, "approved")

        assert len(question_repository.list_approved(db, limit=2)) == 2

    def test_default_limit_from_settings(self, db, monkeypatch):
        from vibes.config import settings

        monkeypatch.setattr(settings, "feed_page_size", 2)
        for i in range(3):
            qid = question_repository.create(db, "alice", draft(text=f"Q{i}"))
            question_repository.set_status(db, qid, "approved")

        assert len(question_repository.list_approved(db)) == 2

    def test_draft_not_listed(self, db):
        question_repository.create(db, "alice", draft())
        assert question_repository.list_approved(db) == []

    def test_get_missing(self, db):
        with pytest.raises(NotFoundError):
            question_repository.get(db, 999)

    def test_set_status_rejects_unknown(self, db):
        qid = question_repository.create(db, "alice", draft())
        with pytest.raises(ValidationError):
            question_repository.set_status(db, qid, "published")


# ==================== RESPONSES ====================

@pytest.fixture
def qid(db):
    return question_repository.create(db, "author", draft())


class TestResponses:

    def test_resubmit_overwrites(self, db, qid):
        response_repository.submit(db, qid, "bob", "Red")
        response_repository.submit(db, qid, "bob", "Blue")

        rows = db.query(Response).filter_by(question_id=qid, user_id="bob").all()
        assert len(rows) == 1
        assert rows[0].value == "Blue"
        assert rows[0].answered_at is not None

    def test_users_independent(self, db, qid):
        response_repository.submit(db, qid, "bob", "Red")
        response_repository.submit(db, qid, "carol", "Blue")

        values = sorted(r.value for r in response_repository.list_responses(db, qid))
        assert values == ["Blue", "Red"]

    def test_has_answered(self, db, qid):
        assert response_repository.has_answered(db, qid, "bob") is False
        response_repository.submit(db, qid, "bob", "Red")
        assert response_repository.has_answered(db, qid, "bob") is True
        assert response_repository.has_answered(db, qid, "carol") is False

    def test_no_value_validation_at_this_layer(self, db, qid):
        row = response_repository.submit(db, qid, "bob", "Purple")
        assert row.value == "Purple"
        assert row.value_kind == "string"

    def test_value_kinds(self, db, qid):
        from datetime import date

        assert response_repository.submit(db, qid, "u1", 4).value_kind == "number"
        row = response_repository.submit(db, qid, "u2", date(2024, 1, 2))
        assert row.value_kind == "date"
        assert row.value == "2024-01-02"

    def test_requires_identity(self, db, qid):
        with pytest.raises(AuthRequiredError):
            response_repository.submit(db, qid, "", "Red")

    def test_stored_huge_number_summarizes(self, db):
        rid = question_repository.create(db, "author", draft(type="numeric", options=None, min=0, max=10))
        response_repository.submit(db, rid, "bob", 10 ** 30)
        response_repository.submit(db, rid, "carol", 4)

        q = question_repository.get(db, rid)
        s = summarize(q, response_repository.list_responses(db, rid))
        assert s.count == 2
        assert s.mean == 5e29

    def test_list_empty(self, db, qid):
        assert response_repository.list_responses(db, qid) == []


# ==================== CONTEXT ====================

class TestContext:

    def test_merge_update(self, db):
        context_service.save_context(db, "alice", UserContextIn(age=30, city="Seoul"))
        ctx = context_service.save_context(db, "alice", UserContextIn(city="Busan"))

        assert ctx.age == 30
        assert ctx.city == "Busan"

    def test_explicit_null_clears(self, db):
        context_service.save_context(db, "alice", UserContextIn(age=30))
        ctx = context_service.save_context(db, "alice", UserContextIn(age=None))
        assert ctx.age is None

    def test_get_without_save(self, db):
        ctx = context_service.get_context(db, "nobody")
        assert ctx.age is None and ctx.city is None

    def test_age_range(self):
        with pytest.raises(SchemaValidationError):
            UserContextIn(age=121)

    def test_mark_onboarding_done(self, db):
        context_service.mark_onboarding_done(db, "alice")
        assert db.get(UserProfile, "alice").onboarding_done is True

    def test_requires_identity(self, db):
        with pytest.raises(AuthRequiredError):
            context_service.save_context(db, None, UserContextIn(age=1))
