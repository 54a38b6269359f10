"""
Unit tests for the repositories against a mocked connection pool.
"""

import pytest
from psycopg2 import errors

from models.brief import Brief, Reward
from models.feedback import Feedback
from models.influencer import InfluencerApplication
from models.template import PromptTemplate
from models.user import User
from repositories.brief_repo import BriefRepository
from repositories.feedback_repo import FeedbackRepository
from repositories.influencer_repo import DUPLICATE_EMAIL_MESSAGE, InfluencerRepository
from repositories.submission_repo import SubmissionRepository
from repositories.template_repo import TemplateRepository
from repositories.user_repo import UserRepository
from utils.errors import ConflictError, NotFoundError
from tests.helpers import (
    brief_row,
    feedback_row,
    influencer_row,
    make_pool,
    submission_row,
    template_row,
)


def _executed_sql(cursor, call_index=-1) -> str:
    return cursor.execute.call_args_list[call_index][0][0]


def _executed_params(cursor, call_index=-1):
    return cursor.execute.call_args_list[call_index][0][1]


class TestBriefRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = BriefRepository(self.pool)

    def _new_brief(self) -> Brief:
        return Brief(
            slug="nfl-bonus", title="NFL Bonus", org_name="Acme Sports",
            reward=Reward(type="CASH", amount=500), status="PUBLISHED",
            max_winners=1, max_submissions_per_creator=3, owner_id="demo-user-1",
        )

    def test_create_returns_stored_brief(self):
        self.cursor.fetchone.return_value = brief_row(id=11)

        created = self.repo.create(self._new_brief())

        assert created.id == 11
        assert created.organization is None
        assert created.submission_count is None
        assert "INSERT INTO briefs" in _executed_sql(self.cursor)

    def test_create_duplicate_slug_is_conflict(self):
        self.cursor.execute.side_effect = errors.UniqueViolation("duplicate key")

        with pytest.raises(ConflictError) as exc_info:
            self.repo.create(self._new_brief())

        assert exc_info.value.extra == {"slug": "nfl-bonus"}

    def test_find_by_slug(self):
        self.cursor.fetchone.return_value = brief_row(user_org_name="Acme")

        brief = self.repo.find_by_slug_or_fallback_id("nfl-bonus")

        assert brief.slug == "nfl-bonus"
        assert brief.organization.name == "Acme"
        assert self.cursor.execute.call_count == 1

    def test_find_falls_back_to_id_for_generated_slug(self):
        self.cursor.fetchone.side_effect = [None, brief_row(id=42, slug=None, user_org_name=None)]

        brief = self.repo.find_by_slug_or_fallback_id("brief-42")

        assert brief.id == 42
        assert brief.slug == "brief-42"
        assert _executed_params(self.cursor) == (42,)

    def test_find_not_found_carries_slug(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            self.repo.find_by_slug_or_fallback_id("nope")

        assert exc_info.value.to_dict() == {"error": "Brief not found", "slug": "nope"}
        assert self.cursor.execute.call_count == 1

    def test_list_with_status_filter(self):
        self.cursor.fetchall.return_value = [
            brief_row(id=2, submission_count=5, user_org_name=None),
            brief_row(id=1, submission_count=0, user_org_name=None),
        ]

        briefs = self.repo.list_all_with_counts("PUBLISHED")

        assert [b.submission_count for b in briefs] == [5, 0]
        assert "WHERE b.status = %s" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == ["PUBLISHED"]

    def test_list_without_filter(self):
        self.cursor.fetchall.return_value = []

        assert self.repo.list_all_with_counts() == []
        assert "WHERE" not in _executed_sql(self.cursor)

    def test_update_recounts_submissions(self):
        self.cursor.fetchone.side_effect = [brief_row(id=3, title="Renamed"), {"count": 4}]

        updated = self.repo.update(3, self._new_brief())

        assert updated.title == "Renamed"
        assert updated.submission_count == 4
        assert _executed_params(self.cursor) == (3,)

    def test_update_missing_brief(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.update(99, self._new_brief())

    def test_list_missing_slugs_keeps_stored_slug(self):
        self.cursor.fetchall.return_value = [
            {"id": 4, "title": "No Slug", "slug": None},
            {"id": 5, "title": "Empty Slug", "slug": ""},
        ]

        briefs = self.repo.list_missing_slugs()

        assert [(b.id, b.slug) for b in briefs] == [(4, None), (5, "")]

    def test_assign_slug_conflict(self):
        self.cursor.execute.side_effect = errors.UniqueViolation("duplicate key")

        with pytest.raises(ConflictError):
            self.repo.assign_slug(4, "no-slug")


class TestSubmissionRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = SubmissionRepository(self.pool)

    def test_list_for_missing_brief(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            self.repo.list_for_brief(5)

        assert exc_info.value.message == "Brief not found"

    def test_list_for_brief_without_submissions(self):
        self.cursor.fetchone.return_value = {"id": 5}
        self.cursor.fetchall.return_value = []

        assert self.repo.list_for_brief(5) == []

    def test_creator_listing_defaults_to_published_briefs(self):
        self.cursor.fetchall.return_value = [submission_row(brief_title="NFL Bonus")]

        submissions = self.repo.list_for_creator("Sam@Example.com")

        sql = _executed_sql(self.cursor)
        assert "lower(s.creator_email) = lower(%s)" in sql
        assert "b.status = 'PUBLISHED'" in sql
        assert _executed_params(self.cursor) == ["Sam@Example.com"]
        assert submissions[0].brief.title == "NFL Bonus"

    def test_creator_listing_for_one_brief(self):
        self.cursor.fetchall.return_value = []

        assert self.repo.list_for_creator("sam@example.com", 4) == []
        assert "s.brief_id = %s" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == ["sam@example.com", 4]

    def test_list_for_brief_resolves_creator_and_brief(self):
        self.cursor.fetchone.return_value = {"id": 1}
        self.cursor.fetchall.return_value = [submission_row(
            creator_id="u-1", creator_username="samc", user_email="sam@example.com",
            brief_title="NFL Bonus", brief_slug="nfl-bonus", brief_org_name="Acme",
            owner_org_name=None, reward_type="CASH", reward_amount="500",
            reward_currency="USD", reward_description=None, has_feedback=True,
        )]

        [submission] = self.repo.list_for_brief(1)

        assert submission.creator.name == "samc"
        assert submission.brief.organization_name == "Acme"
        assert submission.has_feedback is True
        assert "ORDER BY s.submitted_at DESC" in _executed_sql(self.cursor)

    def test_select_opens_payout(self):
        self.cursor.fetchone.return_value = submission_row(status="SELECTED", payout_status="PENDING")

        submission = self.repo.update_status(10, "SELECTED", reviewed_by="demo-user-1")

        sql = _executed_sql(self.cursor)
        assert "selected_at = NOW()" in sql
        assert "payout_status = 'PENDING'" in sql
        assert _executed_params(self.cursor) == ["SELECTED", "demo-user-1", 10]
        assert submission.payout_status == "PENDING"

    def test_not_selected_records_resubmission_flag(self):
        self.cursor.fetchone.return_value = submission_row(status="NOT_SELECTED", allows_resubmission=True)

        self.repo.update_status(10, "NOT_SELECTED", allows_resubmission=True, review_notes="Reshoot")

        assert _executed_params(self.cursor) == ["NOT_SELECTED", True, "Reshoot", 10]

    def test_resubmission_flag_ignored_for_other_statuses(self):
        self.cursor.fetchone.return_value = submission_row(status="IN_REVIEW")

        self.repo.update_status(10, "IN_REVIEW", allows_resubmission=True)

        assert "allows_resubmission" not in _executed_sql(self.cursor)

    def test_update_status_missing_submission(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.update_status(404, "IN_REVIEW")

    def test_paid_stamps_paid_at(self):
        self.cursor.fetchone.return_value = submission_row(payout_status="PAID")

        self.repo.update_payout(10, "PAID", "Sent via ACH")

        assert "paid_at = NOW()" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == ["PAID", "Sent via ACH", 10]

    def test_chain_includes_root_and_resubmissions(self):
        self.cursor.fetchall.return_value = [
            submission_row(id=10, submission_version=1),
            submission_row(id=12, parent_submission_id=10, submission_version=2),
        ]

        chain = self.repo.list_chain(10)

        assert [s.submission_version for s in chain] == [1, 2]
        assert "s.parent_submission_id = %s" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == (10, 10)


class TestFeedbackRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = FeedbackRepository(self.pool)

    def test_list_for_missing_submission(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.list_for_submission(10)

    def test_list_newest_first(self):
        self.cursor.fetchone.return_value = {"id": 10}
        self.cursor.fetchall.return_value = [feedback_row(id=4), feedback_row(id=3)]

        feedback = self.repo.list_for_submission(10)

        assert [f.id for f in feedback] == [4, 3]
        assert "ORDER BY created_at DESC" in _executed_sql(self.cursor)

    def test_create_stores_requires_action_as_int(self):
        self.cursor.fetchone.return_value = feedback_row()

        self.repo.create(Feedback(
            submission_id=10, author_id="demo-user-1", author_name="Demo Admin",
            comment="Trim the intro.", requires_action=True,
        ))

        assert _executed_params(self.cursor)[-1] == 1

    def test_create_for_missing_submission(self):
        self.cursor.execute.side_effect = errors.ForeignKeyViolation("fk")

        with pytest.raises(NotFoundError):
            self.repo.create(Feedback(
                submission_id=99, author_id="demo-user-1", author_name="Demo Admin", comment="Hi",
            ))

    def test_update_missing_feedback(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            self.repo.update(3, "New text")

        assert exc_info.value.message == "Feedback not found"

    def test_delete_missing_feedback(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.delete(3)

    def test_delete(self):
        self.cursor.fetchone.return_value = (3,)

        self.repo.delete(3)

        assert _executed_params(self.cursor) == (3,)

    def test_mark_read_counts_unread_rows(self):
        self.cursor.fetchone.return_value = (10,)
        self.cursor.rowcount = 2

        assert self.repo.mark_read(10) == 2
        assert "is_read = 1" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == (10,)

    def test_mark_read_missing_submission(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.mark_read(99)
        assert self.cursor.execute.call_count == 1


class TestInfluencerRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = InfluencerRepository(self.pool)
        self.application = InfluencerApplication(
            first_name="Jordan", last_name="Lee", email="jordan@example.com",
            instagram_handle="@jordanlee",
        )

    def test_create(self):
        self.cursor.fetchone.return_value = influencer_row()

        created = self.repo.create(self.application)

        assert created.id == 7
        assert created.status == "pending"

    def test_duplicate_email_is_conflict(self):
        self.cursor.execute.side_effect = errors.UniqueViolation("duplicate key")

        with pytest.raises(ConflictError) as exc_info:
            self.repo.create(self.application)

        assert exc_info.value.message == DUPLICATE_EMAIL_MESSAGE

    def test_list_all_has_no_filter(self):
        self.cursor.fetchall.return_value = [influencer_row()]

        self.repo.list_by_status("all")

        assert "WHERE" not in _executed_sql(self.cursor)

    def test_list_by_status(self):
        self.cursor.fetchall.return_value = []

        self.repo.list_by_status("approved")

        assert "WHERE status = %s" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == ["approved"]

    def test_reject_stores_reason(self):
        self.cursor.fetchone.return_value = influencer_row(status="rejected", rejection_reason="Too few followers")

        updated = self.repo.update_status(7, "rejected", "Too few followers")

        sql = _executed_sql(self.cursor)
        assert "rejection_reason = %s" in sql
        assert "rejected_at = NOW()" in sql
        assert _executed_params(self.cursor) == ("rejected", "Too few followers", 7)
        assert updated.rejection_reason == "Too few followers"

    def test_approve_stores_admin_notes(self):
        self.cursor.fetchone.return_value = influencer_row(status="approved")

        self.repo.update_status(7, "approved", "Welcome!")

        sql = _executed_sql(self.cursor)
        assert "admin_notes = %s" in sql
        assert "approved_at = NOW()" in sql

    def test_update_missing_influencer(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.update_status(404, "pending")

    def test_get_by_email_ignores_case(self):
        self.cursor.fetchone.return_value = influencer_row()

        found = self.repo.get_by_email("Jordan@Example.com")

        assert found.id == 7
        assert "lower(email) = lower(%s)" in _executed_sql(self.cursor)
        assert _executed_params(self.cursor) == ("Jordan@Example.com",)

    def test_get_by_unknown_email(self):
        self.cursor.fetchone.return_value = None

        assert self.repo.get_by_email("ghost@example.com") is None


class TestUserRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = UserRepository(self.pool)

    def test_ensure_user_upserts(self):
        self.cursor.fetchone.return_value = {"id": "demo-user-1", "email": "demo@example.com", "role": "admin"}

        user = self.repo.ensure_user(User(id="demo-user-1", email="demo@example.com"))

        assert user.id == "demo-user-1"
        assert "ON CONFLICT (id)" in _executed_sql(self.cursor)

    def test_get_missing_user(self):
        self.cursor.fetchone.return_value = None

        assert self.repo.get_by_id("ghost") is None


class TestTemplateRepository:

    def setup_method(self):
        self.pool, self.cursor = make_pool()
        self.repo = TemplateRepository(self.pool)

    def test_create_writes_owner_first(self):
        self.cursor.fetchone.return_value = template_row()

        created = self.repo.create(PromptTemplate(owner_id="admin-1", name="Sportsbook launch"))

        assert created.id == 5
        assert "INSERT INTO prompt_templates (owner_id, name," in _executed_sql(self.cursor)
        assert _executed_params(self.cursor)[:2] == ["admin-1", "Sportsbook launch"]

    def test_list_by_owner_newest_edit_first(self):
        self.cursor.fetchall.return_value = [template_row(id=6), template_row(id=5)]

        templates = self.repo.list_by_owner("admin-1")

        assert [t.id for t in templates] == [6, 5]
        assert "ORDER BY updated_at DESC" in _executed_sql(self.cursor)

    def test_partial_update_touches_only_given_columns(self):
        self.cursor.fetchone.return_value = template_row(name="Renamed")

        self.repo.update(5, {"name": "Renamed", "owner_id": "intruder"})

        sql = _executed_sql(self.cursor)
        assert "SET name = %s, updated_at = NOW()" in sql
        assert "owner_id" not in sql
        assert _executed_params(self.cursor) == ["Renamed", 5]

    def test_update_missing_template(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            self.repo.update(5, {"name": "Renamed"})

        assert exc_info.value.message == "Template not found"

    def test_delete_missing_template(self):
        self.cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError):
            self.repo.delete(5)
