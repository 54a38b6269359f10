"""
Unit tests for the service layer with mocked repositories.
"""

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from models.brief import Brief, Reward
from models.feedback import Feedback
from models.influencer import InfluencerApplication
from repositories.row_mapper import row_to_influencer, row_to_submission, row_to_template
from security.auth import CallerIdentity
from services.brief_service import BriefService
from services.feedback_service import FeedbackService
from services.influencer_service import InfluencerService
from services.portal_service import UNDER_REVIEW_MESSAGE, PortalService
from services.submission_service import SubmissionService
from services.template_service import TemplateService
from utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from tests.helpers import influencer_row, submission_row, template_row

ADMIN = CallerIdentity(id="admin-1", name="Ada Admin", email="ada@example.com")


def _echo(brief: Brief) -> Brief:
    brief.id = 1
    return brief


class TestBriefServiceCreate:

    def setup_method(self):
        self.repo = Mock()
        self.repo.create.side_effect = _echo
        self.service = BriefService(self.repo)

    def test_minimal_brief_gets_defaults(self):
        before = datetime.now(timezone.utc)

        brief = self.service.create(
            {"slug": "nfl-bonus", "title": "NFL Bonus", "orgName": "Acme"}, ADMIN
        )

        assert brief.status == "PUBLISHED"
        assert brief.max_winners == 1
        assert brief.max_submissions_per_creator == 3
        assert brief.reward == Reward(type="CASH", amount=0, currency="USD", description=None)
        assert brief.deliverable_ratio == "9:16"
        assert brief.deliverable_length == "15-30 seconds"
        assert brief.deliverable_format == "Vertical video"
        assert brief.overview == ""
        assert brief.requirements == []
        assert brief.owner_id == "admin-1"
        assert before + timedelta(days=29) < brief.deadline <= datetime.now(timezone.utc) + timedelta(days=30)

    def test_provided_values_are_kept(self):
        brief = self.service.create({
            "slug": "draft-one", "title": "Draft", "orgName": "Acme", "status": "DRAFT",
            "maxWinners": 3, "reward": {"type": "BONUS_BETS", "amount": 25, "currency": "CAD"},
        }, ADMIN)

        assert brief.status == "DRAFT"
        assert brief.max_winners == 3
        assert brief.reward.type == "BONUS_BETS"
        assert brief.reward.currency == "CAD"

    @pytest.mark.parametrize("payload", [
        {"title": "NFL Bonus", "orgName": "Acme"},
        {"slug": "nfl-bonus", "orgName": "Acme"},
        {"slug": "nfl-bonus", "title": "NFL Bonus", "orgName": ""},
    ])
    def test_missing_required_fields(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create(payload, ADMIN)

        assert exc_info.value.message == "Missing required fields: slug, title, orgName"
        self.repo.create.assert_not_called()

    def test_unknown_reward_type(self):
        with pytest.raises(ValidationError):
            self.service.create({
                "slug": "s", "title": "T", "orgName": "O", "reward": {"type": "CRYPTO"},
            }, ADMIN)

    def test_max_winners_must_be_positive(self):
        with pytest.raises(ValidationError):
            self.service.create({"slug": "s", "title": "T", "orgName": "O", "maxWinners": 0}, ADMIN)

    def test_duplicate_slug_propagates(self):
        self.repo.create.side_effect = ConflictError("A brief with slug 's' already exists", slug="s")

        with pytest.raises(ConflictError):
            self.service.create({"slug": "s", "title": "T", "orgName": "O"}, ADMIN)


class TestBriefServiceUpdate:

    def setup_method(self):
        self.repo = Mock()
        self.repo.update.side_effect = lambda brief_id, brief: brief
        self.service = BriefService(self.repo)

    def test_update_applies_fallbacks(self):
        brief = self.service.update(5, {"title": "Renamed", "deadline": "2025-06-01T00:00:00Z"})

        assert brief.status == "PUBLISHED"
        assert brief.reward.type == "CASH"
        assert brief.reward.amount == 0
        assert brief.max_winners == 1
        assert brief.max_submissions_per_creator == 3
        self.repo.update.assert_called_once()
        assert self.repo.update.call_args[0][0] == 5

    def test_update_requires_title_and_deadline(self):
        with pytest.raises(ValidationError):
            self.service.update(5, {"title": "Renamed"})

    def test_update_missing_brief(self):
        self.repo.update.side_effect = NotFoundError("Brief not found")

        with pytest.raises(NotFoundError):
            self.service.update(5, {"title": "T", "deadline": "2025-06-01T00:00:00Z"})


class TestBriefServiceBackfill:

    def setup_method(self):
        self.repo = Mock()
        self.service = BriefService(self.repo)
        self.taken = {"hello-world"}

    def _assign(self, brief_id, slug):
        if slug in self.taken:
            raise ConflictError(f"Slug '{slug}' already exists", slug=slug)
        self.taken.add(slug)
        return True

    def test_collisions_get_id_appended(self):
        self.taken = set()
        self.repo.list_missing_slugs.return_value = [
            Brief(id=1, title="Hello World"),
            Brief(id=2, title="!!!"),
            Brief(id=3, title="Hello, World"),
        ]
        self.repo.assign_slug.side_effect = self._assign

        result = self.service.backfill_slugs()

        assert result == {
            "updated": [(1, "hello-world"), (2, "-2"), (3, "hello-world-3")],
            "failed": [],
        }

    def test_second_collision_fails_that_brief_only(self):
        self.taken = {"hello-world", "hello-world-3"}
        self.repo.list_missing_slugs.return_value = [
            Brief(id=3, title="Hello World"),
            Brief(id=4, title="Fresh Title"),
        ]
        self.repo.assign_slug.side_effect = self._assign

        result = self.service.backfill_slugs()

        assert result == {"updated": [(4, "fresh-title")], "failed": [3]}


class TestSubmissionService:

    def setup_method(self):
        self.repo = Mock()
        self.service = SubmissionService(self.repo)

    def test_empty_brief_lists_nothing(self):
        self.repo.list_for_brief.return_value = []

        assert self.service.list_for_brief(1) == []

    def test_review_records_reviewer(self):
        self.service.review(10, "NOT_SELECTED", ADMIN, allows_resubmission=True, review_notes="Reshoot")

        self.repo.update_status.assert_called_once_with(
            10, "NOT_SELECTED", allows_resubmission=True, review_notes="Reshoot", reviewed_by="admin-1",
        )

    @pytest.mark.parametrize("status", [None, "", "WINNER"])
    def test_review_rejects_bad_status(self, status):
        with pytest.raises(ValidationError):
            self.service.review(10, status, ADMIN)
        self.repo.update_status.assert_not_called()

    def test_payout_validation(self):
        with pytest.raises(ValidationError):
            self.service.update_payout(10, "COMPLETED")
        self.service.update_payout(10, "PAID", "Wired")
        self.repo.update_payout.assert_called_once_with(10, "PAID", "Wired")

    def test_get_missing_submission(self):
        self.repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            self.service.get(404)

    def test_history_starts_from_chain_root(self):
        self.repo.get_by_id.return_value = row_to_submission(
            submission_row(id=12, parent_submission_id=10, submission_version=2)
        )
        self.repo.list_chain.return_value = []

        self.service.history(12)

        self.repo.list_chain.assert_called_once_with(10)

    def test_history_of_original_uses_its_own_id(self):
        self.repo.get_by_id.return_value = row_to_submission(submission_row(id=10))
        self.repo.list_chain.return_value = []

        self.service.history(10)

        self.repo.list_chain.assert_called_once_with(10)

    def test_history_missing_submission(self):
        self.repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            self.service.history(404)
        self.repo.list_chain.assert_not_called()


class TestFeedbackService:

    def setup_method(self):
        self.repo = Mock()
        self.repo.create.side_effect = lambda feedback: feedback
        self.service = FeedbackService(self.repo)

    def test_add_trims_and_uses_caller(self):
        feedback = self.service.add(10, "  Trim the intro.  ", ADMIN, requires_action=True)

        assert feedback == Feedback(
            submission_id=10, author_id="admin-1", author_name="Ada Admin",
            comment="Trim the intro.", requires_action=True,
        )

    @pytest.mark.parametrize("comment", [None, "", "   "])
    def test_blank_comment_rejected(self, comment):
        with pytest.raises(ValidationError) as exc_info:
            self.service.add(10, comment, ADMIN)
        assert exc_info.value.message == "Comment is required"

    def test_edit_blank_comment_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.edit(3, " ")

        assert exc_info.value.message == "Comment is required"
        self.repo.update.assert_not_called()

    def test_edit_trims(self):
        self.service.edit(3, " Better now ")

        self.repo.update.assert_called_once_with(3, "Better now")

    def test_mark_read_returns_count(self):
        self.repo.mark_read.return_value = 3

        assert self.service.mark_read(10) == 3
        self.repo.mark_read.assert_called_once_with(10)


class TestInfluencerService:

    def setup_method(self):
        self.repo = Mock()
        self.repo.create.side_effect = lambda application: application
        self.service = InfluencerService(self.repo)
        self.form = {
            "email": "jordan@example.com",
            "firstName": "Jordan",
            "lastName": "Lee",
            "instagramHandle": "@jordanlee",
            "phone": "",
            "tiktokHandle": "  ",
            "instagramFollowers": 45000,
        }

    def test_apply(self):
        application = self.service.apply(self.form)

        assert application.status == "pending"
        assert application.phone is None
        assert application.tiktok_handle is None
        assert application.instagram_followers == 45000

    def test_apply_missing_fields(self):
        form = dict(self.form, firstName="", instagramHandle=None)

        with pytest.raises(ValidationError) as exc_info:
            self.service.apply(form)

        assert exc_info.value.message == "Missing required fields: firstName, instagramHandle"

    def test_list_defaults_to_pending(self):
        self.service.list_applications()

        self.repo.list_by_status.assert_called_once_with("pending")

    def test_list_rejects_unknown_filter(self):
        with pytest.raises(ValidationError):
            self.service.list_applications("banned")

    def test_invalid_status(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.update_status(7, "banned")

        assert exc_info.value.message == "Invalid status. Must be 'approved', 'rejected', or 'pending'"

    @pytest.mark.parametrize("influencer_id, status", [(None, "approved"), (7, None), (7, "")])
    def test_missing_id_or_status(self, influencer_id, status):
        with pytest.raises(ValidationError) as exc_info:
            self.service.update_status(influencer_id, status)

        assert exc_info.value.message == "Missing influencerId or status"

    def test_unknown_influencer(self):
        self.repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            self.service.update_status(404, "approved")
        self.repo.update_status.assert_not_called()

    def test_reversing_a_decision_is_logged(self, caplog):
        self.repo.get_by_id.return_value = InfluencerApplication(
            id=7, first_name="Jordan", last_name="Lee", email="jordan@example.com",
            instagram_handle="@jordanlee", status="approved",
        )

        with caplog.at_level(logging.WARNING, logger="services.influencer_service"):
            self.service.update_status(7, "rejected", "Fake followers")

        assert "moved from approved to rejected" in caplog.text
        self.repo.update_status.assert_called_once_with(7, "rejected", "Fake followers")


class TestTemplateService:

    def setup_method(self):
        self.repo = Mock()
        self.repo.create.side_effect = lambda template: template
        self.service = TemplateService(self.repo)

    def test_create_keeps_only_known_fields(self):
        template = self.service.create(
            {"name": "Launch", "rewardType": "CASH", "rewardAmount": 50, "colour": "red"}, ADMIN
        )

        assert template.owner_id == "admin-1"
        assert template.reward_amount == "50"
        assert template.requirements == []
        assert not hasattr(template, "colour")

    @pytest.mark.parametrize("payload", [{}, {"name": None}, {"name": "  "}])
    def test_create_requires_name(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create(payload, ADMIN)

        assert exc_info.value.message == "Template name is required"

    def test_create_rejects_unknown_reward_type(self):
        with pytest.raises(ValidationError):
            self.service.create({"name": "Launch", "rewardType": "CRYPTO"}, ADMIN)

    def test_update_checks_ownership_first(self):
        self.repo.get_by_id.return_value = row_to_template(template_row(owner_id="someone-else"))

        with pytest.raises(NotFoundError):
            self.service.update(5, {"name": "Mine now"}, ADMIN)
        self.repo.update.assert_not_called()

    def test_update_rejects_blank_name(self):
        self.repo.get_by_id.return_value = row_to_template(template_row())

        with pytest.raises(ValidationError):
            self.service.update(5, {"name": ""}, ADMIN)

    def test_update_may_clear_optional_fields(self):
        self.repo.get_by_id.return_value = row_to_template(template_row())

        self.service.update(5, {"overview": None}, ADMIN)

        self.repo.update.assert_called_once_with(5, {"overview": None})

    def test_delete_missing_template(self):
        self.repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            self.service.delete(5, ADMIN)
        self.repo.delete.assert_not_called()


class TestPortalService:

    def setup_method(self):
        self.influencers = Mock()
        self.briefs = Mock()
        self.submissions = Mock()
        self.service = PortalService(self.influencers, self.briefs, self.submissions)

    def test_approved_application_opens_portal(self):
        self.influencers.get_by_email.return_value = row_to_influencer(influencer_row(status="approved"))
        self.briefs.list_all_with_counts.return_value = []

        application, briefs = self.service.open_portal(" jordan@example.com ")

        assert application.id == 7
        assert briefs == []
        self.influencers.get_by_email.assert_called_once_with("jordan@example.com")

    @pytest.mark.parametrize("status", ["pending", "rejected"])
    def test_undecided_or_rejected_is_forbidden(self, status):
        self.influencers.get_by_email.return_value = row_to_influencer(influencer_row(status=status))

        with pytest.raises(ForbiddenError) as exc_info:
            self.service.open_portal("jordan@example.com")

        assert exc_info.value.message == UNDER_REVIEW_MESSAGE

    def test_unknown_email(self):
        self.influencers.get_by_email.return_value = None

        with pytest.raises(NotFoundError):
            self.service.open_portal("ghost@example.com")

    @pytest.mark.parametrize("email", [None, "", "   "])
    def test_email_required(self, email):
        with pytest.raises(ValidationError):
            self.service.creator_submissions(email)
        self.submissions.list_for_creator.assert_not_called()

    def test_creator_submissions_across_briefs(self):
        self.submissions.list_for_creator.return_value = []

        assert self.service.creator_submissions("sam@example.com") == []
        self.submissions.list_for_creator.assert_called_once_with("sam@example.com", None)
