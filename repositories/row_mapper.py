"""
repositories/row_mapper.py
--------------------------
Bidirectional mapping between database rows, domain models and the API's
JSON shape.

Rows arrive from a ``RealDictCursor`` as snake_case dicts; JSON leaves in
camelCase. Every optional column that is absent from a row maps to ``None``.
"""

import math
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from models.brief import Brief, Organization, Reward
from models.feedback import Feedback
from models.influencer import InfluencerApplication
from models.submission import BriefSummary, Creator, Submission, Video
from models.template import PromptTemplate
from models.user import User
from utils.slug import fallback_slug

# Column order expected by BriefRepository's INSERT and UPDATE statements.
BRIEF_INSERT_COLUMNS = (
    "slug", "title", "org_name", "business_line", "state", "overview",
    "requirements", "deliverable_ratio", "deliverable_length",
    "deliverable_format", "reward_type", "reward_amount", "reward_currency",
    "reward_description", "deadline", "status", "password", "max_winners",
    "max_submissions_per_creator", "owner_id",
)
BRIEF_UPDATE_COLUMNS = (
    "title", "overview", "requirements", "business_line", "state",
    "deliverable_ratio", "deliverable_length", "deliverable_format",
    "reward_type", "reward_amount", "reward_currency", "reward_description",
    "deadline", "status", "max_winners", "max_submissions_per_creator",
)
INFLUENCER_INSERT_COLUMNS = (
    "first_name", "last_name", "email", "phone", "instagram_handle",
    "instagram_followers", "tiktok_handle", "youtube_channel", "status",
)


# ── Scalars ───────────────────────────────────────────────

def coerce_amount(value: Any) -> Any:
    """
    Turn a stored amount into a JSON number when it parses as one.

    ``"250"`` -> 250 and ``Decimal("12.50")`` -> 12.5. Text such as
    ``"Casino Credits"`` or ``"1_000"`` is returned unchanged, and so are
    NaN and infinities.
    """
    if value is None or isinstance(value, (bool, int)):
        return value
    if isinstance(value, str) and "_" in value:
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return value
    if not math.isfinite(number):
        return value
    return int(number) if number.is_integer() else number


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _flag(value: Any) -> bool:
    """0/1 integers and NULLs stored for boolean columns."""
    return bool(value) if value is not None else False


# ── Brief ─────────────────────────────────────────────────

def row_to_reward(row: Mapping[str, Any]) -> Reward:
    """Synthesize the nested reward from the flat reward_* columns."""
    return Reward(
        type=row.get("reward_type"),
        amount=coerce_amount(row.get("reward_amount")),
        currency=row.get("reward_currency") or "USD",
        description=row.get("reward_description"),
    )


def row_to_organization(row: Mapping[str, Any]) -> Optional[Organization]:
    """
    Organization display data from the owner join.

    Returns None when the query did not join the owner at all; a brief with
    no matching owner still gets an organization named after its own
    ``org_name``.
    """
    if "user_org_name" not in row:
        return None
    return Organization(
        name=row.get("user_org_name") or row.get("org_name"),
        slug=row.get("org_slug"),
        logo_url=row.get("org_logo_url"),
        website=row.get("org_website"),
        description=row.get("org_description"),
    )


def row_to_brief(row: Mapping[str, Any]) -> Brief:
    """Convert a briefs row (optionally joined/counted) to a Brief."""
    brief_id = row.get("id")
    count = row.get("submission_count")
    return Brief(
        id=brief_id,
        slug=row.get("slug") or (fallback_slug(brief_id) if brief_id is not None else None),
        title=row.get("title"),
        org_name=row.get("org_name"),
        business_line=row.get("business_line"),
        state=row.get("state"),
        overview=row.get("overview"),
        requirements=list(row.get("requirements") or []),
        deliverable_ratio=row.get("deliverable_ratio"),
        deliverable_length=row.get("deliverable_length"),
        deliverable_format=row.get("deliverable_format"),
        reward=row_to_reward(row),
        deadline=row.get("deadline"),
        status=row.get("status"),
        password=row.get("password"),
        max_winners=row.get("max_winners"),
        max_submissions_per_creator=row.get("max_submissions_per_creator"),
        owner_id=row.get("owner_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        organization=row_to_organization(row),
        submission_count=int(count) if count is not None else None,
    )


def reward_to_json(reward: Reward) -> dict:
    return {
        "type": reward.type,
        "amount": reward.amount,
        "currency": reward.currency,
        "description": reward.description,
    }


def brief_to_json(brief: Brief) -> dict:
    """Brief -> camelCase API representation."""
    data = {
        "id": brief.id,
        "slug": brief.slug,
        "title": brief.title,
        "orgName": brief.org_name,
        "businessLine": brief.business_line,
        "state": brief.state,
        "overview": brief.overview,
        "requirements": brief.requirements,
        "deliverableRatio": brief.deliverable_ratio,
        "deliverableLength": brief.deliverable_length,
        "deliverableFormat": brief.deliverable_format,
        "reward": reward_to_json(brief.reward),
        "deadline": brief.deadline,
        "status": brief.status,
        "password": brief.password,
        "maxWinners": brief.max_winners,
        "maxSubmissionsPerCreator": brief.max_submissions_per_creator,
        "ownerId": brief.owner_id,
        "createdAt": brief.created_at,
        "updatedAt": brief.updated_at,
    }
    if brief.organization is not None:
        org = brief.organization
        data["organization"] = {
            "name": org.name,
            "slug": org.slug,
            "logoUrl": org.logo_url,
            "website": org.website,
            "description": org.description,
        }
    if brief.submission_count is not None:
        data["submissionCount"] = brief.submission_count
    return data


def brief_from_payload(payload: Mapping[str, Any]) -> Brief:
    """
    camelCase JSON -> Brief, with no defaults applied.

    The reward may arrive nested (``{"reward": {...}}``) or flat
    (``rewardType``, ``rewardAmount``, ...); nested wins.
    """
    reward = payload.get("reward") or {}
    return Brief(
        slug=payload.get("slug"),
        title=payload.get("title"),
        org_name=payload.get("orgName"),
        business_line=payload.get("businessLine"),
        state=payload.get("state"),
        overview=payload.get("overview"),
        requirements=list(payload.get("requirements") or []),
        deliverable_ratio=payload.get("deliverableRatio"),
        deliverable_length=payload.get("deliverableLength"),
        deliverable_format=payload.get("deliverableFormat"),
        reward=Reward(
            type=reward.get("type", payload.get("rewardType")),
            amount=reward.get("amount", payload.get("rewardAmount")),
            currency=reward.get("currency", payload.get("rewardCurrency")),
            description=reward.get("description", payload.get("rewardDescription")),
        ),
        deadline=_parse_datetime(payload.get("deadline")),
        status=payload.get("status"),
        password=payload.get("password"),
        max_winners=payload.get("maxWinners"),
        max_submissions_per_creator=payload.get("maxSubmissionsPerCreator"),
        owner_id=payload.get("ownerId"),
    )


def brief_to_row(brief: Brief) -> dict:
    """Brief -> snake_case column values, reward flattened."""
    amount = brief.reward.amount
    return {
        "slug": brief.slug,
        "title": brief.title,
        "org_name": brief.org_name,
        "business_line": brief.business_line,
        "state": brief.state,
        "overview": brief.overview,
        "requirements": list(brief.requirements or []),
        "deliverable_ratio": brief.deliverable_ratio,
        "deliverable_length": brief.deliverable_length,
        "deliverable_format": brief.deliverable_format,
        "reward_type": brief.reward.type,
        "reward_amount": str(amount) if amount is not None else None,
        "reward_currency": brief.reward.currency,
        "reward_description": brief.reward.description,
        "deadline": brief.deadline,
        "status": brief.status,
        "password": brief.password,
        "max_winners": brief.max_winners,
        "max_submissions_per_creator": brief.max_submissions_per_creator,
        "owner_id": brief.owner_id,
    }


def brief_write_params(brief: Brief, columns: Sequence[str]) -> list:
    """Ordered parameter list for a write statement over ``columns``."""
    row = brief_to_row(brief)
    return [row[column] for column in columns]


# ── Submission ────────────────────────────────────────────

def creator_display_name(row: Mapping[str, Any]) -> Optional[str]:
    """
    Linked user's ``first last``, else username, else the user's email.
    Submissions without a linked user fall back to their own creator fields.
    """
    first, last = row.get("creator_first_name"), row.get("creator_last_name")
    if first and last:
        return f"{first} {last}"
    return (
        row.get("creator_username")
        or row.get("user_email")
        or row.get("creator_name")
        or row.get("creator_email")
    )


def row_to_submission(row: Mapping[str, Any]) -> Submission:
    """Convert a submissions row (optionally joined to brief and user)."""
    brief = None
    if "brief_title" in row:
        brief_org = row.get("brief_org_name")
        brief = BriefSummary(
            id=row["brief_id"],
            slug=row.get("brief_slug") or fallback_slug(row["brief_id"]),
            title=row.get("brief_title"),
            org_name=brief_org,
            organization_name=row.get("owner_org_name") or brief_org,
            reward=row_to_reward(row),
        )
    return Submission(
        id=row.get("id"),
        brief_id=row.get("brief_id"),
        creator=Creator(
            id=row.get("creator_id"),
            name=creator_display_name(row),
            email=row.get("user_email") or row.get("creator_email"),
            handle=row.get("creator_handle"),
            username=row.get("creator_username"),
            first_name=row.get("creator_first_name"),
            last_name=row.get("creator_last_name"),
        ),
        creator_phone=row.get("creator_phone"),
        creator_betting_account=row.get("creator_betting_account"),
        message=row.get("message"),
        video=Video(
            url=row.get("video_url"),
            file_name=row.get("video_file_name"),
            mime_type=row.get("video_mime_type"),
            size_bytes=row.get("video_size_bytes"),
        ),
        status=row.get("status"),
        feedback=row.get("feedback"),
        payout_status=row.get("payout_status"),
        payout_amount=coerce_amount(row.get("payout_amount")),
        payout_notes=row.get("payout_notes"),
        reviewed_by=row.get("reviewed_by"),
        review_notes=row.get("review_notes"),
        selected_at=row.get("selected_at"),
        paid_at=row.get("paid_at"),
        submitted_at=row.get("submitted_at"),
        parent_submission_id=row.get("parent_submission_id"),
        submission_version=row.get("submission_version") or 1,
        allows_resubmission=_flag(row.get("allows_resubmission")),
        has_feedback=_flag(row.get("has_feedback")),
        brief=brief,
    )


def submission_to_json(submission: Submission) -> dict:
    creator, video = submission.creator, submission.video
    data = {
        "id": submission.id,
        "briefId": submission.brief_id,
        "status": submission.status,
        "feedback": submission.feedback,
        "message": submission.message,
        "submittedAt": submission.submitted_at,
        "creatorId": creator.id,
        "creatorPhone": submission.creator_phone,
        "creatorBettingAccount": submission.creator_betting_account,
        "videoUrl": video.url,
        "payoutStatus": submission.payout_status,
        "payoutAmount": submission.payout_amount,
        "payoutNotes": submission.payout_notes,
        "reviewedBy": submission.reviewed_by,
        "reviewNotes": submission.review_notes,
        "selectedAt": submission.selected_at,
        "paidAt": submission.paid_at,
        "hasFeedback": submission.has_feedback,
        "parentSubmissionId": submission.parent_submission_id,
        "submissionVersion": submission.submission_version,
        "allowsResubmission": submission.allows_resubmission,
        "creator": {
            "id": creator.id,
            "name": creator.name,
            "email": creator.email,
            "handle": creator.handle,
            "username": creator.username,
            "firstName": creator.first_name,
            "lastName": creator.last_name,
        },
        "video": {
            "url": video.url,
            "fileName": video.file_name,
            "mimeType": video.mime_type,
            "sizeBytes": video.size_bytes,
        },
    }
    if submission.brief is not None:
        brief = submission.brief
        data["brief"] = {
            "id": brief.id,
            "slug": brief.slug,
            "title": brief.title,
            "orgName": brief.org_name,
            "organizationName": brief.organization_name,
            "reward": reward_to_json(brief.reward),
        }
    return data


# ── Feedback ──────────────────────────────────────────────

def row_to_feedback(row: Mapping[str, Any]) -> Feedback:
    return Feedback(
        id=row.get("id"),
        submission_id=row.get("submission_id"),
        author_id=row.get("author_id"),
        author_name=row.get("author_name"),
        comment=row.get("comment"),
        requires_action=_flag(row.get("requires_action")),
        is_read=_flag(row.get("is_read")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def feedback_to_json(feedback: Feedback) -> dict:
    return {
        "id": feedback.id,
        "submissionId": feedback.submission_id,
        "authorId": feedback.author_id,
        "authorName": feedback.author_name,
        "comment": feedback.comment,
        "requiresAction": feedback.requires_action,
        "isRead": feedback.is_read,
        "createdAt": feedback.created_at,
        "updatedAt": feedback.updated_at,
    }


# ── Influencer application ────────────────────────────────

def row_to_influencer(row: Mapping[str, Any]) -> InfluencerApplication:
    return InfluencerApplication(
        id=row.get("id"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        email=row.get("email"),
        phone=row.get("phone"),
        instagram_handle=row.get("instagram_handle"),
        instagram_followers=row.get("instagram_followers"),
        instagram_verified=_flag(row.get("instagram_verified")),
        tiktok_handle=row.get("tiktok_handle"),
        youtube_channel=row.get("youtube_channel"),
        status=row.get("status"),
        id_verified=_flag(row.get("id_verified")),
        bank_verified=_flag(row.get("bank_verified")),
        admin_notes=row.get("admin_notes"),
        rejection_reason=row.get("rejection_reason"),
        applied_at=row.get("applied_at"),
        approved_at=row.get("approved_at"),
        rejected_at=row.get("rejected_at"),
    )


def influencer_to_json(app: InfluencerApplication) -> dict:
    return {
        "id": app.id,
        "firstName": app.first_name,
        "lastName": app.last_name,
        "email": app.email,
        "phone": app.phone,
        "instagramHandle": app.instagram_handle,
        "instagramFollowers": app.instagram_followers,
        "instagramVerified": app.instagram_verified,
        "tiktokHandle": app.tiktok_handle,
        "youtubeChannel": app.youtube_channel,
        "status": app.status,
        "idVerified": app.id_verified,
        "bankVerified": app.bank_verified,
        "adminNotes": app.admin_notes,
        "rejectionReason": app.rejection_reason,
        "appliedAt": app.applied_at,
        "approvedAt": app.approved_at,
        "rejectedAt": app.rejected_at,
    }


def influencer_write_params(app: InfluencerApplication) -> list:
    values = {
        "first_name": app.first_name,
        "last_name": app.last_name,
        "email": app.email,
        "phone": app.phone,
        "instagram_handle": app.instagram_handle,
        "instagram_followers": app.instagram_followers,
        "tiktok_handle": app.tiktok_handle,
        "youtube_channel": app.youtube_channel,
        "status": app.status,
    }
    return [values[column] for column in INFLUENCER_INSERT_COLUMNS]


# ── Prompt template ───────────────────────────────────────

# Writable template column -> camelCase key.
TEMPLATE_FIELDS = {
    "name": "name",
    "overview": "overview",
    "requirements": "requirements",
    "deliverable_ratio": "deliverableRatio",
    "deliverable_length": "deliverableLength",
    "deliverable_format": "deliverableFormat",
    "reward_type": "rewardType",
    "reward_amount": "rewardAmount",
    "reward_currency": "rewardCurrency",
    "reward_description": "rewardDescription",
}


def row_to_template(row: Mapping[str, Any]) -> PromptTemplate:
    return PromptTemplate(
        id=row.get("id"),
        owner_id=row.get("owner_id"),
        name=row.get("name"),
        overview=row.get("overview"),
        requirements=list(row.get("requirements") or []),
        deliverable_ratio=row.get("deliverable_ratio"),
        deliverable_length=row.get("deliverable_length"),
        deliverable_format=row.get("deliverable_format"),
        reward_type=row.get("reward_type"),
        reward_amount=row.get("reward_amount"),
        reward_currency=row.get("reward_currency"),
        reward_description=row.get("reward_description"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def template_to_json(template: PromptTemplate) -> dict:
    """Flat camelCase shape; reward fields are returned as stored."""
    data = {"id": template.id, "ownerId": template.owner_id}
    for column, key in TEMPLATE_FIELDS.items():
        data[key] = getattr(template, column)
    data["createdAt"] = template.created_at
    data["updatedAt"] = template.updated_at
    return data


def template_changes(payload: Mapping[str, Any]) -> dict:
    """
    camelCase payload -> ``{column: value}`` for the keys it carries.

    Unknown keys are ignored. Amounts are stored as text.
    """
    changes = {}
    for column, key in TEMPLATE_FIELDS.items():
        if key not in payload:
            continue
        value = payload[key]
        if column == "reward_amount" and value is not None:
            value = str(value)
        elif column == "requirements":
            value = list(value or [])
        changes[column] = value
    return changes


# ── User ──────────────────────────────────────────────────

def row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=row.get("id"),
        email=row.get("email"),
        username=row.get("username"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        org_name=row.get("org_name"),
        org_slug=row.get("org_slug"),
        org_logo_url=row.get("org_logo_url"),
        org_website=row.get("org_website"),
        org_description=row.get("org_description"),
        is_onboarded=_flag(row.get("is_onboarded")),
        role=row.get("role") or "admin",
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )
