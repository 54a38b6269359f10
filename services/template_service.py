"""
services/template_service.py
----------------------------
Business logic for prompt templates. Templates are private: a caller only
ever sees, edits or deletes their own.
"""

from typing import Any, Mapping

from models.brief import REWARD_TYPES
from models.template import PromptTemplate
from repositories.row_mapper import template_changes
from repositories.template_repo import TemplateRepository
from security.auth import CallerIdentity
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def _check_changes(changes: dict) -> None:
    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValidationError("Template name is required")
        changes["name"] = name
    reward_type = changes.get("reward_type")
    if reward_type is not None and reward_type not in REWARD_TYPES:
        raise ValidationError(f"Invalid reward type. Must be one of: {', '.join(REWARD_TYPES)}")


class TemplateService:
    """Handles all business logic related to prompt templates."""

    def __init__(self, repo: TemplateRepository):
        self.repo = repo

    def list_templates(self, identity: CallerIdentity) -> list[PromptTemplate]:
        return self.repo.list_by_owner(identity.id)

    def get(self, template_id: int, identity: CallerIdentity) -> PromptTemplate:
        """
        Raises:
            NotFoundError: If the template does not exist or belongs to
                someone else.
        """
        template = self.repo.get_by_id(template_id)
        if template is None or template.owner_id != identity.id:
            raise NotFoundError("Template not found")
        return template

    def create(self, payload: Mapping[str, Any], identity: CallerIdentity) -> PromptTemplate:
        """
        Save a new template owned by the caller.

        Raises:
            ValidationError: If the name is missing or the reward type unknown.
        """
        changes = template_changes(payload)
        changes.setdefault("name", None)
        _check_changes(changes)
        template = PromptTemplate(owner_id=identity.id, **changes)
        logger.info(f"Creating template '{template.name}' for {identity.id}")
        return self.repo.create(template)

    def update(self, template_id: int, payload: Mapping[str, Any],
               identity: CallerIdentity) -> PromptTemplate:
        """Overwrite only the fields present in ``payload``."""
        self.get(template_id, identity)
        changes = template_changes(payload)
        _check_changes(changes)
        return self.repo.update(template_id, changes)

    def delete(self, template_id: int, identity: CallerIdentity) -> None:
        self.get(template_id, identity)
        self.repo.delete(template_id)
