"""
handlers/templates.py
---------------------
Prompt template endpoints, scoped to the calling user. Delegates all logic
to TemplateService.
"""

from fastapi import APIRouter, Depends, status

from handlers.deps import get_template_service, parse_id
from repositories.row_mapper import template_to_json
from schemas.template import TemplateIn
from security.auth import CallerIdentity, get_current_identity
from services.template_service import TemplateService

router = APIRouter(prefix="/api/templates", tags=["Templates"])


@router.get("")
def list_templates(identity: CallerIdentity = Depends(get_current_identity),
                   service: TemplateService = Depends(get_template_service)):
    return [template_to_json(t) for t in service.list_templates(identity)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_template(
    body: TemplateIn,
    identity: CallerIdentity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
):
    return template_to_json(service.create(body.to_payload(), identity))


@router.get("/{template_id}")
def get_template(
    template_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
):
    return template_to_json(service.get(parse_id(template_id, "template"), identity))


@router.patch("/{template_id}")
def update_template(
    template_id: str,
    body: TemplateIn,
    identity: CallerIdentity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
):
    template = service.update(parse_id(template_id, "template"), body.to_payload(), identity)
    return template_to_json(template)


@router.delete("/{template_id}")
def delete_template(
    template_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
):
    service.delete(parse_id(template_id, "template"), identity)
    return {"message": "Template deleted successfully"}
