"""Service layer."""

from .request_service import create_certificate_request
from .template_service import TemplateService
from .yaml_service import YAMLService

__all__ = ["YAMLService", "TemplateService", "create_certificate_request"]
