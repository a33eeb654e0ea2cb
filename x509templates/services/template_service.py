"""Template file loading and saving."""

import json
import logging
from pathlib import Path
from typing import Type, TypeVar

from pydantic import BaseModel

from x509templates.exceptions import TemplateFormatError
from x509templates.models.certificate import Certificate
from x509templates.models.request import CertificateRequest
from x509templates.services.yaml_service import YAMLService

logger = logging.getLogger("x509templates")

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON = "json"
YAML = "yaml"

_FORMATS_BY_SUFFIX = {".json": JSON, ".yaml": YAML, ".yml": YAML}


def _normalize_format(fmt: str) -> str:
    fmt = fmt.lower().lstrip(".")
    if fmt == "yml":
        return YAML
    if fmt not in (JSON, YAML):
        raise TemplateFormatError(f"Unsupported template format: {fmt}")
    return fmt


def format_for_path(path: Path) -> str:
    """
    Guess the template format from a file suffix.

    Raises:
        TemplateFormatError: If the suffix is not .json, .yaml or .yml
    """
    try:
        return _FORMATS_BY_SUFFIX[path.suffix.lower()]
    except KeyError:
        raise TemplateFormatError(f"Unsupported template file: {path}")


class TemplateService:
    """Service for reading and writing JSON/YAML templates."""

    @staticmethod
    def parse(text: str, fmt: str, model: Type[ModelT]) -> ModelT:
        """
        Validate template text into a model.

        Args:
            text: Template content
            fmt: "json" or "yaml"
            model: Model class to validate into

        Returns:
            Validated model instance

        Raises:
            TemplateFormatError: If the format is unsupported
            pydantic.ValidationError: If the content does not match the model
        """
        if _normalize_format(fmt) == JSON:
            return model.model_validate_json(text)
        return model.model_validate(YAMLService.loads(text))

    @staticmethod
    def dump(template: BaseModel, fmt: str) -> str:
        """Serialize a model using its template keys."""
        data = template.model_dump(mode="json", by_alias=True)
        if _normalize_format(fmt) == JSON:
            return json.dumps(data, indent=2)
        return YAMLService.dumps(data)

    @staticmethod
    def load(path: Path, model: Type[ModelT]) -> ModelT:
        """
        Load a template file, picking the format from its suffix.

        Raises:
            FileNotFoundError: If file doesn't exist
            TemplateFormatError: If the suffix is unsupported
            pydantic.ValidationError: If the content does not match the model
        """
        fmt = format_for_path(path)
        if not path.exists():
            raise FileNotFoundError(f"Template not found: {path}")

        try:
            template = TemplateService.parse(path.read_text(encoding="utf-8"), fmt, model)
        except Exception as e:
            logger.error(f"Error loading template {path}: {e}")
            raise

        logger.debug(f"Loaded {model.__name__} template from: {path}")
        return template

    @staticmethod
    def save(path: Path, template: BaseModel) -> None:
        """Write a template file in the format matching its suffix."""
        fmt = format_for_path(path)
        if fmt == YAML:
            YAMLService.save_yaml(path, template.model_dump(mode="json", by_alias=True))
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(TemplateService.dump(template, fmt), encoding="utf-8")
        logger.debug(f"Saved {type(template).__name__} template to: {path}")

    @staticmethod
    def load_request_template(path: Path) -> CertificateRequest:
        """Load a certificate request template file."""
        return TemplateService.load(path, CertificateRequest)

    @staticmethod
    def load_certificate_template(path: Path) -> Certificate:
        """Load a certificate template file."""
        return TemplateService.load(path, Certificate)

    @staticmethod
    def parse_request_template(text: str, fmt: str) -> CertificateRequest:
        """Validate certificate request template text."""
        return TemplateService.parse(text, fmt, CertificateRequest)

    @staticmethod
    def dump_request_template(request: CertificateRequest, fmt: str) -> str:
        """Serialize a certificate request template."""
        return TemplateService.dump(request, fmt)
