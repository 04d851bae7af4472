import json
import logging
from pathlib import Path

from .errors import TemplateFormatError, TemplateNotFoundError
from .models import CardTemplate

logger = logging.getLogger(__name__)


def load_template(path):
    """Load a single CardTemplate from a JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TemplateFormatError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise TemplateFormatError(f"{path}: expected a JSON object")
    return CardTemplate.from_dict(data)


def load_templates(directory):
    """Load every ``*.json`` template in a directory, sorted by filename.

    Files that fail to parse are logged and skipped so one broken template
    does not hide the rest of the catalog.
    """
    directory = Path(directory)
    templates = []
    for path in sorted(directory.glob("*.json")):
        try:
            templates.append(load_template(path))
        except TemplateFormatError as e:
            logger.warning("Skipping template %s: %s", path.name, e)
    return templates


def load_template_by_id(directory, template_id):
    for template in load_templates(directory):
        if template.id == template_id:
            return template
    raise TemplateNotFoundError(template_id)
