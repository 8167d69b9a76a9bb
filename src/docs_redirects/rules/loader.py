import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from docs_redirects.rules.models import RedirectRules

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = "redirects.yaml"
RULES_PATH_ENV = "REDIRECTS_RULES_PATH"


class RulesLoadError(ValueError):
    """Raised when the redirect rules file cannot be parsed or validated."""


def default_rules_path() -> Path:
    """Rules path from the environment, falling back to ./redirects.yaml."""
    return Path(os.environ.get(RULES_PATH_ENV, DEFAULT_RULES_PATH))


def _strip_code_fence(content: str) -> str:
    # Accept YAML wrapped in a ```yaml block inside a Markdown file
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def parse_rules(content: str) -> RedirectRules:
    """
    Parse and validate rules text.
    Raises RulesLoadError on bad YAML or schema errors.
    """
    try:
        data = yaml.safe_load(_strip_code_fence(content))
    except yaml.YAMLError as e:
        raise RulesLoadError(f"Invalid YAML syntax in rules file: {e}") from e

    if data is None:
        data = {}

    try:
        return RedirectRules.model_validate(data)
    except ValidationError as e:
        raise RulesLoadError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path | None = None) -> RedirectRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises RulesLoadError if schema invalid.
    """
    path = path or default_rules_path()
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    rules = parse_rules(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d redirect declarations from %s", len(rules.redirects), path)
    return rules
