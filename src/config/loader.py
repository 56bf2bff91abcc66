from pathlib import Path

import yaml
from pydantic import ValidationError

from src.config.models import SiteConfig


def _strip_yaml_fence(content: str) -> str:
    """Return the body of the first ```yaml block, or the content unchanged."""
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

    return "\n".join(yaml_lines) if found_block else content


def load_site_config(path: Path) -> SiteConfig:
    """
    Load and validate the site configuration file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Site config not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_strip_yaml_fence(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in site config: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Site config validation failed:\n{e}") from e
