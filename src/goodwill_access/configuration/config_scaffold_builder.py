"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "goodwill.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Registry configuration template for goodwill-access.
# Replace every <REQUIRED> placeholder before running fetch, list or publish.
# Remove <OPTIONAL> entries you do not need; their defaults apply.

registry:
  # Base URL of the schema registry; the /registrar endpoints are appended.
  base_url: "<REQUIRED>"
  # timeout_seconds: 10
  # headers:
  #   X-Team: "<OPTIONAL>"

logging:
  # One of DEBUG, INFO, WARNING, ERROR, CRITICAL. --log-level overrides it.
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML registry configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder registry configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
