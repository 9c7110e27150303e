"""Configuration loading for mdcatalog (.mdcatalog.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .logging import get_logger

CONFIG_FILENAME = ".mdcatalog.yml"

DEFAULT_PATTERNS: Tuple[str, ...] = ("**/*.md",)

DEFAULT_IGNORE: Tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".git",
    ".specify",
    "venv",
    ".venv",
    "specs",
    ".claude",
    "coverage",
    ".vscode",
)

DEFAULT_IGNORE_FILES: Tuple[str, ...] = (
    "CLAUDE.md",
    "LICENSE",
    "*.spec.md",
    "*.test.md",
)

DEFAULT_OUTPUT = "catalog.json"
DEFAULT_MAX_TAGS = 3

_logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is invalid."""


@dataclass(frozen=True)
class TagRule:
    """Maps a set of keywords to the tag they trigger."""

    tag: str
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class TagStyle:
    """Display settings for a tag."""

    name: str
    bg: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "bg": self.bg, "text": self.text}


@dataclass(frozen=True)
class CategoryDisplay:
    """Display overrides for a category id."""

    label: Optional[str] = None
    emoji: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class TaggingConfig:
    """Call-site settings for tag detection during catalog builds."""

    include_content: bool = True
    max_tags: Optional[int] = DEFAULT_MAX_TAGS


@dataclass(frozen=True)
class CatalogConfig:
    """Read-only settings snapshot for a generation run."""

    root: Path
    content_dir: Path
    patterns: Tuple[str, ...] = DEFAULT_PATTERNS
    ignore: Tuple[str, ...] = DEFAULT_IGNORE
    ignore_files: Tuple[str, ...] = DEFAULT_IGNORE_FILES
    tag_rules: Tuple[TagRule, ...] = ()
    tags: Mapping[str, TagStyle] = field(default_factory=dict)
    categories: Mapping[str, CategoryDisplay] = field(default_factory=dict)
    tagging: TaggingConfig = field(default_factory=TaggingConfig)
    output: Path = Path(DEFAULT_OUTPUT)

    @classmethod
    def default(cls, root: Path | str | None = None) -> "CatalogConfig":
        """Return the fallback configuration: scan ``root`` with default patterns."""
        base = Path(root if root is not None else Path.cwd()).expanduser().resolve()
        return cls(root=base, content_dir=base, output=base / DEFAULT_OUTPUT)

    def with_overrides(self, **changes: Any) -> "CatalogConfig":
        return replace(self, **changes)


@dataclass
class ValidationResult:
    """Outcome of validating a raw configuration mapping."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def load_config(config_path: Path | str) -> CatalogConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = resolve_config_path(Path(config_path))
    root = config_file.parent

    if not config_file.exists():
        _logger.warning("Configuration file not found: %s", config_file)
        _logger.warning("Using default configuration - scanning %s for *.md files", root)
        return CatalogConfig.default(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    result = validate_config(data, config_file)
    for warning in result.warnings:
        _logger.warning("%s: %s", config_file.name, warning)
    if not result.valid:
        raise ConfigError(
            f"Configuration errors in {config_file}:\n"
            + "\n".join(f"  - {error}" for error in result.errors)
        )

    content_dir = (root / str(data.get("content_dir", "."))).resolve()

    patterns = _as_str_tuple(data.get("patterns"), DEFAULT_PATTERNS)
    ignore = _as_str_tuple(data.get("ignore"), DEFAULT_IGNORE)
    ignore_files = _as_str_tuple(data.get("ignore_files"), DEFAULT_IGNORE_FILES)

    tag_rules = tuple(
        TagRule(tag=str(entry["tag"]), keywords=tuple(str(kw) for kw in entry["keywords"]))
        for entry in _as_list(data.get("tag_rules"))
    )

    tags: Dict[str, TagStyle] = {}
    for tag_id, raw in _as_dict(data.get("tags")).items():
        style = _as_dict(raw)
        tags[str(tag_id)] = TagStyle(
            name=_as_str(style.get("name")) or str(tag_id),
            bg=_as_str(style.get("bg")) or "",
            text=_as_str(style.get("text")) or "",
        )

    categories: Dict[str, CategoryDisplay] = {}
    for category_id, raw in _as_dict(data.get("categories")).items():
        display = _as_dict(raw)
        categories[str(category_id)] = CategoryDisplay(
            label=_as_str(display.get("label")),
            emoji=_as_str(display.get("emoji")),
            color=_as_str(display.get("color")),
            description=_as_str(display.get("description")),
        )

    tagging_data = _as_dict(data.get("tagging"))
    tagging = TaggingConfig()
    if tagging_data:
        include_content = _as_bool(tagging_data.get("include_content"))
        tagging = TaggingConfig(
            include_content=True if include_content is None else include_content,
            max_tags=(
                tagging_data["max_tags"]
                if "max_tags" in tagging_data
                else DEFAULT_MAX_TAGS
            ),
        )

    output = root / (_as_str(data.get("output")) or DEFAULT_OUTPUT)

    return CatalogConfig(
        root=root,
        content_dir=content_dir,
        patterns=patterns,
        ignore=ignore,
        ignore_files=ignore_files,
        tag_rules=tag_rules,
        tags=tags,
        categories=categories,
        tagging=tagging,
        output=output,
    )


def validate_config(data: Mapping[str, Any], config_path: Path) -> ValidationResult:
    """Check a raw configuration mapping and collect every problem found."""
    result = ValidationResult()
    errors = result.errors
    warnings = result.warnings

    content_dir = data.get("content_dir", ".")
    if not isinstance(content_dir, str) or not content_dir:
        errors.append("content_dir is required and must be a string")
    else:
        resolved = (config_path.parent / content_dir).resolve()
        if not resolved.exists():
            errors.append(f"content_dir does not exist: {resolved}")
            warnings.append("Create the directory or update the content_dir path")
        elif not resolved.is_dir():
            errors.append(f"content_dir is not a directory: {resolved}")

    patterns = data.get("patterns")
    if patterns is not None:
        if not isinstance(patterns, list):
            errors.append("patterns must be a list of glob patterns")
        else:
            for index, pattern in enumerate(patterns):
                if not isinstance(pattern, str):
                    errors.append(
                        f"patterns[{index}] must be a string (got {type(pattern).__name__})"
                    )
            if not patterns:
                warnings.append("patterns list is empty - no files will be discovered")

    for key in ("ignore", "ignore_files"):
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, list):
            errors.append(f"{key} must be a list of directory/file patterns")
            continue
        for index, item in enumerate(value):
            if not isinstance(item, str):
                errors.append(f"{key}[{index}] must be a string")

    tag_rules = data.get("tag_rules")
    if tag_rules is not None:
        if not isinstance(tag_rules, list):
            errors.append("tag_rules must be a list of {tag, keywords} entries")
        else:
            for index, rule in enumerate(tag_rules):
                if not isinstance(rule, dict):
                    errors.append(f"tag_rules[{index}] must be a mapping")
                    continue
                if not isinstance(rule.get("tag"), str) or not rule.get("tag"):
                    errors.append(f"tag_rules[{index}].tag must be a non-empty string")
                keywords = rule.get("keywords")
                if not isinstance(keywords, list) or not all(
                    isinstance(keyword, str) for keyword in keywords
                ):
                    errors.append(f"tag_rules[{index}].keywords must be a list of strings")

    tags = data.get("tags")
    if tags is not None:
        if not isinstance(tags, dict):
            errors.append("tags must be a mapping of tag ids to display settings")
        else:
            for tag_id, style in tags.items():
                if not isinstance(style, dict):
                    errors.append(f"tags.{tag_id} must be a mapping")
                    continue
                for attr in ("name", "bg", "text"):
                    if attr in style and not isinstance(style[attr], str):
                        errors.append(f"tags.{tag_id}.{attr} must be a string")

    categories = data.get("categories")
    if categories is not None:
        if not isinstance(categories, dict):
            errors.append("categories must be a mapping of category ids to display settings")
        else:
            for category_id, display in categories.items():
                if not isinstance(display, dict):
                    errors.append(f"categories.{category_id} must be a mapping")
                    continue
                for attr in ("label", "emoji", "color", "description"):
                    if display.get(attr) is not None and not isinstance(display[attr], str):
                        errors.append(f"categories.{category_id}.{attr} must be a string")

    tagging = data.get("tagging")
    if tagging is not None:
        if not isinstance(tagging, dict):
            errors.append("tagging must be a mapping")
        else:
            max_tags = tagging.get("max_tags")
            if max_tags is not None and (
                isinstance(max_tags, bool) or not isinstance(max_tags, int) or max_tags < 0
            ):
                errors.append("tagging.max_tags must be a non-negative integer or null")
            include_content = tagging.get("include_content")
            if include_content is not None and _as_bool(include_content) is None:
                errors.append("tagging.include_content must be a boolean")

    output = data.get("output")
    if output is not None and not isinstance(output, str):
        errors.append("output must be a string path")

    return result


def format_validation_errors(result: ValidationResult) -> str:
    """Render a validation result as a human-readable report."""
    lines: List[str] = []
    if result.valid:
        lines.append("Configuration is valid")
    if result.errors:
        lines.append("Configuration errors:")
        lines.extend(f"   {error}" for error in result.errors)
    if result.warnings:
        if lines:
            lines.append("")
        lines.append("Configuration warnings:")
        lines.extend(f"   {warning}" for warning in result.warnings)
    return "\n".join(lines)


def resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def read_raw_config(config_path: Path | str) -> Dict[str, Any]:
    """Return the parsed YAML mapping without validation (empty when absent)."""
    config_file = resolve_config_path(Path(config_path))
    if not config_file.exists():
        return {}
    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return data


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_tuple(value: Any, default: Sequence[str]) -> Tuple[str, ...]:
    if value is None:
        return tuple(default)
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value if isinstance(item, str))


__all__ = [
    "CONFIG_FILENAME",
    "CatalogConfig",
    "CategoryDisplay",
    "ConfigError",
    "TagRule",
    "TagStyle",
    "TaggingConfig",
    "ValidationResult",
    "format_validation_errors",
    "load_config",
    "read_raw_config",
    "resolve_config_path",
    "validate_config",
]
